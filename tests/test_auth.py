import pytest

from millipede.auth import AuthEntry, auth_parse


def test_auth_parse_entries(tmp_path):
    path = tmp_path / "source.auth"
    path.write_text("MOUNT1:user:password\n# comment\n\nhost.example.com:user:secret\n")
    entries = auth_parse(path)
    assert entries == [
        AuthEntry("MOUNT1", "user", "password"),
        AuthEntry("host.example.com", "user", "secret"),
    ]


def test_auth_parse_empty_file(tmp_path):
    path = tmp_path / "host.auth"
    path.write_text("")
    assert auth_parse(path) == []


def test_auth_parse_empty_fields_kept(tmp_path):
    path = tmp_path / "source.auth"
    path.write_text("MOUNT1::password\r\n")
    entries = auth_parse(path)
    assert entries[0].user == ""
    assert entries[0].password == "password"


def test_auth_parse_too_few_fields(tmp_path):
    path = tmp_path / "source.auth"
    path.write_text("MOUNT1:user\n")
    with pytest.raises(ValueError):
        auth_parse(path)


def test_auth_parse_missing_file(tmp_path):
    with pytest.raises(OSError):
        auth_parse(tmp_path / "missing.auth")