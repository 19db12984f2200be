import base64

import pytest

from millipede.http import AuthError, Authorization, basic_auth_header, decode_auth


def test_basic_round_trip():
    password = "password"
    header = basic_auth_header("user", password)
    assert header.startswith("Basic ")
    assert decode_auth(header) == Authorization(True, "user", password)


def test_basic_scheme_case_insensitive_and_extra_spaces():
    password = "secret"
    header = basic_auth_header("user", password)
    encoded = header.split(" ", 1)[1]
    auth = decode_auth("BASIC   " + encoded)
    assert auth.scheme_basic is True
    assert auth.user == "user"
    assert auth.password == password


def test_basic_empty_password():
    auth = decode_auth(basic_auth_header("user", ""))
    assert auth.user == "user"
    assert auth.password == ""


def test_internal_token():
    auth = decode_auth("internal token")
    assert auth == Authorization(False, "token", "token")


def test_internal_token_stops_at_whitespace():
    auth = decode_auth("Internal token extra")
    assert auth.user == "token"
    assert auth.password == "token"


def test_no_space_raises():
    with pytest.raises(AuthError):
        decode_auth("Basic")


def test_unknown_scheme_raises():
    with pytest.raises(AuthError):
        decode_auth("Bearer token")


def test_empty_credentials_raise():
    with pytest.raises(AuthError):
        decode_auth("Basic    ")


def test_invalid_base64_raises():
    with pytest.raises(AuthError):
        decode_auth("Basic !!!")


def test_missing_colon_raises():
    encoded = base64.b64encode(b"nocolon").decode()
    with pytest.raises(AuthError):
        decode_auth("Basic " + encoded)


def test_auth_error_is_value_error():
    with pytest.raises(ValueError):
        decode_auth("")