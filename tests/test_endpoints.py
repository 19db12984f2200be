import pytest

from millipede.endpoints import Endpoint, endpoints_from_json, endpoints_to_json


def test_to_json_order_and_values():
    out = endpoints_to_json([Endpoint("caster.example.com", 2101, True)])
    assert out == [{"host": "caster.example.com", "tls": True, "port": 2101}]
    assert list(out[0]) == ["host", "tls", "port"]


def test_round_trip():
    eps = [Endpoint("a.example.com", 2101, False), Endpoint("b.example.com", 443, True)]
    assert endpoints_from_json(endpoints_to_json(eps)) == eps


def test_empty():
    assert endpoints_from_json([]) == []
    assert endpoints_to_json([]) == []


@pytest.mark.parametrize("missing", ["host", "port", "tls"])
def test_missing_key_raises(missing):
    entry = {"host": "h.example.com", "port": 2101, "tls": False}
    del entry[missing]
    with pytest.raises(ValueError):
        endpoints_from_json([entry])


def test_null_host_raises():
    with pytest.raises(ValueError):
        endpoints_from_json([{"host": None, "port": 1, "tls": False}])


def test_tls_coerced_to_bool():
    eps = endpoints_from_json([{"host": "h.example.com", "port": 2443, "tls": 1}])
    assert eps == [Endpoint("h.example.com", 2443, True)]


def test_endpoint_is_immutable():
    e = Endpoint("h.example.com", 1, False)
    with pytest.raises(AttributeError):
        e.port = 2
    assert e.port == 1
    assert endpoints_to_json([e]) == [{"host": "h.example.com", "tls": False, "port": 1}]