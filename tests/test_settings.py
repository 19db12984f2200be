import json

from millipede.settings import (
    BindConfig,
    Config,
    EndpointConfig,
    GraylogConfig,
    LogLevel,
    NodeConfig,
    ProxyConfig,
    RtcmConversion,
    RtcmConvertConfig,
    RtcmFilterConfig,
    ThreadsConfig,
    WebrootConfig,
)


def test_config_defaults_from_source():
    c = Config()
    assert c.backlog_socket == 112 * 1024
    assert c.backlog_evbuffer == 16 * 1024
    assert c.http_content_length_max == 4000000
    assert c.http_header_max_size == 8192
    assert c.max_raw_packet == 1450
    assert c.sourcetable_priority == 90
    assert c.sourcetable_filename == "sourcetable.dat"
    assert c.host_auth_filename == "host.auth"
    assert c.source_auth_filename == "source.auth"
    assert c.blocklist_filename is None
    assert c.admin_user == "admin"
    assert c.access_log == "/var/log/millipede/access.log"
    assert c.log == "/var/log/millipede/caster.log"
    assert c.log_level is LogLevel.INFO
    assert c.zero_copy is True


def test_default_threads_entry():
    c = Config()
    assert c.threads == [ThreadsConfig(stacksize=500 * 1024)]


def test_default_lists_not_shared():
    a = Config()
    b = Config()
    a.bind.append(BindConfig(ip="127.0.0.1"))
    a.threads.append(ThreadsConfig())
    assert b.bind == []
    assert len(b.threads) == 1


def test_sub_config_defaults():
    assert BindConfig(ip="::").port == 2101
    assert BindConfig(ip="::").queue_size == 2000
    proxy = ProxyConfig(host="caster.example.com", port=2101)
    assert proxy.table_refresh_delay == 600
    assert proxy.priority == 20
    node = NodeConfig(host="node.example.com")
    assert node.port == 2443
    assert node.queue_max_size == 4000000
    assert node.retry_delay == 30
    gl = GraylogConfig(host="log.example.com", uri="/gelf")
    assert gl.port == 7777
    assert gl.bulk_max_size == 62000
    assert gl.queue_max_size == 4000000
    assert EndpointConfig().port == 2443


def test_log_level_ordering():
    default_level = Config().log_level
    assert LogLevel.ERR < default_level < LogLevel.DEBUG
    debug_config = Config(log_level=LogLevel["EDEBUG"])
    assert debug_config.log_level > default_level
    assert GraylogConfig(host="log.example.com", uri="/gelf", log_level=LogLevel.WARNING).log_level < default_level


def test_rtcm_conversion_names():
    assert RtcmConversion("msm7_3") is RtcmConversion.MSM7_3
    assert RtcmConversion("msm7_4") is RtcmConversion.MSM7_4


def test_rtcm_filter_holds_conversions():
    conv = RtcmConvertConfig(types="1077,1087", conversion=RtcmConversion.MSM7_4)
    f = RtcmFilterConfig(apply="MP1,MP2", pass_types="1005,1077", convert=[conv])
    assert f.convert[0].conversion is RtcmConversion.MSM7_4
    assert f.apply.split(",") == ["MP1", "MP2"]


def test_endpoints_json_empty():
    assert Config().endpoints_json() == []


def test_endpoints_json_with_and_without_host():
    c = Config(endpoint=[
        EndpointConfig(host="caster.example.com", port=443, tls=True),
        EndpointConfig(port=2101),
    ])
    assert c.endpoints_json() == [
        {"host": "caster.example.com", "port": 443, "tls": True},
        {"port": 2101, "tls": False},
    ]


def test_endpoints_json_is_serializable():
    c = Config(endpoint=[EndpointConfig(host="a.example.com", port=2101, tls=False)])
    text = json.dumps(c.endpoints_json())
    assert json.loads(text) == c.endpoints_json()


def test_webroot_defaults():
    w = WebrootConfig()
    assert w.path is None and w.uri is None
    w2 = WebrootConfig(path="www", uri="/")
    assert (w2.path, w2.uri) == ("www", "/")