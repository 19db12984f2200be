"""Loading the caster configuration from YAML."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Optional, Sequence

import yaml

from millipede.ip import ip_prefix_parse
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

_TRUE_WORDS = {"true", "yes", "on", "y", "1"}
_FALSE_WORDS = {"false", "no", "off", "n", "0"}


class ConfigError(ValueError):
    """Raised when a configuration cannot be read or is invalid."""


Converter = Callable[[Any, str], Any]


@dataclass(frozen=True)
class _Field:
    key: str
    attr: str
    convert: Converter
    required: bool = False
    zero_default: bool = False


def _field(key: str, convert: Converter, attr: Optional[str] = None,
           required: bool = False, zero_default: bool = False) -> _Field:
    return _Field(key, attr or key, convert, required, zero_default)


def _string(value: Any, where: str) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (str, int, float)):
        return str(value)
    raise ConfigError(f"{where}: expected a string")


def _int(value: Any, where: str) -> int:
    if isinstance(value, bool):
        raise ConfigError(f"{where}: expected an integer")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            pass
    raise ConfigError(f"{where}: expected an integer")


def _port(value: Any, where: str) -> int:
    port = _int(value, where)
    if not 0 <= port <= 0xFFFF:
        raise ConfigError(f"{where}: port out of range")
    return port


def _float(value: Any, where: str) -> float:
    if isinstance(value, bool):
        raise ConfigError(f"{where}: expected a number")
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            pass
    raise ConfigError(f"{where}: expected a number")


def _bool(value: Any, where: str) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    if isinstance(value, str):
        word = value.strip().lower()
        if word in _TRUE_WORDS:
            return True
        if word in _FALSE_WORDS:
            return False
    raise ConfigError(f"{where}: expected a boolean")


def _log_level(value: Any, where: str) -> LogLevel:
    if isinstance(value, str) and value in LogLevel.__members__:
        return LogLevel[value]
    if isinstance(value, int) and not isinstance(value, bool):
        try:
            return LogLevel(value)
        except ValueError:
            pass
    raise ConfigError(f"{where}: invalid log level {value!r}")


def _conversion(value: Any, where: str) -> RtcmConversion:
    try:
        return RtcmConversion(value)
    except ValueError:
        raise ConfigError(f"{where}: invalid RTCM conversion {value!r}") from None


def _build(cls: type, fields: Sequence[_Field], data: Any, where: str) -> Any:
    if not isinstance(data, dict):
        raise ConfigError(f"{where}: expected a mapping")
    known = {f.key: f for f in fields}
    for key in data:
        if key not in known:
            raise ConfigError(f"{where}: unknown key {key!r}")
    kwargs = {}
    for f in fields:
        value = data.get(f.key)
        if value is None:
            if f.required:
                raise ConfigError(f"{where}: missing required key {f.key!r}")
            continue
        value = f.convert(value, f"{where}.{f.key}")
        if f.zero_default and not value:
            continue
        kwargs[f.attr] = value
    return cls(**kwargs)


def _mapping(cls: type, fields: Sequence[_Field]) -> Converter:
    def convert(value: Any, where: str) -> Any:
        return _build(cls, fields, value, where)
    return convert


def _sequence(item: Converter, maximum: Optional[int] = None) -> Converter:
    def convert(value: Any, where: str) -> list:
        if not isinstance(value, list):
            raise ConfigError(f"{where}: expected a sequence")
        if maximum is not None and len(value) > maximum:
            raise ConfigError(f"{where}: at most {maximum} entries allowed")
        return [item(v, f"{where}[{i}]") for i, v in enumerate(value)]
    return convert


_BIND_FIELDS = (
    _field("ip", _string, required=True),
    _field("port", _port, zero_default=True),
    _field("queue_size", _int, zero_default=True),
    _field("tls", _bool),
    _field("tls_full_certificate_chain", _string),
    _field("tls_private_key", _string),
    _field("hostname", _string),
)

_PROXY_FIELDS = (
    _field("table_refresh_delay", _int, required=True, zero_default=True),
    _field("host", _string, required=True),
    _field("port", _port, required=True),
    _field("priority", _int, zero_default=True),
    _field("tls", _bool),
)

_NODE_FIELDS = (
    _field("host", _string, required=True),
    _field("port", _port, required=True, zero_default=True),
    _field("tls", _bool),
    _field("authorization", _string, required=True),
    _field("retry_delay", _int, zero_default=True),
)

_ENDPOINT_FIELDS = (
    _field("host", _string, required=True),
    _field("port", _port, required=True, zero_default=True),
    _field("tls", _bool),
)

_GRAYLOG_FIELDS = (
    _field("retry_delay", _int, zero_default=True),
    _field("bulk_max_size", _int, zero_default=True),
    _field("queue_max_size", _int, zero_default=True),
    _field("host", _string, required=True),
    _field("port", _port, required=True, zero_default=True),
    _field("uri", _string, required=True),
    _field("tls", _bool),
    _field("authorization", _string, required=True),
    _field("log_level", _log_level, required=True),
    _field("drainfile", _string, attr="drainfilename"),
)

_THREADS_FIELDS = (
    _field("stacksize", _int, zero_default=True),
)

_WEBROOTS_FIELDS = (
    _field("path", _string),
    _field("uri", _string),
)

_RTCM_CONVERT_FIELDS = (
    _field("types", _string, required=True),
    _field("conversion", _conversion, required=True),
)

_RTCM_FILTER_FIELDS = (
    _field("apply", _string, required=True),
    _field("pass", _string, attr="pass_types", required=True),
    _field("convert", _sequence(_mapping(RtcmConvertConfig, _RTCM_CONVERT_FIELDS), 1)),
)

_TOP_FIELDS = (
    _field("listen", _sequence(_mapping(BindConfig, _BIND_FIELDS)), attr="bind", required=True),
    _field("hysteresis_m", _float, zero_default=True),
    _field("max_nearest_lookup_distance_m", _float, zero_default=True),
    _field("nearest_base_count_target", _int, zero_default=True),
    _field("proxy", _sequence(_mapping(ProxyConfig, _PROXY_FIELDS))),
    _field("trusted_http_proxy", _sequence(_string)),
    _field("trusted_http_ip_header", _string),
    _field("node", _sequence(_mapping(NodeConfig, _NODE_FIELDS))),
    _field("endpoint", _sequence(_mapping(EndpointConfig, _ENDPOINT_FIELDS))),
    _field("graylog", _sequence(_mapping(GraylogConfig, _GRAYLOG_FIELDS), 1)),
    _field("source_auth_file", _string, attr="source_auth_filename", required=True),
    _field("host_auth_file", _string, attr="host_auth_filename", required=True),
    _field("blocklist_file", _string, attr="blocklist_filename"),
    _field("sourcetable_file", _string, attr="sourcetable_filename", required=True),
    _field("sourcetable_priority", _int, zero_default=True),
    _field("backlog_socket", _int, zero_default=True),
    _field("backlog_evbuffer", _int, zero_default=True),
    _field("sourcetable_fetch_timeout", _int, zero_default=True),
    _field("on_demand_source_timeout", _int, zero_default=True),
    _field("idle_max_delay", _int, zero_default=True),
    _field("source_read_timeout", _int, zero_default=True),
    _field("ntripcli_default_read_timeout", _int, zero_default=True),
    _field("ntripcli_default_write_timeout", _int, zero_default=True),
    _field("ntripsrv_default_read_timeout", _int, zero_default=True),
    _field("ntripsrv_default_write_timeout", _int, zero_default=True),
    _field("http_header_max_size", _int, zero_default=True),
    _field("http_content_length_max", _int, zero_default=True),
    _field("access_log", _string, required=True),
    _field("log", _string, required=True),
    # A level of 0 (EMERG) falls back to the default level.
    _field("log_level", _log_level, required=True, zero_default=True),
    _field("admin_user", _string),
    _field("threads", _sequence(_mapping(ThreadsConfig, _THREADS_FIELDS), 1), zero_default=True),
    _field("webroots", _sequence(_mapping(WebrootConfig, _WEBROOTS_FIELDS))),
    _field("syncer_auth", _string),
    _field("rtcm_filter", _sequence(_mapping(RtcmFilterConfig, _RTCM_FILTER_FIELDS), 1)),
)


def config_from_mapping(data: Any) -> Config:
    """Build a Config from a parsed YAML document, applying defaults."""
    if data is None:
        raise ConfigError("empty config")
    config = _build(Config, _TOP_FIELDS, data, "config")
    prefixes = []
    for text in config.trusted_http_proxy:
        try:
            prefixes.append(ip_prefix_parse(text))
        except ValueError:
            raise ConfigError(f"Invalid IP prefix {text}") from None
    config.trusted_http_proxy_prefixes = prefixes
    return config


def parse_config(filename) -> Config:
    """Read and validate a YAML configuration file."""
    try:
        with open(filename, encoding="utf-8") as fh:
            data = yaml.safe_load(fh)
    except OSError as exc:
        raise ConfigError(f"can't read {filename}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise ConfigError(f"can't parse {filename}: {exc}") from exc
    return config_from_mapping(data)