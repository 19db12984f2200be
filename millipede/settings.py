"""Caster configuration model with its built-in defaults."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Any, Optional

from millipede.auth import AuthEntry
from millipede.ip import Prefix, PrefixTable

SERVER_VERSION_STRING = "Millipede Server 0.8"
CLIENT_VERSION_STRING = "Millipede Client 0.8"

# Backlog delay in seconds allowed to a client.
BACKLOG_DELAY = 60


class LogLevel(IntEnum):
    """Syslog-style log levels; lower is more severe."""

    EMERG = 0
    ALERT = 1
    CRIT = 2
    ERR = 3
    WARNING = 4
    NOTICE = 5
    INFO = 6
    DEBUG = 7
    EDEBUG = 8


class RtcmConversion(Enum):
    """RTCM message conversions, named as in the configuration file."""

    MSM7_3 = "msm7_3"
    MSM7_4 = "msm7_4"


@dataclass(kw_only=True)
class BindConfig:
    """An address to listen on."""

    ip: str
    port: int = 2101
    queue_size: int = 2000
    tls: bool = False
    tls_full_certificate_chain: Optional[str] = None
    tls_private_key: Optional[str] = None
    hostname: Optional[str] = None


@dataclass(kw_only=True)
class ProxyConfig:
    """A remote caster whose sourcetable is fetched and proxied."""

    host: str
    port: int
    table_refresh_delay: int = 600
    priority: int = 20
    tls: bool = False


@dataclass(kw_only=True)
class NodeConfig:
    """A peer caster to synchronise tables with."""

    host: str
    port: int = 2443
    authorization: Optional[str] = None
    tls: bool = False
    queue_max_size: int = 4000000
    retry_delay: int = 30


@dataclass(kw_only=True)
class EndpointConfig:
    """A public endpoint under which this caster can be reached."""

    host: Optional[str] = None
    port: int = 2443
    tls: bool = False
    ip: Optional[str] = None


@dataclass(kw_only=True)
class GraylogConfig:
    """A Graylog server receiving GELF records over HTTP."""

    host: str
    uri: str
    authorization: Optional[str] = None
    log_level: LogLevel = LogLevel.INFO
    port: int = 7777
    tls: bool = False
    retry_delay: int = 30
    bulk_max_size: int = 62000
    queue_max_size: int = 4000000
    drainfilename: Optional[str] = None


@dataclass(kw_only=True)
class ThreadsConfig:
    """Worker thread settings."""

    stacksize: int = 500 * 1024


@dataclass(kw_only=True)
class WebrootConfig:
    """A directory served under a URI prefix."""

    path: Optional[str] = None
    uri: Optional[str] = None


@dataclass(kw_only=True)
class RtcmConvertConfig:
    """A conversion applied to a ','-separated list of RTCM types."""

    types: str
    conversion: RtcmConversion


@dataclass(kw_only=True)
class RtcmFilterConfig:
    """RTCM filtering for a ','-separated list of mountpoints."""

    apply: str
    pass_types: str
    convert: list[RtcmConvertConfig] = field(default_factory=list)


def _default_threads() -> list[ThreadsConfig]:
    return [ThreadsConfig()]


@dataclass(kw_only=True)
class Config:
    """Complete caster configuration."""

    bind: list[BindConfig] = field(default_factory=list)

    hysteresis_m: float = 500.0
    max_nearest_lookup_distance_m: float = 1000000.0
    nearest_base_count_target: int = 10
    min_nearest_recompute_interval: int = 10
    max_nearest_recompute_interval: int = 120
    min_nearest_recompute_pos_delta: float = 10.0

    proxy: list[ProxyConfig] = field(default_factory=list)

    trusted_http_proxy: list[str] = field(default_factory=list)
    trusted_http_proxy_prefixes: list[Prefix] = field(default_factory=list)
    trusted_http_ip_header: Optional[str] = None

    node: list[NodeConfig] = field(default_factory=list)
    endpoint: list[EndpointConfig] = field(default_factory=list)
    graylog: list[GraylogConfig] = field(default_factory=list)

    backlog_socket: int = 112 * 1024
    backlog_evbuffer: int = 16 * 1024

    source_read_timeout: int = 60
    ntripcli_default_read_timeout: int = 60
    ntripcli_default_write_timeout: int = 60
    ntripsrv_default_read_timeout: int = 60
    ntripsrv_default_write_timeout: int = 60
    sourcetable_fetch_timeout: int = 60
    on_demand_source_timeout: int = 60

    http_header_max_size: int = 8192
    http_content_length_max: int = 4000000

    threads: list[ThreadsConfig] = field(default_factory=_default_threads)

    idle_max_delay: int = 60
    reconnect_delay: int = 10
    min_raw_packet: int = 100
    max_raw_packet: int = 1450

    host_auth_filename: Optional[str] = "host.auth"
    source_auth_filename: Optional[str] = "source.auth"
    blocklist_filename: Optional[str] = None
    sourcetable_filename: str = "sourcetable.dat"
    sourcetable_priority: int = 90

    access_log: str = "/var/log/millipede/access.log"
    log: str = "/var/log/millipede/caster.log"
    log_level: LogLevel = LogLevel.INFO

    admin_user: str = "admin"

    zero_copy: bool = True

    webroots: list[WebrootConfig] = field(default_factory=list)
    rtcm_filter: list[RtcmFilterConfig] = field(default_factory=list)

    syncer_auth: Optional[str] = None

    host_auth: Optional[list[AuthEntry]] = None
    source_auth: Optional[list[AuthEntry]] = None
    blocklist: Optional[PrefixTable] = None

    def endpoints_json(self) -> list[dict[str, Any]]:
        """Return the configured public endpoints as JSON objects."""
        result = []
        for ep in self.endpoint:
            obj: dict[str, Any] = {}
            if ep.host:
                obj["host"] = ep.host
            obj["port"] = ep.port
            obj["tls"] = bool(ep.tls)
            result.append(obj)
        return result