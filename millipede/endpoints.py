"""Endpoint descriptions and their JSON form."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Optional


@dataclass(frozen=True)
class Endpoint:
    """A host, port and TLS flag."""

    host: Optional[str]
    port: int
    tls: bool = False


def endpoints_from_json(data: Iterable[Any]) -> list[Endpoint]:
    """Build endpoints from a list of ``{"host", "port", "tls"}`` objects.

    Raise ValueError if an entry lacks one of these keys.
    """
    result = []
    for item in data:
        if not isinstance(item, dict):
            raise ValueError("endpoint entry is not an object")
        host = item.get("host")
        port = item.get("port")
        tls = item.get("tls")
        if host is None or port is None or tls is None:
            raise ValueError("endpoint entry lacks host, port or tls")
        if not isinstance(host, str):
            host = str(host).lower() if isinstance(host, bool) else str(host)
        result.append(Endpoint(host, int(port) & 0xFFFF, bool(tls)))
    return result


def endpoints_to_json(endpoints: Iterable[Endpoint]) -> list[dict[str, Any]]:
    """Return endpoints as a list of JSON objects."""
    return [{"host": e.host, "tls": bool(e.tls), "port": e.port} for e in endpoints]