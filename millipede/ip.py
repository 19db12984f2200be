"""IP address parsing, prefixes and per-prefix connection quotas."""

from __future__ import annotations

import ipaddress
import logging
import re
from dataclasses import dataclass, field
from typing import Union

log = logging.getLogger(__name__)

IPAddress = Union[ipaddress.IPv4Address, ipaddress.IPv6Address]

_MAX_IP_LEN = 40
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def ip_convert(text: str) -> IPAddress:
    """Parse an IPv6 or IPv4 address; raise ValueError if it is neither."""
    if "%" not in text:
        try:
            return ipaddress.IPv6Address(text)
        except ValueError:
            pass
        try:
            return ipaddress.IPv4Address(text)
        except ValueError:
            pass
    raise ValueError(f"invalid IP address {text!r}")


def _as_address(addr: Union[str, IPAddress]) -> IPAddress:
    return ip_convert(addr) if isinstance(addr, str) else addr


@dataclass(frozen=True)
class Prefix:
    """An IP address and a prefix length."""

    addr: IPAddress
    length: int

    def contains(self, addr: Union[str, IPAddress]) -> bool:
        """Return True if ``addr`` lies inside this prefix."""
        addr = _as_address(addr)
        if addr.version != self.addr.version:
            return False
        shift = self.addr.max_prefixlen - self.length
        return int(addr) >> shift == int(self.addr) >> shift


def ip_prefix_parse(text: str) -> Prefix:
    """Parse ``IP[/len]``; without a length the full address width is used."""
    ip_part, sep, rest = text.partition("/")
    if len(ip_part) > _MAX_IP_LEN:
        raise ValueError(f"IP address too long in {text!r}")
    length = None
    if sep:
        match = _LEADING_INT.match(rest)
        if match is None:
            raise ValueError(f"invalid prefix length in {text!r}")
        length = int(match.group(1))
    addr = ip_convert(ip_part)
    pmax = addr.max_prefixlen
    if length is None:
        return Prefix(addr, pmax)
    if not 0 <= length <= pmax:
        raise ValueError(f"prefix length out of range in {text!r}")
    return Prefix(addr, length)


def ip_str_port(addr: Union[str, IPAddress], port: int) -> str:
    """Format an address and port: ``ip:port`` for IPv4, ``ip.port`` for IPv6."""
    addr = _as_address(addr)
    sep = ":" if addr.version == 4 else "."
    return f"{addr}{sep}{port}"


def _parse_quota(text: str) -> int:
    match = _LEADING_INT.match(text)
    if match is None:
        raise ValueError(f"invalid quota {text!r}")
    quota = int(match.group(1)) & 0xFFFFFFFF
    if quota >= 1 << 31:
        quota -= 1 << 32
    if quota < -1:
        raise ValueError(f"invalid quota {text!r}")
    return quota


@dataclass(frozen=True)
class PrefixQuota:
    """A prefix with its number of allowed connections per IP (-1 = unlimited)."""

    prefix: Prefix
    quota: int

    @classmethod
    def parse(cls, ip_prefix: str, quota_str: str) -> "PrefixQuota":
        """Parse a prefix and quota; the address must have no bits set past the prefix."""
        quota = _parse_quota(quota_str)
        prefix = ip_prefix_parse(ip_prefix)
        host_bits = prefix.addr.max_prefixlen - prefix.length
        if int(prefix.addr) & ((1 << host_bits) - 1):
            raise ValueError(f"address has bits set beyond the prefix in {ip_prefix!r}")
        return cls(prefix, quota)

    def __str__(self) -> str:
        return f"{self.prefix.addr}/{self.prefix.length} {self.quota}"


@dataclass
class PrefixTable:
    """Quota table for IPv4 and IPv6 prefixes; the longest matching prefix wins."""

    v4: list[PrefixQuota] = field(default_factory=list)
    v6: list[PrefixQuota] = field(default_factory=list)

    def __init__(self) -> None:
        self.v4 = []
        self.v6 = []

    def _table(self, version: int) -> list[PrefixQuota]:
        return self.v6 if version == 6 else self.v4

    def add(self, entry: PrefixQuota) -> None:
        """Append an entry to the table of its address family."""
        self._table(entry.prefix.addr.version).append(entry)

    def sort(self) -> None:
        """Order entries by increasing prefix length."""
        self.v4.sort(key=lambda e: e.prefix.length)
        self.v6.sort(key=lambda e: e.prefix.length)

    def get_quota(self, addr: Union[str, IPAddress]) -> int:
        """Return the quota of the longest prefix holding ``addr``, or -1."""
        addr = _as_address(addr)
        for entry in reversed(self._table(addr.version)):
            if entry.prefix.contains(addr):
                return entry.quota
        return -1

    def read(self, filename) -> int:
        """Load ``prefix quota`` lines from a file, then sort; return entries added.

        Blank lines and lines starting with ``#`` are ignored. Unparsable
        prefixes or quotas are skipped; a line without exactly two fields
        raises ValueError.
        """
        with open(filename, encoding="utf-8") as fh:
            rows = []
            for lineno, line in enumerate(fh, 1):
                stripped = line.strip()
                if not stripped or stripped.startswith("#"):
                    continue
                fields = stripped.split()
                if len(fields) != 2:
                    raise ValueError(f"{filename}:{lineno}: expected 2 fields, got {len(fields)}")
                rows.append(fields)
        added = 0
        for ip_prefix, quota_str in rows:
            try:
                entry = PrefixQuota.parse(ip_prefix, quota_str)
            except ValueError:
                log.error("Can't parse %s %s, skipping", ip_prefix, quota_str)
                continue
            self.add(entry)
            added += 1
        self.sort()
        return added