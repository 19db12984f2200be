"""Authentication files for hosts and sources."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class AuthEntry:
    """A host name or mountpoint with its user and password."""

    key: str
    user: str
    password: str


def auth_parse(filename) -> list[AuthEntry]:
    """Read ``key:user:password`` lines from a file.

    Blank lines and lines starting with ``#`` are ignored. The password may
    itself contain ``:``. A line with fewer than three fields raises ValueError.
    """
    entries = []
    with open(filename, encoding="utf-8") as fh:
        for lineno, line in enumerate(fh, 1):
            line = line.rstrip("\r\n")
            if not line.strip() or line.lstrip().startswith("#"):
                continue
            fields = line.split(":", 2)
            if len(fields) != 3:
                raise ValueError(f"{filename}:{lineno}: expected 3 ':'-separated fields")
            entries.append(AuthEntry(*fields))
    return entries