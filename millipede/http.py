"""HTTP Authorization header encoding and decoding."""

from __future__ import annotations

import base64
import binascii
from dataclasses import dataclass

_WHITESPACE = " \t\n\v\f\r"
_CREDENTIAL_SEPARATOR = ":"


class AuthError(ValueError):
    """Raised when an Authorization header value cannot be decoded."""


@dataclass(frozen=True)
class Authorization:
    """Decoded credentials; for the internal scheme user and password are the token."""

    scheme_basic: bool
    user: str
    password: str


def basic_auth_header(user: str, password: str) -> str:
    """Return the value of a ``Basic`` Authorization header."""
    raw = f"{user}{_CREDENTIAL_SEPARATOR}{password}".encode("utf-8")
    return "Basic " + base64.b64encode(raw).decode("ascii")


def decode_auth(value: str) -> Authorization:
    """Decode a ``Basic`` or ``internal`` Authorization header value."""
    split = next((i for i, ch in enumerate(value) if ch in _WHITESPACE), None)
    if split is None:
        raise AuthError("missing credentials")
    scheme = value[:split].lower()
    if scheme == "basic":
        scheme_basic = True
    elif scheme == "internal":
        scheme_basic = False
    else:
        raise AuthError(f"unsupported scheme {value[:split]!r}")

    rest = value[split + 1:].lstrip(_WHITESPACE)
    if not rest:
        raise AuthError("missing credentials")

    if not scheme_basic:
        end = next((i for i, ch in enumerate(rest) if ch in _WHITESPACE), len(rest))
        credential = rest[:end]
        return Authorization(False, credential, credential)

    try:
        raw = base64.b64decode(rest.rstrip(_WHITESPACE), validate=True)
    except (binascii.Error, ValueError) as exc:
        raise AuthError("invalid base64 credentials") from exc
    decoded = raw.split(b"\0", 1)[0].decode("utf-8", errors="replace")
    user, sep, remainder = decoded.partition(_CREDENTIAL_SEPARATOR)
    if not sep:
        raise AuthError("credentials lack a ':' separator")
    return Authorization(True, user, remainder)