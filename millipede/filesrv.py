"""Serving static files from configured web roots."""

from __future__ import annotations

import os
import stat
from typing import Iterable, Optional

from millipede.settings import WebrootConfig


class FileServeError(Exception):
    """Raised when a file cannot be served; ``status`` is the HTTP status."""

    def __init__(self, status: int, message: str = ""):
        super().__init__(message or f"HTTP {status}")
        self.status = status


def check_safe_uri(uri: str) -> bool:
    """Return False if a path segment of ``uri`` starts with ``./`` or ``../``."""
    starts = [0] + [i + 1 for i, ch in enumerate(uri) if ch == "/"]
    return not any(uri.startswith(("./", "../"), start) for start in starts)


def find_webroot(webroots: Iterable[WebrootConfig], uri: str) -> Optional[WebrootConfig]:
    """Return the first web root whose non-empty URI prefixes ``uri``."""
    for webroot in webroots:
        if webroot.uri and uri.startswith(webroot.uri):
            return webroot
    return None


def serve_file(config_dir, webroots: Iterable[WebrootConfig], uri: str) -> Optional[bytes]:
    """Return the content of the file for ``uri``, or None if no web root matches.

    The full URI is looked up below the web root path, itself relative to
    ``config_dir``. Raise FileServeError(404) for unsafe URIs and missing or
    non-regular files, FileServeError(503) when the file cannot be read.
    """
    webroot = find_webroot(webroots, uri)
    if webroot is None:
        return None
    if not check_safe_uri(uri):
        raise FileServeError(404, "unsafe URI")
    if webroot.path is None:
        raise FileServeError(503, "web root has no path")

    path = os.path.join(config_dir, webroot.path, uri.lstrip("/"))
    try:
        fh = open(path, "rb")
    except OSError:
        raise FileServeError(404, "not found") from None
    with fh:
        try:
            mode = os.fstat(fh.fileno()).st_mode
        except OSError:
            raise FileServeError(404, "not found") from None
        if not stat.S_ISREG(mode):
            raise FileServeError(404, "not a regular file")
        try:
            return fh.read()
        except OSError:
            raise FileServeError(503, "read error") from None