"""Log entries in the GELF format."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass
class GelfEntry:
    """One GELF log record."""

    level: int
    short_message: Optional[str] = None
    hostname: Optional[str] = None
    thread_id: int = -1
    remote_ip: Optional[str] = None
    remote_port: int = 0
    connection_id: int = 0
    nograylog: bool = False
    timestamp: float = field(default_factory=time.time)

    def to_json(self) -> dict[str, Any]:
        """Return the record as a GELF 1.1 JSON object."""
        obj: dict[str, Any] = {}
        if self.thread_id >= 0:
            obj["_thread_id"] = self.thread_id
        if self.remote_ip:
            obj["_remote_ip"] = self.remote_ip
            obj["_remote_port"] = self.remote_port
        obj["level"] = self.level
        obj["short_message"] = self.short_message
        obj["host"] = self.hostname
        obj["version"] = "1.1"
        if self.connection_id:
            obj["_connection_id"] = self.connection_id
        obj["timestamp"] = float(self.timestamp)
        return obj