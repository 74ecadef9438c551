from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum


class ChangeKind(str, Enum):
    ADDED = "ADDED"
    MODIFIED = "MODIFIED"
    DELETED = "DELETED"
    # lifecycle markers, not per-file changes
    INITIALIZED = "INITIALIZED"
    STOPPED = "STOPPED"


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def format_timestamp(ts: datetime) -> str:
    """ISO-8601 in UTC with millisecond precision and a 'Z' suffix."""
    return ts.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


@dataclass(frozen=True, slots=True)
class ChangeEvent:
    kind: ChangeKind
    path: str  # for markers: the marker detail, e.g. "3 files"
    timestamp: datetime = field(default_factory=utc_now)

    def to_log_line(self) -> str:
        return f"[{format_timestamp(self.timestamp)}] {self.kind.value}: {self.path}\n"
