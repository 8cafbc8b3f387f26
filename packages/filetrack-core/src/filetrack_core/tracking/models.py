"""Entry, status and stats models for the tracking registry."""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator

from filetrack_core.freshness.models import Snapshot


class NotTrackedError(Exception):
    """An operation needed an existing entry for a path that has none."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"File not tracked: {path}")


class FileStatus(str, Enum):
    """Lifecycle states for a tracked file."""

    not_read = "not_read"
    current = "current"
    stale = "stale"
    error = "error"


class FileEntry(BaseModel):
    """One tracked file. Replaced wholesale on every transition, never edited in place."""

    model_config = ConfigDict(frozen=True)

    path: str = Field(min_length=1)
    snapshot: Snapshot
    status: FileStatus = FileStatus.current
    first_read_at: datetime
    last_updated_at: datetime
    error: str | None = None
    error_reason: str | None = None

    @model_validator(mode="after")
    def check_timestamps(self) -> FileEntry:
        if self.last_updated_at < self.first_read_at:
            raise ValueError("last_updated_at must not precede first_read_at")
        return self


class TrackerStats(BaseModel):
    """Entry counts, one field per status."""

    model_config = ConfigDict(frozen=True)

    not_read: int = 0
    current: int = 0
    stale: int = 0
    error: int = 0

    @property
    def total(self) -> int:
        return self.not_read + self.current + self.stale + self.error

    def count(self, status: FileStatus) -> int:
        return getattr(self, status.value)
