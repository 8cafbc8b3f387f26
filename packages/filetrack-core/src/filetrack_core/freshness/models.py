"""Snapshot and verdict models for the freshness subsystem."""

from __future__ import annotations

import errno
from datetime import UTC, datetime, timedelta

from pydantic import BaseModel, ConfigDict, Field

# OSError subclasses that can be raised without an errno (e.g. FileNotFoundError("x"))
_REASON_BY_TYPE: list[tuple[type[OSError], str]] = [
    (FileNotFoundError, "ENOENT"),
    (PermissionError, "EACCES"),
    (IsADirectoryError, "EISDIR"),
    (NotADirectoryError, "ENOTDIR"),
    (FileExistsError, "EEXIST"),
    (TimeoutError, "ETIMEDOUT"),
    (InterruptedError, "EINTR"),
]


def _reason_for(cause: OSError) -> str:
    if cause.errno and cause.errno in errno.errorcode:
        return errno.errorcode[cause.errno]
    for exc_type, reason in _REASON_BY_TYPE:
        if isinstance(cause, exc_type):
            return reason
    return "EIO"


class FileAccessError(Exception):
    """A file could not be stat'd or read.

    Wraps the underlying OSError, keeping its errno name as a machine-readable
    ``reason`` (``ENOENT``, ``EACCES``, ...) alongside the system message.
    """

    def __init__(self, path: str, operation: str, cause: OSError) -> None:
        self.path = path
        self.operation = operation
        self.reason = _reason_for(cause)
        self.strerror = cause.strerror or str(cause)
        super().__init__(f"{operation} failed for {path}: [{self.reason}] {self.strerror}")
        self.__cause__ = cause


class Snapshot(BaseModel):
    """What a file looked like when it was last observed.

    Holds either the raw bytes (metadata mode) or a digest of them
    (content-hash mode). ``mtime_ns`` is kept at full nanosecond resolution.
    """

    model_config = ConfigDict(frozen=True)

    content: bytes | None = None
    content_hash: str | None = None
    mtime_ns: int
    size: int = Field(ge=0)

    @property
    def mtime(self) -> datetime:
        """Modification time as a UTC datetime. Display only, loses nanoseconds."""
        seconds, nanos = divmod(self.mtime_ns, 1_000_000_000)
        return datetime.fromtimestamp(seconds, tz=UTC) + timedelta(microseconds=nanos // 1000)


class FreshnessResult(BaseModel):
    """Verdict of comparing a snapshot against the live file."""

    model_config = ConfigDict(frozen=True)

    is_fresh: bool
    reason: str | None = None
