"""Filesystem access interface and the local-disk implementation."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field


class FileStat(BaseModel):
    """The subset of stat() results that freshness checks care about."""

    model_config = ConfigDict(frozen=True)

    mtime_ns: int
    size: int = Field(ge=0)


@runtime_checkable
class FileSystem(Protocol):
    """Read-only filesystem primitives. Implementations raise OSError on failure."""

    def stat(self, path: str) -> FileStat: ...

    def read_bytes(self, path: str) -> bytes: ...


class LocalFileSystem:
    """FileSystem backed by the local disk."""

    def stat(self, path: str) -> FileStat:
        st = os.stat(path)
        return FileStat(mtime_ns=st.st_mtime_ns, size=st.st_size)

    def read_bytes(self, path: str) -> bytes:
        return Path(path).read_bytes()
