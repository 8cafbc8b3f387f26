"""Read-only query layer over a FileTrackerService."""

from __future__ import annotations

import difflib
import os

from pydantic import BaseModel

from filetrack_core.freshness.models import FileAccessError
from filetrack_core.tracking.models import FileEntry, FileStatus, TrackerStats
from filetrack_core.tracking.service import FileTrackerService


class TrackingSummary(BaseModel):
    """Headline counts for reporting."""

    total_tracked: int = 0
    current_files: int = 0
    stale_files: int = 0
    error_files: int = 0


class FileStatusAPI:
    """Convenience filters and summaries for checking what has been read.

    Holds no state of its own; every answer comes from the injected service.
    """

    def __init__(self, service: FileTrackerService) -> None:
        self.service = service

    def get_file_status(self, path: str | os.PathLike[str]) -> FileEntry | None:
        return self.service.get_file_status(path)

    def is_file_stale(self, path: str | os.PathLike[str]) -> bool:
        return self.service.is_stale(path)

    def get_stale_files(self) -> list[FileEntry]:
        return self.service.get_files_by_status(FileStatus.stale)

    def get_current_files(self) -> list[FileEntry]:
        return self.service.get_files_by_status(FileStatus.current)

    def get_error_files(self) -> list[FileEntry]:
        return self.service.get_files_by_status(FileStatus.error)

    def get_all_read_files(self) -> list[FileEntry]:
        """Current and stale files; entries in error are left out."""
        return self.get_current_files() + self.get_stale_files()

    def get_files_needing_attention(self) -> list[FileEntry]:
        """Stale and errored files."""
        return self.get_stale_files() + self.get_error_files()

    def get_stats(self) -> TrackerStats:
        return self.service.get_stats()

    def get_summary(self) -> TrackingSummary:
        stats = self.service.get_stats()
        return TrackingSummary(
            total_tracked=stats.total,
            current_files=stats.current,
            stale_files=stats.stale,
            error_files=stats.error,
        )

    def diff(self, path: str | os.PathLike[str]) -> str | None:
        """Unified diff from the tracked content of *path* to what is on disk now.

        Returns None when diffs are disabled, the path is untracked, only a
        digest was kept, or either side is not UTF-8 text. An empty string means
        the content is identical. Raises FileAccessError if the file can't be read.
        """
        if not self.service.config.generate_diffs:
            return None
        entry = self.service.get_file_status(path)
        if entry is None or entry.snapshot.content is None:
            return None

        try:
            live = self.service.evaluator.fs.read_bytes(entry.path)
        except OSError as exc:
            raise FileAccessError(entry.path, "diff", exc) from exc

        try:
            before = entry.snapshot.content.decode("utf-8")
            after = live.decode("utf-8")
        except UnicodeDecodeError:
            return None

        lines = difflib.unified_diff(
            before.splitlines(keepends=True),
            after.splitlines(keepends=True),
            fromfile=f"{entry.path} (tracked)",
            tofile=f"{entry.path} (current)",
        )
        return "".join(lines)
