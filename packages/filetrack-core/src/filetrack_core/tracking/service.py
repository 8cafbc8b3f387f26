"""Bounded registry of files the agent has read, and their freshness status."""

from __future__ import annotations

import logging
import os
import threading
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from datetime import UTC, datetime
from typing import Any

from filetrack_core.config.models import TrackerConfig
from filetrack_core.freshness.evaluator import FreshnessEvaluator
from filetrack_core.freshness.models import FileAccessError, Snapshot
from filetrack_core.tracking.models import FileEntry, FileStatus, NotTrackedError, TrackerStats

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(UTC)


class FileTrackerService:
    """Tracks which files have been read and whether those reads are still current.

    Entries live in an insertion-ordered dict capped at
    ``config.max_tracked_files``; overflowing the cap evicts the entry with the
    oldest ``first_read_at``. All freshness decisions are delegated to a
    FreshnessEvaluator.

    Thread-safe. The map lock is only held to look up or install entries, never
    across filesystem I/O. Operations on the same path additionally serialize on
    a per-path lock so that ``last_updated_at`` follows completion order.
    """

    def __init__(
        self,
        config: TrackerConfig | None = None,
        evaluator: FreshnessEvaluator | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self.config = config if config is not None else TrackerConfig()
        self.evaluator = (
            evaluator if evaluator is not None else FreshnessEvaluator.from_config(self.config)
        )
        self._clock = clock if clock is not None else _utcnow
        self._entries: dict[str, FileEntry] = {}
        self._lock = threading.Lock()
        # path -> (lock, number of holders and waiters); guarded by _lock
        self._path_locks: dict[str, tuple[threading.Lock, int]] = {}

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _key(path: str | os.PathLike[str]) -> str:
        return os.path.abspath(os.fspath(path))

    @contextmanager
    def _path_lock(self, path: str) -> Iterator[None]:
        """Serialize operations on *path* only.

        The lock is created on first use and dropped once nobody holds or
        waits for it, so the table never outgrows the paths in flight.
        """
        with self._lock:
            lock, users = self._path_locks.get(path, (None, 0))
            if lock is None:
                lock = threading.Lock()
            self._path_locks[path] = (lock, users + 1)
        try:
            with lock:
                yield
        finally:
            with self._lock:
                _, users = self._path_locks[path]
                if users == 1:
                    del self._path_locks[path]
                else:
                    self._path_locks[path] = (lock, users - 1)

    def _install(self, path: str, updates: dict[str, Any]) -> FileEntry | None:
        """Swap in an updated copy of the entry at *path*.

        Returns None when the entry disappeared (removed, evicted or cleared)
        while the caller was doing I/O; the result is dropped in that case.
        """
        with self._lock:
            entry = self._entries.get(path)
            if entry is None:
                logger.debug("Dropping result for %s: no longer tracked", path)
                return None
            now = max(self._clock(), entry.first_read_at)
            new_entry = entry.model_copy(update={**updates, "last_updated_at": now})
            self._entries[path] = new_entry
            return new_entry

    def _evict_oldest(self, keep: str) -> None:
        """Drop the entry with the smallest first_read_at. Caller holds the map lock."""
        oldest: FileEntry | None = None
        for path, entry in self._entries.items():
            if path == keep:
                continue
            # Strict comparison keeps the earliest-inserted entry on ties
            if oldest is None or entry.first_read_at < oldest.first_read_at:
                oldest = entry
        if oldest is not None:
            del self._entries[oldest.path]
            logger.info(
                "Evicted %s (limit %d reached)", oldest.path, self.config.max_tracked_files
            )

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def register(self, path: str | os.PathLike[str], snapshot: Snapshot) -> FileEntry:
        """Record that *path* was read, as *snapshot*. Always yields a current entry.

        Re-registering a tracked path restarts its lifecycle.
        """
        path = self._key(path)
        with self._path_lock(path), self._lock:
            now = self._clock()
            entry = FileEntry(
                path=path,
                snapshot=snapshot,
                status=FileStatus.current,
                first_read_at=now,
                last_updated_at=now,
            )
            self._entries.pop(path, None)
            self._entries[path] = entry
            if len(self._entries) > self.config.max_tracked_files:
                self._evict_oldest(keep=path)
        return entry

    def update_state(self, path: str | os.PathLike[str], snapshot: Snapshot) -> FileEntry:
        """Store a newer snapshot for a tracked file and re-evaluate its status.

        The snapshot is stored even when the comparison fails, in which case the
        entry moves to ``error``. Raises NotTrackedError for untracked paths.
        """
        path = self._key(path)
        with self._path_lock(path):
            if self.get_file_status(path) is None:
                raise NotTrackedError(path)

            try:
                result = self.evaluator.compare(path, snapshot)
            except FileAccessError as exc:
                logger.warning("Could not check %s: %s", path, exc)
                updates: dict[str, Any] = {
                    "snapshot": snapshot,
                    "status": FileStatus.error,
                    "error": str(exc),
                    "error_reason": exc.reason,
                }
            else:
                updates = {
                    "snapshot": snapshot,
                    "status": FileStatus.current if result.is_fresh else FileStatus.stale,
                    "error": None,
                    "error_reason": None,
                }

            entry = self._install(path, updates)
            if entry is None:
                raise NotTrackedError(path)
            return entry

    def refresh(self, path: str | os.PathLike[str]) -> bool:
        """Re-read a tracked file from disk.

        Returns True when the entry ends up current. On failure the entry keeps
        its previous snapshot and moves to ``error``. Untracked paths are left
        alone and return False.
        """
        path = self._key(path)
        with self._path_lock(path):
            if self.get_file_status(path) is None:
                return False

            try:
                snapshot = self.evaluator.capture(path)
            except FileAccessError as exc:
                logger.warning("Could not refresh %s: %s", path, exc)
                self._install(path, {
                    "status": FileStatus.error,
                    "error": str(exc),
                    "error_reason": exc.reason,
                })
                return False

            entry = self._install(path, {
                "snapshot": snapshot,
                "status": FileStatus.current,
                "error": None,
                "error_reason": None,
            })
            return entry is not None

    def auto_track(self, path: str | os.PathLike[str], snapshot: Snapshot) -> FileEntry | None:
        """Register *path* only when ``track_all_files`` is enabled."""
        if not self.config.track_all_files:
            return None
        return self.register(path, snapshot)

    def remove(self, path: str | os.PathLike[str]) -> bool:
        """Stop tracking *path*. Returns False if it was not tracked."""
        path = self._key(path)
        with self._path_lock(path), self._lock:
            return self._entries.pop(path, None) is not None

    def clear(self) -> None:
        """Forget every tracked file."""
        with self._lock:
            count = len(self._entries)
            self._entries.clear()
        logger.info("Cleared %d tracked files", count)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_file_status(self, path: str | os.PathLike[str]) -> FileEntry | None:
        with self._lock:
            return self._entries.get(self._key(path))

    def get_all_tracked_files(self) -> list[FileEntry]:
        with self._lock:
            return list(self._entries.values())

    def get_files_by_status(self, status: FileStatus) -> list[FileEntry]:
        return [e for e in self.get_all_tracked_files() if e.status == status]

    def is_stale(self, path: str | os.PathLike[str]) -> bool:
        """True if the tracked copy of *path* no longer matches the file.

        Untracked paths are never stale. A failed check counts as stale and
        leaves the entry untouched.
        """
        entry = self.get_file_status(path)
        if entry is None:
            return False
        try:
            return not self.evaluator.compare(entry.path, entry.snapshot).is_fresh
        except FileAccessError as exc:
            logger.debug("Treating %s as stale: %s", entry.path, exc)
            return True

    def get_stats(self) -> TrackerStats:
        current = stale = error = 0
        for entry in self.get_all_tracked_files():
            if entry.status == FileStatus.current:
                current += 1
            elif entry.status == FileStatus.stale:
                stale += 1
            elif entry.status == FileStatus.error:
                error += 1
        return TrackerStats(current=current, stale=stale, error=error)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, path: object) -> bool:
        if not isinstance(path, (str, os.PathLike)):
            return False
        return self.get_file_status(path) is not None
