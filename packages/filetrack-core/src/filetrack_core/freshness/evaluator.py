"""Snapshot capture and freshness comparison against the live filesystem."""

from __future__ import annotations

import hashlib
import logging

from filetrack_core.config.models import TrackerConfig
from filetrack_core.freshness.models import FileAccessError, FreshnessResult, Snapshot
from filetrack_core.interfaces.filesystem import FileSystem, LocalFileSystem

logger = logging.getLogger(__name__)


def compute_hash(content: bytes, algorithm: str = "sha256") -> str:
    """Full hex digest of *content*."""
    return hashlib.new(algorithm, content).hexdigest()


class FreshnessEvaluator:
    """Captures snapshots and decides whether a snapshot still matches its file.

    Two comparison modes:

    * metadata (default): fresh iff mtime_ns and size are both unchanged.
    * content hash: re-read the file and compare digests, ignoring metadata.

    Filesystem failures surface as FileAccessError; they are never turned into
    a fresh/stale verdict here.
    """

    def __init__(
        self,
        use_content_hash: bool = False,
        hash_algorithm: str = "sha256",
        fs: FileSystem | None = None,
    ) -> None:
        self.use_content_hash = use_content_hash
        self.hash_algorithm = hash_algorithm
        self.fs = fs if fs is not None else LocalFileSystem()

    @classmethod
    def from_config(cls, config: TrackerConfig, fs: FileSystem | None = None) -> FreshnessEvaluator:
        return cls(
            use_content_hash=config.use_content_hash,
            hash_algorithm=config.hash_algorithm,
            fs=fs,
        )

    # ------------------------------------------------------------------
    # Capture
    # ------------------------------------------------------------------

    def capture(self, path: str) -> Snapshot:
        """Stat and read *path*, returning a new Snapshot."""
        try:
            st = self.fs.stat(path)
            content = self.fs.read_bytes(path)
        except OSError as exc:
            raise FileAccessError(path, "capture", exc) from exc

        if self.use_content_hash:
            snapshot = Snapshot(
                content_hash=compute_hash(content, self.hash_algorithm),
                mtime_ns=st.mtime_ns,
                size=st.size,
            )
        else:
            snapshot = Snapshot(content=content, mtime_ns=st.mtime_ns, size=st.size)
        logger.debug("Captured %s (size=%d, mtime_ns=%d)", path, st.size, st.mtime_ns)
        return snapshot

    # ------------------------------------------------------------------
    # Compare
    # ------------------------------------------------------------------

    def compare(self, path: str, snapshot: Snapshot) -> FreshnessResult:
        """Check *snapshot* against the file currently at *path*."""
        try:
            st = self.fs.stat(path)
            if self.use_content_hash:
                recorded = self._recorded_digest(snapshot)
                if recorded is not None:
                    current = compute_hash(self.fs.read_bytes(path), self.hash_algorithm)
                    result = FreshnessResult(
                        is_fresh=current == recorded,
                        reason=None if current == recorded else "content",
                    )
                    logger.debug("Compared %s by content: fresh=%s", path, result.is_fresh)
                    return result
                logger.debug("Snapshot for %s has no content to hash, comparing metadata", path)
        except OSError as exc:
            raise FileAccessError(path, "compare", exc) from exc

        # Exact integer comparison; rounding here would hide real edits.
        if st.mtime_ns != snapshot.mtime_ns:
            result = FreshnessResult(is_fresh=False, reason="mtime")
        elif st.size != snapshot.size:
            result = FreshnessResult(is_fresh=False, reason="size")
        else:
            result = FreshnessResult(is_fresh=True)
        logger.debug("Compared %s by metadata: fresh=%s", path, result.is_fresh)
        return result

    def _recorded_digest(self, snapshot: Snapshot) -> str | None:
        if snapshot.content_hash is not None:
            return snapshot.content_hash
        if snapshot.content is not None:
            return compute_hash(snapshot.content, self.hash_algorithm)
        return None
