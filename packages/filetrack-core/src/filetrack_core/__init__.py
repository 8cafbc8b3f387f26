"""filetrack core - remembers which files were read and notices when those reads go stale."""

from filetrack_core.config import FileTrackConfig, TrackerConfig, load_config
from filetrack_core.freshness import FileAccessError, FreshnessEvaluator, FreshnessResult, Snapshot
from filetrack_core.interfaces import FileStat, FileSystem, LocalFileSystem
from filetrack_core.tracking import (
    FileEntry,
    FileStatus,
    FileStatusAPI,
    FileTrackerService,
    NotTrackedError,
    TrackerStats,
    TrackingSummary,
)

__version__ = "0.1.0"

__all__ = [
    "FileAccessError",
    "FileEntry",
    "FileStat",
    "FileStatus",
    "FileStatusAPI",
    "FileSystem",
    "FileTrackConfig",
    "FileTrackerService",
    "FreshnessEvaluator",
    "FreshnessResult",
    "LocalFileSystem",
    "NotTrackedError",
    "Snapshot",
    "TrackerConfig",
    "TrackerStats",
    "TrackingSummary",
    "load_config",
]
