"""File tracking — the bounded registry of read files and its query layer."""

from filetrack_core.tracking.api import FileStatusAPI, TrackingSummary
from filetrack_core.tracking.models import FileEntry, FileStatus, NotTrackedError, TrackerStats
from filetrack_core.tracking.service import FileTrackerService

__all__ = [
    "FileEntry",
    "FileStatus",
    "FileStatusAPI",
    "FileTrackerService",
    "NotTrackedError",
    "TrackerStats",
    "TrackingSummary",
]
