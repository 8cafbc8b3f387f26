"""Shared test fixtures for filetrack."""

import errno
from datetime import UTC, datetime, timedelta
from unittest.mock import MagicMock

import pytest

from filetrack_core.config.models import FileTrackConfig, TrackerConfig
from filetrack_core.freshness.evaluator import FreshnessEvaluator
from filetrack_core.freshness.models import Snapshot
from filetrack_core.interfaces.filesystem import FileStat, FileSystem
from filetrack_core.tracking.service import FileTrackerService


class StepClock:
    """Deterministic clock that advances one second per call."""

    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or datetime(2024, 1, 1, 12, 0, tzinfo=UTC)

    def __call__(self) -> datetime:
        current = self.now
        self.now += timedelta(seconds=1)
        return current


@pytest.fixture
def enoent():
    return FileNotFoundError(errno.ENOENT, "No such file or directory", "missing")


@pytest.fixture
def clock():
    return StepClock()


@pytest.fixture
def sample_config():
    return FileTrackConfig()


@pytest.fixture
def sample_snapshot():
    return Snapshot(
        content=b"Hello, World!",
        mtime_ns=1_704_110_400_000_000_000,
        size=13,
    )


@pytest.fixture
def mock_fs(sample_snapshot):
    """A FileSystem whose stat matches sample_snapshot until told otherwise."""
    fs = MagicMock(spec=FileSystem)
    fs.stat.return_value = FileStat(
        mtime_ns=sample_snapshot.mtime_ns, size=sample_snapshot.size
    )
    fs.read_bytes.return_value = sample_snapshot.content
    return fs


@pytest.fixture
def service(mock_fs, clock):
    """A tracker wired to mock_fs and a stepping clock."""
    return FileTrackerService(
        TrackerConfig(),
        evaluator=FreshnessEvaluator(fs=mock_fs),
        clock=clock,
    )


@pytest.fixture
def text_file(tmp_path):
    path = tmp_path / "notes.txt"
    path.write_text("Hello, World!")
    return path
