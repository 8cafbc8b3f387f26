"""Tests for model invariants: immutability, validation and stats shape."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest
from pydantic import ValidationError

from filetrack_core.freshness.models import FreshnessResult, Snapshot
from filetrack_core.interfaces.filesystem import FileStat
from filetrack_core.tracking.models import FileEntry, FileStatus, TrackerStats

T0 = datetime(2024, 1, 1, 12, 0, tzinfo=UTC)


# ── Snapshot ─────────────────────────────────────────────────────────


class TestSnapshot:
    def test_frozen(self, sample_snapshot):
        with pytest.raises(ValidationError):
            sample_snapshot.size = 99

    def test_negative_size_rejected(self):
        with pytest.raises(ValidationError):
            Snapshot(mtime_ns=0, size=-1)

    def test_mtime_property_is_utc(self):
        snap = Snapshot(mtime_ns=1_704_110_400_123_456_789, size=0)
        assert snap.mtime == datetime(2024, 1, 1, 12, 0, 0, 123456, tzinfo=UTC)
        # The nanosecond value itself is untouched
        assert snap.mtime_ns == 1_704_110_400_123_456_789

    def test_equal_snapshots_compare_equal(self):
        assert Snapshot(content=b"x", mtime_ns=1, size=1) == Snapshot(content=b"x", mtime_ns=1, size=1)


# ── FileEntry ────────────────────────────────────────────────────────


class TestFileEntry:
    def test_frozen(self, sample_snapshot):
        entry = FileEntry(
            path="/work/a.txt", snapshot=sample_snapshot, first_read_at=T0, last_updated_at=T0
        )
        with pytest.raises(ValidationError):
            entry.status = FileStatus.stale

    def test_last_updated_before_first_read_rejected(self, sample_snapshot):
        with pytest.raises(ValidationError):
            FileEntry(
                path="/work/a.txt",
                snapshot=sample_snapshot,
                first_read_at=T0,
                last_updated_at=T0 - timedelta(seconds=1),
            )

    def test_empty_path_rejected(self, sample_snapshot):
        with pytest.raises(ValidationError):
            FileEntry(path="", snapshot=sample_snapshot, first_read_at=T0, last_updated_at=T0)

    def test_registry_hands_out_immutable_entries(self, service, sample_snapshot):
        entry = service.register("/work/a.txt", sample_snapshot)
        service.update_state("/work/a.txt", Snapshot(mtime_ns=1, size=13))

        # The earlier object is a snapshot in time, not a live view
        assert entry.status == FileStatus.current
        assert service.get_file_status("/work/a.txt").status == FileStatus.stale


# ── FileStatus / TrackerStats ────────────────────────────────────────


class TestStatus:
    def test_members(self):
        assert {s.value for s in FileStatus} == {"not_read", "current", "stale", "error"}

    def test_stats_has_one_counter_per_status(self):
        stats = TrackerStats()
        for status in FileStatus:
            assert stats.count(status) == 0
        assert stats.total == 0

    def test_stats_total(self):
        assert TrackerStats(current=2, stale=1, error=3).total == 6


# ── small value types ────────────────────────────────────────────────


class TestValueTypes:
    def test_file_stat_rejects_negative_size(self):
        with pytest.raises(ValidationError):
            FileStat(mtime_ns=0, size=-5)

    def test_freshness_result_defaults(self):
        assert FreshnessResult(is_fresh=True).reason is None
