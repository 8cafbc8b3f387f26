"""Freshness evaluation — snapshot capture and staleness comparison."""

from filetrack_core.freshness.evaluator import FreshnessEvaluator, compute_hash
from filetrack_core.freshness.models import FileAccessError, FreshnessResult, Snapshot

__all__ = [
    "FileAccessError",
    "FreshnessEvaluator",
    "FreshnessResult",
    "Snapshot",
    "compute_hash",
]
