"""Utility modules for simbook."""

from simbook.utils.atomic_write import atomic_write_text
from simbook.utils.latency_tracker import (
    BudgetTier,
    LatencyRecord,
    LatencyTracker,
    get_tracker,
    track_latency,
)

__all__ = [
    "atomic_write_text",
    "BudgetTier",
    "LatencyRecord",
    "LatencyTracker",
    "get_tracker",
    "track_latency",
]
