"""Latency tracking for SIM card operations.

SIM phonebooks are slow, and capacity discovery may issue dozens of writes.
Each tracked operation is compared against a budget and a warning is logged
when the budget is exceeded.

Budget tiers:
- INSTANT: <100ms (reads, cache lookups)
- FAST: <500ms (single SIM writes)
- BACKGROUND: no limit (capacity discovery)
"""

import logging
import time
from collections import deque
from contextlib import contextmanager
from dataclasses import asdict, dataclass, field
from enum import Enum

logger = logging.getLogger(__name__)


class BudgetTier(Enum):
    """Performance budget tiers with target latencies (ms)."""

    INSTANT = 100
    FAST = 500
    BACKGROUND = 0  # No limit


# Operation -> (tier, budget_ms) mapping
OPERATION_BUDGETS: dict[str, tuple[BudgetTier, int]] = {
    # Store reads and cache access (INSTANT)
    "sim_query": (BudgetTier.INSTANT, 100),
    "cache_read": (BudgetTier.INSTANT, 50),
    "cache_write": (BudgetTier.INSTANT, 100),
    # Store writes (FAST)
    "sim_insert": (BudgetTier.FAST, 500),
    "sim_delete": (BudgetTier.FAST, 500),
    # Background (no limit)
    "capacity_discovery": (BudgetTier.BACKGROUND, 0),
}

LATENCY_THRESHOLDS = {
    op: budget_ms for op, (_, budget_ms) in OPERATION_BUDGETS.items() if budget_ms > 0
}


@dataclass
class LatencyRecord:
    """Single operation latency measurement."""

    operation: str
    elapsed_ms: float
    timestamp: float
    threshold_ms: float | None = None
    exceeded: bool = False
    metadata: dict = field(default_factory=dict)

    def to_dict(self) -> dict:
        """Convert to dict for JSON serialization."""
        return asdict(self)


class LatencyTracker:
    """Track operation latencies and flag budget overruns."""

    def __init__(self, maxlen: int = 1000):
        self._records: deque[LatencyRecord] = deque(maxlen=maxlen)
        self._thresholds = LATENCY_THRESHOLDS.copy()

    @contextmanager
    def track(self, operation: str, threshold_ms: float | None = None, **metadata):
        """Context manager for tracking operation latency.

        Usage:
            with tracker.track("sim_insert", name_length=14):
                store.insert(values)
        """
        threshold = threshold_ms or self._thresholds.get(operation)
        start = time.perf_counter()

        try:
            yield
        finally:
            elapsed_ms = (time.perf_counter() - start) * 1000
            exceeded = bool(threshold) and elapsed_ms > threshold

            self._records.append(
                LatencyRecord(
                    operation=operation,
                    elapsed_ms=elapsed_ms,
                    timestamp=time.time(),
                    threshold_ms=threshold,
                    exceeded=exceeded,
                    metadata=metadata,
                )
            )

            if exceeded:
                logger.warning(
                    "[LATENCY] %s took %.1fms (threshold: %sms). Metadata: %s",
                    operation,
                    elapsed_ms,
                    threshold,
                    metadata,
                )
            else:
                logger.debug("[LATENCY] %s took %.1fms (ok)", operation, elapsed_ms)

    def get_records(self, operation: str | None = None) -> list[LatencyRecord]:
        """Get recorded latencies, optionally for one operation only."""
        if operation is None:
            return list(self._records)
        return [r for r in self._records if r.operation == operation]

    def get_slow_operations(self) -> list[LatencyRecord]:
        """Get operations that exceeded thresholds."""
        return [r for r in self._records if r.exceeded]

    def summary(self) -> dict:
        """Get summary statistics."""
        if not self._records:
            return {}

        slow = self.get_slow_operations()
        return {
            "total_operations": len(self._records),
            "slow_operations": len(slow),
            "average_ms": sum(r.elapsed_ms for r in self._records) / len(self._records),
            "slow_operations_detail": [r.to_dict() for r in slow[:10]],
        }

    def reset(self) -> None:
        """Drop all records."""
        self._records.clear()


# Global tracker instance
_tracker = LatencyTracker()


def get_tracker() -> LatencyTracker:
    """Get global latency tracker."""
    return _tracker


@contextmanager
def track_latency(operation: str, **metadata):
    """Convenience function for tracking latency on the global tracker.

    Usage:
        with track_latency("sim_query"):
            rows = store.query(columns)
    """
    with _tracker.track(operation, **metadata):
        yield
