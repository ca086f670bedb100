"""
Snapshot aggregation.

SampleAggregator owns the previous snapshot and the running read/write
totals. Each call to `process_snapshot` diffs the new snapshot against the
previous one, accumulates the deltas, computes both ratios and replaces
the previous snapshot.

Counters missing from the previous snapshot are diffed against 0, so the
first cycle reports raw server totals as its deltas. Deltas are not clamped:
a server restart resets its counters and yields negative deltas and totals.
"""

import logging
from typing import Optional

from ..classification import CounterClassifier
from ..models.sample import CounterCategory, SampleResult, Snapshot

logger = logging.getLogger(__name__)

# Per-counter trace lines, enabled by the CLI's debug flag.
trace_logger = logging.getLogger("rwstat.trace")


def safe_ratio(numerator: int, denominator: int) -> float:
    """Divide, substituting 1 for a zero denominator."""
    return numerator / (denominator if denominator != 0 else 1)


class SampleAggregator:
    """
    Turns successive counter snapshots into per-interval samples.

    State is private to the instance and is mutated once per
    `process_snapshot` call. Not thread-safe; owned by a single loop.
    """

    def __init__(self, classifier: Optional[CounterClassifier] = None):
        self.classifier = classifier or CounterClassifier()
        self._previous: Snapshot = {}
        self._total_reads = 0
        self._total_writes = 0
        self._cycles = 0

    @property
    def total_reads(self) -> int:
        return self._total_reads

    @property
    def total_writes(self) -> int:
        return self._total_writes

    @property
    def cycles(self) -> int:
        """Number of snapshots processed so far."""
        return self._cycles

    @property
    def previous(self) -> Snapshot:
        """A copy of the last processed snapshot."""
        return dict(self._previous)

    @property
    def is_bootstrap(self) -> bool:
        """True until the first snapshot has been processed."""
        return self._cycles == 0

    def process_snapshot(
        self, current: Snapshot, interval_seconds: int, timestamp: int
    ) -> SampleResult:
        """
        Diff `current` against the previous snapshot and advance state.

        Args:
            current: Counter name -> cumulative value
            interval_seconds: Configured sampling interval, reported as-is
            timestamp: Epoch seconds at which the snapshot was requested

        Returns:
            SampleResult with deltas, running totals and ratios
        """
        delta_reads = 0
        delta_writes = 0
        trace = trace_logger.isEnabledFor(logging.DEBUG)

        for name, value in current.items():
            category = self.classifier.classify(name)
            if category == CounterCategory.NONE:
                continue

            previous_value = self._previous.get(name, 0)
            delta = value - previous_value

            if CounterCategory.WRITE in category:
                delta_writes += delta
                if trace:
                    trace_logger.debug(
                        f"WRITE {name}: current {value}, previous {previous_value}, delta {delta}"
                    )
            if CounterCategory.READ in category:
                delta_reads += delta
                if trace:
                    trace_logger.debug(
                        f"READ {name}: current {value}, previous {previous_value}, delta {delta}"
                    )

        self._total_reads += delta_reads
        self._total_writes += delta_writes
        if delta_reads < 0 or delta_writes < 0:
            logger.warning(
                f"Negative delta (reads {delta_reads}, writes {delta_writes}); "
                "server counters were probably reset"
            )

        self._previous = dict(current)
        self._cycles += 1

        return SampleResult(
            timestamp=timestamp,
            interval_seconds=interval_seconds,
            total_reads=self._total_reads,
            delta_reads=delta_reads,
            total_writes=self._total_writes,
            delta_writes=delta_writes,
            delta_ratio=safe_ratio(delta_reads, delta_writes),
            total_ratio=safe_ratio(self._total_reads, self._total_writes),
        )
