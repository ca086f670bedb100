"""
The sampling loop.

PollLoop drives one cycle at a time: take a timestamp, fetch a snapshot,
aggregate it, report the sample, then sleep for the configured interval.
The interval covers only the sleep, so each cycle really takes
`interval + query latency`.

Fetch failures are fatal: the loop stops and the error propagates to the
caller without a retry.
"""

import logging
import threading
import time
from typing import Callable, Optional

from ..aggregation import SampleAggregator
from ..collectors.base import AbstractSnapshotSource
from ..reporting import SampleReporter
from ..validation import FetchError
from .shared_state import LoopState, ProbeState

logger = logging.getLogger(__name__)


class PollLoop:
    """
    RUNNING/STOPPED state machine around the sampling cycle.

    `clock` and `sleep` are injectable so the loop can be driven without
    wall-clock time. The default sleep waits on the shutdown event, so a
    stop request ends the wait early.
    """

    def __init__(
        self,
        source: AbstractSnapshotSource,
        aggregator: SampleAggregator,
        reporter: SampleReporter,
        interval_seconds: int,
        iterations: int = 0,
        clock: Callable[[], float] = time.time,
        sleep: Optional[Callable[[float], None]] = None,
        state: Optional[ProbeState] = None,
    ):
        self.source = source
        self.aggregator = aggregator
        self.reporter = reporter
        self.interval_seconds = interval_seconds
        self.iterations = iterations
        self.clock = clock
        self.state = state or ProbeState()
        self._sleep = sleep or self._wait_for_shutdown

    @property
    def status(self) -> LoopState:
        return self.state.status

    def request_stop(self) -> None:
        """Ask the loop to stop at the next check point."""
        logger.info("Stop requested for poll loop")
        self.state.shutdown_requested.set()

    def _wait_for_shutdown(self, seconds: float) -> None:
        self.state.shutdown_requested.wait(min(seconds, threading.TIMEOUT_MAX))

    def _should_stop(self) -> bool:
        if self.state.shutdown_requested.is_set():
            logger.info("Shutdown requested, leaving poll loop")
            return True
        if self.iterations and self.state.cycles_completed >= self.iterations:
            logger.info(f"Completed {self.state.cycles_completed} iterations")
            return True
        return False

    def run_cycle(self) -> None:
        """Run a single fetch/aggregate/report cycle without sleeping."""
        timestamp = int(self.clock())
        snapshot = self.source.fetch_snapshot()
        result = self.aggregator.process_snapshot(
            snapshot, self.interval_seconds, timestamp
        )
        self.reporter.report(result)
        self.state.cycles_completed += 1

    def run(self) -> int:
        """
        Run until stopped, the iteration limit is reached or a fetch fails.

        Returns:
            Number of cycles completed

        Raises:
            FetchError: If a snapshot cannot be retrieved
        """
        self.state.status = LoopState.RUNNING
        logger.info(
            f"Poll loop started: interval {self.interval_seconds}s, "
            f"iterations {self.iterations or 'unlimited'}"
        )
        try:
            while not self._should_stop():
                self.run_cycle()
                if self._should_stop():
                    break
                self._sleep(self.interval_seconds)
        except FetchError as e:
            logger.critical(
                f"Snapshot fetch failed after {self.state.cycles_completed} cycles: {e}"
            )
            raise
        finally:
            self.state.status = LoopState.STOPPED
        return self.state.cycles_completed
