"""
vmstat-style sample output.

One tab-separated line per sample, fields in fixed order.
"""

import logging
import sys
from typing import IO, Optional

from ..models.sample import SampleResult

logger = logging.getLogger(__name__)


def format_sample(result: SampleResult) -> str:
    """Render a SampleResult as a single newline-terminated output line.

    Examples:
        >>> format_sample(SampleResult(1253902509, 10, 59, 59, 17, 17, 59 / 17, 59 / 17))
        'Time: 1253902509\\tInterval: 10\\tR: 59\\tdR: 59\\tW: 17\\tdW: 17\\tdR/dW: 3.47\\tR/W: 3.47\\n'
    """
    return (
        f"Time: {result.timestamp}\t"
        f"Interval: {result.interval_seconds}\t"
        f"R: {result.total_reads}\t"
        f"dR: {result.delta_reads}\t"
        f"W: {result.total_writes}\t"
        f"dW: {result.delta_writes}\t"
        f"dR/dW: {result.delta_ratio:.2f}\t"
        f"R/W: {result.total_ratio:.2f}\n"
    )


class SampleReporter:
    """Writes formatted samples to a text stream, flushing after each line."""

    def __init__(self, stream: Optional[IO[str]] = None):
        # Resolved lazily so tests that capture sys.stdout see the output
        self._stream = stream
        self.lines_written = 0

    @property
    def stream(self) -> IO[str]:
        return self._stream if self._stream is not None else sys.stdout

    def report(self, result: SampleResult) -> str:
        line = format_sample(result)
        self.stream.write(line)
        self.stream.flush()
        self.lines_written += 1
        return line
