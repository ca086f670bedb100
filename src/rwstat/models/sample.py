"""
Sample data models.

This module defines the values that flow through one sampling cycle:
the raw counter snapshot, the read/write category of a counter and the
per-interval result handed to the reporter.
"""

from dataclasses import dataclass
from enum import Flag
from typing import Dict

# Counter name -> cumulative count, as returned by SHOW GLOBAL STATUS.
Snapshot = Dict[str, int]


class CounterCategory(Flag):
    """
    Categories a status counter contributes to.

    Categories are independent flags: a counter such as ``Com_insert_select``
    is both a read and a write and is classified as ``BOTH``.
    """

    NONE = 0
    READ = 1
    WRITE = 2
    BOTH = READ | WRITE


@dataclass(frozen=True)
class SampleResult:
    """
    Result of processing one snapshot.

    Counts are integers and may be negative after a server restart resets
    its counters. Ratios are floats.
    """

    # Epoch seconds at which the snapshot was requested.
    timestamp: int
    # Configured sleep between samples, in seconds.
    interval_seconds: int
    total_reads: int
    delta_reads: int
    total_writes: int
    delta_writes: int
    # delta_reads / delta_writes, with a zero denominator replaced by 1.
    delta_ratio: float
    # total_reads / total_writes, with a zero denominator replaced by 1.
    total_ratio: float
