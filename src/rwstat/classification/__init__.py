"""
Status counter classification for the rwstat package.

This module maps counter names to read/write categories based on
substring or regular-expression rules.
"""

from .classifier import (
    DEFAULT_RULES,
    READ_MARKERS,
    WRITE_MARKERS,
    CounterClassifier,
    classify_counter,
)

__all__ = [
    "DEFAULT_RULES",
    "READ_MARKERS",
    "WRITE_MARKERS",
    "CounterClassifier",
    "classify_counter",
]
