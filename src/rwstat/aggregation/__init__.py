"""
Snapshot aggregation for the rwstat package.
"""

from .aggregator import SampleAggregator, safe_ratio

__all__ = [
    "SampleAggregator",
    "safe_ratio",
]
