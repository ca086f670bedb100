"""
Output formatting for the rwstat package.
"""

from .reporter import SampleReporter, format_sample

__all__ = [
    "SampleReporter",
    "format_sample",
]
