"""
Counter snapshot sources for the rwstat package.
"""

from .base import AbstractSnapshotSource
from .mysql_status import MySQLStatusSource, parse_counter_value

__all__ = [
    "AbstractSnapshotSource",
    "MySQLStatusSource",
    "parse_counter_value",
]
