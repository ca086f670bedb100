"""
Data models for the rwstat probe.

Configuration Models:
- Probe loop, connection and logging settings
- Counter classification rules

Sample Models:
- Counter snapshots and categories
- Per-interval sample results
"""

# Configuration models
from .config import (
    AppConfig,
    ConnectionConfig,
    CounterRule,
    LoggingConfig,
    ProbeConfig,
)

# Sample models
from .sample import CounterCategory, SampleResult, Snapshot

__all__ = [
    # Configuration
    "AppConfig",
    "ConnectionConfig",
    "CounterRule",
    "LoggingConfig",
    "ProbeConfig",
    # Samples
    "CounterCategory",
    "SampleResult",
    "Snapshot",
]
