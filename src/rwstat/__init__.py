"""
rwstat: MySQL read/write ratio probe.

This package samples a MySQL server's cumulative statement counters at a
fixed interval and prints, vmstat-style, the reads and writes of each
interval, their running totals and the read/write ratios.

The package is organized into specialized modules:
- config: Configuration management and validation
- models: Data structures and type definitions
- validation: Input validation and error handling
- classification: Read/write counter classification rules
- aggregation: Snapshot diffing and running totals
- reporting: Output line formatting
- collectors: Snapshot sources (MySQL SHOW GLOBAL STATUS)
- orchestration: Poll loop and signal handling
- cli: Command-line interface

Usage:
    From command line:
        rwstat -H db.example.com -u monitor -p -i 10

    Programmatically:
        from rwstat import SampleAggregator, format_sample
        aggregator = SampleAggregator()
        result = aggregator.process_snapshot({"Com_select": 10}, 10, 1253902509)
        print(format_sample(result), end="")
"""

# Main interfaces
from .config import get_config, clear_config_cache, set_config_path
from .cli import main_cli, run_probe

# Core components
from .aggregation import SampleAggregator
from .classification import CounterClassifier, classify_counter
from .collectors import AbstractSnapshotSource, MySQLStatusSource
from .orchestration import LoopState, PollLoop, ProbeState
from .reporting import SampleReporter, format_sample

# Model classes for external use
from .models import (
    AppConfig,
    ConnectionConfig,
    CounterCategory,
    CounterRule,
    ProbeConfig,
    SampleResult,
)

# Errors
from .validation import (
    FetchError,
    ProbeConnectionError,
    ProbeError,
    ValidationError,
)

__version__ = "1.0.0"

__all__ = [
    # Main interfaces
    "get_config",
    "clear_config_cache",
    "set_config_path",
    "main_cli",
    "run_probe",
    # Core components
    "SampleAggregator",
    "CounterClassifier",
    "classify_counter",
    "AbstractSnapshotSource",
    "MySQLStatusSource",
    "LoopState",
    "PollLoop",
    "ProbeState",
    "SampleReporter",
    "format_sample",
    # Models
    "AppConfig",
    "ConnectionConfig",
    "CounterCategory",
    "CounterRule",
    "ProbeConfig",
    "SampleResult",
    # Errors
    "FetchError",
    "ProbeConnectionError",
    "ProbeError",
    "ValidationError",
]
