"""
Pytest configuration and shared fixtures for the rwstat test suite.

This module provides common fixtures, test utilities, and configuration
for all test modules in the rwstat project.
"""

import shutil
import sys
import tempfile
from pathlib import Path
from typing import Dict, List

import pytest

# Add src to Python path for testing
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from rwstat.collectors.base import AbstractSnapshotSource  # noqa: E402
from rwstat.validation import FetchError  # noqa: E402


# ============================================================================
# Test Configuration
# ============================================================================


def pytest_configure(config):
    """Configure pytest with custom markers and settings."""
    config.addinivalue_line("markers", "unit: mark test as a unit test")
    config.addinivalue_line("markers", "integration: mark test as an integration test")
    config.addinivalue_line("markers", "e2e: mark test as an end-to-end test")


# ============================================================================
# Core Fixtures
# ============================================================================


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    temp_path = tempfile.mkdtemp()
    yield Path(temp_path)
    shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def sample_config_data():
    """Sample main configuration data for testing."""
    return {
        "probe": {
            "interval_seconds": 10,
            "iterations": 3,
            "debug": False,
        },
        "connection": {
            "host": "db.example.com",
            "port": 3307,
            "user": "monitor",
            "password": "secret",
            "connect_timeout": 5,
            "status_pattern": "Com_%",
        },
        "logging": {
            "level": "INFO",
        },
    }


@pytest.fixture
def sample_rules_config():
    """Sample classification rules for testing."""
    return [
        {
            "category": "write",
            "match_type": "contains",
            "patterns": ["_insert", "_update", "_delete"],
        },
        {
            "category": "read",
            "match_type": "regex",
            "patterns": ["^Com_select$", "_select$"],
            "comment": "selects only",
        },
    ]


# ============================================================================
# Fake Snapshot Source
# ============================================================================


class FakeSnapshotSource(AbstractSnapshotSource):
    """
    Snapshot source that replays a fixed list of snapshots.

    Raises FetchError once the list is exhausted, or at `fail_at` (0-based).
    """

    def __init__(self, snapshots: List[Dict[str, int]], fail_at: int = -1):
        self.snapshots = list(snapshots)
        self.fail_at = fail_at
        self.fetch_count = 0
        self.connected = False
        self.connect_calls = 0
        self.close_calls = 0

    def connect(self) -> None:
        self.connect_calls += 1
        self.connected = True

    def fetch_snapshot(self) -> Dict[str, int]:
        index = self.fetch_count
        self.fetch_count += 1
        if index == self.fail_at or index >= len(self.snapshots):
            raise FetchError(f"no snapshot available at fetch {index}")
        return dict(self.snapshots[index])

    def close(self) -> None:
        self.close_calls += 1
        self.connected = False


@pytest.fixture
def fake_source_factory():
    """Provide the FakeSnapshotSource class."""
    return FakeSnapshotSource


class FakeClock:
    """Deterministic clock; `sleep` advances time instead of blocking."""

    def __init__(self, start: float = 1253902509.0):
        self.now = start
        self.sleeps: List[float] = []

    def time(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


@pytest.fixture
def fake_clock():
    """Provide a FakeClock starting at 1253902509."""
    return FakeClock()


# ============================================================================
# Configuration Fixtures
# ============================================================================


@pytest.fixture
def config_files(temp_dir, sample_config_data, sample_rules_config):
    """Create temporary configuration files for testing."""
    import toml

    config_file = temp_dir / "config.toml"
    config_data = dict(sample_config_data)
    config_data["paths"] = {"rules_config": "rules.toml"}
    with open(config_file, "w") as f:
        toml.dump(config_data, f)

    rules_file = temp_dir / "rules.toml"
    with open(rules_file, "w") as f:
        toml.dump({"rules": sample_rules_config}, f)

    return {
        "config": config_file,
        "rules": rules_file,
        "dir": temp_dir,
    }


@pytest.fixture(autouse=True)
def clear_config_after_test():
    """Automatically reset configuration state after each test."""
    yield

    from rwstat.config import reset_config_path

    reset_config_path()
