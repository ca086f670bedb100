"""
Configuration data models.

This module contains the configuration structures for the probe loop,
the database connection, logging and the counter classification rules.
"""

import re
from dataclasses import dataclass, field
from typing import List, Optional


# Upper bound for the sleep between samples (one day).
MAX_INTERVAL_SECONDS = 86400


@dataclass
class ProbeConfig:
    """
    Configuration for the sampling loop, loaded from the `[probe]` table.
    """

    # Seconds to sleep between two samples.
    interval_seconds: int = 300
    # Number of samples to take; 0 runs until the process is terminated.
    iterations: int = 0
    # Emit per-counter trace lines on stderr.
    debug: bool = False


@dataclass
class ConnectionConfig:
    """
    Connection parameters for the MySQL server, loaded from `[connection]`.
    """

    host: str = "localhost"
    port: int = 3306
    user: str = ""
    password: str = ""
    # A unix socket path takes precedence over host/port when set.
    unix_socket: str = ""
    connect_timeout: int = 10
    # LIKE pattern passed to SHOW GLOBAL STATUS.
    status_pattern: str = "Com_%"

    def to_connect_kwargs(self) -> dict:
        """Build keyword arguments for ``mysql.connector.connect``."""
        kwargs = {
            "user": self.user,
            "password": self.password,
            "connection_timeout": self.connect_timeout,
        }
        if self.unix_socket:
            kwargs["unix_socket"] = self.unix_socket
        else:
            kwargs["host"] = self.host
            kwargs["port"] = self.port
        return kwargs

    def describe(self) -> str:
        """Human-readable endpoint, without credentials."""
        if self.unix_socket:
            return f"{self.user or '<default>'}@{self.unix_socket}"
        return f"{self.user or '<default>'}@{self.host}:{self.port}"


@dataclass
class LoggingConfig:
    """
    Logging settings, loaded from the `[logging]` table.
    """

    level: str = "WARNING"


@dataclass
class CounterRule:
    """
    A classification rule, loaded from `rules.toml`.
    """

    # Category the rule contributes to ('read' or 'write').
    category: str
    # The type of match to perform ('contains' or 'regex').
    match_type: str
    # Substrings or regular expressions; any match is enough.
    patterns: List[str]
    # Optional comment describing the rule.
    comment: str = ""
    # Compiled form of `patterns` for regex rules.
    compiled: Optional[List[re.Pattern]] = field(
        default=None, repr=False, compare=False
    )


@dataclass
class AppConfig:
    """
    The root configuration object that aggregates all loaded settings.
    """

    probe: ProbeConfig = field(default_factory=ProbeConfig)
    connection: ConnectionConfig = field(default_factory=ConnectionConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    # Classification rules; an empty list means the built-in defaults.
    rules: List[CounterRule] = field(default_factory=list)
