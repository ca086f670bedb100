"""
Configuration validation utilities.

This module turns raw TOML tables into validated configuration objects.
Every failure is raised as ValidationError naming the offending field.
"""

import logging
from typing import Any, Dict, List

from ..models.config import (
    ConnectionConfig,
    CounterRule,
    LoggingConfig,
    MAX_INTERVAL_SECONDS,
    ProbeConfig,
)
from ..validation import (
    ValidationError,
    validate_boolean,
    validate_enum_choice,
    validate_pattern_list,
    validate_positive_integer,
    validate_regex_pattern,
    validate_string,
)

logger = logging.getLogger(__name__)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def require_table(data: Any, field_name: str) -> Dict[str, Any]:
    """Ensure a TOML value is a table before reading keys from it."""
    if not isinstance(data, dict):
        raise ValidationError(
            f"{field_name} must be a table, got {type(data).__name__}",
            field_name=field_name,
            value=data,
        )
    return data


def validate_probe_config(probe_data: Dict[str, Any]) -> ProbeConfig:
    """
    Validate the [probe] table.

    Raises:
        ValidationError: If validation fails
    """
    defaults = ProbeConfig()
    probe_data = require_table(probe_data, "probe")
    interval_seconds = validate_positive_integer(
        probe_data.get("interval_seconds", defaults.interval_seconds),
        min_value=1,
        max_value=MAX_INTERVAL_SECONDS,
        field_name="probe.interval_seconds",
    )
    iterations = validate_positive_integer(
        probe_data.get("iterations", defaults.iterations),
        min_value=0,
        field_name="probe.iterations",
    )
    debug = validate_boolean(
        probe_data.get("debug", defaults.debug),
        field_name="probe.debug",
    )
    return ProbeConfig(
        interval_seconds=interval_seconds,
        iterations=iterations,
        debug=debug,
    )


def validate_connection_config(connection_data: Dict[str, Any]) -> ConnectionConfig:
    """
    Validate the [connection] table.

    Raises:
        ValidationError: If validation fails
    """
    defaults = ConnectionConfig()
    connection_data = require_table(connection_data, "connection")
    host = validate_string(
        connection_data.get("host", defaults.host),
        field_name="connection.host",
    )
    unix_socket = validate_string(
        connection_data.get("unix_socket", defaults.unix_socket),
        field_name="connection.unix_socket",
    )
    if not host and not unix_socket:
        raise ValidationError(
            "connection.host cannot be empty unless connection.unix_socket is set",
            field_name="connection.host",
            value=host,
        )

    port = validate_positive_integer(
        connection_data.get("port", defaults.port),
        min_value=1,
        max_value=65535,
        field_name="connection.port",
    )
    user = validate_string(
        connection_data.get("user", defaults.user),
        field_name="connection.user",
    )
    # Passwords are taken verbatim
    password = connection_data.get("password", defaults.password)
    if not isinstance(password, str):
        raise ValidationError(
            "connection.password must be a string",
            field_name="connection.password",
        )
    connect_timeout = validate_positive_integer(
        connection_data.get("connect_timeout", defaults.connect_timeout),
        min_value=1,
        max_value=3600,
        field_name="connection.connect_timeout",
    )
    status_pattern = validate_string(
        connection_data.get("status_pattern", defaults.status_pattern),
        field_name="connection.status_pattern",
        allow_empty=False,
    )
    return ConnectionConfig(
        host=host,
        port=port,
        user=user,
        password=password,
        unix_socket=unix_socket,
        connect_timeout=connect_timeout,
        status_pattern=status_pattern,
    )


def validate_logging_config(logging_data: Dict[str, Any]) -> LoggingConfig:
    """Validate the [logging] table."""
    logging_data = require_table(logging_data, "logging")
    level = validate_enum_choice(
        logging_data.get("level", LoggingConfig().level),
        valid_choices=LOG_LEVELS,
        field_name="logging.level",
    )
    return LoggingConfig(level=level)


def validate_rules_config(rules_data: List[Dict[str, Any]]) -> List[CounterRule]:
    """
    Validate and create CounterRule instances from raw configuration data.

    Args:
        rules_data: List of raw rule configurations from TOML

    Returns:
        List of validated CounterRule instances, in file order

    Raises:
        ValidationError: If validation fails
    """
    if not isinstance(rules_data, list):
        raise ValidationError(
            f"rules must be an array of tables, got {type(rules_data).__name__}",
            field_name="rules",
            value=rules_data,
        )

    rules = []

    for i, rule_data in enumerate(rules_data):
        rule_data = require_table(rule_data, f"rules[{i}]")
        category = validate_enum_choice(
            rule_data.get("category", ""),
            valid_choices=["read", "write"],
            field_name=f"rules[{i}].category",
        )
        match_type = validate_enum_choice(
            rule_data.get("match_type", "contains"),
            valid_choices=["contains", "regex"],
            field_name=f"rules[{i}].match_type",
        )

        patterns_data = rule_data.get("patterns")
        pattern_data = rule_data.get("pattern")
        if patterns_data is not None and pattern_data is not None:
            logger.warning(
                f"rules[{i}]: both 'pattern' and 'patterns' provided, using 'patterns'"
            )
        final_patterns = patterns_data if patterns_data is not None else pattern_data
        if final_patterns is None:
            raise ValidationError(
                f"rules[{i}]: must have either 'pattern' or 'patterns' field",
                field_name=f"rules[{i}].patterns",
            )
        patterns = validate_pattern_list(final_patterns, field_name=f"rules[{i}].patterns")

        compiled = None
        if match_type == "regex":
            compiled = [
                validate_regex_pattern(p, field_name=f"rules[{i}].patterns[{j}]")
                for j, p in enumerate(patterns)
            ]

        rules.append(
            CounterRule(
                category=category,
                match_type=match_type,
                patterns=patterns,
                comment=rule_data.get("comment", ""),
                compiled=compiled,
            )
        )

    if rules:
        categories = {rule.category for rule in rules}
        for missing in sorted({"read", "write"} - categories):
            logger.warning(f"No '{missing}' rules configured; {missing}s will always be 0")

    return rules
