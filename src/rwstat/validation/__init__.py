"""
Validation and error handling for the rwstat package.

This module provides input validation and the exception hierarchy with
consistent error reporting across the application.
"""

# Core exception classes and error handling
from .exceptions import (
    ErrorSeverity,
    FetchError,
    ProbeConnectionError,
    ProbeError,
    ValidationError,
    handle_cli_error,
    handle_config_error,
    handle_error,
)

# Validation functions
from .validators import (
    validate_boolean,
    validate_enum_choice,
    validate_pattern_list,
    validate_positive_integer,
    validate_regex_pattern,
    validate_string,
)

__all__ = [
    # Core functionality
    "ErrorSeverity",
    "FetchError",
    "ProbeConnectionError",
    "ProbeError",
    "ValidationError",
    "handle_cli_error",
    "handle_config_error",
    "handle_error",
    # Validators
    "validate_boolean",
    "validate_enum_choice",
    "validate_pattern_list",
    "validate_positive_integer",
    "validate_regex_pattern",
    "validate_string",
]
