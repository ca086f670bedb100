"""
Configuration management for the rwstat package.

This module provides a clean interface for loading, validating, and accessing
configuration data from TOML files with singleton pattern management.
"""

# Main configuration interface
from .manager import (
    clear_config_cache,
    get_config,
    get_config_info,
    is_config_loaded,
    load_config,
    reset_config_path,
    set_config_path,
)

# For advanced usage - direct access to loaders and validators
from .loader import (
    get_rules_path,
    load_main_config,
    load_rules_config,
    load_toml_file,
)
from .validators import (
    validate_connection_config,
    validate_logging_config,
    validate_probe_config,
    validate_rules_config,
)

__all__ = [
    # Main interface
    "get_config",
    "set_config_path",
    "reset_config_path",
    "clear_config_cache",
    "is_config_loaded",
    "get_config_info",
    "load_config",
    # Advanced interface
    "load_toml_file",
    "load_main_config",
    "load_rules_config",
    "get_rules_path",
    "validate_probe_config",
    "validate_connection_config",
    "validate_logging_config",
    "validate_rules_config",
]
