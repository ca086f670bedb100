"""
Value validation functions.

Each validator returns the normalized value or raises ValidationError
naming the offending field.
"""

import re
from typing import Any, List, Optional

from .exceptions import ValidationError


def validate_positive_integer(
    value: Any,
    min_value: int = 1,
    max_value: Optional[int] = None,
    field_name: str = "value"
) -> int:
    """
    Validate that a value is an integer within bounds.

    Args:
        value: Value to validate
        min_value: Minimum allowed value (inclusive)
        max_value: Maximum allowed value (inclusive), None for no limit
        field_name: Name of the field being validated

    Returns:
        Validated integer value

    Raises:
        ValidationError: If validation fails
    """
    # bool is an int subclass; `interval = true` is a config mistake
    if isinstance(value, bool):
        raise ValidationError(
            f"{field_name} must be a valid integer, got {value}",
            field_name=field_name,
            value=value
        )
    if isinstance(value, float) and not value.is_integer():
        raise ValidationError(
            f"{field_name} must be a whole number, got {value}",
            field_name=field_name,
            value=value
        )
    try:
        int_value = int(value)
    except (ValueError, TypeError):
        raise ValidationError(
            f"{field_name} must be a valid integer, got {value}",
            field_name=field_name,
            value=value
        )
    if int_value < min_value:
        raise ValidationError(
            f"{field_name} must be >= {min_value}, got {int_value}",
            field_name=field_name,
            value=value
        )
    if max_value is not None and int_value > max_value:
        raise ValidationError(
            f"{field_name} must be <= {max_value}, got {int_value}",
            field_name=field_name,
            value=value
        )
    return int_value


def validate_boolean(value: Any, field_name: str = "value") -> bool:
    """Validate that a value is a TOML boolean."""
    if not isinstance(value, bool):
        raise ValidationError(
            f"{field_name} must be true or false, got {value!r}",
            field_name=field_name,
            value=value
        )
    return value


def validate_string(value: Any, field_name: str = "value", allow_empty: bool = True) -> str:
    """Validate that a value is a string, stripping surrounding whitespace."""
    if not isinstance(value, str):
        raise ValidationError(
            f"{field_name} must be a string, got {type(value).__name__}",
            field_name=field_name,
            value=value
        )
    stripped = value.strip()
    if not allow_empty and not stripped:
        raise ValidationError(
            f"{field_name} cannot be empty",
            field_name=field_name,
            value=value
        )
    return stripped


def validate_enum_choice(
    value: Any,
    valid_choices: List[str],
    field_name: str = "value",
    case_sensitive: bool = False
) -> str:
    """
    Validate that a value is one of a set of choices.

    Returns:
        The matching choice as spelled in `valid_choices`
    """
    if not isinstance(value, str):
        raise ValidationError(
            f"{field_name} must be one of {valid_choices}, got {value!r}",
            field_name=field_name,
            value=value
        )
    for choice in valid_choices:
        if (value == choice) if case_sensitive else (value.lower() == choice.lower()):
            return choice
    raise ValidationError(
        f"{field_name} must be one of {valid_choices}, got {value!r}",
        field_name=field_name,
        value=value
    )


def validate_regex_pattern(pattern: Any, field_name: str = "pattern") -> re.Pattern:
    """
    Validate and compile a regular expression.

    Returns:
        The compiled pattern
    """
    if not isinstance(pattern, str) or not pattern:
        raise ValidationError(
            f"{field_name} must be a non-empty string, got {pattern!r}",
            field_name=field_name,
            value=pattern
        )
    try:
        return re.compile(pattern)
    except re.error as e:
        raise ValidationError(
            f"{field_name} is not a valid regular expression: {e}",
            field_name=field_name,
            value=pattern
        )


def validate_pattern_list(value: Any, field_name: str = "patterns") -> List[str]:
    """Validate a non-empty list of non-empty strings; a single string is accepted."""
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, list) or not value:
        raise ValidationError(
            f"{field_name} must be a non-empty list of strings",
            field_name=field_name,
            value=value
        )
    for i, item in enumerate(value):
        if not isinstance(item, str) or not item:
            raise ValidationError(
                f"{field_name}[{i}] must be a non-empty string, got {item!r}",
                field_name=field_name,
                value=value
            )
    return list(value)
