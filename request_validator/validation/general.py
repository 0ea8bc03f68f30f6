"""Generic allowed-character check applied to every scalar in a request body."""

from typing import Any, Optional

from request_validator.validation.formats import compile_pattern
from request_validator.validation.values import JSONKind, json_kind, render_value

# Space, @, /, =, ASCII letters and digits, dot, hyphen and underscore
GENERAL_VALUE_REGEX = compile_pattern('general', r'[ @/=a-zA-Z0-9.\-_]*')


def is_general_format_valid(value: Any) -> bool:
    """
    Return True when ``value`` passes the generic format check.

    Only strings are constrained. Numbers, booleans, null and containers always
    pass.
    """
    if json_kind(value) is JSONKind.STRING:
        return GENERAL_VALUE_REGEX.fullmatch(value) is not None
    return True


def general_format_error(value: Any) -> Optional[str]:
    """Return the error message for ``value``, or None when it is valid."""
    if is_general_format_valid(value):
        return None
    return f"Invalid format for value '{render_value(value)}'"
