"""
Format validators for well-known request fields.

Each validator is a pure function taking the text form of a field value and
returning a ``ValidationResult``. All patterns are compiled once when this module
is imported and matched against the whole value, never searched for as a
substring. A pattern that fails to compile is a startup-time configuration
error.

Validators:
- OTP: exactly six ASCII digits
- Mobile: exactly ten ASCII digits
- PAN: five uppercase letters, four digits, one uppercase letter
- Email: ``local@domain.tld`` with a two-letter or longer alphabetic TLD
- Generic ID: ASCII letters, digits and ``=`` only (may be empty)
"""

import re
from typing import Any, List, Optional, Pattern

import structlog

from request_validator.utils.exceptions import ConfigurationError

# Get structured logger
logger = structlog.get_logger(__name__)


def compile_pattern(name: str, expression: str, flags: int = 0) -> Pattern:
    """
    Compile a validation pattern, converting compile failures to ``ConfigurationError``.

    Raises:
        ConfigurationError: If the expression is not a valid regular expression
    """
    try:
        return re.compile(expression, flags)
    except re.error as e:
        raise ConfigurationError(f"Invalid pattern for '{name}' validator: {e}") from e


OTP_REGEX = compile_pattern('otp', r'[0-9]{6}')
MOBILE_REGEX = compile_pattern('mobile', r'[0-9]{10}')
PAN_REGEX = compile_pattern('pan', r'[A-Z]{5}[0-9]{4}[A-Z]')
EMAIL_REGEX = compile_pattern('email', r'[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}')
ID_REGEX = compile_pattern('id', r'[a-zA-Z0-9=]*')

# Error messages keyed by validator name
OTP_ERROR = "invalid OTP format"
MOBILE_ERROR = "invalid mobile number format"
PAN_ERROR = "invalid PAN format"
EMAIL_ERROR = "invalid email format"
ID_ERROR = "invalid ID format, should be alphanumeric"


class ValidationResult:
    """
    Outcome of a single format check.

    ``errors`` holds human-readable messages; an empty list means the value
    passed.
    """

    def __init__(
        self,
        is_valid: bool,
        value: Any = None,
        errors: Optional[List[str]] = None,
        rule: Optional[str] = None
    ):
        self.is_valid = is_valid
        self.value = value
        self.errors = errors or []
        self.rule = rule

    def __bool__(self) -> bool:
        return self.is_valid

    def __repr__(self) -> str:
        return f"ValidationResult(is_valid={self.is_valid!r}, rule={self.rule!r}, errors={self.errors!r})"


def _match(rule: str, pattern: Pattern, message: str, value: str) -> ValidationResult:
    if isinstance(value, str) and pattern.fullmatch(value):
        return ValidationResult(True, value, [], rule)

    logger.debug("Format check failed", rule=rule, value_length=len(value) if isinstance(value, str) else None)
    return ValidationResult(False, value, [message], rule)


def validate_otp(value: str) -> ValidationResult:
    """Validate a one-time password: exactly six digits."""
    return _match('otp', OTP_REGEX, OTP_ERROR, value)


def validate_mobile_number(value: str) -> ValidationResult:
    """Validate a mobile number: exactly ten digits, no prefix or separators."""
    return _match('mobile', MOBILE_REGEX, MOBILE_ERROR, value)


def validate_pan(value: str) -> ValidationResult:
    """
    Validate a PAN (Permanent Account Number) tax identifier.

    The format is ``AAAAA9999A``: five uppercase letters, four digits and a
    trailing uppercase letter. Lowercase letters are rejected.
    """
    return _match('pan', PAN_REGEX, PAN_ERROR, value)


def validate_email_format(value: str) -> ValidationResult:
    return _match('email', EMAIL_REGEX, EMAIL_ERROR, value)


def validate_identifier(value: str) -> ValidationResult:
    """
    Validate an ID-like field.

    Letters, digits and ``=`` are allowed so base64-padded identifiers pass. The
    empty string is accepted.
    """
    return _match('id', ID_REGEX, ID_ERROR, value)
