"""
Request body validation core.

Public entry points:

    >>> from request_validator.validation import validate_payload
    >>> validate_payload({"user": {"email": "bad-email", "mobile": "123"}})
    ['invalid email format', 'invalid mobile number format']
"""

from request_validator.validation.dispatcher import (
    VALIDATOR_REGISTRY,
    FieldRule,
    dispatch_field,
    find_rule,
)
from request_validator.validation.engine import (
    PayloadValidator,
    ValidationIssue,
    collect_issues,
    default_validator,
    validate_payload,
)
from request_validator.validation.formats import (
    ValidationResult,
    validate_email_format,
    validate_identifier,
    validate_mobile_number,
    validate_otp,
    validate_pan,
)
from request_validator.validation.general import general_format_error, is_general_format_valid
from request_validator.validation.values import JSONKind, json_kind, render_value

__all__ = [
    'VALIDATOR_REGISTRY',
    'FieldRule',
    'dispatch_field',
    'find_rule',
    'PayloadValidator',
    'ValidationIssue',
    'collect_issues',
    'default_validator',
    'validate_payload',
    'ValidationResult',
    'validate_email_format',
    'validate_identifier',
    'validate_mobile_number',
    'validate_otp',
    'validate_pan',
    'general_format_error',
    'is_general_format_valid',
    'JSONKind',
    'json_kind',
    'render_value',
]
