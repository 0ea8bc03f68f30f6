"""
Request body validation service.

A Flask middleware that walks decoded JSON request bodies and applies
field-name keyed format rules (OTP, mobile number, PAN, email, identifiers)
plus a generic allowed-character check before a request reaches its view.
"""

__version__ = "1.0.0"
__title__ = "request-validator"

from request_validator.middleware import RequestValidationMiddleware, validate_request_body
from request_validator.validation import validate_payload

__all__ = [
    '__version__',
    'RequestValidationMiddleware',
    'validate_request_body',
    'validate_payload',
]
