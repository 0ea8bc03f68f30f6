"""
Base exception classes and error handling utilities providing the exception
hierarchy, error formatting, and integration with Flask error handlers.

Key Features:
- Hierarchical exception classes for consistent error categorization
- Response envelope formatting shared with the validation middleware
- Flask error handler registration
- Structured logging with structlog and Prometheus error counting
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional
from uuid import uuid4

import structlog
from flask import Flask, has_request_context, request
from werkzeug.exceptions import HTTPException

from request_validator.monitoring.logging import get_correlation_id
from request_validator.monitoring.metrics import error_counter
from request_validator.utils.response import build_envelope, make_envelope_response

# Get structured logger
logger = structlog.get_logger(__name__)


class ErrorCategory(Enum):
    """Error categories for hierarchical classification."""

    VALIDATION = "validation"
    MALFORMED_REQUEST = "malformed_request"
    UNKNOWN = "unknown"


class ErrorSeverity(Enum):
    """Error severity levels for monitoring and alerting."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ConfigurationError(Exception):
    """Raised when settings or compiled validation patterns are unusable at startup."""
    pass


class BaseApplicationError(Exception):
    """
    Base exception class for all application errors.

    Attributes:
        message: Client-facing message placed in the response envelope
        code: Application-specific error code
        category: Error category for classification
        severity: Error severity level
        details: Additional context, logged but never returned to the client
        correlation_id: Unique identifier for error tracking
        http_status: Status code used by the registered error handler
    """

    def __init__(
        self,
        message: str,
        code: str = None,
        category: ErrorCategory = ErrorCategory.UNKNOWN,
        severity: ErrorSeverity = ErrorSeverity.MEDIUM,
        details: Optional[Dict[str, Any]] = None,
        correlation_id: Optional[str] = None,
        http_status: int = 500
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.category = category
        self.severity = severity
        self.details = details or {}
        self.correlation_id = correlation_id or get_correlation_id() or str(uuid4())
        self.http_status = http_status
        self.timestamp = datetime.now(timezone.utc).isoformat()

        if has_request_context():
            self.endpoint = request.endpoint
            self.method = request.method
            self.path = request.path
        else:
            self.endpoint = self.method = self.path = None

        self._log_error()
        self._update_metrics()

    def _log_error(self) -> None:
        log_data = {
            'error_code': self.code,
            'error_category': self.category.value,
            'error_severity': self.severity.value,
            'correlation_id': self.correlation_id,
            'http_status': self.http_status,
            'endpoint': self.endpoint,
            'method': self.method,
            'path': self.path,
            'details': self.details,
        }

        if self.severity in (ErrorSeverity.HIGH, ErrorSeverity.CRITICAL):
            logger.error(self.message, **log_data)
        elif self.severity == ErrorSeverity.MEDIUM:
            logger.warning(self.message, **log_data)
        else:
            logger.info(self.message, **log_data)

    def _update_metrics(self) -> None:
        error_counter.labels(
            error_type=self.code,
            error_category=self.category.value,
            endpoint=self.endpoint or 'unknown'
        ).inc()

    def to_dict(self) -> Dict[str, Any]:
        """Convert the exception to the response envelope."""
        return build_envelope(self.http_status, self.message)


class RequestValidationError(BaseApplicationError):
    """
    One or more format checks failed for a request body.

    The individual messages are kept in ``errors`` for server-side diagnostics;
    the client only ever sees the generic ``message``.
    """

    def __init__(
        self,
        errors: List[str],
        message: str = "invalid request",
        **kwargs
    ):
        self.errors = list(errors)
        super().__init__(
            message=message,
            category=ErrorCategory.VALIDATION,
            severity=ErrorSeverity.LOW,
            http_status=422,
            details={'validation_errors': self.errors},
            **kwargs
        )


class MalformedRequestError(BaseApplicationError):
    """The request body could not be decoded as JSON."""

    def __init__(self, message: str = "malformed JSON body", reason: Optional[str] = None, **kwargs):
        super().__init__(
            message=message,
            category=ErrorCategory.MALFORMED_REQUEST,
            severity=ErrorSeverity.LOW,
            http_status=400,
            details={'reason': reason} if reason else None,
            **kwargs
        )


def format_error_response(error: Exception) -> Dict[str, Any]:
    """
    Format any exception as a response envelope.

    Unexpected exceptions are logged and counted, and produce a generic 500
    envelope so internal details never reach the client.
    """
    if isinstance(error, BaseApplicationError):
        return error.to_dict()

    if isinstance(error, HTTPException):
        return build_envelope(error.code or 500, error.name)

    correlation_id = get_correlation_id() or str(uuid4())
    logger.error(
        str(error),
        error_code=error.__class__.__name__,
        error_category=ErrorCategory.UNKNOWN.value,
        correlation_id=correlation_id,
        exc_info=error
    )
    error_counter.labels(
        error_type=error.__class__.__name__,
        error_category=ErrorCategory.UNKNOWN.value,
        endpoint=request.endpoint if has_request_context() and request.endpoint else 'unknown'
    ).inc()
    return build_envelope(500, "internal server error")


def register_error_handlers(app: Flask) -> None:
    """
    Register Flask error handlers mapping exceptions to response envelopes.

    Args:
        app: Flask application instance
    """

    @app.errorhandler(BaseApplicationError)
    def handle_application_error(error: BaseApplicationError):
        response = make_envelope_response(error.http_status, error.message)
        response.headers['X-Correlation-ID'] = error.correlation_id
        return response

    @app.errorhandler(HTTPException)
    def handle_http_exception(error: HTTPException):
        return make_envelope_response(error.code or 500, error.name)

    @app.errorhandler(Exception)
    def handle_unexpected_error(error: Exception):
        envelope = format_error_response(error)
        return make_envelope_response(envelope['StatusCode'], envelope['Message'])
