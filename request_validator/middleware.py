"""
Flask request validation middleware.

Reads the request body once, keeps the raw bytes buffered for downstream
handlers, decodes it as JSON and runs the validation engine over it before the
view executes. Any failed check rejects the request with 422 and the generic
message ``invalid request``; the individual messages are written to the server
log only.

Usage:

    app = Flask(__name__)
    RequestValidationMiddleware(app)

or per view:

    @bp.route('/otp/verify', methods=['POST'])
    @validate_request_body
    def verify_otp():
        payload = g.json_data
        ...

After a successful check ``g.raw_body`` holds the body text and ``g.json_data``
the decoded tree. ``request.get_data()`` and ``request.get_json()`` keep
working in the view because the body stream is cached, not consumed.
"""

import json
from functools import wraps
from typing import Any, Callable, Optional

import structlog
from flask import Flask, current_app, g, request

from request_validator.config.settings import DEFAULT_EXEMPT_PATHS, DEFAULT_VALIDATED_METHODS
from request_validator.monitoring.metrics import (
    record_outcome,
    record_rule_failures,
    validation_duration,
)
from request_validator.utils.exceptions import (
    BaseApplicationError,
    MalformedRequestError,
    RequestValidationError,
)
from request_validator.utils.response import make_envelope_response
from request_validator.validation.engine import PayloadValidator, default_validator

logger = structlog.get_logger(__name__)

EXTENSION_NAME = 'request_validator'


class RequestValidationMiddleware:
    """
    Flask extension registering the body validation ``before_request`` hook.

    Args:
        app: Optional application to initialize immediately
        validator: Engine instance, defaults to the process-wide validator
    """

    def __init__(self, app: Optional[Flask] = None, validator: Optional[PayloadValidator] = None):
        self.validator = validator or default_validator
        if app is not None:
            self.init_app(app)

    def init_app(self, app: Flask) -> None:
        app.config.setdefault('REQUEST_VALIDATION_ENABLED', True)
        app.config.setdefault('REQUEST_VALIDATION_EXEMPT_PATHS', DEFAULT_EXEMPT_PATHS.split(','))
        app.config.setdefault('REQUEST_VALIDATION_METHODS', DEFAULT_VALIDATED_METHODS.split(','))
        app.config.setdefault('REJECT_MALFORMED_JSON', True)

        app.extensions[EXTENSION_NAME] = self
        app.before_request(self._before_request)

        logger.info(
            "Request validation middleware registered",
            enabled=app.config['REQUEST_VALIDATION_ENABLED'],
            methods=app.config['REQUEST_VALIDATION_METHODS'],
            exempt_paths=app.config['REQUEST_VALIDATION_EXEMPT_PATHS']
        )

    def should_validate(self) -> bool:
        """Return True when the current request is subject to validation."""
        config = current_app.config
        if not config['REQUEST_VALIDATION_ENABLED']:
            return False
        if request.path in config['REQUEST_VALIDATION_EXEMPT_PATHS']:
            return False
        return request.method.upper() in config['REQUEST_VALIDATION_METHODS']

    def _before_request(self):
        if not self.should_validate():
            record_outcome('skipped')
            return None

        try:
            self.validate_current_request()
        except BaseApplicationError as error:
            return reject(error)
        return None

    def validate_current_request(self) -> Any:
        """
        Validate the body of the active request.

        Returns:
            The decoded JSON tree, or None for an empty or tolerated malformed body

        Raises:
            MalformedRequestError: If the body is not JSON and REJECT_MALFORMED_JSON is set
            RequestValidationError: If any format check fails
        """
        if g.get('request_validated'):
            return g.get('json_data')

        raw_body = request.get_data(cache=True)
        g.raw_body = raw_body.decode('utf-8', errors='replace')
        g.json_data = None

        if not raw_body.strip():
            g.request_validated = True
            record_outcome('empty')
            return None

        try:
            payload = json.loads(raw_body)
        except (ValueError, RecursionError) as e:
            record_outcome('malformed')
            if current_app.config.get('REJECT_MALFORMED_JSON', True):
                raise MalformedRequestError(reason=str(e)) from e

            logger.warning("Malformed JSON body passed through", reason=str(e), path=request.path)
            g.request_validated = True
            return None

        with validation_duration.time():
            issues = self.validator.collect_issues(payload)

        if issues:
            errors = [issue.message for issue in issues]
            logger.error(
                "Validation error",
                validation_errors=errors,
                failed_paths=[issue.path for issue in issues],
                method=request.method,
                path=request.path
            )
            record_rule_failures(issue.rule for issue in issues)
            record_outcome('rejected')
            raise RequestValidationError(errors)

        g.json_data = payload
        g.request_validated = True
        record_outcome('passed')
        return payload


def reject(error: BaseApplicationError):
    """Turn a middleware error into the enveloped client response."""
    response = make_envelope_response(error.http_status, error.message)
    response.headers['X-Correlation-ID'] = error.correlation_id
    return response


def get_middleware(app: Optional[Flask] = None) -> RequestValidationMiddleware:
    """Return the middleware registered on ``app`` (or the current app), creating a detached one if absent."""
    app = app or current_app
    middleware = app.extensions.get(EXTENSION_NAME)
    if middleware is None:
        middleware = RequestValidationMiddleware()
    return middleware


def validate_request_body(view: Callable) -> Callable:
    """
    View decorator validating the request body regardless of method or path exemptions.

    A body already validated by the global hook is not walked twice.
    """

    @wraps(view)
    def wrapper(*args, **kwargs):
        try:
            get_middleware().validate_current_request()
        except BaseApplicationError as error:
            return reject(error)
        return view(*args, **kwargs)

    return wrapper
