"""
Standardized API response formatting utilities.

Every response produced by the service itself (rejections from the validation
middleware, error handlers and the success helper) uses one envelope:

    {"StatusCode": 422, "Message": "invalid request", "Body": {}}

Field-level validation details are never placed in the envelope; they belong to
server-side logs.
"""

from http import HTTPStatus
from typing import Any, Dict, Optional

from flask import Response, jsonify


def build_envelope(status_code: int, message: str, body: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Build the response envelope dictionary."""
    return {
        'StatusCode': int(status_code),
        'Message': message,
        'Body': body if body is not None else {}
    }


def make_envelope_response(status_code: int, message: str, body: Optional[Dict[str, Any]] = None) -> Response:
    """Build a JSON ``Response`` carrying the envelope with a matching status code."""
    response = jsonify(build_envelope(status_code, message, body))
    response.status_code = int(status_code)
    return response


def bad_request(message: str = "bad request") -> Response:
    return make_envelope_response(HTTPStatus.BAD_REQUEST, message)


def unprocessable_entity(message: str = "invalid request") -> Response:
    return make_envelope_response(HTTPStatus.UNPROCESSABLE_ENTITY, message)


def success_response(message: str = "success", body: Optional[Dict[str, Any]] = None) -> Response:
    return make_envelope_response(HTTPStatus.OK, message, body)
