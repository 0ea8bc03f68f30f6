"""
API blueprint.

``POST /api/v1/echo`` answers with the decoded body after it has passed the
validation middleware. The handler re-reads the buffered request body rather
than relying on the middleware's copy, so it also confirms that validation did
not consume the stream.
"""

import structlog
from flask import Blueprint, g, request

from request_validator.middleware import validate_request_body
from request_validator.utils.response import bad_request, success_response

logger = structlog.get_logger(__name__)

api_bp = Blueprint('api', __name__, url_prefix='/api/v1')


@api_bp.route('/echo', methods=['POST'])
@validate_request_body
def echo():
    payload = request.get_json(silent=True)
    if payload is None:
        return bad_request("request body must be a JSON document")

    logger.info(
        "Echoing validated body",
        body_bytes=len(request.get_data(cache=True)),
        replayed=g.get('json_data') == payload
    )
    return success_response("Validation successful", {'data': payload})
