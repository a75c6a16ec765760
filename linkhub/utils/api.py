"""Request helpers shared by the JSON API blueprints."""
from flask import request

from linkhub.exceptions import BusinessLogicError


def parse_request_body() -> dict:
    """
    Read the JSON object body of the current request.

    Raises:
        ApiError: bad_request when the body is missing or not a JSON object
    """
    body = request.get_json(silent=True)
    if not isinstance(body, dict):
        raise BusinessLogicError(
            'Invalid JSON format in request body. Please ensure the request body is a valid JSON object.'
        )
    return body
