"""
Request helpers shared by the API blueprints.
"""
from flask import request
from werkzeug.exceptions import BadRequest


def json_body() -> dict:
    """Parsed JSON object body; anything else is a 400 INVALID_REQUEST."""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise BadRequest('Request body must be a JSON object')
    return data
