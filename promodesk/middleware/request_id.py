"""
Request ID tracking.

Every request gets an id (the caller's X-Request-ID or a fresh one) that
is stored on g, echoed back in the response and stamped on log records.
"""
import uuid

from flask import g, request

REQUEST_ID_HEADER = 'X-Request-ID'


def init_request_id_tracking(app) -> None:

    @app.before_request
    def assign_request_id():
        incoming = request.headers.get(REQUEST_ID_HEADER, '')
        g.request_id = incoming[:64] if incoming else uuid.uuid4().hex

    @app.after_request
    def echo_request_id(response):
        request_id = g.get('request_id')
        if request_id:
            response.headers[REQUEST_ID_HEADER] = request_id
        return response
