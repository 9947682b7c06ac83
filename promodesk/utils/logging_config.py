"""
Logging setup for PromoDesk.

Single stream handler on the root logger; every record carries the id of
the request it was emitted under (or '-' outside a request).

Environment Variables:
    LOG_LEVEL: Root log level (default INFO)
"""
import logging
import os
import sys

from flask import g, has_request_context

LOG_FORMAT = '%(asctime)s %(levelname)s [%(name)s] [req:%(request_id)s] %(message)s'

_configured = False


class RequestIdFilter(logging.Filter):
    """Attach the current request id to log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        request_id = '-'
        if has_request_context():
            request_id = g.get('request_id', '-')
        record.request_id = request_id
        return True


def setup_logging(level: str = None) -> None:
    """Configure root logging once per process."""
    global _configured
    if _configured:
        return

    level_name = (level or os.getenv('LOG_LEVEL', 'INFO')).upper()

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler.addFilter(RequestIdFilter())

    root = logging.getLogger()
    root.setLevel(getattr(logging, level_name, logging.INFO))
    root.addHandler(handler)

    # SQL echo is far too chatty at INFO
    logging.getLogger('sqlalchemy.engine').setLevel(logging.WARNING)

    _configured = True
