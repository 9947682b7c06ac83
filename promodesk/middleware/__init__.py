"""
Middleware package for PromoDesk.
"""
from .session_auth import (
    require_auth,
    get_current_identity,
    get_session_token,
    set_session_cookie,
    clear_session_cookie,
    init_session_auth,
)
from .request_id import init_request_id_tracking
from .rate_limit import limiter, init_rate_limiter, ratelimit_public, ratelimit_login
