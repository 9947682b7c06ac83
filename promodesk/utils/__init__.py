"""
Utility modules for PromoDesk.
"""
from .logging_config import setup_logging
from .errors import (
    ErrorCode,
    error_response,
    internal_error
)
from .exceptions import (
    PromoDeskError,
    AuthenticationError,
    InvalidCredentialsError,
    AuthorizationError,
    NotFoundError,
    ValidationError,
    DuplicateUsernameError,
    SlugTakenError,
    CampaignUnavailableError,
    AlreadyRedeemedError,
)
