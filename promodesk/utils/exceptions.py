"""
Custom exceptions for PromoDesk business logic.

These exceptions provide more specific error handling than generic Exception,
allowing for better error messages and appropriate HTTP status codes.
The mapping to HTTP statuses lives in the app's error handlers. Codes are
ErrorCode members.
"""
from .errors import ErrorCode


class PromoDeskError(Exception):
    """Base exception for all PromoDesk business logic errors."""

    def __init__(self, message: str, code: str = "PROMODESK_ERROR"):
        self.message = message
        self.code = code
        super().__init__(message)


class AuthenticationError(PromoDeskError):
    """No authenticated identity on the request."""

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message, ErrorCode.AUTH_REQUIRED)


class InvalidCredentialsError(PromoDeskError):
    """Username/password mismatch. Same message whatever the cause."""

    def __init__(self):
        super().__init__("Invalid username or password", ErrorCode.INVALID_CREDENTIALS)


class AuthorizationError(PromoDeskError):
    """User not authorized for this operation."""

    def __init__(self, message: str = "Not authorized for this operation"):
        super().__init__(message, ErrorCode.PERMISSION_DENIED)


class NotFoundError(PromoDeskError):
    """Resource not found."""

    def __init__(self, resource: str, identifier=None):
        message = f"{resource} not found"
        if identifier:
            message = f"{resource} '{identifier}' not found"
        super().__init__(message, f"{resource.upper()}_NOT_FOUND")


class ValidationError(PromoDeskError):
    """Invalid input data."""

    def __init__(self, message: str, field: str = None):
        self.field = field
        super().__init__(message, ErrorCode.VALIDATION_ERROR)


class DuplicateUsernameError(PromoDeskError):
    """Username already registered."""

    def __init__(self, username: str):
        self.username = username
        super().__init__("Username is already taken", ErrorCode.DUPLICATE_USERNAME)


class SlugTakenError(PromoDeskError):
    """Campaign slug already in use."""

    def __init__(self, slug: str):
        self.slug = slug
        super().__init__(f"The slug '{slug}' is already in use", ErrorCode.SLUG_TAKEN)


class CampaignUnavailableError(PromoDeskError):
    """Campaign exists but is inactive or expired."""

    def __init__(self, message: str):
        super().__init__(message, ErrorCode.CAMPAIGN_UNAVAILABLE)


class AlreadyRedeemedError(PromoDeskError):
    """Coupon already has a recorded redemption."""

    def __init__(self, coupon_id: str):
        self.coupon_id = coupon_id
        super().__init__("Coupon has already been redeemed", ErrorCode.ALREADY_REDEEMED)
