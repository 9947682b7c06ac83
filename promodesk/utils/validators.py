"""
Input validation helpers shared by the services.

Each helper returns the cleaned value or raises ValidationError naming the
offending field.
"""
import re
from urllib.parse import urlparse

from .exceptions import ValidationError

SLUG_PATTERN = re.compile(r'^[a-z0-9]+(?:-[a-z0-9]+)*$')
USERNAME_PATTERN = re.compile(r'^[A-Za-z0-9_.-]{3,50}$')
EMAIL_PATTERN = re.compile(r'^[^@\s]+@[^@\s]+\.[^@\s]+$')

SLUG_MAX_LENGTH = 100
MIN_PASSWORD_LENGTH = 8


def require_text(value, field: str, max_length: int = None) -> str:
    """Non-empty string after trimming."""
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f'{field} is required', field=field)
    cleaned = value.strip()
    if max_length and len(cleaned) > max_length:
        raise ValidationError(f'{field} must be at most {max_length} characters', field=field)
    return cleaned


def optional_text(value, field: str, max_length: int = None) -> str:
    """String or None; blank becomes empty string."""
    if value is None:
        return ''
    if not isinstance(value, str):
        raise ValidationError(f'{field} must be a string', field=field)
    cleaned = value.strip()
    if max_length and len(cleaned) > max_length:
        raise ValidationError(f'{field} must be at most {max_length} characters', field=field)
    return cleaned


def validate_slug(value) -> str:
    if not isinstance(value, str) or not value:
        raise ValidationError('slug is required', field='slug')
    if len(value) > SLUG_MAX_LENGTH or not SLUG_PATTERN.match(value):
        raise ValidationError(
            'slug may only contain lowercase letters, numbers and single hyphens',
            field='slug'
        )
    return value


def validate_url(value, field: str) -> str:
    """Absolute http(s) URL."""
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f'{field} is required', field=field)
    cleaned = value.strip()
    parsed = urlparse(cleaned)
    if parsed.scheme not in ('http', 'https') or not parsed.netloc:
        raise ValidationError(f'{field} must be a valid absolute URL', field=field)
    return cleaned


def validate_percentage(value, field: str = 'discountPercentage') -> int:
    """Integer in [1, 100]."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f'{field} must be a whole number', field=field)
    if value < 1 or value > 100:
        raise ValidationError(f'{field} must be between 1 and 100', field=field)
    return value


def validate_positive_int(value, field: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ValidationError(f'{field} must be a positive whole number', field=field)
    return value


def validate_email(value, field: str = 'contactEmail') -> str:
    cleaned = optional_text(value, field, max_length=255)
    if cleaned and not EMAIL_PATTERN.match(cleaned):
        raise ValidationError(f'{field} must be a valid email address', field=field)
    return cleaned


def validate_optional_url(value, field: str) -> str:
    cleaned = optional_text(value, field, max_length=500)
    if cleaned:
        return validate_url(cleaned, field)
    return cleaned


def validate_username(value) -> str:
    if not isinstance(value, str) or not USERNAME_PATTERN.match(value.strip()):
        raise ValidationError(
            'username must be 3-50 characters of letters, numbers, ".", "_" or "-"',
            field='username'
        )
    return value.strip()


def validate_password(value) -> str:
    if not isinstance(value, str) or len(value) < MIN_PASSWORD_LENGTH:
        raise ValidationError(
            f'password must be at least {MIN_PASSWORD_LENGTH} characters',
            field='password'
        )
    return value
