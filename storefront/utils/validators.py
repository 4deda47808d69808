"""Request value validation helpers."""

import math
from datetime import datetime

from storefront.errors import ValidationError


def parse_id(value, name='id'):
    """Return ``value`` as a positive integer identifier or raise ValidationError."""
    if isinstance(value, (bool, float)):
        raise ValidationError(f'Invalid {name}: {value!r}')
    try:
        parsed = int(str(value).strip())
    except (TypeError, ValueError):
        raise ValidationError(f'Invalid {name}: {value!r}')
    if parsed <= 0:
        raise ValidationError(f'Invalid {name}: {value!r}')
    return parsed


def parse_positive_int(value, name):
    """Parse a query-string or payload value that must be an integer >= 1."""
    if isinstance(value, (bool, float)):
        raise ValidationError(f'{name} must be a positive integer')
    try:
        parsed = int(str(value).strip())
    except (TypeError, ValueError):
        raise ValidationError(f'{name} must be a positive integer')
    if parsed < 1:
        raise ValidationError(f'{name} must be a positive integer')
    return parsed


def parse_price(value, name='price'):
    """Parse a non-negative price."""
    if isinstance(value, bool):
        raise ValidationError(f'{name} must be a number')
    try:
        parsed = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f'{name} must be a number')
    if not math.isfinite(parsed) or parsed < 0:
        raise ValidationError(f'{name} must be a finite, non-negative number')
    return parsed


def parse_datetime(value, name):
    """Parse an ISO-8601 timestamp (a trailing ``Z`` is accepted)."""
    text = str(value).strip()
    if text.endswith('Z'):
        text = text[:-1]
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        raise ValidationError(f'{name} must be an ISO-8601 timestamp')
    # Stored timestamps are naive UTC
    if parsed.tzinfo is not None:
        parsed = parsed.replace(tzinfo=None) - parsed.utcoffset()
    return parsed
