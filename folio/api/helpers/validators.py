"""Identifier, URL and length validation.

All helpers trim their input before validating and raise a ``Problem``
subclass instead of returning partially valid values.
"""

import re
import uuid

from folio.api.constants import LABEL_NAME_MAX_LENGTH
from folio.api.core.errors import InvalidIdentifierError, UnprocessableURLError, ValidationError

from .slugs import slugify

# Canonical, braced, URN-prefixed and hyphenless forms
UUID_PATTERN = re.compile(
    r"^(?:urn:uuid:)?"
    r"(?:\{[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}\}"
    r"|[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}"
    r"|[0-9a-f]{32})$",
    re.IGNORECASE,
)

# RFC 3986 scheme or an absolute path, with no embedded whitespace
REQUEST_URI_PATTERN = re.compile(r"^(?:[A-Za-z][A-Za-z0-9+.\-]*:|/)\S*$")


def normalize_id(raw: str) -> str:
    """Return the canonical lower-case hyphenated form of a UUID.

    Accepts ``{...}``, ``urn:uuid:...`` and 32-digit hyphenless input.

    Raises:
        InvalidIdentifierError: If ``raw`` is not a UUID in any accepted form
    """
    value = (raw or "").strip()
    if not UUID_PATTERN.match(value):
        raise InvalidIdentifierError(value)
    return str(uuid.UUID(value))


def sanitize_url(*urls: str) -> list[str]:
    """Trim each URL and check it is an absolute request URI.

    Empty strings pass through as empty strings.

    Raises:
        UnprocessableURLError: On the first value that does not parse
    """
    sanitized = []
    for url in urls:
        value = (url or "").strip()
        if value and not REQUEST_URI_PATTERN.match(value):
            raise UnprocessableURLError(value)
        sanitized.append(value)
    return sanitized


def check_max_length(field: str, value: str, limit: int) -> None:
    """Reject ``value`` when it is longer than ``limit`` characters."""
    if value and len(value) > limit:
        raise ValidationError(field, "max", limit)


def check_max_bytes(field: str, value: str, limit: int) -> None:
    """Reject ``value`` when its UTF-8 encoding exceeds ``limit`` bytes."""
    if value and len(value.encode("utf-8")) > limit:
        raise ValidationError(field, "max", limit)


def check_min_length(field: str, value: str, limit: int) -> None:
    """Reject a non-empty ``value`` shorter than ``limit`` characters."""
    if value and len(value) < limit:
        raise ValidationError(field, "min", limit)


def normalize_label_id(raw: str, field: str = "id") -> str:
    """Trim a tag or topic identifier and check it is already kebab-case.

    Raises:
        ValidationError: Empty, too long, or not kebab-case
    """
    value = (raw or "").strip()
    if not value:
        raise ValidationError(field, "required")
    check_max_length(field, value, LABEL_NAME_MAX_LENGTH)
    if slugify(value) != value:
        raise ValidationError(field, "kebabcase")
    return value
