"""Text and input helpers used by the archive services."""

from .slugs import collapse_whitespace, search_words, slugify
from .text_metrics import count_words, estimate_read_minutes, estimate_read_seconds
from .validators import (
    check_max_bytes,
    check_max_length,
    check_min_length,
    normalize_id,
    normalize_label_id,
    sanitize_url,
)

__all__ = [
    # Slugs
    "slugify",
    "collapse_whitespace",
    "search_words",
    # Text metrics
    "count_words",
    "estimate_read_seconds",
    "estimate_read_minutes",
    # Validation
    "normalize_id",
    "normalize_label_id",
    "sanitize_url",
    "check_max_length",
    "check_max_bytes",
    "check_min_length",
]
