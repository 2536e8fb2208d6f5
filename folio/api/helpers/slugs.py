"""Slug and whitespace helpers."""

import re

# ASCII-only so slugs stay URL-safe without percent-encoding
WORD_PATTERN = re.compile(r"\w+", re.ASCII)
WHITESPACE_RUN_PATTERN = re.compile(r"\s+")


def slugify(title: str) -> str:
    """Derive a kebab-case slug from a title.

    >>> slugify("Nisi est sit_amet facilisis!")
    'nisi-est-sit-amet-facilisis'
    """
    lowered = title.lower().replace("_", "-")
    return "-".join(WORD_PATTERN.findall(lowered))


def collapse_whitespace(text: str) -> str:
    """Trim ``text`` and squeeze internal whitespace runs to one space."""
    return WHITESPACE_RUN_PATTERN.sub(" ", text.strip())


def search_words(text: str) -> list[str]:
    """Split free-text search input into bare words.

    Underscores count as spaces and every non-word character is dropped.
    """
    return WORD_PATTERN.findall(text.replace("_", " "))
