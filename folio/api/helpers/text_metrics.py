"""Reading-time estimation for mixed HTML/Markdown article bodies.

Counting rules:
- Whitespace separates tokens
- Everything between ``<figure>`` and the next ``</figure>`` is skipped
- Tokens nested in ``<div>`` blocks are skipped (depth counted)
- Markdown markers (``#``, ``-``, ``=``, ``>`` prefixes and bare ``*``) are not words
"""

import math
import re

from folio.api.constants import NON_WORD_PREFIXES, WORDS_PER_MINUTE

TOKEN_PATTERN = re.compile(r"\S+")

FIGURE_OPEN = "<figure>"
FIGURE_CLOSE = "</figure>"
DIV_OPEN = ("<div>", "<div")
DIV_CLOSE = "</div>"
BULLET = "*"


def count_words(text: str) -> int:
    """Count prose words, ignoring figures, div blocks and Markdown markers."""
    words = 0
    in_figure = False
    div_depth = 0

    for token in TOKEN_PATTERN.findall(text):
        if in_figure:
            if token.endswith(FIGURE_CLOSE):
                in_figure = False
            continue

        if token.startswith(FIGURE_OPEN):
            # "<figure>...</figure>" without inner spaces is a single token
            in_figure = not token.endswith(FIGURE_CLOSE)
            continue

        if token.startswith(DIV_OPEN):
            div_depth += 1
            continue
        if token == DIV_CLOSE:
            div_depth = max(div_depth - 1, 0)
            continue
        if div_depth > 0:
            continue

        if token.startswith(NON_WORD_PREFIXES) or token == BULLET:
            continue

        words += 1

    return words


def estimate_read_seconds(text: str) -> int:
    """Seconds needed to read ``text`` at the configured words-per-minute."""
    words = count_words(text)
    if words == 0:
        return 0
    return math.ceil(words / (WORDS_PER_MINUTE / 60))


def estimate_read_minutes(text: str) -> int:
    """Whole minutes needed to read ``text``, rounded up.

    Empty or markup-only input reads in 0 minutes.
    """
    return math.ceil(estimate_read_seconds(text) / 60)
