"""
Neutral-language normalization for candidate facts.

clean_text() turns a raw snippet into a short neutral clause:
1. Collapse whitespace and normalize curly quotes / em-dashes to ASCII
2. Drop parenthetical asides
3. Strip promotional vocabulary ("leading", "world-class", ...)

Parentheses are matched non-greedily, so nested asides such as
"(a (b) c)" leave a stray " c)" behind. That is a known limitation.
"""

from __future__ import annotations

import re

PROMOTIONAL_TERMS = (
    "leading",
    "premier",
    "renowned",
    "world[- ]class",
    "iconic",
    "innovative",
    "cutting-edge",
    "award[- ]winning",
    "best",
    "ultimate",
    "state-of-the-art",
    "top[- ]tier",
)

_WHITESPACE_RE = re.compile(r"\s+")
_PAREN_RE = re.compile(r"\(.*?\)")
_PROMO_RE = re.compile(r"\b(?:" + "|".join(PROMOTIONAL_TERMS) + r")\b", re.IGNORECASE)

_PUNCTUATION_MAP = str.maketrans(
    {
        "“": '"',
        "”": '"',
        "‘": "'",
        "’": "'",
        "—": " ",
    }
)


def clean_text(raw: str | None) -> str:
    """Normalize a candidate fact and strip promotional wording.

    Never raises on absent input. The result is stable under repeated
    application: clean_text(clean_text(s)) == clean_text(s).

    Args:
        raw: The raw snippet, possibly None or empty

    Returns:
        The cleaned single-line string, or "" when nothing is left

    Examples:
        >>> clean_text("The  leading “widget” maker (since 1990)")
        'The "widget" maker'
    """
    if not raw:
        return ""
    text = _collapse(raw.translate(_PUNCTUATION_MAP))
    text = _collapse(_PAREN_RE.sub("", text))
    # Removing one term can butt two words together into another
    # ("world best class" -> "world class"), so strip until stable.
    while True:
        stripped = _collapse(_PROMO_RE.sub("", text))
        if stripped == text:
            return text
        text = stripped


def _collapse(text: str) -> str:
    return _WHITESPACE_RE.sub(" ", text).strip()
