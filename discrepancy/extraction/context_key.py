"""
Context keys: number-masked fingerprints of the text around a fact.

Two mentions of the same fact ("the program serves 40 dogs" and "the
program serves 45 dogs") produce the same key, which is what lets the
conflict detector line them up.
"""

import re

from .numbers import MAGNITUDE_PATTERN

PLACEHOLDER = "#"

# Characters kept before and after the match offset
WINDOW_BEFORE = 55
WINDOW_AFTER = 25

# Keys keep their trailing characters, which sit right before the numeral
MAX_KEY_LENGTH = 70

_WHITESPACE_RE = re.compile(r"\s+")
_CURRENCY_MASK_RE = re.compile(
    r"\$[\d,.]+(?:\s*(?:" + MAGNITUDE_PATTERN + r")\b)?",
    re.IGNORECASE,
)
_NUMERAL_MASK_RE = re.compile(
    r"\b\d[\d,.]*(?:\s*(?:" + MAGNITUDE_PATTERN + r"))?\b",
    re.IGNORECASE,
)
_DIGITS_RE = re.compile(r"\d+")
_DISALLOWED_RE = re.compile(r"[^a-z0-9#\s]")


def mask_numbers(window: str) -> str:
    """Replace currency amounts and numerals (with magnitude) by the placeholder."""
    window = _CURRENCY_MASK_RE.sub("$" + PLACEHOLDER, window)
    window = _NUMERAL_MASK_RE.sub(PLACEHOLDER, window)
    # Digits glued to letters ("mp3", "12abc") escape the word-bounded mask
    return _DIGITS_RE.sub(PLACEHOLDER, window)


def build_context_key(text: str, offset: int) -> str:
    """
    Build the context key for a fact found at `offset` in `text`.

    Takes WINDOW_BEFORE characters before the offset and WINDOW_AFTER after
    it, collapses whitespace, masks numbers, lowercases, drops everything
    outside [a-z0-9#] and whitespace, and keeps the last MAX_KEY_LENGTH
    characters.

    Args:
        text: Full document text
        offset: Character offset where the matched fact starts

    Returns:
        The context key (possibly empty)
    """
    start = max(0, offset - WINDOW_BEFORE)
    end = min(len(text), offset + WINDOW_AFTER)

    window = _WHITESPACE_RE.sub(" ", text[start:end]).strip()
    window = mask_numbers(window)
    window = _DISALLOWED_RE.sub(" ", window.lower())
    window = _WHITESPACE_RE.sub(" ", window).strip()

    return window[-MAX_KEY_LENGTH:]
