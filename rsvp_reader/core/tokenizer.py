"""Split extracted text into RSVP word tokens.

WHY: Extraction libraries hand back one long string. The player steps
through words, so the text must become an ordered list of tokens whose
positions are stable — the saved cursor is an index into that list.

HOW: parse_text() uses str.split() with no separator, which trims and
splits on any run of Unicode whitespace in one pass. clean_text() is the
normalisation every extractor applies before returning text.

RULES:
- Order is significant and defines the reading order
- Punctuation stays attached to its word ("end." is one token)
- None or non-str input yields an empty list, never an error
- Same input always yields the same tokens
"""

from __future__ import annotations

import re
from typing import Any

_WHITESPACE_RE = re.compile(r"\s+")
_REPEATED_PUNCT_RE = re.compile(r"([.!?])\1+")


def parse_text(text: Any) -> list[str]:
    """Split ``text`` into whitespace-delimited tokens.

    Args:
        text: Raw text, typically from an extractor.

    Returns:
        The non-empty tokens in reading order.
    """
    if not isinstance(text, str) or not text:
        return []
    return text.split()


def clean_text(text: str) -> str:
    """Normalise extracted text before tokenizing.

    Collapses whitespace runs to a single space, squashes repeated sentence
    punctuation ("!!!" → "!") and trims both ends.
    """
    if not text:
        return ""
    text = _WHITESPACE_RE.sub(" ", text)
    text = _REPEATED_PUNCT_RE.sub(r"\1", text)
    return text.strip()
