"""Mapping between the cursor index and percent-of-document.

WHY: The seek slider works in percent, the player works in word indices,
and a restored session may point past the end of a document whose text
changed. These helpers keep the conversions in one place.

RULES:
- percentage_to_word_index clamps to [0, 100] and floors
- word_index_to_percentage rounds halves up
- Both return 0 for an empty document (total <= 0)
- The two are approximate inverses only; flooring vs. rounding can move
  a round trip by one word
"""

from __future__ import annotations

import math
from typing import Any


def _is_finite_number(value: Any) -> bool:
    return (
        isinstance(value, (int, float))
        and not isinstance(value, bool)
        and math.isfinite(value)
    )


def percentage_to_word_index(percentage: Any, total_words: int) -> int:
    """Word index at ``percentage`` of a ``total_words`` document."""
    if not total_words or total_words <= 0 or not _is_finite_number(percentage):
        return 0
    clamped = max(0, min(100, percentage))
    return math.floor(clamped / 100 * total_words)


def word_index_to_percentage(word_index: int, total_words: int) -> int:
    """Whole percent of the document before ``word_index``."""
    if not total_words or total_words <= 0 or not _is_finite_number(word_index):
        return 0
    return math.floor(word_index / total_words * 100 + 0.5)


def clamp_word_index(word_index: Any, total_words: int) -> int:
    """Clamp a restored cursor into ``[0, total_words - 1]``."""
    if total_words <= 0 or not _is_finite_number(word_index):
        return 0
    return max(0, min(int(word_index), total_words - 1))
