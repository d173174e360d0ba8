"""Per-word display delay and reading-time helpers.

WHY: A flat words-per-minute rate reads badly — sentence ends run into
the next sentence and very long words flash past before they are
recognised. The delay model stretches individual words so the average
rate stays close to the target while punctuation and long words get room.

HOW: Start from 60000 / wpm milliseconds. Scale linearly for words of 12
or more characters when the length multiplier is on, then scale again
for trailing punctuation. The remaining-time and pause-every-N helpers
drive the progress display and the optional periodic pause.

RULES:
- Base delay: 60000 / words_per_minute ms
- Invalid rate (missing, non-numeric, ≤ 0) → FALLBACK_DELAY_MS, never a
  division by zero
- Length: base *= 1 + (multiplier / 100) * (len(word) - 12) for len ≥ 12
- Punctuation (only when enabled, after length): ". ! ? ; :" →
  × punctuation_multiplier, else "," → × 1.5
- Time remaining is "M:SS" with minutes unpadded
"""

from __future__ import annotations

import math
from typing import Any

FALLBACK_DELAY_MS = 200.0
"""Delay used when the reading rate is unusable."""

LONG_WORD_THRESHOLD = 12
COMMA_MULTIPLIER = 1.5

_SENTENCE_END = (".", "!", "?", ";", ":")


def _valid_rate(words_per_minute: Any) -> bool:
    if isinstance(words_per_minute, bool) or not isinstance(words_per_minute, (int, float)):
        return False
    return math.isfinite(words_per_minute) and words_per_minute > 0


def _is_count(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def get_word_delay(
    word: Any,
    words_per_minute: Any,
    pause_on_punctuation: bool = True,
    punctuation_multiplier: float = 2,
    word_length_wpm_multiplier: float = 0,
) -> float:
    """Compute how long ``word`` stays on screen.

    Args:
        word: The token being displayed.
        words_per_minute: Target reading speed.
        pause_on_punctuation: Stretch words ending in punctuation.
        punctuation_multiplier: Factor for sentence-ending punctuation.
        word_length_wpm_multiplier: Percent of extra time per character
            beyond 12 (0 disables).

    Returns:
        Delay in milliseconds.
    """
    if not _valid_rate(words_per_minute):
        return FALLBACK_DELAY_MS

    delay = 60000 / words_per_minute
    if not isinstance(word, str) or not word:
        return delay

    if word_length_wpm_multiplier > 0 and len(word) >= LONG_WORD_THRESHOLD:
        delay *= 1 + (word_length_wpm_multiplier / 100) * (len(word) - LONG_WORD_THRESHOLD)

    if pause_on_punctuation:
        if word.endswith(_SENTENCE_END):
            return delay * punctuation_multiplier
        if word.endswith(","):
            return delay * COMMA_MULTIPLIER

    return delay


def format_time_remaining(remaining_words: Any, words_per_minute: Any) -> str:
    """Format the time left at ``words_per_minute`` as ``"M:SS"``.

    >>> format_time_remaining(150, 300)
    '0:30'
    """
    if not _valid_rate(words_per_minute):
        return "0:00"
    if isinstance(remaining_words, bool) or not isinstance(remaining_words, (int, float)):
        return "0:00"
    if not remaining_words > 0:
        return "0:00"

    seconds = math.ceil(remaining_words / words_per_minute * 60)
    minutes, secs = divmod(seconds, 60)
    return "{}:{:02d}".format(minutes, secs)


def should_pause_at_word(word_index: int, pause_after_words: int) -> bool:
    """True every ``pause_after_words`` words, never at the first word."""
    if not (_is_count(word_index) and _is_count(pause_after_words)):
        return False
    if pause_after_words <= 0 or word_index <= 0:
        return False
    return word_index % pause_after_words == 0
