"""Optimal Recognition Point (ORP) selection for a single word.

WHY: RSVP anchors the reader's eye on one highlighted letter per word,
slightly left of centre. Picking that letter consistently is what keeps
the eye still while words change. Leading punctuation (quotes, brackets)
must not shift the highlight, and every script has to behave the same —
an ASCII-only letter test would mis-highlight Cyrillic, CJK, or Arabic.

HOW: Letters are classified with unicodedata: any character whose general
category starts with "L" (Lu, Ll, Lt, Lm, Lo) is a letter. The letter
count picks a target letter index from a fixed table; the raw position of
that letter is then found by scanning the word left to right.

RULES:
- Letter count ≤ 3 → 0, 4–5 → 1, 6–9 → 2, 10–12 → 3
- Letter count > 12 → floor(log2(count - 1)) + 1 (logarithmic growth)
- Non-letters never count toward the target
- A word with too few letters clamps to len(word) - 1
- Invalid or empty input → index 0 / empty parts; nothing here raises
"""

from __future__ import annotations

import unicodedata
from typing import Any

from rsvp_reader.core import models


def is_letter(ch: str) -> bool:
    """True if ``ch`` is in the Unicode "Letter" category."""
    return unicodedata.category(ch).startswith("L")


def count_letters(word: str) -> int:
    """Number of Unicode letters in ``word``."""
    return sum(1 for ch in word if is_letter(ch))


def get_orp_index(word: Any) -> int:
    """Zero-based index of the focal letter, counted in letters only.

    Args:
        word: A single token.

    Returns:
        The target letter index; 0 for empty or non-str input.
    """
    if not isinstance(word, str) or not word:
        return 0

    length = count_letters(word)
    if length <= 1:
        return 0
    if length <= 3:
        return 0
    if length <= 5:
        return 1
    if length <= 9:
        return 2
    if length <= 12:
        return 3
    # floor(log2(n)) == n.bit_length() - 1 for n >= 1
    return (length - 1).bit_length()


def get_actual_orp_index(word: Any) -> int:
    """Raw character position of the focal letter.

    Skips leading punctuation and symbols: in ``"(hello)"`` the second
    letter is "e" at position 2, not position 1.

    Returns:
        A valid index into ``word`` for non-empty input, 0 otherwise.
    """
    if not isinstance(word, str) or not word:
        return 0

    target = get_orp_index(word)
    letter_count = 0
    for i, ch in enumerate(word):
        if is_letter(ch):
            if letter_count == target:
                return i
            letter_count += 1

    return min(target, len(word) - 1)


def split_word_for_display(word: Any) -> models.WordDisplayParts:
    """Split ``word`` into the text before, at, and after its ORP letter."""
    if not isinstance(word, str) or not word:
        return models.WordDisplayParts()

    idx = get_actual_orp_index(word)
    return models.WordDisplayParts(
        before=word[:idx],
        orp=word[idx],
        after=word[idx + 1:],
    )
