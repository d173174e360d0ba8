"""Sliding window of words around the playback cursor.

WHY: Multi-word display modes show a few words of context either side of
the current one. The window has to stay inside the document and tell the
UI where the current word sits inside it.

RULES:
- frame_size <= 1 or an out-of-range cursor → one-element frame (the word,
  or "" as a placeholder) with center_offset 0
- radius = frame_size // 2; window is [max(0, c - radius),
  min(len, c + radius + 1))
- No padding at document edges: the window shrinks and center_offset
  shifts instead
- Non-sequence tokens or a non-integer cursor or size → placeholder frame
"""

from __future__ import annotations

from typing import Sequence

from rsvp_reader.core.models import WordFrame


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def extract_word_frame(tokens: Sequence[str], center_idx: int, frame_size: int) -> WordFrame:
    """Return the tokens around ``center_idx``.

    Args:
        tokens: The full token sequence.
        center_idx: Cursor position.
        frame_size: Total words wanted (odd sizes centre cleanly).

    Returns:
        The window and the cursor's offset inside it.
    """
    if not isinstance(tokens, (list, tuple)) or not _is_int(center_idx) or not _is_int(frame_size):
        return WordFrame(subset=[""], center_offset=0)

    in_range = 0 <= center_idx < len(tokens)
    if frame_size <= 1 or not in_range:
        return WordFrame(subset=[tokens[center_idx] if in_range else ""], center_offset=0)

    radius = frame_size // 2
    left = max(0, center_idx - radius)
    right = min(len(tokens), center_idx + radius + 1)
    return WordFrame(subset=list(tokens[left:right]), center_offset=center_idx - left)
