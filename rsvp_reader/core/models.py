"""Dataclasses for playback settings, display parts, frames, and sessions.

WHY: The playback driver, the HTTP API, and the session store all pass the
same handful of shapes around: the reader's settings, a word split around
its focal letter, a window of words, and the resumable session. Typed
dataclasses keep those shapes in one place.

HOW: Six dataclasses:
  PlaybackSettings  — reading speed and pause behaviour
  WordDisplayParts  — a word split into before / ORP letter / after
  WordFrame         — a window of words and the cursor's offset inside it
  Session           — text, cursor, word count, and optional settings
  SavedSession      — a Session plus the epoch-ms time it was saved
  SessionSummary    — the cheap projection used for "resume?" prompts

RULES:
- Python field names are snake_case; the persisted record uses the
  original camelCase keys (wordsPerMinute, currentWordIndex, ...)
- from_dict() never raises: missing or wrongly typed values take defaults,
  unknown keys are ignored
- Tokens are plain str; nothing here mutates them
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from rsvp_reader.core.progress import clamp_word_index
from rsvp_reader.core.timing import get_word_delay

DEFAULT_WORDS_PER_MINUTE = 300.0

# Python attribute name → persisted camelCase key
_SETTINGS_KEYS: dict[str, str] = {
    "words_per_minute": "wordsPerMinute",
    "fade_enabled": "fadeEnabled",
    "fade_duration": "fadeDuration",
    "pause_on_punctuation": "pauseOnPunctuation",
    "punctuation_pause_multiplier": "punctuationPauseMultiplier",
    "pause_after_words": "pauseAfterWords",
    "pause_duration": "pauseDuration",
    "word_length_wpm_multiplier": "wordLengthWPMMultiplier",
}

_BOOL_FIELDS = {"fade_enabled", "pause_on_punctuation"}
_INT_FIELDS = {"pause_after_words"}


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


@dataclass
class PlaybackSettings:
    """Reading speed and pause behaviour for one reader.

    WHY: The delay model needs speed and punctuation rules on every word;
    the presentation layer needs fade hints it passes through untouched.
    Grouping them lets a saved session restore the reader's exact setup.

    RULES:
    - words_per_minute: positive; a non-positive value never divides by
      zero downstream (the delay model falls back to 200 ms)
    - fade_enabled / fade_duration: presentation hints, passed through
    - punctuation_pause_multiplier: applied to sentence-ending words (≥ 1)
    - pause_after_words: extra pause every N words, 0 disables
    - pause_duration: length of that extra pause in ms
    - word_length_wpm_multiplier: percent of extra time per character
      beyond 12, 0 disables
    """

    words_per_minute: float = DEFAULT_WORDS_PER_MINUTE
    fade_enabled: bool = False
    fade_duration: float = 150.0
    pause_on_punctuation: bool = True
    punctuation_pause_multiplier: float = 2.0
    pause_after_words: int = 0
    pause_duration: float = 500.0
    word_length_wpm_multiplier: float = 0.0

    def delay_for(self, word: str | None) -> float:
        """Display duration in milliseconds for ``word`` under these settings."""
        return get_word_delay(
            word,
            self.words_per_minute,
            pause_on_punctuation=self.pause_on_punctuation,
            punctuation_multiplier=self.punctuation_pause_multiplier,
            word_length_wpm_multiplier=self.word_length_wpm_multiplier,
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the persisted camelCase form."""
        return {key: getattr(self, attr) for attr, key in _SETTINGS_KEYS.items()}

    @classmethod
    def from_dict(cls, data: Any) -> PlaybackSettings:
        """Build settings from a camelCase dict, defaulting anything unusable.

        Accepts snake_case keys too, so API payloads and persisted records
        share one parser.
        """
        settings = cls()
        if not isinstance(data, dict):
            return settings

        for attr, key in _SETTINGS_KEYS.items():
            value = data.get(key, data.get(attr))
            if value is None:
                continue
            if attr in _BOOL_FIELDS:
                if isinstance(value, bool):
                    setattr(settings, attr, value)
            elif attr in _INT_FIELDS:
                if _is_number(value):
                    setattr(settings, attr, int(value))
            elif _is_number(value):
                setattr(settings, attr, float(value))
        return settings


@dataclass
class WordDisplayParts:
    """A word split around its focal letter: ``before + orp + after == word``."""

    before: str = ""
    orp: str = ""
    after: str = ""


@dataclass
class WordFrame:
    """A contiguous window of tokens around the cursor.

    RULES:
    - center_offset is the cursor word's position inside subset
    - 0 <= center_offset < len(subset) whenever subset is non-empty
    - Near document edges subset is shorter than the requested size
    """

    subset: list[str] = field(default_factory=list)
    center_offset: int = 0


@dataclass
class Session:
    """The unit a reader saves: full text, cursor, and settings.

    RULES:
    - current_word_index >= 0
    - total_words is expected to match len(parse_text(text)) but is not
      enforced; use SavedSession.resume_index() to clamp on restore
    """

    text: str
    current_word_index: int
    total_words: int
    settings: PlaybackSettings | None = None


@dataclass
class SavedSession(Session):
    """A Session as read back from storage, stamped with its save time."""

    saved_at: int = 0

    def resume_index(self, tokens: list[str]) -> int:
        """Cursor position clamped to the re-tokenized document."""
        return clamp_word_index(self.current_word_index, len(tokens))


@dataclass
class SessionSummary:
    """Read-only projection of a saved session without its text."""

    current_word_index: int
    total_words: int
    saved_at: int
    has_text: bool
