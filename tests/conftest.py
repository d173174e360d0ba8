"""Shared test fixtures for the rsvp_reader test suite.

WHY: Several test modules need the same sample document, a session built
from it, and a session store that never touches the user's real session
directory.

HOW: Pytest fixtures provide a multilingual sample text, its tokens, a
PlaybackSettings instance, an in-memory backend, and a SessionStore with
a controllable clock.

RULES:
- No fixture writes outside tmp_path
- The fake clock starts at a fixed epoch-ms value and only moves when a
  test advances it
"""

from typing import List

import pytest

from rsvp_reader.core.models import PlaybackSettings, Session
from rsvp_reader.core.tokenizer import parse_text
from rsvp_reader.storage import MemoryStore, SessionStore

SAMPLE_TEXT = (
    "The quick brown fox jumps over the lazy dog. "
    "«Привет», сказал он, — and then: extraordinarily long words appear!"
)

FIXED_NOW_MS = 1_700_000_000_000


class FakeClock:
    """Callable epoch-ms clock for SessionStore tests."""

    def __init__(self, now: int = FIXED_NOW_MS) -> None:
        self.now = now

    def __call__(self) -> int:
        return self.now


@pytest.fixture
def sample_text() -> str:
    return SAMPLE_TEXT


@pytest.fixture
def sample_tokens() -> List[str]:
    return parse_text(SAMPLE_TEXT)


@pytest.fixture
def sample_settings() -> PlaybackSettings:
    return PlaybackSettings(
        words_per_minute=420,
        fade_enabled=True,
        fade_duration=120,
        pause_on_punctuation=True,
        punctuation_pause_multiplier=2.5,
        pause_after_words=10,
        pause_duration=750,
        word_length_wpm_multiplier=5,
    )


@pytest.fixture
def sample_session(sample_settings) -> Session:
    tokens = parse_text(SAMPLE_TEXT)
    return Session(
        text=SAMPLE_TEXT,
        current_word_index=7,
        total_words=len(tokens),
        settings=sample_settings,
    )


@pytest.fixture
def memory_store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def session_store(memory_store, clock) -> SessionStore:
    return SessionStore(memory_store, clock=clock)
