"""Unit tests for SessionStore save/load/clear/summary.

WHY: The session store is what lets a reader resume days later. It must
round-trip exactly, never raise into the player, and treat a corrupt or
foreign record as "no session" instead of crashing.

HOW: Tests are organized by concern:
  - TestRoundTrip: save then load returns the same session plus savedAt
  - TestSavedAt: timestamps come from the clock and never go backwards
  - TestFailSoft: quota, serialization, and backend errors become sentinels
  - TestCorruptRecords: malformed JSON and schema violations read as absent
  - TestCompatibility: records written by the browser build load unchanged
  - TestSummary: projection fields and has_text

RULES:
- All tests use the in-memory backend and the fake clock from conftest.py
"""

import json

import pytest

from rsvp_reader.core.models import PlaybackSettings, SavedSession, Session, SessionSummary
from rsvp_reader.storage import SESSION_KEY, KeyValueStore, MemoryStore, SessionStore, StorageError
from rsvp_reader.storage.session_store import MAX_SAVED_AT_MS


class _BrokenStore(KeyValueStore):
    """Backend whose every operation fails."""

    def get(self, key):
        raise StorageError("storage unavailable")

    def set(self, key, value):
        raise StorageError("storage unavailable")

    def delete(self, key):
        raise OSError("read-only filesystem")


class TestRoundTrip:
    def test_load_returns_saved_session(self, session_store, sample_session, clock):
        assert session_store.save_session(sample_session) is True

        loaded = session_store.load_session()
        assert loaded == SavedSession(
            text=sample_session.text,
            current_word_index=sample_session.current_word_index,
            total_words=sample_session.total_words,
            settings=sample_session.settings,
            saved_at=clock.now,
        )

    def test_without_settings(self, session_store):
        session_store.save_session(Session(text="a b", current_word_index=1, total_words=2))
        loaded = session_store.load_session()
        assert loaded.settings is None
        assert "settings" not in json.loads(session_store.backend.get(SESSION_KEY))

    def test_save_replaces_previous_record(self, session_store):
        session_store.save_session(Session(text="first text", current_word_index=1, total_words=2))
        session_store.save_session(Session(text="second", current_word_index=0, total_words=1))
        loaded = session_store.load_session()
        assert loaded.text == "second"
        assert loaded.current_word_index == 0

    def test_persisted_keys(self, session_store, sample_session):
        session_store.save_session(sample_session)
        record = json.loads(session_store.backend.get(SESSION_KEY))
        assert set(record) == {"text", "currentWordIndex", "totalWords", "settings", "savedAt"}
        assert record["settings"]["wordsPerMinute"] == 420

    def test_empty_store_loads_none(self, session_store):
        assert session_store.load_session() is None
        assert session_store.has_session() is False

    def test_clear_then_load_is_none(self, session_store, sample_session):
        session_store.save_session(sample_session)
        assert session_store.has_session() is True
        assert session_store.clear_session() is True
        assert session_store.load_session() is None
        assert session_store.has_session() is False

    def test_clear_without_session_succeeds(self, session_store):
        assert session_store.clear_session() is True

    def test_custom_key(self, memory_store, sample_session):
        store = SessionStore(memory_store, key="other-session")
        store.save_session(sample_session)
        assert memory_store.get("other-session") is not None
        assert memory_store.get(SESSION_KEY) is None


class TestSavedAt:
    def test_uses_clock(self, session_store, sample_session, clock):
        clock.now = 1_800_000_000_123
        session_store.save_session(sample_session)
        assert session_store.load_session().saved_at == 1_800_000_000_123
        assert session_store.last_saved_at == 1_800_000_000_123

    def test_never_decreases(self, session_store, sample_session, clock):
        session_store.save_session(sample_session)
        first = session_store.load_session().saved_at

        clock.now -= 60_000  # wall clock stepped backwards
        session_store.save_session(sample_session)
        assert session_store.load_session().saved_at == first

    def test_default_clock_is_epoch_ms(self, memory_store, sample_session):
        import time

        store = SessionStore(memory_store)
        before = int(time.time() * 1000)
        store.save_session(sample_session)
        after = int(time.time() * 1000)
        assert before <= store.load_session().saved_at <= after


class TestFailSoft:
    def test_quota_exceeded_returns_false_and_keeps_old(self, sample_session, clock):
        store = SessionStore(MemoryStore(max_bytes=200), clock=clock)
        assert store.save_session(Session(text="short", current_word_index=0, total_words=1)) is True

        big = Session(text="word " * 500, current_word_index=3, total_words=500)
        assert store.save_session(big) is False
        assert store.load_session().text == "short"

    def test_failed_save_does_not_advance_last_saved_at(self, clock):
        store = SessionStore(MemoryStore(max_bytes=10), clock=clock)
        assert store.save_session(Session(text="x" * 100, current_word_index=0, total_words=1)) is False
        assert store.last_saved_at == 0

    def test_unserializable_session_returns_false(self, session_store):
        bad = Session(text=object(), current_word_index=0, total_words=0)
        assert session_store.save_session(bad) is False
        assert session_store.load_session() is None

    def test_broken_backend(self, sample_session):
        store = SessionStore(_BrokenStore())
        assert store.save_session(sample_session) is False
        assert store.load_session() is None
        assert store.has_session() is False
        assert store.clear_session() is False
        assert store.get_session_summary() is None


class TestCorruptRecords:
    @pytest.mark.parametrize(
        "raw",
        [
            "{not json",
            "",
            "null",
            "[]",
            '"just a string"',
            json.dumps({"currentWordIndex": 3}),
            json.dumps({"text": "a b", "currentWordIndex": -1}),
            json.dumps({"text": "a b", "currentWordIndex": "3"}),
            json.dumps({"text": 42, "currentWordIndex": 0}),
            json.dumps({"text": "a", "currentWordIndex": 0, "settings": "fast"}),
            '{"text": "a b", "currentWordIndex": 0, "savedAt": NaN}',
            '{"text": "a b", "currentWordIndex": 0, "savedAt": Infinity}',
            '{"text": "a b", "currentWordIndex": 0, "savedAt": 1e400}',
            '{"text": "a b", "currentWordIndex": 0, "savedAt": 1e300}',
            '{"text": "a b", "currentWordIndex": 0, "totalWords": -Infinity}',
        ],
    )
    def test_invalid_record_reads_as_absent(self, memory_store, session_store, raw):
        memory_store.set(SESSION_KEY, raw)
        assert session_store.load_session() is None
        assert session_store.get_session_summary() is None

    def test_has_session_reports_presence_of_any_record(self, memory_store, session_store):
        memory_store.set(SESSION_KEY, "{not json")
        assert session_store.has_session() is True


class TestCompatibility:
    def test_browser_record_loads(self, memory_store, session_store):
        memory_store.set(SESSION_KEY, json.dumps({
            "text": "one two three",
            "currentWordIndex": 2,
            "totalWords": 3,
            "settings": {"wordsPerMinute": 350, "pauseOnPunctuation": False},
            "savedAt": 1712345678901,
        }))
        loaded = session_store.load_session()
        assert loaded.current_word_index == 2
        assert loaded.saved_at == 1712345678901
        assert loaded.settings == PlaybackSettings(words_per_minute=350, pause_on_punctuation=False)

    def test_missing_optional_fields_default(self, memory_store, session_store):
        memory_store.set(SESSION_KEY, json.dumps({"text": "a b", "currentWordIndex": 1}))
        loaded = session_store.load_session()
        assert loaded.total_words == 0
        assert loaded.saved_at == 0
        assert loaded.settings is None

    def test_unknown_fields_ignored(self, memory_store, session_store):
        memory_store.set(SESSION_KEY, json.dumps({
            "text": "a b",
            "currentWordIndex": 1,
            "totalWords": 2,
            "savedAt": 5,
            "version": 9,
            "bookmarks": [1, 2],
        }))
        assert session_store.load_session().total_words == 2

    def test_latest_valid_saved_at(self, memory_store, session_store):
        memory_store.set(SESSION_KEY, json.dumps({"text": "a", "currentWordIndex": 0, "savedAt": MAX_SAVED_AT_MS}))
        assert session_store.load_session().saved_at == MAX_SAVED_AT_MS

    def test_null_settings(self, memory_store, session_store):
        memory_store.set(SESSION_KEY, json.dumps({"text": "a", "currentWordIndex": 0, "settings": None}))
        assert session_store.load_session().settings is None

    def test_stale_total_words_is_not_enforced(self, memory_store, session_store):
        memory_store.set(SESSION_KEY, json.dumps({"text": "a b", "currentWordIndex": 9, "totalWords": 40}))
        loaded = session_store.load_session()
        assert loaded.total_words == 40
        assert loaded.resume_index(loaded.text.split()) == 1


class TestSummary:
    def test_projection(self, session_store, sample_session, clock):
        session_store.save_session(sample_session)
        assert session_store.get_session_summary() == SessionSummary(
            current_word_index=7,
            total_words=sample_session.total_words,
            saved_at=clock.now,
            has_text=True,
        )

    def test_empty_text(self, session_store):
        session_store.save_session(Session(text="", current_word_index=0, total_words=0))
        assert session_store.get_session_summary().has_text is False

    def test_no_session(self, session_store):
        assert session_store.get_session_summary() is None
