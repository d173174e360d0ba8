"""Save, restore, and summarise the single resumable reading session.

WHY: Readers pause long documents and expect to pick up on the exact word
later, with their speed and pause settings intact. Storage can fail in
ordinary ways (full disk, quota, a hand-edited or truncated file), and
none of those may crash the player: "session failed to load" and "no
saved session" must look the same to the caller.

HOW: SessionStore serializes a Session to JSON under one key of an
injected KeyValueStore. Loading parses the JSON and validates it against a
permissive jsonschema before building a SavedSession. Every public method
catches failures, logs them, and returns a sentinel (False / None).

RULES:
- Persisted keys: text, currentWordIndex, totalWords, settings?, savedAt
- savedAt is epoch milliseconds, non-decreasing across saves through the
  same SessionStore instance
- Each save fully replaces the previous record (no merge, no history)
- No schema version: unknown fields are ignored, missing optional fields
  take defaults (totalWords 0, savedAt 0, settings None)
- text and a non-negative integer currentWordIndex are required; a record
  without them is treated as absent
- savedAt must be finite and no later than MAX_SAVED_AT_MS; NaN and
  Infinity literals make the whole record unreadable
- Public methods never raise
"""

from __future__ import annotations

import json
import logging
import threading
import time
from typing import Any, Callable, Dict, Optional

import jsonschema

from rsvp_reader.core.models import PlaybackSettings, SavedSession, Session, SessionSummary
from rsvp_reader.storage.backends import KeyValueStore

logger = logging.getLogger(__name__)

SESSION_KEY = "rsvp-reading-session"
"""Storage key of the session record; shared with the browser build."""

MAX_SAVED_AT_MS = 253_402_300_799_999
"""Last millisecond of 9999-12-31 UTC; later savedAt values are corrupt."""

SESSION_RECORD_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "required": ["text", "currentWordIndex"],
    "properties": {
        "text": {"type": "string"},
        "currentWordIndex": {"type": "integer", "minimum": 0},
        "totalWords": {"type": "integer", "minimum": 0},
        "savedAt": {"type": "number", "minimum": 0, "maximum": MAX_SAVED_AT_MS},
        "settings": {"type": ["object", "null"]},
    },
}


def _epoch_ms() -> int:
    return int(time.time() * 1000)


def _reject_constant(name: str) -> Any:
    raise ValueError("non-finite number {} in session record".format(name))


class SessionStore:
    """Fail-soft persistence for one Session record.

    Args:
        backend: Where the serialized record lives.
        key: Storage key for the record.
        clock: Returns the current time in epoch milliseconds; injectable
            for tests.
    """

    def __init__(
        self,
        backend: KeyValueStore,
        key: str = SESSION_KEY,
        clock: Optional[Callable[[], int]] = None,
    ) -> None:
        self.backend = backend
        self.key = key
        self._clock = clock or _epoch_ms
        self._last_saved_at = 0
        self._lock = threading.Lock()

    @property
    def last_saved_at(self) -> int:
        """savedAt of the most recent successful save through this store, or 0."""
        return self._last_saved_at

    def save_session(self, session: Session) -> bool:
        """Persist ``session`` as the only record.

        Returns:
            True on success, False on any serialization or storage failure.
        """
        try:
            with self._lock:
                saved_at = max(int(self._clock()), self._last_saved_at)
                record: Dict[str, Any] = {
                    "text": session.text,
                    "currentWordIndex": session.current_word_index,
                    "totalWords": session.total_words,
                }
                if session.settings is not None:
                    record["settings"] = session.settings.to_dict()
                record["savedAt"] = saved_at

                self.backend.set(self.key, json.dumps(record, ensure_ascii=False))
                self._last_saved_at = saved_at
        except Exception:
            logger.exception("Failed to save session under key %s", self.key)
            return False

        logger.info(
            "Saved session at word %s of %s",
            session.current_word_index,
            session.total_words,
        )
        return True

    def load_session(self) -> Optional[SavedSession]:
        """Return the saved session, or None if absent or unreadable."""
        record = self._read_record()
        if record is None:
            return None

        settings_data = record.get("settings")
        return SavedSession(
            text=record["text"],
            current_word_index=int(record["currentWordIndex"]),
            total_words=int(record.get("totalWords", 0)),
            settings=(
                PlaybackSettings.from_dict(settings_data)
                if isinstance(settings_data, dict)
                else None
            ),
            saved_at=int(record.get("savedAt", 0)),
        )

    def has_session(self) -> bool:
        """True if a record exists under the key (valid or not)."""
        try:
            return self.backend.get(self.key) is not None
        except Exception:
            logger.warning("Could not check for saved session", exc_info=True)
            return False

    def clear_session(self) -> bool:
        """Delete the record. Returns False if the backend refused."""
        try:
            self.backend.delete(self.key)
        except Exception:
            logger.exception("Failed to clear session under key %s", self.key)
            return False
        logger.info("Cleared saved session")
        return True

    def get_session_summary(self) -> Optional[SessionSummary]:
        """Project cursor, word count, save time, and text presence."""
        record = self._read_record()
        if record is None:
            return None
        text = record.get("text")
        return SessionSummary(
            current_word_index=int(record["currentWordIndex"]),
            total_words=int(record.get("totalWords", 0)),
            saved_at=int(record.get("savedAt", 0)),
            has_text=isinstance(text, str) and len(text) > 0,
        )

    def _read_record(self) -> Optional[Dict[str, Any]]:
        """Fetch, parse, and validate the raw record; None on any problem."""
        try:
            raw = self.backend.get(self.key)
        except Exception:
            logger.exception("Failed to read session under key %s", self.key)
            return None
        if raw is None:
            return None

        try:
            record = json.loads(raw, parse_constant=_reject_constant)
            jsonschema.validate(instance=record, schema=SESSION_RECORD_SCHEMA)
        except (ValueError, jsonschema.ValidationError) as exc:
            logger.warning("Ignoring unreadable session record: %s", exc)
            return None
        return record
