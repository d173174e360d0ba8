"""Durable storage for the resumable reading session.

WHY: A reader pauses a long document and comes back days later. The
position, the text, and the settings have to survive restarts, but the
algorithmic core must not know where they live.

HOW: backends.py defines a tiny key-value interface with an in-memory and
an on-disk implementation. session_store.py serializes sessions onto any
backend and turns every storage failure into a sentinel result.

RULES:
- Backends raise; SessionStore never does
- One record per store key, fully replaced on every save
"""

from rsvp_reader.storage.backends import (
    FileStore,
    KeyValueStore,
    MemoryStore,
    StorageError,
    StorageQuotaExceeded,
)
from rsvp_reader.storage.session_store import SESSION_KEY, SessionStore

__all__ = [
    "FileStore",
    "KeyValueStore",
    "MemoryStore",
    "SESSION_KEY",
    "SessionStore",
    "StorageError",
    "StorageQuotaExceeded",
]
