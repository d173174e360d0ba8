"""Key-value storage backends for the session store.

WHY: The session record lives under a single well-known key. Modelling
that as a small get/set/delete interface lets the API use a directory on
disk, lets tests use memory, and keeps both out of the session logic.

HOW: KeyValueStore is an ABC with three methods. MemoryStore keeps values
in a dict behind a threading.Lock and can simulate a storage quota.
FileStore writes one ``<key>.json`` file per key, staging each write in a
temporary file and moving it into place with os.replace().

RULES:
- get() returns None for a missing key (no exception)
- delete() of a missing key is a no-op
- A failed set() leaves the previous value intact
- Backends raise StorageError / OSError; callers decide how to recover
- Keys are restricted to letters, digits, "-", "_" and "." so FileStore
  can never escape its directory
"""

from __future__ import annotations

import logging
import os
import re
import tempfile
import threading
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Optional

logger = logging.getLogger(__name__)

_KEY_RE = re.compile(r"^[A-Za-z0-9_.-]+$")


class StorageError(Exception):
    """A backend could not read or write a value."""


class StorageQuotaExceeded(StorageError):
    """A write would exceed the backend's size limit."""


def _check_key(key: str) -> None:
    if not _KEY_RE.match(key) or key in (".", ".."):
        raise StorageError("Invalid storage key: {!r}".format(key))


class KeyValueStore(ABC):
    """Abstract string key → string value store.

    To add a backend: subclass, implement get/set/delete, and pass an
    instance to SessionStore.
    """

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """Return the value stored under ``key``, or None."""

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Store ``value`` under ``key``, replacing any previous value."""

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove ``key`` if present."""


class MemoryStore(KeyValueStore):
    """Thread-safe in-memory store with an optional byte quota.

    RULES:
    - max_bytes=None means unlimited
    - The quota counts UTF-8 bytes of all values after the write
    - A write over quota raises StorageQuotaExceeded and changes nothing
    """

    def __init__(self, max_bytes: Optional[int] = None) -> None:
        self._data: Dict[str, str] = {}
        self._lock = threading.Lock()
        self.max_bytes = max_bytes

    def get(self, key: str) -> Optional[str]:
        with self._lock:
            return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        _check_key(key)
        with self._lock:
            if self.max_bytes is not None:
                used = sum(
                    len(v.encode("utf-8")) for k, v in self._data.items() if k != key
                )
                needed = used + len(value.encode("utf-8"))
                if needed > self.max_bytes:
                    raise StorageQuotaExceeded(
                        "Storage quota exceeded ({} > {} bytes)".format(needed, self.max_bytes)
                    )
            self._data[key] = value

    def delete(self, key: str) -> None:
        with self._lock:
            self._data.pop(key, None)


class FileStore(KeyValueStore):
    """One JSON file per key inside ``directory``.

    WHY: Sessions must survive process restarts. A file per key is the
    simplest durable layout and is easy to inspect by hand.

    HOW: Writes go to a NamedTemporaryFile in the same directory, are
    flushed and fsynced, then atomically renamed over the target. The
    directory is created on first write.

    RULES:
    - Values are UTF-8 text
    - The rename is atomic on POSIX and Windows for same-volume paths
    - Leftover temp files from a crash are ignored by get()
    """

    SUFFIX = ".json"

    def __init__(self, directory: str | Path) -> None:
        self.directory = Path(directory).expanduser()
        self._lock = threading.Lock()

    def _path(self, key: str) -> Path:
        _check_key(key)
        return self.directory / "{}{}".format(key, self.SUFFIX)

    def get(self, key: str) -> Optional[str]:
        path = self._path(key)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None

    def set(self, key: str, value: str) -> None:
        path = self._path(key)
        with self._lock:
            self.directory.mkdir(parents=True, exist_ok=True)
            tmp = tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=self.directory,
                prefix=".{}-".format(key),
                suffix=".tmp",
                delete=False,
            )
            try:
                with tmp:
                    tmp.write(value)
                    tmp.flush()
                    os.fsync(tmp.fileno())
                os.replace(tmp.name, path)
            except BaseException:
                try:
                    os.unlink(tmp.name)
                except OSError:
                    logger.warning("Failed to remove temp file: %s", tmp.name)
                raise

    def delete(self, key: str) -> None:
        path = self._path(key)
        with self._lock:
            try:
                path.unlink()
            except FileNotFoundError:
                pass
