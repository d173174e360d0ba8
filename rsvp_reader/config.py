"""Configuration constants, supported formats, and .env loading.

WHY: Centralizes every configurable value — where the session lives, the
default reading speed, log level, server bind address — so they are easy
to find and override without touching logic.

HOW: python-dotenv loads the .env file on import. Constants are module
level and read from the environment with documented defaults.
default_settings() builds the PlaybackSettings a new reader starts with.

RULES:
- All defaults can be overridden via environment variables
- SUPPORTED_DOCUMENT_FORMATS lists accepted extensions (lowercase, with dot)
- A malformed numeric override raises ValueError naming the variable
"""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

from rsvp_reader.core.models import DEFAULT_WORDS_PER_MINUTE, PlaybackSettings

# Load .env from the project root (where the script is run from)
load_dotenv()

# ---------------------------------------------------------------------------
# Documents
# ---------------------------------------------------------------------------

SUPPORTED_DOCUMENT_FORMATS: set[str] = {".pdf", ".epub", ".txt"}
"""Document extensions the extractors accept (lowercase, with dot)."""

# ---------------------------------------------------------------------------
# Session storage
# ---------------------------------------------------------------------------

SESSION_DIR = Path(os.getenv("RSVP_SESSION_DIR", "~/.rsvp_reader")).expanduser()
SESSION_KEY = os.getenv("RSVP_SESSION_KEY", "rsvp-reading-session")

# ---------------------------------------------------------------------------
# Logging and server
# ---------------------------------------------------------------------------

LOG_LEVEL = os.getenv("RSVP_LOG_LEVEL", "INFO").upper()
HOST = os.getenv("RSVP_HOST", "127.0.0.1")


def server_port() -> int:
    """Read RSVP_PORT, falling back to 8000."""
    raw = os.getenv("RSVP_PORT", "").strip()
    if not raw:
        return 8000
    try:
        return int(raw)
    except ValueError:
        raise ValueError(
            "RSVP_PORT must be an integer, got {!r}.".format(raw)
        ) from None


PORT = server_port()


def default_words_per_minute() -> float:
    """Read RSVP_DEFAULT_WPM, falling back to 300.

    RULES:
    - Raises ValueError if the variable is set but not a positive number
    """
    raw = os.getenv("RSVP_DEFAULT_WPM", "").strip()
    if not raw:
        return DEFAULT_WORDS_PER_MINUTE
    try:
        wpm = float(raw)
    except ValueError:
        raise ValueError(
            "RSVP_DEFAULT_WPM must be a number, got {!r}.".format(raw)
        ) from None
    if wpm <= 0:
        raise ValueError("RSVP_DEFAULT_WPM must be positive, got {!r}.".format(raw))
    return wpm


def default_settings() -> PlaybackSettings:
    """PlaybackSettings for a reader with no saved session."""
    return PlaybackSettings(words_per_minute=default_words_per_minute())
