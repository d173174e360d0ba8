"""Pydantic request/response models for the HTTP API.

WHY: The FastAPI endpoints need typed schemas for request validation,
response serialization, and automatic OpenAPI documentation. The browser
UI speaks the persisted camelCase field names, so the models do too.

HOW: Each endpoint has its own request and/or response model. Field
aliases map camelCase JSON onto snake_case attributes, and
``populate_by_name`` accepts either spelling on input.

RULES:
- All models use Field(description=...) for OpenAPI documentation
- Responses are serialized by alias (camelCase on the wire)
- Playback settings reuse the persisted key names exactly
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from rsvp_reader.core.models import PlaybackSettings


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


# ---------------------------------------------------------------------------
# Shared
# ---------------------------------------------------------------------------


class SettingsModel(_CamelModel):
    """Playback settings as sent by the UI."""

    words_per_minute: float = Field(
        default=300.0, alias="wordsPerMinute", description="Target reading speed."
    )
    fade_enabled: bool = Field(
        default=False, alias="fadeEnabled", description="Fade words in/out (display hint)."
    )
    fade_duration: float = Field(
        default=150.0, alias="fadeDuration", description="Fade length in ms (display hint)."
    )
    pause_on_punctuation: bool = Field(
        default=True, alias="pauseOnPunctuation", description="Stretch words ending in punctuation."
    )
    punctuation_pause_multiplier: float = Field(
        default=2.0,
        alias="punctuationPauseMultiplier",
        description="Delay factor for words ending in . ! ? ; :",
    )
    pause_after_words: int = Field(
        default=0, ge=0, alias="pauseAfterWords", description="Extra pause every N words (0 = off)."
    )
    pause_duration: float = Field(
        default=500.0, alias="pauseDuration", description="Length of the extra pause in ms."
    )
    word_length_wpm_multiplier: float = Field(
        default=0.0,
        ge=0,
        alias="wordLengthWPMMultiplier",
        description="Percent of extra time per character beyond 12 (0 = off).",
    )

    def to_settings(self) -> PlaybackSettings:
        return PlaybackSettings(**self.model_dump())

    @classmethod
    def from_settings(cls, settings: PlaybackSettings) -> SettingsModel:
        return cls(**settings.to_dict())


# ---------------------------------------------------------------------------
# Documents
# ---------------------------------------------------------------------------


class DocumentResponse(_CamelModel):
    """Text extracted from an uploaded document."""

    filename: str = Field(description="Uploaded filename.")
    text: str = Field(description="Cleaned document text.")
    total_words: int = Field(alias="totalWords", description="Number of tokens in the text.")
    time_remaining: str = Field(
        alias="timeRemaining", description="Reading time at the default speed, as M:SS."
    )


# ---------------------------------------------------------------------------
# Playback
# ---------------------------------------------------------------------------


class StepsRequest(_CamelModel):
    """A range of words to prepare for display."""

    text: str = Field(description="Full document text.")
    start: int = Field(default=0, ge=0, description="Index of the first word to prepare.")
    count: int = Field(default=50, ge=1, le=1000, description="Number of words to prepare.")
    settings: SettingsModel = Field(default_factory=SettingsModel)


class WordStep(_CamelModel):
    """One word, split around its ORP letter, with its display timing."""

    index: int = Field(description="Position of the word in the document.")
    word: str = Field(description="The token.")
    before: str = Field(description="Characters left of the ORP letter.")
    orp: str = Field(description="The highlighted letter.")
    after: str = Field(description="Characters right of the ORP letter.")
    delay_ms: float = Field(alias="delayMs", description="How long to show the word.")
    pause_after: bool = Field(
        alias="pauseAfter", description="Whether the periodic extra pause applies here."
    )


class StepsResponse(_CamelModel):
    total_words: int = Field(alias="totalWords", description="Tokens in the document.")
    percentage: int = Field(description="Progress at the first requested word.")
    time_remaining: str = Field(
        alias="timeRemaining", description="Reading time from the first requested word."
    )
    steps: List[WordStep] = Field(description="Prepared words, in order.")


class FrameRequest(_CamelModel):
    text: str = Field(description="Full document text.")
    center: int = Field(description="Cursor position.")
    frame_size: int = Field(default=3, alias="frameSize", description="Words to show at once.")


class FrameResponse(_CamelModel):
    subset: List[str] = Field(description="Words in the window.")
    center_offset: int = Field(alias="centerOffset", description="Cursor position within subset.")


# ---------------------------------------------------------------------------
# Session
# ---------------------------------------------------------------------------


class SessionRequest(_CamelModel):
    """The session to persist."""

    text: str = Field(description="Full document text.")
    current_word_index: int = Field(ge=0, alias="currentWordIndex", description="Cursor position.")
    total_words: int = Field(ge=0, alias="totalWords", description="Token count of text.")
    settings: Optional[SettingsModel] = Field(default=None, description="Playback settings.")


class SessionResponse(SessionRequest):
    saved_at: int = Field(alias="savedAt", description="Save time in epoch milliseconds.")


class SessionSavedResponse(_CamelModel):
    saved: bool = Field(description="Always true; failures return 507.")
    saved_at: Optional[int] = Field(
        default=None, alias="savedAt", description="Save time in epoch milliseconds."
    )


class SessionSummaryResponse(_CamelModel):
    current_word_index: int = Field(alias="currentWordIndex", description="Saved cursor position.")
    total_words: int = Field(alias="totalWords", description="Saved token count.")
    saved_at: int = Field(alias="savedAt", description="Save time in epoch milliseconds.")
    has_text: bool = Field(alias="hasText", description="Whether the record holds any text.")
    percentage: int = Field(description="Saved progress in whole percent.")


# ---------------------------------------------------------------------------
# Misc
# ---------------------------------------------------------------------------


class ErrorResponse(BaseModel):
    detail: str = Field(description="Human-readable error message.")


class HealthResponse(BaseModel):
    status: str = Field(description="Always 'ok' when the service is up.")
    version: str = Field(description="Package version.")
