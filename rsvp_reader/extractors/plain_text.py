"""Plain UTF-8 text files."""

from __future__ import annotations

from pathlib import Path

from rsvp_reader.core.tokenizer import clean_text
from rsvp_reader.extractors.base import BaseExtractor, ExtractionError


class PlainTextExtractor(BaseExtractor):
    extensions = (".txt",)

    @property
    def name(self) -> str:
        return "Plain text"

    def extract(self, path: str | Path) -> str:
        try:
            raw = Path(path).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise ExtractionError("Could not read text file {}: {}".format(path, exc)) from exc
        return clean_text(raw)
