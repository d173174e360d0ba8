"""Document extractor registry — file extension to extractor class.

WHY: The CLI and the HTTP API both receive a file and need its text. A
central dict keyed by extension keeps dispatch in one place and makes a
new format a one-line registration.

HOW: EXTRACTORS maps lowercase extensions to extractor *classes*.
extract_text() picks the class for a path's suffix, instantiates it, and
returns the cleaned text.

RULES:
- Keys are lowercase extensions with the leading dot
- Unknown extensions raise UnsupportedFormatError naming the supported ones
- Extraction failures surface as ExtractionError
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Type

from rsvp_reader.extractors.base import BaseExtractor, ExtractionError, UnsupportedFormatError
from rsvp_reader.extractors.epub import EpubExtractor
from rsvp_reader.extractors.pdf import PdfExtractor
from rsvp_reader.extractors.plain_text import PlainTextExtractor

EXTRACTORS: Dict[str, Type[BaseExtractor]] = {
    ext: cls
    for cls in (PdfExtractor, EpubExtractor, PlainTextExtractor)
    for ext in cls.extensions
}


def supported_extensions() -> List[str]:
    """Registered extensions, sorted."""
    return sorted(EXTRACTORS)


def get_extractor(path: str | Path) -> BaseExtractor:
    """Return an extractor instance for ``path``'s extension.

    Raises:
        UnsupportedFormatError: If no extractor handles the extension.
    """
    ext = Path(path).suffix.lower()
    cls = EXTRACTORS.get(ext)
    if cls is None:
        raise UnsupportedFormatError(
            "Unsupported file type '{}'. Supported formats: {}".format(
                ext or Path(path).name, ", ".join(supported_extensions())
            )
        )
    return cls()


def extract_text(path: str | Path) -> str:
    """Extract cleaned text from the document at ``path``."""
    return get_extractor(path).extract(path)


__all__ = [
    "EXTRACTORS",
    "BaseExtractor",
    "ExtractionError",
    "UnsupportedFormatError",
    "extract_text",
    "get_extractor",
    "supported_extensions",
]
