"""Abstract base extractor and extraction errors.

WHY: Every document format ends up as the same thing — one cleaned string
for the tokenizer — but each needs a different library to get there. A
shared base class lets the CLI and API dispatch on extension without
knowing which library is behind it.

HOW: BaseExtractor is an ABC with a ``name`` property, an ``extensions``
tuple, and ``extract(path) -> str``. Two exceptions separate "we do not
read this kind of file" from "we tried and the file was unreadable".

RULES:
- extract() returns text already passed through clean_text()
- Library failures are re-raised as ExtractionError with the path
- UnsupportedFormatError is a ValueError, ExtractionError a RuntimeError

To add a new format:
1. Create a new file in extractors/
2. Subclass BaseExtractor
3. Implement name, extensions and extract()
4. Register it in EXTRACTORS in extractors/__init__.py
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Tuple


class UnsupportedFormatError(ValueError):
    """No extractor is registered for the file's extension."""


class ExtractionError(RuntimeError):
    """The extractor's library could not read the document."""


class BaseExtractor(ABC):
    """Abstract base for all document extractors."""

    extensions: Tuple[str, ...] = ()

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable format name, e.g. 'PDF'."""

    @abstractmethod
    def extract(self, path: str | Path) -> str:
        """Read the document at ``path`` and return its cleaned text.

        Raises:
            ExtractionError: If the document cannot be read.
        """
