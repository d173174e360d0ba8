"""EPUB text extraction with ebooklib and BeautifulSoup.

WHY: An EPUB is a zip of XHTML chapters plus a spine that fixes their
reading order. Iterating the archive's items directly would scramble
chapters, so the spine is the source of truth.

HOW: Read the book with ebooklib, walk ``book.spine`` in order, resolve
each idref to a document item, strip script/style/nav tags with
BeautifulSoup and keep the visible text. Sections are joined with spaces
and passed through clean_text().

RULES:
- Only document items listed in the spine are read
- A section that fails to parse is logged and skipped
- A book that cannot be opened at all raises ExtractionError
"""

from __future__ import annotations

import logging
import zipfile
from pathlib import Path
from typing import List

import ebooklib
from bs4 import BeautifulSoup
from ebooklib import epub

from rsvp_reader.core.tokenizer import clean_text
from rsvp_reader.extractors.base import BaseExtractor, ExtractionError

logger = logging.getLogger(__name__)


def _section_text(content: bytes) -> str:
    soup = BeautifulSoup(content, "html.parser")
    for tag in soup(["script", "style", "nav"]):
        tag.decompose()
    body = soup.body or soup
    return body.get_text(separator=" ", strip=True)


class EpubExtractor(BaseExtractor):
    extensions = (".epub",)

    @property
    def name(self) -> str:
        return "EPUB"

    def extract(self, path: str | Path) -> str:
        try:
            book = epub.read_epub(str(path))
        except (epub.EpubException, zipfile.BadZipFile, KeyError, OSError) as exc:
            raise ExtractionError("Could not read EPUB {}: {}".format(path, exc)) from exc

        sections: List[str] = []
        for idref, _linear in book.spine:
            item = book.get_item_with_id(idref)
            if item is None or item.get_type() != ebooklib.ITEM_DOCUMENT:
                continue
            try:
                text = _section_text(item.get_content())
            except Exception:
                logger.warning("Could not load section %s of %s", idref, path, exc_info=True)
                continue
            if text:
                sections.append(text)

        logger.info("Extracted %d section(s) from %s", len(sections), path)
        return clean_text(" ".join(sections))
