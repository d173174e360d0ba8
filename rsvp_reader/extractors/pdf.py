"""PDF text extraction with pypdf.

HOW: Each page's extracted text is joined with a space so words at page
boundaries do not fuse, then the whole string goes through clean_text().
A page that pypdf cannot decode contributes nothing instead of failing
the document.
"""

from __future__ import annotations

import logging
from pathlib import Path

from pypdf import PdfReader
from pypdf.errors import PyPdfError

from rsvp_reader.core.tokenizer import clean_text
from rsvp_reader.extractors.base import BaseExtractor, ExtractionError

logger = logging.getLogger(__name__)


class PdfExtractor(BaseExtractor):
    extensions = (".pdf",)

    @property
    def name(self) -> str:
        return "PDF"

    def extract(self, path: str | Path) -> str:
        try:
            reader = PdfReader(str(path))
            pages = list(reader.pages)
        except (PyPdfError, OSError, ValueError) as exc:
            raise ExtractionError("Could not read PDF {}: {}".format(path, exc)) from exc

        page_texts = []
        for number, page in enumerate(pages, start=1):
            try:
                page_texts.append(page.extract_text() or "")
            except (PyPdfError, ValueError, KeyError):
                logger.warning("Skipping unreadable page %d of %s", number, path, exc_info=True)

        logger.info("Extracted %d page(s) from %s", len(pages), path)
        return clean_text(" ".join(page_texts))
