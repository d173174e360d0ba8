"""Unit tests for document extraction.

WHY: Extraction is the only way text gets into the reader. Dispatching on
the wrong extension, reading EPUB chapters out of order, or letting a
library exception escape unwrapped would break the upload endpoint and
the CLI.

HOW: Plain text uses real files in tmp_path. PDF and EPUB replace the
library entry points (PdfReader, epub.read_epub) with small fakes via
monkeypatch, plus one real blank PDF written with pypdf's PdfWriter.

RULES:
- No test depends on sample documents shipped with the repo
"""

import zipfile

import ebooklib
import pytest
from pypdf import PdfWriter
from pypdf.errors import PdfReadError

from rsvp_reader.config import SUPPORTED_DOCUMENT_FORMATS
from rsvp_reader.extractors import (
    EXTRACTORS,
    ExtractionError,
    UnsupportedFormatError,
    extract_text,
    get_extractor,
    supported_extensions,
)
from rsvp_reader.extractors import epub as epub_module
from rsvp_reader.extractors import pdf as pdf_module
from rsvp_reader.extractors.epub import EpubExtractor
from rsvp_reader.extractors.pdf import PdfExtractor
from rsvp_reader.extractors.plain_text import PlainTextExtractor

# ---------------------------------------------------------------------------
# Fakes
# ---------------------------------------------------------------------------


class _FakePage:
    def __init__(self, text=None, error=None):
        self._text = text
        self._error = error

    def extract_text(self):
        if self._error:
            raise self._error
        return self._text


class _FakeItem:
    def __init__(self, content, item_type=ebooklib.ITEM_DOCUMENT, error=None):
        self._content = content
        self._type = item_type
        self._error = error

    def get_type(self):
        return self._type

    def get_content(self):
        if self._error:
            raise self._error
        return self._content


class _FakeBook:
    def __init__(self, spine, items):
        self.spine = spine
        self._items = items

    def get_item_with_id(self, idref):
        return self._items.get(idref)


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------


class TestRegistry:
    def test_registered_extensions(self):
        assert supported_extensions() == [".epub", ".pdf", ".txt"]

    def test_matches_configured_formats(self):
        assert set(EXTRACTORS) == SUPPORTED_DOCUMENT_FORMATS

    @pytest.mark.parametrize(
        "name,cls",
        [
            ("book.PDF", PdfExtractor),
            ("novel.epub", EpubExtractor),
            ("notes.txt", PlainTextExtractor),
        ],
    )
    def test_dispatch_is_case_insensitive(self, name, cls):
        assert isinstance(get_extractor(name), cls)

    @pytest.mark.parametrize("name", ["report.docx", "archive.zip", "README"])
    def test_unsupported_format(self, name):
        with pytest.raises(UnsupportedFormatError) as excinfo:
            get_extractor(name)
        assert ".pdf" in str(excinfo.value)

    def test_unsupported_format_is_value_error(self):
        with pytest.raises(ValueError):
            extract_text("slides.pptx")

    def test_extractor_names(self):
        assert [EXTRACTORS[e]().name for e in supported_extensions()] == ["EPUB", "PDF", "Plain text"]


# ---------------------------------------------------------------------------
# Plain text
# ---------------------------------------------------------------------------


class TestPlainText:
    def test_reads_and_cleans(self, tmp_path):
        path = tmp_path / "notes.txt"
        path.write_text("  Hello\n\nworld!!!  Привет  ", encoding="utf-8")
        assert extract_text(path) == "Hello world! Привет"

    def test_missing_file(self, tmp_path):
        with pytest.raises(ExtractionError):
            extract_text(tmp_path / "missing.txt")

    def test_invalid_utf8(self, tmp_path):
        path = tmp_path / "latin1.txt"
        path.write_bytes("café".encode("latin-1"))
        with pytest.raises(ExtractionError):
            extract_text(path)


# ---------------------------------------------------------------------------
# PDF
# ---------------------------------------------------------------------------


class TestPdf:
    def test_joins_pages_with_spaces(self, monkeypatch):
        class FakeReader:
            def __init__(self, path):
                self.pages = [_FakePage("First page\nends"), _FakePage("second... page")]

        monkeypatch.setattr(pdf_module, "PdfReader", FakeReader)
        assert PdfExtractor().extract("doc.pdf") == "First page ends second. page"

    def test_skips_unreadable_page(self, monkeypatch):
        class FakeReader:
            def __init__(self, path):
                self.pages = [
                    _FakePage("kept"),
                    _FakePage(error=PdfReadError("bad stream")),
                    _FakePage(None),
                    _FakePage("also kept"),
                ]

        monkeypatch.setattr(pdf_module, "PdfReader", FakeReader)
        assert PdfExtractor().extract("doc.pdf") == "kept also kept"

    def test_unreadable_document(self, monkeypatch):
        def broken_reader(path):
            raise PdfReadError("EOF marker not found")

        monkeypatch.setattr(pdf_module, "PdfReader", broken_reader)
        with pytest.raises(ExtractionError):
            PdfExtractor().extract("doc.pdf")

    def test_real_blank_pdf(self, tmp_path):
        path = tmp_path / "blank.pdf"
        writer = PdfWriter()
        writer.add_blank_page(width=200, height=200)
        with open(path, "wb") as f:
            writer.write(f)
        assert extract_text(path) == ""

    def test_not_a_pdf(self, tmp_path):
        path = tmp_path / "fake.pdf"
        path.write_bytes(b"this is not a pdf")
        with pytest.raises(ExtractionError):
            extract_text(path)


# ---------------------------------------------------------------------------
# EPUB
# ---------------------------------------------------------------------------


class TestEpub:
    def _patch_book(self, monkeypatch, book):
        monkeypatch.setattr(epub_module.epub, "read_epub", lambda path: book)

    def test_follows_spine_order(self, monkeypatch):
        book = _FakeBook(
            spine=[("ch2", "yes"), ("ch1", "yes")],
            items={
                "ch1": _FakeItem(b"<html><body><p>Chapter one.</p></body></html>"),
                "ch2": _FakeItem(b"<html><body><p>Chapter two.</p></body></html>"),
            },
        )
        self._patch_book(monkeypatch, book)
        assert EpubExtractor().extract("book.epub") == "Chapter two. Chapter one."

    def test_strips_script_style_and_nav(self, monkeypatch):
        html = (
            b"<html><head><style>p {color: red}</style></head><body>"
            b"<nav>Contents</nav><script>var x = 1;</script>"
            b"<p>Visible <em>text</em></p></body></html>"
        )
        book = _FakeBook(spine=[("ch1", "yes")], items={"ch1": _FakeItem(html)})
        self._patch_book(monkeypatch, book)
        assert EpubExtractor().extract("book.epub") == "Visible text"

    def test_skips_non_documents_and_missing_items(self, monkeypatch):
        book = _FakeBook(
            spine=[("cover", "no"), ("gone", "yes"), ("ch1", "yes")],
            items={
                "cover": _FakeItem(b"\x89PNG", item_type=ebooklib.ITEM_IMAGE),
                "ch1": _FakeItem(b"<p>Body</p>"),
            },
        )
        self._patch_book(monkeypatch, book)
        assert EpubExtractor().extract("book.epub") == "Body"

    def test_skips_section_that_fails(self, monkeypatch):
        book = _FakeBook(
            spine=[("bad", "yes"), ("ch1", "yes")],
            items={
                "bad": _FakeItem(b"", error=KeyError("missing resource")),
                "ch1": _FakeItem(b"<p>Survivor</p>"),
            },
        )
        self._patch_book(monkeypatch, book)
        assert EpubExtractor().extract("book.epub") == "Survivor"

    def test_unreadable_book(self, monkeypatch):
        def broken(path):
            raise zipfile.BadZipFile("File is not a zip file")

        monkeypatch.setattr(epub_module.epub, "read_epub", broken)
        with pytest.raises(ExtractionError):
            EpubExtractor().extract("book.epub")

    def test_real_file_that_is_not_an_epub(self, tmp_path):
        path = tmp_path / "fake.epub"
        path.write_bytes(b"plain bytes")
        with pytest.raises(ExtractionError):
            extract_text(path)
