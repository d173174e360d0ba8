"""FastAPI application exposing extraction, playback helpers, and the session.

WHY: The reading UI runs in a browser and cannot open PDFs or EPUBs
itself, and it should not re-implement the ORP and timing rules. A small
local HTTP API lets it upload a document, fetch words ready to display,
and save or resume the reading session.

HOW: A single FastAPI app with endpoints grouped by tags:
  documents — POST /documents: upload → extracted text and word count
  playback  — POST /playback/steps, POST /playback/frame
  session   — GET/PUT/DELETE /session, GET /session/summary
  health    — GET /health
Extraction runs in a worker thread (run_in_threadpool) because the
document libraries are blocking.

RULES:
- All endpoints have OpenAPI descriptions
- Error responses use the ErrorResponse schema
- The session store is a module-level singleton backed by FileStore
- A refused save answers 507; a missing or unreadable session answers 404
- Uploaded files live in a temporary directory removed after extraction
"""

from __future__ import annotations

import logging
import tempfile
from pathlib import Path
from typing import Annotated

from fastapi import FastAPI, File, HTTPException, UploadFile
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import Response

from rsvp_reader import __version__
from rsvp_reader.config import SESSION_DIR, SESSION_KEY, SUPPORTED_DOCUMENT_FORMATS, default_settings
from rsvp_reader.core.frame import extract_word_frame
from rsvp_reader.core.models import Session
from rsvp_reader.core.orp import split_word_for_display
from rsvp_reader.core.progress import word_index_to_percentage
from rsvp_reader.core.timing import format_time_remaining, should_pause_at_word
from rsvp_reader.core.tokenizer import parse_text
from rsvp_reader.extractors import ExtractionError, UnsupportedFormatError, extract_text
from rsvp_reader.server.models import (
    DocumentResponse,
    ErrorResponse,
    FrameRequest,
    FrameResponse,
    HealthResponse,
    SessionRequest,
    SessionResponse,
    SessionSavedResponse,
    SessionSummaryResponse,
    SettingsModel,
    StepsRequest,
    StepsResponse,
    WordStep,
)
from rsvp_reader.storage import FileStore, SessionStore

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# App and store setup
# ---------------------------------------------------------------------------

session_store = SessionStore(FileStore(SESSION_DIR), key=SESSION_KEY)

app = FastAPI(
    title="RSVP Reader API",
    description=(
        "Local API for a speed-reading UI: extract text from PDF/EPUB/TXT "
        "documents, prepare words with their ORP letter and display delay, "
        "and save or resume the reading session."
    ),
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _validate_file_extension(filename: str) -> None:
    """Raise HTTPException if the file extension is not supported."""
    ext = Path(filename).suffix.lower()
    if ext not in SUPPORTED_DOCUMENT_FORMATS:
        raise HTTPException(
            status_code=400,
            detail="Unsupported file type '{}'. Supported formats: {}".format(
                ext, ", ".join(sorted(SUPPORTED_DOCUMENT_FORMATS))
            ),
        )


def _extract_upload(filename: str, content: bytes) -> str:
    """Write the upload to a temp dir and extract its text."""
    with tempfile.TemporaryDirectory(prefix="rsvp_upload_") as tmp:
        path = Path(tmp) / filename
        path.write_bytes(content)
        return extract_text(path)


# ---------------------------------------------------------------------------
# Endpoints: Documents
# ---------------------------------------------------------------------------


@app.post(
    "/documents",
    response_model=DocumentResponse,
    tags=["documents"],
    summary="Extract text from a document",
    description=(
        "Upload a PDF, EPUB, or plain-text file. Returns the cleaned text, "
        "its word count, and the reading time at the default speed."
    ),
    responses={
        400: {"model": ErrorResponse, "description": "Unsupported file type"},
        422: {"model": ErrorResponse, "description": "Document could not be read"},
    },
)
async def create_document(
    file: Annotated[UploadFile, File(description="PDF, EPUB, or TXT document")],
) -> DocumentResponse:
    # Sanitize filename to prevent path traversal
    filename = Path(file.filename or "upload").name
    _validate_file_extension(filename)

    content = await file.read()
    try:
        text = await run_in_threadpool(_extract_upload, filename, content)
    except UnsupportedFormatError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    except ExtractionError as exc:
        logger.warning("Extraction failed for %s: %s", filename, exc)
        raise HTTPException(status_code=422, detail=str(exc))

    total = len(parse_text(text))
    settings = default_settings()
    return DocumentResponse(
        filename=filename,
        text=text,
        total_words=total,
        time_remaining=format_time_remaining(total, settings.words_per_minute),
    )


# ---------------------------------------------------------------------------
# Endpoints: Playback
# ---------------------------------------------------------------------------


@app.post(
    "/playback/steps",
    response_model=StepsResponse,
    tags=["playback"],
    summary="Prepare words for display",
    description=(
        "Tokenizes the text and returns up to `count` words from `start`, "
        "each split around its ORP letter with its display delay and "
        "whether the periodic extra pause applies after it."
    ),
)
async def playback_steps(request: StepsRequest) -> StepsResponse:
    tokens = parse_text(request.text)
    settings = request.settings.to_settings()
    total = len(tokens)

    steps = []
    for index in range(request.start, min(total, request.start + request.count)):
        word = tokens[index]
        parts = split_word_for_display(word)
        steps.append(WordStep(
            index=index,
            word=word,
            before=parts.before,
            orp=parts.orp,
            after=parts.after,
            delay_ms=settings.delay_for(word),
            pause_after=should_pause_at_word(index, settings.pause_after_words),
        ))

    return StepsResponse(
        total_words=total,
        percentage=word_index_to_percentage(request.start, total),
        time_remaining=format_time_remaining(total - request.start, settings.words_per_minute),
        steps=steps,
    )


@app.post(
    "/playback/frame",
    response_model=FrameResponse,
    tags=["playback"],
    summary="Get the words around the cursor",
    description="Returns a window of up to `frameSize` words centred on `center`.",
)
async def playback_frame(request: FrameRequest) -> FrameResponse:
    frame = extract_word_frame(parse_text(request.text), request.center, request.frame_size)
    return FrameResponse(subset=frame.subset, center_offset=frame.center_offset)


# ---------------------------------------------------------------------------
# Endpoints: Session
# ---------------------------------------------------------------------------


@app.get(
    "/session",
    response_model=SessionResponse,
    tags=["session"],
    summary="Load the saved session",
    responses={404: {"model": ErrorResponse, "description": "No saved session"}},
)
async def get_session() -> SessionResponse:
    saved = session_store.load_session()
    if saved is None:
        raise HTTPException(status_code=404, detail="No saved session")
    return SessionResponse(
        text=saved.text,
        current_word_index=saved.current_word_index,
        total_words=saved.total_words,
        settings=SettingsModel.from_settings(saved.settings) if saved.settings else None,
        saved_at=saved.saved_at,
    )


@app.put(
    "/session",
    response_model=SessionSavedResponse,
    tags=["session"],
    summary="Save the session",
    description="Replaces any previously saved session.",
    responses={507: {"model": ErrorResponse, "description": "Storage refused the write"}},
)
async def put_session(request: SessionRequest) -> SessionSavedResponse:
    session = Session(
        text=request.text,
        current_word_index=request.current_word_index,
        total_words=request.total_words,
        settings=request.settings.to_settings() if request.settings else None,
    )
    if not session_store.save_session(session):
        raise HTTPException(status_code=507, detail="Session could not be saved")
    return SessionSavedResponse(saved=True, saved_at=session_store.last_saved_at)


@app.delete(
    "/session",
    status_code=204,
    tags=["session"],
    summary="Clear the saved session",
    responses={507: {"model": ErrorResponse, "description": "Storage refused the delete"}},
)
async def delete_session() -> Response:
    if not session_store.clear_session():
        raise HTTPException(status_code=507, detail="Session could not be cleared")
    return Response(status_code=204)


@app.get(
    "/session/summary",
    response_model=SessionSummaryResponse,
    tags=["session"],
    summary="Summarise the saved session",
    description="Cursor, word count, and save time without the document text.",
    responses={404: {"model": ErrorResponse, "description": "No saved session"}},
)
async def get_session_summary() -> SessionSummaryResponse:
    summary = session_store.get_session_summary()
    if summary is None:
        raise HTTPException(status_code=404, detail="No saved session")
    return SessionSummaryResponse(
        current_word_index=summary.current_word_index,
        total_words=summary.total_words,
        saved_at=summary.saved_at,
        has_text=summary.has_text,
        percentage=word_index_to_percentage(summary.current_word_index, summary.total_words),
    )


# ---------------------------------------------------------------------------
# Endpoints: Health
# ---------------------------------------------------------------------------


@app.get(
    "/health",
    response_model=HealthResponse,
    tags=["health"],
    summary="Health check",
)
async def health_check() -> HealthResponse:
    return HealthResponse(status="ok", version=__version__)


def run_api(host: str | None = None, port: int | None = None) -> None:
    """Entry point for the rsvp-reader-api console script."""
    import uvicorn

    from rsvp_reader.config import HOST, PORT

    uvicorn.run(app, host=host or HOST, port=port or PORT)
