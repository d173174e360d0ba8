"""Command-line interface for RSVP Reader.

WHY: Users need a quick way to check a document before reading it (how
many words, how long at a given speed, how the focal letters fall), to
inspect or discard the saved session, and to start the local API that a
browser UI talks to.

HOW: argparse with three sub-commands:
  stats FILE     — extract, tokenize, report word count and reading time;
                   --preview N prints the first N words with the ORP
                   letter bracketed and each word's delay
  session show   — print the saved session summary
  session clear  — delete the saved session
  serve          — run the FastAPI app with uvicorn

RULES:
- Status and error messages go to stderr; results go to stdout
- Exit status 1 for missing files, unsupported formats, and unreadable
  documents; 0 otherwise
- --session-dir overrides RSVP_SESSION_DIR for the session commands
- Logging is configured here (entry point), never in library modules
"""

from __future__ import annotations

import argparse
import datetime
import logging
import sys
from pathlib import Path
from typing import List, Optional

from rsvp_reader import __version__
from rsvp_reader.config import (
    HOST,
    LOG_LEVEL,
    PORT,
    SESSION_DIR,
    SESSION_KEY,
    default_words_per_minute,
)
from rsvp_reader.core.models import PlaybackSettings
from rsvp_reader.core.orp import split_word_for_display
from rsvp_reader.core.progress import word_index_to_percentage
from rsvp_reader.core.timing import format_time_remaining
from rsvp_reader.core.tokenizer import parse_text
from rsvp_reader.extractors import ExtractionError, UnsupportedFormatError, extract_text
from rsvp_reader.storage import FileStore, SessionStore


def _status(msg: str) -> None:
    """Print a status message to stderr."""
    print(msg, file=sys.stderr, flush=True)


def _fail(msg: str) -> None:
    print("Error: {}".format(msg), file=sys.stderr)
    sys.exit(1)


def _format_preview_line(word: str, delay_ms: float) -> str:
    """Render ``word`` as ``be[f]ore`` followed by its delay."""
    parts = split_word_for_display(word)
    marked = "{}[{}]{}".format(parts.before, parts.orp, parts.after)
    return "{:<30} {:>6.0f} ms".format(marked, delay_ms)


def _session_store(args: argparse.Namespace) -> SessionStore:
    directory = Path(args.session_dir) if args.session_dir else SESSION_DIR
    return SessionStore(FileStore(directory), key=SESSION_KEY)


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


def _cmd_stats(args: argparse.Namespace) -> None:
    path = Path(args.file).resolve()
    if not path.is_file():
        _fail("File not found: {}".format(path))

    _status("Extracting text from {}...".format(path.name))
    try:
        text = extract_text(path)
    except (UnsupportedFormatError, ExtractionError) as exc:
        _fail(str(exc))

    tokens = parse_text(text)
    wpm = args.wpm if args.wpm is not None else default_words_per_minute()
    settings = PlaybackSettings(words_per_minute=wpm)

    print("Words:        {}".format(len(tokens)))
    print("Characters:   {}".format(len(text)))
    print("Reading time: {} at {:g} wpm".format(format_time_remaining(len(tokens), wpm), wpm))

    if args.preview:
        print("")
        for word in tokens[:args.preview]:
            print(_format_preview_line(word, settings.delay_for(word)))


def _cmd_session_show(args: argparse.Namespace) -> None:
    store = _session_store(args)
    summary = store.get_session_summary()
    if summary is None:
        _status("No saved session.")
        return

    try:
        saved = datetime.datetime.fromtimestamp(summary.saved_at / 1000).strftime("%Y-%m-%d %H:%M:%S")
    except (OverflowError, ValueError, OSError):
        saved = "unknown"
    print("Position: word {} of {} ({}%)".format(
        summary.current_word_index,
        summary.total_words,
        word_index_to_percentage(summary.current_word_index, summary.total_words),
    ))
    print("Saved:    {}".format(saved))
    print("Has text: {}".format("yes" if summary.has_text else "no"))


def _cmd_session_clear(args: argparse.Namespace) -> None:
    store = _session_store(args)
    if not store.clear_session():
        _fail("Could not clear the saved session.")
    _status("Saved session cleared.")


def _cmd_session(args: argparse.Namespace) -> None:
    if args.action == "show":
        _cmd_session_show(args)
    else:
        _cmd_session_clear(args)


def _cmd_serve(args: argparse.Namespace) -> None:
    from rsvp_reader.server.app import run_api

    _status("Serving RSVP Reader API on http://{}:{}".format(args.host, args.port))
    run_api(host=args.host, port=args.port)


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the CLI.

    Separate from main() so tests can inspect the parser without running
    any command.
    """
    parser = argparse.ArgumentParser(
        prog="rsvp_reader",
        description="Speed-reading helper: document stats, ORP preview, "
                    "saved-session management, and the local reader API.",
    )
    parser.add_argument("--version", action="version", version="%(prog)s " + __version__)
    parser.add_argument(
        "--log-level",
        default=LOG_LEVEL,
        help="Logging level (default: %(default)s).",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    stats = subparsers.add_parser("stats", help="Word count and reading time for a document.")
    stats.add_argument("file", help="PDF, EPUB, or TXT document.")
    stats.add_argument(
        "--wpm",
        type=float,
        default=None,
        help="Reading speed in words per minute (default: RSVP_DEFAULT_WPM or 300).",
    )
    stats.add_argument(
        "--preview",
        type=int,
        default=0,
        metavar="N",
        help="Print the first N words with their ORP letter and delay.",
    )
    stats.set_defaults(func=_cmd_stats)

    session = subparsers.add_parser("session", help="Inspect or clear the saved session.")
    session.add_argument(
        "action",
        choices=["show", "clear"],
        help="show: print the summary; clear: delete the session.",
    )
    session.add_argument(
        "--session-dir",
        default=None,
        help="Directory holding the session (default: RSVP_SESSION_DIR).",
    )
    session.set_defaults(func=_cmd_session)

    serve = subparsers.add_parser("serve", help="Run the local reader API.")
    serve.add_argument("--host", default=HOST, help="Bind address (default: %(default)s).")
    serve.add_argument("--port", type=int, default=PORT, help="Port (default: %(default)s).")
    serve.set_defaults(func=_cmd_serve)

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for ``python -m rsvp_reader`` and the console script.

    RULES:
    - argv=None means use sys.argv (normal CLI invocation)
    - Explicit argv is for testing
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    args.func(args)


if __name__ == "__main__":
    main()
