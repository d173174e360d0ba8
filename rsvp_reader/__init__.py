"""RSVP Reader — presentation timing and session continuity for speed reading.

WHY: Rapid Serial Visual Presentation shows one word at a time in a fixed
position. Reading comfortably that way needs three things the display layer
should not have to work out itself: which letter to anchor the eye on, how
long each word stays up, and where the reader stopped last time.

HOW: Four stages, each independently testable — extract (documents to plain
text), tokenize (text to words), present (ORP split, per-word delay, word
frames), persist (a single resumable session record).

RULES:
- The core (rsvp_reader.core) is pure; it never logs, raises, or touches disk
- Storage failures stop at the SessionStore boundary
- Extraction is an external collaborator; the core only ever sees its text
"""

__version__ = "0.1.0"
