"""Core presentation-timing and session data modules.

WHY: The core package is the stable heart of the reader — tokenization,
ORP selection, per-word timing, word frames, and progress mapping. The
HTTP API, CLI, and any browser UI consume these functions directly.

HOW: models.py defines the data structures, tokenizer.py turns text into
words, orp.py picks the focal letter, timing.py computes delays, frame.py
builds multi-word windows, progress.py maps between cursor and percentage.

RULES:
- Every function is total over its input domain — bad input yields a safe
  default, never an exception
- No I/O, no logging, no shared mutable state
"""
