"""Whitespace normalisation for raw extracted text."""

from __future__ import annotations

import re

_WHITESPACE_RUN = re.compile(r"\s+")
_BLANK_LINES = re.compile(r"\n\s*\n")


def clean_text(text: str) -> str:
    """Collapse whitespace runs to single spaces and trim.

    Newlines are whitespace too, so the result is a single line.  An
    empty result means there is nothing to ingest.
    """
    text = _WHITESPACE_RUN.sub(" ", text)
    # Kept for parity with the upload path; the pass above already folded newlines.
    text = _BLANK_LINES.sub("\n", text)
    return text.strip()
