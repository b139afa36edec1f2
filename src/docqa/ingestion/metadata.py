"""Coarse document statistics reported back after ingestion."""

from __future__ import annotations

import re

from docqa.retrieval.models import TextStats

_SENTENCE_END = re.compile(r"[.!?]+")
_PARAGRAPH_BREAK = re.compile(r"\n\s*\n")


def extract_metadata(text: str) -> TextStats:
    """Count words, sentences, and paragraphs in *text*.

    Purely diagnostic; none of these numbers influence retrieval.
    """
    words = text.split()
    sentences = [s for s in _SENTENCE_END.split(text) if s.strip()]
    paragraphs = [p for p in _PARAGRAPH_BREAK.split(text) if p.strip()]
    return TextStats(
        word_count=len(words),
        sentence_count=len(sentences),
        paragraph_count=len(paragraphs),
    )
