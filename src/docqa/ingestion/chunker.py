"""Text chunking strategies."""

from __future__ import annotations

_BREAK_CHARS = (".", "\n")


def chunk_text(
    text: str,
    chunk_size: int = 1000,
    chunk_overlap: int = 200,
) -> list[str]:
    """Split *text* into overlapping chunks that prefer sentence boundaries.

    Each window holds at most *chunk_size* characters.  When a window stops
    short of the end of the text it is cut right after its last ``.`` or
    newline, provided that break lies beyond the first half of the window.
    Consecutive windows share *chunk_overlap* characters.

    Parameters
    ----------
    text:
        Normalised source text.
    chunk_size:
        Maximum number of characters per chunk.
    chunk_overlap:
        Number of overlapping characters between consecutive chunks.

    Returns
    -------
    list[str]
        Trimmed, non-empty chunks in document order.  Whitespace-only text
        yields no chunks.
    """
    if chunk_size <= 0:
        raise ValueError(f"chunk_size ({chunk_size}) must be positive")
    if chunk_overlap < 0 or chunk_overlap >= chunk_size:
        raise ValueError(
            f"chunk_overlap ({chunk_overlap}) must be >= 0 and < chunk_size ({chunk_size})"
        )

    chunks: list[str] = []
    start = 0
    length = len(text)

    while start < length:
        end = min(start + chunk_size, length)
        window = text[start:end]

        if end < length:
            break_point = max(window.rfind(ch) for ch in _BREAK_CHARS)
            if break_point > chunk_size * 0.5:
                window = window[: break_point + 1]

        chunk = window.strip()
        if chunk:
            chunks.append(chunk)

        if start + len(window) >= length:
            break

        next_start = start + len(window) - chunk_overlap
        if next_start <= start:
            next_start = start + len(window)
        start = next_start

    return chunks
