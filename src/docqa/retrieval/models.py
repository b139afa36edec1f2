"""Domain models for stored passages, retrieval results, and ingestion summaries."""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator


def passage_id(document_id: str, chunk_index: int) -> str:
    """Build the globally unique id of one passage of *document_id*."""
    return f"{document_id}-{chunk_index}"


class PassageMetadata(BaseModel):
    """Provenance of a passage within its source document.

    Attributes
    ----------
    filename:
        Name of the uploaded file.
    chunk_index:
        0-based position of the passage within the document.
    total_chunks:
        Number of passages produced from the same document.
    page_number:
        Coarse page estimate, not an exact page reference.
    """

    filename: str
    chunk_index: int = Field(ge=0)
    total_chunks: int = Field(ge=1)
    page_number: int = Field(default=1, ge=1)


class Passage(BaseModel):
    """The stored unit: one chunk of text with its embedding."""

    id: str
    content: str
    embedding: list[float] = Field(min_length=1)
    metadata: PassageMetadata

    @field_validator("content")
    @classmethod
    def _content_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("passage content must not be blank")
        return value

    @property
    def document_id(self) -> str:
        """The id of the document this passage belongs to."""
        return self.id.rpartition("-")[0]

    def belongs_to(self, document_id: str) -> bool:
        return self.id.startswith(f"{document_id}-")


class ScoredPassage(BaseModel):
    """A passage paired with its similarity to a query."""

    passage: Passage
    similarity: float


class TextStats(BaseModel):
    """Word / sentence / paragraph counts of an uploaded text."""

    word_count: int = 0
    sentence_count: int = 0
    paragraph_count: int = 0


class ChunkPreview(BaseModel):
    """Short excerpt of one chunk, returned after ingestion."""

    index: int
    content: str
    length: int


class IngestionSummary(BaseModel):
    """Outcome of ingesting one document."""

    document_id: str
    filename: str
    total_chunks: int
    text_length: int
    metadata: TextStats
    chunk_previews: list[ChunkPreview] = Field(default_factory=list)


class RetrievedPassage(BaseModel):
    """A ranked passage handed to answer generation."""

    id: str
    content: str
    metadata: PassageMetadata
    similarity: float

    def __str__(self) -> str:  # noqa: D105
        return f"[{self.metadata.filename} p.{self.metadata.page_number}] {self.content[:120]}…"


class RetrievalResponse(BaseModel):
    """Ranked passages for one query.

    ``empty`` is ``True`` when nothing matched, which is a valid outcome
    rather than a failure.
    """

    query: str
    results: list[RetrievedPassage] = Field(default_factory=list)
    empty: bool = False
