"""Ingestion pipeline — one uploaded document into the vector store.

Steps, all sequential::

    clean_text → chunk_text → EmbeddingClient.embed → build passages
               → apply ReplacementPolicy + insert (one writer section)

Embedding happens before the store is touched, so a slow or failing
provider never holds the store's lock.
"""

from __future__ import annotations

import logging
from uuid import uuid4

from docqa.config import ReplacementPolicy, settings
from docqa.errors import EmbeddingError, EmptyDocumentError, IngestionFailedError, InvalidRequestError
from docqa.ingestion.chunker import chunk_text
from docqa.ingestion.embedder import EmbeddingClient
from docqa.ingestion.metadata import extract_metadata
from docqa.ingestion.normalizer import clean_text
from docqa.retrieval.base import VectorStoreBase
from docqa.retrieval.models import (
    ChunkPreview,
    IngestionSummary,
    Passage,
    PassageMetadata,
    passage_id,
)

logger = logging.getLogger(__name__)

PREVIEW_CHARS = 100


def estimate_page_number(chunk_index: int, chunks_per_page: int) -> int:
    """Rough 1-based page estimate for the chunk at *chunk_index*."""
    return chunk_index // chunks_per_page + 1


def _preview(index: int, chunk: str) -> ChunkPreview:
    content = chunk if len(chunk) <= PREVIEW_CHARS else chunk[:PREVIEW_CHARS] + "..."
    return ChunkPreview(index=index, content=content, length=len(chunk))


class IngestionPipeline:
    """Orchestrates normalise → chunk → embed → store for one document.

    Parameters
    ----------
    store:
        Destination vector store.
    embedding_client:
        Capability producing one vector per chunk.
    replacement_policy:
        Whether a new upload wipes the store or coexists with earlier documents.
    chunk_size, chunk_overlap:
        Forwarded to :func:`~docqa.ingestion.chunker.chunk_text`.
    chunks_per_page:
        Divisor for the page-number estimate.
    """

    def __init__(
        self,
        store: VectorStoreBase,
        embedding_client: EmbeddingClient,
        *,
        replacement_policy: ReplacementPolicy = settings.replacement_policy,
        chunk_size: int = settings.chunk_size,
        chunk_overlap: int = settings.chunk_overlap,
        chunks_per_page: int = settings.chunks_per_page,
    ) -> None:
        if chunk_overlap >= chunk_size:
            raise ValueError(
                f"chunk_overlap ({chunk_overlap}) must be < chunk_size ({chunk_size})"
            )
        if chunks_per_page <= 0:
            raise ValueError(f"chunks_per_page ({chunks_per_page}) must be positive")
        self._store = store
        self._embedder = embedding_client
        self.replacement_policy = ReplacementPolicy(replacement_policy)
        self.chunk_size = chunk_size
        self.chunk_overlap = chunk_overlap
        self.chunks_per_page = chunks_per_page

    def ingest(self, text: str, filename: str) -> IngestionSummary:
        """Ingest *text* extracted from *filename* and return a summary.

        Raises
        ------
        InvalidRequestError
            If *filename* is blank.
        EmptyDocumentError
            If nothing remains after normalisation.
        IngestionFailedError
            If embedding failed or returned the wrong number of vectors.
        DimensionMismatchError
            If the vectors do not fit the store's dimensionality.
        """
        if not filename or not filename.strip():
            raise InvalidRequestError("No filename provided")

        cleaned = clean_text(text or "")
        if not cleaned:
            raise EmptyDocumentError(f"No text found in {filename}")

        stats = extract_metadata(text)
        chunks = chunk_text(cleaned, self.chunk_size, self.chunk_overlap)
        logger.info(
            "Chunked %s: %d chars → %d chunks (size=%d, overlap=%d)",
            filename,
            len(cleaned),
            len(chunks),
            self.chunk_size,
            self.chunk_overlap,
        )

        try:
            embeddings = self._embedder.embed(chunks)
        except EmbeddingError as exc:
            logger.error("Embedding failed while ingesting %s: %s", filename, exc)
            raise IngestionFailedError(f"Failed to process {filename}") from exc
        if len(embeddings) != len(chunks):
            cause = EmbeddingError(
                f"Embedding count ({len(embeddings)}) does not match chunk count ({len(chunks)})"
            )
            logger.error("Ingestion of %s aborted: %s", filename, cause)
            raise IngestionFailedError(f"Failed to process {filename}") from cause

        document_id = str(uuid4())
        total = len(chunks)
        passages = [
            Passage(
                id=passage_id(document_id, index),
                content=chunk,
                embedding=embedding,
                metadata=PassageMetadata(
                    filename=filename,
                    chunk_index=index,
                    total_chunks=total,
                    page_number=estimate_page_number(index, self.chunks_per_page),
                ),
            )
            for index, (chunk, embedding) in enumerate(zip(chunks, embeddings))
        ]

        if self.replacement_policy is ReplacementPolicy.CLEAR_ALL:
            self._store.replace(passages)
        else:
            self._store.replace(passages, document_id=document_id)
        logger.info("Stored document %s (%s) as %d passages", document_id, filename, total)

        return IngestionSummary(
            document_id=document_id,
            filename=filename,
            total_chunks=total,
            text_length=len(cleaned),
            metadata=stats,
            chunk_previews=[_preview(i, c) for i, c in enumerate(chunks)],
        )
