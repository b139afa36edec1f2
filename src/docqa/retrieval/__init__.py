"""
Retrieval — passage storage, similarity search, and ranked results.

This module keeps the vector store behind a small interface so that the
pipelines never need to know how passages are indexed.

Public surface
--------------
- :class:`RetrievalPipeline` — main entry point for question retrieval.
- :class:`VectorStoreBase` — abstract backend.
- :class:`InMemoryVectorStore` — default exact-scan backend.
- :func:`cosine_similarity` — the ranking score.
- :class:`Passage`, :class:`PassageMetadata`, :class:`RetrievalResponse`, … — data models.
"""

from docqa.retrieval.base import VectorStoreBase
from docqa.retrieval.memory_store import InMemoryVectorStore, cosine_similarity
from docqa.retrieval.models import (
    ChunkPreview,
    IngestionSummary,
    Passage,
    PassageMetadata,
    RetrievalResponse,
    RetrievedPassage,
    ScoredPassage,
    TextStats,
    passage_id,
)
from docqa.retrieval.retriever import RetrievalPipeline

__all__ = [
    "ChunkPreview",
    "InMemoryVectorStore",
    "IngestionSummary",
    "Passage",
    "PassageMetadata",
    "RetrievalPipeline",
    "RetrievalResponse",
    "RetrievedPassage",
    "ScoredPassage",
    "TextStats",
    "VectorStoreBase",
    "cosine_similarity",
    "passage_id",
]
