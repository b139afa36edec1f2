"""
Ingestion — normalisation, chunking, embedding, and storage of one document.

This module turns raw extracted text into embedded passages held by a
:class:`~docqa.retrieval.base.VectorStoreBase`.

Public surface
--------------
- :func:`clean_text` — whitespace normaliser.
- :func:`chunk_text` — overlapping, sentence-aware chunker.
- :func:`extract_metadata` — coarse text statistics.
- :class:`EmbeddingClient` — narrow embedding capability interface.
- :class:`IngestionPipeline` — end-to-end ingestion orchestration.
"""

from docqa.ingestion.chunker import chunk_text
from docqa.ingestion.embedder import EmbeddingClient, LangChainEmbeddingClient, get_embedding_client
from docqa.ingestion.metadata import extract_metadata
from docqa.ingestion.normalizer import clean_text
from docqa.ingestion.pipeline import IngestionPipeline

__all__ = [
    "EmbeddingClient",
    "IngestionPipeline",
    "LangChainEmbeddingClient",
    "chunk_text",
    "clean_text",
    "extract_metadata",
    "get_embedding_client",
]
