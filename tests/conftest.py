"""Shared pytest configuration and fixtures."""

from __future__ import annotations

from collections.abc import Sequence

import pytest

from docqa.errors import EmbeddingError
from docqa.ingestion.embedder import EmbeddingClient
from docqa.retrieval.memory_store import InMemoryVectorStore
from docqa.retrieval.models import Passage, PassageMetadata, passage_id

VOCABULARY = ("cat", "dog", "bird", "fish", "tree")


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers."""
    config.addinivalue_line("markers", "integration: marks tests requiring external services")


class FakeEmbeddingClient(EmbeddingClient):
    """Deterministic bag-of-keywords embedder.

    Each dimension counts occurrences of one word from :data:`VOCABULARY`,
    so texts about the same animal end up close to each other.
    """

    def __init__(self) -> None:
        self.calls: list[list[str]] = []

    def embed(self, texts: Sequence[str]) -> list[list[float]]:
        self.calls.append(list(texts))
        return [self._vector(t) for t in texts]

    @staticmethod
    def _vector(text: str) -> list[float]:
        words = [w.strip(".,!?").lower() for w in text.split()]
        return [float(words.count(term)) for term in VOCABULARY]


class FailingEmbeddingClient(EmbeddingClient):
    """Always raises, like an unreachable provider."""

    def embed(self, texts: Sequence[str]) -> list[list[float]]:
        raise EmbeddingError("provider unavailable")


def make_passage(
    document_id: str,
    index: int,
    embedding: list[float],
    *,
    content: str | None = None,
    total: int = 1,
) -> Passage:
    return Passage(
        id=passage_id(document_id, index),
        content=content or f"Passage {index} of {document_id}.",
        embedding=embedding,
        metadata=PassageMetadata(
            filename=f"{document_id}.txt",
            chunk_index=index,
            total_chunks=total,
            page_number=index // 3 + 1,
        ),
    )


@pytest.fixture()
def store() -> InMemoryVectorStore:
    return InMemoryVectorStore()


@pytest.fixture()
def embedder() -> FakeEmbeddingClient:
    return FakeEmbeddingClient()
