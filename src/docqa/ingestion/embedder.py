"""Embedding capability — the only network-bound step of the pipelines.

The rest of docqa talks to embeddings exclusively through
:class:`EmbeddingClient`, a one-method batch interface.  Swapping the
provider (local sentence-transformers, OpenAI, a test fake) never touches
chunking, storage, or ranking.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import TYPE_CHECKING

import openai

from docqa.config import settings
from docqa.errors import EmbeddingError, EmbeddingTimeoutError

if TYPE_CHECKING:
    from langchain_core.embeddings import Embeddings

logger = logging.getLogger(__name__)


class EmbeddingClient(ABC):
    """Maps passages to fixed-length vectors."""

    @abstractmethod
    def embed(self, texts: Sequence[str]) -> list[list[float]]:
        """Return one vector per entry of *texts*, in the same order.

        Raises
        ------
        EmbeddingTimeoutError
            The provider did not answer in time.
        EmbeddingError
            Any other provider failure.
        """
        ...


class LangChainEmbeddingClient(EmbeddingClient):
    """Adapter over any LangChain :class:`~langchain_core.embeddings.Embeddings`.

    Parameters
    ----------
    embeddings:
        A LangChain embeddings object, e.g. ``HuggingFaceEmbeddings`` or
        ``OpenAIEmbeddings``.
    """

    def __init__(self, embeddings: Embeddings) -> None:
        self._embeddings = embeddings

    def embed(self, texts: Sequence[str]) -> list[list[float]]:
        if not texts:
            return []
        try:
            vectors = self._embeddings.embed_documents(list(texts))
        except (openai.APITimeoutError, TimeoutError) as exc:
            logger.warning("Embedding request timed out for %d text(s)", len(texts))
            raise EmbeddingTimeoutError(f"Embedding request timed out: {exc}") from exc
        except Exception as exc:
            logger.exception("Embedding request failed for %d text(s)", len(texts))
            raise EmbeddingError(f"Embedding request failed: {exc}") from exc
        return [list(map(float, v)) for v in vectors]


def get_embedding_client() -> LangChainEmbeddingClient:
    """Return the embedding client selected by ``settings.embedding_provider``.

    ``"huggingface"`` runs the configured sentence-transformer locally;
    ``"openai"`` calls the OpenAI embeddings API with a request timeout.
    """
    provider = settings.embedding_provider.lower()

    if provider == "huggingface":
        from langchain_huggingface import HuggingFaceEmbeddings

        logger.info("Using HuggingFace embeddings: %s", settings.embedding_model)
        return LangChainEmbeddingClient(HuggingFaceEmbeddings(model_name=settings.embedding_model))

    if provider == "openai":
        from langchain_openai import OpenAIEmbeddings

        logger.info("Using OpenAI embeddings: %s", settings.openai_embedding_model)
        return LangChainEmbeddingClient(
            OpenAIEmbeddings(
                model=settings.openai_embedding_model,
                api_key=settings.openai_api_key or None,
                request_timeout=settings.embedding_timeout_seconds,
                max_retries=0,
            )
        )

    raise ValueError(f"Unsupported embedding provider: {settings.embedding_provider!r}")
