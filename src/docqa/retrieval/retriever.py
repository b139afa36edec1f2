"""Retrieval pipeline — embed a question and rank stored passages.

This module is the **primary public interface** for retrieval.  It is
decoupled from LangChain retriever abstractions so that non-chain
callers (the HTTP layer, scripts, tests) can use it directly.

Usage::

    from docqa.retrieval import InMemoryVectorStore, RetrievalPipeline

    pipeline = RetrievalPipeline(store, embedding_client)
    response = pipeline.retrieve("What does chapter two conclude?", top_k=3)
    for r in response.results:
        print(r.similarity, r.content[:80])
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from typing import TYPE_CHECKING, Any

from docqa.config import settings
from docqa.errors import EmbeddingError, EmptyQueryError, RetrievalFailedError
from docqa.retrieval.base import VectorStoreBase
from docqa.retrieval.models import RetrievalResponse, RetrievedPassage, ScoredPassage

if TYPE_CHECKING:
    from docqa.ingestion.embedder import EmbeddingClient

logger = logging.getLogger(__name__)


class RetrievalPipeline:
    """Top-k semantic retrieval over a :class:`VectorStoreBase`.

    Parameters
    ----------
    store:
        The vector store holding ingested passages.
    embedding_client:
        Capability used to embed the query.
    default_k:
        Number of results returned when the caller does not ask for a count.
    score_threshold:
        Minimum similarity score; results below this are discarded.
    """

    def __init__(
        self,
        store: VectorStoreBase,
        embedding_client: EmbeddingClient,
        *,
        default_k: int = settings.retrieval_k,
        score_threshold: float = settings.score_threshold,
    ) -> None:
        self._store = store
        self._embedder = embedding_client
        self.default_k = default_k
        self.score_threshold = score_threshold

    # -- public API -----------------------------------------------------------

    def retrieve(
        self,
        query: str,
        *,
        document_ids: Iterable[str] | None = None,
        top_k: int | None = None,
    ) -> RetrievalResponse:
        """Embed *query* and return the best-matching passages.

        Parameters
        ----------
        query:
            Natural-language question.
        document_ids:
            Restrict candidates to these documents.
        top_k:
            Number of results (defaults to ``self.default_k``).

        Returns
        -------
        RetrievalResponse
            Ranked passages, or ``empty=True`` when nothing matched.

        Raises
        ------
        EmptyQueryError
            If *query* is blank.
        RetrievalFailedError
            If the query could not be embedded.
        """
        if not query or not query.strip():
            raise EmptyQueryError("Query must not be empty")

        try:
            vectors = self._embedder.embed([query])
        except EmbeddingError as exc:
            logger.error("Query embedding failed: %s", exc)
            raise RetrievalFailedError("Failed to embed query") from exc
        if len(vectors) != 1:
            cause = EmbeddingError(f"Expected 1 query embedding, got {len(vectors)}")
            raise RetrievalFailedError("Failed to embed query") from cause

        return self.retrieve_by_embedding(
            vectors[0], query=query, document_ids=document_ids, top_k=top_k
        )

    def retrieve_by_embedding(
        self,
        embedding: Sequence[float],
        *,
        query: str = "",
        document_ids: Iterable[str] | None = None,
        top_k: int | None = None,
    ) -> RetrievalResponse:
        """Same as :meth:`retrieve` but accepts a pre-computed embedding."""
        k = self.default_k if top_k is None else top_k
        ids = list(document_ids) if document_ids is not None else None
        hits = self._store.search(embedding, top_k=k, document_ids=ids)
        results = self._to_results(hits)

        if not results:
            logger.warning("No relevant passages for query %r (filter=%s)", query, ids)
            return RetrievalResponse(query=query, results=[], empty=True)

        logger.info("Retrieved %d passages for query %r", len(results), query)
        return RetrievalResponse(query=query, results=results, empty=False)

    # -- LangChain compat -----------------------------------------------------

    def as_langchain_retriever(self, k: int = 5, document_ids: list[str] | None = None) -> Any:
        """Return a thin LangChain-compatible retriever wrapper.

        This intentionally imports LangChain only here so that the rest
        of the retrieval package has **zero** LangChain dependency.
        """
        from langchain_core.documents import Document
        from langchain_core.retrievers import BaseRetriever

        outer = self

        class _LCRetriever(BaseRetriever):
            """Adapter that satisfies LangChain's retriever protocol."""

            def _get_relevant_documents(self_inner, query: str, **kwargs: Any) -> list[Document]:  # type: ignore[override]  # noqa: N805
                response = outer.retrieve(query, document_ids=document_ids, top_k=k)
                return [
                    Document(
                        page_content=r.content,
                        metadata={**r.metadata.model_dump(), "id": r.id, "similarity": r.similarity},
                    )
                    for r in response.results
                ]

        return _LCRetriever()

    # -- internals ------------------------------------------------------------

    def _to_results(self, hits: list[ScoredPassage]) -> list[RetrievedPassage]:
        results: list[RetrievedPassage] = []
        for hit in hits:
            if hit.similarity < self.score_threshold:
                continue
            results.append(
                RetrievedPassage(
                    id=hit.passage.id,
                    content=hit.passage.content,
                    metadata=hit.passage.metadata,
                    similarity=hit.similarity,
                )
            )
        return results
