"""FastAPI application exposing ingestion, retrieval, and answering over REST."""

from __future__ import annotations

import logging
import threading

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from docqa import __version__
from docqa.answer.generator import Answer, AnswerGenerator
from docqa.config import settings
from docqa.errors import DocQAError, InvalidRequestError
from docqa.ingestion.embedder import EmbeddingClient, get_embedding_client
from docqa.ingestion.pipeline import IngestionPipeline
from docqa.retrieval.base import VectorStoreBase
from docqa.retrieval.memory_store import InMemoryVectorStore
from docqa.retrieval.models import IngestionSummary, PassageMetadata, RetrievalResponse
from docqa.retrieval.retriever import RetrievalPipeline

logger = logging.getLogger(__name__)

LISTING_PREVIEW_CHARS = 200


# ── Request / Response schemas ────────────────────────────────────────
class IngestRequest(BaseModel):
    """Extracted text of one uploaded document."""

    text: str
    filename: str


class SearchRequest(BaseModel):
    """A question, optionally restricted to some documents."""

    query: str
    document_ids: list[str] | None = None
    top_k: int | None = Field(default=None, ge=1)


class StoredPassage(BaseModel):
    id: str
    content: str
    metadata: PassageMetadata


class DocumentListing(BaseModel):
    documents: list[StoredPassage]
    total: int


class RemovalResult(BaseModel):
    document_id: str
    removed: int


# ── Component wiring ──────────────────────────────────────────────────
class Components:
    """Store, pipelines, and answer generator shared by all requests.

    Anything not injected is built from :data:`docqa.config.settings` on
    first use, so importing this module never loads an embedding model.
    Sync routes run in a threadpool, so first use is serialised by a lock
    and every request sees the same embedding client and pipelines.
    """

    def __init__(
        self,
        store: VectorStoreBase | None = None,
        embedding_client: EmbeddingClient | None = None,
        answer_generator: AnswerGenerator | None = None,
    ) -> None:
        if store is None:
            store = InMemoryVectorStore(dimension=settings.embedding_dimension)
        self.store = store
        self._embedding_client = embedding_client
        self._answer_generator = answer_generator
        self._ingestion: IngestionPipeline | None = None
        self._retrieval: RetrievalPipeline | None = None
        self._lock = threading.RLock()

    @property
    def embedding_client(self) -> EmbeddingClient:
        if self._embedding_client is None:
            with self._lock:
                if self._embedding_client is None:
                    self._embedding_client = get_embedding_client()
        return self._embedding_client

    @property
    def ingestion(self) -> IngestionPipeline:
        if self._ingestion is None:
            with self._lock:
                if self._ingestion is None:
                    self._ingestion = IngestionPipeline(self.store, self.embedding_client)
        return self._ingestion

    @property
    def retrieval(self) -> RetrievalPipeline:
        if self._retrieval is None:
            with self._lock:
                if self._retrieval is None:
                    self._retrieval = RetrievalPipeline(self.store, self.embedding_client)
        return self._retrieval

    @property
    def answer_generator(self) -> AnswerGenerator:
        if self._answer_generator is None:
            with self._lock:
                if self._answer_generator is None:
                    self._answer_generator = AnswerGenerator()
        return self._answer_generator


def create_app(
    *,
    store: VectorStoreBase | None = None,
    embedding_client: EmbeddingClient | None = None,
    answer_generator: AnswerGenerator | None = None,
) -> FastAPI:
    """Build the application around one explicitly owned vector store."""
    app = FastAPI(
        title="docqa API",
        version=__version__,
        description="Upload a document, then ask questions about it.",
    )
    app.state.components = Components(store, embedding_client, answer_generator)

    @app.exception_handler(InvalidRequestError)
    async def _invalid_request(request: Request, exc: InvalidRequestError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"error": str(exc)})

    @app.exception_handler(DocQAError)
    async def _internal_error(request: Request, exc: DocQAError) -> JSONResponse:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc)
        return JSONResponse(status_code=500, content={"error": str(exc)})

    def components() -> Components:
        return app.state.components

    # ── Routes ────────────────────────────────────────────────────────
    @app.get("/health")
    def health() -> dict[str, str]:
        """Liveness probe."""
        return {"status": "ok" if components().store.health_check() else "degraded"}

    @app.post("/documents", response_model=IngestionSummary)
    def ingest_document(request: IngestRequest) -> IngestionSummary:
        """Chunk, embed, and store one document."""
        return components().ingestion.ingest(request.text, request.filename)

    @app.get("/documents", response_model=DocumentListing)
    def list_documents() -> DocumentListing:
        """List stored passages with short previews."""
        passages = components().store.get_all()
        return DocumentListing(
            documents=[
                StoredPassage(
                    id=p.id,
                    content=p.content[:LISTING_PREVIEW_CHARS] + "...",
                    metadata=p.metadata,
                )
                for p in passages
            ],
            total=len(passages),
        )

    @app.delete("/documents/{document_id}", response_model=RemovalResult)
    def remove_document(document_id: str) -> RemovalResult:
        """Drop every passage of one document."""
        removed = components().store.remove_by_document_id(document_id)
        return RemovalResult(document_id=document_id, removed=removed)

    @app.post("/search", response_model=RetrievalResponse)
    def search(request: SearchRequest) -> RetrievalResponse:
        """Return the passages most similar to the query."""
        return components().retrieval.retrieve(
            request.query, document_ids=request.document_ids, top_k=request.top_k
        )

    @app.post("/query", response_model=Answer)
    def query(request: SearchRequest) -> Answer:
        """Retrieve passages and answer the question from them."""
        c = components()
        response = c.retrieval.retrieve(
            request.query, document_ids=request.document_ids, top_k=request.top_k
        )
        return c.answer_generator.generate(request.query, response)

    return app


logging.basicConfig(level=settings.log_level)
app = create_app()
