"""Unit tests for the serving layer."""

from __future__ import annotations

import threading
import time
from concurrent.futures import ThreadPoolExecutor
from unittest.mock import MagicMock, patch

import pytest
from conftest import FailingEmbeddingClient, FakeEmbeddingClient
from fastapi.testclient import TestClient
from langchain_core.messages import AIMessage

from docqa.answer.generator import AnswerGenerator
from docqa.answer.prompts import NO_CONTEXT_ANSWER
from docqa.retrieval.memory_store import InMemoryVectorStore
from docqa.serving.app import Components, create_app

DOCUMENT = "The cat sat on the mat. The dog ran in the park. The bird flew over the tree."


@pytest.fixture()
def llm() -> MagicMock:
    llm = MagicMock()
    llm.invoke.return_value = AIMessage(content="The dog ran in the park (page 1).")
    return llm


@pytest.fixture()
def client(store: InMemoryVectorStore, embedder: FakeEmbeddingClient, llm: MagicMock) -> TestClient:
    app = create_app(
        store=store,
        embedding_client=embedder,
        answer_generator=AnswerGenerator(llm=llm),
    )
    return TestClient(app)


def test_health_endpoint() -> None:
    """GET /health should return 200 with status ok."""
    from docqa.serving.app import app

    client = TestClient(app)
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_ingest_document(client: TestClient, store: InMemoryVectorStore) -> None:
    response = client.post("/documents", json={"text": DOCUMENT, "filename": "notes.pdf"})

    assert response.status_code == 200
    body = response.json()
    assert body["filename"] == "notes.pdf"
    assert body["total_chunks"] == store.count() >= 1
    assert body["metadata"]["word_count"] == 18
    assert body["chunk_previews"][0]["index"] == 0
    assert store.document_ids() == [body["document_id"]]


def test_ingest_empty_document_is_400(client: TestClient) -> None:
    response = client.post("/documents", json={"text": "   \n ", "filename": "blank.pdf"})
    assert response.status_code == 400
    assert "error" in response.json()


def test_ingest_missing_field_is_422(client: TestClient) -> None:
    response = client.post("/documents", json={"text": DOCUMENT})
    assert response.status_code == 422


def test_embedding_failure_is_500(store: InMemoryVectorStore) -> None:
    client = TestClient(create_app(store=store, embedding_client=FailingEmbeddingClient()))
    response = client.post("/documents", json={"text": DOCUMENT, "filename": "notes.pdf"})
    assert response.status_code == 500
    assert response.json() == {"error": "Failed to process notes.pdf"}


def test_list_and_delete_documents(client: TestClient) -> None:
    document_id = client.post(
        "/documents", json={"text": DOCUMENT, "filename": "notes.pdf"}
    ).json()["document_id"]

    listing = client.get("/documents").json()
    assert listing["total"] >= 1
    assert all(d["id"].startswith(f"{document_id}-") for d in listing["documents"])

    removed = client.delete(f"/documents/{document_id}").json()
    assert removed == {"document_id": document_id, "removed": listing["total"]}
    assert client.get("/documents").json()["total"] == 0


def test_search(client: TestClient) -> None:
    client.post("/documents", json={"text": DOCUMENT, "filename": "notes.pdf"})

    response = client.post("/search", json={"query": "dog", "top_k": 1})

    assert response.status_code == 200
    body = response.json()
    assert body["empty"] is False
    assert len(body["results"]) == 1
    assert "dog" in body["results"][0]["content"]
    assert body["results"][0]["metadata"]["filename"] == "notes.pdf"


def test_search_empty_store(client: TestClient) -> None:
    response = client.post("/search", json={"query": "dog"})
    assert response.status_code == 200
    assert response.json()["empty"] is True
    assert response.json()["results"] == []


def test_search_blank_query_is_400(client: TestClient) -> None:
    response = client.post("/search", json={"query": "  "})
    assert response.status_code == 400


def test_search_invalid_top_k_is_422(client: TestClient) -> None:
    response = client.post("/search", json={"query": "dog", "top_k": 0})
    assert response.status_code == 422


def test_query_answers_from_passages(client: TestClient, llm: MagicMock) -> None:
    client.post("/documents", json={"text": DOCUMENT, "filename": "notes.pdf"})

    response = client.post("/query", json={"query": "Where did the dog run?"})

    assert response.status_code == 200
    body = response.json()
    assert body["answer"] == "The dog ran in the park (page 1)."
    assert body["sources"]
    llm.invoke.assert_called_once()


def test_query_without_documents(client: TestClient, llm: MagicMock) -> None:
    response = client.post("/query", json={"query": "Anything?"})
    assert response.status_code == 200
    assert response.json()["answer"] == NO_CONTEXT_ANSWER
    llm.invoke.assert_not_called()


def test_components_built_once_under_concurrent_first_use(store: InMemoryVectorStore) -> None:
    """Threadpool requests racing on first use must share one embedding client."""
    start = threading.Barrier(8)

    def slow_factory() -> FakeEmbeddingClient:
        time.sleep(0.05)
        return FakeEmbeddingClient()

    def first_use(_: int) -> tuple[object, object, object]:
        start.wait()
        return components.embedding_client, components.ingestion, components.retrieval

    components = Components(store=store)
    with patch("docqa.serving.app.get_embedding_client", side_effect=slow_factory) as factory:
        with ThreadPoolExecutor(max_workers=8) as pool:
            seen = list(pool.map(first_use, range(8)))

    factory.assert_called_once()
    assert len({id(client) for client, _, _ in seen}) == 1
    assert len({id(ingestion) for _, ingestion, _ in seen}) == 1
    assert len({id(retrieval) for _, _, retrieval in seen}) == 1
    assert seen[0][1]._embedder is seen[0][0]
