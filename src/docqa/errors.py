"""Exception hierarchy shared by every docqa layer.

Two families matter to callers:

* :class:`InvalidRequestError` and its subclasses describe bad input the
  user can fix (blank document, blank question).  The HTTP layer maps
  them to ``400``.
* Everything else derived from :class:`DocQAError` is an infrastructure
  or consistency failure and maps to ``500``.

An empty search result is **not** an error; see
:attr:`docqa.retrieval.models.RetrievalResponse.empty`.
"""

from __future__ import annotations


class DocQAError(Exception):
    """Base class for all docqa errors."""


class InvalidRequestError(DocQAError):
    """The caller supplied input that cannot be processed."""


class EmptyDocumentError(InvalidRequestError):
    """The uploaded document contains no ingestible text."""


class EmptyQueryError(InvalidRequestError):
    """The query is empty or whitespace-only."""


class DimensionMismatchError(DocQAError):
    """An embedding's length differs from the store's dimensionality."""

    def __init__(self, expected: int, actual: int) -> None:
        super().__init__(f"Embedding dimension mismatch: expected {expected}, got {actual}")
        self.expected = expected
        self.actual = actual


class EmbeddingError(DocQAError):
    """The embedding capability failed or returned unusable output."""


class EmbeddingTimeoutError(EmbeddingError):
    """The embedding capability did not answer in time."""


class IngestionFailedError(DocQAError):
    """Ingestion could not complete; ``__cause__`` holds the original error."""


class RetrievalFailedError(DocQAError):
    """Retrieval could not complete; ``__cause__`` holds the original error."""


class AnswerGenerationError(DocQAError):
    """The answer-generation model failed."""
