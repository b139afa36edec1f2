"""Abstract base class for vector-store backends.

The pipelines only depend on :class:`VectorStoreBase`, so an
approximate-nearest-neighbour backend can replace the in-memory linear
scan without touching chunking, ingestion, or retrieval code, as long as
it honours the same ``search`` contract.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable, Sequence

from docqa.retrieval.models import Passage, ScoredPassage


class VectorStoreBase(ABC):
    """Backend-agnostic passage store with similarity search."""

    # -- required overrides ---------------------------------------------------

    @abstractmethod
    def add_passages(self, passages: Sequence[Passage]) -> None:
        """Store all *passages* or none of them.

        Raises
        ------
        DimensionMismatchError
            If any embedding length differs from the store's dimensionality.
        """
        ...

    @abstractmethod
    def remove_by_document_id(self, document_id: str) -> int:
        """Remove every passage of *document_id* and return how many went."""
        ...

    @abstractmethod
    def clear(self) -> None:
        """Remove all passages."""
        ...

    @abstractmethod
    def get_all(self) -> list[Passage]:
        """Return a snapshot of all passages in insertion order."""
        ...

    @abstractmethod
    def search(
        self,
        query_embedding: Sequence[float],
        *,
        top_k: int = 5,
        document_ids: Iterable[str] | None = None,
    ) -> list[ScoredPassage]:
        """Return at most *top_k* passages ranked by descending similarity.

        Parameters
        ----------
        query_embedding:
            Dense vector for the query.
        top_k:
            Maximum number of results.
        document_ids:
            When given, only passages of these documents are candidates.
        """
        ...

    # -- optional overrides ---------------------------------------------------

    def replace(self, passages: Sequence[Passage], *, document_id: str | None = None) -> None:
        """Remove old passages and insert *passages*.

        With *document_id* only that document's passages are removed,
        otherwise the whole store is cleared.  Backends able to do this
        atomically should override it.
        """
        if document_id is None:
            self.clear()
        else:
            self.remove_by_document_id(document_id)
        self.add_passages(passages)

    def count(self) -> int:
        return len(self.get_all())

    def document_ids(self) -> list[str]:
        """Distinct document ids, in the order they were first stored."""
        return list(dict.fromkeys(p.document_id for p in self.get_all()))

    def health_check(self) -> bool:
        """Return ``True`` when the backend is ready."""
        return True
