"""In-memory implementation of the vector-store abstraction.

Passages live in a Python list for the lifetime of the process; nothing
is persisted.  Similarity search is an exact linear scan using cosine
similarity, vectorised with numpy.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

import numpy as np

from docqa.errors import DimensionMismatchError
from docqa.retrieval.base import VectorStoreBase
from docqa.retrieval.locking import ReadWriteLock
from docqa.retrieval.models import Passage, ScoredPassage

logger = logging.getLogger(__name__)


def cosine_similarity(a: Sequence[float], b: Sequence[float]) -> float:
    """Cosine of the angle between *a* and *b*.

    Returns ``0.0`` when either vector has zero magnitude.
    """
    va = np.asarray(a, dtype=np.float64)
    vb = np.asarray(b, dtype=np.float64)
    if va.shape != vb.shape:
        raise DimensionMismatchError(len(va), len(vb))

    denom = np.linalg.norm(va) * np.linalg.norm(vb)
    if denom == 0.0:
        return 0.0
    return float(np.dot(va, vb) / denom)


class InMemoryVectorStore(VectorStoreBase):
    """Process-local passage store guarded by a readers-writer lock.

    Parameters
    ----------
    dimension:
        Expected embedding length.  When *None*, the first passage ever
        added fixes it; clearing the store does not reset it.
    """

    def __init__(self, dimension: int | None = None) -> None:
        if dimension is not None and dimension <= 0:
            raise ValueError(f"dimension ({dimension}) must be positive")
        self._dimension = dimension
        self._passages: list[Passage] = []
        self._lock = ReadWriteLock()

    @property
    def dimension(self) -> int | None:
        return self._dimension

    def __len__(self) -> int:
        return self.count()

    # -- writers ----------------------------------------------------------------

    def add_passages(self, passages: Sequence[Passage]) -> None:
        with self._lock.write():
            self._insert(passages)

    def remove_by_document_id(self, document_id: str) -> int:
        with self._lock.write():
            return self._remove(document_id)

    def clear(self) -> None:
        with self._lock.write():
            removed = len(self._passages)
            self._passages = []
        logger.info("Cleared vector store (%d passages removed)", removed)

    def replace(self, passages: Sequence[Passage], *, document_id: str | None = None) -> None:
        with self._lock.write():
            # Validate before removing anything so a bad batch leaves the store intact.
            dimension = self._check_dimensions(passages)
            if document_id is None:
                self._passages = []
            else:
                self._remove(document_id)
            self._dimension = dimension
            self._passages.extend(passages)
        logger.info(
            "Replaced %s with %d passages",
            "all passages" if document_id is None else f"document {document_id}",
            len(passages),
        )

    # -- readers ----------------------------------------------------------------

    def get_all(self) -> list[Passage]:
        with self._lock.read():
            return list(self._passages)

    def count(self) -> int:
        with self._lock.read():
            return len(self._passages)

    def search(
        self,
        query_embedding: Sequence[float],
        *,
        top_k: int = 5,
        document_ids: Iterable[str] | None = None,
    ) -> list[ScoredPassage]:
        query = np.asarray(query_embedding, dtype=np.float64)
        wanted = set(document_ids) if document_ids is not None else None

        with self._lock.read():
            if self._dimension is not None and len(query) != self._dimension:
                raise DimensionMismatchError(self._dimension, len(query))
            candidates = [
                p for p in self._passages if wanted is None or p.document_id in wanted
            ]

        if not candidates or top_k <= 0:
            return []

        matrix = np.asarray([p.embedding for p in candidates], dtype=np.float64)
        denom = np.linalg.norm(matrix, axis=1) * np.linalg.norm(query)
        dots = matrix @ query
        scores = np.divide(dots, denom, out=np.zeros_like(dots), where=denom != 0.0)

        # Stable sort keeps insertion order among equal scores.
        order = np.argsort(-scores, kind="stable")[:top_k]
        return [ScoredPassage(passage=candidates[i], similarity=float(scores[i])) for i in order]

    # -- internals --------------------------------------------------------------

    def _check_dimensions(self, passages: Sequence[Passage]) -> int | None:
        dimension = self._dimension
        for passage in passages:
            size = len(passage.embedding)
            if dimension is None:
                dimension = size
            elif size != dimension:
                raise DimensionMismatchError(dimension, size)
        return dimension

    def _insert(self, passages: Sequence[Passage]) -> None:
        self._dimension = self._check_dimensions(passages)
        self._passages.extend(passages)
        logger.debug("Added %d passages (total=%d)", len(passages), len(self._passages))

    def _remove(self, document_id: str) -> int:
        kept = [p for p in self._passages if not p.belongs_to(document_id)]
        removed = len(self._passages) - len(kept)
        self._passages = kept
        if removed:
            logger.info("Removed %d passages of document %s", removed, document_id)
        return removed
