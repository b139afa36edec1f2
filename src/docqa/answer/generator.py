"""Answer generation from a :class:`~docqa.retrieval.models.RetrievalResponse`."""

from __future__ import annotations

import logging
from typing import Any

from pydantic import BaseModel, Field

from docqa.answer.prompts import NO_CONTEXT_ANSWER, build_answer_messages
from docqa.errors import AnswerGenerationError
from docqa.retrieval.models import RetrievalResponse

logger = logging.getLogger(__name__)

SOURCE_PREVIEW_CHARS = 200


class AnswerSource(BaseModel):
    """A passage cited in support of an answer."""

    content: str
    filename: str
    page_number: int
    similarity: float


class Answer(BaseModel):
    """Free-text answer with the passages it was generated from."""

    query: str
    answer: str
    sources: list[AnswerSource] = Field(default_factory=list)


class AnswerGenerator:
    """Turns ranked passages and a question into an answer.

    Parameters
    ----------
    llm:
        Any LangChain chat model.  When *None*, :func:`~docqa.answer.llm.get_llm`
        is called on first use.
    """

    def __init__(self, llm: Any | None = None) -> None:
        self._llm = llm

    @property
    def llm(self) -> Any:
        if self._llm is None:
            from docqa.answer.llm import get_llm

            self._llm = get_llm(temperature=0.0)
        return self._llm

    def generate(self, question: str, response: RetrievalResponse) -> Answer:
        """Answer *question* from the passages in *response*.

        An empty response short-circuits to a fixed reply without calling
        the model.
        """
        if response.empty or not response.results:
            return Answer(query=question, answer=NO_CONTEXT_ANSWER, sources=[])

        messages = build_answer_messages(question, response.results)
        try:
            reply = self.llm.invoke(messages)
        except Exception as exc:
            logger.exception("Answer generation failed")
            raise AnswerGenerationError("Failed to generate answer") from exc

        sources = [
            AnswerSource(
                content=_truncate(r.content),
                filename=r.metadata.filename,
                page_number=r.metadata.page_number,
                similarity=r.similarity,
            )
            for r in response.results
        ]
        logger.info("Generated answer from %d passages", len(sources))
        return Answer(query=question, answer=str(reply.content), sources=sources)


def _truncate(text: str) -> str:
    if len(text) <= SOURCE_PREVIEW_CHARS:
        return text
    return text[:SOURCE_PREVIEW_CHARS] + "..."
