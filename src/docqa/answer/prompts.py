"""Prompt templates for answering questions from retrieved passages."""

from __future__ import annotations

from typing import TYPE_CHECKING

from langchain_core.messages import HumanMessage, SystemMessage

if TYPE_CHECKING:
    from langchain_core.messages import BaseMessage

    from docqa.retrieval.models import RetrievedPassage

ANSWER_SYSTEM = """\
You are a helpful AI assistant that answers questions based on the provided document context.
Always base your answers on the context provided. If the context doesn't contain enough \
information to answer the question, say so.
Be concise and accurate. Cite sources when relevant by mentioning the page number.
"""

NO_CONTEXT_ANSWER = (
    "I couldn't find any relevant information in the document to answer your question."
)


def build_context(passages: list[RetrievedPassage]) -> str:
    """Numbered source blocks, one per passage."""
    return "\n\n".join(
        f"[Source {i} - {p.metadata.filename}, page {p.metadata.page_number}]:\n{p.content}"
        for i, p in enumerate(passages, 1)
    )


def build_answer_messages(question: str, passages: list[RetrievedPassage]) -> list[BaseMessage]:
    """Assemble the chat messages for one answer-generation call."""
    user_msg = f"Context from the document:\n\n{build_context(passages)}\n\nQuestion: {question}"
    return [
        SystemMessage(content=ANSWER_SYSTEM),
        HumanMessage(content=user_msg),
    ]
