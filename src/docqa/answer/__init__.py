"""
Answer — LLM answer generation over retrieved passages.

Public API
----------
- :class:`AnswerGenerator` — produce an :class:`Answer` from a retrieval response.
- :func:`build_answer_messages` — the prompt sent to the chat model.
"""

from docqa.answer.generator import Answer, AnswerGenerator, AnswerSource
from docqa.answer.prompts import build_answer_messages, build_context

__all__ = [
    "Answer",
    "AnswerGenerator",
    "AnswerSource",
    "build_answer_messages",
    "build_context",
]
