"""Chat model used to phrase answers from retrieved passages.

Answer generation follows the same failure policy as embedding: one
attempt, bounded by ``settings.llm_timeout_seconds``, with errors
surfaced to the caller instead of being retried by the SDK.  Pointing
``LLM_BASE_URL`` at any OpenAI-compatible server (vLLM, Ollama, ...)
swaps the provider.
"""

from __future__ import annotations

import logging
from typing import Any

from langchain_openai import ChatOpenAI

from docqa.config import settings

logger = logging.getLogger(__name__)


def _connection_kwargs() -> dict[str, Any]:
    if not settings.llm_base_url:
        return {"api_key": settings.openai_api_key}
    logger.info("Answering through OpenAI-compatible endpoint %s", settings.llm_base_url)
    # Self-hosted servers ignore the key, but ChatOpenAI refuses an empty one.
    return {"base_url": settings.llm_base_url, "api_key": settings.openai_api_key or "EMPTY"}


def get_llm(temperature: float = 0.0) -> ChatOpenAI:
    """Return the chat model configured for answer generation."""
    return ChatOpenAI(
        model=settings.llm_model_name,
        temperature=temperature,
        timeout=settings.llm_timeout_seconds,
        max_retries=0,
        **_connection_kwargs(),
    )
