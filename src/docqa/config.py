"""Shared configuration loaded from environment / .env file."""

from __future__ import annotations

from enum import Enum

from pydantic import Field
from pydantic_settings import BaseSettings


class ReplacementPolicy(str, Enum):
    """What happens to stored passages when a new document is ingested."""

    # Single active document: wipe the store before inserting.
    CLEAR_ALL = "clear_all"
    # Documents coexist; only passages carrying the new document id are replaced.
    BY_DOCUMENT_ID = "by_document_id"


class Settings(BaseSettings):
    """Application-wide settings, populated from env vars or .env file."""

    # Chunking
    chunk_size: int = Field(default=1000, gt=0, description="Maximum characters per passage")
    chunk_overlap: int = Field(default=200, ge=0, description="Characters shared by consecutive passages")
    chunks_per_page: int = Field(
        default=3,
        gt=0,
        description="Rough number of passages per source page, used for page-number estimates",
    )

    # Vector store
    replacement_policy: ReplacementPolicy = ReplacementPolicy.CLEAR_ALL
    embedding_dimension: int | None = Field(
        default=None,
        description="Fix the store dimensionality up front; otherwise the first passage decides",
    )

    # Retrieval
    retrieval_k: int = Field(default=5, gt=0)
    score_threshold: float = -1.0

    # Embedding
    embedding_provider: str = Field(default="huggingface", description="'huggingface' or 'openai'")
    embedding_model: str = "sentence-transformers/all-MiniLM-L6-v2"
    openai_embedding_model: str = "text-embedding-3-small"
    embedding_timeout_seconds: float = 30.0

    # LLM
    openai_api_key: str = Field(default="", description="OpenAI API key (or dummy value for a local server)")
    llm_model_name: str = Field(default="gpt-4o-mini", description="LLM model identifier")
    llm_timeout_seconds: float = Field(default=60.0, gt=0, description="Per-request timeout for answer generation")
    llm_base_url: str = Field(
        default="",
        description=(
            "Base URL for an OpenAI-compatible chat API. Leave empty to use "
            "OpenAI cloud, e.g. 'http://localhost:8000/v1' for a local vLLM."
        ),
    )

    # Serving
    log_level: str = "INFO"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


# Singleton — import `settings` wherever needed.
settings = Settings()
