"""
docqa — single-document question answering over embedded passages.

Uploaded text is normalised, chunked, embedded, and kept in an in-memory
vector store; questions are answered from the passages most similar to
them.

Subpackages
-----------
- :mod:`docqa.ingestion` — normalise, chunk, embed, and store one document.
- :mod:`docqa.retrieval` — vector store and similarity retrieval.
- :mod:`docqa.answer` — LLM answer generation from retrieved passages.
- :mod:`docqa.serving` — FastAPI application exposing the pipelines.
"""

__version__ = "0.1.0"
