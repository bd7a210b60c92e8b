"""
Chunk domain models.

Represents retrievable corpus fragments, their embeddings and search scores.

Dependencies: pydantic
System role: Data structures shared by chunker, vector index and retriever
"""

from pydantic import BaseModel, ConfigDict, Field


class Chunk(BaseModel):
    """Immutable retrievable unit of corpus text."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(description="Deterministic chunk identifier (content hash)")
    text: str = Field(description="Chunk text content")
    source_ref: str = Field(description="Originating document or record, e.g. 'fileB.txt#900'")


class EmbeddedChunk(BaseModel):
    """Chunk paired with its embedding vector."""

    model_config = ConfigDict(frozen=True)

    chunk: Chunk
    vector: tuple[float, ...] = Field(description="Embedding vector")


class ScoredChunk(BaseModel):
    """Single search hit."""

    chunk: Chunk
    score: float = Field(description="Cosine similarity with the query vector")


# Ordered by non-increasing score, length <= k
RetrievalResult = list[ScoredChunk]
