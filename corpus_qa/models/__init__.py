"""
Domain models.

Pydantic models shared across the pipeline and API layers.
"""

from corpus_qa.models.chunk import Chunk, EmbeddedChunk, RetrievalResult, ScoredChunk
from corpus_qa.models.corpus import ChunkingStrategy, CorpusSource, QARecord
from corpus_qa.models.query import (
    AnswerResult,
    QueryRequest,
    QueryResponse,
    QueryResult,
    UsageResponse,
)
from corpus_qa.models.usage import CostEstimate, Pricing, UsageRecord

__all__ = [
    "AnswerResult",
    "Chunk",
    "ChunkingStrategy",
    "CorpusSource",
    "CostEstimate",
    "EmbeddedChunk",
    "Pricing",
    "QARecord",
    "QueryRequest",
    "QueryResponse",
    "QueryResult",
    "RetrievalResult",
    "ScoredChunk",
    "UsageRecord",
    "UsageResponse",
]
