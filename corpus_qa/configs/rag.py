"""
Retrieval pipeline configuration settings.

Manages chunking, retrieval depth, timeouts and the corpus source registry.

Dependencies: pydantic, pydantic_settings
System role: RAG pipeline configuration
"""

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from corpus_qa.models.corpus import ChunkingStrategy


class CorpusSourceSettings(BaseModel):
    """Location and chunking strategy of one corpus file."""

    path: str
    strategy: ChunkingStrategy


def _default_corpus_sources() -> dict[str, CorpusSourceSettings]:
    return {
        "1": CorpusSourceSettings(
            path="data/tratado/fileT.json",
            strategy=ChunkingStrategy.STRUCTURED_RECORD,
        ),
        "2": CorpusSourceSettings(
            path="data/bruto/fileB.txt",
            strategy=ChunkingStrategy.FIXED_WINDOW,
        ),
    }


class RAGSettings(BaseSettings):
    """Chunking, retrieval and generation settings."""

    model_config = SettingsConfigDict(
        env_prefix="RAG_",
        case_sensitive=False,
        extra="ignore",
    )

    chunk_size: int = Field(default=1000, description="Fixed window size in characters")
    chunk_overlap: int = Field(
        default=100,
        description="Characters shared by consecutive windows (must be < chunk_size)",
    )
    top_k: int = Field(default=4, ge=1, description="Number of chunks retrieved per query")
    embedding_batch_size: int = Field(
        default=100,
        ge=1,
        description="Texts sent per embedding provider call",
    )
    generation_timeout_seconds: float = Field(
        default=60.0,
        gt=0,
        description="Deadline for a single chat model invocation",
    )
    embedding_timeout_seconds: float = Field(
        default=60.0,
        gt=0,
        description="Deadline for a single async embedding provider call",
    )
    extract_keywords: bool = Field(
        default=False,
        description="Reformulate the retrieval query from model-extracted keywords",
    )
    corpus_sources: dict[str, CorpusSourceSettings] = Field(
        default_factory=_default_corpus_sources,
        description="Corpus selector -> source file (JSON in RAG_CORPUS_SOURCES)",
    )
