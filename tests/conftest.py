"""
Shared test fixtures and configuration for entire test suite.

Provides: deterministic lexical embeddings, chat model mocks, sample corpora
Dependencies: pytest, langchain_core
System role: Test infrastructure and fixture management
"""

import json
import re
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest
from langchain_core.embeddings import Embeddings
from langchain_core.messages import AIMessage

from corpus_qa.boundary.corpus_loader import CorpusRegistry
from corpus_qa.configs.rag import CorpusSourceSettings, RAGSettings
from corpus_qa.core.embedder import Embedder
from corpus_qa.core.pipeline import RAGPipeline
from corpus_qa.models.corpus import ChunkingStrategy
from corpus_qa.models.usage import Pricing

_TOKEN_RE = re.compile(r"[a-z0-9]+")


class VocabularyEmbeddings(Embeddings):
    """
    Bag-of-words embeddings over a vocabulary grown on first sight.

    Deterministic for a given call order and collision-free up to
    `dimension` distinct tokens, so lexical overlap maps to cosine
    similarity.
    """

    def __init__(self, dimension: int = 512) -> None:
        self.dimension = dimension
        self.vocabulary: dict[str, int] = {}
        self.document_calls: list[list[str]] = []

    def _vector(self, text: str) -> list[float]:
        vector = [0.0] * self.dimension
        for token in _TOKEN_RE.findall(text.lower()):
            if token not in self.vocabulary:
                self.vocabulary[token] = len(self.vocabulary)
            vector[self.vocabulary[token]] += 1.0
        return vector

    def embed_documents(self, texts: list[str]) -> list[list[float]]:
        self.document_calls.append(list(texts))
        return [self._vector(text) for text in texts]

    def embed_query(self, text: str) -> list[float]:
        return self._vector(text)


def ai_message(text: str, input_tokens: int | None = 120, output_tokens: int = 30) -> AIMessage:
    """Build a model reply, optionally carrying usage metadata."""
    if input_tokens is None:
        return AIMessage(content=text)
    return AIMessage(
        content=text,
        usage_metadata={
            "input_tokens": input_tokens,
            "output_tokens": output_tokens,
            "total_tokens": input_tokens + output_tokens,
        },
    )


@pytest.fixture
def make_ai_message():
    """Provide the AIMessage factory to tests."""
    return ai_message


@pytest.fixture
def embeddings() -> VocabularyEmbeddings:
    """Provide deterministic lexical embeddings."""
    return VocabularyEmbeddings()


@pytest.fixture
def embedder(embeddings: VocabularyEmbeddings) -> Embedder:
    """Provide Embedder over lexical embeddings."""
    return Embedder(embeddings, batch_size=100)


@pytest.fixture
def mock_chat_model() -> MagicMock:
    """
    Provide mock chat model.

    Returns:
        MagicMock: Model whose ainvoke/invoke return an AIMessage with usage
    """
    model = MagicMock()
    model.model = "mock-chat-model"
    model.ainvoke = AsyncMock(return_value=ai_message("X is a thing."))
    model.invoke = MagicMock(return_value=ai_message("X is a thing."))
    return model


@pytest.fixture
def pricing() -> Pricing:
    """Provide default pricing (0.01 / 0.03 USD per 1000 tokens)."""
    return Pricing(input_rate_per_1k=0.01, output_rate_per_1k=0.03)


@pytest.fixture
def corpus_dir(tmp_path: Path) -> Path:
    """
    Create structured and raw corpus files.

    Returns:
        Path: Directory holding qa.json and raw.txt
    """
    records = [
        {"q": "What is X?", "a": "X is a thing."},
        {"q": "What is Y?", "a": "Y is another thing."},
    ]
    (tmp_path / "qa.json").write_text(json.dumps(records), encoding="utf-8")
    (tmp_path / "raw.txt").write_text(
        "Alpha section talks about apples. " * 40 + "Beta section talks about bananas. " * 40,
        encoding="utf-8",
    )
    return tmp_path


@pytest.fixture
def registry(corpus_dir: Path) -> CorpusRegistry:
    """Provide registry with '1' (structured) and '2' (raw text) selectors."""
    return CorpusRegistry(
        {
            "1": CorpusSourceSettings(path="qa.json", strategy=ChunkingStrategy.STRUCTURED_RECORD),
            "2": CorpusSourceSettings(path="raw.txt", strategy=ChunkingStrategy.FIXED_WINDOW),
        },
        base_dir=corpus_dir,
    )


@pytest.fixture
def rag_settings() -> RAGSettings:
    """Provide pipeline settings with small windows for tests."""
    return RAGSettings(
        chunk_size=200,
        chunk_overlap=20,
        top_k=1,
        embedding_batch_size=10,
        generation_timeout_seconds=5,
    )


@pytest.fixture
def pipeline(
    embeddings: VocabularyEmbeddings,
    mock_chat_model: MagicMock,
    registry: CorpusRegistry,
    pricing: Pricing,
    rag_settings: RAGSettings,
) -> RAGPipeline:
    """Provide pipeline wired to fakes."""
    return RAGPipeline(
        embeddings=embeddings,
        model=mock_chat_model,
        registry=registry,
        pricing=pricing,
        settings=rag_settings,
    )
