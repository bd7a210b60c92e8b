"""
Embedding adapter.

Converts texts to vectors through any LangChain Embeddings provider,
batching requests and normalizing provider failures to EmbeddingError.

Dependencies: langchain_core.embeddings, corpus_qa.core.exceptions
System role: Embedding generation adapter
"""

import asyncio
import logging

from langchain_core.embeddings import Embeddings

from corpus_qa.core.exceptions import ConfigurationError, EmbeddingError

logger = logging.getLogger(__name__)


class Embedder:
    """Batched, failure-normalizing wrapper over a LangChain Embeddings provider."""

    def __init__(
        self,
        embeddings: Embeddings,
        batch_size: int = 100,
        timeout_seconds: float | None = None,
    ) -> None:
        """
        Initialize embedder.

        Args:
            embeddings: LangChain embeddings provider
            batch_size: Maximum texts per provider call
            timeout_seconds: Deadline per async provider call (None disables it)

        Raises:
            ConfigurationError: When batch_size is not positive
        """
        if batch_size < 1:
            raise ConfigurationError(
                f"embedding_batch_size must be positive, got {batch_size}",
                setting="embedding_batch_size",
            )
        self._embeddings = embeddings
        self._batch_size = batch_size
        self._timeout_seconds = timeout_seconds

    @property
    def provider_name(self) -> str:
        return type(self._embeddings).__name__

    def embed(self, texts: list[str]) -> list[list[float]]:
        """
        Embed texts, one vector per text in input order.

        Args:
            texts: Texts to embed

        Returns:
            list[list[float]]: Embedding vectors

        Raises:
            EmbeddingError: When any provider call fails
        """
        if not texts:
            return []

        vectors: list[list[float]] = []
        for batch in self._batches(texts):
            try:
                vectors.extend(self._embeddings.embed_documents(batch))
            except Exception as e:
                raise EmbeddingError(
                    f"Failed to generate embeddings: {e}",
                    provider=self.provider_name,
                    details={"batch_size": len(batch), "error_type": type(e).__name__},
                ) from e

        return self._checked(texts, vectors)

    async def aembed(self, texts: list[str]) -> list[list[float]]:
        """
        Async version of embed.

        Args:
            texts: Texts to embed

        Returns:
            list[list[float]]: Embedding vectors

        Raises:
            EmbeddingError: When any provider call fails or times out
        """
        if not texts:
            return []

        vectors: list[list[float]] = []
        for batch in self._batches(texts):
            try:
                vectors.extend(await asyncio.wait_for(
                    self._embeddings.aembed_documents(batch),
                    timeout=self._timeout_seconds,
                ))
            except asyncio.TimeoutError as e:
                raise EmbeddingError(
                    f"Embedding call timed out after {self._timeout_seconds}s",
                    provider=self.provider_name,
                    details={"batch_size": len(batch)},
                ) from e
            except Exception as e:
                raise EmbeddingError(
                    f"Failed to generate embeddings: {e}",
                    provider=self.provider_name,
                    details={"batch_size": len(batch), "error_type": type(e).__name__},
                ) from e

        return self._checked(texts, vectors)

    def _batches(self, texts: list[str]) -> list[list[str]]:
        return [
            texts[start:start + self._batch_size]
            for start in range(0, len(texts), self._batch_size)
        ]

    def _checked(self, texts: list[str], vectors: list[list[float]]) -> list[list[float]]:
        # Provider must answer every text, otherwise nothing is usable
        if len(vectors) != len(texts):
            raise EmbeddingError(
                "Embedding provider returned a malformed response",
                provider=self.provider_name,
                details={"expected": len(texts), "received": len(vectors)},
            )
        logger.debug(f"{__name__}:embed - embedded {len(texts)} texts")
        return vectors
