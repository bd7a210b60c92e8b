"""
Query retrieval.

Embeds a query with the corpus embedder and searches the vector index.

Dependencies: corpus_qa.core.vector_index, corpus_qa.core.embedder
System role: RAG retrieval business logic
"""

import logging

from corpus_qa.core.embedder import Embedder
from corpus_qa.core.exceptions import CorpusQAException, InvalidInputError, RetrievalError
from corpus_qa.core.vector_index import VectorIndex
from corpus_qa.models.chunk import RetrievalResult

logger = logging.getLogger(__name__)


class Retriever:
    """
    Top-k retrieval over a built index.

    The query must be embedded by the same Embedder that built the index;
    vectors from a different model live in a different space.
    """

    def __init__(self, index: VectorIndex, embedder: Embedder, k: int = 4) -> None:
        """
        Initialize retriever.

        Args:
            index: Built vector index
            embedder: Embedder that produced the index vectors
            k: Default number of chunks to return
        """
        self._index = index
        self._embedder = embedder
        self.k = k

    @property
    def index(self) -> VectorIndex:
        return self._index

    def retrieve(self, query: str, k: int | None = None) -> RetrievalResult:
        """
        Retrieve the chunks most similar to query.

        Args:
            query: Query text
            k: Optional override of the default k

        Returns:
            RetrievalResult: Scored chunks, best first

        Raises:
            EmbeddingError: When the query cannot be embedded
            RetrievalError: When search fails
        """
        self._validate(query)
        vectors = self._embedder.embed([query])
        return self._search(vectors, k)

    async def aretrieve(self, query: str, k: int | None = None) -> RetrievalResult:
        """Async version of retrieve."""
        self._validate(query)
        vectors = await self._embedder.aembed([query])
        return self._search(vectors, k)

    def _validate(self, query: str) -> None:
        if not query or not query.strip():
            raise InvalidInputError("Query must not be empty", field="query")

    def _search(self, vectors: list[list[float]], k: int | None) -> RetrievalResult:
        k = self.k if k is None else k
        if not vectors or not vectors[0]:
            raise RetrievalError("Embedding provider returned no query vector", operation="embed_query")

        try:
            results = self._index.search(vectors[0], k)
        except CorpusQAException:
            raise
        except Exception as e:
            raise RetrievalError(
                f"Vector search failed: {e}",
                operation="search",
                details={"error_type": type(e).__name__},
            ) from e

        logger.info(
            f"{__name__}:retrieve - k={k}, results={len(results)}, "
            f"top_score={results[0].score if results else None}"
        )
        return results
