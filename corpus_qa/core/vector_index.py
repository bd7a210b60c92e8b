"""
In-memory vector index.

Holds (vector, chunk) pairs for one pipeline run and answers top-k
nearest-neighbor queries by cosine similarity.

Dependencies: math, corpus_qa.core.embedder, corpus_qa.models.chunk
System role: Similarity search over the request-scoped corpus
"""

import logging
import math
from collections.abc import Sequence

from corpus_qa.core.embedder import Embedder
from corpus_qa.core.exceptions import ConfigurationError, InvalidInputError
from corpus_qa.models.chunk import Chunk, EmbeddedChunk, RetrievalResult, ScoredChunk

logger = logging.getLogger(__name__)


def _norm(vector: Sequence[float]) -> float:
    return math.sqrt(math.fsum(x * x for x in vector))


def cosine_similarity(a: Sequence[float], b: Sequence[float]) -> float:
    """
    Cosine similarity dot(a, b) / (|a| * |b|).

    Zero-magnitude vectors score 0.0.

    Raises:
        ConfigurationError: When dimensionalities differ
    """
    if len(a) != len(b):
        raise ConfigurationError(
            f"Vector dimensionality mismatch: {len(a)} != {len(b)}",
            setting="embedding_dimension",
        )
    denominator = _norm(a) * _norm(b)
    if denominator == 0.0:
        return 0.0
    return math.fsum(x * y for x, y in zip(a, b)) / denominator


class VectorIndex:
    """
    Ordered, read-only-after-build collection of embedded chunks.

    search() never mutates state, so a built index can serve concurrent
    searches.
    """

    def __init__(self, entries: Sequence[EmbeddedChunk] = ()) -> None:
        """
        Initialize index from already-embedded chunks.

        Args:
            entries: Embedded chunks in insertion order

        Raises:
            ConfigurationError: When vectors have mixed dimensionality
        """
        self._entries: tuple[EmbeddedChunk, ...] = tuple(entries)
        self._dimension: int | None = None

        for entry in self._entries:
            if self._dimension is None:
                self._dimension = len(entry.vector)
            elif len(entry.vector) != self._dimension:
                raise ConfigurationError(
                    "Mixed embedding dimensionality in index",
                    setting="embedding_dimension",
                    details={
                        "expected": self._dimension,
                        "received": len(entry.vector),
                        "chunk_id": entry.chunk.id,
                    },
                )

        self._norms: tuple[float, ...] = tuple(_norm(entry.vector) for entry in self._entries)

    @classmethod
    def build(cls, chunks: Sequence[Chunk], embedder: Embedder) -> "VectorIndex":
        """
        Embed every chunk once (batched) and index the results.

        Args:
            chunks: Chunks to index
            embedder: Embedder shared with the retriever

        Returns:
            VectorIndex: Built index

        Raises:
            EmbeddingError: When the provider fails (no partial index is built)
            ConfigurationError: When vectors have mixed dimensionality
        """
        if not chunks:
            return cls()
        vectors = embedder.embed([chunk.text for chunk in chunks])
        return cls._from_vectors(chunks, vectors)

    @classmethod
    async def abuild(cls, chunks: Sequence[Chunk], embedder: Embedder) -> "VectorIndex":
        """Async version of build."""
        if not chunks:
            return cls()
        vectors = await embedder.aembed([chunk.text for chunk in chunks])
        return cls._from_vectors(chunks, vectors)

    @classmethod
    def _from_vectors(
        cls,
        chunks: Sequence[Chunk],
        vectors: Sequence[Sequence[float]],
    ) -> "VectorIndex":
        index = cls(
            EmbeddedChunk(chunk=chunk, vector=tuple(vector))
            for chunk, vector in zip(chunks, vectors)
        )
        logger.info(
            f"{__name__}:build - indexed {len(index)} chunks, dimension={index.dimension}"
        )
        return index

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def dimension(self) -> int | None:
        """Vector dimensionality, None for an empty index."""
        return self._dimension

    @property
    def entries(self) -> tuple[EmbeddedChunk, ...]:
        return self._entries

    def search(self, query_vector: Sequence[float], k: int) -> RetrievalResult:
        """
        Return the k chunks most similar to query_vector.

        Results are sorted by descending cosine similarity; ties keep
        insertion order. k larger than the index returns every chunk.

        Args:
            query_vector: Query embedding
            k: Number of results

        Returns:
            RetrievalResult: At most k scored chunks

        Raises:
            InvalidInputError: When k < 1
            ConfigurationError: When the query dimensionality differs from the index
        """
        if k < 1:
            raise InvalidInputError(f"k must be at least 1, got {k}", field="k")
        if not self._entries:
            return []
        if len(query_vector) != self._dimension:
            raise ConfigurationError(
                "Query vector dimensionality does not match index",
                setting="embedding_dimension",
                details={"index": self._dimension, "query": len(query_vector)},
            )

        query_norm = _norm(query_vector)
        scores = []
        for entry, norm in zip(self._entries, self._norms):
            denominator = norm * query_norm
            if denominator == 0.0:
                scores.append(0.0)
            else:
                scores.append(
                    math.fsum(x * y for x, y in zip(entry.vector, query_vector)) / denominator
                )

        # sorted() is stable with reverse=True, preserving insertion order on ties
        ranked = sorted(range(len(scores)), key=scores.__getitem__, reverse=True)
        return [
            ScoredChunk(chunk=self._entries[i].chunk, score=scores[i])
            for i in ranked[:k]
        ]
