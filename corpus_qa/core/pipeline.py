"""
Corpus Q&A pipeline.

Runs one request-scoped ingestion-to-answer cycle: resolve the corpus,
chunk it with the source's strategy, embed it into a fresh in-memory index,
answer the query from retrieved context and price the model usage.

Dependencies: corpus_qa.core, corpus_qa.boundary, corpus_qa.configs
System role: Pipeline entry point consumed by the transport layer
"""

import asyncio
import logging

from langchain_core.embeddings import Embeddings
from langchain_core.language_models import BaseChatModel

from corpus_qa.boundary.corpus_loader import CorpusRegistry, load_corpus
from corpus_qa.configs.rag import RAGSettings
from corpus_qa.configs.settings import Settings
from corpus_qa.core.answer_chain import AnswerChain
from corpus_qa.core.chunker import Chunker
from corpus_qa.core.embedder import Embedder
from corpus_qa.core.exceptions import InvalidInputError
from corpus_qa.core.retriever import Retriever
from corpus_qa.core.usage import UsageAccountant
from corpus_qa.core.vector_index import VectorIndex
from corpus_qa.models.corpus import ChunkingStrategy
from corpus_qa.models.query import QueryResult
from corpus_qa.models.usage import Pricing
from corpus_qa.observability.log_utils import preview

logger = logging.getLogger(__name__)


class RAGPipeline:
    """
    Configurable retrieval-augmented answering pipeline.

    Holds only immutable collaborators; every answer_query() call builds its
    own index, chain and usage accountant, so concurrent calls share no
    mutable state.
    """

    def __init__(
        self,
        embeddings: Embeddings,
        model: BaseChatModel,
        registry: CorpusRegistry,
        pricing: Pricing,
        settings: RAGSettings | None = None,
    ) -> None:
        """
        Initialize pipeline.

        Args:
            embeddings: Embeddings provider for corpus and queries
            model: Chat model for answers
            registry: Corpus selector registry
            pricing: Per-1000-token rates
            settings: Chunking/retrieval settings (defaults when None)

        Raises:
            ConfigurationError: When chunk size/overlap are invalid
        """
        self._settings = settings or RAGSettings()
        self._embeddings = embeddings
        self._model = model
        self._registry = registry
        self._pricing = pricing
        self._chunkers = {
            strategy: Chunker(
                strategy=strategy,
                chunk_size=self._settings.chunk_size,
                chunk_overlap=self._settings.chunk_overlap,
            )
            for strategy in ChunkingStrategy
        }

    @classmethod
    def from_settings(cls, settings: Settings) -> "RAGPipeline":
        """
        Build a pipeline with providers created from settings.

        Args:
            settings: Application settings

        Returns:
            RAGPipeline: Ready pipeline
        """
        from corpus_qa.boundary.providers import create_chat_model, create_embeddings

        return cls(
            embeddings=create_embeddings(settings.models),
            model=create_chat_model(settings.models),
            registry=CorpusRegistry(settings.rag.corpus_sources),
            pricing=settings.pricing.to_pricing(),
            settings=settings.rag,
        )

    @property
    def registry(self) -> CorpusRegistry:
        return self._registry

    async def answer_query(
        self,
        corpus_selector: str | None,
        query: str | None,
        k: int | None = None,
    ) -> QueryResult:
        """
        Answer a query against the selected corpus.

        Input is validated before any provider call is made.

        Args:
            corpus_selector: Registered corpus selector
            query: User question
            k: Optional number of context chunks (settings.top_k by default)

        Returns:
            QueryResult: Answer text, usage and estimated cost

        Raises:
            InvalidInputError: Empty query, bad k or unknown corpus selector
            ConfigurationError: Registered corpus file missing or malformed
            EmbeddingError: Embedding provider failure or timeout
            RetrievalError: Retrieval failure
            GenerationError: Model failure or timeout
        """
        if not query or not query.strip():
            raise InvalidInputError("Query must not be empty", field="prompt")
        if k is not None and k < 1:
            raise InvalidInputError(f"k must be at least 1, got {k}", field="k")
        source = self._registry.resolve(corpus_selector)
        k = k or self._settings.top_k

        accountant = UsageAccountant(self._pricing)
        accountant.reset()

        logger.info(
            f"{__name__}:answer_query - START selector={source.selector}, "
            f"strategy={source.strategy.value}, query_len={len(query)}, k={k}"
        )
        logger.debug(f"{__name__}:answer_query - query={preview(query)}")

        content = await asyncio.to_thread(load_corpus, source, self._registry.path_for(source))
        chunks = self._chunkers[source.strategy].chunk(content, source_ref=source.path)

        embedder = Embedder(
            self._embeddings,
            batch_size=self._settings.embedding_batch_size,
            timeout_seconds=self._settings.embedding_timeout_seconds,
        )
        index = await VectorIndex.abuild(chunks, embedder)

        chain = AnswerChain(
            model=self._model,
            retriever=Retriever(index, embedder, k=k),
            k=k,
            timeout_seconds=self._settings.generation_timeout_seconds,
            extract_keywords=self._settings.extract_keywords,
        )
        answer = await chain.ainvoke(query, accountant=accountant)

        cost = accountant.estimate_cost()
        logger.info(
            f"{__name__}:answer_query - END selector={source.selector}, "
            f"answer_len={len(answer.text)}, "
            f"total_cost={cost.formatted_total() if cost else None}"
        )
        return QueryResult(answer_text=answer.text, usage=accountant.last_usage, cost=cost)
