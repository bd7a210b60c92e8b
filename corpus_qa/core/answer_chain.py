"""
Grounded answer chain.

Retrieves context for a query, builds the augmented prompt, invokes the
chat model once and returns the answer with the invocation's token usage.
Optionally reformulates the retrieval query from model-extracted keywords.

Dependencies: langchain_core.language_models, corpus_qa.core.retriever
System role: RAG answer generation orchestration
"""

import asyncio
import logging
from typing import Any

from langchain_core.language_models import BaseChatModel
from langchain_core.messages import BaseMessage

from corpus_qa.core.answer_prompt import (
    ANSWER_PROMPT,
    KEYWORD_PROMPT,
    build_keyword_query,
    format_context,
)
from corpus_qa.core.exceptions import CorpusQAException, GenerationError, RetrievalError
from corpus_qa.core.retriever import Retriever
from corpus_qa.core.usage import UsageAccountant, usage_from_metadata
from corpus_qa.models.chunk import RetrievalResult
from corpus_qa.models.query import AnswerResult
from corpus_qa.models.usage import UsageRecord

logger = logging.getLogger(__name__)


def message_text(message: BaseMessage) -> str:
    """Extract text from a model message, handling list-style content blocks."""
    content = message.content
    if isinstance(content, list):
        return "".join(
            item if isinstance(item, str) else (item.get("text", "") if isinstance(item, dict) else str(item))
            for item in content
        )
    return str(content)


class AnswerChain:
    """
    Retrieval-augmented answer generation.

    Each call runs independently; usage is returned with the result and,
    when an accountant is passed, recorded into it.

    In keyword mode both model calls are recorded, so the accountant ends
    up holding the answer call's usage and the reported cost excludes the
    keyword-extraction tokens.
    """

    def __init__(
        self,
        model: BaseChatModel,
        retriever: Retriever,
        k: int = 4,
        timeout_seconds: float | None = 60.0,
        extract_keywords: bool = False,
    ) -> None:
        """
        Initialize answer chain.

        Args:
            model: Chat model (temperature configured by the caller)
            retriever: Retriever over the request's index
            k: Number of context chunks
            timeout_seconds: Deadline per model invocation (None disables it)
            extract_keywords: Run the keyword-extraction pre-pass before retrieval
        """
        self._model = model
        self._retriever = retriever
        self.k = k
        self._timeout_seconds = timeout_seconds
        self.extract_keywords = extract_keywords

    async def ainvoke(
        self,
        query: str,
        accountant: UsageAccountant | None = None,
    ) -> AnswerResult:
        """
        Answer a query from retrieved context.

        Args:
            query: User question
            accountant: Optional request-local accountant receiving each usage

        Returns:
            AnswerResult: Verbatim answer text, usage and context chunks

        Raises:
            EmbeddingError: When the query cannot be embedded
            RetrievalError: When retrieval fails
            GenerationError: When the model call fails or times out
        """
        retrieval_query = query
        if self.extract_keywords:
            retrieval_query = await self._areformulate(query, accountant)

        chunks = await self._aretrieve(retrieval_query)
        messages = self._build_messages(query, chunks)

        logger.info(
            f"{__name__}:ainvoke - invoking model with {len(chunks)} context chunks"
        )
        text, usage = await self._acomplete(messages, stage="answer")
        if accountant is not None:
            accountant.record(usage)

        return AnswerResult(text=text, usage=usage, chunks=chunks, retrieval_query=retrieval_query)

    def invoke(
        self,
        query: str,
        accountant: UsageAccountant | None = None,
    ) -> AnswerResult:
        """
        Synchronous version of ainvoke.

        The deadline is not applied here; configure provider-side timeouts
        on the model for blocking use.
        """
        retrieval_query = query
        if self.extract_keywords:
            messages = KEYWORD_PROMPT.invoke({"query": query}).to_messages()
            keywords_text, usage = self._complete(messages, stage="keywords")
            if accountant is not None:
                accountant.record(usage)
            retrieval_query = self._keyword_query_or_original(keywords_text, query)

        try:
            chunks = self._retriever.retrieve(retrieval_query, self.k)
        except CorpusQAException:
            raise
        except Exception as e:
            raise RetrievalError(f"Retrieval failed: {e}", operation="retrieve") from e

        text, usage = self._complete(self._build_messages(query, chunks), stage="answer")
        if accountant is not None:
            accountant.record(usage)

        return AnswerResult(text=text, usage=usage, chunks=chunks, retrieval_query=retrieval_query)

    async def _areformulate(self, query: str, accountant: UsageAccountant | None) -> str:
        messages = KEYWORD_PROMPT.invoke({"query": query}).to_messages()
        keywords_text, usage = await self._acomplete(messages, stage="keywords")
        if accountant is not None:
            accountant.record(usage)
        return self._keyword_query_or_original(keywords_text, query)

    def _keyword_query_or_original(self, keywords_text: str, query: str) -> str:
        keyword_query = build_keyword_query(keywords_text)
        if keyword_query is None:
            logger.warning(f"{__name__}:reformulate - no keywords extracted, using original query")
            return query
        logger.info(f"{__name__}:reformulate - retrieval query reformulated from keywords")
        return keyword_query

    async def _aretrieve(self, query: str) -> RetrievalResult:
        try:
            return await self._retriever.aretrieve(query, self.k)
        except CorpusQAException:
            raise
        except Exception as e:
            raise RetrievalError(f"Retrieval failed: {e}", operation="retrieve") from e

    def _build_messages(self, query: str, chunks: RetrievalResult) -> list[BaseMessage]:
        return ANSWER_PROMPT.invoke({
            "context": format_context(chunks),
            "query": query,
        }).to_messages()

    async def _acomplete(
        self,
        messages: list[BaseMessage],
        stage: str,
    ) -> tuple[str, UsageRecord | None]:
        try:
            if self._timeout_seconds is None:
                response = await self._model.ainvoke(messages)
            else:
                response = await asyncio.wait_for(
                    self._model.ainvoke(messages),
                    timeout=self._timeout_seconds,
                )
        except asyncio.TimeoutError as e:
            raise GenerationError(
                f"Model invocation timed out after {self._timeout_seconds}s",
                provider=self._model_name,
                details={"stage": stage},
            ) from e
        except Exception as e:
            raise GenerationError(
                f"Model invocation failed: {e}",
                provider=self._model_name,
                details={"stage": stage, "error_type": type(e).__name__},
            ) from e
        return self._unpack(response, stage)

    def _complete(
        self,
        messages: list[BaseMessage],
        stage: str,
    ) -> tuple[str, UsageRecord | None]:
        try:
            response = self._model.invoke(messages)
        except Exception as e:
            raise GenerationError(
                f"Model invocation failed: {e}",
                provider=self._model_name,
                details={"stage": stage, "error_type": type(e).__name__},
            ) from e
        return self._unpack(response, stage)

    def _unpack(self, response: Any, stage: str) -> tuple[str, UsageRecord | None]:
        usage = usage_from_metadata(getattr(response, "usage_metadata", None))
        if usage is None:
            logger.warning(f"{__name__}:{stage} - model reported no usage metadata")
        else:
            logger.info(
                f"{__name__}:{stage} - prompt_tokens={usage.prompt_tokens}, "
                f"completion_tokens={usage.completion_tokens}"
            )
        return message_text(response), usage

    @property
    def _model_name(self) -> str:
        return getattr(self._model, "model", None) or getattr(self._model, "model_name", None) or type(self._model).__name__
