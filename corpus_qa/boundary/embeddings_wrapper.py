"""
Google Generative AI Embeddings wrapper with fixed output dimensionality.

Wraps GoogleGenerativeAIEmbeddings so corpus and query vectors, both embedded
through the document API, always share one dimensionality.

Dependencies: langchain_google_genai
System role: Embedding dimension consistency for the in-memory index
"""

import logging
from typing import Any, List

from langchain_google_genai import GoogleGenerativeAIEmbeddings

logger = logging.getLogger(__name__)


class FixedDimensionEmbeddings(GoogleGenerativeAIEmbeddings):
    """
    GoogleGenerativeAIEmbeddings wrapper with fixed output dimensionality.

    Every document embed call, sync or async, uses the configured dimension
    unless the caller explicitly overrides it.
    """

    _output_dimensionality: int = 768

    def __init__(
        self,
        model: str = "models/gemini-embedding-001",
        output_dimensionality: int = 768,
        **kwargs,
    ) -> None:
        """
        Initialize embeddings with fixed output dimensionality.

        Args:
            model: Google embedding model ID
            output_dimensionality: Fixed dimension for all embeddings
            **kwargs: Additional arguments for GoogleGenerativeAIEmbeddings
        """
        super().__init__(model=model, **kwargs)
        self._output_dimensionality = output_dimensionality
        logger.info(
            f"{__name__}:__init__ - Initialized with model={model}, "
            f"output_dimensionality={output_dimensionality}"
        )

    def embed_documents(self, texts: List[str], **kwargs: Any) -> List[List[float]]:
        kwargs["output_dimensionality"] = kwargs.get("output_dimensionality") or self._output_dimensionality
        return super().embed_documents(texts, **kwargs)

    async def aembed_documents(self, texts: List[str], **kwargs: Any) -> List[List[float]]:
        kwargs["output_dimensionality"] = kwargs.get("output_dimensionality") or self._output_dimensionality
        return await super().aembed_documents(texts, **kwargs)
