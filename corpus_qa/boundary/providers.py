"""
Model provider factories.

Builds the LangChain chat model and embeddings provider from settings.

Dependencies: langchain.chat_models, corpus_qa.boundary.embeddings_wrapper, corpus_qa.configs
System role: Provider instantiation and selection
"""

import logging

from langchain.chat_models import init_chat_model
from langchain_core.embeddings import Embeddings
from langchain_core.language_models import BaseChatModel

from corpus_qa.boundary.embeddings_wrapper import FixedDimensionEmbeddings
from corpus_qa.configs.models import ModelSettings

logger = logging.getLogger(__name__)


def create_chat_model(settings: ModelSettings) -> BaseChatModel:
    """
    Create the chat model used for answers and keyword extraction.

    Args:
        settings: Model settings

    Returns:
        BaseChatModel: Configured chat model
    """
    logger.info(
        f"{__name__}:create_chat_model - provider={settings.chat_provider}, "
        f"model={settings.chat_model}, temperature={settings.temperature}"
    )
    return init_chat_model(
        settings.chat_model,
        model_provider=settings.chat_provider,
        temperature=settings.temperature,
    )


def create_embeddings(settings: ModelSettings) -> Embeddings:
    """
    Create the embeddings provider shared by corpus and queries.

    Args:
        settings: Model settings

    Returns:
        Embeddings: Fixed-dimension Google embeddings
    """
    logger.info(
        f"{__name__}:create_embeddings - model={settings.embedding_model}, "
        f"dimension={settings.embedding_dimension}"
    )
    return FixedDimensionEmbeddings(
        model=settings.embedding_model,
        output_dimensionality=settings.embedding_dimension,
    )
