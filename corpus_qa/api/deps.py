"""
Dependency injection container.

Factory functions for FastAPI dependencies.

Dependencies: corpus_qa.configs, corpus_qa.core.pipeline
System role: DI container for pipeline injection
"""

from functools import lru_cache

from corpus_qa.configs import get_settings
from corpus_qa.core.pipeline import RAGPipeline


@lru_cache
def get_pipeline() -> RAGPipeline:
    """
    Get pipeline instance.

    Providers are created once; indexes are still built per request.

    Returns:
        RAGPipeline: Pipeline built from application settings
    """
    return RAGPipeline.from_settings(get_settings())
