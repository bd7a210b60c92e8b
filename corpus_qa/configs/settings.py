"""
Unified application settings.

Aggregates all configuration modules into a single Settings class.
Provides dependency injection factory for FastAPI.

Dependencies: All config modules
System role: Central configuration aggregator for the application
"""

from functools import lru_cache

from pydantic import Field

from corpus_qa.configs.base import BaseSettings
from corpus_qa.configs.models import ModelSettings
from corpus_qa.configs.pricing import PricingSettings
from corpus_qa.configs.rag import RAGSettings


class Settings(BaseSettings):
    """Unified application settings aggregating all config modules."""

    # Aggregated settings
    rag: RAGSettings = Field(default_factory=RAGSettings)
    models: ModelSettings = Field(default_factory=ModelSettings)
    pricing: PricingSettings = Field(default_factory=PricingSettings)


@lru_cache
def get_settings() -> Settings:
    """
    Get application settings singleton.

    Returns Settings instance, cached for dependency injection.
    Environment variables loaded once at startup.

    Returns:
        Settings: Application settings instance

    Usage:
        from corpus_qa.configs import get_settings
        settings = get_settings()
    """
    return Settings()
