"""
Model provider configuration settings.

Chat model and embedding model identifiers for LangChain providers.

Dependencies: pydantic, pydantic_settings
System role: LLM and embedding provider configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ModelSettings(BaseSettings):
    """Chat and embedding model configuration."""

    model_config = SettingsConfigDict(
        env_prefix="MODEL_",
        case_sensitive=False,
        extra="ignore",
    )

    chat_provider: str = Field(
        default="google_genai",
        description="LangChain provider key for init_chat_model",
    )
    chat_model: str = Field(default="gemini-2.5-flash", description="Chat model ID")
    temperature: float = Field(default=0.0, ge=0.0, le=2.0)

    embedding_model: str = Field(
        default="models/gemini-embedding-001",
        description="Google Gemini embedding model ID",
    )
    embedding_dimension: int = Field(
        default=768,
        ge=1,
        description="Output dimensionality requested for every embedding call",
    )
