"""
Base configuration settings.

Application-level flags shared by the aggregated settings; reads `.env`.

Dependencies: pydantic_settings
System role: Foundation for all configuration classes
"""

from pydantic_settings import BaseSettings as PydanticBaseSettings, SettingsConfigDict
from pydantic import Field


class BaseSettings(PydanticBaseSettings):
    """Application flags read from the environment or `.env`."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    debug: bool = Field(
        default=False,
        description="Force DEBUG logging (corpus previews are logged at DEBUG)",
    )
    log_level: str = Field(
        default="INFO",
        description="Root log level when debug is off",
    )
