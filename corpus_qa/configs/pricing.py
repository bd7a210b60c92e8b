"""
Pricing configuration settings.

Dependencies: pydantic, pydantic_settings
System role: Token cost rates for usage accounting
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from corpus_qa.models.usage import Pricing


class PricingSettings(BaseSettings):
    """Per-1000-token rates in USD."""

    model_config = SettingsConfigDict(
        env_prefix="PRICING_",
        case_sensitive=False,
        extra="ignore",
    )

    input_rate_per_1k: float = Field(default=0.01, ge=0.0)
    output_rate_per_1k: float = Field(default=0.03, ge=0.0)

    def to_pricing(self) -> Pricing:
        """Convert to the domain Pricing model."""
        return Pricing(
            input_rate_per_1k=self.input_rate_per_1k,
            output_rate_per_1k=self.output_rate_per_1k,
        )
