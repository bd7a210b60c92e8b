"""
Token usage and cost models.

Dependencies: pydantic
System role: Usage accounting data structures
"""

from pydantic import BaseModel, Field


class UsageRecord(BaseModel):
    """Token counts reported by a single model invocation."""

    prompt_tokens: int = Field(default=0, ge=0)
    completion_tokens: int = Field(default=0, ge=0)
    total_tokens: int = Field(default=0, ge=0)


class Pricing(BaseModel):
    """Per-1000-token rates in USD."""

    input_rate_per_1k: float = Field(ge=0.0, description="USD per 1000 prompt tokens")
    output_rate_per_1k: float = Field(ge=0.0, description="USD per 1000 completion tokens")


class CostEstimate(BaseModel):
    """Estimated cost derived from a UsageRecord and Pricing."""

    input_cost: float
    output_cost: float
    total_cost: float

    def formatted_total(self, places: int = 6) -> str:
        """Total cost as a fixed-point string."""
        return f"{self.total_cost:.{places}f}"
