"""
Token usage accounting.

Captures the token counts of the last model invocation of one pipeline run
and converts them into an estimated cost.

Dependencies: corpus_qa.models.usage
System role: Per-request usage and cost accounting
"""

import logging
from collections.abc import Mapping
from typing import Any

from corpus_qa.core.exceptions import ConfigurationError
from corpus_qa.models.usage import CostEstimate, Pricing, UsageRecord

logger = logging.getLogger(__name__)


def usage_from_metadata(metadata: Mapping[str, Any] | None) -> UsageRecord | None:
    """
    Build a UsageRecord from LangChain usage metadata.

    Accepts LangChain's input_tokens/output_tokens keys as well as the
    prompt_tokens/completion_tokens keys some providers report.

    Returns:
        UsageRecord | None: None when no token counts are present
    """
    if not metadata:
        return None

    prompt_tokens = metadata.get("input_tokens", metadata.get("prompt_tokens"))
    completion_tokens = metadata.get("output_tokens", metadata.get("completion_tokens"))
    if prompt_tokens is None and completion_tokens is None:
        return None

    prompt_tokens = int(prompt_tokens or 0)
    completion_tokens = int(completion_tokens or 0)
    total_tokens = metadata.get("total_tokens")
    return UsageRecord(
        prompt_tokens=prompt_tokens,
        completion_tokens=completion_tokens,
        total_tokens=int(total_tokens) if total_tokens is not None else prompt_tokens + completion_tokens,
    )


def estimate_cost(usage: UsageRecord | None, pricing: Pricing | None) -> CostEstimate | None:
    """
    Estimate the cost of a model invocation.

    Args:
        usage: Token counts, or None when the provider reported none
        pricing: Per-1000-token rates

    Returns:
        CostEstimate | None: None when usage is absent

    Raises:
        ConfigurationError: When pricing is missing
    """
    if usage is None:
        return None
    if pricing is None:
        raise ConfigurationError("Pricing is not configured", setting="pricing")

    input_cost = usage.prompt_tokens * pricing.input_rate_per_1k / 1000
    output_cost = usage.completion_tokens * pricing.output_rate_per_1k / 1000
    return CostEstimate(
        input_cost=input_cost,
        output_cost=output_cost,
        total_cost=input_cost + output_cost,
    )


class UsageAccountant:
    """
    Holds the usage of the last model invocation of a single pipeline run.

    Create one per request; sharing an instance across concurrent requests
    mixes their accounting.
    """

    def __init__(self, pricing: Pricing | None = None) -> None:
        self._pricing = pricing
        self._last_usage: UsageRecord | None = None

    @property
    def last_usage(self) -> UsageRecord | None:
        return self._last_usage

    def reset(self) -> None:
        """Clear the last-usage slot before a pipeline run."""
        self._last_usage = None

    def record(self, usage: UsageRecord | None) -> None:
        """Store the usage reported by a completed model call."""
        self._last_usage = usage
        logger.debug(f"{__name__}:record - usage={usage}")

    def estimate_cost(
        self,
        usage: UsageRecord | None = None,
        pricing: Pricing | None = None,
    ) -> CostEstimate | None:
        """
        Estimate cost of the given usage, defaulting to the last recorded one.

        Args:
            usage: Usage to price (last recorded usage when omitted)
            pricing: Rates overriding the accountant's configured pricing

        Returns:
            CostEstimate | None: None when no usage is available
        """
        return estimate_cost(
            usage if usage is not None else self._last_usage,
            pricing if pricing is not None else self._pricing,
        )
