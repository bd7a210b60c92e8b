"""
Query domain models and schemas.

Pipeline result plus request/response schemas for the query endpoint.

Dependencies: pydantic, corpus_qa.models.usage
System role: Query API contracts
"""

from pydantic import BaseModel, Field

from corpus_qa.models.chunk import RetrievalResult
from corpus_qa.models.usage import CostEstimate, UsageRecord


class AnswerResult(BaseModel):
    """Generated answer with the usage of the invocation that produced it."""

    text: str = Field(description="Model output, verbatim")
    usage: UsageRecord | None = Field(default=None, description="None when the provider reported no usage")
    chunks: RetrievalResult = Field(default_factory=list, description="Context chunks, retrieval order")
    retrieval_query: str = Field(description="Query used for retrieval (reformulated in keyword mode)")


class QueryResult(BaseModel):
    """Outcome of one ingestion-to-answer pipeline run."""

    answer_text: str
    usage: UsageRecord | None = None
    cost: CostEstimate | None = None


class QueryRequest(BaseModel):
    """Request body for the query endpoint."""

    prompt: str | None = Field(default=None, description="User question")


class UsageResponse(BaseModel):
    """Token usage with estimated cost, as exposed over HTTP."""

    prompt_tokens: int = Field(serialization_alias="promptTokens")
    completion_tokens: int = Field(serialization_alias="completionTokens")
    total_tokens: int = Field(serialization_alias="totalTokens")
    estimated_cost_usd: str | None = Field(default=None, serialization_alias="estimatedCostUSD")


class QueryResponse(BaseModel):
    """Response schema for the query endpoint."""

    prompt: str
    fonte: str
    response: str
    usage: UsageResponse | None = None
