"""Query API endpoint.

Routes:
- POST /processar?fonte={selector} - Answer a prompt from the selected corpus

Dependencies: corpus_qa.core.pipeline, corpus_qa.api.deps
System role: Corpus Q&A HTTP API
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query

from corpus_qa.api.deps import get_pipeline
from corpus_qa.core.exceptions import (
    ConfigurationError,
    EmbeddingError,
    GenerationError,
    InvalidInputError,
    RetrievalError,
)
from corpus_qa.core.pipeline import RAGPipeline
from corpus_qa.models.query import QueryRequest, QueryResponse, QueryResult, UsageResponse
from corpus_qa.observability.log_utils import log_exception_with_context

logger = logging.getLogger(__name__)

router = APIRouter(tags=["query"])


def to_usage_response(result: QueryResult) -> UsageResponse | None:
    """Map pipeline usage and cost to the HTTP usage payload."""
    if result.usage is None:
        return None
    return UsageResponse(
        prompt_tokens=result.usage.prompt_tokens,
        completion_tokens=result.usage.completion_tokens,
        total_tokens=result.usage.total_tokens,
        estimated_cost_usd=result.cost.formatted_total() if result.cost else None,
    )


@router.post("/processar", response_model=QueryResponse)
async def processar(
    request: QueryRequest,
    fonte: str | None = Query(default=None, description="Corpus selector"),
    pipeline: RAGPipeline = Depends(get_pipeline),
) -> QueryResponse:
    """Answer a prompt from the selected corpus.

    Args:
        request: QueryRequest with the prompt
        fonte: Corpus selector query parameter
        pipeline: Injected RAGPipeline

    Returns:
        QueryResponse: Answer with token usage and estimated cost

    Raises:
        HTTPException(400): Missing prompt, missing or unknown corpus selector
        HTTPException(502): Embedding, retrieval or generation provider failure
        HTTPException(500): Configuration error (including a broken corpus file) or unexpected error
    """
    try:
        result = await pipeline.answer_query(corpus_selector=fonte, query=request.prompt)
    except InvalidInputError as e:
        logger.warning(f"{__name__}:processar - invalid input: {e}")
        raise HTTPException(status_code=400, detail=e.message)
    except (EmbeddingError, RetrievalError, GenerationError) as e:
        log_exception_with_context(logger, f"{__name__}:processar - upstream failure", e, fonte=fonte)
        raise HTTPException(status_code=502, detail=e.message)
    except ConfigurationError as e:
        log_exception_with_context(logger, f"{__name__}:processar - configuration error", e, fonte=fonte)
        raise HTTPException(status_code=500, detail="Internal error.")
    except Exception as e:
        log_exception_with_context(logger, f"{__name__}:processar - unexpected error", e, fonte=fonte)
        raise HTTPException(status_code=500, detail="Internal error.")

    return QueryResponse(
        prompt=request.prompt,
        fonte=fonte,
        response=result.answer_text,
        usage=to_usage_response(result),
    )
