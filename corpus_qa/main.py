"""
FastAPI application entry point.

Initializes FastAPI app, registers routers, adds middleware, and configures lifespan.

Dependencies: fastapi, corpus_qa.api, corpus_qa.observability, corpus_qa.configs
System role: Application initialization and configuration
"""

from contextlib import asynccontextmanager
import logging

from dotenv import load_dotenv
from fastapi import FastAPI

from corpus_qa.api.routers import health_router, query_router
from corpus_qa.configs import get_settings
from corpus_qa.observability.logger import configure_logging
from corpus_qa.observability.middleware import CorrelationMiddleware, RequestLoggingMiddleware

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Configures logging on startup.
    """
    settings = get_settings()
    configure_logging("DEBUG" if settings.debug else settings.log_level)
    logger.info(
        f"{__name__}:lifespan - startup, corpus selectors={sorted(settings.rag.corpus_sources)}"
    )

    yield

    logger.info(f"{__name__}:lifespan - shutdown")


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application.

    Returns:
        FastAPI: Configured application instance
    """
    app = FastAPI(
        title="Corpus Q&A RAG API",
        description="Answers questions from a private corpus with retrieval-augmented generation",
        version="0.1.0",
        lifespan=lifespan,
    )

    # Added first = last to execute
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(CorrelationMiddleware)

    app.include_router(query_router)
    app.include_router(health_router)

    return app


load_dotenv()
app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "corpus_qa.main:app",
        host="localhost",
        port=3000,
        reload=True,
    )
