"""
API routers.
"""

from corpus_qa.api.routers.health import router as health_router
from corpus_qa.api.routers.query import router as query_router

__all__ = ["health_router", "query_router"]
