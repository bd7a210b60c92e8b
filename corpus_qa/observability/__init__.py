"""
Observability module.

Provides logging configuration, correlation ID tracking and HTTP middleware.
"""

from corpus_qa.observability.correlation import get_correlation_id, set_correlation_id
from corpus_qa.observability.logger import configure_logging

__all__ = ["configure_logging", "get_correlation_id", "set_correlation_id"]
