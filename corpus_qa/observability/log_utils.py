"""
Logging helpers for corpus and prompt text.

Corpus content and prompts can be large and multi-line; these helpers keep
log lines single-line and bounded.

Dependencies: logging (stdlib), corpus_qa.core.exceptions
System role: Logging helper functions
"""

import logging
from typing import Any

from corpus_qa.core.exceptions import CorpusQAException


def preview(text: str, max_length: int = 120) -> str:
    """
    Single-line preview of corpus or prompt text.

    Args:
        text: Text to preview
        max_length: Characters kept before truncating

    Returns:
        str: Whitespace-collapsed text, truncated with its full length noted
    """
    flat = " ".join(text.split())
    if len(flat) <= max_length:
        return flat
    return f"{flat[:max_length]}... ({len(flat)} chars)"


def safe_log_value(value: Any, max_length: int = 120) -> str:
    """Render a context value for a log line; collections are logged by size."""
    if isinstance(value, str):
        return preview(value, max_length)
    if isinstance(value, (list, tuple, set)):
        return f"{type(value).__name__}[{len(value)}]"
    if isinstance(value, dict):
        return f"dict[{len(value)}]"
    return preview(repr(value), max_length)


def log_exception_with_context(
    logger: logging.Logger,
    message: str,
    exc: Exception,
    **context,
) -> None:
    """
    Log an exception at ERROR with traceback and flattened context.

    Domain exceptions contribute their details as detail.<key> fields.

    Args:
        logger: Logger instance
        message: Log message
        exc: Exception instance
        **context: Request context (selector, stage, ...)
    """
    fields = {key: safe_log_value(val) for key, val in context.items()}
    fields["error_type"] = type(exc).__name__
    if isinstance(exc, CorpusQAException):
        fields["error_msg"] = safe_log_value(exc.message)
        for key, val in exc.details.items():
            fields[f"detail.{key}"] = safe_log_value(val)
    else:
        fields["error_msg"] = safe_log_value(str(exc))

    rendered = ", ".join(f"{key}={val}" for key, val in fields.items())
    logger.error(f"{message} | {rendered}", exc_info=exc)
