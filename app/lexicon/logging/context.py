"""Request context binding for structured logging.

Binds request-scoped fields (correlation ID, active language) so that
every fallback or missing-translation log line emitted while serving a
request can be traced back to it.

Usage:
    from lexicon.logging import bind_translation_context

    with bind_translation_context(language="ko", request_path="/home"):
        translator.t("pages.home.title")

Dependencies:
    - structlog.contextvars
"""

import uuid
from contextlib import contextmanager
from typing import Any, Generator, Optional

import structlog


@contextmanager
def bind_translation_context(
    language: Optional[str] = None,
    correlation_id: Optional[str] = None,
    request_path: Optional[str] = None,
    **extra_context: Any,
) -> Generator[None, None, None]:
    """Bind request-scoped context to all logs within the context manager.

    Args:
        language: Language selected for the request.
        correlation_id: Unique request identifier. Auto-generated if not provided.
        request_path: HTTP request path (e.g., "/pages/home").
        **extra_context: Additional key-value pairs to include in logs.

    Yields:
        None - context is bound to structlog's context vars.
    """
    context: dict[str, Any] = {}
    context["correlation_id"] = correlation_id or str(uuid.uuid4())

    if language is not None:
        context["language"] = language

    if request_path is not None:
        context["request_path"] = request_path

    context.update(extra_context)

    structlog.contextvars.bind_contextvars(**context)
    try:
        yield
    finally:
        structlog.contextvars.unbind_contextvars(*context.keys())


def get_correlation_id() -> Optional[str]:
    """Get the current correlation ID from the logging context.

    Returns:
        The correlation ID if set, None otherwise.
    """
    ctx = structlog.contextvars.get_contextvars()
    return ctx.get("correlation_id")


def clear_translation_context() -> None:
    """Clear all request-scoped context from the logging context."""
    structlog.contextvars.clear_contextvars()
