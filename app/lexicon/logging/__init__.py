"""Structured logging infrastructure.

Centralized logging configuration for Lexicon using structlog.

Public API:
    - configure_logging(): Initialize logging for the application
    - get_module_logger(): Get a logger for the calling module
    - bind_translation_context(): Context manager for request-scoped logging
    - get_correlation_id(): Get current correlation ID from context
    - clear_translation_context(): Clear all request context
"""

from lexicon.logging.setup import (
    configure_logging,
    get_module_logger,
    logger,
)

from lexicon.logging.context import (
    bind_translation_context,
    get_correlation_id,
    clear_translation_context,
)

__all__ = [
    "configure_logging",
    "get_module_logger",
    "logger",
    "bind_translation_context",
    "get_correlation_id",
    "clear_translation_context",
]
