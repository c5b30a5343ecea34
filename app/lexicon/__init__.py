"""Lexicon - translation resolution and interpolation engine.

Subpackages:
- configuration: Pydantic settings for the engine and its logging
- logging: structlog setup and request-scoped context binding
- i18n: flattening, fallback resolution, interpolation, language
  negotiation and pluralization
"""
