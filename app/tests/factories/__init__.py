"""Test data factories for deterministic test data generation."""

from tests.factories.i18n import (
    DiagnosticRecorder,
    make_fallback_config,
    make_nested_translations,
    make_translation_store,
    make_translator,
)

__all__ = [
    "DiagnosticRecorder",
    "make_fallback_config",
    "make_nested_translations",
    "make_translation_store",
    "make_translator",
]
