"""Unit tests for lexicon.logging.context module.

Tests cover:
- bind_translation_context() context manager
- get_correlation_id()
- clear_translation_context()
"""

import uuid

import pytest
import structlog

from lexicon.logging import (
    bind_translation_context,
    clear_translation_context,
    get_correlation_id,
)


@pytest.fixture(autouse=True)
def clean_context():
    """Start and finish every test with an empty logging context."""
    clear_translation_context()
    yield
    clear_translation_context()


@pytest.mark.unit
class TestBindTranslationContext:
    """Test suite for bind_translation_context context manager."""

    def test_auto_generates_correlation_id(self):
        """Correlation ID is auto-generated if not provided."""
        with bind_translation_context(language="ko"):
            correlation_id = get_correlation_id()
            assert correlation_id is not None
            uuid.UUID(correlation_id)

    def test_uses_provided_correlation_id(self):
        """Provided correlation ID is used instead of generating one."""
        with bind_translation_context(correlation_id="req-123"):
            assert get_correlation_id() == "req-123"

    def test_binds_language_and_path(self):
        """Language, request path and extra fields are bound."""
        with bind_translation_context(
            language="ko", request_path="/pages/home", channel="web"
        ):
            ctx = structlog.contextvars.get_contextvars()
            assert ctx["language"] == "ko"
            assert ctx["request_path"] == "/pages/home"
            assert ctx["channel"] == "web"

    def test_omits_unset_fields(self):
        """Unset optional fields are not bound."""
        with bind_translation_context():
            ctx = structlog.contextvars.get_contextvars()
            assert "language" not in ctx
            assert "request_path" not in ctx

    def test_unbinds_on_exit(self):
        """Context is removed when the block exits."""
        with bind_translation_context(language="ko"):
            pass

        assert get_correlation_id() is None
        assert "language" not in structlog.contextvars.get_contextvars()

    def test_unbinds_on_exception(self):
        """Context is removed even when the block raises."""
        with pytest.raises(RuntimeError):
            with bind_translation_context(language="ko"):
                raise RuntimeError("boom")

        assert structlog.contextvars.get_contextvars() == {}


@pytest.mark.unit
def test_clear_translation_context():
    """clear_translation_context() drops every bound field."""
    structlog.contextvars.bind_contextvars(language="ko", correlation_id="x")
    clear_translation_context()
    assert structlog.contextvars.get_contextvars() == {}
