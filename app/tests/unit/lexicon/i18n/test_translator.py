"""Tests for lexicon.i18n.translator module."""

# pylint: disable=protected-access

import pytest

from lexicon.i18n import (
    FallbackConfig,
    ScopedTranslator,
    StyledSegment,
    TextSegment,
    Translator,
    flatten_translations,
)
from tests.factories.i18n import make_translator


class TestTranslator:
    """Tests for Translator service."""

    @pytest.fixture
    def translator(self, store, fallback_config, recorder):
        """Create Korean Translator over the shared store."""
        return Translator(store, "ko", fallback_config, recorder)

    def test_translator_initialization(self, store, fallback_config):
        """Translator keeps its store, language and config."""
        translator = Translator(store, "en", fallback_config)
        assert translator.store is store
        assert translator.language == "en"
        assert translator.config is fallback_config
        assert translator.available_languages == ["en", "ko", "ja"]

    def test_t_direct(self, translator):
        """t() returns a direct translation."""
        assert translator.t("common.greeting") == "안녕하세요"

    def test_t_with_variables(self, translator):
        """t() interpolates variables."""
        assert translator.t("common.welcome", {"name": "민수"}) == "민수님, 환영합니다!"

    def test_t_fallback(self, translator, recorder):
        """t() uses namespace and language fallbacks."""
        assert translator.t("pages.save") == "저장"
        assert translator.t("errors.not_found", {"path": "/x"}) == "Page /x not found"
        assert recorder.kinds == ["namespace", "language"]

    def test_t_missing_returns_key(self, translator):
        """t() returns the key itself when no translation exists."""
        assert translator.t("common.unknown") == "common.unknown"

    def test_t_missing_variable_left_verbatim(self, translator):
        """t() leaves placeholders without a value."""
        assert translator.t("common.welcome") == "{{name}}님, 환영합니다!"

    def test_t_styled(self, store, fallback_config):
        """t_styled() returns segments with styled values."""
        translator = Translator(store, "en", fallback_config)
        segments = translator.t_styled(
            "common.welcome", {"name": "Ann"}, {"name": {"color": "red"}}
        )
        assert segments == [
            TextSegment("Welcome, "),
            StyledSegment(value="Ann", style={"color": "red"}),
            TextSegment("!"),
        ]

    def test_t_styled_missing_key(self, translator):
        """t_styled() falls back to the key as literal text."""
        assert translator.t_styled("nope", {}, {}) == [TextSegment("nope")]

    def test_with_language(self, translator):
        """with_language() returns a new translator sharing the store."""
        english = translator.with_language("en")
        assert english is not translator
        assert english.store is translator.store
        assert english.t("common.greeting") == "Hello"
        assert translator.t("common.greeting") == "안녕하세요"

    def test_with_store(self, translator):
        """with_store() swaps translations without touching the original."""
        reloaded = translator.with_store(
            flatten_translations({"ko": {"common": {"greeting": "여보세요"}}})
        )
        assert reloaded.t("common.greeting") == "여보세요"
        assert translator.t("common.greeting") == "안녕하세요"

    def test_has_key(self, translator, recorder):
        """has_key() includes fallbacks and stays silent."""
        assert translator.has_key("common.greeting")
        assert translator.has_key("common.farewell")
        assert not translator.has_key("common.unknown")
        assert recorder.diagnostics == []

    def test_keys(self, translator):
        """keys() lists the direct keys of the current language."""
        keys = translator.keys()
        assert "common.greeting" in keys
        assert "common.farewell" not in keys


class TestTranslatorPlural:
    """Tests for Translator.plural()."""

    def test_plural_english(self):
        """plural() selects English forms from <key>_plural."""
        translator = make_translator("en")
        assert translator.plural("common.items", 1) == "1 item"
        assert translator.plural("common.items", 3) == "3 items"

    def test_plural_korean(self):
        """plural() uses the Korean rule (always other)."""
        translator = make_translator("ko")
        assert translator.plural("common.items", 1) == "1개 항목"

    def test_plural_options_come_from_first_match(self):
        """All categories come from the first namespace and language with any."""
        translator = make_translator("ko")
        options = translator.plural_options("pages.items")

        # ko common has only "other"; en's "one" is not mixed in
        assert options.as_dict() == {"other": "{{count}}개 항목"}

    def test_plural_does_not_mix_languages(self):
        """A partial set in the requested language wins over a full fallback set."""
        store = flatten_translations(
            {
                "ru": {"cart": {"items_plural": {"other": "{{count}} штук"}}},
                "en": {"cart": {"items_plural": {
                    "one": "{{count}} item",
                    "other": "{{count}} items",
                }}},
            }
        )
        config = FallbackConfig(language_fallback={"ru": ["en"]})
        translator = Translator(store, "ru", config)

        # 21 is "one" in Russian; the ru set has no "one" so "other" is used
        assert translator.plural("cart.items", 21) == "21 штук"

    def test_plural_fallback_reports_diagnostic(self, recorder):
        """A plural set found through a fallback emits one diagnostic."""
        store = flatten_translations(
            {
                "ko": {"cart": {"title": "장바구니"}},
                "en": {"cart": {"items_plural": {
                    "one": "{{count}} item",
                    "other": "{{count}} items",
                }}},
            }
        )
        config = FallbackConfig(language_fallback={"ko": ["en"]})
        translator = Translator(store, "ko", config, recorder)

        assert translator.plural("cart.items", 3) == "3 items"
        assert recorder.kinds == ["language"]
        diagnostic = recorder.diagnostics[0]
        assert diagnostic.requested_key == "cart.items_plural"
        assert diagnostic.resolved_language == "en"

    def test_plural_direct_hit_is_silent(self, recorder):
        """A plural set found directly emits no diagnostic."""
        translator = make_translator("en", recorder=recorder)
        translator.plural("common.items", 2)
        assert recorder.diagnostics == []

    def test_plural_miss_reports_before_base_key(self, recorder):
        """A missing plural set is reported before translating the base key."""
        store = flatten_translations({"en": {"cart": {"count": "{{count}} in cart"}}})
        translator = Translator(store, "en", on_diagnostic=recorder)

        assert translator.plural("cart.count", 2) == "2 in cart"
        assert recorder.kinds == ["missing"]
        assert recorder.diagnostics[0].requested_key == "cart.count_plural"

    def test_plural_without_options_uses_base_key(self):
        """plural() translates the base key when no plural options exist."""
        store = flatten_translations({"en": {"cart": {"count": "{{count}} in cart"}}})
        translator = Translator(store, "en")
        assert translator.plural("cart.count", 2) == "2 in cart"

    def test_plural_missing_returns_key(self):
        """plural() returns the key when neither options nor base key exist."""
        translator = make_translator("en")
        assert translator.plural("common.unknown", 2) == "common.unknown"

    def test_plural_extra_variables(self):
        """plural() passes extra variables through."""
        store = flatten_translations(
            {"en": {"cart": {"items_plural": {
                "one": "{{count}} item in {{place}}",
                "other": "{{count}} items in {{place}}",
            }}}}
        )
        translator = Translator(store, "en")
        assert translator.plural("cart.items", 2, {"place": "cart"}) == "2 items in cart"


class TestScopedTranslator:
    """Tests for ScopedTranslator."""

    def test_scoped_prefixes_keys(self):
        """scoped() prefixes every key with the namespace."""
        errors = make_translator("en").scoped("errors")

        assert isinstance(errors, ScopedTranslator)
        assert errors.t("not_found", {"path": "/home"}) == "Page /home not found"
        assert errors.has_key("not_found")

    def test_scoped_uses_fallbacks(self):
        """Scoped lookups still use namespace fallbacks."""
        pages = make_translator("ko").scoped("pages")
        assert pages.t("save") == "저장"
        assert pages.plural("items", 4) == "4개 항목"

    def test_scoped_styled(self):
        """Scoped t_styled() prefixes the key."""
        common = make_translator("en").scoped("common")
        segments = common.t_styled("welcome", {"name": "Ann"}, {})
        assert segments == [TextSegment("Welcome, "), TextSegment("Ann"), TextSegment("!")]
