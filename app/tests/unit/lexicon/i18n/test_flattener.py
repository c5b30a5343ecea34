"""Tests for lexicon.i18n.flattener module."""

import pytest

from lexicon.i18n import (
    TranslationStore,
    UnsupportedTranslationShapeError,
    flatten,
    flatten_translations,
)


class TestFlatten:
    """Tests for flatten()."""

    def test_flatten_nested_namespaces(self):
        """flatten() joins nested paths with dots."""
        result = flatten(
            {"common": {"greeting": "Hello", "buttons": {"save": "Save"}}}
        )
        assert result == {
            "common.greeting": "Hello",
            "common.buttons.save": "Save",
        }

    def test_flatten_top_level_string(self):
        """flatten() keeps top-level strings under their own key."""
        assert flatten({"title": "Title"}) == {"title": "Title"}

    def test_flatten_empty_namespace(self):
        """flatten() produces no keys for empty namespaces."""
        assert flatten({"errors": {}}) == {}

    def test_flatten_preserves_order(self):
        """flatten() keeps depth-first source order."""
        result = flatten({"b": {"y": "1", "x": "2"}, "a": "3"})
        assert list(result) == ["b.y", "b.x", "a"]

    def test_flatten_coerces_keys_to_strings(self):
        """flatten() converts non-string keys (from YAML) to strings."""
        assert flatten({"codes": {404: "Not found"}}) == {"codes.404": "Not found"}

    @pytest.mark.parametrize(
        "value,type_name",
        [
            (["Mon", "Tue"], "list"),
            (42, "int"),
            (True, "bool"),
            (None, "NoneType"),
        ],
    )
    def test_flatten_rejects_unsupported_values(self, value, type_name):
        """flatten() rejects anything but strings and mappings."""
        with pytest.raises(UnsupportedTranslationShapeError) as exc_info:
            flatten({"common": {"days": value}})

        assert exc_info.value.path == "common.days"
        assert exc_info.value.value_type == type_name
        assert "common.days" in str(exc_info.value)

    def test_unsupported_shape_is_value_error(self):
        """UnsupportedTranslationShapeError is also a ValueError."""
        with pytest.raises(ValueError):
            flatten({"items": ["a"]})


class TestFlattenTranslations:
    """Tests for flatten_translations()."""

    def test_builds_store_per_language(self, nested_translations):
        """flatten_translations() builds one flat table per language."""
        store = flatten_translations(nested_translations)

        assert isinstance(store, TranslationStore)
        assert store.languages == ["en", "ko", "ja"]
        assert store.get("en", "pages.home.title") == "Home"
        assert store.get("ko", "common.greeting") == "안녕하세요"

    def test_plural_options_are_flattened(self, nested_translations):
        """flatten_translations() stores plural options as sibling keys."""
        store = flatten_translations(nested_translations)
        assert store.get("en", "common.items_plural.one") == "{{count}} item"
        assert store.get("en", "common.items_plural.other") == "{{count}} items"

    def test_error_path_includes_language(self):
        """flatten_translations() prefixes the failing path with the language."""
        with pytest.raises(UnsupportedTranslationShapeError) as exc_info:
            flatten_translations({"en": {"ok": "fine"}, "ko": {"bad": [1]}})

        assert exc_info.value.path == "ko:bad"
        assert exc_info.value.value_type == "list"

    def test_rejects_non_mapping_language(self):
        """flatten_translations() rejects a language whose source is not a mapping."""
        with pytest.raises(UnsupportedTranslationShapeError):
            flatten_translations({"en": "Hello"})

    def test_empty_input(self):
        """flatten_translations() accepts an empty source."""
        store = flatten_translations({})
        assert store.languages == []
