"""Feature-level fixtures for i18n system tests.

Provides translation data, stores, fallback configuration and a recording
diagnostics channel.
"""

import pytest
import yaml

from lexicon.i18n import YAMLTranslationLoader
from tests.factories.i18n import (
    DiagnosticRecorder,
    make_fallback_config,
    make_nested_translations,
    make_translation_store,
)


@pytest.fixture
def nested_translations():
    """Nested en/ko/ja translations with gaps in ko and ja."""
    return make_nested_translations()


@pytest.fixture
def store(nested_translations):
    """TranslationStore built from nested_translations."""
    return make_translation_store(nested_translations)


@pytest.fixture
def fallback_config():
    """Fallback config: pages/errors -> common, ko -> en, ja -> ko -> en."""
    return make_fallback_config()


@pytest.fixture
def recorder():
    """Recording diagnostics channel."""
    return DiagnosticRecorder()


@pytest.fixture
def temp_translations_dir(tmp_path):
    """Create temporary directory with sample YAML translation files.

    Returns a directory structure like:
    - common.en.yml
    - pages.en.yml
    - ko.yml
    """
    common_en = {
        "common": {
            "greeting": "Hello",
            "save": "Save",
        }
    }
    with open(tmp_path / "common.en.yml", "w", encoding="utf-8") as f:
        yaml.dump(common_en, f, allow_unicode=True)

    pages_en = {
        "pages": {
            "home": {"title": "Home"},
        }
    }
    with open(tmp_path / "pages.en.yml", "w", encoding="utf-8") as f:
        yaml.dump(pages_en, f, allow_unicode=True)

    ko = {
        "common": {
            "greeting": "안녕하세요",
        }
    }
    with open(tmp_path / "ko.yml", "w", encoding="utf-8") as f:
        yaml.dump(ko, f, allow_unicode=True)

    return tmp_path


@pytest.fixture
def yaml_loader(temp_translations_dir):
    """Create YAMLTranslationLoader for temporary translations directory."""
    return YAMLTranslationLoader(temp_translations_dir)


@pytest.fixture
def accept_language_headers():
    """Collection of Accept-Language headers for testing."""
    return {
        "simple_en": "en",
        "specific_en_us": "en-US",
        "ranked": "en;q=0.5,ko;q=0.9,ja;q=0.7",
        "korean_browser": "ko-KR,ko;q=0.9,en-US;q=0.8,en;q=0.7",
        "french_only": "fr-FR,fr;q=0.9",
        "wildcard": "en-US,en;q=0.9,*;q=0.8",
        "invalid_quality": "en;q=invalid,ko",
        "spaced": "  ja ; q = 0.4 ,  ko ;q=0.6 ",
    }
