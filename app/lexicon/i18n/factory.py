"""Factory functions for creating i18n components.

Provides convenience functions for building fallback configuration and
translators from application settings.
"""

from pathlib import Path
from typing import Any, Mapping, Optional

import structlog
from lexicon.configuration import I18nSettings, settings
from lexicon.i18n.flattener import flatten_translations
from lexicon.i18n.loader import YAMLTranslationLoader
from lexicon.i18n.models import FallbackConfig, TranslationStore
from lexicon.i18n.negotiation import detect_language
from lexicon.i18n.resolver import DiagnosticCallback
from lexicon.i18n.translator import Translator

logger = structlog.get_logger()


def create_fallback_config(i18n_settings: Optional[I18nSettings] = None) -> FallbackConfig:
    """Build a FallbackConfig from settings.

    Args:
        i18n_settings: Settings section (default: settings.i18n).

    Returns:
        FallbackConfig
    """
    i18n_settings = i18n_settings or settings.i18n
    return FallbackConfig(
        default_namespace=i18n_settings.I18N_DEFAULT_NAMESPACE,
        fallback_chain=i18n_settings.I18N_FALLBACK_CHAIN,
        language_fallback=i18n_settings.I18N_LANGUAGE_FALLBACK,
        show_warnings=i18n_settings.I18N_SHOW_WARNINGS,
    )


def load_store(translations_dir: Path) -> TranslationStore:
    """Load and flatten every YAML translation file of a directory."""
    loader = YAMLTranslationLoader(translations_dir=translations_dir)
    return flatten_translations(loader.load_all())


def create_translator(
    translations: Optional[Mapping[str, Mapping[str, Any]]] = None,
    translations_dir: Optional[Path] = None,
    language: Optional[str] = None,
    config: Optional[FallbackConfig] = None,
    i18n_settings: Optional[I18nSettings] = None,
    on_diagnostic: Optional[DiagnosticCallback] = None,
) -> Translator:
    """Create and configure a Translator instance.

    Translations come from, in order: the translations argument, the
    translations_dir argument, then settings.I18N_TRANSLATIONS_DIR.

    Args:
        translations: Nested translations per language.
        translations_dir: Directory of YAML translation files.
        language: Initial language (default: settings default language).
        config: Fallback configuration (default: built from settings).
        i18n_settings: Settings section (default: settings.i18n).
        on_diagnostic: Diagnostics channel (default: structlog).

    Returns:
        Translator: Configured translator instance

    Raises:
        ValueError: If no translation source is available.
        UnsupportedTranslationShapeError: If a source holds non-string leaves.
        FallbackCycleError: If a fallback chain is cyclic.

    Usage:
        translator = create_translator(
            translations={"en": {"common": {"save": "Save"}}},
            config=FallbackConfig(fallback_chain={"pages": ["common"]}),
        )
        translator.t("pages.save")  # "Save"
    """
    i18n_settings = i18n_settings or settings.i18n

    if translations is not None:
        store = flatten_translations(translations)
    else:
        directory = translations_dir or i18n_settings.I18N_TRANSLATIONS_DIR
        if directory is None:
            raise ValueError(
                "No translations given and I18N_TRANSLATIONS_DIR is not set"
            )
        store = load_store(Path(directory))

    config = config or create_fallback_config(i18n_settings)
    for problem in config.validate(store):
        logger.warning("fallback_config_problem", problem=problem)

    translator = Translator(
        store,
        language or i18n_settings.I18N_DEFAULT_LANGUAGE,
        config,
        on_diagnostic,
    )
    logger.info(
        "translator_created",
        language=translator.language,
        language_count=len(store.languages),
    )
    return translator


def detect_request_language(
    cookie_header: Optional[str],
    accept_language: Optional[str],
    i18n_settings: Optional[I18nSettings] = None,
) -> str:
    """Pick a request's language using the configured cookie and languages."""
    i18n_settings = i18n_settings or settings.i18n
    return detect_language(
        cookie_header,
        accept_language,
        i18n_settings.I18N_AVAILABLE_LANGUAGES,
        default_language=i18n_settings.I18N_DEFAULT_LANGUAGE,
        cookie_name=i18n_settings.I18N_COOKIE_NAME,
    )
