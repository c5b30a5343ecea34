"""i18n system - translation resolution and interpolation.

Resolves a display string for a key, language and optional variables
across independently maintained per-language dictionaries, tolerating
missing keys and namespaces.

Main components:
- flattener: nested sources -> TranslationStore
- resolver: FallbackResolver across namespaces and languages
- interpolation: {{variable}} substitution, plain and styled
- negotiation: Accept-Language and cookie based language selection
- plurals: CLDR-style plural categories and template selection
- translator: Translator facade bound to a language
- validation: completeness checks and coverage reports
- loader: YAMLTranslationLoader
"""

from lexicon.i18n.exceptions import (
    FallbackCycleError,
    I18nError,
    InvalidPluralOptionsError,
    TranslationIncompleteError,
    TranslationLoadError,
    UnsupportedTranslationShapeError,
)
from lexicon.i18n.factory import (
    create_fallback_config,
    create_translator,
    detect_request_language,
)
from lexicon.i18n.flattener import flatten, flatten_translations
from lexicon.i18n.interpolation import (
    build_translation_params,
    find_variables,
    interpolate,
    interpolate_styled,
    map_to_translation_params,
    render_segments,
)
from lexicon.i18n.loader import TranslationLoader, YAMLTranslationLoader
from lexicon.i18n.models import (
    FallbackConfig,
    FallbackDiagnostic,
    FallbackKind,
    LanguagePreference,
    PluralCategory,
    PluralOptions,
    Resolution,
    StyledSegment,
    TextSegment,
    TranslationStore,
)
from lexicon.i18n.negotiation import (
    detect_language,
    match_accept_language,
    parse_accept_language,
    parse_cookies,
    select_language,
)
from lexicon.i18n.plurals import (
    plural,
    plural_category,
    pluralize,
    select_plural,
    supported_plural_categories,
)
from lexicon.i18n.resolver import FallbackResolver
from lexicon.i18n.translator import ScopedTranslator, Translator
from lexicon.i18n.validation import (
    ValidationResult,
    assert_translation_completeness,
    generate_coverage_report,
    get_translation_stats,
    validate_nested_translation_completeness,
    validate_translation_completeness,
)

__all__ = [
    "FallbackConfig",
    "FallbackDiagnostic",
    "FallbackKind",
    "LanguagePreference",
    "PluralCategory",
    "PluralOptions",
    "Resolution",
    "StyledSegment",
    "TextSegment",
    "TranslationStore",
    "I18nError",
    "UnsupportedTranslationShapeError",
    "FallbackCycleError",
    "InvalidPluralOptionsError",
    "TranslationIncompleteError",
    "TranslationLoadError",
    "flatten",
    "flatten_translations",
    "FallbackResolver",
    "interpolate",
    "interpolate_styled",
    "render_segments",
    "find_variables",
    "build_translation_params",
    "map_to_translation_params",
    "parse_accept_language",
    "match_accept_language",
    "parse_cookies",
    "select_language",
    "detect_language",
    "plural_category",
    "select_plural",
    "plural",
    "pluralize",
    "supported_plural_categories",
    "Translator",
    "ScopedTranslator",
    "ValidationResult",
    "validate_translation_completeness",
    "validate_nested_translation_completeness",
    "get_translation_stats",
    "generate_coverage_report",
    "assert_translation_completeness",
    "TranslationLoader",
    "YAMLTranslationLoader",
    "create_fallback_config",
    "create_translator",
    "detect_request_language",
]
