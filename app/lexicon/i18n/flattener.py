"""Flattening of nested translation sources into lookup tables.

A nested source such as::

    {"common": {"greeting": "Hello", "buttons": {"save": "Save"}}}

becomes::

    {"common.greeting": "Hello", "common.buttons.save": "Save"}

Only strings and mappings are accepted. Any other node (lists, numbers,
booleans, None) is a configuration mistake and is rejected at
construction time rather than coerced to text.
"""

from typing import Any, Dict, Mapping

from lexicon.i18n.exceptions import UnsupportedTranslationShapeError
from lexicon.i18n.models import TranslationStore
from lexicon.logging import get_module_logger

logger = get_module_logger()


def flatten(nested: Mapping[str, Any], prefix: str = "") -> Dict[str, str]:
    """Flatten a nested translation mapping into dot-joined keys.

    Args:
        nested: Nested mapping whose leaves are strings.
        prefix: Key prefix for the current level (used during recursion).

    Returns:
        Flat mapping of dotted key -> template string.

    Raises:
        UnsupportedTranslationShapeError: If a node is neither a string
            nor a mapping.
    """
    result: Dict[str, str] = {}

    for key, value in nested.items():
        # YAML may produce integer or boolean keys
        path = f"{prefix}.{key}" if prefix else str(key)

        if isinstance(value, str):
            result[path] = value
        elif isinstance(value, Mapping):
            result.update(flatten(value, path))
        else:
            raise UnsupportedTranslationShapeError(path, value)

    return result


def flatten_translations(
    translations: Mapping[str, Mapping[str, Any]],
) -> TranslationStore:
    """Build a TranslationStore from nested per-language sources.

    Args:
        translations: Language code -> nested translation mapping.

    Returns:
        Immutable TranslationStore.

    Raises:
        UnsupportedTranslationShapeError: If any language source holds an
            unsupported node. The path is prefixed with the language code.
    """
    tables: Dict[str, Dict[str, str]] = {}

    for language, nested in translations.items():
        if not isinstance(nested, Mapping):
            raise UnsupportedTranslationShapeError(str(language), nested)
        try:
            tables[str(language)] = flatten(nested)
        except UnsupportedTranslationShapeError as e:
            logger.error(
                "unsupported_translation_shape",
                language=language,
                path=e.path,
                value_type=e.value_type,
            )
            raise UnsupportedTranslationShapeError(
                f"{language}:{e.path}", value_type=e.value_type
            ) from e

    logger.debug(
        "flattened_translations",
        language_count=len(tables),
        key_count=sum(len(table) for table in tables.values()),
    )
    return TranslationStore(tables=tables)
