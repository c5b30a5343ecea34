"""Translation completeness checks and coverage reporting.

Intended for CI jobs and tests: detect keys missing from some languages,
compute per-language coverage and render a plain-text report.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

from lexicon.i18n.exceptions import TranslationIncompleteError
from lexicon.i18n.flattener import flatten
from lexicon.i18n.models import TranslationStore
from lexicon.logging import get_module_logger

logger = get_module_logger()

Tables = Union[TranslationStore, Mapping[str, Mapping[str, str]]]


@dataclass
class ValidationResult:
    """Outcome of a completeness check.

    Attributes:
        valid: True when no language is missing or adding keys.
        missing_keys: Language -> sorted keys it lacks.
        extra_keys: Language -> sorted keys absent from the reference
            language (only computed when a reference is given).
        all_keys: Sorted keys every language is expected to have.
    """

    valid: bool
    missing_keys: Dict[str, List[str]] = field(default_factory=dict)
    extra_keys: Dict[str, List[str]] = field(default_factory=dict)
    all_keys: List[str] = field(default_factory=list)

    @property
    def missing_count(self) -> int:
        return sum(len(keys) for keys in self.missing_keys.values())


def _as_tables(translations: Tables) -> Mapping[str, Mapping[str, str]]:
    if isinstance(translations, TranslationStore):
        return translations.tables
    return translations


def validate_translation_completeness(
    translations: Tables,
    reference_language: Optional[str] = None,
) -> ValidationResult:
    """Check that every language has the same keys.

    Args:
        translations: Flat tables per language (or a TranslationStore).
        reference_language: When given, its keys are the expected set and
            keys outside it are reported as extra. Otherwise the union of
            all languages is expected.

    Returns:
        ValidationResult.

    Example:
        >>> result = validate_translation_completeness({
        ...     "en": {"greeting": "Hello", "farewell": "Goodbye"},
        ...     "ko": {"greeting": "안녕하세요"},
        ... })
        >>> result.missing_keys
        {'ko': ['farewell']}
    """
    tables = _as_tables(translations)
    if not tables:
        return ValidationResult(valid=True)

    keys_by_language = {language: set(table) for language, table in tables.items()}

    if reference_language is not None:
        expected = keys_by_language.get(reference_language, set())
    else:
        expected = set().union(*keys_by_language.values())

    missing_keys: Dict[str, List[str]] = {}
    extra_keys: Dict[str, List[str]] = {}
    for language, keys in keys_by_language.items():
        missing = sorted(expected - keys)
        if missing:
            missing_keys[language] = missing
        extra = sorted(keys - expected)
        if extra:
            extra_keys[language] = extra

    return ValidationResult(
        valid=not missing_keys and not extra_keys,
        missing_keys=missing_keys,
        extra_keys=extra_keys,
        all_keys=sorted(expected),
    )


def validate_nested_translation_completeness(
    translations: Mapping[str, Mapping[str, Any]],
    reference_language: Optional[str] = None,
) -> ValidationResult:
    """Check completeness of nested (unflattened) per-language sources."""
    tables = {language: flatten(nested) for language, nested in translations.items()}
    return validate_translation_completeness(tables, reference_language)


def get_translation_stats(translations: Tables) -> Dict[str, float]:
    """Get the completeness percentage of each language.

    Example:
        >>> get_translation_stats({
        ...     "en": {"a": "A", "b": "B", "c": "C"},
        ...     "ko": {"a": "A", "b": "B"},
        ... })
        {'en': 100.0, 'ko': 66.67}
    """
    tables = _as_tables(translations)
    total = len(validate_translation_completeness(tables).all_keys)
    if total == 0:
        return {}
    return {
        language: round(len(table) / total * 100, 2)
        for language, table in tables.items()
    }


def find_unused_keys(all_keys: Iterable[str], source_contents: Iterable[str]) -> List[str]:
    """Find keys not referenced in any of the given source texts.

    A key counts as used when it appears quoted (single, double or back
    quotes) in a source text.
    """
    sources = list(source_contents)
    unused = []
    for key in all_keys:
        patterns = (f'"{key}"', f"'{key}'", f"`{key}`")
        if not any(pattern in content for content in sources for pattern in patterns):
            unused.append(key)
    return unused


def generate_coverage_report(translations: Tables) -> str:
    """Render a plain-text coverage report.

    Example output::

        Translation Coverage Report
        ===========================

        Total keys: 2
        Languages: en, ko

        Coverage:
          en: 100.0% (2/2)
          ko: 50.0% (1/2)

        Missing translations:
          ko: farewell

        Found 1 missing translations
    """
    tables = _as_tables(translations)
    validation = validate_translation_completeness(tables)
    stats = get_translation_stats(tables)
    total = len(validation.all_keys)

    lines = [
        "Translation Coverage Report",
        "===========================",
        "",
        f"Total keys: {total}",
        f"Languages: {', '.join(tables.keys())}",
        "",
        "Coverage:",
    ]
    for language, percentage in stats.items():
        lines.append(f"  {language}: {percentage}% ({len(tables[language])}/{total})")

    if validation.missing_keys:
        lines.extend(["", "Missing translations:"])
        for language, keys in validation.missing_keys.items():
            lines.append(f"  {language}: {', '.join(keys)}")

    lines.append("")
    if validation.valid:
        lines.append("All translations are complete!")
    else:
        lines.append(f"Found {validation.missing_count} missing translations")

    return "\n".join(lines) + "\n"


def assert_translation_completeness(translations: Tables) -> None:
    """Raise when any language is missing keys.

    Raises:
        TranslationIncompleteError: With the coverage report attached.
    """
    validation = validate_translation_completeness(translations)
    if not validation.valid:
        report = generate_coverage_report(translations)
        logger.error(
            "translation_validation_failed",
            missing_count=validation.missing_count,
            languages=sorted(validation.missing_keys),
        )
        raise TranslationIncompleteError(report)
