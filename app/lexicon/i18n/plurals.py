"""Count-based plural form selection.

Category rules follow Unicode CLDR for the supported language families and
are evaluated on abs(count). Region subtags are ignored ("pt-BR" uses the
"pt" rule); unknown languages use the English rule.
"""

from typing import Any, Callable, Dict, List, Mapping, Optional, Union

from lexicon.i18n.interpolation import interpolate
from lexicon.i18n.models import (
    PLURAL_FALLBACK_ORDER,
    PluralCategory,
    PluralOptions,
    primary_subtag,
)

Number = Union[int, float]

ZERO = PluralCategory.ZERO
ONE = PluralCategory.ONE
TWO = PluralCategory.TWO
FEW = PluralCategory.FEW
MANY = PluralCategory.MANY
OTHER = PluralCategory.OTHER


def _no_plural(n: Number) -> PluralCategory:
    return OTHER


def _english(n: Number) -> PluralCategory:
    return ONE if n == 1 else OTHER


def _french(n: Number) -> PluralCategory:
    return ONE if n in (0, 1) else OTHER


def _slavic_few(n: Number) -> bool:
    return 2 <= n % 10 <= 4 and (n % 100 < 10 or n % 100 >= 20)


def _east_slavic(n: Number) -> PluralCategory:
    if n % 10 == 1 and n % 100 != 11:
        return ONE
    if _slavic_few(n):
        return FEW
    return MANY


def _polish(n: Number) -> PluralCategory:
    if n == 1:
        return ONE
    if _slavic_few(n):
        return FEW
    return MANY


def _arabic(n: Number) -> PluralCategory:
    if n == 0:
        return ZERO
    if n == 1:
        return ONE
    if n == 2:
        return TWO
    if 3 <= n % 100 <= 10:
        return FEW
    # Absolute range: 111 or 150 are "other", unlike CLDR's n % 100 rule
    if 11 <= n <= 99:
        return MANY
    return OTHER


PluralRule = Callable[[Number], PluralCategory]

_FAMILIES = (
    (("ko", "ja", "zh", "th", "vi"), _no_plural, (OTHER,)),
    (("en", "de", "nl", "sv", "da", "no", "es", "it", "pt"), _english, (ONE, OTHER)),
    (("fr",), _french, (ONE, OTHER)),
    (("ru", "uk"), _east_slavic, (ONE, FEW, MANY)),
    (("pl",), _polish, (ONE, FEW, MANY)),
    (("ar",), _arabic, (ZERO, ONE, TWO, FEW, MANY, OTHER)),
)

PLURAL_RULES: Dict[str, PluralRule] = {
    language: rule for languages, rule, _ in _FAMILIES for language in languages
}

PLURAL_CATEGORIES: Dict[str, tuple] = {
    language: categories
    for languages, _, categories in _FAMILIES
    for language in languages
}


def plural_category(count: Number, language: str) -> PluralCategory:
    """Get the plural category of a count in a language.

    Example:
        >>> plural_category(1, "en")
        <PluralCategory.ONE: 'one'>
        >>> plural_category(21, "ru")
        <PluralCategory.ONE: 'one'>
        >>> plural_category(0, "ar")
        <PluralCategory.ZERO: 'zero'>
    """
    rule = PLURAL_RULES.get(primary_subtag(language), _english)
    return rule(abs(count))


def supported_plural_categories(language: str) -> List[PluralCategory]:
    """List the categories a language distinguishes."""
    return list(PLURAL_CATEGORIES.get(primary_subtag(language), (ONE, OTHER)))


def _as_options(options: Union[PluralOptions, Mapping[str, Any]]) -> PluralOptions:
    if isinstance(options, PluralOptions):
        return options
    return PluralOptions.from_mapping(options, require_other=False)


def select_plural(
    category: Union[PluralCategory, str],
    options: Union[PluralOptions, Mapping[str, Any]],
) -> str:
    """Pick the template for a category.

    Falls back through other, one, few, many, two, zero and finally "" when
    the exact category has no template.
    """
    options = _as_options(options)

    selected = options.get(category)
    if selected:
        return selected

    for fallback in PLURAL_FALLBACK_ORDER:
        selected = options.get(fallback)
        if selected:
            return selected

    return ""


def plural(
    count: Number,
    options: Union[PluralOptions, Mapping[str, Any]],
    language: str,
    variables: Optional[Mapping[str, Any]] = None,
) -> str:
    """Select the plural template for a count and interpolate it.

    The count is always available to the template as {{count}}.

    Example:
        >>> plural(5, {"one": "{{count}} item in {{place}}", "other": "{{count}} items in {{place}}"}, "en", {"place": "cart"})
        '5 items in cart'
    """
    template = select_plural(plural_category(count, language), options)
    return interpolate(template, {**(variables or {}), "count": count})


def pluralize(count: Number, singular: str, plural_form: Optional[str] = None) -> str:
    """Simple English-style noun pluralization.

    Example:
        >>> pluralize(1, "item")
        'item'
        >>> pluralize(2, "box", "boxes")
        'boxes'
    """
    if abs(count) == 1:
        return singular
    return plural_form or f"{singular}s"
