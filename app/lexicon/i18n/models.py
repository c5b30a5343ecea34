"""Translation models for the i18n engine.

Defines the immutable data structures shared by the flattener, the
fallback resolver, the interpolator and the plural selector.
"""

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple, Union

from lexicon.i18n.exceptions import FallbackCycleError, InvalidPluralOptionsError


def split_namespace(key: str) -> Tuple[Optional[str], str]:
    """Split a dotted key into its namespace and remainder.

    Args:
        key: Dot-separated key (e.g., "pages.home.title").

    Returns:
        (namespace, rest) tuple, or (None, key) if the key has no prefix.
    """
    namespace, sep, rest = key.partition(".")
    if not sep or not namespace:
        return None, key
    return namespace, rest


def primary_subtag(code: str) -> str:
    """Get the language part of a tag (e.g., "en" from "en-US")."""
    return code.split("-")[0].lower()


@dataclass(frozen=True)
class TranslationStore:
    """Flat translation tables for every language.

    Maps language code -> flat key -> template string. Built once (see
    flatten_translations) and read-only afterwards; reloading builds a new
    store instead of mutating this one.

    Attributes:
        tables: Read-only mapping of language code to read-only flat table.
    """

    tables: Mapping[str, Mapping[str, str]] = field(
        default_factory=lambda: MappingProxyType({})
    )

    def __post_init__(self):
        frozen = {
            language: MappingProxyType(dict(table))
            for language, table in self.tables.items()
        }
        object.__setattr__(self, "tables", MappingProxyType(frozen))

    @property
    def languages(self) -> List[str]:
        """Languages present in the store, in insertion order."""
        return list(self.tables.keys())

    def has_language(self, language: str) -> bool:
        return language in self.tables

    def table(self, language: str) -> Mapping[str, str]:
        """Get the flat table for a language (empty if unknown)."""
        return self.tables.get(language, MappingProxyType({}))

    def get(self, language: str, key: str) -> Optional[str]:
        """Look up a single template, or None if absent."""
        return self.table(language).get(key)

    def keys(self, language: str) -> List[str]:
        return list(self.table(language).keys())

    def namespaces(self, language: str) -> List[str]:
        """Namespaces that have at least one key in a language."""
        found: Dict[str, None] = {}
        for key in self.table(language):
            namespace, _ = split_namespace(key)
            if namespace is not None:
                found[namespace] = None
        return list(found)


def _freeze_chain(chain: Optional[Mapping[str, Iterable[str]]]) -> Mapping:
    return MappingProxyType(
        {name: tuple(targets) for name, targets in (chain or {}).items()}
    )


def _find_cycle(chain: Mapping[str, Tuple[str, ...]]) -> Optional[List[str]]:
    """Return the first cycle found in an adjacency mapping, if any."""
    done: set = set()

    for start in chain:
        if start in done:
            continue
        # Iterative DFS; path is the current branch, stack its pending edges
        path: List[str] = [start]
        stack = [iter(chain.get(start, ()))]
        while stack:
            target = next(stack[-1], None)
            if target is None:
                stack.pop()
                done.add(path.pop())
                continue
            if target in path:
                return path[path.index(target):] + [target]
            if target in done:
                continue
            path.append(target)
            stack.append(iter(chain.get(target, ())))
    return None


@dataclass(frozen=True)
class FallbackConfig:
    """Namespace and language fallback configuration.

    Attributes:
        default_namespace: Namespace tried for keys without a prefix.
        fallback_chain: Namespace -> ordered namespaces to try instead.
        language_fallback: Language -> ordered languages to try instead.
        show_warnings: Emit a diagnostic for every fallback hit and miss.

    Instances compare by value but are not hashable: the chains are
    read-only mapping views.
    """

    default_namespace: Optional[str] = None
    fallback_chain: Mapping[str, Tuple[str, ...]] = field(
        default_factory=lambda: MappingProxyType({})
    )
    language_fallback: Mapping[str, Tuple[str, ...]] = field(
        default_factory=lambda: MappingProxyType({})
    )
    show_warnings: bool = True

    __hash__ = None  # type: ignore[assignment]

    def __post_init__(self):
        object.__setattr__(self, "fallback_chain", _freeze_chain(self.fallback_chain))
        object.__setattr__(
            self, "language_fallback", _freeze_chain(self.language_fallback)
        )

    def namespace_fallbacks(self, namespace: Optional[str]) -> Tuple[str, ...]:
        if namespace is None:
            return ()
        return self.fallback_chain.get(namespace, ())

    def language_fallbacks(self, language: str) -> Tuple[str, ...]:
        return self.language_fallback.get(language, ())

    def validate(self, store: Optional[TranslationStore] = None) -> List[str]:
        """Check the fallback graphs for cycles and unknown names.

        Args:
            store: Optional store used to check that every named language
                and namespace exists.

        Returns:
            Human-readable problems that are tolerated at runtime (names
            that do not exist in the store).

        Raises:
            FallbackCycleError: If either chain contains a cycle or a
                self-reference.
        """
        for chain_name, chain in (
            ("fallback_chain", self.fallback_chain),
            ("language_fallback", self.language_fallback),
        ):
            cycle = _find_cycle(chain)
            if cycle:
                raise FallbackCycleError(chain_name, cycle)

        problems: List[str] = []
        if store is None:
            return problems

        known_languages = set(store.languages)
        for language, targets in self.language_fallback.items():
            for name in (language,) + targets:
                if name not in known_languages:
                    problems.append(f"Unknown language in language_fallback: {name}")

        known_namespaces = {
            namespace
            for language in store.languages
            for namespace in store.namespaces(language)
        }
        names = list(self.fallback_chain.keys())
        for targets in self.fallback_chain.values():
            names.extend(targets)
        if self.default_namespace:
            names.append(self.default_namespace)
        for name in dict.fromkeys(names):
            if name not in known_namespaces:
                problems.append(f"Unknown namespace in fallback configuration: {name}")

        return problems


class PluralCategory(str, Enum):
    """CLDR-style grammatical number categories."""

    ZERO = "zero"
    ONE = "one"
    TWO = "two"
    FEW = "few"
    MANY = "many"
    OTHER = "other"


# Tried in this order when the exact category has no template
PLURAL_FALLBACK_ORDER: Tuple[PluralCategory, ...] = (
    PluralCategory.OTHER,
    PluralCategory.ONE,
    PluralCategory.FEW,
    PluralCategory.MANY,
    PluralCategory.TWO,
    PluralCategory.ZERO,
)


@dataclass(frozen=True)
class PluralOptions:
    """Templates for each plural category of a single key.

    Attributes:
        other: Terminal fallback template; always present when validated.
    """

    other: Optional[str] = None
    zero: Optional[str] = None
    one: Optional[str] = None
    two: Optional[str] = None
    few: Optional[str] = None
    many: Optional[str] = None

    @classmethod
    def from_mapping(
        cls, options: Mapping[str, Any], require_other: bool = True
    ) -> "PluralOptions":
        """Build PluralOptions from a category -> template mapping.

        Unknown categories are ignored.

        Args:
            options: Mapping such as {"one": "1 item", "other": "{{count}} items"}.
            require_other: Reject mappings without an "other" template.

        Returns:
            PluralOptions instance.

        Raises:
            InvalidPluralOptionsError: If require_other is set and "other"
                is missing.
        """
        if require_other and not options.get(PluralCategory.OTHER.value):
            raise InvalidPluralOptionsError(
                f"Plural options must define 'other': {sorted(options)}"
            )
        values = {
            category.value: options[category.value]
            for category in PluralCategory
            if options.get(category.value) is not None
        }
        return cls(**values)

    def get(self, category: Union[PluralCategory, str]) -> Optional[str]:
        return getattr(self, PluralCategory(category).value)

    def as_dict(self) -> Dict[str, str]:
        return {
            category.value: self.get(category)
            for category in PluralCategory
            if self.get(category) is not None
        }


@dataclass(frozen=True)
class LanguagePreference:
    """One ranked entry of an Accept-Language header.

    Attributes:
        code: Lower-cased language tag (e.g., "en-us").
        quality: Weight in [0, 1]; 1.0 when no q parameter was given.
    """

    code: str
    quality: float = 1.0

    @property
    def primary_subtag(self) -> str:
        return primary_subtag(self.code)


@dataclass(frozen=True)
class TextSegment:
    """Literal text (or an unstyled substituted value) in styled output."""

    text: str


@dataclass(frozen=True)
class StyledSegment:
    """A substituted value carrying presentation attributes.

    Attributes:
        value: The substituted value, already converted to text.
        style: Presentation attributes registered for the variable.
    """

    value: str
    style: Mapping[str, Any]


Segment = Union[TextSegment, StyledSegment]


class FallbackKind(str, Enum):
    """How a key was (or was not) resolved."""

    DIRECT = "direct"
    NAMESPACE = "namespace"
    DEFAULT_NAMESPACE = "default_namespace"
    LANGUAGE = "language"
    LANGUAGE_NAMESPACE = "language_namespace"
    LANGUAGE_DEFAULT_NAMESPACE = "language_default_namespace"
    MISSING = "missing"
    MISSING_NAMESPACE = "missing_namespace"


@dataclass(frozen=True)
class Resolution:
    """Outcome of a single key lookup.

    Attributes:
        requested_key: Key passed by the caller.
        requested_language: Language passed by the caller.
        template: Resolved template, or None when nothing matched.
        resolved_key: Key that produced the template.
        resolved_language: Language that produced the template.
        kind: Which lookup step produced the result.
    """

    requested_key: str
    requested_language: str
    template: Optional[str] = None
    resolved_key: Optional[str] = None
    resolved_language: Optional[str] = None
    kind: FallbackKind = FallbackKind.MISSING

    @property
    def found(self) -> bool:
        return self.template is not None

    @property
    def is_fallback(self) -> bool:
        return self.found and self.kind != FallbackKind.DIRECT


@dataclass(frozen=True)
class FallbackDiagnostic:
    """Diagnostic emitted when a key needed a fallback or was not found.

    Attributes:
        kind: Which fallback step saved the lookup, or why it failed.
        requested_key: Key passed by the caller.
        requested_language: Language passed by the caller.
        resolved_key: Key actually used (None on a miss).
        resolved_language: Language actually used (None on a miss).
        message: Human-readable description.
    """

    kind: FallbackKind
    requested_key: str
    requested_language: str
    resolved_key: Optional[str] = None
    resolved_language: Optional[str] = None
    message: str = ""
