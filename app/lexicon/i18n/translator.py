"""Translation service binding a store and fallback configuration to a language.

Core entry point for callers: resolves keys through the FallbackResolver,
falls back to the key itself on a miss, then interpolates.
"""

from typing import Any, List, Mapping, Optional

from lexicon.i18n.interpolation import interpolate, interpolate_styled
from lexicon.i18n.models import (
    FallbackConfig,
    PluralCategory,
    PluralOptions,
    Segment,
    TranslationStore,
)
from lexicon.i18n.plurals import Number, plural
from lexicon.i18n.resolver import DiagnosticCallback, FallbackResolver
from lexicon.logging import get_module_logger

logger = get_module_logger()

PLURAL_SUFFIX = "_plural"


class Translator:
    """Service for translating keys in a single language.

    Translators are immutable: with_language() and with_store() return new
    instances, so one store can serve many concurrent requests.

    Attributes:
        store: Flat translation tables.
        config: Fallback configuration.
        language: Language used for every lookup.
        resolver: FallbackResolver over store and config.
    """

    def __init__(
        self,
        store: TranslationStore,
        language: str,
        config: Optional[FallbackConfig] = None,
        on_diagnostic: Optional[DiagnosticCallback] = None,
    ):
        """Initialize Translator.

        Args:
            store: Flat translation tables.
            language: Language used for lookups.
            config: Fallback configuration (default: no fallbacks).
            on_diagnostic: Diagnostics channel passed to the resolver.
        """
        self.store = store
        self.language = language
        self.config = config or FallbackConfig()
        self._on_diagnostic = on_diagnostic
        self.resolver = FallbackResolver(store, self.config, on_diagnostic)

    @property
    def available_languages(self) -> List[str]:
        return self.store.languages

    def with_language(self, language: str) -> "Translator":
        """Get a translator for another language sharing the same store."""
        return Translator(self.store, language, self.config, self._on_diagnostic)

    def with_store(self, store: TranslationStore) -> "Translator":
        """Get a translator over reloaded translations."""
        logger.info(
            "translator_store_replaced",
            language=self.language,
            language_count=len(store.languages),
        )
        return Translator(store, self.language, self.config, self._on_diagnostic)

    def t(self, key: str, variables: Optional[Mapping[str, Any]] = None) -> str:
        """Translate a key and interpolate variables.

        Args:
            key: Dot-separated translation key.
            variables: Optional dict of variables for interpolation.

        Returns:
            Interpolated template, or the interpolated key itself when no
            translation exists.
        """
        return interpolate(self.resolver.resolve_or_key(key, self.language), variables)

    def t_styled(
        self,
        key: str,
        variables: Mapping[str, Any],
        styles: Mapping[str, Mapping[str, Any]],
    ) -> List[Segment]:
        """Translate a key into segments, attaching styles to selected values.

        Args:
            key: Dot-separated translation key.
            variables: Variables for interpolation.
            styles: Variable name -> presentation attributes.

        Returns:
            Ordered TextSegment/StyledSegment list.
        """
        template = self.resolver.resolve_or_key(key, self.language)
        return interpolate_styled(template, variables, styles)

    def plural_options(self, key: str, report: bool = True) -> Optional[PluralOptions]:
        """Collect the plural templates stored under "<key>_plural".

        The "<key>_plural" group resolves through the fallback chain as a
        whole: every category comes from the first language and namespace
        that translates any of them.

        Args:
            key: Dot-separated base key.
            report: Emit a diagnostic for a fallback hit or a miss.

        Returns:
            PluralOptions, or None when no category is translated.
        """
        _, templates = self.resolver.resolve_group(
            f"{key}{PLURAL_SUFFIX}",
            self.language,
            [category.value for category in PluralCategory],
            report=report,
        )
        if not templates:
            return None
        return PluralOptions.from_mapping(templates, require_other=False)

    def plural(
        self,
        key: str,
        count: Number,
        variables: Optional[Mapping[str, Any]] = None,
    ) -> str:
        """Translate a count-dependent key.

        Uses the "<key>_plural" options when present; otherwise translates
        the base key like t(). The count is available as {{count}}.

        Example:
            # en: {"items_plural": {"one": "one item", "other": "{{count}} items"}}
            translator.plural("items", 5)  # "5 items"
        """
        options = self.plural_options(key)
        if options is None:
            return self.t(key, {**(variables or {}), "count": count})
        return plural(count, options, self.language, variables)

    def has_key(self, key: str) -> bool:
        """Check if a key resolves in the current language (fallbacks included)."""
        return self.resolver.has_key(key, self.language)

    def keys(self) -> List[str]:
        """Keys translated directly in the current language."""
        return self.store.keys(self.language)

    def scoped(self, namespace: str) -> "ScopedTranslator":
        """Get a translator that prefixes every key with a namespace."""
        return ScopedTranslator(self, namespace)


class ScopedTranslator:
    """Translator view bound to one namespace.

    Example:
        errors = translator.scoped("errors")
        errors.t("not_found")  # same as translator.t("errors.not_found")
    """

    def __init__(self, translator: Translator, namespace: str):
        self.translator = translator
        self.namespace = namespace

    def _key(self, key: str) -> str:
        return f"{self.namespace}.{key}"

    def t(self, key: str, variables: Optional[Mapping[str, Any]] = None) -> str:
        return self.translator.t(self._key(key), variables)

    def t_styled(
        self,
        key: str,
        variables: Mapping[str, Any],
        styles: Mapping[str, Mapping[str, Any]],
    ) -> List[Segment]:
        return self.translator.t_styled(self._key(key), variables, styles)

    def plural(
        self,
        key: str,
        count: Number,
        variables: Optional[Mapping[str, Any]] = None,
    ) -> str:
        return self.translator.plural(self._key(key), count, variables)

    def has_key(self, key: str) -> bool:
        return self.translator.has_key(self._key(key))
