"""Multi-level fallback lookup across namespaces and languages.

Lookup order for resolve(key, language); the first hit wins:

1. Direct hit in the requested language.
2. Namespace fallback: for "namespace.rest" keys, each namespace in
   fallback_chain[namespace] is tried as "fallback.rest".
3. Default namespace: for keys without a prefix, "default.key" is tried.
4. Language fallback: each language in language_fallback[language] is
   searched with steps 1-3.

Only the first match is used; partial translations from several fallback
sources are never merged. A miss returns None and callers display the key
itself.
"""

from typing import Callable, Dict, Iterator, Optional, Sequence, Tuple

from lexicon.i18n.models import (
    FallbackConfig,
    FallbackDiagnostic,
    FallbackKind,
    Resolution,
    TranslationStore,
    split_namespace,
)
from lexicon.logging import get_module_logger

logger = get_module_logger()

DiagnosticCallback = Callable[[FallbackDiagnostic], None]

# (same-language kind, fallback-language kind) for each lookup step
_STEP_KINDS = {
    "direct": (FallbackKind.DIRECT, FallbackKind.LANGUAGE),
    "namespace": (FallbackKind.NAMESPACE, FallbackKind.LANGUAGE_NAMESPACE),
    "default": (
        FallbackKind.DEFAULT_NAMESPACE,
        FallbackKind.LANGUAGE_DEFAULT_NAMESPACE,
    ),
}


def log_diagnostic(diagnostic: FallbackDiagnostic) -> None:
    """Default diagnostics sink: write the diagnostic to the module logger."""
    log = logger.bind(
        key=diagnostic.requested_key,
        language=diagnostic.requested_language,
    )
    if diagnostic.kind == FallbackKind.MISSING:
        log.warning("translation_not_found")
    elif diagnostic.kind == FallbackKind.MISSING_NAMESPACE:
        log.warning("translation_namespace_not_found", message=diagnostic.message)
    else:
        log.warning(
            "translation_fallback_used",
            kind=diagnostic.kind.value,
            resolved_key=diagnostic.resolved_key,
            resolved_language=diagnostic.resolved_language,
        )


class FallbackResolver:
    """Resolves translation keys through namespace and language fallbacks.

    The resolver holds no mutable state; it may be shared across threads
    and requests.

    Attributes:
        store: Flat translation tables.
        config: Fallback configuration.
        on_diagnostic: Receives a FallbackDiagnostic for every fallback hit
            and every miss when config.show_warnings is set. Defaults to
            logging through structlog.
    """

    def __init__(
        self,
        store: TranslationStore,
        config: Optional[FallbackConfig] = None,
        on_diagnostic: Optional[DiagnosticCallback] = None,
    ):
        self.store = store
        self.config = config or FallbackConfig()
        self.on_diagnostic = on_diagnostic or log_diagnostic

    def _candidates(self, key: str) -> Iterator[Tuple[str, str]]:
        """Yield (step, candidate_key) pairs for a single language."""
        yield "direct", key

        namespace, rest = split_namespace(key)
        for fallback_namespace in self.config.namespace_fallbacks(namespace):
            yield "namespace", f"{fallback_namespace}.{rest}"

        if namespace is None and self.config.default_namespace:
            yield "default", f"{self.config.default_namespace}.{key}"

    def _search(self, key: str, language: str) -> Iterator[Tuple[str, str, FallbackKind]]:
        """Yield (language, candidate_key, kind) in lookup order."""
        for step, candidate in self._candidates(key):
            yield language, candidate, _STEP_KINDS[step][0]

        for fallback_language in self.config.language_fallbacks(language):
            for step, candidate in self._candidates(key):
                yield fallback_language, candidate, _STEP_KINDS[step][1]

    def resolve_with_trace(
        self, key: str, language: str, report: bool = True
    ) -> Resolution:
        """Resolve a key and report which lookup step produced it.

        Args:
            key: Dot-separated translation key.
            language: Requested language code.
            report: Emit diagnostics for fallback hits and misses.

        Returns:
            Resolution; resolution.template is None when nothing matched.
        """
        for candidate_language, candidate_key, kind in self._search(key, language):
            # Empty templates count as missing translations
            template = self.store.get(candidate_language, candidate_key)
            if template:
                resolution = Resolution(
                    requested_key=key,
                    requested_language=language,
                    template=template,
                    resolved_key=candidate_key,
                    resolved_language=candidate_language,
                    kind=kind,
                )
                if report and resolution.is_fallback:
                    self._report_fallback(resolution)
                return resolution

        resolution = Resolution(
            requested_key=key,
            requested_language=language,
            kind=self._miss_kind(key, language),
        )
        if report:
            self._report_miss(resolution)
        return resolution

    def resolve_group(
        self,
        key: str,
        language: str,
        members: Sequence[str],
        report: bool = True,
    ) -> Tuple[Resolution, Dict[str, str]]:
        """Resolve a group of sibling keys ("<key>.<member>") as one unit.

        Candidates are searched in the same order as resolve(). The first
        candidate holding any member supplies every template; members it
        lacks stay missing rather than coming from a later candidate.

        Args:
            key: Dot-separated key of the group (e.g., "cart.items_plural").
            language: Requested language code.
            members: Member names to collect (e.g., plural categories).
            report: Emit one diagnostic for a fallback hit or a miss.

        Returns:
            (resolution, templates) tuple. On a hit resolution.template is
            the first member template found; templates maps member name
            to template and is empty on a miss.
        """
        for candidate_language, candidate_key, kind in self._search(key, language):
            templates: Dict[str, str] = {}
            for member in members:
                template = self.store.get(candidate_language, f"{candidate_key}.{member}")
                if template:
                    templates[member] = template
            if not templates:
                continue

            resolution = Resolution(
                requested_key=key,
                requested_language=language,
                template=next(iter(templates.values())),
                resolved_key=candidate_key,
                resolved_language=candidate_language,
                kind=kind,
            )
            if report and resolution.is_fallback:
                self._report_fallback(resolution)
            return resolution, templates

        resolution = Resolution(
            requested_key=key,
            requested_language=language,
            kind=self._miss_kind(key, language),
        )
        if report:
            self._report_miss(resolution)
        return resolution, {}

    def resolve(self, key: str, language: str) -> Optional[str]:
        """Resolve a key to its template, or None if nothing matches."""
        return self.resolve_with_trace(key, language).template

    def resolve_or_key(self, key: str, language: str) -> str:
        """Resolve a key, returning the key itself when nothing matches."""
        template = self.resolve(key, language)
        return key if template is None else template

    def has_key(self, key: str, language: str) -> bool:
        """Check whether a key resolves without emitting diagnostics."""
        return any(
            self.store.get(candidate_language, candidate_key)
            for candidate_language, candidate_key, _ in self._search(key, language)
        )

    def _miss_kind(self, key: str, language: str) -> FallbackKind:
        namespace, _ = split_namespace(key)
        if namespace is None:
            return FallbackKind.MISSING

        searched = (language,) + self.config.language_fallbacks(language)
        if any(namespace in self.store.namespaces(lang) for lang in searched):
            return FallbackKind.MISSING
        return FallbackKind.MISSING_NAMESPACE

    def _report_fallback(self, resolution: Resolution) -> None:
        if not self.config.show_warnings:
            return

        if resolution.resolved_language != resolution.requested_language:
            message = (
                f'Key "{resolution.requested_key}" not found in '
                f'"{resolution.requested_language}", using '
                f'"{resolution.resolved_language}:{resolution.resolved_key}"'
            )
        else:
            message = (
                f'Key "{resolution.requested_key}" not found, using fallback '
                f'"{resolution.resolved_key}"'
            )

        self.on_diagnostic(
            FallbackDiagnostic(
                kind=resolution.kind,
                requested_key=resolution.requested_key,
                requested_language=resolution.requested_language,
                resolved_key=resolution.resolved_key,
                resolved_language=resolution.resolved_language,
                message=message,
            )
        )

    def _report_miss(self, resolution: Resolution) -> None:
        if not self.config.show_warnings:
            return

        if resolution.kind == FallbackKind.MISSING_NAMESPACE:
            namespace, _ = split_namespace(resolution.requested_key)
            message = (
                f'Namespace "{namespace}" not found for key '
                f'"{resolution.requested_key}" in "{resolution.requested_language}"'
            )
        else:
            message = (
                f'Key "{resolution.requested_key}" not found in '
                f'"{resolution.requested_language}"'
            )

        self.on_diagnostic(
            FallbackDiagnostic(
                kind=resolution.kind,
                requested_key=resolution.requested_key,
                requested_language=resolution.requested_language,
                message=message,
            )
        )
