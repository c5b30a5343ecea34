"""Exceptions for the translation engine.

Only configuration and programming mistakes raise. Missing keys, missing
namespaces, malformed headers and missing interpolation variables are
expected at runtime and never raise.
"""

from typing import Sequence


class I18nError(Exception):
    """Base exception for all translation engine errors.

    Example:
        try:
            store = flatten_translations(raw)
        except I18nError as e:
            logger.error("translations_rejected", error=str(e))
    """

    pass


class UnsupportedTranslationShapeError(I18nError, ValueError):
    """Raised when a nested translation source holds a non-string leaf.

    Example:
        >>> flatten({"common": {"days": ["Mon", "Tue"]}})
        Traceback (most recent call last):
        ...
        UnsupportedTranslationShapeError: Unsupported value at 'common.days': list
    """

    def __init__(self, path: str, value: object = None, value_type: str = ""):
        self.path = path
        self.value_type = value_type or type(value).__name__
        super().__init__(
            f"Unsupported value at '{path}': {self.value_type} "
            "(expected a string or a mapping)"
        )


class FallbackCycleError(I18nError, ValueError):
    """Raised when a fallback chain refers back to itself.

    Example:
        >>> FallbackConfig(fallback_chain={"a": ["b"], "b": ["a"]}).validate()
        Traceback (most recent call last):
        ...
        FallbackCycleError: Cycle in fallback_chain: a -> b -> a
    """

    def __init__(self, chain_name: str, cycle: Sequence[str]):
        self.chain_name = chain_name
        self.cycle = list(cycle)
        super().__init__(f"Cycle in {chain_name}: {' -> '.join(self.cycle)}")


class InvalidPluralOptionsError(I18nError, ValueError):
    """Raised when plural options lack the terminal 'other' form."""

    pass


class TranslationIncompleteError(I18nError, AssertionError):
    """Raised by assert_translation_completeness when keys are missing.

    Attributes:
        report: The coverage report describing what is missing.
    """

    def __init__(self, report: str):
        self.report = report
        super().__init__(
            f"Translation validation failed!\n\n{report}\n\n"
            "Please ensure all translations are complete."
        )


class TranslationLoadError(I18nError):
    """Raised when a translation source file cannot be parsed."""

    pass
