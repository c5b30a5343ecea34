"""Translation engine settings."""

from pathlib import Path
from typing import Any, Dict, List, Optional

from pydantic import Field, field_validator

from lexicon.configuration.base import LexiconSettings


class I18nSettings(LexiconSettings):
    """Language selection and fallback configuration.

    Environment Variables:
        I18N_DEFAULT_LANGUAGE: Language used when neither cookie nor header
            yields one (default: en)
        I18N_AVAILABLE_LANGUAGES: JSON list of served language codes
        I18N_COOKIE_NAME: Cookie holding the persisted language preference
        I18N_TRANSLATIONS_DIR: Directory of YAML translation files
        I18N_DEFAULT_NAMESPACE: Namespace tried for keys without a prefix
        I18N_FALLBACK_CHAIN: JSON dict of namespace -> list of namespaces
        I18N_LANGUAGE_FALLBACK: JSON dict of language -> list of languages
        I18N_SHOW_WARNINGS: Emit diagnostics for fallback hits and misses

    Example:
        ```python
        from lexicon.configuration import settings

        default_language = settings.i18n.I18N_DEFAULT_LANGUAGE
        chain = settings.i18n.I18N_FALLBACK_CHAIN
        ```
    """

    I18N_DEFAULT_LANGUAGE: str = "en"
    I18N_AVAILABLE_LANGUAGES: List[str] = Field(default_factory=lambda: ["en"])
    I18N_COOKIE_NAME: str = "i18n-language"
    I18N_TRANSLATIONS_DIR: Optional[Path] = None
    I18N_DEFAULT_NAMESPACE: Optional[str] = None
    I18N_FALLBACK_CHAIN: Dict[str, List[str]] = Field(default_factory=dict)
    I18N_LANGUAGE_FALLBACK: Dict[str, List[str]] = Field(default_factory=dict)
    I18N_SHOW_WARNINGS: bool = True

    @field_validator("I18N_FALLBACK_CHAIN", "I18N_LANGUAGE_FALLBACK", mode="before")
    @classmethod
    def validate_chain(cls, v: Any) -> Any:
        """Treat unset or empty chain values as no chain.

        Any other non-mapping value is left for pydantic to reject.
        """
        if v is None or v == "":
            return {}
        return v

    @field_validator("I18N_DEFAULT_NAMESPACE", mode="before")
    @classmethod
    def validate_default_namespace(cls, v: Any) -> Any:
        """Treat an empty namespace as unset."""
        if v == "":
            return None
        return v
