"""Lexicon configuration module - public API.

Centralized configuration using Pydantic BaseSettings.

Exports:
    settings: Singleton Settings instance
    Settings: Main settings class (for testing/overrides)
    I18nSettings: Translation engine settings class
"""

from lexicon.configuration.i18n import I18nSettings
from lexicon.configuration.settings import Settings, settings

__all__ = ["Settings", "I18nSettings", "settings"]
