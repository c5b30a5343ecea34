"""Translation loading interface and implementations.

Loaders supply the raw nested translation object of each language. They
perform the only I/O in the translation path; the engine itself works
on the returned mappings.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, List

import yaml

import structlog
from lexicon.i18n.exceptions import TranslationLoadError

logger = structlog.get_logger()

YAML_SUFFIXES = (".yml", ".yaml")


class TranslationLoader(ABC):
    """Abstract base for translation loaders."""

    @abstractmethod
    def load(self, language: str) -> Dict[str, Any]:
        """Load the nested translations of a language.

        Args:
            language: Language code (e.g., "en", "ko").

        Returns:
            Nested {namespace: {key: ...}} mapping.

        Raises:
            FileNotFoundError: If no source exists for the language.
            TranslationLoadError: If a source cannot be parsed.
        """
        pass

    @abstractmethod
    def load_all(self) -> Dict[str, Dict[str, Any]]:
        """Load the nested translations of every available language."""
        pass


class YAMLTranslationLoader(TranslationLoader):
    """Loader for YAML translation files.

    Expects files named <language>.yml or <namespace>.<language>.yml in
    the translations directory. Files of the same language are merged
    namespace by namespace, in file-name order.

    Attributes:
        translations_dir: Path to directory containing YAML files.
    """

    def __init__(self, translations_dir: Path):
        """Initialize YAML translation loader.

        Args:
            translations_dir: Path to directory with YAML translation files.

        Raises:
            ValueError: If the directory does not exist.
        """
        self.translations_dir = Path(translations_dir)

        if not self.translations_dir.exists():
            raise ValueError(
                f"Translations directory not found: {self.translations_dir}"
            )

        logger.info(
            "initialized_yaml_loader",
            translations_dir=str(self.translations_dir),
        )

    def _files(self) -> List[Path]:
        return sorted(
            path
            for path in self.translations_dir.iterdir()
            if path.is_file() and path.suffix in YAML_SUFFIXES
        )

    @staticmethod
    def _language_of(path: Path) -> str:
        # "common.en.yml" -> "en", "en.yml" -> "en"
        return path.stem.split(".")[-1]

    def available_languages(self) -> List[str]:
        """Languages that have at least one YAML file, in sorted order."""
        return sorted({self._language_of(path) for path in self._files()})

    def load(self, language: str) -> Dict[str, Any]:
        """Load and merge every YAML file of a language.

        Args:
            language: Language code to load.

        Returns:
            Nested translations of the language.

        Raises:
            FileNotFoundError: If no YAML files found for the language.
            TranslationLoadError: If YAML parsing fails.
        """
        files = [path for path in self._files() if self._language_of(path) == language]

        if not files:
            raise FileNotFoundError(
                f"No translation files found for language {language} in {self.translations_dir}"
            )

        translations: Dict[str, Any] = {}
        for yaml_file in files:
            try:
                with open(yaml_file, "r", encoding="utf-8") as f:
                    data = yaml.safe_load(f)
            except yaml.YAMLError as e:
                logger.error("yaml_parse_error", file=str(yaml_file), error=str(e))
                raise TranslationLoadError(f"Failed to parse {yaml_file}: {e}") from e

            if data:
                self._merge_yaml_data(translations, data, yaml_file)

        logger.info(
            "loaded_translations",
            language=language,
            file_count=len(files),
            namespace_count=len(translations),
        )
        return translations

    def load_all(self) -> Dict[str, Dict[str, Any]]:
        """Load every language found in the translations directory.

        Raises:
            ValueError: If no translation files found at all.
        """
        languages = self.available_languages()
        if not languages:
            raise ValueError(f"No translation files found in {self.translations_dir}")

        return {language: self.load(language) for language in languages}

    def _merge_yaml_data(
        self,
        translations: Dict[str, Any],
        data: Any,
        source_file: Path,
    ) -> None:
        """Merge one parsed file into the language's translations.

        Expected format:
        namespace:
          key1: message1
          nested:
            key2: message2
        """
        if not isinstance(data, dict):
            logger.warning(
                "invalid_yaml_format", file=str(source_file), expected="dict"
            )
            return

        for namespace, messages in data.items():
            existing = translations.get(namespace)
            if isinstance(existing, dict) and isinstance(messages, dict):
                existing.update(messages)
            else:
                # Shape problems surface when the translations are flattened
                translations[namespace] = messages
