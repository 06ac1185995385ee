"""
Registry of target languages.

A target language is a ``CodeGenerator`` subclass registered under a primary
name plus optional aliases (``py`` for ``python``). Generators created
through the registry get that language's configuration defaults, so an
alias always behaves exactly like its primary name.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Type, Union

from ..logging_config import get_logger
from .core.config import ConfigError, GeneratorConfig, load_config
from .core.generator import CodeGenerator
from .core.matcher import BuiltinType

logger = get_logger(__name__)

ConfigSource = Union[GeneratorConfig, Dict[str, Any], str, Path, None]


class RegistryError(Exception):
    """Exception raised for registry-related errors."""

    pass


@dataclass
class LanguageEntry:
    """A registered target language."""

    name: str
    generator_class: Type[CodeGenerator]
    aliases: List[str] = field(default_factory=list)


class GeneratorRegistry:
    """Maps language names and aliases to generator classes."""

    def __init__(self):
        self._languages: Dict[str, LanguageEntry] = {}
        self._aliases: Dict[str, str] = {}

    def register(
        self,
        language: str,
        generator_class: Type[CodeGenerator],
        aliases: Optional[List[str]] = None,
        replace: bool = False,
    ):
        """
        Register a target language.

        Args:
            language: Primary name (e.g., 'swift')
            generator_class: ``CodeGenerator`` subclass for the language
            aliases: Alternative names
            replace: Overwrite an existing registration and take over
                conflicting aliases; otherwise an existing language is left
                untouched

        Raises:
            RegistryError: If the class is not a generator or an alias is
                already taken
        """
        if not (isinstance(generator_class, type) and issubclass(generator_class, CodeGenerator)):
            raise RegistryError("Generator class must inherit from CodeGenerator")

        key = language.lower()
        if key in self._languages and not replace:
            logger.debug("Language %s already registered, skipping", key)
            return

        alias_keys = []
        for alias in aliases or []:
            alias_key = alias.lower()
            if alias_key != key and alias_key not in alias_keys:
                alias_keys.append(alias_key)

        # Nothing is stored until every alias is known to be free.
        for alias_key in alias_keys:
            if alias_key in self._languages:
                raise RegistryError(f"Alias '{alias_key}' conflicts with existing primary language")
            owner = self._aliases.get(alias_key)
            if owner is not None and owner != key and not replace:
                raise RegistryError(f"Alias '{alias_key}' already points to '{owner}'")

        previous = self._languages.get(key)
        if previous is not None:
            alias_keys = previous.aliases + [a for a in alias_keys if a not in previous.aliases]

        for alias_key in alias_keys:
            owner = self._aliases.get(alias_key)
            if owner is not None and owner != key and owner in self._languages:
                self._languages[owner].aliases.remove(alias_key)
            self._aliases[alias_key] = key

        self._languages[key] = LanguageEntry(key, generator_class, alias_keys)
        logger.debug("Registered %s (%s)", key, generator_class.__name__)

    def unregister(self, language: str):
        """Remove a language and every alias pointing at it."""
        entry = self._languages.pop(language.lower(), None)
        if entry is None:
            return
        for alias in entry.aliases:
            self._aliases.pop(alias, None)

    def resolve_language(self, language: str) -> str:
        """
        Resolve a language name or alias to its primary name.

        Raises:
            RegistryError: If the language is not registered
        """
        key = language.lower()
        key = self._aliases.get(key, key)
        if key not in self._languages:
            raise RegistryError(
                f"No generator registered for language: {language}. "
                f"Available: {', '.join(self.list_languages())}"
            )
        return key

    def entry(self, language: str) -> LanguageEntry:
        return self._languages[self.resolve_language(language)]

    def get_generator_class(self, language: str) -> Type[CodeGenerator]:
        return self.entry(language).generator_class

    def create_generator(self, language: str, config: ConfigSource = None) -> CodeGenerator:
        """
        Instantiate the generator for a language.

        Args:
            language: Language name or alias
            config: A ready ``GeneratorConfig``, a dict of overrides, or the
                path of a JSON or YAML config file. Overrides and files are
                merged over the language defaults.

        Raises:
            RegistryError: If the language is unknown or configuration fails
        """
        entry = self.entry(language)
        return entry.generator_class(self._build_config(entry.name, config))

    @staticmethod
    def _build_config(language: str, config: ConfigSource) -> GeneratorConfig:
        if isinstance(config, GeneratorConfig):
            return config
        try:
            if isinstance(config, (str, Path)):
                return load_config(language, config_file=config)
            if isinstance(config, dict):
                return load_config(language, custom_config=config)
            if config is None:
                return load_config(language)
        except ConfigError as e:
            raise RegistryError(f"Failed to configure {language} generator: {e}") from e
        raise RegistryError(f"Invalid config type: {type(config)}")

    def list_languages(self) -> List[str]:
        """Primary language names, sorted."""
        return sorted(self._languages)

    def get_aliases_for_language(self, language: str) -> List[str]:
        entry = self._languages.get(language.lower())
        return sorted(entry.aliases) if entry else []

    def is_supported(self, language: str) -> bool:
        key = language.lower()
        return key in self._languages or key in self._aliases

    def __contains__(self, language: str) -> bool:
        return self.is_supported(language)

    def get_language_info(self, language: str) -> Dict[str, Any]:
        """
        Describe a registered language.

        Includes how the language spells an optional array of strings, which
        shows both its builtin names and its usage rendering.

        Raises:
            RegistryError: If the language is not registered
        """
        entry = self.entry(language)
        generator = self.create_generator(entry.name)
        string = generator.builtin_type_names()[BuiltinType.STRING]

        return {
            "name": generator.language_name,
            "class": entry.generator_class.__name__,
            "module": entry.generator_class.__module__,
            "aliases": sorted(entry.aliases),
            "naming_strategy": generator.config.naming_strategy,
            "keyword_count": len(generator.keywords),
            "example_usage": generator.render_usage(string.as_usage().as_array().as_optional()),
        }


_global_registry: Optional[GeneratorRegistry] = None


def get_registry() -> GeneratorRegistry:
    """Return the process-wide registry, registering bundled languages on first use."""
    global _global_registry
    if _global_registry is None:
        _global_registry = GeneratorRegistry()
        _register_builtin_generators(_global_registry)
    return _global_registry


def _register_builtin_generators(registry: GeneratorRegistry):
    from .languages.python import PythonGenerator
    from .languages.swift import SwiftGenerator

    registry.register("swift", SwiftGenerator, aliases=["swiftlang"])
    registry.register("python", PythonGenerator, aliases=["py"])


def register_generator(
    language: str,
    generator_class: Type[CodeGenerator],
    aliases: Optional[List[str]] = None,
):
    get_registry().register(language, generator_class, aliases)


def get_generator(language: str, config: ConfigSource = None) -> CodeGenerator:
    """Create a generator from the global registry."""
    return get_registry().create_generator(language, config)


def list_supported_languages() -> List[str]:
    return get_registry().list_languages()


def is_language_supported(language: str) -> bool:
    return get_registry().is_supported(language)


def get_language_info(language: str) -> Dict[str, Any]:
    return get_registry().get_language_info(language)
