"""
Configuration management for type generation.

Handles loading and merging configuration from JSON or YAML files,
providing defaults and validation for generator settings.
"""

import json
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml

from .naming import NamingStrategy


class ConfigError(Exception):
    """Exception raised for configuration-related errors."""

    pass


@dataclass
class GeneratorConfig:
    """Configuration for a generation run."""

    # Target
    language: str = "swift"

    # Naming settings
    naming_strategy: str = "defensive"  # defensive, idiomatic
    name_overrides: Dict[str, str] = field(default_factory=dict)
    inline_type_suffix: str = "Payload"
    detect_collisions: bool = False

    # Scope
    include_operations: bool = True

    # Custom settings (language-specific)
    custom: Dict[str, Any] = field(default_factory=dict)


class ConfigManager:
    """Manages configuration loading and merging."""

    def __init__(self):
        """Initialize configuration manager."""
        self._configs: Dict[str, Dict[str, Any]] = {}
        self._load_defaults()

    def _load_defaults(self):
        """Load default configurations for supported languages."""
        self._configs["swift"] = {
            "language": "swift",
            "naming_strategy": "defensive",
            "inline_type_suffix": "Payload",
        }

        self._configs["python"] = {
            "language": "python",
            "naming_strategy": "idiomatic",
            "inline_type_suffix": "Payload",
        }

    def get_config(
        self,
        language: Optional[str] = None,
        custom_config: Optional[Dict[str, Any]] = None,
        config_file: Optional[Union[str, Path]] = None,
    ) -> GeneratorConfig:
        """
        Get complete configuration for a language.

        Args:
            language: Target language name; taken from the file or custom
                settings when omitted, "swift" otherwise
            custom_config: Custom configuration overrides
            config_file: Path to a JSON or YAML configuration file

        Returns:
            Merged configuration for the language
        """
        file_config = self._load_config_file(config_file) if config_file else {}
        custom_config = custom_config or {}

        resolved_language = (
            language
            or custom_config.get("language")
            or file_config.get("language")
            or "swift"
        ).lower()

        base_config = dict(self._configs.get(resolved_language, {}))
        base_config["custom"] = dict(base_config.get("custom", {}))
        base_config.update(file_config)
        base_config.update(custom_config)
        base_config["language"] = resolved_language

        return self._dict_to_config(base_config)

    def _load_config_file(self, config_path: Union[str, Path]) -> Dict[str, Any]:
        """Load configuration from a JSON or YAML file."""
        path = Path(config_path)

        if not path.exists():
            raise ConfigError(f"Configuration file not found: {path}")

        suffix = path.suffix.lower()
        if suffix not in (".json", ".yaml", ".yml"):
            raise ConfigError(f"Configuration file must be JSON or YAML: {path}")

        try:
            with open(path, "r", encoding="utf-8") as f:
                if suffix == ".json":
                    config = json.load(f)
                else:
                    config = yaml.safe_load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in configuration file {path}: {e}") from e
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in configuration file {path}: {e}") from e
        except OSError as e:
            raise ConfigError(f"Failed to load configuration file {path}: {e}") from e

        if not isinstance(config, dict):
            raise ConfigError(f"Configuration file must contain an object: {path}")

        return config

    def _dict_to_config(self, config_dict: Dict[str, Any]) -> GeneratorConfig:
        """Convert dictionary to GeneratorConfig instance."""
        known_fields = set(GeneratorConfig.__dataclass_fields__)

        config_args = {}
        custom_args = {}

        for key, value in config_dict.items():
            if key in known_fields:
                config_args[key] = value
            else:
                custom_args[key] = value

        # Unknown keys end up in the custom dict
        if custom_args:
            existing_custom = dict(config_args.get("custom", {}))
            existing_custom.update(custom_args)
            config_args["custom"] = existing_custom

        return GeneratorConfig(**config_args)

    def save_config(self, config: GeneratorConfig, output_path: Union[str, Path]):
        """Save configuration to a JSON or YAML file, chosen by extension."""
        path = Path(output_path)

        config_dict = asdict(config)
        custom = config_dict.pop("custom")
        config_dict.update(custom)

        try:
            with open(path, "w", encoding="utf-8") as f:
                if path.suffix.lower() in (".yaml", ".yml"):
                    yaml.safe_dump(config_dict, f, sort_keys=False, allow_unicode=True)
                else:
                    json.dump(config_dict, f, indent=2, ensure_ascii=False)
        except OSError as e:
            raise ConfigError(f"Failed to save configuration to {path}: {e}") from e

    def list_languages(self) -> List[str]:
        """Get list of languages with default configurations."""
        return list(self._configs.keys())

    def validate_config(self, config: GeneratorConfig) -> List[str]:
        """
        Validate configuration.

        Returns:
            List of validation warnings
        """
        warnings = []

        try:
            NamingStrategy(config.naming_strategy)
        except ValueError:
            warnings.append(f"Invalid naming_strategy: {config.naming_strategy}")

        if not isinstance(config.name_overrides, dict):
            warnings.append("name_overrides must be a mapping of names to identifiers")
        else:
            for original, identifier in config.name_overrides.items():
                if not isinstance(identifier, str) or not identifier.isidentifier():
                    warnings.append(
                        f"Name override for '{original}' is not a valid identifier: {identifier}"
                    )

        if config.inline_type_suffix and not config.inline_type_suffix.isidentifier():
            warnings.append(f"Invalid inline_type_suffix: {config.inline_type_suffix}")

        if config.language not in self._configs:
            warnings.append(f"No default configuration for language: {config.language}")

        return warnings


# Global configuration manager instance
_config_manager = None


def get_config_manager() -> ConfigManager:
    """Get the global configuration manager instance."""
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigManager()
    return _config_manager


def load_config(
    language: Optional[str] = None,
    custom_config: Optional[Dict[str, Any]] = None,
    config_file: Optional[Union[str, Path]] = None,
) -> GeneratorConfig:
    """
    Convenience function to load configuration.

    Args:
        language: Target language name
        custom_config: Custom configuration overrides
        config_file: Path to a JSON or YAML configuration file

    Returns:
        Merged configuration for the language
    """
    manager = get_config_manager()
    return manager.get_config(language, custom_config, config_file)
