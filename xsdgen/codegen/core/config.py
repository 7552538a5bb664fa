"""
Configuration management for code generation.

Handles loading and merging configuration from JSON files,
providing defaults and validation for generator settings.
"""

import json
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List, Optional, Union


class ConfigError(Exception):
    """Exception raised for configuration-related errors."""

    pass


DEFAULT_BANNER = "Code generated by xsdgen. DO NOT EDIT."


@dataclass
class GeneratorConfig:
    """Base configuration for code generators."""

    # Output settings
    output_file: Optional[str] = None
    package_name: str = "schema"

    # Code style settings
    indent_size: int = 4
    use_tabs: bool = False
    line_ending: str = "\n"

    # Additional metadata
    add_comments: bool = True
    banner: str = DEFAULT_BANNER

    # Custom settings (language-specific)
    custom: Dict[str, Any] = field(default_factory=dict)

    @property
    def indent(self) -> str:
        """One level of indentation."""
        return "\t" if self.use_tabs else " " * self.indent_size


class ConfigManager:
    """Manages configuration loading and merging."""

    def __init__(self):
        """Initialize configuration manager."""
        self._configs: Dict[str, Dict[str, Any]] = {}
        self._load_defaults()

    def _load_defaults(self):
        """Load default configurations for supported languages."""
        self._configs["go"] = {
            "package_name": "schema",
            "use_tabs": True,
        }

        self._configs["typescript"] = {
            "package_name": "schema",
            "indent_size": 4,
        }

        self._configs["java"] = {
            "package_name": "schema",
            "indent_size": 4,
            "custom": {"container_class": "Schema"},
        }

        self._configs["rust"] = {
            "package_name": "schema",
            "indent_size": 4,
        }

        self._configs["ruby"] = {
            "package_name": "Schema",
            "indent_size": 2,
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
            language: Target language name (None for bare defaults)
            custom_config: Custom configuration overrides
            config_file: Path to JSON configuration file

        Returns:
            Merged configuration for the language
        """
        # Start with defaults
        base_config = json.loads(json.dumps(self._configs.get(language or "", {})))

        # Load from file if provided
        if config_file:
            file_config = self._load_config_file(config_file)
            self._merge(base_config, file_config)

        # Apply custom overrides
        if custom_config:
            self._merge(base_config, custom_config)

        return self._dict_to_config(base_config)

    @staticmethod
    def _merge(target: Dict[str, Any], overrides: Dict[str, Any]):
        """Merge overrides into target, combining the ``custom`` dicts."""
        for key, value in overrides.items():
            if key == "custom" and isinstance(value, dict):
                target.setdefault("custom", {}).update(value)
            else:
                target[key] = value

    def _load_config_file(self, config_path: Union[str, Path]) -> Dict[str, Any]:
        """Load configuration from JSON file."""
        path = Path(config_path)

        if not path.exists():
            raise ConfigError(f"Configuration file not found: {path}")

        if not path.suffix.lower() == ".json":
            raise ConfigError(f"Configuration file must be JSON: {path}")

        try:
            with open(path, "r", encoding="utf-8") as f:
                config = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in configuration file {path}: {e}")
        except OSError as e:
            raise ConfigError(f"Failed to load configuration file {path}: {e}")

        if not isinstance(config, dict):
            raise ConfigError(f"Configuration file must contain a JSON object: {path}")

        return config

    def _dict_to_config(self, config_dict: Dict[str, Any]) -> GeneratorConfig:
        """Convert dictionary to GeneratorConfig instance."""
        known_fields = {f.name for f in fields(GeneratorConfig)}

        config_args = {}
        custom_args = {}

        for key, value in config_dict.items():
            if key in known_fields:
                config_args[key] = value
            else:
                custom_args[key] = value

        # Unknown keys are language-specific settings
        if custom_args:
            existing_custom = dict(config_args.get("custom", {}))
            existing_custom.update(custom_args)
            config_args["custom"] = existing_custom

        return GeneratorConfig(**config_args)

    def save_config(self, config: GeneratorConfig, output_path: Union[str, Path]):
        """Save configuration to JSON file."""
        path = Path(output_path)
        config_dict = asdict(config)

        # Flatten custom settings to top level, the way they are loaded
        config_dict.update(config_dict.pop("custom"))

        try:
            with open(path, "w", encoding="utf-8") as f:
                json.dump(config_dict, f, indent=2, ensure_ascii=False)
        except OSError as e:
            raise ConfigError(f"Failed to save configuration to {path}: {e}")

    def list_languages(self) -> List[str]:
        """Get list of languages with default configurations."""
        return list(self._configs.keys())

    def validate_config(self, config: GeneratorConfig, language: str) -> List[str]:
        """
        Validate configuration for a language.

        Returns:
            List of validation warnings
        """
        warnings = []

        if config.indent_size < 1:
            warnings.append(f"Invalid indent_size: {config.indent_size}")

        if config.line_ending not in ("\n", "\r\n"):
            warnings.append(f"Invalid line_ending: {config.line_ending!r}")

        if language in ("go", "typescript", "rust"):
            if not config.package_name.isidentifier():
                warnings.append(f"Invalid {language} package name: {config.package_name}")

        elif language == "java":
            segments = config.package_name.split(".")
            if not all(segment.isidentifier() for segment in segments):
                warnings.append(f"Invalid Java package name: {config.package_name}")
            container = config.custom.get("container_class", "Schema")
            if not str(container).isidentifier():
                warnings.append(f"Invalid container_class: {container}")

        elif language == "ruby":
            if not (config.package_name[:1].isupper() and config.package_name.isidentifier()):
                warnings.append(f"Ruby module name must be a constant: {config.package_name}")

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
        config_file: Path to JSON configuration file

    Returns:
        Merged configuration for the language
    """
    manager = get_config_manager()
    return manager.get_config(language, custom_config, config_file)


# Example configuration files for reference
EXAMPLE_GO_CONFIG = {
    "package_name": "ota",
    "use_tabs": True,
    "add_comments": True,
}

EXAMPLE_JAVA_CONFIG = {
    "package_name": "com.example.ota",
    "container_class": "Ota",
    "indent_size": 4,
}
