"""
Configuration management for SDK generation.

Settings come from three layers, later ones winning: the GeneratorConfig
defaults, an optional JSON configuration file and explicit overrides (usually
CLI flags). Keys that GeneratorConfig does not know are kept in ``custom``.
"""

import json
from pathlib import Path
from typing import Dict, Any, List, Optional, Union
from dataclasses import dataclass, field, fields

from .naming import PYTHON_RESERVED_WORDS


class ConfigError(Exception):
    """Exception raised for configuration-related errors."""
    pass


DEFAULT_FILE_HEADER = "# This file was auto-generated from our API definition."


@dataclass
class GeneratorConfig:
    """Configuration for one SDK generation run."""

    # Package metadata
    package_name: str = "api_client"
    package_version: str = "0.0.1"
    repository_url: Optional[str] = None
    api_name: Optional[str] = None  # falls back to the IR's apiName

    # Output settings
    output_dir: Optional[str] = None
    python_version: str = ">=3.9"

    # Directory layout of the generated package
    resources_directory: str = "resources"
    schema_directory: str = "serialization"
    schema_namespace_import: str = "serializers"
    core_directory: str = "core"

    # Generated code style
    file_header: str = DEFAULT_FILE_HEADER
    add_docs: bool = True

    # Dependency handling
    strict_dependencies: bool = False

    # Unknown configuration keys
    custom: Dict[str, Any] = field(default_factory=dict)


class ConfigManager:
    """Loads, merges and validates generator configuration."""

    def get_config(self, custom_config: Optional[Dict[str, Any]] = None,
                   config_file: Optional[Union[str, Path]] = None) -> GeneratorConfig:
        """
        Build the configuration of one run.

        Args:
            custom_config: Explicit overrides; ``None`` values are ignored so
                unset CLI flags do not mask the file
            config_file: Path to JSON configuration file

        Returns:
            Merged configuration
        """
        settings: Dict[str, Any] = {}
        if config_file:
            settings.update(self._read_config_file(config_file))
        if custom_config:
            settings.update({key: value for key, value in custom_config.items() if value is not None})
        return self._to_config(settings)

    def _read_config_file(self, config_path: Union[str, Path]) -> Dict[str, Any]:
        path = Path(config_path)
        if not path.exists():
            raise ConfigError(f"Configuration file not found: {path}")
        if path.suffix.lower() != '.json':
            raise ConfigError(f"Configuration file must be JSON: {path}")

        try:
            settings = json.loads(path.read_text(encoding='utf-8'))
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in configuration file {path}: {e}") from e
        except OSError as e:
            raise ConfigError(f"Failed to read configuration file {path}: {e}") from e

        if not isinstance(settings, dict):
            raise ConfigError(f"Configuration file must contain a JSON object: {path}")
        return settings

    def _to_config(self, settings: Dict[str, Any]) -> GeneratorConfig:
        known = {f.name for f in fields(GeneratorConfig)}
        custom = dict(settings.get("custom") or {})
        custom.update({key: value for key, value in settings.items() if key not in known})

        arguments = {key: value for key, value in settings.items() if key in known}
        arguments["custom"] = custom
        return GeneratorConfig(**arguments)

    def validate_config(self, config: GeneratorConfig) -> List[str]:
        """
        Validate a configuration.

        Returns:
            List of validation warnings
        """
        warnings = []

        if not config.package_name.isidentifier():
            warnings.append(f"Invalid Python package name: {config.package_name}")
        elif config.package_name in PYTHON_RESERVED_WORDS:
            warnings.append(f"Package name is a reserved word: {config.package_name}")

        directories = [
            config.resources_directory,
            config.schema_directory,
            config.core_directory,
        ]
        for directory in directories:
            if not directory.isidentifier():
                warnings.append(f"Invalid directory name: {directory}")
        if len(set(directories)) != len(directories):
            warnings.append(f"Directory names must be distinct: {', '.join(directories)}")

        if not config.schema_namespace_import.isidentifier():
            warnings.append(
                f"Invalid schema namespace import: {config.schema_namespace_import}"
            )

        return warnings


_config_manager = None


def get_config_manager() -> ConfigManager:
    """Return the shared ConfigManager."""
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigManager()
    return _config_manager


def load_config(custom_config: Optional[Dict[str, Any]] = None,
                config_file: Optional[Union[str, Path]] = None) -> GeneratorConfig:
    """Shortcut for ``get_config_manager().get_config(...)``."""
    return get_config_manager().get_config(custom_config, config_file)
