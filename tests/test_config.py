"""Tests for sdkgen.core.config."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from sdkgen.core.config import DEFAULT_FILE_HEADER, ConfigError, ConfigManager, GeneratorConfig


def test_defaults_when_nothing_is_given() -> None:
    config = ConfigManager().get_config()

    assert isinstance(config, GeneratorConfig)
    assert config.package_name == "api_client"
    assert config.resources_directory == "resources"
    assert config.schema_directory == "serialization"
    assert config.schema_namespace_import == "serializers"
    assert config.core_directory == "core"
    assert config.file_header == DEFAULT_FILE_HEADER
    assert config.strict_dependencies is False


def test_file_values_are_overridden_by_explicit_ones(tmp_path: Path) -> None:
    config_file = tmp_path / "sdkgen.json"
    config_file.write_text(
        json.dumps({"package_name": "imdb_client", "package_version": "1.2.0", "flavour": "async"}),
        encoding="utf-8",
    )

    config = ConfigManager().get_config(
        {"package_version": "2.0.0", "repository_url": None}, config_file
    )

    assert config.package_name == "imdb_client"
    assert config.package_version == "2.0.0"
    assert config.repository_url is None
    assert config.custom == {"flavour": "async"}


@pytest.mark.parametrize(
    ("name", "content"),
    [("config.yaml", "package_name: x"), ("config.json", "{not json"), ("config.json", "[1, 2]")],
)
def test_unreadable_config_files_are_rejected(tmp_path: Path, name: str, content: str) -> None:
    config_file = tmp_path / name
    config_file.write_text(content, encoding="utf-8")

    with pytest.raises(ConfigError):
        ConfigManager().get_config(config_file=config_file)


def test_missing_config_file_is_rejected(tmp_path: Path) -> None:
    with pytest.raises(ConfigError):
        ConfigManager().get_config(config_file=tmp_path / "missing.json")


def test_validation_reports_unusable_names() -> None:
    config = GeneratorConfig(package_name="my-client", core_directory="resources")

    warnings = ConfigManager().validate_config(config)

    assert "Invalid Python package name: my-client" in warnings
    assert any(warning.startswith("Directory names must be distinct") for warning in warnings)


def test_valid_config_has_no_warnings() -> None:
    assert ConfigManager().validate_config(GeneratorConfig()) == []
