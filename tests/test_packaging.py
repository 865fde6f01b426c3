"""Tests for sdkgen.packaging."""

from __future__ import annotations

import importlib
import sys
from pathlib import Path

import pytest

from sdkgen.core.config import GeneratorConfig
from sdkgen.core.dependencies import Dependency
from sdkgen.ir.model import IntermediateRepresentation
from sdkgen.orchestrator import generate_sdk
from sdkgen.packaging import PackageWriter


def _config(**overrides) -> GeneratorConfig:
    return GeneratorConfig(package_name="acme_sdk", package_version="1.0.0", **overrides)


def test_package_is_written_below_the_output_directory(
    imdb: IntermediateRepresentation, tmp_path: Path
) -> None:
    package = generate_sdk(imdb, _config(), tmp_path)

    package_dir = tmp_path / "acme_sdk"
    assert package.output_path == package_dir
    assert (package_dir / "client.py").is_file()
    assert (package_dir / "resources" / "imdb" / "types" / "movie.py").is_file()
    assert (package_dir / "core" / "http_client" / "http_client.py").is_file()
    assert (package_dir / "core" / "auth" / "auth.py").is_file()
    assert (package_dir / "__init__.py").read_text(encoding="utf-8") == package.files.read("__init__.py")


def test_directories_without_barrels_get_an_empty_init(
    imdb: IntermediateRepresentation, tmp_path: Path
) -> None:
    generate_sdk(imdb, _config(), tmp_path)

    for module in (tmp_path / "acme_sdk").rglob("*.py"):
        assert (module.parent / "__init__.py").is_file(), module


def test_manifest_lists_requirements(imdb: IntermediateRepresentation, tmp_path: Path) -> None:
    generate_sdk(imdb, _config(repository_url="https://github.com/acme/acme-python"), tmp_path)

    manifest = (tmp_path / "pyproject.toml").read_text(encoding="utf-8")
    assert 'name = "acme-sdk"' in manifest
    assert 'version = "1.0.0"' in manifest
    assert '"anyio>=4.0",' in manifest
    assert '"httpx>=0.27",' in manifest
    assert '"typing-extensions>=4.6",' in manifest
    assert 'Repository = "https://github.com/acme/acme-python"' in manifest
    assert "[project.optional-dependencies]" not in manifest


def test_readme_shows_the_root_client(imdb: IntermediateRepresentation, tmp_path: Path) -> None:
    generate_sdk(imdb, _config(), tmp_path)

    readme = (tmp_path / "README.md").read_text(encoding="utf-8")
    assert readme.startswith("# Acme Python library")
    assert "from acme_sdk import AcmeClient" in readme
    assert "- `http-client`:" in readme


def test_peer_dependencies_go_to_an_extra() -> None:
    writer = PackageWriter()

    requirements = writer.split_requirements(
        {
            "httpx": Dependency("httpx", ">=0.27"),
            "pydantic": Dependency("pydantic", ">=2", prefer_peer=True),
        }
    )

    assert requirements == {"requirements": ["httpx>=0.27"], "peer_requirements": ["pydantic>=2"]}


def test_writing_twice_produces_identical_trees(imdb: IntermediateRepresentation, tmp_path: Path) -> None:
    generate_sdk(imdb, _config(), tmp_path / "first")
    generate_sdk(imdb, _config(), tmp_path / "second")

    def snapshot(root: Path):
        return {
            path.relative_to(root).as_posix(): path.read_bytes()
            for path in sorted(root.rglob("*"))
            if path.is_file()
        }

    assert snapshot(tmp_path / "first") == snapshot(tmp_path / "second")


@pytest.fixture
def import_generated(tmp_path: Path, monkeypatch):
    """Generate ``acme_sdk`` from an IR and import it."""

    def load(ir: IntermediateRepresentation):
        generate_sdk(ir, _config(), tmp_path)
        monkeypatch.syspath_prepend(str(tmp_path))
        return importlib.import_module("acme_sdk")

    yield load
    for name in [name for name in sys.modules if name == "acme_sdk" or name.startswith("acme_sdk.")]:
        del sys.modules[name]


def test_generated_package_imports_and_parses(
    imdb: IntermediateRepresentation, import_generated
) -> None:
    sdk = import_generated(imdb)

    assert sdk.AcmeEnvironment.PRODUCTION.value == "https://api.imdb.com"
    assert issubclass(sdk.imdb.MovieDoesNotExistError, sdk.core.ApiError)
    assert sdk.serialization.imdb.Movie.parse({"id": "m1", "title": "Up"}) == {
        "id_": "m1",
        "title": "Up",
    }
    assert sdk.serialization.imdb.CreateMovieRequest.json({"title": "Up", "rating": 8.2}) == {
        "title": "Up",
        "rating": 8.2,
    }


def test_mutually_referencing_schemas_load_and_parse(
    mutual: IntermediateRepresentation, import_generated
) -> None:
    sdk = import_generated(mutual)

    assert sdk.serialization.A.parse({"b": {"a": {"b": {}}}}) == {"b": {"a": {"b": {}}}}
    assert sdk.serialization.B.json({"a": {"b": {}}}) == {"a": {"b": {}}}


def test_property_optional_through_an_alias_may_be_absent(
    optional_alias: IntermediateRepresentation, import_generated
) -> None:
    sdk = import_generated(optional_alias)

    assert sdk.serialization.Profile.parse({"name": "Ada"}) == {"name": "Ada"}
    assert sdk.serialization.Profile.parse({"name": "Ada", "nick": None}) == {
        "name": "Ada",
        "nick": None,
    }
    with pytest.raises(ValueError, match="name: missing required property"):
        sdk.serialization.Profile.parse({"nick": "ada"})
