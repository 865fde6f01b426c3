"""Tests for sdkgen.core.exports."""

from __future__ import annotations

import pytest

from sdkgen.core.errors import AmbiguousExportError, InvalidGeneratorStateError
from sdkgen.core.exports import ExportsManager
from sdkgen.core.files import VirtualFileTree
from sdkgen.core.paths import ExportDeclaration, ExportedDirectory, ExportedFile, ExportedFilePath

RESOURCES = ExportedDirectory("resources", ExportDeclaration.all())
IMDB = ExportedDirectory("imdb", ExportDeclaration.namespace("imdb"))
TYPES = ExportedDirectory("types", ExportDeclaration.all())
ERRORS = ExportedDirectory("errors", ExportDeclaration.all())


def _file(*directories: ExportedDirectory, name: str) -> ExportedFilePath:
    return ExportedFilePath(directories, ExportedFile(name))


def test_every_directory_on_the_path_gets_a_barrel() -> None:
    manager = ExportsManager()
    manager.add_exports_for_filepath(_file(RESOURCES, IMDB, TYPES, name="movie"), ["Movie"])
    tree = VirtualFileTree()

    written = manager.write_exports_to_root(tree)

    assert written == [
        "resources/imdb/types/__init__.py",
        "resources/imdb/__init__.py",
        "resources/__init__.py",
        "__init__.py",
    ]
    assert "from .movie import Movie" in tree.read("resources/imdb/types/__init__.py")
    assert "from .types import Movie" in tree.read("resources/imdb/__init__.py")
    assert "from . import imdb" in tree.read("resources/__init__.py")
    assert "from .resources import imdb" in tree.read("__init__.py")


def test_namespace_directory_with_alias_binds_the_alias() -> None:
    serialization = ExportedDirectory("serialization", ExportDeclaration.namespace("serializers"))
    manager = ExportsManager()
    manager.add_exports_for_filepath(_file(serialization, TYPES, name="movie"), ["Movie"])
    tree = VirtualFileTree()

    manager.write_exports_to_root(tree)

    root = tree.read("__init__.py")
    assert "from . import serialization as serializers" in root
    assert '__all__ = ["serializers"]' in root


def test_namespace_file_is_exported_as_a_module() -> None:
    endpoint = ExportedFilePath(
        (ExportedDirectory("endpoints", ExportDeclaration.namespace("endpoints")),),
        ExportedFile("get_movie", ExportDeclaration.namespace("get_movie")),
    )
    manager = ExportsManager()
    manager.add_exports_for_filepath(endpoint, ["Request", "Response"])
    tree = VirtualFileTree()

    manager.write_exports_to_root(tree)

    assert "from . import get_movie" in tree.read("endpoints/__init__.py")
    assert "from . import endpoints" in tree.read("__init__.py")


def test_directories_without_exported_names_get_no_barrel() -> None:
    manager = ExportsManager()
    manager.add_exports_for_filepath(_file(RESOURCES, TYPES, name="empty"), [])
    tree = VirtualFileTree()

    assert manager.write_exports_to_root(tree) == []
    assert len(tree) == 0


def test_barrel_starts_with_the_header() -> None:
    manager = ExportsManager()
    manager.add_exports_for_filepath(_file(TYPES, name="movie"), ["Movie"])
    tree = VirtualFileTree()

    manager.write_exports_to_root(tree, "# generated")

    assert tree.read("types/__init__.py").startswith("# generated\n\nfrom .movie import Movie")


def test_same_name_from_two_files_is_ambiguous() -> None:
    manager = ExportsManager()
    manager.add_exports_for_filepath(_file(RESOURCES, TYPES, name="movie"), ["Movie"])
    manager.add_exports_for_filepath(_file(RESOURCES, TYPES, name="film"), ["Movie"])

    with pytest.raises(AmbiguousExportError) as excinfo:
        manager.write_exports_to_root(VirtualFileTree())

    assert excinfo.value.symbol == "Movie"
    assert {excinfo.value.first_file, excinfo.value.second_file} == {
        "resources/types/movie.py",
        "resources/types/film.py",
    }


def test_flattened_directories_can_collide_one_level_up() -> None:
    manager = ExportsManager()
    manager.add_exports_for_filepath(_file(RESOURCES, TYPES, name="movie"), ["Movie"])
    manager.add_exports_for_filepath(_file(RESOURCES, ERRORS, name="movie"), ["Movie"])

    with pytest.raises(AmbiguousExportError):
        manager.write_exports_to_root(VirtualFileTree())


def test_exports_cannot_be_added_after_writing() -> None:
    manager = ExportsManager()
    manager.add_exports_for_filepath(_file(TYPES, name="movie"), ["Movie"])
    manager.write_exports_to_root(VirtualFileTree())

    with pytest.raises(InvalidGeneratorStateError):
        manager.add_exports_for_filepath(_file(TYPES, name="person"), ["Person"])
    with pytest.raises(InvalidGeneratorStateError):
        manager.write_exports_to_root(VirtualFileTree())


def test_directory_exported_both_flat_and_as_namespace_is_ambiguous() -> None:
    namespaced_types = ExportedDirectory("types", ExportDeclaration.namespace("types"))
    manager = ExportsManager()
    manager.add_exports_for_filepath(_file(RESOURCES, TYPES, name="movie"), ["Movie"])
    manager.add_exports_for_filepath(_file(RESOURCES, namespaced_types, TYPES, name="genre"), ["Genre"])

    with pytest.raises(AmbiguousExportError) as excinfo:
        manager.write_exports_to_root(VirtualFileTree())

    assert excinfo.value.symbol == "resources/types"
    assert excinfo.value.first_file == "resources/types/movie.py"
    assert excinfo.value.second_file == "resources/types/types/genre.py"
