"""Tests for the core utilities catalog and manager."""

from __future__ import annotations

from pathlib import Path

import pytest

from sdkgen.core.dependencies import DependencyManager
from sdkgen.core.errors import CyclicUtilityDependencyError, InvalidGeneratorStateError
from sdkgen.core.exports import ExportsManager
from sdkgen.core.imports import ImportsManager
from sdkgen.core.paths import ExportedDirectory, ExportedFile, ExportedFilePath
from sdkgen.utilities.catalog import CoreUtilityDescriptor, UtilityFile, build_catalog
from sdkgen.utilities.handles import CoreUtility
from sdkgen.utilities.manager import CoreUtilitiesManager

TYPE_FILE = ExportedFilePath(
    (ExportedDirectory("resources"), ExportedDirectory("types")), ExportedFile("movie")
)


def _accessor(manager: CoreUtilitiesManager):
    imports = ImportsManager(TYPE_FILE)
    return manager.for_file(TYPE_FILE, imports), imports


def test_using_a_utility_marks_its_dependencies_first() -> None:
    manager = CoreUtilitiesManager()

    assert manager.mark_used("http-client") == ["callback-queue", "http-client"]
    assert manager.mark_used("http-client") == []
    assert manager.used_utilities == ["callback-queue", "http-client"]


def test_utilities_are_marked_only_when_touched() -> None:
    manager = CoreUtilitiesManager()
    utilities, imports = _accessor(manager)

    assert manager.used_utilities == []

    expression = utilities.schemas.list_(utilities.schemas.string())

    assert expression == "schemas.list_(schemas.string())"
    assert manager.used_utilities == ["schemas"]
    assert imports.finalize() == ["from ...core import schemas"]


def test_flat_utilities_import_their_names() -> None:
    manager = CoreUtilitiesManager()
    utilities, imports = _accessor(manager)

    assert utilities.http_client.client_class() == "HttpClient"
    assert utilities.auth.bearer_header("self._token") == "bearer_auth_header(self._token)"
    assert imports.finalize() == ["from ...core import HttpClient, bearer_auth_header"]


def test_utilities_without_a_typed_handle_use_the_generic_one() -> None:
    utilities, imports = _accessor(CoreUtilitiesManager())

    handle = utilities.get("callback-queue")

    assert type(handle) is CoreUtility
    assert handle.get_reference_to("CallbackQueue") == "CallbackQueue"
    assert imports.finalize() == ["from ...core import CallbackQueue"]


def test_lazy_wrappers_defer_through_a_lambda() -> None:
    utilities, _ = _accessor(CoreUtilitiesManager())

    assert utilities.schemas.lazy_object("serializers.B") == "schemas.lazy_object(lambda: serializers.B)"
    assert utilities.schemas.lazy("serializers.Kind") == "schemas.lazy(lambda: serializers.Kind)"


def test_cyclic_descriptors_are_rejected() -> None:
    catalog = build_catalog(
        [
            CoreUtilityDescriptor("a", "a", (UtilityFile("a.py", ("A",)),), depends_on=("b",)),
            CoreUtilityDescriptor("b", "b", (UtilityFile("b.py", ("B",)),), depends_on=("a",)),
        ]
    )
    manager = CoreUtilitiesManager(catalog)

    with pytest.raises(CyclicUtilityDependencyError) as excinfo:
        manager.mark_used("a")

    assert excinfo.value.cycle == ["a", "b", "a"]
    assert manager.used_utilities == []


def test_duplicate_descriptors_are_rejected() -> None:
    descriptor = CoreUtilityDescriptor("a", "a", (UtilityFile("a.py", ("A",)),))

    with pytest.raises(ValueError):
        build_catalog([descriptor, descriptor])


def test_finalize_registers_exports_and_dependencies() -> None:
    manager = CoreUtilitiesManager()
    manager.mark_used("http-client")
    exports = ExportsManager()
    dependencies = DependencyManager()

    manager.finalize(exports, dependencies)

    assert [filepath.to_filepath() for filepath in exports.filepaths] == [
        "core/callback_queue/callback_queue.py",
        "core/http_client/http_client.py",
    ]
    assert list(dependencies.get_dependencies()) == ["anyio", "httpx"]
    with pytest.raises(InvalidGeneratorStateError):
        manager.mark_used("auth")


def test_copy_requires_finalize(tmp_path: Path) -> None:
    manager = CoreUtilitiesManager()
    manager.mark_used("schemas")

    with pytest.raises(InvalidGeneratorStateError):
        manager.copy_utilities_into(tmp_path)


def test_copy_writes_only_used_utilities(tmp_path: Path) -> None:
    manager = CoreUtilitiesManager()
    manager.mark_used("schemas")
    manager.finalize(ExportsManager(), DependencyManager())

    copied = manager.copy_utilities_into(tmp_path)

    assert sorted(path.relative_to(tmp_path).as_posix() for path in copied) == [
        "core/schemas/builders.py",
        "core/schemas/schema.py",
    ]
    assert not (tmp_path / "core" / "http_client").exists()


def test_core_barrel_exposes_schemas_as_a_namespace() -> None:
    from sdkgen.core.files import VirtualFileTree

    manager = CoreUtilitiesManager()
    manager.mark_used("schemas")
    manager.mark_used("auth")
    exports = ExportsManager()
    manager.finalize(exports, DependencyManager())
    tree = VirtualFileTree()

    exports.write_exports_to_root(tree)

    core = tree.read("core/__init__.py")
    assert "from .auth import basic_auth_header, bearer_auth_header" in core
    assert "from . import schemas" in core
    assert "from . import core" in tree.read("__init__.py")
