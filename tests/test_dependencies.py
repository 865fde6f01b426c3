"""Tests for sdkgen.core.dependencies."""

from __future__ import annotations

import pytest

from sdkgen.core.dependencies import Dependency, DependencyManager, ExternalDependencies
from sdkgen.core.errors import DependencyVersionConflictError, InvalidGeneratorStateError
from sdkgen.core.imports import ImportsManager
from sdkgen.core.paths import ExportedFile, ExportedFilePath


@pytest.mark.parametrize(
    ("version", "expected"),
    [(">=0.27", "httpx>=0.27"), ("0.27.0", "httpx==0.27.0"), ("*", "httpx"), ("", "httpx")],
)
def test_requirement_strings(version: str, expected: str) -> None:
    assert Dependency("httpx", version).to_requirement() == expected


def test_dependencies_are_sorted_by_name() -> None:
    manager = DependencyManager()
    manager.add_dependency("httpx", ">=0.27")
    manager.add_dependency("anyio", ">=4.0")

    assert list(manager.get_dependencies()) == ["anyio", "httpx"]


def test_last_request_wins_and_the_conflict_is_recorded(caplog) -> None:
    manager = DependencyManager()
    manager.add_dependency("httpx", ">=0.26")
    manager.add_dependency("httpx", ">=0.27")

    assert manager.get_dependencies()["httpx"].version == ">=0.27"
    assert manager.conflicts == [("httpx", ">=0.26", ">=0.27")]
    assert "Conflicting versions for httpx" in caplog.text


def test_peer_registration_is_not_overridden_by_a_plain_one() -> None:
    manager = DependencyManager()
    manager.add_dependency("httpx", ">=0.26", prefer_peer=True)
    manager.add_dependency("httpx", ">=0.27")

    dependency = manager.get_dependencies()["httpx"]
    assert dependency.version == ">=0.26"
    assert dependency.prefer_peer is True


def test_strict_mode_rejects_conflicts() -> None:
    manager = DependencyManager(strict=True)
    manager.add_dependency("httpx", ">=0.26")
    manager.add_dependency("httpx", ">=0.26")

    with pytest.raises(DependencyVersionConflictError) as excinfo:
        manager.add_dependency("httpx", ">=0.27")

    assert excinfo.value.package == "httpx"


def test_dependencies_are_frozen_once_collected() -> None:
    manager = DependencyManager()
    manager.get_dependencies()

    with pytest.raises(InvalidGeneratorStateError):
        manager.add_dependency("httpx", ">=0.27")


def test_external_dependency_registers_and_imports() -> None:
    manager = DependencyManager()
    imports = ImportsManager(ExportedFilePath((), ExportedFile("client")))
    external = ExternalDependencies(manager, imports)

    local = external.add("typing-extensions", ">=4.6", module="typing_extensions", named="NotRequired")

    assert local == "NotRequired"
    assert "typing-extensions" in manager
    assert imports.finalize() == ["from typing_extensions import NotRequired"]
