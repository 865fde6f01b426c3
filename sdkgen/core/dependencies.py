"""
External package dependencies of the generated package.
"""

from dataclasses import dataclass
from typing import Dict, List

from ..logging_config import get_logger
from .errors import DependencyVersionConflictError, InvalidGeneratorStateError

logger = get_logger(__name__)


@dataclass(frozen=True)
class Dependency:
    """One requirement of the generated package."""

    name: str
    version: str
    prefer_peer: bool = False

    def to_requirement(self) -> str:
        """PEP 508 requirement string, e.g. ``httpx>=0.27``."""
        version = self.version.strip()
        if not version or version == "*":
            return self.name
        if version[0].isdigit():
            version = f"=={version}"
        return f"{self.name}{version}"


class DependencyManager:
    """Collects external dependencies requested by renderers and utilities.

    When one package is requested twice with different constraints the last
    request wins, unless the recorded entry was registered with
    ``prefer_peer``; peer registrations take precedence over plain ones. In
    strict mode any conflict raises DependencyVersionConflictError instead.
    """

    def __init__(self, strict: bool = False):
        self.strict = strict
        self._dependencies: Dict[str, Dependency] = {}
        self._conflicts: List[tuple] = []
        self._finalized = False

    def add_dependency(self, name: str, version: str, *, prefer_peer: bool = False) -> None:
        if self._finalized:
            raise InvalidGeneratorStateError(
                f"Cannot add dependency {name}: dependencies were already collected"
            )

        requested = Dependency(name, version, prefer_peer)
        existing = self._dependencies.get(name)

        if existing is None:
            self._dependencies[name] = requested
            logger.debug("Added dependency %s %s", name, version)
            return

        if existing.version != requested.version:
            if self.strict:
                raise DependencyVersionConflictError(name, existing.version, requested.version)
            self._conflicts.append((name, existing.version, requested.version))
            logger.warning(
                "Conflicting versions for %s: %s vs %s", name, existing.version, requested.version
            )

        if existing.prefer_peer and not requested.prefer_peer:
            return
        self._dependencies[name] = requested

    def get_dependencies(self) -> Dict[str, Dependency]:
        """Freeze and return the collected dependencies, sorted by name."""
        self._finalized = True
        return {name: self._dependencies[name] for name in sorted(self._dependencies)}

    @property
    def conflicts(self) -> List[tuple]:
        """Recorded ``(name, existing, requested)`` conflicts."""
        return list(self._conflicts)

    def __contains__(self, name: str) -> bool:
        return name in self._dependencies


class ExternalDependencies:
    """Per-file accessor that registers a package and imports it in one call."""

    def __init__(self, dependency_manager: DependencyManager, imports_manager):
        self._dependency_manager = dependency_manager
        self._imports_manager = imports_manager

    def add(
        self,
        package: str,
        version: str,
        *,
        module: str = None,
        named: str = None,
        alias: str = None,
        prefer_peer: bool = False,
    ) -> str:
        """
        Depend on ``package`` and import it into the current file.

        Returns:
            The local name to use in generated code
        """
        self._dependency_manager.add_dependency(package, version, prefer_peer=prefer_peer)
        module = module or package.replace("-", "_")
        if named is not None:
            self._imports_manager.add_import(module, named=named, alias=alias)
            return alias or named
        self._imports_manager.add_import(module, namespace=True, alias=alias)
        return alias or module
