"""
Core utilities manager.

Tracks which utilities generated code uses, closes that set over utility
dependencies, and at the end of generation registers their exports and
external dependencies and copies their files into the output package.
"""

import shutil
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from ..core.dependencies import DependencyManager
from ..core.errors import CyclicUtilityDependencyError, InvalidGeneratorStateError
from ..core.exports import ExportsManager
from ..core.imports import ImportsManager
from ..core.paths import ExportDeclaration, ExportedDirectory, ExportedFile, ExportedFilePath
from ..logging_config import get_logger
from .catalog import CORE_UTILITY_CATALOG, CoreUtilityDescriptor
from .handles import HANDLE_CLASSES, CoreUtility

logger = get_logger(__name__)


class CoreUtilitiesManager:
    """Per-run registry of used core utilities.

    Args:
        catalog: Available utilities by name
        core_directory: Directory under the package root receiving the files
    """

    def __init__(
        self,
        catalog: Optional[Dict[str, CoreUtilityDescriptor]] = None,
        *,
        core_directory: str = "core",
    ):
        self.catalog = dict(CORE_UTILITY_CATALOG if catalog is None else catalog)
        self.core_directory = core_directory
        self._used: Dict[str, None] = {}
        self._to_copy: Optional[List[CoreUtilityDescriptor]] = None

    @property
    def finalized(self) -> bool:
        return self._to_copy is not None

    def get_core_utility(
        self,
        name: str,
        *,
        referenced_in: ExportedFilePath,
        imports_manager: ImportsManager,
    ) -> CoreUtility:
        """Mark ``name`` and its dependencies as used and return a handle."""
        self.mark_used(name)
        handle_class = HANDLE_CLASSES.get(name, CoreUtility)
        return handle_class(
            self.catalog[name],
            core_directory=self.core_directory,
            referenced_in=referenced_in,
            imports_manager=imports_manager,
        )

    def mark_used(self, name: str) -> List[str]:
        """Mark the transitive closure of ``name``; return the newly marked names."""
        if self.finalized:
            raise InvalidGeneratorStateError(f"Cannot use {name}: core utilities were finalized")
        added = []
        for utility in self._closure(name):
            if utility not in self._used:
                self._used[utility] = None
                added.append(utility)
                logger.debug("Using core utility %s", utility)
        return added

    def _closure(self, name: str) -> List[str]:
        """Dependencies first, ``name`` last."""
        ordered: List[str] = []
        done = set()

        def visit(current: str, path: Sequence[str]) -> None:
            if current in path:
                cycle = list(path[path.index(current):]) + [current]
                raise CyclicUtilityDependencyError(cycle)
            if current in done:
                return
            if current not in self.catalog:
                raise KeyError(f"Unknown core utility: {current}")
            for dependency in self.catalog[current].depends_on:
                visit(dependency, list(path) + [current])
            done.add(current)
            ordered.append(current)

        visit(name, [])
        return ordered

    def for_file(self, referenced_in: ExportedFilePath, imports_manager: ImportsManager) -> "CoreUtilities":
        """Accessor bound to one generated module."""
        return CoreUtilities(self, referenced_in=referenced_in, imports_manager=imports_manager)

    @property
    def used_utilities(self) -> List[str]:
        return sorted(self._used)

    def get_utility_filepaths(self, descriptor: CoreUtilityDescriptor) -> List[ExportedFilePath]:
        directories = (
            ExportedDirectory(self.core_directory, ExportDeclaration.namespace(self.core_directory)),
            ExportedDirectory(descriptor.directory, descriptor.export_declaration),
        )
        return [
            ExportedFilePath(directories=directories, file=ExportedFile(file.module_name))
            for file in descriptor.files
        ]

    def finalize(self, exports_manager: ExportsManager, dependency_manager: DependencyManager) -> None:
        """Register exports and external dependencies of every used utility."""
        if self.finalized:
            raise InvalidGeneratorStateError("Core utilities were already finalized")

        # Re-check the whole used set before anything is copied
        for name in self.used_utilities:
            self._closure(name)

        to_copy = []
        for name in self.used_utilities:
            descriptor = self.catalog[name]
            for filepath, file in zip(self.get_utility_filepaths(descriptor), descriptor.files):
                exports_manager.add_exports_for_filepath(filepath, file.exports)
            for package, version in descriptor.dependencies:
                dependency_manager.add_dependency(package, version)
            to_copy.append(descriptor)

        self._to_copy = to_copy
        logger.info("Finalized %d core utilities", len(to_copy))

    def copy_utilities_into(self, target_directory: Path) -> List[Path]:
        """Copy the files of every used utility below ``target_directory``."""
        if not self.finalized:
            raise InvalidGeneratorStateError("Core utilities must be finalized before copying")

        copied = []
        for descriptor in self._to_copy:
            destination = Path(target_directory) / self.core_directory / descriptor.directory
            destination.mkdir(parents=True, exist_ok=True)
            for file in descriptor.files:
                source = descriptor.asset_directory / file.asset
                if not source.is_file():
                    raise FileNotFoundError(f"Missing asset {source} for {descriptor.name}")
                target = destination / Path(file.asset).name
                shutil.copyfile(source, target)
                copied.append(target)
                logger.debug("Copied %s", target)
        return copied


class CoreUtilities:
    """Per-file accessor over the core utilities.

    Utilities are only marked used when an attribute is first touched.
    """

    def __init__(
        self,
        manager: CoreUtilitiesManager,
        *,
        referenced_in: ExportedFilePath,
        imports_manager: ImportsManager,
    ):
        self._manager = manager
        self._referenced_in = referenced_in
        self._imports_manager = imports_manager
        self._handles: Dict[str, CoreUtility] = {}

    def get(self, name: str) -> CoreUtility:
        if name not in self._handles:
            self._handles[name] = self._manager.get_core_utility(
                name, referenced_in=self._referenced_in, imports_manager=self._imports_manager
            )
        return self._handles[name]

    @property
    def schemas(self):
        return self.get("schemas")

    @property
    def http_client(self):
        return self.get("http-client")

    @property
    def auth(self):
        return self.get("auth")
