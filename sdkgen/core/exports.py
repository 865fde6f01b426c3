"""
Barrel (``__init__.py``) synthesis.

The ExportsManager records the public names of every finished module and, at
the end of generation, writes one barrel per directory so that every module
is reachable from the package root.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Tuple

from ..logging_config import get_logger
from .errors import AmbiguousExportError, InvalidGeneratorStateError
from .files import VirtualFileTree
from .paths import ExportDeclaration, ExportedDirectory, ExportedFilePath, directory_path

logger = get_logger(__name__)


@dataclass
class _DirectoryNode:
    path: Tuple[str, ...]
    directories: Dict[str, ExportedDirectory] = field(default_factory=dict)
    files: Dict[str, ExportedFilePath] = field(default_factory=dict)
    # First file recorded below each child directory
    origins: Dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class _BarrelEntry:
    """One re-export line of a barrel and the public names it contributes."""

    child: str
    names: Tuple[str, ...]
    namespace: Optional[str]
    source: str


class ExportsManager:
    """Process-wide index of generated modules and their public names."""

    def __init__(self):
        self._exports: Dict[ExportedFilePath, List[str]] = {}
        self._finalized = False

    def add_exports_for_filepath(
        self, filepath: ExportedFilePath, exposed_names: Iterable[str] = ()
    ) -> None:
        """Record that ``filepath`` exists and publicly defines ``exposed_names``."""
        if self._finalized:
            raise InvalidGeneratorStateError(
                f"Cannot add exports for {filepath}: exports were already written"
            )
        names = self._exports.setdefault(filepath, [])
        for name in exposed_names:
            if name not in names:
                names.append(name)

    @property
    def filepaths(self) -> List[ExportedFilePath]:
        return list(self._exports)

    def write_exports_to_root(self, root: VirtualFileTree, header: str = "") -> List[str]:
        """
        Write a barrel for every directory holding exports, innermost first.

        Returns:
            Paths of the written barrel files

        Raises:
            AmbiguousExportError: If one barrel would export a name twice
        """
        if self._finalized:
            raise InvalidGeneratorStateError("Exports were already written")
        self._finalized = True

        nodes = self._build_tree()
        barrels: Dict[Tuple[str, ...], List[_BarrelEntry]] = {}
        exported_names: Dict[Tuple[str, ...], Tuple[str, ...]] = {}

        for path in sorted(nodes, key=lambda p: (-len(p), p)):
            entries = self._collect_entries(nodes[path], exported_names)
            names = self._check_conflicts(path, entries)
            exported_names[path] = names
            if names:
                barrels[path] = entries

        written = []
        for path in sorted(barrels, key=lambda p: (-len(p), p)):
            filepath = directory_path(path).to_filepath()
            root.write(filepath, self._render_barrel(barrels[path], exported_names[path], header))
            written.append(filepath)
            logger.debug("Wrote barrel %s", filepath)

        logger.info("Wrote %d barrel files", len(written))
        return written

    def _build_tree(self) -> Dict[Tuple[str, ...], _DirectoryNode]:
        nodes: Dict[Tuple[str, ...], _DirectoryNode] = {(): _DirectoryNode(())}
        for filepath in self._exports:
            parent = ()
            for directory in filepath.directories:
                current = parent + (directory.name_on_disk,)
                nodes.setdefault(current, _DirectoryNode(current))
                self._add_directory(nodes[parent], directory, filepath)
                parent = current
            if filepath.file.name_on_disk != "__init__":
                nodes[parent].files[filepath.file.name_on_disk] = filepath
        return nodes

    def _add_directory(
        self, node: _DirectoryNode, directory: ExportedDirectory, filepath: ExportedFilePath
    ) -> None:
        name = directory.name_on_disk
        existing = node.directories.setdefault(name, directory)
        node.origins.setdefault(name, filepath.to_filepath())
        if existing != directory:
            # One directory cannot be re-exported both flat and as a namespace
            raise AmbiguousExportError(
                "/".join(node.path + (name,)), node.origins[name], filepath.to_filepath()
            )

    def _collect_entries(
        self,
        node: _DirectoryNode,
        exported_names: Dict[Tuple[str, ...], Tuple[str, ...]],
    ) -> List[_BarrelEntry]:
        entries = []
        for name, filepath in node.files.items():
            declaration = filepath.file.export_declaration
            names = tuple(self._exports[filepath])
            if declaration.namespace_export is not None:
                entries.append(
                    _BarrelEntry(name, (declaration.namespace_export,), declaration.namespace_export,
                                 filepath.to_filepath())
                )
            elif names:
                entries.append(_BarrelEntry(name, names, None, filepath.to_filepath()))

        for name, directory in node.directories.items():
            child_path = node.path + (name,)
            child_names = exported_names.get(child_path, ())
            if not child_names:
                continue
            source = "/".join(child_path) + "/"
            declaration = directory.export_declaration or ExportDeclaration()
            if declaration.export_all:
                entries.append(_BarrelEntry(name, child_names, None, source))
            else:
                namespace = directory.namespace or name
                entries.append(_BarrelEntry(name, (namespace,), namespace, source))

        return sorted(entries, key=lambda entry: entry.child)

    def _check_conflicts(self, path: Tuple[str, ...], entries: List[_BarrelEntry]) -> Tuple[str, ...]:
        sources: Dict[str, str] = {}
        for entry in entries:
            for name in entry.names:
                if name in sources:
                    raise AmbiguousExportError(name, sources[name], entry.source)
                sources[name] = entry.source
        return tuple(sorted(sources))

    def _render_barrel(self, entries: List[_BarrelEntry], names: Tuple[str, ...], header: str) -> str:
        lines = []
        if header:
            lines.extend([header.rstrip("\n"), ""])
        for entry in entries:
            if entry.namespace is None:
                lines.append(f"from .{entry.child} import {', '.join(sorted(entry.names))}")
            elif entry.namespace == entry.child:
                lines.append(f"from . import {entry.child}")
            else:
                lines.append(f"from . import {entry.child} as {entry.namespace}")
        lines.append("")
        lines.append("__all__ = [" + ", ".join(f'"{name}"' for name in names) + "]")
        return "\n".join(lines) + "\n"
