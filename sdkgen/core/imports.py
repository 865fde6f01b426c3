"""
Per-file import bookkeeping.

An ImportsManager collects every import a single generated module needs while
its renderer runs, and turns them into a deterministic block of import
statements when the file is finalized.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set, Tuple, Union

from .paths import ExportedFilePath, relative_import_base

ModuleRef = Union[ExportedFilePath, str]


@dataclass
class _ModuleImports:
    """Everything requested from one module."""

    named: Set[Tuple[str, Optional[str]]] = field(default_factory=set)
    namespaces: Set[Optional[str]] = field(default_factory=set)


class ImportsManager:
    """Collects import requests for the module at ``filepath``.

    Modules are either ExportedFilePaths inside the generated package
    (rendered as relative imports) or absolute module names such as
    ``"typing"`` or ``"httpx"``.
    """

    def __init__(self, filepath: ExportedFilePath):
        self.filepath = filepath
        self._imports: Dict[Tuple[str, ...], _ModuleImports] = {}
        self._absolute: Dict[str, _ModuleImports] = {}

    def add_import(
        self,
        module: ModuleRef,
        *,
        named: Optional[str] = None,
        namespace: bool = False,
        alias: Optional[str] = None,
    ) -> None:
        """
        Request an import from ``module``.

        Args:
            module: Target module inside the package, or an absolute module name
            named: Name to import from the module (``from m import named``)
            namespace: Import the module itself (``import m`` / ``from p import m``)
            alias: Local alias for the named import or the namespace
        """
        if named is None and not namespace:
            raise ValueError("An import is either named or a namespace import")

        if isinstance(module, str):
            entry = self._absolute.setdefault(module, _ModuleImports())
        else:
            # Importing from the owning module is a no-op
            if module.module_parts == self.filepath.module_parts:
                return
            entry = self._imports.setdefault(module.module_parts, _ModuleImports())

        if named is not None:
            entry.named.add((named, alias if alias != named else None))
        if namespace:
            entry.namespaces.add(alias)

    def has_imports(self) -> bool:
        return bool(self._imports or self._absolute)

    def finalize(self) -> List[str]:
        """
        Build the import block.

        Absolute imports come first, then relative ones; each group is sorted
        by module and names within a statement are sorted.
        """
        statements = []
        for module in sorted(self._absolute):
            statements.extend(self._absolute_statements(module, self._absolute[module]))
        for parts in sorted(self._imports):
            statements.extend(self._relative_statements(parts, self._imports[parts]))
        return statements

    def _absolute_statements(self, module: str, entry: _ModuleImports) -> List[str]:
        statements = []
        for alias in sorted(entry.namespaces, key=_alias_key):
            statements.append(f"import {module}" + (f" as {alias}" if alias else ""))
        if entry.named:
            statements.append(f"from {module} import {_format_names(entry.named)}")
        return statements

    def _relative_statements(self, parts: Tuple[str, ...], entry: _ModuleImports) -> List[str]:
        from_directories = self.filepath.directory_names
        statements = []
        for alias in sorted(entry.namespaces, key=_alias_key):
            if not parts:
                raise ValueError("The package root cannot be imported as a namespace")
            base = relative_import_base(from_directories, parts[:-1])
            leaf = parts[-1]
            suffix = f" as {alias}" if alias and alias != leaf else ""
            statements.append(f"from {base} import {leaf}{suffix}")
        if entry.named:
            base = relative_import_base(from_directories, parts)
            statements.append(f"from {base} import {_format_names(entry.named)}")
        return statements


def _alias_key(alias: Optional[str]) -> str:
    return alias or ""


def _format_names(names: Set[Tuple[str, Optional[str]]]) -> str:
    ordered = sorted(names, key=lambda item: (item[0], item[1] or ""))
    return ", ".join(name if alias is None else f"{name} as {alias}" for name, alias in ordered)
