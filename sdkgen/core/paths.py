"""
Locations of generated files.

An ExportedFilePath is the canonical location of one generated module: the
directories leading to it and the file itself, each carrying how its parent
barrel re-exports it.
"""

from dataclasses import dataclass, field
from typing import Optional, Tuple
from enum import Enum


class View(Enum):
    """Which of the two parallel declarations of an entity is meant."""

    PRIMARY = "primary"
    SCHEMA = "schema"


@dataclass(frozen=True)
class ExportDeclaration:
    """How a parent barrel re-exports a child.

    ``export_all`` re-exports the child's public names flat into the parent;
    ``namespace_export`` binds the child module under the given name.
    """

    export_all: bool = False
    namespace_export: Optional[str] = None

    def __post_init__(self):
        if self.export_all and self.namespace_export:
            raise ValueError("An export declaration is either export_all or a namespace")

    @classmethod
    def all(cls) -> "ExportDeclaration":
        return cls(export_all=True)

    @classmethod
    def namespace(cls, name: str) -> "ExportDeclaration":
        return cls(namespace_export=name)


@dataclass(frozen=True)
class ExportedDirectory:
    """A directory on the path of a generated file."""

    name_on_disk: str
    export_declaration: Optional[ExportDeclaration] = None

    @property
    def namespace(self) -> Optional[str]:
        """Name this directory contributes to a qualified reference, if any.

        Directories without a declaration behave like a namespace named after
        the directory.
        """
        if self.export_declaration is None:
            return self.name_on_disk
        return self.export_declaration.namespace_export


@dataclass(frozen=True)
class ExportedFile:
    """The leaf module of an ExportedFilePath. ``name_on_disk`` has no suffix."""

    name_on_disk: str
    export_declaration: ExportDeclaration = field(default_factory=ExportDeclaration.all)


@dataclass(frozen=True)
class ExportedFilePath:
    """Canonical location of a generated module."""

    directories: Tuple[ExportedDirectory, ...]
    file: ExportedFile

    def __post_init__(self):
        if not isinstance(self.directories, tuple):
            object.__setattr__(self, "directories", tuple(self.directories))

    @property
    def directory_names(self) -> Tuple[str, ...]:
        return tuple(d.name_on_disk for d in self.directories)

    @property
    def module_parts(self) -> Tuple[str, ...]:
        """Dotted-module segments relative to the package root."""
        if self.file.name_on_disk == "__init__":
            return self.directory_names
        return self.directory_names + (self.file.name_on_disk,)

    def to_filepath(self) -> str:
        """Relative filesystem path, e.g. ``resources/imdb/types/movie.py``."""
        return "/".join(self.directory_names + (f"{self.file.name_on_disk}.py",))

    def __str__(self) -> str:
        return self.to_filepath()


def directory_path(directory_names: Tuple[str, ...]) -> ExportedFilePath:
    """ExportedFilePath of the barrel module of a directory."""
    return ExportedFilePath(
        directories=tuple(ExportedDirectory(name) for name in directory_names),
        file=ExportedFile("__init__"),
    )


def relative_import_base(from_directories: Tuple[str, ...], to_parts: Tuple[str, ...]) -> str:
    """Relative module for ``from <base> import ...`` between two modules.

    ``from_directories`` is the package containing the importing module and
    ``to_parts`` the dotted segments of the imported module, both relative to
    the generated package root.
    """
    common = 0
    for left, right in zip(from_directories, to_parts):
        if left != right:
            break
        common += 1
    dots = "." * (len(from_directories) - common + 1)
    return dots + ".".join(to_parts[common:])
