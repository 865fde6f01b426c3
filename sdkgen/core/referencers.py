"""
Canonical locations and names of declared entities.

A referencer maps an entity identifier to the module it is generated into and
the name it is exported under, and builds references to it from other
modules. One referencer class serves both views; the view and the containing
directory are configuration, so the primary and schema locations of an entity
differ only in their root directory.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Generic, Optional, Sequence, Tuple, TypeVar

from ..ir.model import DeclaredName, HttpEndpoint
from .imports import ImportsManager
from .naming import class_name, module_name
from .paths import (
    ExportDeclaration,
    ExportedDirectory,
    ExportedFile,
    ExportedFilePath,
    View,
    directory_path,
)

N = TypeVar("N")


@dataclass(frozen=True)
class ImportStrategy:
    """How a reference reaches its target.

    ``from_root`` imports the view's root module as a namespace and walks the
    barrel chain; ``direct`` imports straight from the target module.
    """

    type: str
    namespace_import: Optional[str] = None
    alias: Optional[str] = None

    @classmethod
    def from_root(cls, namespace_import: Optional[str] = None) -> "ImportStrategy":
        return cls(type="from_root", namespace_import=namespace_import)

    @classmethod
    def direct(cls, alias: Optional[str] = None) -> "ImportStrategy":
        return cls(type="direct", alias=alias)


@dataclass(frozen=True)
class Reference:
    """A usable expression for an entity inside one generated module."""

    qualified_name: str
    filepath: ExportedFilePath
    imported: bool

    def __str__(self) -> str:
        return self.qualified_name


@dataclass(frozen=True)
class EndpointName:
    """Identifier of an endpoint: its service plus the endpoint itself."""

    service_name: DeclaredName
    endpoint: HttpEndpoint


class DeclarationReferencer(ABC, Generic[N]):
    """Base class of all referencers.

    Args:
        containing_directory: Root directories of the view (e.g. ``resources``)
        view: Which view this referencer locates
        namespace_import: Alias used when importing the view root as a namespace
    """

    def __init__(
        self,
        *,
        containing_directory: Sequence[ExportedDirectory],
        view: View = View.PRIMARY,
        namespace_import: Optional[str] = None,
    ):
        self.containing_directory: Tuple[ExportedDirectory, ...] = tuple(containing_directory)
        self.view = view
        self.namespace_import = namespace_import

    @abstractmethod
    def get_filename(self, name: N) -> str:
        """Module name (without suffix) of the entity's file."""

    @abstractmethod
    def get_exported_name(self, name: N) -> str:
        """Public name of the entity inside its module."""

    def get_file_export_declaration(self, name: N) -> ExportDeclaration:
        return ExportDeclaration.all()

    def get_subdirectories(self, name: N) -> Tuple[ExportedDirectory, ...]:
        return ()

    def get_namespace_directories(self, fern_filepath: Sequence[str]) -> Tuple[ExportedDirectory, ...]:
        """One namespace-exported directory per fern_filepath segment."""
        return tuple(
            ExportedDirectory(
                module_name(segment), ExportDeclaration.namespace(module_name(segment))
            )
            for segment in fern_filepath
        )

    @abstractmethod
    def _get_fern_filepath(self, name: N) -> Sequence[str]:
        pass

    def get_exported_filepath(self, name: N) -> ExportedFilePath:
        directories = (
            self.containing_directory
            + self.get_namespace_directories(self._get_fern_filepath(name))
            + self.get_subdirectories(name)
        )
        return ExportedFilePath(
            directories=directories,
            file=ExportedFile(self.get_filename(name), self.get_file_export_declaration(name)),
        )

    def get_reference_to(
        self,
        name: N,
        *,
        import_strategy: ImportStrategy,
        referenced_in: ExportedFilePath,
        imports_manager: ImportsManager,
        sub_import: Sequence[str] = (),
    ) -> Reference:
        """
        Build a reference to ``name`` usable inside ``referenced_in``.

        Any needed import is requested on ``imports_manager``; the referencer
        itself holds no state.
        """
        filepath = self.get_exported_filepath(name)
        exported_name = self.get_exported_name(name)
        is_namespace_file = filepath.file.export_declaration.namespace_export is not None

        if filepath.module_parts == referenced_in.module_parts:
            if is_namespace_file:
                parts = list(sub_import) or [exported_name]
            else:
                parts = [exported_name, *sub_import]
            return Reference(".".join(parts), filepath, imported=False)

        if import_strategy.type == "from_root" and self.containing_directory:
            parts = self._import_from_root(filepath, exported_name, import_strategy, imports_manager)
        else:
            parts = self._import_direct(filepath, exported_name, import_strategy, imports_manager)

        return Reference(".".join(parts + list(sub_import)), filepath, imported=True)

    def _import_from_root(
        self,
        filepath: ExportedFilePath,
        exported_name: str,
        import_strategy: ImportStrategy,
        imports_manager: ImportsManager,
    ) -> list:
        root = directory_path(tuple(d.name_on_disk for d in self.containing_directory))
        alias = import_strategy.namespace_import or self.namespace_import
        imports_manager.add_import(root, namespace=True, alias=alias)

        parts = [alias or root.directory_names[-1]]
        for directory in filepath.directories[len(self.containing_directory):]:
            if directory.namespace is not None:
                parts.append(directory.namespace)
        namespace = filepath.file.export_declaration.namespace_export
        parts.append(namespace if namespace is not None else exported_name)
        return parts

    def _import_direct(
        self,
        filepath: ExportedFilePath,
        exported_name: str,
        import_strategy: ImportStrategy,
        imports_manager: ImportsManager,
    ) -> list:
        alias = import_strategy.alias
        if filepath.file.export_declaration.namespace_export is not None:
            imports_manager.add_import(filepath, namespace=True, alias=alias)
            return [alias or filepath.file.name_on_disk]
        imports_manager.add_import(filepath, named=exported_name, alias=alias)
        return [alias or exported_name]


class TypeDeclarationReferencer(DeclarationReferencer[DeclaredName]):
    """Types live in ``<root>/<namespaces>/types/<type>.py``."""

    def _get_fern_filepath(self, name: DeclaredName) -> Sequence[str]:
        return name.fern_filepath

    def get_subdirectories(self, name: DeclaredName) -> Tuple[ExportedDirectory, ...]:
        return (ExportedDirectory("types", ExportDeclaration.all()),)

    def get_filename(self, name: DeclaredName) -> str:
        return module_name(name.name)

    def get_exported_name(self, name: DeclaredName) -> str:
        return class_name(name.name)


class ErrorDeclarationReferencer(DeclarationReferencer[DeclaredName]):
    """Errors live in ``<root>/<namespaces>/errors/<error>.py``."""

    def _get_fern_filepath(self, name: DeclaredName) -> Sequence[str]:
        return name.fern_filepath

    def get_subdirectories(self, name: DeclaredName) -> Tuple[ExportedDirectory, ...]:
        return (ExportedDirectory("errors", ExportDeclaration.all()),)

    def get_filename(self, name: DeclaredName) -> str:
        return module_name(name.name)

    def get_exported_name(self, name: DeclaredName) -> str:
        return class_name(name.name)


class ServiceDeclarationReferencer(DeclarationReferencer[DeclaredName]):
    """Nested service clients live in ``<root>/<namespaces>/client/client.py``.

    Every nested client is exported as ``Client``; the namespace tells them apart.
    """

    CLIENT_CLASS_NAME = "Client"

    def _get_fern_filepath(self, name: DeclaredName) -> Sequence[str]:
        return name.fern_filepath

    def get_subdirectories(self, name: DeclaredName) -> Tuple[ExportedDirectory, ...]:
        return (ExportedDirectory("client", ExportDeclaration.all()),)

    def get_filename(self, name: DeclaredName) -> str:
        return "client"

    def get_exported_name(self, name: DeclaredName = None) -> str:
        return self.CLIENT_CLASS_NAME


class RootServiceDeclarationReferencer(DeclarationReferencer[DeclaredName]):
    """The root client lives in ``client.py`` at the package root."""

    def __init__(self, *, api_name: str, **kwargs):
        kwargs.setdefault("containing_directory", ())
        super().__init__(**kwargs)
        self.api_name = api_name

    def _get_fern_filepath(self, name: DeclaredName) -> Sequence[str]:
        return ()

    def get_filename(self, name: DeclaredName = None) -> str:
        return "client"

    def get_exported_name(self, name: DeclaredName = None) -> str:
        return f"{class_name(self.api_name)}Client"

    def get_exported_filepath(self, name: DeclaredName = None) -> ExportedFilePath:
        return super().get_exported_filepath(name)


class EndpointDeclarationReferencer(DeclarationReferencer[EndpointName]):
    """Endpoint helpers live in ``<root>/<namespaces>/client/endpoints/<endpoint>.py``.

    Each endpoint module is exported as a namespace; its members (``Request``,
    ``Response``, ``Error``) are reached through ``sub_import``.
    """

    def _get_fern_filepath(self, name: EndpointName) -> Sequence[str]:
        return name.service_name.fern_filepath

    def get_subdirectories(self, name: EndpointName) -> Tuple[ExportedDirectory, ...]:
        return (
            ExportedDirectory("client", ExportDeclaration.all()),
            ExportedDirectory("endpoints", ExportDeclaration.namespace("endpoints")),
        )

    def get_filename(self, name: EndpointName) -> str:
        return module_name(name.endpoint.name)

    def get_file_export_declaration(self, name: EndpointName) -> ExportDeclaration:
        return ExportDeclaration.namespace(self.get_filename(name))

    def get_exported_name(self, name: EndpointName) -> str:
        return self.get_filename(name)
