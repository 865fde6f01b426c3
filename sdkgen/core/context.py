"""
Per-file generation context.

Renderers receive an SdkFile for the module they are writing. It bundles the
run-wide lookups (resolvers, referencers, managers) with the state owned by
that one module (its SourceFile and ImportsManager), and hands out references
that already carry their imports.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Sequence

from ..ir.model import (
    Constants,
    DeclaredName,
    HttpEndpoint,
    IntermediateRepresentation,
    ShapeType,
)
from .auth import ParsedAuthScheme, parse_auth_schemes
from .config import GeneratorConfig
from .dependencies import DependencyManager, ExternalDependencies
from .files import SourceFile
from .imports import ImportsManager
from .paths import ExportedFilePath, View
from .referencers import (
    EndpointDeclarationReferencer,
    EndpointName,
    ErrorDeclarationReferencer,
    ImportStrategy,
    Reference,
    RootServiceDeclarationReferencer,
    ServiceDeclarationReferencer,
    TypeDeclarationReferencer,
)
from .resolvers import ErrorResolver, TypeResolver


class LazyWrapper(Enum):
    """Deferred accessor wrapped around a schema reference."""

    NONE = "none"
    LAZY = "lazy"
    LAZY_OBJECT = "lazy_object"


def get_lazy_wrapper(
    current_view: View, target_view: View, shape: Optional[ShapeType]
) -> LazyWrapper:
    """
    Decide how a reference from a ``current_view`` file to a ``target_view``
    declaration is wrapped.

    Only schema-to-schema references are deferred. Objects keep their
    property introspection through ``lazy_object``; any other shape, and
    errors (``shape=None``), use ``lazy``.
    """
    if current_view != View.SCHEMA or target_view != View.SCHEMA:
        return LazyWrapper.NONE
    if shape == ShapeType.OBJECT:
        return LazyWrapper.LAZY_OBJECT
    return LazyWrapper.LAZY


@dataclass
class ViewReferencers:
    """The referencers locating every entity kind in one view."""

    type: TypeDeclarationReferencer
    error: ErrorDeclarationReferencer
    service: ServiceDeclarationReferencer
    root_service: RootServiceDeclarationReferencer
    endpoint: EndpointDeclarationReferencer


@dataclass
class GenerationContext:
    """Run-wide state shared by every SdkFile of one generation."""

    ir: IntermediateRepresentation
    config: GeneratorConfig
    type_resolver: TypeResolver
    error_resolver: ErrorResolver
    referencers: Dict[View, ViewReferencers]
    core_utilities_manager: Any
    dependency_manager: DependencyManager
    open_file_pair: Optional[Callable] = None
    environments_generator: Any = None


class SdkFile:
    """Context handed to a renderer for one generated module.

    Args:
        context: Run-wide generation state
        source_file: The module being written
        view: View of the module
        service_name: Owning service, for service and endpoint files
    """

    def __init__(
        self,
        context: GenerationContext,
        source_file: SourceFile,
        view: View,
        *,
        service_name: Optional[DeclaredName] = None,
    ):
        self.context = context
        self.source_file = source_file
        self.view = view
        self.service_name = service_name
        self.imports_manager = ImportsManager(source_file.filepath)
        self.twin: Optional["SdkFile"] = None
        self._core_utilities = None
        self._auth_schemes: Optional[List[ParsedAuthScheme]] = None

    @property
    def filepath(self) -> ExportedFilePath:
        return self.source_file.filepath

    @property
    def ir(self) -> IntermediateRepresentation:
        return self.context.ir

    @property
    def config(self) -> GeneratorConfig:
        return self.context.config

    @property
    def type_resolver(self) -> TypeResolver:
        return self.context.type_resolver

    @property
    def error_resolver(self) -> ErrorResolver:
        return self.context.error_resolver

    @property
    def api_name(self) -> str:
        return self.config.api_name or self.ir.api_name

    @property
    def constants(self) -> Constants:
        return self.context.ir.constants

    @property
    def core_utilities(self):
        if self._core_utilities is None:
            self._core_utilities = self.context.core_utilities_manager.for_file(
                self.filepath, self.imports_manager
            )
        return self._core_utilities

    @property
    def external_dependencies(self) -> ExternalDependencies:
        return ExternalDependencies(self.context.dependency_manager, self.imports_manager)

    @property
    def auth_schemes(self) -> List[ParsedAuthScheme]:
        if self._auth_schemes is None:
            self._auth_schemes = parse_auth_schemes(self.ir.auth, self.core_utilities)
        return self._auth_schemes

    @property
    def environments(self):
        """Parsed environments usable from this file, or None when the API has none."""
        generator = self.context.environments_generator
        if generator is None:
            return None
        return generator.to_parsed_environments(self)

    def add_statement(self, code: str, *, exports: Sequence[str] = ()) -> None:
        self.source_file.add_statement(code, exports=tuple(exports))

    def import_module(self, module: str, *, alias: Optional[str] = None) -> str:
        """Import a standard library module and return its local name."""
        self.imports_manager.add_import(module, namespace=True, alias=alias)
        return alias or module

    def _strategy(self, referencer) -> ImportStrategy:
        return ImportStrategy.from_root(referencer.namespace_import)

    def get_reference_to_type(
        self,
        name: DeclaredName,
        *,
        view: Optional[View] = None,
        import_strategy: Optional[ImportStrategy] = None,
    ) -> str:
        """
        Reference a declared type (or its schema) from this file.

        Schema references made from schema files are wrapped lazily.
        """
        view = view or self.view
        referencer = self.context.referencers[view].type
        reference = referencer.get_reference_to(
            name,
            import_strategy=import_strategy or self._strategy(referencer),
            referenced_in=self.filepath,
            imports_manager=self.imports_manager,
        )
        resolved = self.type_resolver.resolve_type_name(name)
        shape = resolved.shape if resolved.type == "named" else None
        return self._wrap(reference.qualified_name, get_lazy_wrapper(self.view, view, shape))

    def get_reference_to_error(
        self,
        name: DeclaredName,
        *,
        view: Optional[View] = None,
        import_strategy: Optional[ImportStrategy] = None,
    ) -> str:
        self.error_resolver.get_error_declaration(name)
        view = view or self.view
        referencer = self.context.referencers[view].error
        reference = referencer.get_reference_to(
            name,
            import_strategy=import_strategy or self._strategy(referencer),
            referenced_in=self.filepath,
            imports_manager=self.imports_manager,
        )
        return self._wrap(reference.qualified_name, get_lazy_wrapper(self.view, view, None))

    def get_reference_to_service(self, name: DeclaredName, *, alias: Optional[str] = None) -> Reference:
        """Reference a service client; the empty path is the root client."""
        referencers = self.context.referencers[View.PRIMARY]
        referencer = referencers.root_service if not name.fern_filepath else referencers.service
        return referencer.get_reference_to(
            name,
            import_strategy=ImportStrategy.direct(alias),
            referenced_in=self.filepath,
            imports_manager=self.imports_manager,
        )

    def get_reference_to_endpoint(
        self,
        endpoint: HttpEndpoint,
        *,
        service_name: Optional[DeclaredName] = None,
        view: Optional[View] = None,
        sub_import: Sequence[str] = (),
        alias: Optional[str] = None,
    ) -> str:
        """Reference an endpoint module, or a member of it via ``sub_import``."""
        view = view or self.view
        owner = service_name or self.service_name
        if owner is None:
            raise ValueError("Endpoint references need an owning service")
        referencer = self.context.referencers[view].endpoint
        return referencer.get_reference_to(
            EndpointName(owner, endpoint),
            import_strategy=ImportStrategy.direct(alias),
            referenced_in=self.filepath,
            imports_manager=self.imports_manager,
            sub_import=sub_import,
        ).qualified_name

    def with_endpoint(self, endpoint: HttpEndpoint, run: Callable[["SdkFile"], None]) -> None:
        """Open the primary/schema pair of ``endpoint`` and render it with ``run``."""
        if self.service_name is None or self.context.open_file_pair is None:
            raise ValueError("with_endpoint is only available in service files")
        self.context.open_file_pair(
            self.context.referencers[View.PRIMARY].endpoint,
            self.context.referencers[View.SCHEMA].endpoint,
            EndpointName(self.service_name, endpoint),
            run,
            service_name=self.service_name,
        )

    def _wrap(self, expression: str, wrapper: LazyWrapper) -> str:
        if wrapper == LazyWrapper.NONE:
            return expression
        schemas = self.core_utilities.schemas
        if wrapper == LazyWrapper.LAZY_OBJECT:
            return schemas.lazy_object(expression)
        return schemas.lazy(expression)
