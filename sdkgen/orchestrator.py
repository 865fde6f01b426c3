"""
SDK generation orchestrator.

SdkGenerator drives one generation run through its states:

    INIT -> GENERATING_TYPES -> GENERATING_ERRORS -> GENERATING_SERVICES
         -> GENERATING_ENVIRONMENT -> FINALIZING -> PACKAGING -> DONE

Every entity is rendered into a primary/schema file pair opened through the
referencers. Files are kept in memory until packaging; a file that receives
no statements is dropped instead of being written empty.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Union

from .core.config import GeneratorConfig
from .core.context import GenerationContext, SdkFile, ViewReferencers
from .core.dependencies import Dependency, DependencyManager
from .core.errors import InvalidGeneratorStateError
from .core.exports import ExportsManager
from .core.files import SourceFile, VirtualFileTree
from .core.paths import ExportDeclaration, ExportedDirectory, ExportedFilePath, View
from .core.referencers import (
    DeclarationReferencer,
    EndpointDeclarationReferencer,
    ErrorDeclarationReferencer,
    RootServiceDeclarationReferencer,
    ServiceDeclarationReferencer,
    TypeDeclarationReferencer,
)
from .core.resolvers import ErrorResolver, TypeResolver
from .core.services import construct_augmented_services
from .generators.base import DeclarationRenderer
from .generators.registry import get_renderers
from .ir.model import IntermediateRepresentation
from .logging_config import get_logger
from .utilities.catalog import CoreUtilityDescriptor
from .utilities.manager import CoreUtilitiesManager

logger = get_logger(__name__)


class GenerationState(Enum):
    """States of one generation run, in order."""

    INIT = "init"
    GENERATING_TYPES = "generating_types"
    GENERATING_ERRORS = "generating_errors"
    GENERATING_SERVICES = "generating_services"
    GENERATING_ENVIRONMENT = "generating_environment"
    FINALIZING = "finalizing"
    PACKAGING = "packaging"
    DONE = "done"


_STATE_ORDER = list(GenerationState)


@dataclass
class GeneratedPackage:
    """Everything the packaging step needs: files, dependencies and metadata."""

    package_name: str
    package_version: str
    api_name: str
    files: VirtualFileTree
    dependencies: Dict[str, Dependency]
    used_utilities: List[CoreUtilityDescriptor]
    root_client_name: Optional[str] = None
    root_client_module: Optional[str] = None
    repository_url: Optional[str] = None
    description: Optional[str] = None
    python_version: str = ">=3.9"
    skipped_files: List[str] = field(default_factory=list)
    output_path: Optional[Path] = None


class SdkGenerator:
    """
    Generates a client package from an IR.

    Args:
        ir: The API to generate
        config: Generator configuration; defaults apply when omitted
        renderers: Renderer per entity kind; the registry's defaults when omitted
        catalog: Core utility catalog; the bundled one when omitted
        package_writer: Collaborator persisting the package; nothing is
            written to disk when omitted
    """

    def __init__(
        self,
        ir: IntermediateRepresentation,
        config: Optional[GeneratorConfig] = None,
        *,
        renderers: Optional[Dict[str, DeclarationRenderer]] = None,
        catalog: Optional[Dict[str, CoreUtilityDescriptor]] = None,
        package_writer: Any = None,
    ):
        self.ir = ir
        self.config = config or GeneratorConfig()
        self.api_name = self.config.api_name or ir.api_name
        self.renderers = renderers if renderers is not None else get_renderers()
        self.package_writer = package_writer

        self.root_directory = VirtualFileTree()
        self.exports_manager = ExportsManager()
        self.dependency_manager = DependencyManager(strict=self.config.strict_dependencies)
        self.core_utilities_manager = CoreUtilitiesManager(
            catalog, core_directory=self.config.core_directory
        )

        self.referencers: Dict[View, ViewReferencers] = {
            View.PRIMARY: self._create_referencers(
                View.PRIMARY,
                ExportedDirectory(self.config.resources_directory, ExportDeclaration.all()),
                namespace_import=None,
            ),
            View.SCHEMA: self._create_referencers(
                View.SCHEMA,
                ExportedDirectory(
                    self.config.schema_directory,
                    ExportDeclaration.namespace(self.config.schema_directory),
                ),
                namespace_import=self.config.schema_namespace_import,
            ),
        }

        self.context = GenerationContext(
            ir=ir,
            config=self.config,
            type_resolver=TypeResolver(ir),
            error_resolver=ErrorResolver(ir),
            referencers=self.referencers,
            core_utilities_manager=self.core_utilities_manager,
            dependency_manager=self.dependency_manager,
            open_file_pair=self._with_file_pair,
            environments_generator=self.renderers.get("environments"),
        )

        self.state = GenerationState.INIT
        self.skipped_files: List[str] = []
        self._root_client_filepath: Optional[ExportedFilePath] = None

    def _create_referencers(
        self, view: View, root: ExportedDirectory, namespace_import: Optional[str]
    ) -> ViewReferencers:
        options = {
            "containing_directory": (root,),
            "view": view,
            "namespace_import": namespace_import,
        }
        # The primary root client sits at the package root
        root_directory = () if view == View.PRIMARY else (root,)
        return ViewReferencers(
            type=TypeDeclarationReferencer(**options),
            error=ErrorDeclarationReferencer(**options),
            service=ServiceDeclarationReferencer(**options),
            root_service=RootServiceDeclarationReferencer(
                api_name=self.api_name,
                containing_directory=root_directory,
                view=view,
                namespace_import=namespace_import,
            ),
            endpoint=EndpointDeclarationReferencer(**options),
        )

    # State machine

    def _transition(self, state: GenerationState) -> None:
        expected = _STATE_ORDER[_STATE_ORDER.index(state) - 1]
        if self.state != expected:
            raise InvalidGeneratorStateError(
                f"Cannot enter {state.value} from {self.state.value}"
            )
        logger.info("Generation state: %s -> %s", self.state.value, state.value)
        self.state = state

    def generate(self, output_dir: Optional[Union[str, Path]] = None) -> GeneratedPackage:
        """
        Run the whole pipeline once.

        Args:
            output_dir: Where the package writer persists the package; falls
                back to ``config.output_dir``

        Returns:
            The generated package

        Raises:
            GeneratorError: On any fatal condition; nothing is written then
        """
        if self.state != GenerationState.INIT:
            raise InvalidGeneratorStateError("An SdkGenerator can only run once")

        self._transition(GenerationState.GENERATING_TYPES)
        self._generate_type_declarations()

        self._transition(GenerationState.GENERATING_ERRORS)
        self._generate_error_declarations()

        self._transition(GenerationState.GENERATING_SERVICES)
        self._generate_service_declarations()

        self._transition(GenerationState.GENERATING_ENVIRONMENT)
        self._generate_environments()

        self._transition(GenerationState.FINALIZING)
        self.core_utilities_manager.finalize(self.exports_manager, self.dependency_manager)
        self.exports_manager.write_exports_to_root(self.root_directory, self.config.file_header)

        self._transition(GenerationState.PACKAGING)
        package = self._build_package()
        output_dir = output_dir or self.config.output_dir
        if self.package_writer is not None and output_dir:
            package.output_path = self.package_writer.write(
                package, Path(output_dir), self.core_utilities_manager
            )

        self._transition(GenerationState.DONE)
        logger.info(
            "Generated %d files (%d skipped, %d core utilities)",
            len(self.root_directory),
            len(self.skipped_files),
            len(package.used_utilities),
        )
        return package

    def _build_package(self) -> GeneratedPackage:
        root_client = self._root_client_filepath
        root_referencer = self.referencers[View.PRIMARY].root_service
        has_root_client = root_client is not None and self.root_directory.exists(root_client.to_filepath())
        return GeneratedPackage(
            package_name=self.config.package_name,
            package_version=self.config.package_version,
            api_name=self.api_name,
            files=self.root_directory,
            dependencies=self.dependency_manager.get_dependencies(),
            used_utilities=[
                self.core_utilities_manager.catalog[name]
                for name in self.core_utilities_manager.used_utilities
            ],
            root_client_name=root_referencer.get_exported_name() if has_root_client else None,
            root_client_module=".".join(root_client.module_parts) if has_root_client else None,
            repository_url=self.config.repository_url,
            description=self.ir.docs,
            python_version=self.config.python_version,
            skipped_files=list(self.skipped_files),
        )

    # Entity passes

    def _generate_type_declarations(self) -> None:
        renderer = self.renderers["type"]
        for declaration in self.ir.types:
            self._with_file_pair(
                self.referencers[View.PRIMARY].type,
                self.referencers[View.SCHEMA].type,
                declaration.name,
                lambda type_file: renderer.render(declaration, type_file),
            )

    def _generate_error_declarations(self) -> None:
        renderer = self.renderers["error"]
        for declaration in self.ir.errors:
            self._with_file_pair(
                self.referencers[View.PRIMARY].error,
                self.referencers[View.SCHEMA].error,
                declaration.name,
                lambda error_file: renderer.render(declaration, error_file),
            )

    def _generate_service_declarations(self) -> None:
        renderer = self.renderers["service"]
        for service in construct_augmented_services(self.ir):
            primary = self.referencers[View.PRIMARY]
            schema = self.referencers[View.SCHEMA]
            if service.is_root:
                primary_referencer, schema_referencer = primary.root_service, schema.root_service
                self._root_client_filepath = primary_referencer.get_exported_filepath(service.name)
            else:
                primary_referencer, schema_referencer = primary.service, schema.service
            self._with_file_pair(
                primary_referencer,
                schema_referencer,
                service.name,
                lambda service_file: renderer.render(service, service_file),
                service_name=service.name,
            )

    def _generate_environments(self) -> None:
        generator = self.renderers.get("environments")
        if generator is None:
            return
        sdk_file = self._open(generator.get_filepath(), View.PRIMARY)
        generator.render_primary(self.ir.environments, sdk_file)
        # An API without environments legitimately renders nothing
        self._close(sdk_file, warn_if_empty=False)

    # Files

    def _with_file_pair(
        self,
        primary_referencer: DeclarationReferencer,
        schema_referencer: DeclarationReferencer,
        name: Any,
        run: Callable[[SdkFile], None],
        *,
        service_name=None,
    ) -> None:
        """Open the primary and schema files of ``name`` as a linked pair and run ``run``."""
        primary = self._open(primary_referencer.get_exported_filepath(name), View.PRIMARY, service_name)
        schema = self._open(schema_referencer.get_exported_filepath(name), View.SCHEMA, service_name)
        primary.twin = schema

        run(primary)

        self._close(primary)
        self._close(schema)

    def _open(self, filepath: ExportedFilePath, view: View, service_name=None) -> SdkFile:
        logger.debug("Generating %s", filepath)
        return SdkFile(self.context, SourceFile(filepath), view, service_name=service_name)

    def _close(self, sdk_file: SdkFile, *, warn_if_empty: bool = True) -> None:
        source_file = sdk_file.source_file
        if source_file.is_empty():
            self.skipped_files.append(source_file.path)
            if sdk_file.view == View.PRIMARY and warn_if_empty:
                logger.warning("Skipping %s: renderer produced no content", source_file.path)
            else:
                logger.debug("Skipping %s (no content)", source_file.path)
            return

        text = source_file.finalize(self.config.file_header, sdk_file.imports_manager.finalize())
        self.root_directory.write(source_file.path, text)
        self.exports_manager.add_exports_for_filepath(source_file.filepath, source_file.exported_names)
        logger.debug("Generated %s", source_file.path)


def generate_sdk(
    ir: IntermediateRepresentation,
    config: Optional[GeneratorConfig] = None,
    output_dir: Optional[Union[str, Path]] = None,
) -> GeneratedPackage:
    """
    Convenience function: generate a package and, with ``output_dir``, write it.

    Args:
        ir: The API to generate
        config: Generator configuration
        output_dir: Directory receiving the package

    Returns:
        The generated package
    """
    from .packaging import PackageWriter

    generator = SdkGenerator(ir, config, package_writer=PackageWriter())
    return generator.generate(output_dir)
