"""
Core generation components.

Naming, locations, references, imports, exports and dependency bookkeeping
shared by every renderer.
"""

from .errors import (
    AmbiguousExportError,
    CyclicUtilityDependencyError,
    DependencyVersionConflictError,
    GeneratorError,
    InvalidGeneratorStateError,
    IRLoadError,
    UnknownDeclarationError,
)
from .paths import ExportDeclaration, ExportedDirectory, ExportedFile, ExportedFilePath, View
from .naming import NameSanitizer, NamingCase
from .config import GeneratorConfig, ConfigManager, ConfigError, load_config
from .templates import TemplateEngine, TemplateError, create_template_engine
from .imports import ImportsManager
from .exports import ExportsManager
from .dependencies import Dependency, DependencyManager
from .files import SourceFile, VirtualFileTree
from .referencers import ImportStrategy, Reference
from .resolvers import ErrorResolver, ResolvedType, TypeResolver
from .context import LazyWrapper, SdkFile, get_lazy_wrapper

__all__ = [
    # Errors
    "AmbiguousExportError",
    "CyclicUtilityDependencyError",
    "DependencyVersionConflictError",
    "GeneratorError",
    "InvalidGeneratorStateError",
    "IRLoadError",
    "UnknownDeclarationError",
    # Locations and references
    "ExportDeclaration",
    "ExportedDirectory",
    "ExportedFile",
    "ExportedFilePath",
    "View",
    "ImportStrategy",
    "Reference",
    # Naming
    "NameSanitizer",
    "NamingCase",
    # Configuration
    "GeneratorConfig",
    "ConfigManager",
    "ConfigError",
    "load_config",
    # Templates
    "TemplateEngine",
    "TemplateError",
    "create_template_engine",
    # Bookkeeping
    "ImportsManager",
    "ExportsManager",
    "Dependency",
    "DependencyManager",
    "SourceFile",
    "VirtualFileTree",
    # Lookups and per-file context
    "ErrorResolver",
    "ResolvedType",
    "TypeResolver",
    "LazyWrapper",
    "SdkFile",
    "get_lazy_wrapper",
]
