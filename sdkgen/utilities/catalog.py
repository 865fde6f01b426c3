"""
Static catalog of core utilities.

A core utility is a hand-written set of runtime modules that generated code
can opt into. Its files live under ``assets/<directory>/`` and are copied to
``<package>/core/<directory>/`` only when some generated file uses it.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, Tuple

from ..core.paths import ExportDeclaration

ASSETS_DIRECTORY = Path(__file__).resolve().parent / "assets"


@dataclass(frozen=True)
class UtilityFile:
    """One module contributed by a utility and the names it exports."""

    asset: str
    exports: Tuple[str, ...]

    @property
    def module_name(self) -> str:
        return Path(self.asset).stem


@dataclass(frozen=True)
class CoreUtilityDescriptor:
    """Immutable description of a core utility.

    Args:
        name: Unique catalog key (e.g. ``http-client``)
        directory: Directory name under ``core/`` and under the assets root
        files: Modules contributed by the utility
        depends_on: Names of other utilities it imports
        dependencies: External ``(package, version)`` requirements
        export_declaration: How ``core/__init__.py`` re-exports it
    """

    name: str
    directory: str
    files: Tuple[UtilityFile, ...]
    depends_on: Tuple[str, ...] = ()
    dependencies: Tuple[Tuple[str, str], ...] = ()
    export_declaration: ExportDeclaration = field(default_factory=ExportDeclaration.all)
    description: str = ""

    @property
    def asset_directory(self) -> Path:
        return ASSETS_DIRECTORY / self.directory


SCHEMAS = CoreUtilityDescriptor(
    name="schemas",
    directory="schemas",
    files=(
        UtilityFile("schema.py", ("Schema", "SchemaError", "lazy", "lazy_object")),
        UtilityFile(
            "builders.py",
            (
                "boolean",
                "date_time",
                "dict_",
                "double",
                "enum_",
                "integer",
                "list_",
                "object_",
                "optional",
                "property",
                "set_",
                "string",
                "union",
                "unknown",
                "uuid",
            ),
        ),
    ),
    export_declaration=ExportDeclaration.namespace("schemas"),
    description="Value-level schemas that parse and serialize wire JSON",
)

CALLBACK_QUEUE = CoreUtilityDescriptor(
    name="callback-queue",
    directory="callback_queue",
    files=(UtilityFile("callback_queue.py", ("CallbackQueue",)),),
    dependencies=(("anyio", ">=4.0"),),
    description="Serializes async callbacks so only one runs at a time",
)

HTTP_CLIENT = CoreUtilityDescriptor(
    name="http-client",
    directory="http_client",
    files=(UtilityFile("http_client.py", ("ApiError", "HttpClient")),),
    depends_on=("callback-queue",),
    dependencies=(("httpx", ">=0.27"),),
    description="Thin httpx wrapper used by generated service clients",
)

AUTH = CoreUtilityDescriptor(
    name="auth",
    directory="auth",
    files=(UtilityFile("auth.py", ("basic_auth_header", "bearer_auth_header")),),
    description="Header builders for bearer and basic auth",
)


def build_catalog(descriptors: Iterable[CoreUtilityDescriptor]) -> Dict[str, CoreUtilityDescriptor]:
    """Index descriptors by name, rejecting duplicates."""
    catalog: Dict[str, CoreUtilityDescriptor] = {}
    for descriptor in descriptors:
        if descriptor.name in catalog:
            raise ValueError(f"Duplicate core utility: {descriptor.name}")
        catalog[descriptor.name] = descriptor
    return catalog


CORE_UTILITY_CATALOG = build_catalog([SCHEMAS, CALLBACK_QUEUE, HTTP_CLIENT, AUTH])
