"""
Typed accessors over core utilities.

A handle is bound to one generated module. Each accessor returns a Python
expression and requests the import it needs on that module's ImportsManager,
so a utility is only imported where it is actually used.
"""

from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from ..core.imports import ImportsManager
from ..core.paths import ExportedFilePath, directory_path
from .catalog import CoreUtilityDescriptor


class CoreUtility:
    """Generic handle: references any exported name of a utility."""

    def __init__(
        self,
        descriptor: CoreUtilityDescriptor,
        *,
        core_directory: str,
        referenced_in: ExportedFilePath,
        imports_manager: ImportsManager,
    ):
        self.descriptor = descriptor
        self.core_directory = core_directory
        self.referenced_in = referenced_in
        self.imports_manager = imports_manager

    @property
    def exported_names(self) -> List[str]:
        return [name for file in self.descriptor.files for name in file.exports]

    def get_reference_to(self, exported_name: str) -> str:
        if exported_name not in self.exported_names:
            raise KeyError(f"{self.descriptor.name} does not export {exported_name}")
        core = directory_path((self.core_directory,))
        namespace = self.descriptor.export_declaration.namespace_export
        if namespace is not None:
            self.imports_manager.add_import(core, named=namespace)
            return f"{namespace}.{exported_name}"
        self.imports_manager.add_import(core, named=exported_name)
        return exported_name


class SchemasUtility(CoreUtility):
    """Builds schema expressions, e.g. ``schemas.list_(schemas.string())``."""

    PRIMITIVES = {
        "STRING": "string",
        "INTEGER": "integer",
        "LONG": "integer",
        "DOUBLE": "double",
        "BOOLEAN": "boolean",
        "DATE_TIME": "date_time",
        "UUID": "uuid",
    }

    def _call(self, function: str, *args: str) -> str:
        return f"{self.get_reference_to(function)}({', '.join(args)})"

    def primitive(self, primitive_name: str) -> str:
        return self._call(self.PRIMITIVES[primitive_name])

    def string(self) -> str:
        return self._call("string")

    def unknown(self) -> str:
        return self._call("unknown")

    def list_(self, item: str) -> str:
        return self._call("list_", item)

    def set_(self, item: str) -> str:
        return self._call("set_", item)

    def optional(self, item: str) -> str:
        return self._call("optional", item)

    def dict_(self, key: str, value: str) -> str:
        return self._call("dict_", key, value)

    def object_(self, properties: Sequence[Tuple[str, str, str]]) -> str:
        """Object schema from ``(python_name, wire_key, schema)`` triples."""
        if not properties:
            return self._call("object_", "{}")
        prop = self.get_reference_to("property")
        lines = [f"    {python!r}: {prop}({wire!r}, {schema})," for python, wire, schema in properties]
        return self._call("object_", "\n".join(["{"] + lines + ["}"]))

    def extend(self, schema: str, parents: Iterable[str]) -> str:
        for parent in parents:
            schema = f"{schema}.extend({parent})"
        return schema

    def enum_(self, wire_values: Sequence[str]) -> str:
        return self._call("enum_", "[" + ", ".join(repr(value) for value in wire_values) + "]")

    def union(self, discriminant: str, variants: Dict[str, str], python_key: Optional[str] = None) -> str:
        members = ", ".join(f"{value!r}: {schema}" for value, schema in variants.items())
        args = [repr(discriminant), "{" + members + "}"]
        if python_key is not None and python_key != discriminant:
            args.append(repr(python_key))
        return self._call("union", *args)

    def lazy(self, expression: str) -> str:
        return self._call("lazy", f"lambda: {expression}")

    def lazy_object(self, expression: str) -> str:
        return self._call("lazy_object", f"lambda: {expression}")


class HttpClientUtility(CoreUtility):
    def client_class(self) -> str:
        return self.get_reference_to("HttpClient")

    def api_error(self) -> str:
        return self.get_reference_to("ApiError")

    def instantiate(self, *, base_url: str, headers: str, timeout: str = "60") -> str:
        return f"{self.client_class()}(base_url={base_url}, headers={headers}, timeout={timeout})"


class AuthUtility(CoreUtility):
    def bearer_header(self, token: str) -> str:
        return f"{self.get_reference_to('bearer_auth_header')}({token})"

    def basic_header(self, username: str, password: str) -> str:
        return f"{self.get_reference_to('basic_auth_header')}({username}, {password})"


HANDLE_CLASSES = {
    "schemas": SchemasUtility,
    "http-client": HttpClientUtility,
    "auth": AuthUtility,
}
