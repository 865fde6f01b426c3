"""
Type reference converters.

Each converter turns an IR TypeReference into a Python expression for one
purpose, requesting imports on the SdkFile it is bound to.
"""

from typing import Optional

from ..ir.model import ContainerType, PrimitiveType, ReferenceType, ShapeType, TypeReference
from .paths import View
from .referencers import ImportStrategy

PRIMITIVE_TYPE_HINTS = {
    PrimitiveType.STRING: "str",
    PrimitiveType.INTEGER: "int",
    PrimitiveType.LONG: "int",
    PrimitiveType.DOUBLE: "float",
    PrimitiveType.BOOLEAN: "bool",
    PrimitiveType.UUID: "str",
}


class TypeHintConverter:
    """Primary-view type hints, e.g. ``typing.List[resources.imdb.Movie]``.

    Hints evaluated at import time (aliases, base classes) should pass a
    ``direct`` import strategy.
    """

    def __init__(self, sdk_file, import_strategy: Optional[ImportStrategy] = None):
        self.sdk_file = sdk_file
        self.import_strategy = import_strategy

    def convert(self, reference: TypeReference) -> str:
        if reference.type == ReferenceType.NAMED:
            return self.sdk_file.get_reference_to_type(
                reference.named, view=View.PRIMARY, import_strategy=self.import_strategy
            )
        if reference.type == ReferenceType.PRIMITIVE:
            if reference.primitive == PrimitiveType.DATE_TIME:
                return f"{self.sdk_file.import_module('datetime', alias='dt')}.datetime"
            return PRIMITIVE_TYPE_HINTS[reference.primitive]
        if reference.type == ReferenceType.VOID:
            return "None"
        typing_module = self.sdk_file.import_module("typing")
        if reference.type == ReferenceType.UNKNOWN:
            return f"{typing_module}.Any"
        if reference.container == ContainerType.MAP:
            return (
                f"{typing_module}.Dict[{self.convert(reference.key_type)}, "
                f"{self.convert(reference.value_type)}]"
            )
        generic = {
            ContainerType.LIST: "List",
            ContainerType.SET: "Set",
            ContainerType.OPTIONAL: "Optional",
        }[reference.container]
        return f"{typing_module}.{generic}[{self.convert(reference.item_type)}]"


class SchemaConverter:
    """Schema-view expressions built from the ``schemas`` core utility."""

    def __init__(self, sdk_file):
        self.sdk_file = sdk_file

    @property
    def schemas(self):
        return self.sdk_file.core_utilities.schemas

    def convert(self, reference: TypeReference) -> str:
        if reference.type == ReferenceType.NAMED:
            return self.sdk_file.get_reference_to_type(reference.named, view=View.SCHEMA)
        if reference.type == ReferenceType.PRIMITIVE:
            return self.schemas.primitive(reference.primitive.name)
        if reference.type in (ReferenceType.UNKNOWN, ReferenceType.VOID):
            return self.schemas.unknown()
        if reference.container == ContainerType.MAP:
            return self.schemas.dict_(
                self.convert(reference.key_type), self.convert(reference.value_type)
            )
        builder = {
            ContainerType.LIST: self.schemas.list_,
            ContainerType.SET: self.schemas.set_,
            ContainerType.OPTIONAL: self.schemas.optional,
        }[reference.container]
        return builder(self.convert(reference.item_type))


class StringExpressionConverter:
    """Expressions rendering a value as a string, for paths and query parameters."""

    def __init__(self, sdk_file):
        self.sdk_file = sdk_file

    def convert(self, reference: TypeReference, expression: str) -> str:
        if reference.type == ReferenceType.NAMED:
            resolved = self.sdk_file.type_resolver.resolve_type_name(reference.named)
            if resolved.type == "named" and resolved.shape == ShapeType.ENUM:
                return f"{expression}.value"
            if resolved.type == "primitive":
                return self.convert(resolved.reference, expression)
            return f"str({expression})"
        if reference.type == ReferenceType.PRIMITIVE:
            if reference.primitive in (PrimitiveType.STRING, PrimitiveType.UUID):
                return expression
            if reference.primitive == PrimitiveType.DATE_TIME:
                return f"{expression}.isoformat()"
            if reference.primitive == PrimitiveType.BOOLEAN:
                return f"str({expression}).lower()"
            return f"str({expression})"
        if reference.type == ReferenceType.CONTAINER and reference.container == ContainerType.OPTIONAL:
            return self.convert(reference.item_type, expression)
        return f"str({expression})"
