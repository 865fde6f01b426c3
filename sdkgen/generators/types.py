"""
Type declaration renderer.

Primary view: objects become TypedDicts, enums ``str`` enums, unions one
TypedDict per member joined by ``typing.Union``, aliases plain assignments.
Schema view: one module-level schema built from the ``schemas`` utility.
"""

from typing import Any, Dict, List

from ..core.context import SdkFile
from ..core.converters import SchemaConverter, TypeHintConverter
from ..core.naming import attribute_name, class_name, constant_name
from ..core.paths import View
from ..core.referencers import ImportStrategy
from ..ir.model import (
    ContainerType,
    ReferenceType,
    ShapeType,
    SingleUnionType,
    TypeDeclaration,
    TypeReference,
)
from ..logging_config import get_logger
from .base import DeclarationRenderer

logger = get_logger(__name__)


class TypeDeclarationRenderer(DeclarationRenderer):
    """Renders declared types in both views."""

    kind = "type"

    def render_primary(self, declaration: TypeDeclaration, sdk_file: SdkFile) -> None:
        logger.debug("Rendering type %s", declaration.name)
        renderers = {
            ShapeType.OBJECT: self._render_object,
            ShapeType.ENUM: self._render_enum,
            ShapeType.UNION: self._render_union,
            ShapeType.ALIAS: self._render_alias,
        }
        renderers[declaration.shape](declaration, sdk_file)

    def render_schema(self, declaration: TypeDeclaration, sdk_file: SdkFile) -> None:
        name = class_name(declaration.name.name)
        expression = self.get_schema_expression(declaration, sdk_file)
        sdk_file.add_statement(f"{name} = {expression}", exports=(name,))

    # Primary view

    def _render_object(self, declaration: TypeDeclaration, sdk_file: SdkFile) -> None:
        name = class_name(declaration.name.name)
        code = self._object_class(
            sdk_file,
            name,
            bases=self._object_bases(declaration, sdk_file),
            fields=self._fields(declaration, sdk_file),
            docs=declaration.docs,
        )
        sdk_file.add_statement(code, exports=(name,))

    def _object_bases(self, declaration: TypeDeclaration, sdk_file: SdkFile) -> List[str]:
        # Base classes are evaluated at import time, so they are imported directly
        bases = [
            sdk_file.get_reference_to_type(parent, import_strategy=ImportStrategy.direct())
            for parent in declaration.extends
        ]
        return bases or [f"{sdk_file.import_module('typing')}.TypedDict"]

    def _fields(self, declaration: TypeDeclaration, sdk_file: SdkFile) -> List[Dict[str, Any]]:
        converter = TypeHintConverter(sdk_file)
        fields = []
        for prop in declaration.properties:
            type_hint = converter.convert(prop.value_type)
            if self._is_optional(prop.value_type, sdk_file):
                # Optional properties may be absent from the parsed dict
                not_required = sdk_file.external_dependencies.add(
                    "typing-extensions", ">=4.6", module="typing_extensions", named="NotRequired"
                )
                type_hint = f"{not_required}[{type_hint}]"
            fields.append(
                {
                    "name": attribute_name(prop.wire_key),
                    "type_hint": type_hint,
                    "docs": self.docs(sdk_file, prop.docs),
                }
            )
        return fields

    def _is_optional(self, reference: TypeReference, sdk_file: SdkFile) -> bool:
        resolved = sdk_file.type_resolver.resolve_type_reference(reference)
        return (
            resolved.type == "container"
            and resolved.reference.container == ContainerType.OPTIONAL
        )

    def _object_class(self, sdk_file: SdkFile, name: str, *, bases, fields, docs) -> str:
        return self.render_template(
            "type_object.py.j2",
            {
                "class_name": name,
                "bases": bases,
                "fields": fields,
                "docs": self.docs(sdk_file, docs),
            },
        )

    def _render_enum(self, declaration: TypeDeclaration, sdk_file: SdkFile) -> None:
        name = class_name(declaration.name.name)
        code = self.render_template(
            "type_enum.py.j2",
            {
                "class_name": name,
                "enum_module": sdk_file.import_module("enum"),
                "docs": self.docs(sdk_file, declaration.docs),
                "values": [
                    {
                        "name": constant_name(value.name),
                        "wire_value": value.wire_value,
                        "docs": self.docs(sdk_file, value.docs),
                    }
                    for value in declaration.values
                ],
            },
        )
        sdk_file.add_statement(code, exports=(name,))

    def _render_union(self, declaration: TypeDeclaration, sdk_file: SdkFile) -> None:
        name = class_name(declaration.name.name)
        typing_module = sdk_file.import_module("typing")
        members = []
        for member in declaration.union_types:
            member_name = self.get_union_member_name(declaration, member)
            sdk_file.add_statement(
                self._union_member(declaration, member, member_name, sdk_file),
                exports=(member_name,),
            )
            members.append(member_name)

        if members:
            union = f"{typing_module}.Union[{', '.join(members)}]"
        else:
            union = f"{typing_module}.Any"
        sdk_file.add_statement(f"{name} = {union}", exports=(name,))

    def get_union_member_name(self, declaration: TypeDeclaration, member: SingleUnionType) -> str:
        return f"{class_name(declaration.name.name)}_{class_name(member.discriminant_value)}"

    def _union_member(
        self, declaration: TypeDeclaration, member: SingleUnionType, member_name: str, sdk_file: SdkFile
    ) -> str:
        typing_module = sdk_file.import_module("typing")
        discriminant = {
            "name": attribute_name(declaration.discriminant),
            "type_hint": f"{typing_module}.Literal[{member.discriminant_value!r}]",
            "docs": None,
        }
        bases = [f"{typing_module}.TypedDict"]
        fields = [discriminant]

        if member.value_type is not None:
            if self._is_object_reference(member.value_type, sdk_file):
                bases = [
                    sdk_file.get_reference_to_type(
                        member.value_type.named, import_strategy=ImportStrategy.direct()
                    )
                ]
            else:
                fields.append(
                    {
                        "name": "value",
                        "type_hint": TypeHintConverter(sdk_file).convert(member.value_type),
                        "docs": None,
                    }
                )

        return self._object_class(sdk_file, member_name, bases=bases, fields=fields, docs=member.docs)

    def _render_alias(self, declaration: TypeDeclaration, sdk_file: SdkFile) -> None:
        name = class_name(declaration.name.name)
        # Aliases are evaluated at import time
        converter = TypeHintConverter(sdk_file, import_strategy=ImportStrategy.direct())
        sdk_file.add_statement(f"{name} = {converter.convert(declaration.alias_of)}", exports=(name,))

    # Schema view

    def get_schema_expression(self, declaration: TypeDeclaration, sdk_file: SdkFile) -> str:
        schemas = sdk_file.core_utilities.schemas
        converter = SchemaConverter(sdk_file)

        if declaration.shape == ShapeType.OBJECT:
            properties = [
                (attribute_name(prop.wire_key), prop.wire_key, converter.convert(prop.value_type))
                for prop in declaration.properties
            ]
            parents = [
                sdk_file.get_reference_to_type(parent, view=View.SCHEMA)
                for parent in declaration.extends
            ]
            return schemas.extend(schemas.object_(properties), parents)

        if declaration.shape == ShapeType.ENUM:
            return schemas.enum_([value.wire_value for value in declaration.values])

        if declaration.shape == ShapeType.UNION:
            variants = {}
            for member in declaration.union_types:
                variants[member.discriminant_value] = self._union_variant_schema(member, sdk_file)
            return schemas.union(
                declaration.discriminant, variants, python_key=attribute_name(declaration.discriminant)
            )

        return converter.convert(declaration.alias_of)

    def _union_variant_schema(self, member: SingleUnionType, sdk_file: SdkFile) -> str:
        schemas = sdk_file.core_utilities.schemas
        if member.value_type is None:
            return schemas.object_([])
        if self._is_object_reference(member.value_type, sdk_file):
            return sdk_file.get_reference_to_type(member.value_type.named, view=View.SCHEMA)
        value = SchemaConverter(sdk_file).convert(member.value_type)
        return schemas.object_([("value", "value", value)])

    def _is_object_reference(self, reference, sdk_file: SdkFile) -> bool:
        if reference.type != ReferenceType.NAMED:
            return False
        return sdk_file.type_resolver.resolve_type_name(reference.named).is_object
