"""
Lookups of declared types and errors.

Both resolvers index the IR once at construction and are read-only afterwards.
A miss means the IR is internally inconsistent and is fatal.
"""

from dataclasses import dataclass
from typing import Dict, Optional

from ..ir.model import (
    DeclaredName,
    ErrorDeclaration,
    IntermediateRepresentation,
    PrimitiveType,
    ReferenceType,
    ShapeType,
    TypeDeclaration,
    TypeReference,
)
from .errors import UnknownDeclarationError


@dataclass(frozen=True)
class ResolvedType:
    """Underlying shape of a type reference once aliases are followed.

    ``type`` is ``named`` (with the declaration of the final non-alias type
    and its shape), ``primitive``, ``container``, ``unknown`` or ``void``.
    """

    type: str
    name: Optional[DeclaredName] = None
    shape: Optional[ShapeType] = None
    declaration: Optional[TypeDeclaration] = None
    primitive: Optional[PrimitiveType] = None
    reference: Optional[TypeReference] = None

    @property
    def is_object(self) -> bool:
        return self.type == "named" and self.shape == ShapeType.OBJECT


class TypeResolver:
    """Resolves declared type names against the IR."""

    def __init__(self, ir: IntermediateRepresentation):
        self._declarations: Dict[DeclaredName, TypeDeclaration] = {
            declaration.name: declaration for declaration in ir.types
        }

    def get_type_declaration(self, name: DeclaredName) -> TypeDeclaration:
        """Return the declaration of ``name`` as written in the IR."""
        declaration = self._declarations.get(name)
        if declaration is None:
            raise UnknownDeclarationError("type", name)
        return declaration

    def resolve_type_name(self, name: DeclaredName) -> ResolvedType:
        """Follow alias indirection from ``name`` to its underlying shape."""
        seen = set()
        current = name
        while True:
            if current in seen:
                raise UnknownDeclarationError("type (alias cycle through)", current)
            seen.add(current)

            declaration = self.get_type_declaration(current)
            if declaration.shape != ShapeType.ALIAS:
                return ResolvedType(
                    type="named",
                    name=current,
                    shape=declaration.shape,
                    declaration=declaration,
                )

            aliased = declaration.alias_of
            if aliased.type != ReferenceType.NAMED:
                return self._resolve_unnamed(aliased)
            current = aliased.named

    def resolve_type_reference(self, reference: TypeReference) -> ResolvedType:
        """Resolve any type reference to its structural shape."""
        if reference.type == ReferenceType.NAMED:
            return self.resolve_type_name(reference.named)
        return self._resolve_unnamed(reference)

    def _resolve_unnamed(self, reference: TypeReference) -> ResolvedType:
        if reference.type == ReferenceType.PRIMITIVE:
            return ResolvedType(type="primitive", primitive=reference.primitive, reference=reference)
        if reference.type == ReferenceType.CONTAINER:
            return ResolvedType(type="container", reference=reference)
        if reference.type == ReferenceType.VOID:
            return ResolvedType(type="void", reference=reference)
        return ResolvedType(type="unknown", reference=reference)


class ErrorResolver:
    """Resolves declared error names against the IR."""

    def __init__(self, ir: IntermediateRepresentation):
        self._declarations: Dict[DeclaredName, ErrorDeclaration] = {
            declaration.name: declaration for declaration in ir.errors
        }

    def get_error_declaration(self, name: DeclaredName) -> ErrorDeclaration:
        declaration = self._declarations.get(name)
        if declaration is None:
            raise UnknownDeclarationError("error", name)
        return declaration
