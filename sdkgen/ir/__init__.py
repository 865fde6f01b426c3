"""
Intermediate representation of an API and its loaders.
"""

from .model import (
    ApiAuth,
    AuthRequirement,
    AuthScheme,
    AuthSchemeType,
    Constants,
    ContainerType,
    DeclaredErrorName,
    DeclaredName,
    DeclaredServiceName,
    DeclaredTypeName,
    EnumValue,
    Environment,
    Environments,
    ErrorDeclaration,
    HttpEndpoint,
    HttpHeader,
    HttpMethod,
    HttpService,
    IntermediateRepresentation,
    ObjectProperty,
    PathParameter,
    PrimitiveType,
    QueryParameter,
    ReferenceType,
    ShapeType,
    SingleUnionType,
    TypeDeclaration,
    TypeReference,
)
from .loader import load_ir, load_ir_from_url, parse_ir, parse_type_reference

__all__ = [
    "ApiAuth",
    "AuthRequirement",
    "AuthScheme",
    "AuthSchemeType",
    "Constants",
    "ContainerType",
    "DeclaredErrorName",
    "DeclaredName",
    "DeclaredServiceName",
    "DeclaredTypeName",
    "EnumValue",
    "Environment",
    "Environments",
    "ErrorDeclaration",
    "HttpEndpoint",
    "HttpHeader",
    "HttpMethod",
    "HttpService",
    "IntermediateRepresentation",
    "ObjectProperty",
    "PathParameter",
    "PrimitiveType",
    "QueryParameter",
    "ReferenceType",
    "ShapeType",
    "SingleUnionType",
    "TypeDeclaration",
    "TypeReference",
    "load_ir",
    "load_ir_from_url",
    "parse_ir",
    "parse_type_reference",
]
