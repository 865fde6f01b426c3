"""
Intermediate representation of an API.

The IR is the language-neutral input of the generator: declared types,
errors, services with their endpoints, auth schemes, environments and
constants. Everything here is plain data; nothing in this module knows how
the generated package is laid out.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple
from enum import Enum


@dataclass(frozen=True)
class DeclaredName:
    """Identifier of a declared type, error or service.

    ``fern_filepath`` is the hierarchical namespace (e.g. ``("imdb", "movies")``)
    and ``name`` the local name inside it.
    """

    fern_filepath: Tuple[str, ...]
    name: str

    def __post_init__(self):
        if not isinstance(self.fern_filepath, tuple):
            object.__setattr__(self, "fern_filepath", tuple(self.fern_filepath))

    def __str__(self) -> str:
        return ".".join(self.fern_filepath + (self.name,))


DeclaredTypeName = DeclaredName
DeclaredErrorName = DeclaredName
DeclaredServiceName = DeclaredName


class PrimitiveType(Enum):
    """Primitive wire types."""

    STRING = "STRING"
    INTEGER = "INTEGER"
    LONG = "LONG"
    DOUBLE = "DOUBLE"
    BOOLEAN = "BOOLEAN"
    DATE_TIME = "DATE_TIME"
    UUID = "UUID"


class ContainerType(Enum):
    """Generic containers a type reference can wrap."""

    LIST = "list"
    SET = "set"
    MAP = "map"
    OPTIONAL = "optional"


class ReferenceType(Enum):
    """Discriminant of a TypeReference."""

    NAMED = "named"
    PRIMITIVE = "primitive"
    CONTAINER = "container"
    UNKNOWN = "unknown"
    VOID = "void"


@dataclass(frozen=True)
class TypeReference:
    """A use of a type: a named declaration, a primitive, or a container."""

    type: ReferenceType
    named: Optional[DeclaredName] = None
    primitive: Optional[PrimitiveType] = None
    container: Optional[ContainerType] = None

    # For list/set/optional containers
    item_type: Optional["TypeReference"] = None

    # For map containers
    key_type: Optional["TypeReference"] = None
    value_type: Optional["TypeReference"] = None

    @classmethod
    def of_named(cls, name: DeclaredName) -> "TypeReference":
        return cls(type=ReferenceType.NAMED, named=name)

    @classmethod
    def of_primitive(cls, primitive: PrimitiveType) -> "TypeReference":
        return cls(type=ReferenceType.PRIMITIVE, primitive=primitive)

    @classmethod
    def list_of(cls, item: "TypeReference") -> "TypeReference":
        return cls(type=ReferenceType.CONTAINER, container=ContainerType.LIST, item_type=item)

    @classmethod
    def set_of(cls, item: "TypeReference") -> "TypeReference":
        return cls(type=ReferenceType.CONTAINER, container=ContainerType.SET, item_type=item)

    @classmethod
    def optional_of(cls, item: "TypeReference") -> "TypeReference":
        return cls(
            type=ReferenceType.CONTAINER, container=ContainerType.OPTIONAL, item_type=item
        )

    @classmethod
    def map_of(cls, key: "TypeReference", value: "TypeReference") -> "TypeReference":
        return cls(
            type=ReferenceType.CONTAINER,
            container=ContainerType.MAP,
            key_type=key,
            value_type=value,
        )

    @classmethod
    def unknown(cls) -> "TypeReference":
        return cls(type=ReferenceType.UNKNOWN)

    @classmethod
    def void(cls) -> "TypeReference":
        return cls(type=ReferenceType.VOID)

    def referenced_names(self) -> List[DeclaredName]:
        """All named declarations this reference mentions, in order."""
        if self.type == ReferenceType.NAMED:
            return [self.named]
        names = []
        for child in (self.item_type, self.key_type, self.value_type):
            if child is not None:
                names.extend(child.referenced_names())
        return names


class ShapeType(Enum):
    """Shapes a declared type can take."""

    OBJECT = "object"
    UNION = "union"
    ENUM = "enum"
    ALIAS = "alias"


@dataclass
class ObjectProperty:
    """A property of an object type; ``wire_key`` is the JSON key."""

    wire_key: str
    value_type: TypeReference
    docs: Optional[str] = None


@dataclass
class EnumValue:
    """A member of an enum type."""

    name: str
    wire_value: str
    docs: Optional[str] = None


@dataclass
class SingleUnionType:
    """One variant of a discriminated union."""

    discriminant_value: str
    value_type: Optional[TypeReference] = None
    docs: Optional[str] = None


@dataclass
class TypeDeclaration:
    """A declared type with exactly one shape."""

    name: DeclaredName
    shape: ShapeType
    docs: Optional[str] = None

    # OBJECT
    properties: List[ObjectProperty] = field(default_factory=list)
    extends: List[DeclaredName] = field(default_factory=list)

    # ENUM
    values: List[EnumValue] = field(default_factory=list)

    # UNION
    discriminant: str = "type"
    union_types: List[SingleUnionType] = field(default_factory=list)

    # ALIAS
    alias_of: Optional[TypeReference] = None

    def referenced_names(self) -> List[DeclaredName]:
        """Named declarations used by this type."""
        names = list(self.extends)
        for prop in self.properties:
            names.extend(prop.value_type.referenced_names())
        for union_type in self.union_types:
            if union_type.value_type is not None:
                names.extend(union_type.value_type.referenced_names())
        if self.alias_of is not None:
            names.extend(self.alias_of.referenced_names())
        return names


@dataclass
class ErrorDeclaration:
    """A declared error with its HTTP status code and optional body type."""

    name: DeclaredName
    discriminant_value: str
    status_code: Optional[int] = None
    type: Optional[TypeReference] = None
    docs: Optional[str] = None


class HttpMethod(Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"


@dataclass
class PathParameter:
    name: str
    value_type: TypeReference
    docs: Optional[str] = None


@dataclass
class QueryParameter:
    name: str
    value_type: TypeReference
    allow_multiple: bool = False
    docs: Optional[str] = None


@dataclass
class HttpHeader:
    name: str
    header: str
    value_type: TypeReference
    docs: Optional[str] = None


@dataclass
class HttpEndpoint:
    """One HTTP endpoint of a service."""

    name: str
    method: HttpMethod
    path: str
    path_parameters: List[PathParameter] = field(default_factory=list)
    query_parameters: List[QueryParameter] = field(default_factory=list)
    headers: List[HttpHeader] = field(default_factory=list)
    request: Optional[TypeReference] = None
    response: Optional[TypeReference] = None
    errors: List[DeclaredName] = field(default_factory=list)
    auth: bool = False
    docs: Optional[str] = None


@dataclass
class HttpService:
    """A service groups endpoints under a base path."""

    name: DeclaredName
    base_path: str = ""
    endpoints: List[HttpEndpoint] = field(default_factory=list)
    headers: List[HttpHeader] = field(default_factory=list)
    docs: Optional[str] = None


class AuthSchemeType(Enum):
    BEARER = "bearer"
    BASIC = "basic"
    HEADER = "header"


class AuthRequirement(Enum):
    ALL = "ALL"
    ANY = "ANY"


@dataclass
class AuthScheme:
    """A single auth scheme; ``header`` and ``name`` apply to HEADER schemes."""

    type: AuthSchemeType
    header: Optional[str] = None
    name: Optional[str] = None
    value_type: Optional[TypeReference] = None
    docs: Optional[str] = None


@dataclass
class ApiAuth:
    requirement: AuthRequirement = AuthRequirement.ALL
    schemes: List[AuthScheme] = field(default_factory=list)
    docs: Optional[str] = None


@dataclass
class Environment:
    id: str
    name: str
    url: str
    docs: Optional[str] = None


@dataclass
class Environments:
    default_environment: Optional[str] = None
    environments: List[Environment] = field(default_factory=list)


@dataclass
class Constants:
    """Wire-level constants shared by generated errors."""

    error_discriminant: str = "error"
    error_instance_id_key: str = "errorInstanceId"
    unknown_error_discriminant_value: str = "_unknown"


@dataclass
class IntermediateRepresentation:
    """The complete input of one generation run."""

    api_name: str
    types: List[TypeDeclaration] = field(default_factory=list)
    errors: List[ErrorDeclaration] = field(default_factory=list)
    services: List[HttpService] = field(default_factory=list)
    auth: ApiAuth = field(default_factory=ApiAuth)
    environments: Environments = field(default_factory=Environments)
    constants: Constants = field(default_factory=Constants)
    docs: Optional[str] = None
