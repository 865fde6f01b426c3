"""Loading intermediate representation documents.

This module reads IR JSON documents from files and URLs and converts them
into the dataclasses of ``sdkgen.ir.model``.
"""

import json
from pathlib import Path
from typing import Any
from urllib.parse import urlparse

import requests

from ..core.errors import IRLoadError
from ..logging_config import get_logger
from .model import (
    ApiAuth,
    AuthRequirement,
    AuthScheme,
    AuthSchemeType,
    Constants,
    ContainerType,
    DeclaredName,
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

logger = get_logger(__name__)


def load_ir(file_path: str | Path) -> IntermediateRepresentation:
    """Load an IR document from a local JSON file.

    Raises:
        IRLoadError: If the file is missing, unreadable or malformed.
    """
    file_path = Path(file_path)
    logger.debug("Loading IR from file: %s", file_path)

    if not file_path.exists():
        raise IRLoadError(f"IR file not found: {file_path}")

    try:
        with file_path.open("r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise IRLoadError(f"Invalid JSON in IR file {file_path}: {e}") from e
    except OSError as e:
        raise IRLoadError(f"Error reading IR file {file_path}: {e}") from e

    ir = parse_ir(data)
    logger.info("Loaded IR for %s from %s", ir.api_name, file_path)
    return ir


def load_ir_from_url(url: str, timeout: int = 30) -> IntermediateRepresentation:
    """Fetch an IR document over HTTP.

    Raises:
        IRLoadError: If the URL is invalid, the request fails, or the body is malformed.
    """
    logger.debug("Loading IR from URL: %s", url)

    parsed_url = urlparse(url)
    if not all([parsed_url.scheme, parsed_url.netloc]):
        raise IRLoadError(f"Invalid URL: {url}")

    try:
        response = requests.get(url, timeout=timeout)
        response.raise_for_status()
        data = response.json()
    except requests.exceptions.Timeout as e:
        raise IRLoadError(f"Request timeout for URL: {url}") from e
    except requests.exceptions.HTTPError as e:
        raise IRLoadError(
            f"HTTP error {e.response.status_code} for URL: {url}"
        ) from e
    except requests.exceptions.RequestException as e:
        raise IRLoadError(f"Request error for URL {url}: {e}") from e
    except ValueError as e:
        raise IRLoadError(f"Invalid JSON response from URL {url}: {e}") from e

    ir = parse_ir(data)
    logger.info("Loaded IR for %s from %s", ir.api_name, url)
    return ir


def parse_ir(data: Any) -> IntermediateRepresentation:
    """Convert a decoded IR document into the model.

    Raises:
        IRLoadError: If a required key is missing or a value has the wrong shape.
    """
    if not isinstance(data, dict):
        raise IRLoadError("IR document must be a JSON object")

    try:
        return IntermediateRepresentation(
            api_name=data["apiName"],
            types=[_parse_type(t) for t in data.get("types", [])],
            errors=[_parse_error(e) for e in data.get("errors", [])],
            services=[_parse_service(s) for s in data.get("services", [])],
            auth=_parse_auth(data.get("auth") or {}),
            environments=_parse_environments(data.get("environments") or {}),
            constants=_parse_constants(data.get("constants") or {}),
            docs=data.get("docs"),
        )
    except KeyError as e:
        raise IRLoadError(f"IR document is missing required key {e}") from e
    except (TypeError, ValueError, AttributeError) as e:
        raise IRLoadError(f"Malformed IR document: {e}") from e


def _parse_name(data: dict) -> DeclaredName:
    return DeclaredName(tuple(data.get("fernFilepath", [])), data["name"])


def parse_type_reference(data: dict) -> TypeReference:
    """Parse one type reference object."""
    reference_type = ReferenceType(data["type"])

    if reference_type == ReferenceType.NAMED:
        return TypeReference.of_named(_parse_name(data))
    if reference_type == ReferenceType.PRIMITIVE:
        return TypeReference.of_primitive(PrimitiveType(data["primitive"]))
    if reference_type == ReferenceType.UNKNOWN:
        return TypeReference.unknown()
    if reference_type == ReferenceType.VOID:
        return TypeReference.void()

    container = ContainerType(data["container"])
    if container == ContainerType.MAP:
        return TypeReference.map_of(
            parse_type_reference(data["keyType"]),
            parse_type_reference(data["valueType"]),
        )
    return TypeReference(
        type=ReferenceType.CONTAINER,
        container=container,
        item_type=parse_type_reference(data["itemType"]),
    )


def _optional_reference(data: dict, key: str) -> TypeReference | None:
    value = data.get(key)
    return parse_type_reference(value) if value is not None else None


def _parse_type(data: dict) -> TypeDeclaration:
    shape = ShapeType(data["shape"])
    declaration = TypeDeclaration(
        name=_parse_name(data["name"]), shape=shape, docs=data.get("docs")
    )

    if shape == ShapeType.OBJECT:
        declaration.extends = [_parse_name(e) for e in data.get("extends", [])]
        declaration.properties = [
            ObjectProperty(
                wire_key=p["key"],
                value_type=parse_type_reference(p["valueType"]),
                docs=p.get("docs"),
            )
            for p in data.get("properties", [])
        ]
    elif shape == ShapeType.ENUM:
        declaration.values = [
            EnumValue(
                name=v["name"], wire_value=v.get("value", v["name"]), docs=v.get("docs")
            )
            for v in data["values"]
        ]
    elif shape == ShapeType.UNION:
        declaration.discriminant = data.get("discriminant", "type")
        declaration.union_types = [
            SingleUnionType(
                discriminant_value=u["discriminantValue"],
                value_type=_optional_reference(u, "valueType"),
                docs=u.get("docs"),
            )
            for u in data["types"]
        ]
    elif shape == ShapeType.ALIAS:
        declaration.alias_of = parse_type_reference(data["aliasOf"])

    return declaration


def _parse_error(data: dict) -> ErrorDeclaration:
    name = _parse_name(data["name"])
    return ErrorDeclaration(
        name=name,
        discriminant_value=data.get("discriminantValue", name.name),
        status_code=data.get("statusCode"),
        type=_optional_reference(data, "type"),
        docs=data.get("docs"),
    )


def _parse_header(data: dict) -> HttpHeader:
    return HttpHeader(
        name=data.get("name", data["header"]),
        header=data["header"],
        value_type=parse_type_reference(data["valueType"]),
        docs=data.get("docs"),
    )


def _parse_endpoint(data: dict) -> HttpEndpoint:
    return HttpEndpoint(
        name=data["name"],
        method=HttpMethod(data.get("method", "GET").upper()),
        path=data.get("path", ""),
        path_parameters=[
            PathParameter(
                name=p["name"],
                value_type=parse_type_reference(p["valueType"]),
                docs=p.get("docs"),
            )
            for p in data.get("pathParameters", [])
        ],
        query_parameters=[
            QueryParameter(
                name=q["name"],
                value_type=parse_type_reference(q["valueType"]),
                allow_multiple=q.get("allowMultiple", False),
                docs=q.get("docs"),
            )
            for q in data.get("queryParameters", [])
        ],
        headers=[_parse_header(h) for h in data.get("headers", [])],
        request=_optional_reference(data, "request"),
        response=_optional_reference(data, "response"),
        errors=[_parse_name(e) for e in data.get("errors", [])],
        auth=data.get("auth", False),
        docs=data.get("docs"),
    )


def _parse_service(data: dict) -> HttpService:
    return HttpService(
        name=_parse_name(data["name"]),
        base_path=data.get("basePath", ""),
        endpoints=[_parse_endpoint(e) for e in data.get("endpoints", [])],
        headers=[_parse_header(h) for h in data.get("headers", [])],
        docs=data.get("docs"),
    )


def _parse_auth(data: dict) -> ApiAuth:
    return ApiAuth(
        requirement=AuthRequirement(data.get("requirement", "ALL")),
        schemes=[
            AuthScheme(
                type=AuthSchemeType(s["type"]),
                header=s.get("header"),
                name=s.get("name"),
                value_type=_optional_reference(s, "valueType"),
                docs=s.get("docs"),
            )
            for s in data.get("schemes", [])
        ],
        docs=data.get("docs"),
    )


def _parse_environments(data: dict) -> Environments:
    return Environments(
        default_environment=data.get("default"),
        environments=[
            Environment(id=e["id"], name=e["name"], url=e["url"], docs=e.get("docs"))
            for e in data.get("environments", [])
        ],
    )


def _parse_constants(data: dict) -> Constants:
    defaults = Constants()
    return Constants(
        error_discriminant=data.get("errorDiscriminant", defaults.error_discriminant),
        error_instance_id_key=data.get(
            "errorInstanceIdKey", defaults.error_instance_id_key
        ),
        unknown_error_discriminant_value=data.get(
            "unknownErrorDiscriminantValue", defaults.unknown_error_discriminant_value
        ),
    )
