"""Helpers for building intermediate representations in tests."""

from __future__ import annotations

from sdkgen.ir.model import (
    ApiAuth,
    AuthScheme,
    AuthSchemeType,
    DeclaredName,
    Environment,
    Environments,
    ErrorDeclaration,
    HttpEndpoint,
    HttpMethod,
    HttpService,
    IntermediateRepresentation,
    ObjectProperty,
    PathParameter,
    PrimitiveType,
    QueryParameter,
    ShapeType,
    TypeDeclaration,
    TypeReference,
)

STRING = TypeReference.of_primitive(PrimitiveType.STRING)
DOUBLE = TypeReference.of_primitive(PrimitiveType.DOUBLE)
INTEGER = TypeReference.of_primitive(PrimitiveType.INTEGER)


def named(name: str, *fern_filepath: str) -> TypeReference:
    """Reference to the declared type ``name`` inside ``fern_filepath``."""
    return TypeReference.of_named(DeclaredName(fern_filepath, name))


def object_type(name: str, /, *fern_filepath: str, **properties: TypeReference) -> TypeDeclaration:
    return TypeDeclaration(
        name=DeclaredName(fern_filepath, name),
        shape=ShapeType.OBJECT,
        properties=[ObjectProperty(key, value) for key, value in properties.items()],
    )


def alias_type(name: str, aliased: TypeReference, *fern_filepath: str) -> TypeDeclaration:
    return TypeDeclaration(
        name=DeclaredName(fern_filepath, name), shape=ShapeType.ALIAS, alias_of=aliased
    )


def error(name: str, *fern_filepath: str, status_code: int = 404, body=None) -> ErrorDeclaration:
    return ErrorDeclaration(
        name=DeclaredName(fern_filepath, name),
        discriminant_value=name,
        status_code=status_code,
        type=body,
    )


def person_ir() -> IntermediateRepresentation:
    """One object type and one error without a body, both at the root namespace."""
    return IntermediateRepresentation(
        api_name="Acme",
        types=[object_type("Person", name=STRING)],
        errors=[error("NotFoundError")],
    )


def mutual_ir() -> IntermediateRepresentation:
    """Two object types referencing each other."""
    return IntermediateRepresentation(
        api_name="Acme",
        types=[
            object_type("A", b=named("B")),
            object_type("B", a=TypeReference.optional_of(named("A"))),
        ],
    )


def optional_alias_ir() -> IntermediateRepresentation:
    """An object whose property is optional only through an alias."""
    return IntermediateRepresentation(
        api_name="Acme",
        types=[
            alias_type("MaybeName", TypeReference.optional_of(STRING)),
            object_type("Profile", nick=named("MaybeName"), name=STRING),
        ],
    )


def imdb_ir() -> IntermediateRepresentation:
    """A small movie API with types, an error, one service, auth and environments."""
    movie_id = named("MovieId", "imdb")
    return IntermediateRepresentation(
        api_name="Acme",
        types=[
            alias_type("MovieId", STRING, "imdb"),
            object_type(
                "Movie",
                "imdb",
                id=movie_id,
                title=STRING,
                rating=TypeReference.optional_of(DOUBLE),
            ),
            object_type("CreateMovieRequest", "imdb", title=STRING, rating=DOUBLE),
        ],
        errors=[error("MovieDoesNotExistError", "imdb", status_code=404, body=movie_id)],
        services=[
            HttpService(
                name=DeclaredName(("imdb",), "ImdbService"),
                base_path="/movies",
                endpoints=[
                    HttpEndpoint(
                        name="createMovie",
                        method=HttpMethod.POST,
                        path="",
                        request=named("CreateMovieRequest", "imdb"),
                        response=movie_id,
                    ),
                    HttpEndpoint(
                        name="getMovie",
                        method=HttpMethod.GET,
                        path="/{movieId}",
                        path_parameters=[PathParameter("movieId", movie_id)],
                        query_parameters=[
                            QueryParameter("limit", TypeReference.optional_of(INTEGER))
                        ],
                        response=named("Movie", "imdb"),
                        errors=[DeclaredName(("imdb",), "MovieDoesNotExistError")],
                    ),
                ],
            )
        ],
        auth=ApiAuth(schemes=[AuthScheme(type=AuthSchemeType.BEARER)]),
        environments=Environments(
            default_environment="Production",
            environments=[
                Environment(id="Production", name="Production", url="https://api.imdb.com")
            ],
        ),
    )


IMDB_IR_DOCUMENT = {
    "apiName": "Acme",
    "types": [
        {
            "name": {"fernFilepath": ["imdb"], "name": "MovieId"},
            "shape": "alias",
            "aliasOf": {"type": "primitive", "primitive": "STRING"},
        },
        {
            "name": {"fernFilepath": ["imdb"], "name": "Movie"},
            "shape": "object",
            "properties": [
                {
                    "key": "id",
                    "valueType": {"type": "named", "fernFilepath": ["imdb"], "name": "MovieId"},
                },
                {"key": "title", "valueType": {"type": "primitive", "primitive": "STRING"}},
                {
                    "key": "rating",
                    "valueType": {
                        "type": "container",
                        "container": "optional",
                        "itemType": {"type": "primitive", "primitive": "DOUBLE"},
                    },
                },
            ],
        },
    ],
    "errors": [
        {
            "name": {"fernFilepath": ["imdb"], "name": "MovieDoesNotExistError"},
            "statusCode": 404,
            "type": {"type": "named", "fernFilepath": ["imdb"], "name": "MovieId"},
        }
    ],
    "services": [
        {
            "name": {"fernFilepath": ["imdb"], "name": "ImdbService"},
            "basePath": "/movies",
            "endpoints": [
                {
                    "name": "getMovie",
                    "method": "get",
                    "path": "/{movieId}",
                    "pathParameters": [
                        {
                            "name": "movieId",
                            "valueType": {
                                "type": "named",
                                "fernFilepath": ["imdb"],
                                "name": "MovieId",
                            },
                        }
                    ],
                    "response": {"type": "named", "fernFilepath": ["imdb"], "name": "Movie"},
                    "errors": [{"fernFilepath": ["imdb"], "name": "MovieDoesNotExistError"}],
                }
            ],
        }
    ],
    "auth": {"requirement": "ALL", "schemes": [{"type": "bearer"}]},
    "environments": {
        "default": "Production",
        "environments": [
            {"id": "Production", "name": "Production", "url": "https://api.imdb.com"}
        ],
    },
}


__all__ = [
    "DOUBLE",
    "IMDB_IR_DOCUMENT",
    "INTEGER",
    "STRING",
    "alias_type",
    "error",
    "imdb_ir",
    "mutual_ir",
    "named",
    "object_type",
    "person_ir",
]
