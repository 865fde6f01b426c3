"""Tests for sdkgen.core.services."""

from __future__ import annotations

import pytest

from sdkgen.core.errors import GeneratorError
from sdkgen.core.services import construct_augmented_services
from sdkgen.ir.model import DeclaredName, HttpEndpoint, HttpMethod, HttpService, IntermediateRepresentation


def _service(*fern_filepath: str, base_path: str = "") -> HttpService:
    return HttpService(
        name=DeclaredName(fern_filepath, "Service"),
        base_path=base_path,
        endpoints=[HttpEndpoint("list", HttpMethod.GET, "")],
    )


def test_no_services_means_no_clients() -> None:
    assert construct_augmented_services(IntermediateRepresentation(api_name="Acme")) == []


def test_intermediate_namespaces_get_clients_parents_first() -> None:
    ir = IntermediateRepresentation(api_name="Acme", services=[_service("imdb", "movies", base_path="/movies")])

    services = construct_augmented_services(ir)

    assert [service.name.fern_filepath for service in services] == [(), ("imdb",), ("imdb", "movies")]
    root, imdb, movies = services
    assert root.is_root and root.original_service is None
    assert root.name == DeclaredName((), "Acme")
    assert [wrapped.attribute for wrapped in root.wrapped_services] == ["imdb"]
    assert [wrapped.attribute for wrapped in imdb.wrapped_services] == ["movies"]
    assert imdb.endpoints == []
    assert movies.base_path == "/movies"
    assert [endpoint.name for endpoint in movies.endpoints] == ["list"]


def test_root_service_keeps_its_endpoints() -> None:
    ir = IntermediateRepresentation(api_name="Acme", services=[_service()])

    (root,) = construct_augmented_services(ir)

    assert root.is_root
    assert root.original_service is ir.services[0]


def test_two_services_in_one_namespace_are_rejected() -> None:
    ir = IntermediateRepresentation(api_name="Acme", services=[_service("imdb"), _service("imdb")])

    with pytest.raises(GeneratorError):
        construct_augmented_services(ir)
