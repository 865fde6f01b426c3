"""Tests for sdkgen.ir.loader."""

from __future__ import annotations

from pathlib import Path

import pytest
import requests

from sdkgen.core.errors import IRLoadError
from sdkgen.ir import load_ir, load_ir_from_url, parse_ir, parse_type_reference
from sdkgen.ir.model import (
    AuthSchemeType,
    ContainerType,
    DeclaredName,
    HttpMethod,
    PrimitiveType,
    ReferenceType,
    ShapeType,
)
from tests._fixtures.ir_builder import IMDB_IR_DOCUMENT


def test_load_ir_parses_every_section(imdb_ir_file: Path) -> None:
    ir = load_ir(imdb_ir_file)

    assert ir.api_name == "Acme"
    assert [t.name for t in ir.types] == [
        DeclaredName(("imdb",), "MovieId"),
        DeclaredName(("imdb",), "Movie"),
    ]
    assert ir.types[0].shape == ShapeType.ALIAS
    assert ir.types[1].properties[2].value_type.container == ContainerType.OPTIONAL

    (error,) = ir.errors
    assert error.status_code == 404
    assert error.discriminant_value == "MovieDoesNotExistError"

    (endpoint,) = ir.services[0].endpoints
    assert endpoint.method == HttpMethod.GET
    assert endpoint.path_parameters[0].name == "movieId"
    assert endpoint.errors == [DeclaredName(("imdb",), "MovieDoesNotExistError")]

    assert ir.auth.schemes[0].type == AuthSchemeType.BEARER
    assert ir.environments.default_environment == "Production"
    assert ir.constants.error_discriminant == "error"


def test_map_references_keep_key_and_value() -> None:
    reference = parse_type_reference(
        {
            "type": "container",
            "container": "map",
            "keyType": {"type": "primitive", "primitive": "STRING"},
            "valueType": {"type": "primitive", "primitive": "INTEGER"},
        }
    )

    assert reference.container == ContainerType.MAP
    assert reference.key_type.primitive == PrimitiveType.STRING
    assert reference.value_type.primitive == PrimitiveType.INTEGER


def test_void_and_unknown_references() -> None:
    assert parse_type_reference({"type": "void"}).type == ReferenceType.VOID
    assert parse_type_reference({"type": "unknown"}).type == ReferenceType.UNKNOWN


@pytest.mark.parametrize(
    "document",
    [
        [],
        {"types": []},
        {"apiName": "Acme", "types": [{"name": {"name": "X"}, "shape": "tuple"}]},
    ],
)
def test_malformed_documents_are_rejected(document) -> None:
    with pytest.raises(IRLoadError):
        parse_ir(document)


def test_missing_and_invalid_files_are_rejected(tmp_path: Path) -> None:
    with pytest.raises(IRLoadError):
        load_ir(tmp_path / "missing.json")

    broken = tmp_path / "broken.json"
    broken.write_text("{", encoding="utf-8")
    with pytest.raises(IRLoadError):
        load_ir(broken)


class _FakeResponse:
    def __init__(self, payload, status_code: int = 200):
        self._payload = payload
        self.status_code = status_code

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.exceptions.HTTPError(response=self)

    def json(self):
        return self._payload


def test_load_ir_from_url(monkeypatch) -> None:
    calls = []

    def fake_get(url, timeout):
        calls.append((url, timeout))
        return _FakeResponse(IMDB_IR_DOCUMENT)

    monkeypatch.setattr(requests, "get", fake_get)

    ir = load_ir_from_url("https://example.com/ir.json")

    assert ir.api_name == "Acme"
    assert calls == [("https://example.com/ir.json", 30)]


def test_load_ir_from_url_reports_http_errors(monkeypatch) -> None:
    monkeypatch.setattr(requests, "get", lambda url, timeout: _FakeResponse({}, status_code=404))

    with pytest.raises(IRLoadError, match="HTTP error 404"):
        load_ir_from_url("https://example.com/ir.json")


def test_load_ir_from_url_rejects_invalid_urls() -> None:
    with pytest.raises(IRLoadError, match="Invalid URL"):
        load_ir_from_url("not a url")
