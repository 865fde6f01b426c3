"""Tests for sdkgen.core.templates."""

from __future__ import annotations

import pytest

from sdkgen.core.templates import TemplateEngine, TemplateError, get_default_template_engine


@pytest.fixture
def engine() -> TemplateEngine:
    return TemplateEngine()


def test_case_filters(engine: TemplateEngine) -> None:
    engine.add_template("names", "{{ n | snake_case }} {{ n | camel_case }} {{ n | pascal_case }}")

    assert engine.render_template("names", {"n": "getMovieById"}) == (
        "get_movie_by_id getMovieById GetMovieById"
    )


def test_code_filters(engine: TemplateEngine) -> None:
    engine.add_template("docs", '"""\n{{ docs | docstring | indent_code }}\n"""')
    engine.add_template("comment", "{{ text | comment }}")

    assert engine.render_template("docs", {"docs": 'Say """hi"""'}) == (
        '"""\n    Say \\"\\"\\"hi\\"\\"\\"\n"""'
    )
    assert engine.render_template("comment", {"text": "one\n\ntwo"}) == "# one\n#\n# two"


def test_python_and_toml_literals(engine: TemplateEngine) -> None:
    engine.add_template("literals", "{{ value | pyrepr }} {{ value | quote }}")

    assert engine.render_template("literals", {"value": "it's"}) == "\"it's\" \"it's\""


def test_undefined_variables_fail(engine: TemplateEngine) -> None:
    engine.add_template("strict", "{{ missing }}")

    with pytest.raises(TemplateError, match="strict"):
        engine.render_template("strict", {})


def test_missing_template(engine: TemplateEngine) -> None:
    with pytest.raises(TemplateError, match="nope.j2"):
        engine.render_template("nope.j2", {})


def test_default_engine_loads_bundled_templates() -> None:
    engine = get_default_template_engine()

    assert engine is get_default_template_engine()
    rendered = engine.render_template(
        "type_enum.py.j2",
        {
            "class_name": "Genre",
            "enum_module": "enum",
            "docs": None,
            "values": [{"name": "DRAMA", "wire_value": "drama", "docs": None}],
        },
    )
    assert rendered.startswith("class Genre(str, enum.Enum):")
    assert "DRAMA = 'drama'" in rendered
