from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest

from sdkgen.ir.model import IntermediateRepresentation
from tests._fixtures.ir_builder import (
    IMDB_IR_DOCUMENT,
    imdb_ir,
    mutual_ir,
    optional_alias_ir,
    person_ir,
)


@pytest.fixture(autouse=True)
def _reset_sdkgen_logger():
    """Undo configure_logging so caplog sees records from every test."""
    yield
    logger = logging.getLogger("sdkgen")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def person() -> IntermediateRepresentation:
    return person_ir()


@pytest.fixture
def mutual() -> IntermediateRepresentation:
    return mutual_ir()


@pytest.fixture
def optional_alias() -> IntermediateRepresentation:
    return optional_alias_ir()


@pytest.fixture
def imdb() -> IntermediateRepresentation:
    return imdb_ir()


@pytest.fixture
def imdb_ir_file(tmp_path: Path) -> Path:
    """The movie API written as an IR JSON document."""
    path = tmp_path / "ir.json"
    path.write_text(json.dumps(IMDB_IR_DOCUMENT), encoding="utf-8")
    return path
