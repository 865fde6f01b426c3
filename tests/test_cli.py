"""CLI behaviour tests."""

from __future__ import annotations

import json
from pathlib import Path

from sdkgen.cli import create_parser, main


def test_cli_accepts_verbose_before_command() -> None:
    args = create_parser().parse_args(["--verbose", "utilities"])

    assert args.verbose is True
    assert args.command == "utilities"


def test_generate_flags_default_to_unset() -> None:
    args = create_parser().parse_args(["generate", "ir.json"])

    assert args.file == "ir.json"
    assert args.url is None
    assert args.strict_dependencies is None
    assert args.add_docs is None


def test_generate_accepts_a_url() -> None:
    args = create_parser().parse_args(["generate", "--url", "https://example.com/ir.json", "--no-docs"])

    assert args.url == "https://example.com/ir.json"
    assert args.add_docs is False


def test_generate_writes_the_package(imdb_ir_file: Path, tmp_path: Path) -> None:
    output = tmp_path / "out"

    exit_code = main(["generate", str(imdb_ir_file), "-o", str(output), "--package-name", "acme_sdk"])

    assert exit_code == 0
    assert (output / "acme_sdk" / "client.py").is_file()
    assert (output / "pyproject.toml").is_file()


def test_generate_reads_the_output_directory_from_config(imdb_ir_file: Path, tmp_path: Path) -> None:
    config_file = tmp_path / "sdkgen.json"
    config_file.write_text(
        json.dumps({"package_name": "acme_sdk", "output_dir": str(tmp_path / "from_config")}),
        encoding="utf-8",
    )

    assert main(["generate", str(imdb_ir_file), "--config", str(config_file)]) == 0
    assert (tmp_path / "from_config" / "acme_sdk" / "__init__.py").is_file()


def test_generate_without_output_fails(imdb_ir_file: Path) -> None:
    assert main(["generate", str(imdb_ir_file)]) == 1


def test_missing_ir_file_fails(tmp_path: Path) -> None:
    assert main(["generate", str(tmp_path / "missing.json"), "-o", str(tmp_path)]) == 1


def test_inspect_writes_nothing(imdb_ir_file: Path, tmp_path: Path, capsys) -> None:
    assert main(["inspect", str(imdb_ir_file)]) == 0

    output = capsys.readouterr().out
    assert "client.py" in output
    assert sorted(path.name for path in tmp_path.iterdir()) == ["ir.json"]


def test_utilities_lists_the_catalog(capsys) -> None:
    assert main(["utilities"]) == 0

    output = capsys.readouterr().out
    assert "http-client" in output
    assert "callback-queue" in output


def test_no_command_prints_help() -> None:
    assert main([]) == 1
