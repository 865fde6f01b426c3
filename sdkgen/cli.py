"""
Command-line interface for sdkgen.

    sdkgen generate IR_FILE [-o DIR] [--config FILE] ...
    sdkgen inspect IR_FILE
    sdkgen utilities
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from .core.config import ConfigError, ConfigManager, GeneratorConfig
from .core.errors import GeneratorError
from .ir import IntermediateRepresentation, load_ir, load_ir_from_url
from .logging_config import configure_logging, get_logger
from .orchestrator import GeneratedPackage, SdkGenerator
from .packaging import PackageWriter
from .utilities.catalog import CORE_UTILITY_CATALOG

logger = get_logger(__name__)

# Initialize rich console
console = Console()


class CLIError(Exception):
    """Exception raised for CLI-related errors."""

    pass


def create_parser() -> argparse.ArgumentParser:
    """Build the argument parser with its subcommands."""
    parser = argparse.ArgumentParser(
        prog="sdkgen",
        description="Generate a Python client library from an API intermediate representation",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  sdkgen generate api.json -o ./out --package-name imdb_client
  sdkgen generate --url https://example.com/ir.json -o ./out
  sdkgen inspect api.json
  sdkgen utilities
        """.strip(),
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    parser.add_argument("--log-file", metavar="FILE", help="Write a full debug log to FILE")

    subparsers = parser.add_subparsers(dest="command")

    generate = subparsers.add_parser("generate", help="Generate a client package")
    _add_input_args(generate)
    generate.add_argument("--output", "-o", metavar="DIR", help="Output directory")
    _add_config_args(generate)
    generate.set_defaults(func=_handle_generate)

    inspect = subparsers.add_parser("inspect", help="Show the planned file layout without writing")
    _add_input_args(inspect)
    _add_config_args(inspect)
    inspect.set_defaults(func=_handle_inspect)

    utilities = subparsers.add_parser("utilities", help="List the core utility catalog")
    utilities.set_defaults(func=_handle_utilities)

    return parser


def _add_input_args(parser: argparse.ArgumentParser) -> None:
    input_group = parser.add_mutually_exclusive_group(required=True)
    input_group.add_argument("file", nargs="?", help="IR JSON file")
    input_group.add_argument("--url", help="URL to fetch the IR from")


def _add_config_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--config", metavar="FILE", help="JSON configuration file")
    parser.add_argument("--package-name", metavar="NAME", help="Python package name")
    parser.add_argument("--package-version", metavar="VERSION", help="Package version")
    parser.add_argument("--repository-url", metavar="URL", help="Repository URL for the manifest")
    parser.add_argument(
        "--strict-dependencies",
        action="store_true",
        default=None,
        help="Fail on conflicting dependency versions instead of warning",
    )
    parser.add_argument(
        "--no-docs",
        dest="add_docs",
        action="store_false",
        default=None,
        help="Don't copy IR docs into generated code",
    )


def _load_input(args: argparse.Namespace) -> IntermediateRepresentation:
    if args.url:
        return load_ir_from_url(args.url)
    return load_ir(args.file)


def _build_config(args: argparse.Namespace) -> GeneratorConfig:
    manager = ConfigManager()
    overrides = {
        "package_name": args.package_name,
        "package_version": args.package_version,
        "repository_url": args.repository_url,
        "strict_dependencies": args.strict_dependencies,
        "add_docs": args.add_docs,
        "output_dir": getattr(args, "output", None),
    }
    config = manager.get_config(overrides, args.config)

    for warning in manager.validate_config(config):
        console.print(f"[yellow]⚠️  {warning}[/yellow]")
    return config


def _handle_generate(args: argparse.Namespace) -> int:
    ir = _load_input(args)
    config = _build_config(args)
    if not config.output_dir:
        raise CLIError("--output is required (or output_dir in the configuration file)")

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
        transient=True,
    ) as progress:
        progress.add_task(f"Generating {config.package_name}...", total=None)
        generator = SdkGenerator(ir, config, package_writer=PackageWriter())
        package = generator.generate()

    _print_summary(package)
    console.print(f"[green]✓[/green] Package written to [bold]{package.output_path}[/bold]")
    return 0


def _handle_inspect(args: argparse.Namespace) -> int:
    ir = _load_input(args)
    config = _build_config(args)
    package = SdkGenerator(ir, config).generate()

    table = Table(title=f"📁 {config.package_name}", box=box.ROUNDED, title_style="bold cyan")
    table.add_column("File", style="green")
    table.add_column("Lines", justify="right", style="dim")
    for path, content in package.files.items():
        table.add_row(path, str(content.count("\n")))

    console.print()
    console.print(table)
    _print_summary(package)
    return 0


def _handle_utilities(args: argparse.Namespace) -> int:
    table = Table(title="🧰 Core Utilities", box=box.ROUNDED, title_style="bold cyan")
    table.add_column("Name", style="bold green", no_wrap=True)
    table.add_column("Depends on", style="blue")
    table.add_column("Packages", style="cyan")
    table.add_column("Description", style="dim")

    for name, descriptor in sorted(CORE_UTILITY_CATALOG.items()):
        table.add_row(
            name,
            ", ".join(descriptor.depends_on) or "[dim]none[/dim]",
            ", ".join(f"{package}{version}" for package, version in descriptor.dependencies)
            or "[dim]none[/dim]",
            descriptor.description,
        )

    console.print()
    console.print(table)
    return 0


def _print_summary(package: GeneratedPackage) -> None:
    dependencies = "\n".join(
        f"  {dependency.to_requirement()}" + (" (peer)" if dependency.prefer_peer else "")
        for dependency in package.dependencies.values()
    ) or "  none"
    utilities = ", ".join(descriptor.name for descriptor in package.used_utilities) or "none"
    summary = (
        f"[bold]Files:[/bold] {len(package.files)}\n"
        f"[bold]Skipped (empty):[/bold] {len(package.skipped_files)}\n"
        f"[bold]Root client:[/bold] {package.root_client_name or 'none'}\n"
        f"[bold]Core utilities:[/bold] {utilities}\n"
        f"[bold]Dependencies:[/bold]\n{dependencies}"
    )
    console.print(Panel(summary, title="📦 Generation Summary", border_style="blue"))


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point of the ``sdkgen`` console script."""
    parser = create_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=args.verbose, log_file=Path(args.log_file) if args.log_file else None)

    if not getattr(args, "func", None):
        parser.print_help()
        return 1

    try:
        return args.func(args)
    except (GeneratorError, ConfigError, CLIError) as e:
        logger.debug("Generation failed", exc_info=True)
        console.print(f"[red]✗ Error:[/red] {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
