"""
Command-line interface for binding generation.

Loads resolver output, generates Scala bindings for one world and prints
them. Nothing is written to disk.
"""

import argparse
import logging
import sys
from typing import List, Optional

from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich.syntax import Syntax
from rich import box

from . import __version__
from .codegen import (
    GenerationResult,
    GeneratorConfig,
    generate_bindings,
    get_generator,
    load_config,
    select_world,
)
from .codegen.core.config import ConfigError, get_config_manager
from .codegen.core.loader import SchemaLoadError
from .logging_config import get_logger, setup_logging
from .utils import load_schema

logger = get_logger(__name__)


class CLIError(Exception):
    """Exception raised for CLI-related errors."""

    pass


# Initialize rich console
console = Console()


def create_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="wit-scala",
        description="Generate Scala.js component model bindings from resolved WIT",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  wasm-tools component wit --json ./wit | wit-scala - --show
  wit-scala resolve.json --world my-world --base-package com.example.wasm
  wit-scala resolve.json --plain --binding-root src/main/scala > bindings.txt
        """.strip(),
    )

    # Input options (mutually exclusive)
    input_group = parser.add_mutually_exclusive_group(required=False)
    input_group.add_argument(
        "schema",
        nargs="?",
        help="Resolver JSON file ('-' reads standard input)",
    )
    input_group.add_argument("--url", help="URL to fetch resolver JSON from")

    parser.add_argument("--world", "-w", help="World to generate (default: the only one)")

    # Generation options
    gen_group = parser.add_argument_group("generation options")
    gen_group.add_argument(
        "--base-package",
        metavar="PACKAGE",
        help="Package prefix for generated code (default: componentmodel)",
    )
    gen_group.add_argument(
        "--binding-root",
        metavar="DIR",
        help="Directory prefix for generated file paths",
    )
    gen_group.add_argument(
        "--config", metavar="FILE", help="JSON configuration file for code generation"
    )
    gen_group.add_argument(
        "--no-comments",
        action="store_true",
        help="Don't emit Scaladoc from WIT documentation",
    )

    # Output options
    out_group = parser.add_argument_group("output options")
    out_group.add_argument(
        "--show",
        action="store_true",
        help="Print every generated file with syntax highlighting",
    )
    out_group.add_argument(
        "--plain",
        action="store_true",
        help="Print generated files as plain text, each preceded by a path comment",
    )
    out_group.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Show debug logging and generation metadata",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Run the command line.

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    setup_logging(logging.DEBUG if args.verbose else logging.WARNING)

    if not (args.schema or args.url):
        console.print("[red]✗[/red] Input source required (file, '-' or --url)")
        return 1

    try:
        config = _build_config(args)
        _, graph = load_schema(file_path=args.schema, url=args.url)
        world_id = select_world(graph, args.world)
        generator = get_generator("scala", config)
        result = generate_bindings(generator, graph, world_id)
        return _output_result(result, args)

    except (CLIError, ConfigError, SchemaLoadError, FileNotFoundError) as e:
        console.print(f"[red]✗ Error:[/red] {e}")
        return 1


def _build_config(args: argparse.Namespace) -> GeneratorConfig:
    """Build configuration from the config file and CLI arguments."""
    config_dict = {}

    if args.base_package:
        config_dict["base_package"] = args.base_package

    if args.binding_root:
        config_dict["binding_root"] = args.binding_root

    if args.no_comments:
        config_dict["add_comments"] = False

    config = load_config(custom_config=config_dict, config_file=args.config)

    warnings = get_config_manager().validate_config(config)
    if warnings:
        raise CLIError("; ".join(warnings))

    logger.debug(f"Generating into package {config.base_package}")

    return config


def _output_result(result: GenerationResult, args: argparse.Namespace) -> int:
    """Print generated files and metadata."""
    if not result.success:
        console.print(f"[red]✗ {result.error_message}[/red]")
        if result.exception is not None:
            console.print(f"[dim]Details: {type(result.exception).__name__}[/dim]")
        return 1

    if args.plain:
        for path, code in result.files.items():
            sys.stdout.write(f"// {path}\n{code}")
            if not code.endswith("\n"):
                sys.stdout.write("\n")
        # stdout carries only the sources
        for warning in result.warnings:
            logger.warning(warning)
        return 0

    _print_summary(result)

    if args.show:
        for path, code in result.files.items():
            console.print()
            console.print(
                Panel(
                    Syntax(code, "scala", theme="monokai", line_numbers=False),
                    title=f"📄 {path}",
                    border_style="green",
                )
            )

    if args.verbose and result.metadata:
        metadata_table = Table(
            title="📊 Generation Metadata",
            box=box.SIMPLE,
            show_header=True,
            header_style="bold cyan",
        )
        metadata_table.add_column("Property", style="bold")
        metadata_table.add_column("Value", style="green")

        for key, value in result.metadata.items():
            metadata_table.add_row(key.replace("_", " ").title(), str(value))

        console.print()
        console.print(metadata_table)

    if result.warnings:
        console.print("\n[yellow]⚠️  Warnings:[/yellow]")
        for warning in result.warnings:
            console.print(f"  [yellow]•[/yellow] {warning}")
        console.print()

    return 0


def _print_summary(result: GenerationResult):
    """Print a table of generated files."""
    if not result.files:
        console.print("[yellow]⚠️ Nothing to generate for this world[/yellow]")
        return

    table = Table(
        title=f"📋 Generated Files ({result.metadata.get('world', '')})",
        box=box.ROUNDED,
        title_style="bold cyan",
    )
    table.add_column("Path", style="bold green", overflow="fold")
    table.add_column("Lines", style="cyan", justify="right")

    for path, code in result.files.items():
        table.add_row(path, str(len(code.splitlines())))

    console.print()
    console.print(table)


if __name__ == "__main__":
    sys.exit(main())
