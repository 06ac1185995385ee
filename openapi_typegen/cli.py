"""
Command-line interface for openapi-typegen.

Loads an OpenAPI document, names its types for a target language and
prints the resulting declarations.
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from .codegen import (
    ConfigError,
    GenerationResult,
    GeneratorConfig,
    RegistryError,
    SchemaConversionError,
    convert_document,
    generate_types,
    get_generator,
    get_language_info,
    get_registry,
    list_supported_languages,
    load_config,
)
from .codegen.core.config import get_config_manager
from .codegen.core.declarations import Declaration
from .codegen.core.naming import NamingStrategy
from .logging_config import configure_logging, get_logger
from .utils import DocumentLoaderError, load_document

logger = get_logger(__name__)


class CLIError(Exception):
    """Exception raised for CLI-related errors."""

    pass


# Initialize rich console
console = Console()


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="openapi-typegen",
        description="Name the types of an OpenAPI document and detect recursive types",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  openapi-typegen openapi.yaml
  openapi-typegen --url https://example.com/openapi.json --language python
  openapi-typegen openapi.yaml --naming-strategy idiomatic --output summary.json
  openapi-typegen --list-languages
        """.strip(),
    )

    # Input options (mutually exclusive)
    input_group = parser.add_mutually_exclusive_group(required=False)
    input_group.add_argument("file", nargs="?", help="OpenAPI document (JSON or YAML)")
    input_group.add_argument("--url", help="URL to fetch the document from")

    parser.add_argument("--language", "-l", help="Target language (default: swift)")
    parser.add_argument(
        "--naming-strategy",
        choices=[strategy.value for strategy in NamingStrategy],
        help="How document names become identifiers",
    )
    parser.add_argument("--config", help="Configuration file path (JSON or YAML)")
    parser.add_argument(
        "--name-override",
        action="append",
        default=[],
        metavar="NAME=IDENTIFIER",
        help="Use IDENTIFIER wherever the document says NAME (repeatable)",
    )
    parser.add_argument(
        "--no-operations",
        action="store_true",
        help="Only name component types, skip operations",
    )
    parser.add_argument(
        "--detect-collisions",
        action="store_true",
        help="Fail when two names map to the same identifier",
    )
    parser.add_argument("--output", "-o", help="Write a JSON summary to this file")
    parser.add_argument("--verbose", "-v", action="store_true", help="Show debug logging")

    info_group = parser.add_argument_group("information")
    info_group.add_argument(
        "--list-languages",
        action="store_true",
        help="List supported languages and exit",
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Run the CLI.

    Args:
        argv: Arguments, defaults to ``sys.argv[1:]``

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    configure_logging("DEBUG" if args.verbose else "WARNING")

    try:
        if args.list_languages:
            return _list_languages()

        if not (args.file or args.url):
            raise CLIError("Input source required (file or --url)")

        config = _build_config(args)
        generator = get_generator(config.language, config)

        _, raw_document = load_document(file_path=args.file, url=args.url)
        document = convert_document(raw_document)

        result = generate_types(generator, document)
        if not result.success:
            console.print(f"[red]✗ {escape(result.error_message)}[/red]")
            return 1

        _print_result(result, generator)

        if args.output:
            _write_summary(result, generator, Path(args.output))
            console.print(f"[green]✓[/green] Summary written to {args.output}")

        return 0

    except (CLIError, ConfigError, RegistryError, DocumentLoaderError, SchemaConversionError) as e:
        console.print(f"[red]✗ Error:[/red] {escape(str(e))}")
        return 1
    except FileNotFoundError as e:
        console.print(f"[red]✗ Error:[/red] {escape(str(e))}")
        return 1


def _parse_name_overrides(values: List[str]) -> Dict[str, str]:
    overrides = {}
    for value in values:
        name, separator, identifier = value.partition("=")
        if not separator or not name or not identifier:
            raise CLIError(f"Invalid --name-override '{value}', expected NAME=IDENTIFIER")
        overrides[name] = identifier
    return overrides


def _build_config(args: argparse.Namespace) -> GeneratorConfig:
    """Build configuration from CLI arguments."""
    overrides: Dict[str, Any] = {}

    if args.naming_strategy:
        overrides["naming_strategy"] = args.naming_strategy
    if args.no_operations:
        overrides["include_operations"] = False
    if args.detect_collisions:
        overrides["detect_collisions"] = True

    name_overrides = _parse_name_overrides(args.name_override)

    # Aliases resolve to the primary name so its defaults apply.
    language = get_registry().resolve_language(args.language) if args.language else None

    config = load_config(language, overrides, args.config)
    if name_overrides:
        config.name_overrides = {**config.name_overrides, **name_overrides}

    for warning in get_config_manager().validate_config(config):
        console.print(f"[yellow]⚠️  {warning}[/yellow]")

    return config


def _list_languages() -> int:
    """List supported languages with details."""
    table = Table(title="📋 Supported Languages", box=box.ROUNDED, title_style="bold cyan")
    table.add_column("Language", style="bold green", no_wrap=True)
    table.add_column("Generator Class", style="dim")
    table.add_column("Naming", style="cyan")
    table.add_column("Aliases", style="blue")
    table.add_column("Optional string array", style="magenta")

    for language in list_supported_languages():
        info = get_language_info(language)
        aliases = ", ".join(info["aliases"]) if info["aliases"] else "[dim]none[/dim]"
        table.add_row(
            f"🔧 {language}",
            info["class"],
            info["naming_strategy"],
            aliases,
            escape(info["example_usage"]),
        )

    console.print()
    console.print(table)
    console.print()
    return 0


def _print_result(result: GenerationResult, generator) -> None:
    """Print declarations and diagnostics."""
    output = result.output

    table = Table(
        title=f"📦 {result.metadata.get('title') or 'Document'} ({generator.language_name})",
        box=box.ROUNDED,
        title_style="bold cyan",
    )
    table.add_column("Type", style="bold green")
    table.add_column("Kind", style="cyan")
    table.add_column("JSON Path", style="dim")
    table.add_column("Boxed", justify="center")

    for declaration in output.declarations:
        for nested in declaration.walk():
            table.add_row(
                nested.type_name.fully_qualified_name,
                nested.kind.value,
                escape(nested.type_name.fully_qualified_json_path or ""),
                "[magenta]yes[/magenta]" if nested.boxed else "",
            )

    console.print()
    console.print(table)

    if result.warnings:
        console.print(
            Panel(
                "\n".join(escape(warning) for warning in result.warnings),
                title=f"⚠️  Diagnostics ({len(result.warnings)})",
                border_style="yellow",
            )
        )

    boxed = result.metadata.get("boxed_types", [])
    console.print(
        f"[green]✓[/green] {result.metadata.get('declaration_count', 0)} declarations, "
        f"{len(boxed)} boxed"
    )


def _declaration_summary(declaration: Declaration, generator) -> Dict[str, Any]:
    summary: Dict[str, Any] = {
        "name": declaration.type_name.fully_qualified_name,
        "json_path": declaration.type_name.fully_qualified_json_path,
        "kind": declaration.kind.value,
        "boxed": declaration.boxed,
    }
    if declaration.aliased is not None:
        summary["aliased"] = generator.render_usage(declaration.aliased)
    if declaration.members:
        summary["members"] = [
            {
                "name": member.name,
                "original_name": member.original_name,
                "type": generator.render_usage(member.usage) if member.usage else None,
            }
            for member in declaration.members
        ]
    if declaration.nested:
        summary["nested"] = [_declaration_summary(nested, generator) for nested in declaration.nested]
    return summary


def _write_summary(result: GenerationResult, generator, output_path: Path) -> None:
    summary = {
        "metadata": result.metadata,
        "warnings": result.warnings,
        "declarations": [
            _declaration_summary(declaration, generator)
            for declaration in result.output.declarations
        ],
    }
    try:
        output_path.write_text(json.dumps(summary, indent=2, ensure_ascii=False), encoding="utf-8")
    except OSError as e:
        raise CLIError(f"Failed to write summary to {output_path}: {e}") from e


if __name__ == "__main__":
    sys.exit(main())
