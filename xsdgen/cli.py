"""
Command-line interface for xsdgen.

Loads an XSD document from a path or URL, parses it into a proto tree and
generates code for one or more target languages.
"""

import argparse
import sys
from typing import List, Optional

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.syntax import Syntax
from rich.table import Table

from .codegen import (
    GeneratorConfig,
    generate_code,
    get_generator,
    get_language_info,
    is_language_supported,
    list_all_language_info,
    list_supported_languages,
    load_config,
)
from .codegen.core.config import ConfigError
from .codegen.registry import RegistryError, get_registry
from .logging_config import configure_logging, get_logger
from .parser import SchemaParseError, parse_schema
from .utils import SchemaLoaderError, load_schema, prepare_output_dir, write_artifact

logger = get_logger(__name__)


class CLIError(Exception):
    """Exception raised for CLI-related errors."""

    pass


# Initialize rich console
console = Console()


def create_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="xsdgen",
        description="Generate code from XML Schema Definition (XSD) documents",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  xsdgen schema.xsd -l go
  xsdgen schema.xsd -l go -l java -o build/schema
  xsdgen https://example.com/schema.xsd -l ts --package-name api
  xsdgen --list-languages
  xsdgen --language-info rust
        """.strip(),
    )

    parser.add_argument("source", nargs="?", help="XSD file path or URL")

    # Core generation options
    parser.add_argument(
        "--language",
        "-l",
        action="append",
        metavar="LANGUAGE",
        help="Target language (repeatable; use --list-languages to see options)",
    )
    parser.add_argument(
        "--output",
        "-o",
        metavar="BASE",
        help="Output base name; the language extension is appended (default: stdout)",
    )
    parser.add_argument("--config", metavar="FILE", help="JSON configuration file")
    parser.add_argument(
        "--package-name", "--package", help="Package/namespace/module name"
    )
    parser.add_argument(
        "--no-comments",
        action="store_true",
        help="Don't add documentation comments to generated code",
    )
    parser.add_argument(
        "--timeout",
        type=int,
        default=30,
        help="Timeout in seconds when fetching a schema URL (default: 30)",
    )

    # Diagnostics
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Show generation result metadata",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: WARNING)",
    )

    # Informational commands
    info_group = parser.add_argument_group("information")
    info_group.add_argument(
        "--list-languages",
        action="store_true",
        help="List supported languages and exit",
    )
    info_group.add_argument(
        "--language-info",
        metavar="LANGUAGE",
        help="Show detailed info about a language and exit",
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Run the command line interface.

    Args:
        argv: Arguments without the program name (default: ``sys.argv[1:]``)

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    args = create_parser().parse_args(argv)
    configure_logging(args.log_level)

    try:
        if args.list_languages:
            return _list_languages()

        if args.language_info:
            return _show_language_info(args.language_info)

        if not args.source:
            console.print("[red]✗[/red] Schema source required (file path or URL)")
            return 1

        if not args.language:
            console.print("[red]✗[/red] --language is required for code generation")
            return 1

        for language in args.language:
            if not _validate_language(language):
                return 1

        tree = _load_tree(args.source, args.timeout)

        status = 0
        for language in args.language:
            config = _build_config(args, language)
            status |= _generate_and_output(tree, language, config, args)
        return status

    except CLIError as e:
        console.print(f"[red]✗ Error:[/red] {e}")
        return 1


def _list_languages() -> int:
    """List supported languages with details."""
    language_info = list_all_language_info()

    table = Table(
        title="📋 Supported Languages", box=box.ROUNDED, title_style="bold cyan"
    )
    table.add_column("Language", style="bold green", no_wrap=True)
    table.add_column("Extension", style="cyan")
    table.add_column("Generator Class", style="dim")
    table.add_column("Aliases", style="blue")

    for lang_name, info in sorted(language_info.items()):
        aliases = ", ".join(info["aliases"]) if info["aliases"] else "[dim]none[/dim]"
        table.add_row(lang_name, info["file_extension"], info["class"], aliases)

    console.print()
    console.print(table)
    console.print()
    console.print(
        Panel(
            "[bold]Usage:[/bold] xsdgen [dim]schema.xsd[/dim] --language [cyan]LANGUAGE[/cyan]\n"
            "[bold]Info:[/bold] xsdgen --language-info [cyan]LANGUAGE[/cyan]",
            title="💡 Quick Start",
            border_style="blue",
        )
    )
    return 0


def _show_language_info(language: str) -> int:
    """Show detailed information about a specific language."""
    if not _validate_language(language, silent=True):
        console.print(f"[red]✗ Language '{language}' is not supported[/red]")
        console.print("[dim]Use --list-languages to see available options[/dim]")
        return 1

    info = get_language_info(language)

    info_text = f"""[bold]Language:[/bold] {info['name']}
[bold]File Extension:[/bold] {info['file_extension']}
[bold]Generator Class:[/bold] {info['class']}
[bold]Module:[/bold] {info['module']}"""

    if info["aliases"]:
        info_text += f"\n[bold]Aliases:[/bold] {', '.join(info['aliases'])}"

    console.print()
    console.print(
        Panel(info_text, title=f"🔧 {info['name'].title()} Generator", border_style="green")
    )

    config: GeneratorConfig = info["config"]
    config_table = Table(
        title="⚙️  Default Configuration",
        box=box.SIMPLE,
        show_header=True,
        header_style="bold cyan",
    )
    config_table.add_column("Setting", style="bold")
    config_table.add_column("Value", style="green")

    config_table.add_row("Package Name", str(config.package_name))
    config_table.add_row("Indentation", "tabs" if config.use_tabs else str(config.indent_size))
    config_table.add_row("Add Comments", str(config.add_comments))
    for key, value in sorted(config.custom.items()):
        config_table.add_row(key.replace("_", " ").title(), str(value))

    console.print()
    console.print(config_table)
    return 0


def _validate_language(language: str, silent: bool = False) -> bool:
    """Validate that a language is supported."""
    if is_language_supported(language):
        return True
    if not silent:
        supported = list_supported_languages()
        console.print(f"[red]✗ Unsupported language '{language}'[/red]")
        console.print(f"[dim]Supported languages: {', '.join(supported)}[/dim]")
    return False


def _load_tree(source: str, timeout: int):
    """Load and parse the schema document."""
    try:
        return parse_schema(load_schema(source, timeout))
    except (SchemaLoaderError, SchemaParseError) as e:
        raise CLIError(f"Failed to load schema: {e}") from e


def _build_config(args: argparse.Namespace, language: str) -> GeneratorConfig:
    """Build configuration from CLI arguments."""
    overrides = {}

    if args.package_name:
        overrides["package_name"] = args.package_name

    if args.no_comments:
        overrides["add_comments"] = False

    try:
        return load_config(
            language=get_registry().resolve_language(language),
            custom_config=overrides,
            config_file=args.config,
        )
    except (ConfigError, RegistryError) as e:
        raise CLIError(f"Configuration error: {e}") from e


def _generate_and_output(tree, language: str, config: GeneratorConfig, args) -> int:
    """Generate code for one language and handle output with rich formatting."""
    generator = get_generator(language, config)

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
        transient=True,
    ) as progress:
        gen_task = progress.add_task(
            f"[green]Generating {generator.language_name} code...", total=None
        )
        result = generate_code(generator, tree)
        progress.remove_task(gen_task)

    if not result.success:
        console.print(f"[red]✗ Code generation failed:[/red] {result.error_message}")
        return 1

    if args.output:
        try:
            prepare_output_dir(args.output)
            output_path = write_artifact(args.output, generator.file_extension, result.code)
        except OSError as e:
            logger.error("Failed to write %s output: %s", language, e)
            console.print(f"[red]✗ Failed to write {language} output:[/red] {e}")
            return 1
        console.print(
            f"[green]✓[/green] Generated {generator.language_name} code saved to "
            f"[cyan]{output_path}[/cyan]"
        )
    else:
        console.print(Syntax(result.code, generator.language_name, theme="monokai"))

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


if __name__ == "__main__":
    sys.exit(main())
