"""Command-line interface for evalfilter."""

import json
import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from evalfilter.config.defaults import LOG_DATE_FORMAT, LOG_FORMAT

app = typer.Typer(
    name="evalfilter",
    help="evalfilter: compile logic filters and check numeric column values",
    add_completion=False,
)

console = Console()


def setup_logging(verbose: bool = False) -> None:
    """Configure logging."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT,
    )


def apply_log_level(log_level: str, verbose: bool = False) -> None:
    """Use the catalog's configured log level unless --verbose was given."""
    if not verbose:
        logging.getLogger().setLevel(log_level)


def _read_json(path: Path) -> dict:
    if not path.exists():
        console.print(f"[red]Error: File not found: {path}[/red]")
        raise typer.Exit(1)
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        console.print(f"[red]Error: Invalid JSON in {path}: {escape(str(e))}[/red]")
        raise typer.Exit(1)


@app.command()
def operators(
    catalog: Path = typer.Argument(..., help="Path to catalog configuration YAML file"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging"),
) -> None:
    """Show the fields of a catalog with their widgets and operators."""
    setup_logging(verbose)

    from evalfilter.config.schemas import CatalogConfig, CatalogConfigError

    try:
        config = CatalogConfig.from_yaml(catalog)
    except (CatalogConfigError, ValueError) as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(1)
    apply_log_level(config.logging.log_level, verbose)

    fields = config.build_catalog().available_fields(config.disabled_fields)
    if not fields:
        console.print("[yellow]No fields configured.[/yellow]")
        return

    table = Table(show_header=True, title=f"Fields: {config.name}")
    table.add_column("Name", no_wrap=True)
    table.add_column("Type")
    table.add_column("Widget")
    table.add_column("Operators")

    for field in fields:
        data_type = field.type if field.data_type else f"[red]{escape(field.type)}[/red]"
        table.add_row(
            field.name,
            data_type,
            field.widget.value,
            ", ".join(field.operator_ids) or "-",
        )

    console.print(table)


@app.command(name="compile")
def compile_command(
    catalog: Path = typer.Argument(..., help="Path to catalog configuration YAML file"),
    logic_filter: Path = typer.Argument(..., help="Path to logic filter JSON file"),
    simple: Optional[Path] = typer.Option(
        None, "--simple", "-s",
        help="Path to simple filter JSON object",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging"),
) -> None:
    """Compile a logic filter into the backend filter request."""
    setup_logging(verbose)

    from pydantic import ValidationError

    from evalfilter.compiler import compile_filter
    from evalfilter.config.schemas import CatalogConfig, CatalogConfigError
    from evalfilter.expr import LogicFilter

    try:
        config = CatalogConfig.from_yaml(catalog)
        parsed = LogicFilter.model_validate(_read_json(logic_filter))
    except (CatalogConfigError, ValidationError) as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(1)
    apply_log_level(config.logging.log_level, verbose)

    simple_filter = _read_json(simple) if simple else None

    compiled = compile_filter(
        parsed.completed(),
        simple_filter,
        catalog=config.build_catalog(),
        filter_fields=config.filter_fields,
    )
    typer.echo(json.dumps(compiled.to_wire(), indent=2, ensure_ascii=False))


@app.command()
def validate(
    value: str = typer.Argument(..., help="Raw value to check"),
    schema: str = typer.Option("", "--schema", help="Column JSON schema"),
) -> None:
    """Validate a numeric value against a column schema."""
    from evalfilter.numeric import validate as validate_value

    result = validate_value(value, schema)
    if result.ok:
        console.print(f"[green]✓ {escape(value)} is valid[/green]")
        return

    console.print(f"[red]✗ {result.reason.value}: {escape(result.message or '')}[/red]")
    raise typer.Exit(1)


@app.command()
def normalize(
    value: str = typer.Argument(..., help="Raw value to repair"),
    schema: str = typer.Option("", "--schema", help="Column JSON schema"),
) -> None:
    """Clamp and round a numeric value to satisfy a column schema."""
    from evalfilter.numeric import normalize as normalize_value

    typer.echo(normalize_value(value, schema))


def main() -> None:
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
