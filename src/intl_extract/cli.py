"""intl-extract CLI: extract react-intl message catalogs from source code."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

app = typer.Typer(
    name="intl-extract",
    help="intl-extract: static extraction of react-intl message descriptors",
    no_args_is_help=True,
)
console = Console()
err_console = Console(stderr=True)

DEFAULT_IGNORE_FILE = (
    "# intl-extract ignore patterns\n"
    "# Uses .gitignore syntax\n"
    "*.test.js\n"
    "*.spec.js\n"
    "__tests__/\n"
    "stories/\n"
)


@app.callback()
def main(
    verbose: bool = typer.Option(
        False,
        "--verbose", "-v",
        help="Show debug log output.",
    ),
) -> None:
    """Configure logging before any command runs."""
    from intl_extract.logging_config import configure_logging

    configure_logging(verbose)


@app.command()
def init(
    path: Path = typer.Argument(
        Path("."),
        help="Project root directory to initialize.",
    ),
) -> None:
    """Write a default configuration and ignore file into a project."""
    from intl_extract.config import CONFIG_RELATIVE_PATH, IntlExtractConfig
    from intl_extract.ignore import IGNORE_FILENAME

    path = path.resolve()

    config_file = path / CONFIG_RELATIVE_PATH
    if config_file.exists():
        console.print(f"  [yellow]exists[/yellow]  {CONFIG_RELATIVE_PATH}")
    else:
        config_file.parent.mkdir(parents=True, exist_ok=True)
        config = IntlExtractConfig()
        config.project.name = path.name
        config.extraction.messages_dir = Path("build/messages")
        config_file.write_text(config.to_yaml())
        console.print(f"  [green]created[/green] {CONFIG_RELATIVE_PATH}")

    ignore_file = path / IGNORE_FILENAME
    if ignore_file.exists():
        console.print(f"  [yellow]exists[/yellow]  {IGNORE_FILENAME}")
    else:
        ignore_file.write_text(DEFAULT_IGNORE_FILE)
        console.print(f"  [green]created[/green] {IGNORE_FILENAME}")

    console.print(f"\n[bold green]intl-extract initialized in {path}[/bold green]")
    console.print("Run: intl-extract extract")


@app.command()
def extract(
    path: Path = typer.Argument(
        Path("."),
        help="Project root directory to scan.",
    ),
    messages_dir: Optional[Path] = typer.Option(
        None,
        "--messages-dir", "-o",
        help="Write one JSON catalog per source file under this directory.",
    ),
    extract_source_location: bool = typer.Option(
        False,
        "--extract-source-location",
        help="Attach file and start/end position to each descriptor.",
    ),
    enforce_descriptions: bool = typer.Option(
        False,
        "--enforce-descriptions",
        help="Fail when a message has no description.",
    ),
    module_source: Optional[str] = typer.Option(
        None,
        "--module-source",
        help="Module the react-intl components are imported from.",
    ),
) -> None:
    """Extract message descriptors from every source file in a project."""
    from intl_extract.config import IntlExtractConfig
    from intl_extract.scanner.project import extract_project

    path = path.resolve()
    config = IntlExtractConfig.load(path)

    options = config.extraction
    if messages_dir is not None:
        options.messages_dir = messages_dir.resolve()
    if extract_source_location:
        options.extract_source_location = True
    if enforce_descriptions:
        options.enforce_descriptions = True
    if module_source:
        options.module_source_name = module_source

    with console.status("[bold blue]Extracting messages..."):
        result, _ = extract_project(config)

    table = Table(title="Extraction Results")
    table.add_column("Metric", style="bold")
    table.add_column("Value", justify="right")
    table.add_row("Files processed", str(result.files_processed))
    table.add_row("Files skipped", str(result.files_skipped))
    table.add_row("Files failed", str(result.files_failed))
    table.add_row("Messages extracted", str(result.messages_extracted))
    table.add_row("Catalogs written", str(result.catalogs_written))
    table.add_row("Warnings", str(result.warnings))
    console.print(table)

    if result.errors:
        err_console.print(f"\n[red]Errors ({len(result.errors)}):[/red]")
        for err in result.errors:
            err_console.print(f"  - {err}", markup=False, highlight=False)
        raise typer.Exit(1)


@app.command()
def inspect(
    file: Path = typer.Argument(
        ...,
        help="Source file to extract from.",
    ),
    as_json: bool = typer.Option(
        False,
        "--json",
        help="Print the catalog as JSON instead of a table.",
    ),
    enforce_descriptions: bool = typer.Option(
        False,
        "--enforce-descriptions",
        help="Fail when a message has no description.",
    ),
) -> None:
    """Extract one file and print its messages without writing anything."""
    from intl_extract.config import ExtractionOptions
    from intl_extract.errors import ExtractionError
    from intl_extract.schema.models import dump_catalog
    from intl_extract.scanner.project import extract_code

    if not file.exists():
        err_console.print(f"[red]File not found:[/red] {file}")
        raise typer.Exit(1)

    options = ExtractionOptions(
        extract_source_location=True,
        enforce_descriptions=enforce_descriptions,
    )
    try:
        result = extract_code(file.read_bytes(), file, options)
    except ValueError as e:
        err_console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    except ExtractionError as e:
        err_console.print(str(e), markup=False, highlight=False)
        raise typer.Exit(1)

    if as_json:
        typer.echo(dump_catalog(result.messages))
        return

    table = Table(title=f"Messages in {file}")
    table.add_column("Id", style="cyan")
    table.add_column("Default message")
    table.add_column("Description")
    table.add_column("Line", justify="right")
    for message in result.messages:
        description = message.description
        if isinstance(description, (dict, list)):
            description = json.dumps(description, ensure_ascii=False)
        table.add_row(
            escape(str(message.id)),
            escape(message.default_message or ""),
            "" if description is None else escape(str(description)),
            str(message.start.line) if message.start else "",
        )
    console.print(table)

    for warning in result.warnings:
        console.print(f"[yellow]Warning:[/yellow] {escape(warning)}", highlight=False)


if __name__ == "__main__":
    app()
