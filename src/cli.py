"""CLI interface for contentconv."""

import logging
import sys
from pathlib import Path
from typing import Annotated, Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from contentconv.config import ConverterConfig, load_config, merge_cli_overrides
from contentconv.content.models import FIELD_ORDER, ContentRecord, ParseMode
from contentconv.export.serializer import to_csv_row, to_tab_separated, write_csv
from contentconv.extraction.models import ExtractionStatus
from contentconv.session import ConverterSession

app = typer.Typer(
    name="contentconv",
    help="Convert pasted slug/title/content blocks into TSV and CSV.",
)

console = Console()
err_console = Console(stderr=True)

SourceArg = Annotated[
    str,
    typer.Argument(help="File containing the content block, or '-' for stdin."),
]
ModeOption = Annotated[
    Optional[ParseMode],
    typer.Option(
        "--mode",
        "-m",
        help="Field matching: 'strict' (fixed order) or 'tolerant' (any order).",
        case_sensitive=False,
    ),
]


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        from contentconv import __version__

        console.print(f"contentconv {__version__}")
        raise typer.Exit()


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


@app.callback()
def main(
    ctx: typer.Context,
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable debug logging."),
    ] = False,
    config_path: Annotated[
        Optional[Path],
        typer.Option("--config", "-c", help="Path to a .contentconv.toml file."),
    ] = None,
) -> None:
    """contentconv - Extract content fields and export them as TSV or CSV."""
    _setup_logging(verbose)
    try:
        ctx.obj = load_config(config_path)
    except ValidationError as exc:
        err_console.print(f"[red]Error:[/red] Invalid configuration: {escape(str(exc))}")
        raise typer.Exit(2)


def _read_source(source: str) -> str:
    if source == "-":
        return sys.stdin.read()
    path = Path(source)
    if not path.is_file():
        err_console.print(f"[red]Error:[/red] File not found: {escape(source)}")
        raise typer.Exit(1)
    try:
        return path.read_text(encoding="utf-8")
    except (UnicodeDecodeError, OSError) as exc:
        err_console.print(f"[red]Error:[/red] Cannot read {escape(source)}: {escape(str(exc))}")
        raise typer.Exit(1)


def _resolve_config(ctx: typer.Context, **overrides: object) -> ConverterConfig:
    config = ctx.obj if isinstance(ctx.obj, ConverterConfig) else load_config()
    return merge_cli_overrides(config, **overrides)


def _parse_or_exit(source: str, config: ConverterConfig) -> Optional[ContentRecord]:
    """Run the extractor; return None for empty input, exit 1 on failure."""
    session = ConverterSession(
        mode=config.parsing.mode,
        policy=config.parsing.failure_policy,
    )
    result = session.update(_read_source(source))

    if result.status == ExtractionStatus.EMPTY:
        err_console.print("[yellow]No content to parse.[/yellow]")
        return None
    if result.status == ExtractionStatus.FAILED:
        message = result.error.message if result.error else "Extraction failed."
        err_console.print(f"[red]Error:[/red] {escape(message)}")
        raise typer.Exit(1)
    return session.record


def _record_table(record: ContentRecord) -> Table:
    table = Table(title=f"Record {record.id}", show_header=True)
    table.add_column("Field", style="bold")
    table.add_column("Value", overflow="fold")
    table.add_row("id", str(record.id))
    for name in FIELD_ORDER:
        table.add_row(name, Text(getattr(record, name)))
    return table


@app.command(name="parse")
def parse_cmd(
    ctx: typer.Context,
    source: SourceArg = "-",
    mode: ModeOption = None,
) -> None:
    """Parse a content block and show the extracted fields."""
    config = _resolve_config(ctx, mode=mode)
    record = _parse_or_exit(source, config)
    if record is None:
        raise typer.Exit(0)
    console.print(_record_table(record))


@app.command(name="tsv")
def tsv_cmd(
    ctx: typer.Context,
    source: SourceArg = "-",
    mode: ModeOption = None,
) -> None:
    """Print the tab-separated clipboard payload."""
    config = _resolve_config(ctx, mode=mode)
    record = _parse_or_exit(source, config)
    if record is None:
        raise typer.Exit(0)
    typer.echo(to_tab_separated(record))


@app.command(name="csv")
def csv_cmd(
    ctx: typer.Context,
    source: SourceArg = "-",
    mode: ModeOption = None,
    header: Annotated[
        Optional[bool],
        typer.Option("--header/--no-header", help="Include the CSV header row."),
    ] = None,
    output: Annotated[
        Optional[Path],
        typer.Option("--output", "-o", help="Directory to write the CSV file into."),
    ] = None,
    safe_names: Annotated[
        Optional[bool],
        typer.Option(
            "--safe-names/--raw-names",
            help="Restrict the slug in the file name to [A-Za-z0-9._-], or use it verbatim.",
        ),
    ] = None,
    to_stdout: Annotated[
        bool,
        typer.Option("--stdout", help="Print the CSV instead of writing a file."),
    ] = False,
) -> None:
    """Export the parsed record as a CSV file named content_<slug>.csv."""
    # Unset flags defer to the config file.
    config = _resolve_config(
        ctx,
        mode=mode,
        include_header=header,
        output_dir=output,
        safe_filenames=safe_names,
    )
    record = _parse_or_exit(source, config)
    if record is None:
        raise typer.Exit(0)

    if to_stdout:
        typer.echo(to_csv_row(record, include_header=config.export.include_header))
        return

    try:
        path = write_csv(
            record,
            Path(config.export.output_dir),
            include_header=config.export.include_header,
            safe_names=config.export.safe_filenames,
        )
    except OSError as exc:
        err_console.print(f"[red]Error:[/red] Failed to write CSV: {escape(str(exc))}")
        raise typer.Exit(1)

    console.print(f"[green]CSV written:[/green] {escape(str(path))}", soft_wrap=True)


if __name__ == "__main__":
    app()
