"""Command-line interface for text-stylization.

Provides commands for styling character ranges of HTML fragments from the terminal.
"""

from pathlib import Path
from typing import Annotated

import typer

from . import TextStylization, __version__
from .dom import parse_html
from .range_files import load_ranges_file, parse_range_spec

app = typer.Typer(
    name="text-stylize",
    help="Apply and remove class-name styles over character ranges of HTML fragments.",
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"text-stylize version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-v",
            help="Show version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """Apply and remove class-name styles over character ranges of HTML fragments."""
    pass


@app.command()
def apply(
    file: Annotated[Path, typer.Argument(help="Path to the HTML fragment file")],
    style: Annotated[str, typer.Option("--style", "-s", help="Class name to apply")],
    ranges: Annotated[
        list[str] | None,
        typer.Option("--range", "-r", help="Range as START:END (repeatable)"),
    ] = None,
    ranges_file: Annotated[
        Path | None, typer.Option("--ranges-file", help="Path to YAML/JSON ranges file")
    ] = None,
    file_format: Annotated[
        str, typer.Option("--format", help="Ranges file format: yaml or json")
    ] = "yaml",
    output: Annotated[Path | None, typer.Option("--output", "-o", help="Output file path")] = None,
) -> None:
    """Wrap the text of each range in a span carrying the style."""
    try:
        text_ranges = [parse_range_spec(spec) for spec in ranges or []]
        if ranges_file is not None:
            text_ranges.extend(load_ranges_file(ranges_file, format=file_format))
        if not text_ranges:
            typer.echo("Error: Must specify at least one --range or a --ranges-file", err=True)
            raise typer.Exit(1)

        root = parse_html(file.read_text(encoding="utf-8"))
        groups = TextStylization(root, style).apply_to_ranges(text_ranges)

        output_path = output or file
        output_path.write_text(root.outer_html, encoding="utf-8")
        affected = sum(len(nodes) for nodes in groups)
        typer.echo(
            f"Applied '{style}' to {len(text_ranges)} range(s) "
            f"({affected} node(s) affected), saved to {output_path}"
        )
    except typer.Exit:
        raise
    except Exception as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)


@app.command()
def clear(
    file: Annotated[Path, typer.Argument(help="Path to the HTML fragment file")],
    style: Annotated[str, typer.Option("--style", "-s", help="Class name to remove")],
    output: Annotated[Path | None, typer.Option("--output", "-o", help="Output file path")] = None,
) -> None:
    """Remove the style, dissolving the spans that only carried it."""
    try:
        root = parse_html(file.read_text(encoding="utf-8"))
        count = TextStylization(root, style).clear()

        output_path = output or file
        output_path.write_text(root.outer_html, encoding="utf-8")
        typer.echo(f"Cleared '{style}' from {count} element(s), saved to {output_path}")
    except Exception as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)


@app.command()
def text(
    file: Annotated[Path, typer.Argument(help="Path to the HTML fragment file")],
) -> None:
    """Print the plain text that range offsets refer to."""
    try:
        root = parse_html(file.read_text(encoding="utf-8"))
        typer.echo(root.text_content)
    except Exception as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
