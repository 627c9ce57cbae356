from __future__ import annotations

"""Stackette Command Line Interface."""

from pathlib import Path

import typer
from jsonschema import ValidationError as SchemaError
from pydantic import ValidationError
from rich import box
from rich.table import Table

from stackette.core.stack import App
from stackette.utils.constants import SYMBOLS
from stackette.utils.logging import console, get, show_tree
from stackette.yaml_loader import load_app

app = typer.Typer(
    name="stackette",
    help="CLI for Stackette: typed, declarative resource composition.",
    add_completion=False,
)

_FILE_ARG = dict(exists=True, file_okay=True, dir_okay=False, readable=True)


def _load(yaml_file: Path) -> App:
    """Load *yaml_file*, turning every known failure into a clean exit."""
    try:
        return load_app(yaml_file)
    except SchemaError as e:
        path = "/".join(str(p) for p in e.absolute_path) or "<root>"
        console.print(f"{SYMBOLS['error']}[bold red]Invalid file {yaml_file} at {path}: {e.message}[/]")
    except ValidationError as e:
        console.print(f"{SYMBOLS['error']}[bold red]Invalid cluster configuration:[/]\n{e}")
    except (KeyError, ValueError) as e:
        console.print(f"{SYMBOLS['error']}[bold red]{e}[/]")
    raise typer.Exit(code=1)


def _summary(templates: dict) -> Table:
    table = Table(title="Synthesized Stacks", box=box.ROUNDED)
    table.add_column("Stack", style="cyan", no_wrap=True)
    table.add_column("Resources", style="magenta", justify="right")
    table.add_column("Outputs", style="green", justify="right")
    for name, template in templates.items():
        table.add_row(
            name,
            str(len(template.get("Resources", {}))),
            str(len(template.get("Outputs", {}))),
        )
    return table


@app.command()
def synth(
    yaml_file: Path = typer.Argument(..., help="YAML app file.", **_FILE_ARG),
    out: Path = typer.Option(Path("cdk.out"), "--out", "-o", help="Directory to write templates to.", file_okay=False, dir_okay=True, resolve_path=True),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log every resource as it is declared."),
):
    """Render every stack in YAML_FILE and write the templates to --out."""
    get("debug" if verbose else "info")
    app_obj = _load(yaml_file)

    try:
        templates = app_obj.synth(out)
    except ValueError as e:
        console.print(f"{SYMBOLS['error']}[bold red]Synthesis failed: {e}[/]")
        raise typer.Exit(code=1)

    console.print(_summary(templates))
    console.print(f"{SYMBOLS['success']}Templates written to {out}")


@app.command()
def inspect(
    yaml_file: Path = typer.Argument(..., help="YAML app file.", **_FILE_ARG),
):
    """Print the construct tree without writing anything."""
    app_obj = _load(yaml_file)
    show_tree(app_obj)


@app.command()
def validate(
    yaml_file: Path = typer.Argument(..., help="YAML app file.", **_FILE_ARG),
):
    """Load and render YAML_FILE, reporting problems without writing files."""
    app_obj = _load(yaml_file)
    try:
        templates = app_obj.synth()
    except ValueError as e:
        console.print(f"{SYMBOLS['error']}[bold red]{e}[/]")
        raise typer.Exit(code=1)

    total = sum(len(t.get("Resources", {})) for t in templates.values())
    console.print(f"{SYMBOLS['success']}[bold green]{len(templates)} stack(s), {total} resource(s) – all valid.[/]")


if __name__ == "__main__":
    app()
