from __future__ import annotations

from pathlib import Path

import typer

from l5r4.validation import load_character, PrettyError


validate_app = typer.Typer(help="Validate L5R4 data files")


@validate_app.command()
def character(file: Path = typer.Argument(..., exists=True)):
    """Validate a character json/yaml file."""
    try:
        _ = load_character(file)
        typer.secho(f"OK: {file}", fg=typer.colors.GREEN)
    except PrettyError as e:
        typer.secho(f"ERR: {file}\n{e}", fg=typer.colors.RED)
        raise typer.Exit(1)


__all__ = ["validate_app"]
