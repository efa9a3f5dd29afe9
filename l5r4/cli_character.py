from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from l5r4.chat import card_text, render_console
from l5r4.engine.config import Settings, load_settings
from l5r4.engine.dice import seeded_executor
from l5r4.engine.rolls import (
    RollError,
    RollOutcome,
    ring_config_for,
    ring_roll,
    skill_config_for,
    skill_roll,
    trait_config_for,
    trait_roll,
)
from l5r4.models.character import Character
from l5r4.validation import PrettyError, load_character, save_character

char_app = typer.Typer(help="Rolls driven by a character file")


def _load(file: Path) -> Character:
    try:
        return load_character(file)
    except PrettyError as e:
        typer.secho(f"ERR: {file}\n{e}", fg=typer.colors.RED)
        raise typer.Exit(1)


def _settings(little_truths: Optional[bool]) -> Settings:
    return load_settings(little_truths=little_truths)


def _finish(outcome: RollOutcome, character: Character, file: Path, save: bool, plain: bool) -> None:
    if plain:
        typer.echo(card_text(outcome))
    else:
        render_console(outcome)
    if save and outcome.void_points_spent:
        character.void.points = max(0, character.void.points - outcome.void_points_spent)
        save_character(character, file)
        typer.secho(f"Void Points left: {character.void.points}", fg=typer.colors.YELLOW)


@char_app.command("skill")
def skill(
    file: Path = typer.Argument(..., exists=True, help="Character file (json/yaml)"),
    name: str = typer.Argument(..., help="Skill name, e.g. kenjutsu"),
    tn: int = typer.Option(0),
    raises: int = typer.Option(0),
    void: bool = typer.Option(False, help="Spend a Void Point for +1k1"),
    emphasis: bool = typer.Option(False, help="Reroll 1s once"),
    wound_penalty: bool = typer.Option(True, "--wound-penalty/--no-wound-penalty"),
    seed: Optional[int] = typer.Option(None),
    little_truths: Optional[bool] = typer.Option(None, "--little-truths/--no-little-truths"),
    save: bool = typer.Option(False, help="Write spent Void Points back to FILE"),
    plain: bool = typer.Option(False),
):
    """Roll Trait + Skill for a character."""
    character = _load(file)
    try:
        cfg = skill_config_for(
            character, name, tn=tn, raises=raises, void=void,
            emphasis=emphasis, apply_wound_penalty=wound_penalty,
        )
        outcome = skill_roll(cfg, _settings(little_truths), seeded_executor(seed))
    except (KeyError, RollError) as e:
        typer.secho(f"ERR: {e}", fg=typer.colors.RED)
        raise typer.Exit(1)
    _finish(outcome, character, file, save, plain)


@char_app.command("trait")
def trait(
    file: Path = typer.Argument(..., exists=True, help="Character file (json/yaml)"),
    name: str = typer.Argument(..., help="Trait, e.g. ref or Reflexes"),
    tn: int = typer.Option(0),
    raises: int = typer.Option(0),
    void: bool = typer.Option(False, help="Spend a Void Point for +1k1"),
    unskilled: bool = typer.Option(False, help="No exploding dice"),
    wound_penalty: bool = typer.Option(True, "--wound-penalty/--no-wound-penalty"),
    seed: Optional[int] = typer.Option(None),
    little_truths: Optional[bool] = typer.Option(None, "--little-truths/--no-little-truths"),
    save: bool = typer.Option(False, help="Write spent Void Points back to FILE"),
    plain: bool = typer.Option(False),
):
    """Roll a Trait for a character."""
    character = _load(file)
    try:
        cfg = trait_config_for(
            character, name, tn=tn, raises=raises, void=void,
            unskilled=unskilled, apply_wound_penalty=wound_penalty,
        )
        outcome = trait_roll(cfg, _settings(little_truths), seeded_executor(seed))
    except (KeyError, RollError) as e:
        typer.secho(f"ERR: {e}", fg=typer.colors.RED)
        raise typer.Exit(1)
    _finish(outcome, character, file, save, plain)


@char_app.command("ring")
def ring(
    file: Path = typer.Argument(..., exists=True, help="Character file (json/yaml)"),
    name: str = typer.Argument(..., help="Ring: air, earth, fire, water or void"),
    tn: int = typer.Option(0),
    raises: int = typer.Option(0),
    void: bool = typer.Option(False, help="Spend a Void Point for +1k1"),
    wound_penalty: bool = typer.Option(True, "--wound-penalty/--no-wound-penalty"),
    seed: Optional[int] = typer.Option(None),
    little_truths: Optional[bool] = typer.Option(None, "--little-truths/--no-little-truths"),
    save: bool = typer.Option(False, help="Write spent Void Points back to FILE"),
    plain: bool = typer.Option(False),
):
    """Roll a Ring for a character."""
    character = _load(file)
    try:
        cfg = ring_config_for(
            character, name, tn=tn, raises=raises, void=void,
            apply_wound_penalty=wound_penalty,
        )
        outcome = ring_roll(cfg, _settings(little_truths), seeded_executor(seed))
    except (KeyError, RollError) as e:
        typer.secho(f"ERR: {e}", fg=typer.colors.RED)
        raise typer.Exit(1)
    _finish(outcome, character, file, save, plain)


@char_app.command("show")
def show(file: Path = typer.Argument(..., exists=True)):
    """Print traits, rings and skills."""
    character = _load(file)
    typer.echo(character.name)
    typer.echo("Rings: " + ", ".join(f"{k} {v}" for k, v in character.rings.items()))
    typer.echo(f"Void Points: {character.void.points}")
    for skill_name, s in character.skills.items():
        emph = f" ({', '.join(s.emphases)})" if s.emphases else ""
        typer.echo(f"{skill_name}: {s.rank} [{s.trait}]{emph}")


__all__ = ["char_app"]
