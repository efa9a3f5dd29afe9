from __future__ import annotations

from functools import partial
from typing import Optional

import typer
from rich import box

try:
    import typer.rich_utils as tru
except ModuleNotFoundError:  # pragma: no cover - older Typer versions
    tru = None

from l5r4.chat import card_text, render_console
from l5r4.cli_character import char_app
from l5r4.cli_validate import validate_app
from l5r4.config_env import load_env
from l5r4.engine.config import load_settings, save_settings
from l5r4.engine.dice import roll_expression, seeded_executor
from l5r4.engine.rolls import (
    NpcRollConfig,
    RollOutcome,
    WeaponRollConfig,
    npc_roll,
    weapon_roll,
)
from l5r4.models.character import RollModifiers
from l5r4.rules import build_expression, evaluate, normalize, parse_notation

if tru is not None:  # pragma: no branch
    tru.Panel = partial(tru.Panel, box=box.ASCII)


app = typer.Typer(no_args_is_help=True, help="L5R4 dice: Ten Dice Rule rolls from the command line.")
app.add_typer(char_app, name="character")
app.add_typer(validate_app, name="validate")


def emit(outcome: RollOutcome, plain: bool) -> None:
    if plain:
        typer.echo(card_text(outcome))
    else:
        render_console(outcome)


@app.callback()
def main() -> None:
    """L5R4 dice: Ten Dice Rule rolls from the command line."""
    load_env()


@app.command()
def roll(
    notation: str = typer.Argument(..., help="Roll notation, e.g. 6k3x10+4 or 5k2u"),
    tn: int = typer.Option(0, help="Target number (0 = none)"),
    raises: int = typer.Option(0, help="Declared raises (+5 TN each)"),
    seed: Optional[int] = typer.Option(None, help="Deterministic RNG seed"),
    little_truths: Optional[bool] = typer.Option(
        None, "--little-truths/--no-little-truths", help="Override the Little Truths Exception setting"
    ),
    plain: bool = typer.Option(False, help="Plain text output"),
):
    """Roll a compact notation string."""
    settings = load_settings(little_truths=little_truths)
    parsed = parse_notation(notation, little_truths=settings.little_truths_exception)
    expr = build_expression(parsed.dice_pool, unskilled=parsed.unskilled, emphasis=parsed.emphasis)
    try:
        result = roll_expression(expr, seed=seed)
    except ValueError as e:
        typer.secho(f"ERR: {e}", fg=typer.colors.RED)
        raise typer.Exit(1)
    target = evaluate(result.total, tn, raises)
    label = f"Roll: {notation}"
    if parsed.unskilled:
        label += " (Unskilled)"
    if parsed.emphasis:
        label += " (Emphasis)"
    outcome = RollOutcome(label, expr, result, target if target.outcome else None)
    emit(outcome, plain)


@app.command()
def pool(
    roll_count: int = typer.Argument(..., help="Rolled dice"),
    keep_count: int = typer.Argument(..., help="Kept dice"),
    bonus: int = typer.Option(0, help="Flat bonus"),
    unskilled: bool = typer.Option(False, help="No exploding dice"),
    emphasis: bool = typer.Option(False, help="Reroll 1s once"),
    little_truths: Optional[bool] = typer.Option(
        None, "--little-truths/--no-little-truths", help="Override the Little Truths Exception setting"
    ),
):
    """Show the Ten Dice Rule formula for a pool without rolling it."""
    settings = load_settings(little_truths=little_truths)
    p = normalize(roll_count, keep_count, bonus, little_truths=settings.little_truths_exception)
    typer.echo(build_expression(p, unskilled=unskilled, emphasis=emphasis).formula)


@app.command()
def damage(
    weapon: str = typer.Argument(..., help="Weapon name"),
    dice_roll: int = typer.Argument(..., help="Rolled dice"),
    dice_keep: int = typer.Argument(..., help="Kept dice"),
    roll_mod: int = typer.Option(0, "--roll-mod", help="Extra rolled dice"),
    keep_mod: int = typer.Option(0, "--keep-mod", help="Extra kept dice"),
    bonus: int = typer.Option(0, help="Flat bonus"),
    seed: Optional[int] = typer.Option(None, help="Deterministic RNG seed"),
    plain: bool = typer.Option(False, help="Plain text output"),
):
    """Roll weapon damage (always explodes, no TN)."""
    cfg = WeaponRollConfig(
        weapon_name=weapon,
        dice_roll=dice_roll,
        dice_keep=dice_keep,
        modifiers=RollModifiers(roll=roll_mod, keep=keep_mod, total=bonus),
    )
    emit(weapon_roll(cfg, load_settings(), seeded_executor(seed)), plain)


@app.command()
def npc(
    dice_roll: int = typer.Argument(..., help="Rolled dice"),
    dice_keep: int = typer.Argument(..., help="Kept dice"),
    name: str = typer.Option("", help="Roll name"),
    bonus: int = typer.Option(0, help="Flat bonus"),
    void: bool = typer.Option(False, help="+1k1 when NPC Void Points are allowed"),
    tn: int = typer.Option(0, help="Target number (0 = none)"),
    raises: int = typer.Option(0, help="Declared raises (+5 TN each)"),
    seed: Optional[int] = typer.Option(None, help="Deterministic RNG seed"),
    plain: bool = typer.Option(False, help="Plain text output"),
):
    """Roll a simple NPC XkY."""
    cfg = NpcRollConfig(
        roll_name=name or f"{dice_roll}k{dice_keep}",
        dice_roll=dice_roll,
        dice_keep=dice_keep,
        void=void,
        tn=tn,
        raises=raises,
        modifiers=RollModifiers(total=bonus),
    )
    emit(npc_roll(cfg, load_settings(), seeded_executor(seed)), plain)


@app.command("settings")
def settings_cmd(
    little_truths: Optional[bool] = typer.Option(
        None, "--little-truths/--no-little-truths", help="Little Truths Exception"
    ),
    npc_void: Optional[bool] = typer.Option(
        None, "--npc-void/--no-npc-void", help="Allow NPCs to spend Void Points"
    ),
):
    """Show settings, saving any that are given."""
    if little_truths is not None or npc_void is not None:
        save_settings(little_truths=little_truths, npc_void_points=npc_void)
        typer.secho("Saved settings", fg=typer.colors.GREEN)
    settings = load_settings()
    for key, value in settings.model_dump().items():
        typer.echo(f"{key}: {str(value).lower()}")


if __name__ == "__main__":  # pragma: no cover
    app()
