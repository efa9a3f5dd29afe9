from __future__ import annotations

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from l5r4.engine.dice import DieResult
from l5r4.engine.rolls import RollOutcome
from l5r4.rules.target import TargetResult


def _die_text(d: DieResult) -> str:
    faces = "+".join(str(f) for f in d.faces)
    if d.rerolled:
        faces = "r" + faces
    return f"{faces}={d.total}" if d.exploded else faces


def tn_line(target: TargetResult | None) -> str:
    if target is None or target.outcome is None:
        return ""
    raises = f" (Raises: {target.raises})" if target.raises else ""
    verdict = "Success" if target.success else "Failure"
    return f"TN {target.effective_tn}{raises}: {verdict}"


def dice_line(outcome: RollOutcome) -> str:
    dice = outcome.result.dice
    if not dice:
        return "no dice"
    return ", ".join(_die_text(d) for d in dice)


def card_text(outcome: RollOutcome) -> str:
    """Plain-text chat card for logs and non-terminal output."""
    lines = [
        outcome.label,
        f"{outcome.formula}: [{dice_line(outcome)}] kept {outcome.result.kept} -> {outcome.total}",
    ]
    tn = tn_line(outcome.target)
    if tn:
        lines.append(tn)
    if outcome.void_points_spent:
        lines.append(f"Void Points spent: {outcome.void_points_spent}")
    return "\n".join(lines)


def card_panel(outcome: RollOutcome) -> Panel:
    t = Table(box=None, show_header=False, expand=False)
    t.add_row("Formula", outcome.formula)
    t.add_row("Dice", dice_line(outcome))
    kept = ", ".join(str(k) for k in outcome.result.kept) or "-"
    t.add_row("Kept", f"[bold]{kept}[/]")
    t.add_row("Total", f"[bold]{outcome.total}[/]")
    tn = tn_line(outcome.target)
    if tn:
        style = "green" if outcome.target and outcome.target.success else "red"
        t.add_row("Target", f"[{style}]{tn}[/]")
    return Panel(t, title=Text(outcome.label), expand=False)


def render_console(outcome: RollOutcome, console: Console | None = None) -> None:
    (console or Console()).print(card_panel(outcome))


__all__ = ["card_text", "card_panel", "render_console", "tn_line", "dice_line"]
