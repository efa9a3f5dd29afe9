from rich.console import Console

from l5r4.chat import card_text, dice_line, render_console, tn_line
from l5r4.engine.dice import DieResult, RollResult
from l5r4.engine.rolls import RollOutcome
from l5r4.rules import DicePool, TargetResult, build_expression, evaluate


def _outcome(target=None, spent=0):
    expr = build_expression(DicePool(3, 2, 1))
    result = RollResult(
        formula=expr.formula,
        total=21,
        bonus=1,
        dice=[DieResult([10, 4]), DieResult([6]), DieResult([2], rerolled=True)],
        kept=[14, 6],
    )
    return RollOutcome("Skill Roll: Kenjutsu / Agility", expr, result, target, spent)


def test_dice_line_marks_explosions_and_rerolls():
    assert dice_line(_outcome()) == "10+4=14, 6, r2"


def test_tn_line():
    assert tn_line(evaluate(25, 20, 1)) == "TN 25 (Raises: 1): Success"
    assert tn_line(evaluate(10, 15)) == "TN 15: Failure"
    assert tn_line(None) == ""
    assert tn_line(TargetResult(effective_tn=0, raises=0, outcome=None)) == ""


def test_card_text():
    text = card_text(_outcome(evaluate(21, 20), spent=1))
    assert text.splitlines() == [
        "Skill Roll: Kenjutsu / Agility",
        "3d10k2x10+1: [10+4=14, 6, r2] kept [14, 6] -> 21",
        "TN 20: Success",
        "Void Points spent: 1",
    ]


def test_card_text_without_target():
    assert len(card_text(_outcome()).splitlines()) == 2


def test_render_console():
    console = Console(record=True, width=100)
    render_console(_outcome(evaluate(21, 25)), console=console)
    out = console.export_text()
    assert "Skill Roll: Kenjutsu / Agility" in out
    assert "TN 25: Failure" in out
