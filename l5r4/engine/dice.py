"""Deterministic roller for keep-highest d10 expressions."""
from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional

from l5r4.rules.expression import RollExpression, parse_formula

# a die that keeps exploding past this many extra rolls stops there
MAX_EXPLOSIONS = 100
# hand-written pools skip the Ten Dice Rule; refuse anything past this
MAX_ROLLED_DICE = 100


@dataclass
class DieResult:
    faces: List[int]
    rerolled: bool = False

    @property
    def total(self) -> int:
        return sum(self.faces)

    @property
    def exploded(self) -> bool:
        return len(self.faces) > 1


@dataclass
class RollResult:
    formula: str
    total: int
    bonus: int
    dice: List[DieResult] = field(default_factory=list)
    kept: List[int] = field(default_factory=list)

    @property
    def breakdown(self) -> Dict[str, object]:
        return {
            "dice": [d.faces for d in self.dice],
            "kept": list(self.kept),
            "bonus": self.bonus,
        }


Executor = Callable[[RollExpression], RollResult]


def _roll_die(expr: RollExpression, rng: random.Random) -> DieResult:
    face = rng.randint(1, expr.sides)
    rerolled = False
    if expr.reroll_threshold is not None and face == expr.reroll_threshold:
        face = rng.randint(1, expr.sides)
        rerolled = True
    faces = [face]
    if expr.explode_threshold is not None:
        while face >= expr.explode_threshold and len(faces) <= MAX_EXPLOSIONS:
            face = rng.randint(1, expr.sides)
            faces.append(face)
    return DieResult(faces=faces, rerolled=rerolled)


def roll_expression(
    expr: RollExpression,
    seed: int | None = None,
    rng: Optional[random.Random] = None,
) -> RollResult:
    """Roll ``expr`` and keep the highest dice.

    Parameters
    ----------
    expr: RollExpression
        What to roll. A zero-die expression totals its flat bonus.
    seed: int | None
        Optional seed for deterministic results. Ignored when ``rng`` is given.
    rng: random.Random | None
        Shared generator, for callers rolling several expressions in a row.

    Returns
    -------
    RollResult
        Every die rolled (in roll order), the kept die totals (highest
        first) and the final total.

    Raises
    ------
    ValueError
        If ``expr`` asks for more than ``MAX_ROLLED_DICE`` dice.
    """
    if expr.count > MAX_ROLLED_DICE:
        raise ValueError(f"Too many dice: {expr.count} (max {MAX_ROLLED_DICE})")
    rng = rng or random.Random(seed)
    dice = [_roll_die(expr, rng) for _ in range(max(0, expr.count))]
    kept = sorted((d.total for d in dice), reverse=True)[: max(0, expr.keep_highest)]
    total = sum(kept) + expr.flat_bonus
    return RollResult(formula=expr.formula, total=total, bonus=expr.flat_bonus, dice=dice, kept=kept)


def roll(formula: str, seed: int | None = None) -> RollResult:
    """Roll a formula such as ``5d10k3x10+2``.

    Raises ``ValueError`` if ``formula`` is not a keep-highest formula.
    """
    return roll_expression(parse_formula(formula), seed=seed)


def seeded_executor(seed: int | None = None) -> Executor:
    """Executor that draws every roll from one generator seeded with ``seed``."""
    rng = random.Random(seed)

    def _execute(expr: RollExpression) -> RollResult:
        return roll_expression(expr, rng=rng)

    return _execute


__all__ = [
    "DieResult",
    "RollResult",
    "Executor",
    "MAX_EXPLOSIONS",
    "MAX_ROLLED_DICE",
    "roll_expression",
    "roll",
    "seeded_executor",
]
