"""Roll expressions: ``XdYkZ`` with exploding dice and emphasis rerolls."""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional

from l5r4.logging import get_logger
from l5r4.rules.ten_dice import DicePool
from l5r4.utils import signed

log = get_logger(__name__)

EXPLODE_ON = 10
EMPHASIS_REROLL = 1
DIE_SIDES = 10

FORMULA_RE = re.compile(
    r"^(?P<count>\d+)d(?P<sides>\d+)"
    r"(?:r(?P<reroll>\d+))?"
    r"k(?P<keep>\d+)"
    r"(?:x(?P<explode>\d+))?"
    r"(?P<bonus>[+-]\d+)?$",
    re.IGNORECASE,
)


@dataclass(frozen=True)
class RollExpression:
    count: int
    keep_highest: int
    explode_threshold: Optional[int] = EXPLODE_ON
    reroll_threshold: Optional[int] = None
    flat_bonus: int = 0
    sides: int = DIE_SIDES

    @property
    def explodes(self) -> bool:
        return self.explode_threshold is not None

    @property
    def formula(self) -> str:
        """Dice formula text, e.g. ``6d10r1k3x10+4``."""
        out = f"{self.count}d{self.sides}"
        if self.reroll_threshold is not None:
            out += f"r{self.reroll_threshold}"
        out += f"k{self.keep_highest}"
        if self.explode_threshold is not None:
            out += f"x{self.explode_threshold}"
        return out + signed(self.flat_bonus)

    def __str__(self) -> str:
        return self.formula


def build_expression(pool: DicePool, unskilled: bool = False, emphasis: bool = False) -> RollExpression:
    """Turn a normalized pool into a roll expression.

    Unskilled rolls never explode. Emphasis rerolls ones. If both flags are
    given, emphasis wins and the roll explodes as usual.
    """
    if unskilled and emphasis:
        log.debug("unskilled and emphasis both requested; using emphasis")
        unskilled = False
    return RollExpression(
        count=pool.roll_count,
        keep_highest=pool.keep_count,
        explode_threshold=None if unskilled else EXPLODE_ON,
        reroll_threshold=EMPHASIS_REROLL if emphasis else None,
        flat_bonus=pool.bonus,
    )


def parse_formula(formula: str) -> RollExpression:
    """Parse formula text produced by :attr:`RollExpression.formula`.

    Raises ``ValueError`` for anything that is not a keep-highest formula.
    """
    m = FORMULA_RE.fullmatch(formula.replace(" ", ""))
    if not m:
        raise ValueError(f"Invalid roll formula: {formula}")
    reroll = m.group("reroll")
    explode = m.group("explode")
    return RollExpression(
        count=int(m.group("count")),
        keep_highest=int(m.group("keep")),
        explode_threshold=int(explode) if explode else None,
        reroll_threshold=int(reroll) if reroll else None,
        flat_bonus=int(m.group("bonus") or 0),
        sides=int(m.group("sides")),
    )


__all__ = [
    "RollExpression",
    "build_expression",
    "parse_formula",
    "EXPLODE_ON",
    "EMPHASIS_REROLL",
    "DIE_SIDES",
]
