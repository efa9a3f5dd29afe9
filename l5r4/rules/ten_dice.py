"""Ten Dice Rule: cap rolled and kept dice at ten, turning excess into bonus."""
from __future__ import annotations

from dataclasses import dataclass

from l5r4.logging import get_logger
from l5r4.utils import to_int

log = get_logger(__name__)

MAX_DICE = 10


@dataclass(frozen=True)
class DicePool:
    """Rolled dice, kept dice and flat bonus for one XkY roll."""
    roll_count: int
    keep_count: int
    bonus: int = 0

    def as_tuple(self) -> tuple[int, int, int]:
        return (self.roll_count, self.keep_count, self.bonus)

    @property
    def is_normalized(self) -> bool:
        return self.roll_count <= MAX_DICE and self.keep_count <= MAX_DICE


def normalize(roll_count, keep_count, bonus=0, little_truths: bool = False) -> DicePool:
    """Apply the Ten Dice Rule to ``roll_count``k``keep_count`` + ``bonus``.

    Rolled dice above ten are set aside; every three of them become two
    extra kept dice. Kept dice above ten are then reduced two at a time.
    When the kept pool ends at exactly ten, each rolled die still left over
    adds +2. With ``little_truths`` set, a kept pool under ten gets a flat +2.

    Only the leftover rolled dice feed the ten-kept bonus; kept dice lost to
    the reduction step do not.
    """
    roll_count = to_int(roll_count)
    keep_count = to_int(keep_count)
    bonus = to_int(bonus)

    extra = 0
    if roll_count > MAX_DICE:
        extra = roll_count - MAX_DICE
        roll_count = MAX_DICE

    folds = extra // 3
    keep_count += 2 * folds
    extra -= 3 * folds

    rises = 0
    if keep_count > MAX_DICE:
        # steps of two until at or below ten
        rises = (keep_count - MAX_DICE + 1) // 2
        keep_count -= 2 * rises

    if little_truths and keep_count < MAX_DICE:
        bonus += 2
    if keep_count == MAX_DICE and extra >= 0:
        bonus += extra * 2

    log.debug(
        "ten dice rule -> %dk%d%+d (extra=%d, rises=%d, little_truths=%s)",
        roll_count, keep_count, bonus, extra, rises, little_truths,
    )
    return DicePool(roll_count, keep_count, bonus)


__all__ = ["DicePool", "MAX_DICE", "normalize"]
