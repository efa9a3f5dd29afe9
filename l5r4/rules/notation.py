"""Legacy compact roll notation, e.g. ``6k3x10+4u``.

Notation strings survive in older macros and stored content. New code should
build a :class:`~l5r4.rules.ten_dice.DicePool` directly; this module only
decodes what is already out there.

Grammar::

    <count>k<keep>[x<explode>][+<bonus>][u|e]

``u`` marks an unskilled roll and ``e`` an emphasis roll. Only one of them is
honored and ``u`` is checked first. Decoding is lenient: a field that cannot
be read becomes 0 (or ``None`` for the explode value) and a warning is
logged instead of raising.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional, Tuple

from l5r4.logging import get_logger
from l5r4.rules.ten_dice import MAX_DICE, DicePool, normalize
from l5r4.utils import to_int

log = get_logger(__name__)

_INT_FIELD = re.compile(r"^[+-]?\d+$")


@dataclass(frozen=True)
class ParsedNotation:
    dice_pool: DicePool
    unskilled: bool = False
    emphasis: bool = False
    explode_bonus: Optional[int] = None


def _field(text: str, name: str, notation: str) -> int:
    if _INT_FIELD.match(text):
        return int(text)
    log.warning("roll notation %r: unreadable %s %r, using %d", notation, name, text, to_int(text))
    return to_int(text)


def _split(text: str) -> Tuple[str, str, Optional[str], str]:
    """Split ``text`` into (count, keep, explode, bonus) fields.

    The bonus is split off on ``+`` before the explode value is split off on
    ``x`` so that two-digit keep values never swallow either part.
    """
    count_text, _, rest = text.partition("k")
    keep_part, plus, bonus_text = rest.partition("+")
    if not plus and "-" in keep_part:
        keep_part, _, negative = keep_part.partition("-")
        bonus_text = "-" + negative
    keep_text, has_x, explode_text = keep_part.partition("x")
    return count_text, keep_text, (explode_text if has_x else None), bonus_text


def _unskilled_rises(kept: int, rises: int) -> Tuple[int, int]:
    # unskilled rolls get nothing back from excess keeps
    return kept, 0


def _emphasis_rises(kept: int, rises: int) -> Tuple[int, int]:
    # three rises are +2k, a leftover pair is +1k, a single rise stays
    folds, rises = divmod(rises, 3)
    kept += 2 * folds
    if rises == 2:
        kept += 1
        rises = 0
    return kept, rises


def parse_notation(notation: str, little_truths: bool = False) -> ParsedNotation:
    """Decode ``notation`` and run the result through the Ten Dice Rule.

    A negative bonus marks a hand-tuned roll: the pool is returned exactly as
    written, without rise redistribution or normalization.
    """
    raw = "" if notation is None else str(notation)
    text = raw.strip().lower().replace(" ", "")

    unskilled = emphasis = False
    if "u" in text:
        text = text.replace("u", "", 1)
        unskilled = True
    elif "e" in text:
        text = text.replace("e", "", 1)
        emphasis = True

    if "k" not in text:
        log.warning("roll notation %r has no keep part", raw)

    count_text, keep_text, explode_text, bonus_text = _split(text)
    count = _field(count_text, "dice count", raw)
    kept = _field(keep_text, "keep count", raw)
    explode = _field(explode_text, "explode value", raw) if explode_text else None
    bonus = _field(bonus_text, "bonus", raw) if bonus_text else 0

    if bonus < 0:
        pool = DicePool(count, kept, bonus)
        return ParsedNotation(pool, unskilled=unskilled, emphasis=emphasis, explode_bonus=explode)

    rises = 0
    if kept > MAX_DICE:
        rises = (kept - MAX_DICE) // 2
        kept -= rises * 2

    if unskilled:
        kept, rises = _unskilled_rises(kept, rises)
    else:
        kept, rises = _emphasis_rises(kept, rises)

    pool = normalize(count, kept, bonus + rises * 2, little_truths=little_truths)
    return ParsedNotation(pool, unskilled=unskilled, emphasis=emphasis, explode_bonus=explode)


__all__ = ["ParsedNotation", "parse_notation"]
