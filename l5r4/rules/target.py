from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Optional

from l5r4.utils import to_int

Outcome = Literal["success", "failure"]

RAISE_STEP = 5


@dataclass(frozen=True)
class TargetResult:
    effective_tn: int
    raises: int
    outcome: Optional[Outcome]

    @property
    def success(self) -> bool:
        return self.outcome == "success"


def effective_tn(tn, raises=0) -> int:
    """Target number after declared raises (+5 each)."""
    return to_int(tn) + to_int(raises) * RAISE_STEP


def evaluate(roll_total, tn, raises=0) -> TargetResult:
    """Compare ``roll_total`` against ``tn`` plus raises.

    A TN of zero or less means no target was set; the outcome is ``None``.
    Wound penalties belong in ``tn`` before this is called.
    """
    total = to_int(roll_total)
    tn = to_int(tn)
    raises = to_int(raises)
    eff = effective_tn(tn, raises)
    if tn <= 0:
        return TargetResult(effective_tn=eff, raises=raises, outcome=None)
    outcome: Outcome = "success" if total >= eff else "failure"
    return TargetResult(effective_tn=eff, raises=raises, outcome=outcome)


__all__ = ["TargetResult", "Outcome", "RAISE_STEP", "effective_tn", "evaluate"]
