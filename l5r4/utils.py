"""Small numeric helpers shared by the roll engine and its callers."""
from __future__ import annotations

import math
import re
from typing import Any

_INT_PREFIX = re.compile(r"^[+-]?\d+")


def to_int(value: Any, fallback: int = 0) -> int:
    """Coerce ``value`` to an int, returning ``fallback`` when that fails.

    Strings are read up to the first non-digit, so ``"12abc"`` gives 12 and
    ``"abc"`` gives the fallback. Floats are truncated; NaN and infinities
    fall back.
    """
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if not math.isfinite(value):
            return fallback
        return int(value)
    if isinstance(value, str):
        m = _INT_PREFIX.match(value.strip())
        return int(m.group(0)) if m else fallback
    return fallback


def clamp(n: int, lo: int, hi: int) -> int:
    return min(hi, max(lo, n))


def non_negative(value: Any) -> int:
    """``to_int`` clamped at zero; used for trait, ring and skill ranks."""
    return max(0, to_int(value))


def signed(n: int) -> str:
    """Format ``n`` with an explicit sign: ``+3``, ``-2``, ``+0``."""
    return f"+{n}" if n >= 0 else str(n)


__all__ = ["to_int", "clamp", "non_negative", "signed"]
