from .config import little_truths_from_env, npc_void_points_from_env
from .expression import (
    DIE_SIDES,
    EMPHASIS_REROLL,
    EXPLODE_ON,
    RollExpression,
    build_expression,
    parse_formula,
)
from .notation import ParsedNotation, parse_notation
from .target import RAISE_STEP, TargetResult, effective_tn, evaluate
from .ten_dice import MAX_DICE, DicePool, normalize

__all__ = [
    # Ten Dice Rule
    "DicePool",
    "MAX_DICE",
    "normalize",
    # Expressions
    "RollExpression",
    "build_expression",
    "parse_formula",
    "EXPLODE_ON",
    "EMPHASIS_REROLL",
    "DIE_SIDES",
    # Target numbers
    "TargetResult",
    "RAISE_STEP",
    "effective_tn",
    "evaluate",
    # Legacy notation
    "ParsedNotation",
    "parse_notation",
    # Config
    "little_truths_from_env",
    "npc_void_points_from_env",
]
