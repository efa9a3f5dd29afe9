"""Skill, trait, ring, weapon and NPC rolls built on the Ten Dice Rule engine.

Each roll kind takes a typed config, works out the XkY pool, normalizes it,
rolls it through an injectable executor and checks the total against the
target number. Spending Void Points is reported back on the outcome; saving
the new total is up to the caller.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from pydantic import BaseModel

from l5r4.engine.config import Settings
from l5r4.engine.dice import Executor, RollResult, roll_expression
from l5r4.logging import get_logger
from l5r4.models.character import (
    TRAIT_NAMES,
    Character,
    RollModifiers,
    normalize_trait_key,
)
from l5r4.rules.expression import RollExpression, build_expression
from l5r4.rules.target import TargetResult, effective_tn, evaluate
from l5r4.rules.ten_dice import normalize
from l5r4.utils import non_negative, signed, to_int

log = get_logger(__name__)

TRAIT_LABELS = {v: k.capitalize() for k, v in TRAIT_NAMES.items()}
TRAIT_LABELS["void"] = "Void"


class RollError(Exception):
    """A roll that cannot go ahead, e.g. no Void Points left to spend."""


class RollConfig(BaseModel):
    tn: int = 0
    raises: int = 0
    apply_wound_penalty: bool = True
    wound_penalty: int = 0
    void: bool = False
    # None means the pool is not tracked (e.g. quick rolls from the CLI)
    void_points: Optional[int] = None
    npc: bool = False
    modifiers: RollModifiers = RollModifiers()
    bonuses: RollModifiers = RollModifiers()


class SkillRollConfig(RollConfig):
    skill_name: str
    trait_name: str
    trait_rank: int = 0
    skill_rank: int = 0
    emphasis: bool = False


class TraitRollConfig(RollConfig):
    trait_name: str
    trait_rank: int = 0
    unskilled: bool = False


class RingRollConfig(RollConfig):
    ring_name: str
    ring_rank: int = 0


class WeaponRollConfig(BaseModel):
    weapon_name: str
    dice_roll: int = 0
    dice_keep: int = 0
    description: Optional[str] = None
    modifiers: RollModifiers = RollModifiers()


class NpcRollConfig(BaseModel):
    roll_name: Optional[str] = None
    dice_roll: Optional[int] = None
    dice_keep: Optional[int] = None
    trait_name: Optional[str] = None
    trait_rank: Optional[int] = None
    ring_name: Optional[str] = None
    ring_rank: Optional[int] = None
    unskilled: bool = False
    void: bool = False
    tn: int = 0
    raises: int = 0
    modifiers: RollModifiers = RollModifiers()


@dataclass
class RollOutcome:
    label: str
    expression: RollExpression
    result: RollResult
    target: Optional[TargetResult] = None
    void_points_spent: int = 0

    @property
    def total(self) -> int:
        return self.result.total

    @property
    def formula(self) -> str:
        return self.expression.formula


# ---------- helpers -----------------------------------------------------------

def trait_label(key: str) -> str:
    k = normalize_trait_key(key)
    return TRAIT_LABELS.get(k, str(key).capitalize())


def _tn_label(tn: int, raises: int) -> str:
    if not (tn or raises):
        return ""
    eff = effective_tn(tn, raises)
    return f" [TN {eff} (Raises: {raises})]" if raises else f" [TN {eff}]"


def _mod_label(mods: RollModifiers) -> str:
    if mods.is_zero:
        return ""
    return f" Mod ({mods.roll}k{mods.keep}{signed(mods.total)})"


def _spend_void(cfg: RollConfig, settings: Settings) -> int:
    """Return Void Points spent (0 or 1); raise if the spend is not allowed."""
    if not cfg.void:
        return 0
    if cfg.npc:
        if not settings.allow_npc_void_points:
            raise RollError("NPC Void Points are disabled")
        return 0
    if cfg.void_points is not None and cfg.void_points <= 0:
        raise RollError("Void Points: 0")
    return 1


def _roll_and_check(
    label: str,
    dice_roll: int,
    dice_keep: int,
    bonus: int,
    settings: Settings,
    execute: Optional[Executor],
    *,
    unskilled: bool = False,
    emphasis: bool = False,
    tn: int = 0,
    raises: int = 0,
    wound_penalty: int = 0,
    check_tn: bool = True,
) -> tuple[RollExpression, RollResult, Optional[TargetResult]]:
    pool = normalize(dice_roll, dice_keep, bonus, little_truths=settings.little_truths_exception)
    expr = build_expression(pool, unskilled=unskilled, emphasis=emphasis)
    result = (execute or roll_expression)(expr)
    target = None
    if check_tn:
        penalty = wound_penalty if tn > 0 else 0
        target = evaluate(result.total, tn + penalty, raises)
        if target.outcome is None:
            target = None
    log.info("%s: %s -> %d", label, expr.formula, result.total)
    return expr, result, target


# ---------- roll kinds --------------------------------------------------------

def skill_roll(
    cfg: SkillRollConfig,
    settings: Settings | None = None,
    execute: Optional[Executor] = None,
) -> RollOutcome:
    """(Trait + Skill + R)k(Trait + K), exploding on 10, rerolling 1s on emphasis."""
    if settings is None:
        settings = Settings()
    mods = cfg.modifiers + cfg.bonuses
    label = f"Skill Roll: {cfg.skill_name} / {trait_label(cfg.trait_name)}"
    label += _tn_label(cfg.tn, cfg.raises)

    spent = _spend_void(cfg, settings)
    if cfg.void:
        mods = mods + RollModifiers(roll=1, keep=1)
        label += " Void!"
    if cfg.emphasis:
        label += " (Emphasis)"
    label += _mod_label(mods)

    trait = non_negative(cfg.trait_rank)
    expr, result, target = _roll_and_check(
        label,
        trait + non_negative(cfg.skill_rank) + mods.roll,
        trait + mods.keep,
        mods.total,
        settings,
        execute,
        emphasis=cfg.emphasis,
        tn=to_int(cfg.tn),
        raises=to_int(cfg.raises),
        wound_penalty=to_int(cfg.wound_penalty) if cfg.apply_wound_penalty else 0,
    )
    return RollOutcome(label, expr, result, target, spent)


def trait_roll(
    cfg: TraitRollConfig,
    settings: Settings | None = None,
    execute: Optional[Executor] = None,
) -> RollOutcome:
    """(Trait + R)k(Trait + K); unskilled rolls do not explode."""
    if settings is None:
        settings = Settings()
    mods = cfg.modifiers + cfg.bonuses
    label = f"{trait_label(cfg.trait_name)} Roll" + _tn_label(cfg.tn, cfg.raises)

    spent = _spend_void(cfg, settings)
    if cfg.void:
        mods = mods + RollModifiers(roll=1, keep=1)
        label += " Void!"
    if cfg.unskilled:
        label += " (Unskilled)"

    rank = non_negative(cfg.trait_rank)
    expr, result, target = _roll_and_check(
        label,
        rank + mods.roll,
        rank + mods.keep,
        mods.total,
        settings,
        execute,
        unskilled=cfg.unskilled,
        tn=to_int(cfg.tn),
        raises=to_int(cfg.raises),
        wound_penalty=to_int(cfg.wound_penalty) if cfg.apply_wound_penalty else 0,
    )
    return RollOutcome(label, expr, result, target, spent)


def ring_roll(
    cfg: RingRollConfig,
    settings: Settings | None = None,
    execute: Optional[Executor] = None,
) -> RollOutcome:
    """(Ring + R)k(Ring + K), exploding on 10."""
    if settings is None:
        settings = Settings()
    mods = cfg.modifiers + cfg.bonuses
    label = f"Ring Roll: {cfg.ring_name.capitalize()}" + _tn_label(cfg.tn, cfg.raises)

    spent = _spend_void(cfg, settings)
    if cfg.void:
        mods = mods + RollModifiers(roll=1, keep=1)
        label += " Void!"

    rank = non_negative(cfg.ring_rank)
    expr, result, target = _roll_and_check(
        label,
        rank + mods.roll,
        rank + mods.keep,
        mods.total,
        settings,
        execute,
        tn=to_int(cfg.tn),
        raises=to_int(cfg.raises),
        wound_penalty=to_int(cfg.wound_penalty) if cfg.apply_wound_penalty else 0,
    )
    return RollOutcome(label, expr, result, target, spent)


def weapon_roll(
    cfg: WeaponRollConfig,
    settings: Settings | None = None,
    execute: Optional[Executor] = None,
) -> RollOutcome:
    """Damage roll: always explodes, never checked against a TN."""
    if settings is None:
        settings = Settings()
    mods = cfg.modifiers
    label = f"Damage Roll {cfg.weapon_name}"
    if cfg.description:
        label += f" ({cfg.description})"
    expr, result, _ = _roll_and_check(
        label,
        non_negative(cfg.dice_roll) + mods.roll,
        non_negative(cfg.dice_keep) + mods.keep,
        mods.total,
        settings,
        execute,
        check_tn=False,
    )
    return RollOutcome(label, expr, result, None, 0)


def npc_roll(
    cfg: NpcRollConfig,
    settings: Settings | None = None,
    execute: Optional[Executor] = None,
) -> RollOutcome:
    """NPC roll from a numeric XkY, else a trait rank, else a ring rank.

    NPCs spend no Void Points; the +1k1 applies only when the NPC Void
    setting is on. Wound penalties are not added.
    """
    if settings is None:
        settings = Settings()
    mods = cfg.modifiers
    if cfg.trait_name:
        label = f"{trait_label(cfg.trait_name)} Roll"
    elif cfg.ring_name:
        label = f"Ring Roll: {cfg.ring_name.capitalize()}"
    else:
        label = f"Roll: {cfg.roll_name or ''}".rstrip()

    if cfg.void and settings.allow_npc_void_points:
        mods = mods + RollModifiers(roll=1, keep=1)
        label += " Void!"

    unskilled = cfg.unskilled and bool(cfg.trait_name)
    if cfg.dice_roll is not None and cfg.dice_keep is not None:
        base_roll, base_keep = non_negative(cfg.dice_roll), non_negative(cfg.dice_keep)
    elif cfg.trait_name:
        base_roll = base_keep = non_negative(cfg.trait_rank)
    else:
        base_roll = base_keep = non_negative(cfg.ring_rank)

    expr, result, target = _roll_and_check(
        label,
        base_roll + mods.roll,
        base_keep + mods.keep,
        mods.total,
        settings,
        execute,
        unskilled=unskilled,
        tn=to_int(cfg.tn),
        raises=to_int(cfg.raises),
    )
    return RollOutcome(label, expr, result, target, 0)


# ---------- configs from a character ----------------------------------------

def skill_config_for(
    character: Character,
    skill_name: str,
    *,
    tn: int = 0,
    raises: int = 0,
    void: bool = False,
    emphasis: bool = False,
    apply_wound_penalty: bool = True,
    modifiers: RollModifiers | None = None,
) -> SkillRollConfig:
    skill = character.skill(skill_name)
    return SkillRollConfig(
        skill_name=skill_name,
        trait_name=skill.trait,
        trait_rank=character.trait(skill.trait),
        skill_rank=skill.rank,
        emphasis=emphasis,
        tn=tn,
        raises=raises,
        void=void,
        void_points=None if character.npc else character.void.points,
        npc=character.npc,
        apply_wound_penalty=apply_wound_penalty,
        wound_penalty=character.wound_penalty,
        modifiers=modifiers or RollModifiers(),
        bonuses=character.skill_bonus(skill_name) + character.trait_bonus(skill.trait),
    )


def trait_config_for(
    character: Character,
    trait_name: str,
    *,
    tn: int = 0,
    raises: int = 0,
    void: bool = False,
    unskilled: bool = False,
    apply_wound_penalty: bool = True,
    modifiers: RollModifiers | None = None,
) -> TraitRollConfig:
    key = normalize_trait_key(trait_name)
    return TraitRollConfig(
        trait_name=key,
        trait_rank=character.trait(key),
        unskilled=unskilled,
        tn=tn,
        raises=raises,
        void=void,
        void_points=None if character.npc else character.void.points,
        npc=character.npc,
        apply_wound_penalty=apply_wound_penalty,
        wound_penalty=character.wound_penalty,
        modifiers=modifiers or RollModifiers(),
        bonuses=character.trait_bonus(key),
    )


def ring_config_for(
    character: Character,
    ring_name: str,
    *,
    tn: int = 0,
    raises: int = 0,
    void: bool = False,
    apply_wound_penalty: bool = True,
    modifiers: RollModifiers | None = None,
) -> RingRollConfig:
    name = ring_name.strip().lower()
    return RingRollConfig(
        ring_name=name,
        ring_rank=character.ring(name),
        tn=tn,
        raises=raises,
        void=void,
        void_points=None if character.npc else character.void.points,
        npc=character.npc,
        apply_wound_penalty=apply_wound_penalty,
        wound_penalty=character.wound_penalty,
        modifiers=modifiers or RollModifiers(),
        bonuses=character.ring_bonus(name),
    )


__all__ = [
    "RollError",
    "RollConfig",
    "SkillRollConfig",
    "TraitRollConfig",
    "RingRollConfig",
    "WeaponRollConfig",
    "NpcRollConfig",
    "RollOutcome",
    "skill_roll",
    "trait_roll",
    "ring_roll",
    "weapon_roll",
    "npc_roll",
    "skill_config_for",
    "trait_config_for",
    "ring_config_for",
    "trait_label",
]
