from __future__ import annotations

import re
from typing import Dict, List, Literal, Tuple

from pydantic import BaseModel, Field, NonNegativeInt

TRAIT_ORDER: Tuple[str, ...] = ("sta", "wil", "str", "per", "ref", "awa", "agi", "int")

TRAIT_NAMES = {
    "stamina": "sta",
    "willpower": "wil",
    "strength": "str",
    "perception": "per",
    "reflexes": "ref",
    "awareness": "awa",
    "agility": "agi",
    "intelligence": "int",
}

# each elemental ring is the lower of its two traits
RING_TRAITS: Dict[str, Tuple[str, str]] = {
    "air": ("ref", "awa"),
    "earth": ("sta", "wil"),
    "fire": ("agi", "int"),
    "water": ("str", "per"),
}
RING_ORDER: Tuple[str, ...] = ("air", "earth", "fire", "water", "void")

TraitKey = Literal["sta", "wil", "str", "per", "ref", "awa", "agi", "int", "void"]

_I18N_TRAIT = re.compile(r"^l5r4\.mechanics\.traits\.(\w+)$", re.IGNORECASE)


def normalize_trait_key(raw: object) -> str:
    """Map "Reflexes", "ref" or "l5r4.mechanics.traits.ref" to "ref".

    "void" passes through. Unknown labels give ``""``.
    """
    if raw is None:
        return ""
    k = str(raw).strip().lower()
    m = _I18N_TRAIT.match(k)
    if m:
        k = m.group(1).lower()
    if k in TRAIT_ORDER or k == "void":
        return k
    return TRAIT_NAMES.get(k, "")


def skill_key(name: str) -> str:
    return re.sub(r"[\s\-]+", "_", name.strip().lower())


class RollModifiers(BaseModel):
    """Extra rolled dice, kept dice and flat total for one roll."""
    roll: int = 0
    keep: int = 0
    total: int = 0

    def __add__(self, other: "RollModifiers") -> "RollModifiers":
        return RollModifiers(
            roll=self.roll + other.roll,
            keep=self.keep + other.keep,
            total=self.total + other.total,
        )

    @property
    def is_zero(self) -> bool:
        return not (self.roll or self.keep or self.total)


class Traits(BaseModel):
    sta: NonNegativeInt = 2
    wil: NonNegativeInt = 2
    str: NonNegativeInt = 2
    per: NonNegativeInt = 2
    ref: NonNegativeInt = 2
    awa: NonNegativeInt = 2
    agi: NonNegativeInt = 2
    int: NonNegativeInt = 2


class VoidRing(BaseModel):
    rank: NonNegativeInt = 2
    points: NonNegativeInt = 2


class Skill(BaseModel):
    rank: NonNegativeInt = 0
    trait: TraitKey
    emphases: List[str] = []


class Bonuses(BaseModel):
    """Standing bonuses (from techniques, items, effects) keyed by skill, trait or ring."""
    skill: Dict[str, RollModifiers] = {}
    trait: Dict[str, RollModifiers] = {}
    ring: Dict[str, RollModifiers] = {}


class Character(BaseModel):
    name: str = Field(min_length=1)
    npc: bool = False
    traits: Traits = Traits()
    void: VoidRing = VoidRing()
    skills: Dict[str, Skill] = {}
    wound_penalty: NonNegativeInt = 0
    bonuses: Bonuses = Bonuses()

    # --- Derived ---
    def trait(self, key: str) -> int:
        k = normalize_trait_key(key)
        if not k:
            raise KeyError(f"Unknown trait: {key}")
        if k == "void":
            return self.void.rank
        return getattr(self.traits, k)

    def ring(self, name: str) -> int:
        n = name.strip().lower()
        if n == "void":
            return self.void.rank
        a, b = RING_TRAITS[n]
        return min(getattr(self.traits, a), getattr(self.traits, b))

    @property
    def rings(self) -> Dict[str, int]:
        return {r: self.ring(r) for r in RING_ORDER}

    def skill(self, name: str) -> Skill:
        key = skill_key(name)
        for k, v in self.skills.items():
            if skill_key(k) == key:
                return v
        raise KeyError(f"Unknown skill: {name}")

    def skill_bonus(self, name: str) -> RollModifiers:
        return _lookup(self.bonuses.skill, skill_key(name))

    def trait_bonus(self, key: str) -> RollModifiers:
        return _lookup(self.bonuses.trait, normalize_trait_key(key))

    def ring_bonus(self, name: str) -> RollModifiers:
        return _lookup(self.bonuses.ring, name.strip().lower())


def _lookup(table: Dict[str, RollModifiers], key: str) -> RollModifiers:
    for k, v in table.items():
        if skill_key(k) == key:
            return v
    return RollModifiers()


__all__ = [
    "Character",
    "Traits",
    "VoidRing",
    "Skill",
    "Bonuses",
    "RollModifiers",
    "TRAIT_ORDER",
    "RING_ORDER",
    "RING_TRAITS",
    "normalize_trait_key",
    "skill_key",
]
