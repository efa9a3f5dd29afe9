from .character import (
    Bonuses,
    Character,
    RING_ORDER,
    RING_TRAITS,
    RollModifiers,
    Skill,
    TRAIT_ORDER,
    Traits,
    VoidRing,
    normalize_trait_key,
    skill_key,
)

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
