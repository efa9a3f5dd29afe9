import os

_TRUTHY = ("1", "true", "yes", "on")


def _env_flag(name: str) -> bool | None:
    val = os.getenv(name)
    if val is None:
        return None
    return val.strip().lower() in _TRUTHY


def little_truths_from_env() -> bool | None:
    """``L5R4_LT_EXCEPTION`` as a bool, or None when unset."""
    return _env_flag("L5R4_LT_EXCEPTION")


def npc_void_points_from_env() -> bool | None:
    """``L5R4_NPC_VOID`` as a bool, or None when unset."""
    return _env_flag("L5R4_NPC_VOID")
