import json
import os
from pathlib import Path
from typing import Any, Dict

from pydantic import BaseModel

from l5r4.rules.config import little_truths_from_env, npc_void_points_from_env


class Settings(BaseModel):
    """World settings the roll engine reads once per roll."""
    little_truths_exception: bool = False
    allow_npc_void_points: bool = False


def config_dir() -> Path:
    return Path(os.getenv("L5R4_CONFIG_DIR") or (Path.home() / ".l5r4"))


def config_path() -> Path:
    return config_dir() / "config.json"


def load_config() -> Dict[str, Any]:
    try:
        data = json.loads(config_path().read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return {}
    return data if isinstance(data, dict) else {}


def save_config(cfg: Dict[str, Any]) -> None:
    config_dir().mkdir(parents=True, exist_ok=True)
    config_path().write_text(json.dumps(cfg, indent=2), encoding="utf-8")


def load_settings(
    little_truths: bool | None = None,
    npc_void_points: bool | None = None,
) -> Settings:
    """
    Resolve settings. Precedence per field: explicit argument > env > config file.
    """
    cfg = load_config()
    settings = Settings(
        little_truths_exception=bool(cfg.get("little_truths_exception", False)),
        allow_npc_void_points=bool(cfg.get("allow_npc_void_points", False)),
    )
    env_lt = little_truths_from_env()
    env_npc = npc_void_points_from_env()
    if env_lt is not None:
        settings.little_truths_exception = env_lt
    if env_npc is not None:
        settings.allow_npc_void_points = env_npc
    if little_truths is not None:
        settings.little_truths_exception = little_truths
    if npc_void_points is not None:
        settings.allow_npc_void_points = npc_void_points
    return settings


def save_settings(
    little_truths: bool | None = None,
    npc_void_points: bool | None = None,
) -> None:
    """Write only the given flags to the config file.

    Values that come from the environment are never persisted.
    """
    cfg = load_config()
    if little_truths is not None:
        cfg["little_truths_exception"] = little_truths
    if npc_void_points is not None:
        cfg["allow_npc_void_points"] = npc_void_points
    save_config(cfg)
