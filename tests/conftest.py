# tests/conftest.py
import json
from pathlib import Path

import pytest

from l5r4.engine.dice import RollResult


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    # keep the real ~/.l5r4 and any shell overrides out of the tests
    cfg_dir = tmp_path / "l5r4_config"
    monkeypatch.setenv("L5R4_CONFIG_DIR", str(cfg_dir))
    monkeypatch.delenv("L5R4_LT_EXCEPTION", raising=False)
    monkeypatch.delenv("L5R4_NPC_VOID", raising=False)
    return cfg_dir


class FixedRoll:
    """Executor stand-in that records expressions and returns a fixed total."""

    def __init__(self, total: int):
        self.total = total
        self.seen = []

    def __call__(self, expr):
        self.seen.append(expr)
        return RollResult(formula=expr.formula, total=self.total, bonus=expr.flat_bonus)

    @property
    def formula(self) -> str:
        return self.seen[-1].formula


@pytest.fixture
def fixed_roll():
    return FixedRoll


SAMPLE_CHARACTER = {
    "name": "Doji Hayaku",
    "traits": {"sta": 2, "wil": 3, "str": 2, "per": 2, "ref": 3, "awa": 3, "agi": 3, "int": 2},
    "void": {"rank": 2, "points": 1},
    "skills": {
        "Kenjutsu": {"rank": 4, "trait": "agi", "emphases": ["Katana"]},
        "Courtier": {"rank": 2, "trait": "awa"},
    },
    "wound_penalty": 0,
    "bonuses": {"skill": {"kenjutsu": {"total": 1}}},
}


@pytest.fixture
def character_data():
    return json.loads(json.dumps(SAMPLE_CHARACTER))


@pytest.fixture
def character_file(tmp_path: Path, character_data) -> Path:
    p = tmp_path / "hayaku.json"
    p.write_text(json.dumps(character_data), encoding="utf-8")
    return p
