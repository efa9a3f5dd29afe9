import json

from l5r4.engine.config import Settings, config_path, load_settings, save_settings
from l5r4.rules.config import little_truths_from_env, npc_void_points_from_env


def test_defaults_are_off():
    s = load_settings()
    assert s == Settings()
    assert not s.little_truths_exception
    assert not s.allow_npc_void_points


def test_reads_config_file(isolated_config):
    isolated_config.mkdir(parents=True)
    (isolated_config / "config.json").write_text(
        json.dumps({"little_truths_exception": True, "other": 1}), encoding="utf-8"
    )
    s = load_settings()
    assert s.little_truths_exception
    assert not s.allow_npc_void_points


def test_broken_config_file_is_ignored(isolated_config):
    isolated_config.mkdir(parents=True)
    (isolated_config / "config.json").write_text("{not json", encoding="utf-8")
    assert load_settings() == Settings()


def test_env_beats_file_and_argument_beats_env(monkeypatch):
    save_settings(little_truths=True, npc_void_points=False)
    monkeypatch.setenv("L5R4_LT_EXCEPTION", "no")
    monkeypatch.setenv("L5R4_NPC_VOID", "on")
    s = load_settings()
    assert not s.little_truths_exception
    assert s.allow_npc_void_points
    s = load_settings(little_truths=True, npc_void_points=False)
    assert s.little_truths_exception
    assert not s.allow_npc_void_points


def test_save_keeps_unrelated_keys(isolated_config):
    isolated_config.mkdir(parents=True)
    config_path().write_text(json.dumps({"theme": "dark"}), encoding="utf-8")
    save_settings(npc_void_points=True)
    data = json.loads(config_path().read_text(encoding="utf-8"))
    assert data == {"theme": "dark", "allow_npc_void_points": True}


def test_env_flags(monkeypatch):
    assert little_truths_from_env() is None
    for val, expected in [("1", True), ("TRUE", True), (" yes ", True), ("0", False), ("off", False)]:
        monkeypatch.setenv("L5R4_NPC_VOID", val)
        assert npc_void_points_from_env() is expected


def test_env_values_are_not_saved(monkeypatch):
    monkeypatch.setenv("L5R4_LT_EXCEPTION", "1")
    save_settings(npc_void_points=True)
    data = json.loads(config_path().read_text(encoding="utf-8"))
    assert data == {"allow_npc_void_points": True}
    assert load_settings().little_truths_exception
