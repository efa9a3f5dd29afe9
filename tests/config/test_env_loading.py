import os
from pathlib import Path

from l5r4.config_env import load_env


def test_env_loads_dotenv(tmp_path, monkeypatch):
    (tmp_path / ".env").write_text("FOO=bar\nL5R4_LT_EXCEPTION=from_env_file\n", encoding="utf-8")
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("L5R4_LT_EXCEPTION", "from_process")
    monkeypatch.delenv("FOO", raising=False)

    load_env()

    assert os.getenv("FOO") == "bar"
    assert os.getenv("L5R4_LT_EXCEPTION") == "from_process"


def test_local_env_fills_gaps(tmp_path, monkeypatch):
    (tmp_path / ".env").write_text("L5R4_NPC_VOID=0\n", encoding="utf-8")
    (tmp_path / ".env.local").write_text("L5R4_NPC_VOID=1\nL5R4_LOCAL_ONLY=yes\n", encoding="utf-8")
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("L5R4_LOCAL_ONLY", raising=False)

    load_env()

    # .env is read first and nothing overrides what is already set
    assert os.getenv("L5R4_NPC_VOID") == "0"
    assert os.getenv("L5R4_LOCAL_ONLY") == "yes"


def test_config_dir_from_env(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("L5R4_CONFIG_DIR", raising=False)
    (tmp_path / ".env").write_text("L5R4_CONFIG_DIR=./.l5r4\n", encoding="utf-8")

    load_env()

    cfg_dir = os.getenv("L5R4_CONFIG_DIR")
    assert cfg_dir
    assert Path(cfg_dir) == (tmp_path / ".l5r4").resolve()
