import json

import pytest
import yaml

from l5r4.validation import PrettyError, load_character, save_character


def test_load_json(character_file):
    ch = load_character(character_file)
    assert ch.name == "Doji Hayaku"
    assert ch.skill("kenjutsu").emphases == ["Katana"]


def test_load_yaml(tmp_path, character_data):
    p = tmp_path / "hayaku.yaml"
    p.write_text(yaml.safe_dump(character_data), encoding="utf-8")
    ch = load_character(p)
    assert ch.traits.agi == 3
    assert ch.void.points == 1


def test_full_trait_names_are_migrated(tmp_path):
    p = tmp_path / "old.json"
    p.write_text(json.dumps({"name": "Old Sheet", "traits": {"Reflexes": 4, "agility": 3}}), encoding="utf-8")
    ch = load_character(p)
    assert ch.traits.ref == 4
    assert ch.traits.agi == 3


def test_schema_errors_are_pretty(tmp_path, character_data):
    character_data["traits"]["agi"] = -1
    character_data["skills"]["Kenjutsu"]["trait"] = "luck"
    p = tmp_path / "bad.json"
    p.write_text(json.dumps(character_data), encoding="utf-8")
    with pytest.raises(PrettyError) as exc:
        load_character(p)
    msg = str(exc.value)
    assert "JSON Schema validation failed" in msg
    assert "/traits/agi" in msg


def test_unparseable_file(tmp_path):
    p = tmp_path / "broken.json"
    p.write_text("{name: ", encoding="utf-8")
    with pytest.raises(PrettyError) as exc:
        load_character(p)
    assert "broken.json" in str(exc.value)


def test_top_level_must_be_mapping(tmp_path):
    p = tmp_path / "list.yaml"
    p.write_text("- 1\n- 2\n", encoding="utf-8")
    with pytest.raises(PrettyError):
        load_character(p)


@pytest.mark.parametrize("suffix", [".json", ".yaml"])
def test_save_character(tmp_path, character_file, suffix):
    ch = load_character(character_file)
    ch.void.points = 0
    out = tmp_path / f"saved{suffix}"
    save_character(ch, out)
    again = load_character(out)
    assert again.void.points == 0
    assert again.skill("Courtier").rank == 2


def test_non_utf8_file_is_pretty(tmp_path):
    p = tmp_path / "latin1.yaml"
    p.write_bytes("name: Kakita Ry\xfb\n".encode("latin-1"))
    with pytest.raises(PrettyError) as exc:
        load_character(p)
    assert "latin1.yaml" in str(exc.value)
