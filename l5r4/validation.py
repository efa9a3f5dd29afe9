from __future__ import annotations

from pathlib import Path
from typing import Any
import json
import yaml
from jsonschema import Draft202012Validator
from pydantic import ValidationError

from l5r4.models.character import Character, TRAIT_NAMES


SCHEMA_DIR = Path(__file__).resolve().parent / "schema"


class PrettyError(Exception):
    pass


def _read_json(path: Path) -> Any:
    return json.loads(path.read_text(encoding="utf-8"))


def _read_yaml(path: Path) -> Any:
    return yaml.safe_load(path.read_text(encoding="utf-8"))


def _read_any(path: Path) -> Any:
    try:
        if path.suffix.lower() in {".yaml", ".yml"}:
            return _read_yaml(path)
        return _read_json(path)
    except (json.JSONDecodeError, yaml.YAMLError, UnicodeDecodeError) as e:
        raise PrettyError(f"Could not parse {path.name}: {e}")


_def_schemas = {
    "character": SCHEMA_DIR / "character.schema.json",
}


def _validate_jsonschema(obj: Any, schema_path: Path) -> None:
    schema = _read_json(schema_path)
    v = Draft202012Validator(schema)
    errors = sorted(v.iter_errors(obj), key=lambda e: list(e.path))
    if errors:
        lines = []
        for e in errors[:5]:
            ptr = "/" + "/".join([str(p) for p in e.path])
            lines.append(f"- {ptr or '/'}: {e.message}")
        more = "" if len(errors) <= 5 else f" (+{len(errors)-5} more)"
        raise PrettyError("JSON Schema validation failed:\n" + "\n".join(lines) + more)


def _migrate_trait_names(data: dict) -> dict:
    # older sheets stored traits under their full names ("reflexes": 3)
    traits = data.get("traits")
    if isinstance(traits, dict):
        data["traits"] = {TRAIT_NAMES.get(str(k).lower(), k): v for k, v in traits.items()}
    return data


# Public API


def load_character(path: Path) -> Character:
    data = _read_any(path)
    if not isinstance(data, dict):
        raise PrettyError(f"{path.name}: expected a mapping at the top level")
    data = _migrate_trait_names(data)
    _validate_jsonschema(data, _def_schemas["character"])
    try:
        return Character.model_validate(data)
    except ValidationError as e:
        raise PrettyError(e.errors(include_url=False))


def save_character(character: Character, path: Path) -> None:
    data = character.model_dump(mode="json", exclude_none=True)
    if path.suffix.lower() in {".yaml", ".yml"}:
        path.write_text(yaml.safe_dump(data, sort_keys=False), encoding="utf-8")
    else:
        path.write_text(json.dumps(data, indent=2), encoding="utf-8")


__all__ = ["load_character", "save_character", "PrettyError", "SCHEMA_DIR"]
