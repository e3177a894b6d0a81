import json
from pathlib import Path
from typing import Any, Dict, Tuple

import yaml

from autonation.content.config import AI_PROFILE_DATA, UnitType
from autonation.content.specs import AIProfile, BuildStep

_STEP_DEFAULT_TYPES = {
    "warship": UnitType.WARSHIP,
    "train_station": UnitType.TRAIN,
}


def load_data(path: str | Path) -> Dict[str, Any]:
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(path)
    if path.suffix.lower() in (".yaml", ".yml"):
        with open(path, "r", encoding="utf-8") as f:
            return yaml.safe_load(f) or {}
    elif path.suffix.lower() == ".json":
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    else:
        raise ValueError(f"Unsupported data format: {path.suffix}")


def _parse_unit_type(raw) -> UnitType:
    try:
        return UnitType(str(raw).strip().lower())
    except ValueError:
        raise ValueError(f"Unknown unit type in AI profile: {raw!r}") from None


def _parse_build_step(raw) -> BuildStep:
    # Accepted forms: "warship", [train_station], [structure, city, 3]
    if isinstance(raw, str):
        raw = [raw]
    if not isinstance(raw, (list, tuple)) or not raw:
        raise ValueError(f"Malformed build step: {raw!r}")
    kind = str(raw[0]).strip().lower()
    if kind == "structure":
        if len(raw) != 3:
            raise ValueError(f"Structure step needs a type and a cap: {raw!r}")
        return BuildStep(kind, _parse_unit_type(raw[1]), int(raw[2]))
    if kind in _STEP_DEFAULT_TYPES:
        return BuildStep(kind, _STEP_DEFAULT_TYPES[kind])
    raise ValueError(f"Unknown build step kind: {kind!r}")


def _parse_build_order(section, fallback) -> Tuple[BuildStep, ...]:
    if not section or "build_order" not in section:
        return fallback
    return tuple(_parse_build_step(item) for item in section["build_order"])


def load_ai_profile(path: str | Path = AI_PROFILE_DATA) -> AIProfile:
    """
    Reads build orders and nuke target values from a YAML/JSON profile.
    Sections that are missing keep the built-in defaults.
    """
    data = load_data(path)
    profile = AIProfile.default()

    profile.nation_build_order = _parse_build_order(data.get("nation"), profile.nation_build_order)
    profile.delegated_build_order = _parse_build_order(data.get("delegated"), profile.delegated_build_order)

    values = data.get("nuke_values")
    if values:
        profile.nuke_structure_values = {
            _parse_unit_type(name): int(value) for name, value in values.items()
        }
    return profile
