import tempfile
from pathlib import Path

import pytest
import yaml

from autonation.content.config import AI_PROFILE_DATA, UnitType
from autonation.content.loader import load_ai_profile, load_data
from autonation.content.specs import AIProfile, BuildStep


def _write_yaml(data, suffix=".yaml"):
    with tempfile.NamedTemporaryFile(suffix=suffix, delete=False, mode="w", encoding="utf-8") as tmp:
        yaml.safe_dump(data, tmp, sort_keys=False)
        return tmp.name


def test_shipped_profile_matches_builtin_defaults():
    profile = load_ai_profile(AI_PROFILE_DATA)
    default = AIProfile.default()

    assert profile.nation_build_order == default.nation_build_order
    assert profile.delegated_build_order == default.delegated_build_order
    assert profile.nuke_structure_values == default.nuke_structure_values


def test_nation_build_order_starts_with_port_then_city():
    profile = load_ai_profile()

    assert profile.nation_build_order[0] == BuildStep("structure", UnitType.PORT, 1)
    assert profile.nation_build_order[1] == BuildStep("structure", UnitType.CITY, 1)
    assert profile.nation_build_order[4] == BuildStep("warship", UnitType.WARSHIP)


def test_custom_profile_overrides_only_given_sections():
    path = _write_yaml({
        "nation": {"build_order": [["structure", "city", 3], "warship", ["train_station"]]},
        "nuke_values": {"city": 40000},
    })
    try:
        profile = load_ai_profile(path)
        assert profile.nation_build_order == (
            BuildStep("structure", UnitType.CITY, 3),
            BuildStep("warship", UnitType.WARSHIP),
            BuildStep("train_station", UnitType.TRAIN),
        )
        assert profile.delegated_build_order == AIProfile.default().delegated_build_order
        assert profile.nuke_structure_values == {UnitType.CITY: 40000}
    finally:
        Path(path).unlink(missing_ok=True)


def test_unknown_unit_type_is_rejected():
    path = _write_yaml({"nation": {"build_order": [["structure", "castle", 1]]}})
    try:
        with pytest.raises(ValueError):
            load_ai_profile(path)
    finally:
        Path(path).unlink(missing_ok=True)


def test_structure_step_without_cap_is_rejected():
    path = _write_yaml({"delegated": {"build_order": [["structure", "city"]]}})
    try:
        with pytest.raises(ValueError):
            load_ai_profile(path)
    finally:
        Path(path).unlink(missing_ok=True)


def test_load_data_missing_file():
    with pytest.raises(FileNotFoundError):
        load_data("does/not/exist.yaml")


def test_load_data_unsupported_suffix():
    with tempfile.NamedTemporaryFile(suffix=".txt", delete=False) as tmp:
        path = tmp.name
    try:
        with pytest.raises(ValueError):
            load_data(path)
    finally:
        Path(path).unlink(missing_ok=True)
