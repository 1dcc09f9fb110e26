from __future__ import annotations

import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from seated_fishing.config import BonusConfig, describe_config
from seated_fishing.settings_store import JsonSettingsStore


def test_documented_defaults() -> None:
    config = BonusConfig()

    assert config.enabled is True
    assert config.fish_bonus_enabled is True
    assert config.yield_multiplier == 1.25
    assert config.speed_multiplier == 1.15
    assert config.require_seat_in_zone is True
    assert config.max_distance == 2
    assert config.show_bonus_alert is True
    assert config.quality_multiplier == 1.5
    assert config.base_comfort == 0.5
    assert not any(
        [
            config.recreation_enabled,
            config.comfort_enabled,
            config.stress_reduction_enabled,
            config.skill_bonus_enabled,
            config.quality_scaling_enabled,
        ]
    )


def test_config_is_frozen_and_updated_validates() -> None:
    config = BonusConfig()

    with pytest.raises(ValidationError):
        config.max_distance = 4  # type: ignore[misc]

    updated = config.updated(max_distance="4", quality_scaling_enabled="true")
    assert updated.max_distance == 4
    assert updated.quality_scaling_enabled is True
    assert config.max_distance == 2

    with pytest.raises(ValidationError):
        config.updated(yield_multiplier=5.0)
    with pytest.raises(ValueError, match="Unknown bonus config"):
        config.updated(fishing_rod=True)


def test_environment_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SEATED_FISHING_BONUS_MAX_DISTANCE", "4")

    assert BonusConfig().max_distance == 4


def test_describe_config_lists_enabled_sections() -> None:
    lines = describe_config(BonusConfig(stress_reduction_enabled=True))

    assert "Yield Multiplier: 1.25x" in lines
    assert "Stress Reduction: 50% less mental breaks" in lines
    assert "Max Seat Distance from Fishing Zone: 2" in lines
    assert not any(line.startswith("Recreation") for line in lines)
    assert describe_config(BonusConfig(enabled=False)) == ["Seated fishing bonuses: disabled"]


def test_store_missing_file_gives_defaults(tmp_path: Path) -> None:
    store = JsonSettingsStore(tmp_path / "missing.json")

    assert store.load() == BonusConfig()


def test_store_roundtrip(tmp_path: Path) -> None:
    store = JsonSettingsStore(tmp_path / "settings" / "bonus.json")
    config = BonusConfig(recreation_enabled=True, max_distance=4)

    store.save(config)

    assert store.load() == config


def test_store_partial_file_keeps_defaults(tmp_path: Path) -> None:
    path = tmp_path / "bonus.json"
    path.write_text(json.dumps({"speed_multiplier": 1.5, "legacy_field": 1}), encoding="utf-8")

    config = JsonSettingsStore(path).load()

    assert config.speed_multiplier == 1.5
    assert config.yield_multiplier == 1.25


@pytest.mark.parametrize("content", ["{not json", "[1, 2]", json.dumps({"max_distance": 99})])
def test_store_falls_back_on_bad_file(tmp_path: Path, content: str) -> None:
    path = tmp_path / "bonus.json"
    path.write_text(content, encoding="utf-8")

    assert JsonSettingsStore(path).load() == BonusConfig()


def test_store_falls_back_on_undecodable_file(tmp_path: Path) -> None:
    path = tmp_path / "bonus.json"
    path.write_bytes(b'{"max_distance": "\xff\xfe"}')

    assert JsonSettingsStore(path).load() == BonusConfig()
