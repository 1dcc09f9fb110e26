"""Runtime configuration and the flat bonus configuration record."""

from __future__ import annotations

from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class RuntimeSettings(BaseSettings):
    """Environment-driven runtime settings."""

    model_config = SettingsConfigDict(env_prefix="SEATED_FISHING_", env_file=".env", extra="ignore")

    app_name: str = "seated-fishing"
    log_level: str = "INFO"
    config_path: str = Field(
        default="seated_fishing.json",
        description="JSON file holding the persisted bonus configuration record.",
    )
    scenario_path: str | None = Field(
        default=None,
        description="Default scenario file used by map-backed CLI commands.",
    )
    telemetry_enabled: bool = True


class BonusConfig(BaseSettings):
    """Snapshot of every toggle and scalar the bonus engine reads.

    Instances are frozen: the settings surface produces a new snapshot with
    :meth:`updated` instead of mutating one that a query may be reading.
    Bounds mirror the ranges exposed by the settings sliders.
    """

    model_config = SettingsConfigDict(env_prefix="SEATED_FISHING_BONUS_", extra="ignore", frozen=True)

    enabled: bool = Field(default=True, description="Master toggle for all seated fishing bonuses.")

    fish_bonus_enabled: bool = True
    yield_multiplier: float = Field(default=1.25, ge=1.0, le=2.0)
    speed_multiplier: float = Field(default=1.15, ge=1.0, le=2.0)

    recreation_enabled: bool = False
    recreation_gain_rate: float = Field(default=0.01, ge=0.001, le=0.05, description="Recreation per tick.")

    comfort_enabled: bool = False
    comfort_level: float = Field(default=0.8, ge=0.1, le=1.0)

    stress_reduction_enabled: bool = False
    stress_reduction_factor: float = Field(default=0.5, ge=0.1, le=1.0)

    skill_bonus_enabled: bool = False
    fishing_skill_multiplier: float = Field(default=2.0, ge=1.0, le=3.0)
    intellectual_skill_rate: float = Field(default=0.02, ge=0.001, le=0.05)
    artistic_skill_rate: float = Field(default=0.015, ge=0.001, le=0.05)

    quality_scaling_enabled: bool = False
    quality_multiplier: float = Field(
        default=1.5,
        ge=1.0,
        le=3.0,
        description="How strongly seat comfort scales bonuses (1.0 = no effect).",
    )
    base_comfort: float = Field(default=0.5, ge=0.0, le=1.0, description="Comfort at which bonuses are unscaled.")

    require_seat_in_zone: bool = True
    max_distance: int = Field(default=2, ge=0, le=5)
    show_bonus_alert: bool = True

    def updated(self, **changes: Any) -> BonusConfig:
        """Return a validated copy with ``changes`` applied."""
        unknown = sorted(set(changes) - set(type(self).model_fields))
        if unknown:
            raise ValueError(f"Unknown bonus config field(s): {', '.join(unknown)}")
        return type(self)(**{**self.model_dump(), **changes})


def describe_config(config: BonusConfig) -> list[str]:
    """Summarize the record the way the settings surface labels it."""
    if not config.enabled:
        return ["Seated fishing bonuses: disabled"]

    lines = ["Seated fishing bonuses: enabled"]
    if config.fish_bonus_enabled:
        lines.append(f"Yield Multiplier: {config.yield_multiplier:.2f}x")
        lines.append(f"Speed Multiplier: {config.speed_multiplier:.2f}x")
    if config.recreation_enabled:
        lines.append(f"Recreation Gain Rate: {config.recreation_gain_rate:.3f} per tick")
    if config.comfort_enabled:
        lines.append(f"Comfort Level: {config.comfort_level:.2f}")
    if config.stress_reduction_enabled:
        lines.append(f"Stress Reduction: {(1.0 - config.stress_reduction_factor) * 100:.0f}% less mental breaks")
    if config.skill_bonus_enabled:
        lines.append(f"Fishing Skill Multiplier: {config.fishing_skill_multiplier:.1f}x")
        lines.append(f"Intellectual XP Rate: {config.intellectual_skill_rate:.3f} per tick")
        lines.append(f"Artistic XP Rate: {config.artistic_skill_rate:.3f} per tick")
    if config.quality_scaling_enabled:
        lines.append(
            f"Seat Quality Scaling: {config.quality_multiplier:.2f}x around comfort {config.base_comfort:.2f}"
        )
    lines.append(f"Require Seat Near Fishing Zone: {'yes' if config.require_seat_in_zone else 'no'}")
    lines.append(f"Max Seat Distance from Fishing Zone: {config.max_distance}")
    lines.append(f"Show Bonus Alert Messages: {'yes' if config.show_bonus_alert else 'no'}")
    return lines


settings = RuntimeSettings()
