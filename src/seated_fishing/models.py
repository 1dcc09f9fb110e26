from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum


class BonusChannel(str, Enum):
    """Independently composed bonus effects of fishing from a seat."""

    YIELD = "yield"
    SPEED = "speed"
    SKILL_FISHING = "skill_fishing"
    SKILL_INTELLECTUAL = "skill_intellectual"
    SKILL_ARTISTIC = "skill_artistic"
    RECREATION = "recreation"
    COMFORT = "comfort"
    STRESS = "stress"


class ChannelKind(str, Enum):
    """How a channel blends its base scalar with the quality multiplier."""

    MULTIPLICATIVE = "multiplicative"
    RATE = "rate"
    DIVISOR = "divisor"


class ThresholdKind(str, Enum):
    EXTREME = "extreme"
    MAJOR = "major"
    MINOR = "minor"


@dataclass(frozen=True, slots=True)
class GridPosition:
    """Integer map cell. ``x``/``z`` are planar, ``layer`` is vertical."""

    x: int
    z: int
    layer: int = 0

    def distance_to(self, other: GridPosition) -> float:
        return math.dist((self.x, self.z, self.layer), (other.x, other.z, other.layer))

    def chebyshev_to(self, other: GridPosition) -> int:
        return max(abs(self.x - other.x), abs(self.z - other.z), abs(self.layer - other.layer))

    def offset(self, dx: int, dz: int) -> GridPosition:
        return GridPosition(self.x + dx, self.z + dz, self.layer)


@dataclass(frozen=True, slots=True)
class Zone:
    id: str
    label: str = ""


@dataclass(frozen=True, slots=True)
class Seat:
    """Read-only view of a sittable structure owned by the world model."""

    id: str
    position: GridPosition
    comfort: float
    sittable: bool = True
    label: str = "chair"


@dataclass(slots=True)
class Actor:
    id: str
    label: str
    position: GridPosition
    is_moving: bool = False


@dataclass(slots=True)
class ActivityStep:
    """A timed step of an activity whose remaining duration hooks may shorten."""

    label: str
    ticks_left: int

    def set_ticks_left(self, ticks: int) -> None:
        self.ticks_left = max(0, int(ticks))


@dataclass(frozen=True, slots=True)
class Catch:
    item: str
    stack_count: int


@dataclass(frozen=True, slots=True)
class SkillGains:
    """Extra XP granted for a single activity tick."""

    fishing: float = 0.0
    intellectual: float = 0.0
    artistic: float = 0.0

    @property
    def total(self) -> float:
        return self.fishing + self.intellectual + self.artistic


@dataclass(slots=True)
class SeatSearchResult:
    """Outcome of a seat search with the candidates considered along the way."""

    seat: Seat | None
    search_radius: int
    candidates: list[Seat] = field(default_factory=list)
