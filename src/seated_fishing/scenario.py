"""Loads JSON map scenarios into an in-memory fishing map."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError

from seated_fishing.models import Actor, GridPosition, Seat, Zone
from seated_fishing.world.grid import InMemoryFishingMap


class ScenarioError(ValueError):
    """Raised when a scenario file cannot be read or describes an invalid map."""


class ZoneSpec(BaseModel):
    id: str
    label: str = ""
    layer: int = 0
    cells: list[tuple[int, int]]


class SeatSpec(BaseModel):
    id: str
    x: int
    z: int
    layer: int = 0
    comfort: float = Field(default=0.5, ge=0.0, le=1.0)
    sittable: bool = True
    forbidden: bool = False
    label: str = "chair"


class ReservationSpec(BaseModel):
    actor: str
    x: int
    z: int
    layer: int = 0


class ActorSpec(BaseModel):
    id: str
    label: str | None = None
    x: int
    z: int
    layer: int = 0
    moving: bool = False


class ScenarioSpec(BaseModel):
    width: int = Field(gt=0)
    depth: int = Field(gt=0)
    levels: int = Field(default=1, gt=0)
    zones: list[ZoneSpec] = Field(default_factory=list)
    seats: list[SeatSpec] = Field(default_factory=list)
    blockers: list[tuple[int, int]] = Field(default_factory=list)
    reservations: list[ReservationSpec] = Field(default_factory=list)
    occupied: list[ReservationSpec] = Field(default_factory=list)
    actors: list[ActorSpec] = Field(default_factory=list)


@dataclass(slots=True)
class Scenario:
    world: InMemoryFishingMap
    actors: dict[str, Actor] = field(default_factory=dict)

    def actor(self, actor_id: str) -> Actor:
        if actor_id not in self.actors:
            raise ScenarioError(f"Unknown actor in scenario: {actor_id}")
        return self.actors[actor_id]


def build_scenario(spec: ScenarioSpec) -> Scenario:
    world = InMemoryFishingMap(width=spec.width, depth=spec.depth, levels=spec.levels)
    try:
        for zone in spec.zones:
            world.add_zone(
                Zone(id=zone.id, label=zone.label or zone.id),
                (GridPosition(x, z, zone.layer) for x, z in zone.cells),
            )
        for seat_spec in spec.seats:
            seat = world.add_seat(
                Seat(
                    id=seat_spec.id,
                    position=GridPosition(seat_spec.x, seat_spec.z, seat_spec.layer),
                    comfort=seat_spec.comfort,
                    sittable=seat_spec.sittable,
                    label=seat_spec.label,
                )
            )
            if seat_spec.forbidden:
                world.forbid(seat)
    except ValueError as exc:
        raise ScenarioError(str(exc)) from exc

    for x, z in spec.blockers:
        world.add_blocker(GridPosition(x, z))
    for claim in spec.reservations:
        world.reserve(claim.actor, GridPosition(claim.x, claim.z, claim.layer))
    for claim in spec.occupied:
        world.occupy(claim.actor, GridPosition(claim.x, claim.z, claim.layer))

    actors = {
        actor.id: Actor(
            id=actor.id,
            label=actor.label or actor.id,
            position=GridPosition(actor.x, actor.z, actor.layer),
            is_moving=actor.moving,
        )
        for actor in spec.actors
    }
    return Scenario(world=world, actors=actors)


def load_scenario(path: str | Path) -> Scenario:
    target = Path(path).expanduser()
    if not target.exists():
        raise ScenarioError(f"Scenario not found: {target}")

    try:
        text = target.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ScenarioError(f"Scenario could not be read: {target}") from exc

    try:
        spec = ScenarioSpec.model_validate(json.loads(text))
    except json.JSONDecodeError as exc:
        raise ScenarioError(f"Scenario is not valid JSON: {target}") from exc
    except ValidationError as exc:
        raise ScenarioError(f"Scenario {target} is invalid: {exc.error_count()} error(s)") from exc

    return build_scenario(spec)
