"""CLI-side query handler over a loaded scenario and a config snapshot."""

from __future__ import annotations

from dataclasses import asdict

from seated_fishing.bonus import channel_kind, compose_all, compute_quality_multiplier
from seated_fishing.config import BonusConfig
from seated_fishing.hooks import SeatedFishingHooks
from seated_fishing.models import ActivityStep, Actor, Catch, GridPosition, Seat, ThresholdKind
from seated_fishing.qualifier import is_seat_valid_for_fishing
from seated_fishing.scenario import Scenario
from seated_fishing.seat_locator import SeatLocator
from seated_fishing.telemetry.logging import Telemetry


class CliQueryHandler:
    """Answers CLI queries and shapes results as printable dicts."""

    def __init__(self, scenario: Scenario, config: BonusConfig) -> None:
        self._scenario = scenario
        self._config = config
        world = scenario.world
        self._locator = SeatLocator(world, world, world)

    def check_seat(self, seat_pos: GridPosition, target_pos: GridPosition) -> dict:
        world = self._scenario.world
        zone = world.zone_at(target_pos)
        return {
            "seat": asdict(seat_pos),
            "target": asdict(target_pos),
            "zone": zone.id if zone else None,
            "qualifies": is_seat_valid_for_fishing(seat_pos, target_pos, world, self._config),
        }

    def find_seat(
        self,
        actor_id: str,
        reference_pos: GridPosition,
        target_pos: GridPosition,
    ) -> tuple[Seat | None, dict]:
        actor = self._scenario.actor(actor_id)
        result = self._locator.search(reference_pos, actor, target_pos, self._config)
        report = {
            "actor": actor.id,
            "search_radius": result.search_radius,
            "candidates": [
                {"id": seat.id, "distance": round(seat.position.distance_to(reference_pos), 3)}
                for seat in result.candidates
            ],
            "seat": self.format_seat(result.seat) if result.seat else None,
        }
        return result.seat, report

    def simulate(
        self,
        actor_id: str,
        target_pos: GridPosition,
        *,
        ticks: int,
        catch_size: int,
        break_threshold: float,
        telemetry: Telemetry | None = None,
    ) -> dict:
        """Walk one fishing activity through every bonus hook."""
        actor = self._scenario.actor(actor_id)
        world = self._scenario.world
        config = self._config
        hooks = SeatedFishingHooks(world, world, world, telemetry=telemetry)

        stand_spot = hooks.best_stand_spot(actor, target_pos, actor.position, config)
        seated = Actor(id=actor.id, label=actor.label, position=stand_spot)
        step = ActivityStep(label="fish", ticks_left=ticks)
        speed = hooks.start_activity(seated, step, target_pos, stand_spot, config)
        catches = hooks.apply_yield(seated, target_pos, [Catch("fish", catch_size)], config)
        seat = hooks.qualifying_seat(seated, target_pos, config)
        gains = hooks.skill_gains(seated, target_pos, config)
        return {
            "actor": actor.id,
            "stand_spot": asdict(stand_spot),
            "seat": self.format_seat(seat) if seat else None,
            "speed": speed,
            "ticks": {"before": ticks, "after": step.ticks_left},
            "catch": {"before": catch_size, "after": sum(item.stack_count for item in catches)},
            "skill_per_tick": {**asdict(gains), "total": gains.total},
            "recreation_per_rare_tick": hooks.recreation_gain(seated, target_pos, config),
            "comfort_level": hooks.comfort_level(seated, target_pos, 0.0, config),
            "break_thresholds": {
                kind.value: hooks.break_threshold(seated, target_pos, kind, break_threshold, config)
                for kind in ThresholdKind
            },
        }

    @staticmethod
    def bonuses(comfort: float, config: BonusConfig) -> dict:
        seat = Seat(id="sample", position=GridPosition(0, 0), comfort=comfort)
        return {
            "comfort": comfort,
            "quality_multiplier": compute_quality_multiplier(seat, config),
            "channels": {
                channel.value: {"kind": channel_kind(channel).value, "value": value}
                for channel, value in compose_all(seat, config).items()
            },
        }

    @staticmethod
    def format_seat(seat: Seat) -> dict:
        return asdict(seat)
