"""Entry points the host's fishing job calls to apply seated bonuses."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from seated_fishing.bonus import compose_for_seat
from seated_fishing.config import BonusConfig
from seated_fishing.models import ActivityStep, BonusChannel, Catch, GridPosition, Seat, SkillGains, ThresholdKind
from seated_fishing.qualifier import is_seat_valid_for_fishing
from seated_fishing.seat_locator import SeatLocator
from seated_fishing.telemetry.logging import LoggingTelemetry, Telemetry
from seated_fishing.world.services import ActorView, GridQuery, ReservationService, VisibilityService

# XP the host grants per fishing tick; the fishing skill bonus scales the extra above it.
BASE_FISHING_XP_PER_TICK = 0.025
RARE_TICK_INTERVAL = 250


class SeatedFishingHooks:
    """Applies seat bonuses at each point of a fishing activity.

    Every hook re-validates the actor's seat against the target and falls back
    to the neutral value when no bonus applies or a world service fails, so the
    activity always proceeds.
    """

    def __init__(
        self,
        grid: GridQuery,
        reservations: ReservationService,
        visibility: VisibilityService,
        *,
        telemetry: Telemetry | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self.grid = grid
        self.reservations = reservations
        self.visibility = visibility
        self.locator = SeatLocator(grid, reservations, visibility)
        self._telemetry = telemetry or LoggingTelemetry()
        self._logger = logger or logging.getLogger("seated_fishing.hooks")

    def seat_under(self, actor: ActorView) -> Seat | None:
        """Seat the actor is sitting on, if it is stationary on one."""
        if actor.is_moving:
            return None
        return self.grid.sittable_at(actor.position)

    def qualifying_seat(self, actor: ActorView, target: GridPosition, config: BonusConfig) -> Seat | None:
        seat = self.seat_under(actor)
        if seat is None or not is_seat_valid_for_fishing(seat.position, target, self.grid, config):
            return None
        return seat

    def best_stand_spot(
        self,
        actor: ActorView,
        target: GridPosition,
        proposed: GridPosition,
        config: BonusConfig,
    ) -> GridPosition:
        """Swap the host's chosen stand spot for a nearby seat's sitting slot when one is free."""
        if not config.enabled:
            return proposed
        try:
            if self.grid.sittable_at(proposed) is not None:
                return proposed
            if not self.reservations.can_reserve(actor, proposed) or not self.reservations.can_reserve(actor, target):
                return proposed

            seat = self.locator.find_best_seat(proposed, actor, target, config)
            if seat is None:
                return proposed
            slot = self.reservations.free_sitting_slot(seat, actor)
            if (
                slot is not None
                and self.visibility.has_line_of_sight(slot, target)
                and self.reservations.can_reserve(actor, slot)
                and self.reservations.can_reserve(actor, target)
            ):
                self._logger.info(
                    "stand_spot_redirected",
                    extra={"actor_id": actor.id, "seat_id": seat.id, "slot": slot},
                )
                return slot
        except Exception:  # noqa: BLE001 - the host job must still get a stand spot.
            self._logger.exception("stand_spot_hook_failed", extra={"actor_id": actor.id})
        return proposed

    def start_activity(
        self,
        actor: ActorView,
        step: ActivityStep,
        target: GridPosition,
        stand_spot: GridPosition,
        config: BonusConfig,
    ) -> float:
        """Shorten ``step`` by the effective speed bonus and return the speed applied."""
        try:
            seat = self.grid.sittable_at(stand_spot)
            if seat is None or not is_seat_valid_for_fishing(stand_spot, target, self.grid, config):
                return 1.0

            speed = compose_for_seat(BonusChannel.SPEED, seat, config)
            if speed <= 1.0 or step.ticks_left <= 0:
                return 1.0

            step.set_ticks_left(round(step.ticks_left / speed))
            self._alert(
                config,
                "speed_bonus",
                actor,
                seat,
                f"{actor.label} is fishing comfortably from a {seat.label} (+{(speed - 1.0) * 100:.0f}% speed)",
            )
            return speed
        except Exception:  # noqa: BLE001
            self._logger.exception("start_activity_hook_failed", extra={"actor_id": actor.id})
            return 1.0

    def skill_gains(self, actor: ActorView, target: GridPosition, config: BonusConfig) -> SkillGains:
        try:
            seat = self.qualifying_seat(actor, target, config)
            if seat is None:
                return SkillGains()

            fishing_multiplier = compose_for_seat(BonusChannel.SKILL_FISHING, seat, config)
            return SkillGains(
                fishing=max(0.0, BASE_FISHING_XP_PER_TICK * (fishing_multiplier - 1.0)),
                intellectual=compose_for_seat(BonusChannel.SKILL_INTELLECTUAL, seat, config),
                artistic=compose_for_seat(BonusChannel.SKILL_ARTISTIC, seat, config),
            )
        except Exception:  # noqa: BLE001
            self._logger.exception("skill_hook_failed", extra={"actor_id": actor.id})
            return SkillGains()

    def apply_yield(
        self,
        actor: ActorView,
        target: GridPosition,
        catches: Sequence[Catch],
        config: BonusConfig,
        *,
        animal_fishing: bool = False,
    ) -> list[Catch]:
        """Return ``catches`` with each stack grown by the effective yield bonus."""
        result = list(catches)
        if animal_fishing or not result:
            return result
        try:
            seat = self.qualifying_seat(actor, target, config)
            if seat is None:
                return result

            yield_multiplier = compose_for_seat(BonusChannel.YIELD, seat, config)
            boosted: list[Catch] = []
            for catch in result:
                bonus = round(catch.stack_count * (yield_multiplier - 1.0))
                boosted.append(Catch(catch.item, catch.stack_count + bonus) if bonus > 0 else catch)

            if boosted != result:
                self._alert(config, "yield_bonus", actor, seat, f"{actor.label} caught extra fish from seat comfort!")
            return boosted
        except Exception:  # noqa: BLE001
            self._logger.exception("yield_hook_failed", extra={"actor_id": actor.id})
            return result

    def recreation_gain(
        self,
        actor: ActorView,
        target: GridPosition,
        config: BonusConfig,
        *,
        ticks: int = RARE_TICK_INTERVAL,
    ) -> float:
        try:
            seat = self.qualifying_seat(actor, target, config)
            if seat is None:
                return 0.0
            return compose_for_seat(BonusChannel.RECREATION, seat, config) * ticks
        except Exception:  # noqa: BLE001
            self._logger.exception("recreation_hook_failed", extra={"actor_id": actor.id})
            return 0.0

    def comfort_level(self, actor: ActorView, target: GridPosition, current: float, config: BonusConfig) -> float:
        try:
            seat = self.qualifying_seat(actor, target, config)
            if seat is None:
                return current
            return max(current, compose_for_seat(BonusChannel.COMFORT, seat, config))
        except Exception:  # noqa: BLE001
            self._logger.exception("comfort_hook_failed", extra={"actor_id": actor.id})
            return current

    def break_threshold(
        self,
        actor: ActorView,
        target: GridPosition,
        kind: ThresholdKind,
        threshold: float,
        config: BonusConfig,
    ) -> float:
        """Adjust a mental break threshold; every ``kind`` is scaled the same way."""
        try:
            seat = self.qualifying_seat(actor, target, config)
            if seat is None:
                return threshold
            return threshold * compose_for_seat(BonusChannel.STRESS, seat, config)
        except Exception:  # noqa: BLE001
            self._logger.exception("break_threshold_hook_failed", extra={"actor_id": actor.id, "kind": kind.value})
            return threshold

    def _alert(self, config: BonusConfig, kind: str, actor: ActorView, seat: Seat, message: str) -> None:
        if not config.show_bonus_alert:
            return
        self._telemetry.emit(
            "bonus_alert",
            {"kind": kind, "actor_id": actor.id, "seat_id": seat.id, "message": message},
        )
