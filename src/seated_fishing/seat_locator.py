from __future__ import annotations

import logging

from seated_fishing.config import BonusConfig
from seated_fishing.models import GridPosition, Seat, SeatSearchResult
from seated_fishing.qualifier import is_seat_valid_for_fishing
from seated_fishing.world.services import ActorView, GridQuery, ReservationService, VisibilityService

MIN_SEARCH_RADIUS = 5
SEARCH_MARGIN = 2


def search_radius(config: BonusConfig) -> int:
    """Ring radius wide enough to reach seats that qualify through a distant zone cell."""
    return max(config.max_distance + SEARCH_MARGIN, MIN_SEARCH_RADIUS)


class SeatLocator:
    """Finds the nearest seat an actor can actually claim for fishing a target cell.

    Rings are square, so cells in their corners beyond the search radius are
    skipped and the scan covers a disc around the reference point.

    Candidates are collected over the whole search radius, ranked by distance
    to the reference point, then re-checked one by one because reservations are
    shared with other actors searching at the same time.
    """

    def __init__(
        self,
        grid: GridQuery,
        reservations: ReservationService,
        visibility: VisibilityService,
        *,
        logger: logging.Logger | None = None,
    ) -> None:
        self._grid = grid
        self._reservations = reservations
        self._visibility = visibility
        self._logger = logger or logging.getLogger("seated_fishing.seat_locator")

    def find_best_seat(
        self,
        reference_pos: GridPosition,
        actor: ActorView,
        target_pos: GridPosition,
        config: BonusConfig,
    ) -> Seat | None:
        return self.search(reference_pos, actor, target_pos, config).seat

    def search(
        self,
        reference_pos: GridPosition,
        actor: ActorView,
        target_pos: GridPosition,
        config: BonusConfig,
    ) -> SeatSearchResult:
        radius = search_radius(config)
        if not config.enabled:
            return SeatSearchResult(seat=None, search_radius=radius)

        self._logger.debug(
            "seat_search_started",
            extra={"actor_id": actor.id, "reference": reference_pos, "target": target_pos, "radius": radius},
        )
        candidates = self._collect_candidates(reference_pos, actor, target_pos, config, radius)
        candidates.sort(key=lambda seat: seat.position.distance_to(reference_pos))

        for seat in candidates:
            slot = self._reservations.free_sitting_slot(seat, actor)
            if slot is not None and self._reservations.can_reserve(actor, slot):
                self._logger.info(
                    "seat_selected",
                    extra={"actor_id": actor.id, "seat_id": seat.id, "candidate_count": len(candidates)},
                )
                return SeatSearchResult(seat=seat, search_radius=radius, candidates=candidates)
            self._logger.debug("seat_claimed_during_search", extra={"actor_id": actor.id, "seat_id": seat.id})

        self._logger.debug("seat_search_empty", extra={"actor_id": actor.id, "candidate_count": len(candidates)})
        return SeatSearchResult(seat=None, search_radius=radius, candidates=candidates)

    def _collect_candidates(
        self,
        reference_pos: GridPosition,
        actor: ActorView,
        target_pos: GridPosition,
        config: BonusConfig,
        radius: int,
    ) -> list[Seat]:
        candidates: list[Seat] = []
        seen: set[str] = set()
        for ring_radius in range(0, radius + 1):
            for cell in self._grid.ring(reference_pos, ring_radius):
                if not self._grid.in_bounds(cell) or cell.distance_to(reference_pos) > radius:
                    continue
                seat = self._grid.sittable_at(cell)
                if seat is None or seat.id in seen:
                    continue
                seen.add(seat.id)

                reason = self._rejection_reason(seat, cell, actor, target_pos, config)
                if reason is not None:
                    self._logger.debug(
                        "seat_candidate_rejected",
                        extra={"actor_id": actor.id, "seat_id": seat.id, "reason": reason},
                    )
                    continue
                candidates.append(seat)
        return candidates

    def _rejection_reason(
        self,
        seat: Seat,
        cell: GridPosition,
        actor: ActorView,
        target_pos: GridPosition,
        config: BonusConfig,
    ) -> str | None:
        if not is_seat_valid_for_fishing(cell, target_pos, self._grid, config):
            return "not_qualified"
        if not self._reservations.can_reserve(actor, cell) or self._reservations.is_forbidden(seat, actor):
            return "unavailable"
        slot = self._reservations.free_sitting_slot(seat, actor)
        if slot is None:
            return "no_free_slot"
        if not self._reservations.can_reserve(actor, target_pos):
            return "target_reserved"
        if not self._reservations.can_reserve(actor, slot):
            return "slot_reserved"
        if not self._visibility.has_line_of_sight(slot, target_pos):
            return "no_line_of_sight"
        return None
