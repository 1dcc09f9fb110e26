"""Decides whether a seat position earns fishing bonuses for a target cell."""

from __future__ import annotations

from seated_fishing.config import BonusConfig
from seated_fishing.models import GridPosition
from seated_fishing.world.services import GridQuery


def is_seat_valid_for_fishing(
    seat_pos: GridPosition | None,
    target_pos: GridPosition | None,
    grid: GridQuery,
    config: BonusConfig,
) -> bool:
    """Return whether a seat at ``seat_pos`` qualifies for bonuses at ``target_pos``.

    The target must sit inside a fishing zone. When seats are required near the
    zone, the seat qualifies if it shares the target's zone or lies within
    ``config.max_distance`` of the target cell or of any cell of the zone.
    Zones can be concave, so every cell is checked rather than a centroid.
    """
    if not config.enabled or seat_pos is None or target_pos is None:
        return False

    zone = grid.zone_at(target_pos)
    if zone is None:
        return False

    if not config.require_seat_in_zone:
        return True

    if grid.zone_at(seat_pos) == zone:
        return True

    max_distance = config.max_distance
    if seat_pos.distance_to(target_pos) <= max_distance:
        return True

    return any(seat_pos.distance_to(cell) <= max_distance for cell in grid.zone_cells(zone))
