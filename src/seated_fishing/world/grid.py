"""Deterministic in-memory map implementing every world service contract.

Used by the CLI scenarios, demos and tests. A host integration supplies its
own implementations of the Protocols in :mod:`seated_fishing.world.services`.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from seated_fishing.models import GridPosition, Seat, Zone
from seated_fishing.world.services import ActorView


def line_cells(a: GridPosition, b: GridPosition) -> list[GridPosition]:
    """Bresenham line over the planar axes, both endpoints included."""
    points: list[GridPosition] = []
    dx = abs(b.x - a.x)
    dz = -abs(b.z - a.z)
    sx = 1 if a.x < b.x else -1
    sz = 1 if a.z < b.z else -1
    err = dx + dz
    x, z = a.x, a.z
    while True:
        points.append(GridPosition(x, z, a.layer))
        if x == b.x and z == b.z:
            break
        e2 = 2 * err
        if e2 >= dz:
            err += dz
            x += sx
        if e2 <= dx:
            err += dx
            z += sz
    return points


def square_ring(center: GridPosition, radius: int) -> Iterator[GridPosition]:
    """Cells at Chebyshev distance ``radius`` from ``center`` on its layer."""
    if radius <= 0:
        yield center
        return
    for dz in range(-radius, radius + 1):
        if abs(dz) == radius:
            for dx in range(-radius, radius + 1):
                yield center.offset(dx, dz)
        else:
            yield center.offset(-radius, dz)
            yield center.offset(radius, dz)


class InMemoryFishingMap:
    """Bounded grid with fishing zones, seats, sight blockers and reservations."""

    def __init__(self, width: int, depth: int, levels: int = 1) -> None:
        self.width = width
        self.depth = depth
        self.levels = levels
        self._zone_cells: dict[str, list[GridPosition]] = {}
        self._zone_by_cell: dict[GridPosition, Zone] = {}
        self._seats: dict[GridPosition, Seat] = {}
        self._blockers: set[GridPosition] = set()
        self._reservations: dict[GridPosition, str] = {}
        self._occupied: dict[GridPosition, str] = {}
        self._forbidden: dict[str, set[str] | None] = {}

    # -- world building -------------------------------------------------

    def add_zone(self, zone: Zone, cells: Iterable[GridPosition]) -> Zone:
        cell_list = list(cells)
        for cell in cell_list:
            if not self.in_bounds(cell):
                raise ValueError(f"Zone {zone.id!r} cell {cell} is outside the map")
        self._zone_cells[zone.id] = cell_list
        for cell in cell_list:
            self._zone_by_cell[cell] = zone
        return zone

    def add_seat(self, seat: Seat) -> Seat:
        if not self.in_bounds(seat.position):
            raise ValueError(f"Seat {seat.id!r} at {seat.position} is outside the map")
        self._seats[seat.position] = seat
        return seat

    def add_blocker(self, pos: GridPosition) -> None:
        self._blockers.add(pos)

    def forbid(self, seat: Seat, actor_ids: Iterable[str] | None = None) -> None:
        """Forbid ``seat`` to the given actors, or to everyone when ``actor_ids`` is None."""
        self._forbidden[seat.id] = None if actor_ids is None else set(actor_ids)

    def occupy(self, actor_id: str, pos: GridPosition) -> None:
        self._occupied[pos] = actor_id

    def reserve(self, actor_id: str, pos: GridPosition) -> bool:
        holder = self._reservations.get(pos)
        if holder is not None and holder != actor_id:
            return False
        self._reservations[pos] = actor_id
        return True

    def release(self, actor_id: str, pos: GridPosition) -> None:
        if self._reservations.get(pos) == actor_id:
            del self._reservations[pos]

    # -- GridQuery ------------------------------------------------------

    def zone_at(self, pos: GridPosition) -> Zone | None:
        return self._zone_by_cell.get(pos)

    def zone_cells(self, zone: Zone) -> list[GridPosition]:
        return list(self._zone_cells.get(zone.id, ()))

    def sittable_at(self, pos: GridPosition) -> Seat | None:
        seat = self._seats.get(pos)
        if seat is None or not seat.sittable:
            return None
        return seat

    def in_bounds(self, pos: GridPosition) -> bool:
        return 0 <= pos.x < self.width and 0 <= pos.z < self.depth and 0 <= pos.layer < self.levels

    def ring(self, center: GridPosition, radius: int) -> Iterator[GridPosition]:
        return square_ring(center, radius)

    # -- ReservationService ----------------------------------------------

    def can_reserve(self, actor: ActorView, pos: GridPosition) -> bool:
        holder = self._reservations.get(pos)
        return holder is None or holder == actor.id

    def is_forbidden(self, seat: Seat, actor: ActorView) -> bool:
        if seat.id not in self._forbidden:
            return False
        actor_ids = self._forbidden[seat.id]
        return actor_ids is None or actor.id in actor_ids

    def free_sitting_slot(self, seat: Seat, actor: ActorView) -> GridPosition | None:
        slot = seat.position
        occupant = self._occupied.get(slot)
        if occupant is not None and occupant != actor.id:
            return None
        if not self.can_reserve(actor, slot):
            return None
        return slot

    # -- VisibilityService -------------------------------------------------

    def has_line_of_sight(self, a: GridPosition, b: GridPosition) -> bool:
        if a.layer != b.layer:
            return False
        for cell in line_cells(a, b)[1:-1]:
            if not self.in_bounds(cell) or cell in self._blockers:
                return False
        return True
