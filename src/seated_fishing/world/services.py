"""Contracts for the host world services the bonus engine queries."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Protocol

from seated_fishing.models import GridPosition, Seat, Zone


class ActorView(Protocol):
    """The parts of a host actor the engine reads."""

    @property
    def id(self) -> str: ...

    @property
    def label(self) -> str: ...

    @property
    def position(self) -> GridPosition: ...

    @property
    def is_moving(self) -> bool: ...


class GridQuery(Protocol):
    """Zone membership, structures and bounds of one map."""

    def zone_at(self, pos: GridPosition) -> Zone | None:
        """Return the fishing zone containing ``pos``, if any."""

    def zone_cells(self, zone: Zone) -> Iterable[GridPosition]:
        """Enumerate every cell belonging to ``zone``."""

    def sittable_at(self, pos: GridPosition) -> Seat | None:
        """Return the sittable structure occupying ``pos``, if any."""

    def in_bounds(self, pos: GridPosition) -> bool:
        """Whether ``pos`` lies on the map."""

    def ring(self, center: GridPosition, radius: int) -> Iterable[GridPosition]:
        """Cells at exactly ``radius`` from ``center``; radius 0 is the center itself."""


class ReservationService(Protocol):
    """Shared reservation and occupancy state that concurrent actors race on."""

    def can_reserve(self, actor: ActorView, pos: GridPosition) -> bool:
        """Whether ``actor`` could claim ``pos`` right now."""

    def is_forbidden(self, seat: Seat, actor: ActorView) -> bool:
        """Whether ``seat`` is off-limits to ``actor``."""

    def free_sitting_slot(self, seat: Seat, actor: ActorView) -> GridPosition | None:
        """Return a cell on ``seat`` that ``actor`` could sit on, if any."""


class VisibilityService(Protocol):
    def has_line_of_sight(self, a: GridPosition, b: GridPosition) -> bool:
        """Whether nothing obstructs the straight line between ``a`` and ``b``."""
