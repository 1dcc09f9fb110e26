"""World service contracts and the in-memory map backend."""

from seated_fishing.world.grid import InMemoryFishingMap, line_cells, square_ring
from seated_fishing.world.services import ActorView, GridQuery, ReservationService, VisibilityService

__all__ = [
    "ActorView",
    "GridQuery",
    "InMemoryFishingMap",
    "ReservationService",
    "VisibilityService",
    "line_cells",
    "square_ring",
]
