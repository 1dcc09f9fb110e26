from __future__ import annotations

from seated_fishing.config import BonusConfig
from seated_fishing.models import Actor, GridPosition, Seat, Zone
from seated_fishing.seat_locator import SeatLocator, search_radius
from seated_fishing.world.grid import InMemoryFishingMap

ANYWHERE = BonusConfig(require_seat_in_zone=False)


def _shore_map() -> InMemoryFishingMap:
    world = InMemoryFishingMap(width=30, depth=30)
    world.add_zone(Zone("lake"), [GridPosition(x, 15) for x in range(30)])
    return world


def _angler(x: int = 10, z: int = 14) -> Actor:
    return Actor(id="alice", label="Alice", position=GridPosition(x, z))


def _locator(world: InMemoryFishingMap) -> SeatLocator:
    return SeatLocator(world, world, world)


class RacingReservations:
    """Wraps a map so named seats lose their free slot after the first check."""

    def __init__(self, world: InMemoryFishingMap, contested: set[str]) -> None:
        self._world = world
        self._contested = contested
        self.slot_checks: dict[str, int] = {}

    def can_reserve(self, actor, pos):
        return self._world.can_reserve(actor, pos)

    def is_forbidden(self, seat, actor):
        return self._world.is_forbidden(seat, actor)

    def free_sitting_slot(self, seat, actor):
        self.slot_checks[seat.id] = self.slot_checks.get(seat.id, 0) + 1
        if seat.id in self._contested and self.slot_checks[seat.id] > 1:
            return None
        return self._world.free_sitting_slot(seat, actor)


def test_search_radius_keeps_margin_and_floor() -> None:
    assert search_radius(BonusConfig(max_distance=0)) == 5
    assert search_radius(BonusConfig(max_distance=2)) == 5
    assert search_radius(BonusConfig(max_distance=4)) == 6
    assert search_radius(BonusConfig(max_distance=5)) == 7


def test_nearest_of_two_qualifying_seats_wins() -> None:
    world = _shore_map()
    reference = GridPosition(10, 14)
    world.add_seat(Seat("far", reference.offset(5, 0), comfort=0.9))
    world.add_seat(Seat("near", reference.offset(3, 0), comfort=0.2))

    seat = _locator(world).find_best_seat(reference, _angler(), GridPosition(10, 15), BonusConfig(max_distance=5))

    assert seat is not None
    assert seat.id == "near"


def test_globally_nearest_beats_first_ring_found() -> None:
    world = _shore_map()
    reference = GridPosition(10, 10)
    # Diagonal seat sits on ring 3 but is ~4.24 away; the straight one is on ring 4 at 4.0.
    world.add_seat(Seat("diagonal", reference.offset(3, 3), comfort=0.5))
    world.add_seat(Seat("straight", reference.offset(4, 0), comfort=0.5))

    result = _locator(world).search(reference, _angler(), GridPosition(10, 15), ANYWHERE)

    assert [seat.id for seat in result.candidates] == ["straight", "diagonal"]
    assert result.seat is not None and result.seat.id == "straight"


def test_seat_on_reference_cell_is_found() -> None:
    world = _shore_map()
    world.add_seat(Seat("here", GridPosition(10, 14), comfort=0.5))

    seat = _locator(world).find_best_seat(GridPosition(10, 14), _angler(), GridPosition(10, 15), BonusConfig())

    assert seat is not None and seat.id == "here"


def test_disabled_bonuses_return_none() -> None:
    world = _shore_map()
    world.add_seat(Seat("chair", GridPosition(10, 14), comfort=0.5))

    assert _locator(world).find_best_seat(GridPosition(10, 14), _angler(), GridPosition(10, 15), BonusConfig(enabled=False)) is None


def test_unavailable_seats_are_skipped() -> None:
    world = _shore_map()
    reference = GridPosition(10, 13)
    target = GridPosition(10, 15)
    forbidden = world.add_seat(Seat("forbidden", GridPosition(10, 14), comfort=0.5))
    world.forbid(forbidden)
    world.add_seat(Seat("reserved", GridPosition(11, 14), comfort=0.5))
    world.reserve("bob", GridPosition(11, 14))
    world.add_seat(Seat("occupied", GridPosition(9, 14), comfort=0.5))
    world.occupy("carol", GridPosition(9, 14))
    world.add_seat(Seat("free", GridPosition(13, 14), comfort=0.5))

    seat = _locator(world).find_best_seat(reference, _angler(), target, BonusConfig())

    assert seat is not None and seat.id == "free"


def test_seat_forbidden_only_to_other_actor_is_usable() -> None:
    world = _shore_map()
    seat = world.add_seat(Seat("chair", GridPosition(10, 14), comfort=0.5))
    world.forbid(seat, actor_ids={"bob"})

    found = _locator(world).find_best_seat(GridPosition(10, 13), _angler(), GridPosition(10, 15), BonusConfig())

    assert found == seat


def test_blocked_line_of_sight_is_skipped() -> None:
    world = _shore_map()
    world.add_seat(Seat("behind-wall", GridPosition(10, 12), comfort=0.5))
    world.add_blocker(GridPosition(10, 13))
    world.add_seat(Seat("clear", GridPosition(12, 13), comfort=0.5))

    seat = _locator(world).find_best_seat(GridPosition(10, 12), _angler(), GridPosition(10, 15), BonusConfig(max_distance=3))

    assert seat is not None and seat.id == "clear"


def test_reserved_target_yields_no_seat() -> None:
    world = _shore_map()
    world.add_seat(Seat("chair", GridPosition(10, 14), comfort=0.5))
    world.reserve("bob", GridPosition(10, 15))

    assert _locator(world).find_best_seat(GridPosition(10, 14), _angler(), GridPosition(10, 15), BonusConfig()) is None


def test_unqualified_seats_are_skipped() -> None:
    world = _shore_map()
    world.add_seat(Seat("inland", GridPosition(10, 10), comfort=0.5))

    result = _locator(world).search(GridPosition(10, 12), _angler(), GridPosition(10, 15), BonusConfig(max_distance=2))

    assert result.seat is None
    assert result.candidates == []


def test_seat_beyond_search_radius_is_not_found() -> None:
    world = _shore_map()
    world.add_seat(Seat("distant", GridPosition(16, 15), comfort=0.5))

    found = _locator(world).find_best_seat(GridPosition(10, 15), _angler(), GridPosition(10, 15), ANYWHERE)

    assert found is None


def test_search_near_map_edge_ignores_out_of_bounds_cells() -> None:
    world = _shore_map()
    world.add_seat(Seat("corner", GridPosition(1, 14), comfort=0.5))

    found = _locator(world).find_best_seat(GridPosition(0, 14), _angler(0, 14), GridPosition(0, 15), BonusConfig())

    assert found is not None and found.id == "corner"


def test_seat_claimed_between_passes_is_not_handed_out() -> None:
    world = _shore_map()
    reference = GridPosition(10, 14)
    world.add_seat(Seat("contested", reference.offset(1, 0), comfort=0.5))
    world.add_seat(Seat("spare", reference.offset(3, 0), comfort=0.5))
    reservations = RacingReservations(world, contested={"contested"})
    locator = SeatLocator(world, reservations, world)

    seat = locator.find_best_seat(reference, _angler(), GridPosition(10, 15), BonusConfig())

    assert seat is not None and seat.id == "spare"
    assert reservations.slot_checks["contested"] == 2
    assert reservations.free_sitting_slot(seat, _angler()) is not None


def test_all_candidates_claimed_returns_none() -> None:
    world = _shore_map()
    world.add_seat(Seat("only", GridPosition(11, 14), comfort=0.5))
    locator = SeatLocator(world, RacingReservations(world, contested={"only"}), world)

    assert locator.find_best_seat(GridPosition(10, 14), _angler(), GridPosition(10, 15), BonusConfig()) is None


def test_ring_corners_beyond_search_radius_are_skipped() -> None:
    world = _shore_map()
    reference = GridPosition(10, 10)
    world.add_seat(Seat("corner", GridPosition(15, 15), comfort=0.5))
    world.add_seat(Seat("edge", GridPosition(13, 14), comfort=0.5))

    result = _locator(world).search(reference, _angler(), GridPosition(10, 15), ANYWHERE)

    assert [seat.id for seat in result.candidates] == ["edge"]
    assert result.seat is not None and result.seat.id == "edge"
