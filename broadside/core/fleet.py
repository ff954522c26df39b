"""Fleet validation and random placement for self-play boards."""

from __future__ import annotations

import random
from collections.abc import Sequence

from broadside.core.board import BoardState
from broadside.core.models import (
    BOARD_SIZE,
    DEFAULT_FLEET,
    Coord,
    FleetPlacement,
    Orientation,
    ShipPlacement,
    ShipType,
    cells_for_placement,
    in_bounds,
)

_NON_TOUCHING_ATTEMPTS = 400


def validate_fleet(
    fleet: FleetPlacement,
    size: int = BOARD_SIZE,
    ship_types: Sequence[ShipType] = DEFAULT_FLEET,
) -> tuple[bool, str]:
    """Check the fleet has exactly ``ship_types``, on the board, without overlap."""
    expected = sorted(ship.value for ship in ship_types)
    actual = sorted(placement.ship_type.value for placement in fleet.ships)
    if len(actual) != len(expected):
        return False, f"Fleet must contain exactly {len(expected)} ships."
    if actual != expected:
        return False, f"Fleet ships {actual} do not match {expected}."

    occupied: set[Coord] = set()
    for placement in fleet.ships:
        cells = cells_for_placement(placement)
        if any(not in_bounds(cell.row, cell.col, size) or cell in occupied for cell in cells):
            return False, f"Invalid placement for {placement.ship_type.value}."
        occupied.update(cells)
    return True, ""


def build_board_from_fleet(
    fleet: FleetPlacement,
    size: int = BOARD_SIZE,
    ship_types: Sequence[ShipType] = DEFAULT_FLEET,
) -> BoardState:
    """Create a board holding a validated fleet."""
    valid, reason = validate_fleet(fleet, size=size, ship_types=ship_types)
    if not valid:
        raise ValueError(reason)
    board = BoardState(size=size)
    for placement in fleet.ships:
        board.place_ship(placement)
    return board


def random_fleet(
    rng: random.Random,
    size: int = BOARD_SIZE,
    ship_types: Sequence[ShipType] = DEFAULT_FLEET,
) -> FleetPlacement:
    """Generate a random valid fleet, preferring ships that do not touch."""
    for _ in range(_NON_TOUCHING_ATTEMPTS):
        generated = _place_spaced(rng, size, ship_types)
        if generated is not None:
            return generated
    return _place_overlap_free(rng, size, ship_types)


def _place_spaced(
    rng: random.Random, size: int, ship_types: Sequence[ShipType]
) -> FleetPlacement | None:
    blocked: set[Coord] = set()
    placed: list[ShipPlacement] = []
    for ship_type in sorted(ship_types, key=lambda ship: ship.size, reverse=True):
        options = [
            placement
            for placement in _all_placements(ship_type, size)
            if not any(cell in blocked for cell in cells_for_placement(placement))
        ]
        if not options:
            return None
        choice = rng.choice(options)
        placed.append(choice)
        blocked.update(_with_halo(cells_for_placement(choice), size))

    order = {ship_type: index for index, ship_type in enumerate(ship_types)}
    placed.sort(key=lambda placement: order[placement.ship_type])
    return FleetPlacement(ships=placed)


def _place_overlap_free(
    rng: random.Random, size: int, ship_types: Sequence[ShipType]
) -> FleetPlacement:
    board = BoardState(size=size)
    placed: list[ShipPlacement] = []
    for ship_type in ship_types:
        options = [option for option in _all_placements(ship_type, size) if board.can_place(option)]
        if not options:
            raise RuntimeError("Failed to generate random fleet placement.")
        choice = rng.choice(options)
        board.place_ship(choice)
        placed.append(choice)
    return FleetPlacement(ships=placed)


def _all_placements(ship_type: ShipType, size: int) -> list[ShipPlacement]:
    span = size - ship_type.size + 1
    result: list[ShipPlacement] = []
    for row in range(size):
        for col in range(span):
            result.append(ShipPlacement(ship_type, Coord(row, col), Orientation.HORIZONTAL))
    for row in range(span):
        for col in range(size):
            result.append(ShipPlacement(ship_type, Coord(row, col), Orientation.VERTICAL))
    return result


def _with_halo(cells: list[Coord], size: int) -> set[Coord]:
    halo: set[Coord] = set()
    for cell in cells:
        for dr in (-1, 0, 1):
            for dc in (-1, 0, 1):
                rr = cell.row + dr
                cc = cell.col + dc
                if 0 <= rr < size and 0 <= cc < size:
                    halo.add(Coord(rr, cc))
    return halo
