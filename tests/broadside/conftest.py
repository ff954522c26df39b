from __future__ import annotations

import random

import pytest

from broadside.core.models import (
    BOARD_SIZE,
    CellState,
    Coord,
    FleetPlacement,
    Orientation,
    ShipPlacement,
    ShipType,
)


class GridBoard:
    """Board query backed by a dict of explicitly marked cells."""

    def __init__(self, size: int = BOARD_SIZE) -> None:
        self.size = size
        self.states: dict[tuple[int, int], CellState] = {}
        self.queries = 0

    def mark(self, coord: Coord, state: CellState) -> None:
        self.states[(coord.row, coord.col)] = state

    def cell_state(self, row: int, col: int) -> CellState:
        self.queries += 1
        return self.states.get((row, col), CellState.EMPTY)


def make_valid_fleet() -> FleetPlacement:
    return FleetPlacement(
        ships=[
            ShipPlacement(ShipType.CARRIER, Coord(0, 0), Orientation.HORIZONTAL),
            ShipPlacement(ShipType.BATTLESHIP, Coord(2, 0), Orientation.HORIZONTAL),
            ShipPlacement(ShipType.CRUISER, Coord(4, 0), Orientation.HORIZONTAL),
            ShipPlacement(ShipType.SUBMARINE, Coord(6, 0), Orientation.HORIZONTAL),
            ShipPlacement(ShipType.DESTROYER, Coord(8, 0), Orientation.HORIZONTAL),
        ]
    )


@pytest.fixture
def valid_fleet() -> FleetPlacement:
    return make_valid_fleet()


@pytest.fixture
def seeded_rng() -> random.Random:
    return random.Random(1337)


@pytest.fixture
def grid_board() -> GridBoard:
    return GridBoard()
