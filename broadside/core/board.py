"""Reference board used for self-play and tests."""

from __future__ import annotations

import numpy as np

from broadside.core.errors import TargetingError
from broadside.core.models import (
    BOARD_SIZE,
    AttackResult,
    CellState,
    Coord,
    ShipPlacement,
    cells_for_placement,
    in_bounds,
)


class BoardState:
    """Hidden fleet plus the shots taken against it.

    ``owners`` holds ``ship index + 1`` per cell (0 is water); the hit count
    of each ship decides when its cells turn SUNK.
    """

    def __init__(self, size: int = BOARD_SIZE) -> None:
        self._size = size
        self._owners = np.zeros((size, size), dtype=np.int16)
        self._fired = np.zeros((size, size), dtype=np.bool_)
        self._lengths: list[int] = []
        self._damage: list[int] = []

    @property
    def size(self) -> int:
        return self._size

    def can_place(self, placement: ShipPlacement) -> bool:
        """Return whether every cell of ``placement`` is on the board and free."""
        return all(
            in_bounds(cell.row, cell.col, self._size) and not self._owners[cell.row, cell.col]
            for cell in cells_for_placement(placement)
        )

    def place_ship(self, placement: ShipPlacement) -> int:
        """Add a ship and return its index."""
        if not self.can_place(placement):
            raise ValueError(f"Invalid placement for {placement.ship_type.value}.")
        self._lengths.append(placement.ship_type.size)
        self._damage.append(0)
        index = len(self._lengths) - 1
        for cell in cells_for_placement(placement):
            self._owners[cell.row, cell.col] = index + 1
        return index

    def attack(self, coord: Coord) -> AttackResult:
        """Fire at ``coord`` and report what a defender would announce."""
        self._require_in_bounds(coord.row, coord.col)
        if self._fired[coord.row, coord.col]:
            raise TargetingError(f"cell already attacked: ({coord.row}, {coord.col})")
        self._fired[coord.row, coord.col] = True

        owner = int(self._owners[coord.row, coord.col])
        if not owner:
            return AttackResult.miss()
        index = owner - 1
        self._damage[index] += 1
        if self._damage[index] == self._lengths[index]:
            return AttackResult.sunk(self._lengths[index])
        return AttackResult.hit()

    def cell_state(self, row: int, col: int) -> CellState:
        """Return the full state of a cell, including un-hit ship cells."""
        self._require_in_bounds(row, col)
        owner = int(self._owners[row, col])
        fired = bool(self._fired[row, col])
        if not owner:
            return CellState.MISS if fired else CellState.EMPTY
        if self._damage[owner - 1] == self._lengths[owner - 1]:
            return CellState.SUNK
        return CellState.HIT if fired else CellState.SHIP

    def all_ships_sunk(self) -> bool:
        """Return whether a fleet is placed and every ship in it is sunk."""
        return bool(self._lengths) and self._damage == self._lengths

    def opponent_view(self) -> OpponentView:
        """Return a query that only exposes what an opponent could see."""
        return OpponentView(self)

    def _require_in_bounds(self, row: int, col: int) -> None:
        if not in_bounds(row, col, self._size):
            raise TargetingError(f"coordinate out of bounds: ({row}, {col})")


class OpponentView:
    """Board query masking un-hit ship cells as empty water."""

    def __init__(self, board: BoardState) -> None:
        self._board = board

    @property
    def size(self) -> int:
        return self._board.size

    def cell_state(self, row: int, col: int) -> CellState:
        state = self._board.cell_state(row, col)
        if state is CellState.SHIP:
            return CellState.EMPTY
        return state
