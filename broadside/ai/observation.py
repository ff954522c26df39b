"""Snapshot of the public board state taken once per move decision."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from broadside.ai.ledger import ShotLedger
from broadside.core.errors import TargetingError
from broadside.core.models import (
    BLOCKING_STATES,
    RESOLVED_STATES,
    BoardQuery,
    CellState,
    Coord,
)


@dataclass(frozen=True, slots=True)
class BoardObservation:
    """Boolean ``(N, N)`` masks derived from a board query."""

    blocked: np.ndarray
    hits: np.ndarray
    resolved: np.ndarray

    @property
    def size(self) -> int:
        return int(self.blocked.shape[0])

    def hit_cells(self) -> list[Coord]:
        return [Coord(int(row), int(col)) for row, col in np.argwhere(self.hits)]

    def open_mask(self, ledger: ShotLedger) -> np.ndarray:
        """Cells neither fired by this engine nor resolved on the board."""
        return ~ledger.fired_mask() & ~self.resolved


def observe_board(board: BoardQuery, size: int) -> BoardObservation:
    """Read every cell once through the board query."""
    blocked = np.zeros((size, size), dtype=np.bool_)
    hits = np.zeros((size, size), dtype=np.bool_)
    resolved = np.zeros((size, size), dtype=np.bool_)
    for row in range(size):
        for col in range(size):
            state = board.cell_state(row, col)
            if not isinstance(state, CellState):
                raise TargetingError(f"board returned invalid state {state!r} at ({row}, {col})")
            blocked[row, col] = state in BLOCKING_STATES
            hits[row, col] = state is CellState.HIT
            resolved[row, col] = state in RESOLVED_STATES
    return BoardObservation(blocked=blocked, hits=hits, resolved=resolved)


def cells_from_mask(mask: np.ndarray) -> list[Coord]:
    """Coordinates of set cells in row-major order."""
    return [Coord(int(row), int(col)) for row, col in np.argwhere(mask)]
