"""Core domain models shared by the board and the targeting engine."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Protocol

BOARD_SIZE = 10


class Orientation(StrEnum):
    """Ship orientation, also used as the inferred line direction of a hit cluster."""

    HORIZONTAL = "HORIZONTAL"
    VERTICAL = "VERTICAL"


class CellState(StrEnum):
    """State of a single board cell as reported by a board query."""

    EMPTY = "EMPTY"
    SHIP = "SHIP"
    HIT = "HIT"
    MISS = "MISS"
    SUNK = "SUNK"


RESOLVED_STATES: frozenset[CellState] = frozenset({CellState.HIT, CellState.MISS, CellState.SUNK})
BLOCKING_STATES: frozenset[CellState] = frozenset({CellState.MISS, CellState.SUNK})


class ShipType(StrEnum):
    """Classic Battleship ship types."""

    CARRIER = "CARRIER"
    BATTLESHIP = "BATTLESHIP"
    CRUISER = "CRUISER"
    SUBMARINE = "SUBMARINE"
    DESTROYER = "DESTROYER"

    @property
    def size(self) -> int:
        return SHIP_LENGTHS[self]


SHIP_LENGTHS: dict[ShipType, int] = {
    ShipType.CARRIER: 5,
    ShipType.BATTLESHIP: 4,
    ShipType.CRUISER: 3,
    ShipType.SUBMARINE: 3,
    ShipType.DESTROYER: 2,
}

DEFAULT_FLEET: tuple[ShipType, ...] = (
    ShipType.CARRIER,
    ShipType.BATTLESHIP,
    ShipType.CRUISER,
    ShipType.SUBMARINE,
    ShipType.DESTROYER,
)


def default_fleet_lengths() -> tuple[int, ...]:
    """Return ship lengths of the classic fleet in fleet order."""
    return tuple(ship.size for ship in DEFAULT_FLEET)


class ShotResult(StrEnum):
    """Result of a single shot."""

    MISS = "MISS"
    HIT = "HIT"
    SUNK = "SUNK"
    REPEAT = "REPEAT"
    INVALID = "INVALID"


ATTACK_OUTCOMES: frozenset[ShotResult] = frozenset({ShotResult.MISS, ShotResult.HIT, ShotResult.SUNK})


class Difficulty(StrEnum):
    """Targeting engine difficulty tiers."""

    EASY = "easy"
    NORMAL = "normal"
    HARD = "hard"
    PROBABILITY = "probability"


class AIMode(StrEnum):
    """Hunt/target control state."""

    HUNT = "hunt"
    TARGET = "target"


@dataclass(frozen=True, slots=True)
class Coord:
    """Board coordinate."""

    row: int
    col: int


@dataclass(frozen=True, slots=True)
class AttackResult:
    """Outcome of an attack as reported by the board.

    ``ship_length`` is only meaningful for ``SUNK`` outcomes and may be unknown.
    """

    outcome: ShotResult
    ship_length: int | None = None

    @classmethod
    def miss(cls) -> AttackResult:
        return cls(ShotResult.MISS)

    @classmethod
    def hit(cls) -> AttackResult:
        return cls(ShotResult.HIT)

    @classmethod
    def sunk(cls, ship_length: int | None = None) -> AttackResult:
        return cls(ShotResult.SUNK, ship_length)


@dataclass(frozen=True, slots=True)
class ShipPlacement:
    """Placement of a single ship."""

    ship_type: ShipType
    bow: Coord
    orientation: Orientation


@dataclass(slots=True)
class FleetPlacement:
    """Collection of ship placements."""

    ships: list[ShipPlacement]


class BoardQuery(Protocol):
    """Read-only cell lookup consumed by the targeting engine."""

    def cell_state(self, row: int, col: int) -> CellState:
        """Return the visible state of a cell."""


def cells_for_placement(placement: ShipPlacement) -> list[Coord]:
    """Compute occupied cells for a ship placement."""
    result: list[Coord] = []
    for i in range(placement.ship_type.size):
        if placement.orientation is Orientation.HORIZONTAL:
            result.append(Coord(placement.bow.row, placement.bow.col + i))
        else:
            result.append(Coord(placement.bow.row + i, placement.bow.col))
    return result


def in_bounds(row: int, col: int, size: int = BOARD_SIZE) -> bool:
    return 0 <= row < size and 0 <= col < size


def coord_key(coord: Coord, size: int = BOARD_SIZE) -> int:
    """Pack a coordinate into a single integer index."""
    return coord.row * size + coord.col


def to_classic_coord(coord: Coord) -> str:
    """Render a coordinate as column letter plus 1-based row, e.g. ``B5``."""
    return f"{chr(ord('A') + coord.col)}{coord.row + 1}"
