"""Shot ledger and remaining-fleet inventory."""

from __future__ import annotations

from collections.abc import Iterable, Iterator

import numpy as np

from broadside.core.errors import TargetingError
from broadside.core.models import BOARD_SIZE, Coord, coord_key, in_bounds


class ShotLedger:
    """Set of coordinates already fired upon, stored as an ``N*N`` bitset."""

    def __init__(self, size: int = BOARD_SIZE) -> None:
        self._size = size
        self._fired = np.zeros(size * size, dtype=np.bool_)

    @property
    def size(self) -> int:
        return self._size

    def has_fired(self, coord: Coord) -> bool:
        self._require_in_bounds(coord)
        return bool(self._fired[coord_key(coord, self._size)])

    def record(self, coord: Coord) -> None:
        """Mark a coordinate as fired. Recording twice is a no-op."""
        self._require_in_bounds(coord)
        self._fired[coord_key(coord, self._size)] = True

    def fired_count(self) -> int:
        return int(np.count_nonzero(self._fired))

    def remaining_count(self) -> int:
        """Return how many cells have not been fired upon yet."""
        return self._size * self._size - self.fired_count()

    def fired_mask(self) -> np.ndarray:
        """Return a ``(N, N)`` boolean copy of fired cells."""
        return self._fired.reshape(self._size, self._size).copy()

    def __contains__(self, coord: object) -> bool:
        if not isinstance(coord, Coord) or not in_bounds(coord.row, coord.col, self._size):
            return False
        return bool(self._fired[coord_key(coord, self._size)])

    def __len__(self) -> int:
        return self.fired_count()

    def __iter__(self) -> Iterator[Coord]:
        for key in np.flatnonzero(self._fired):
            row, col = divmod(int(key), self._size)
            yield Coord(row, col)

    def _require_in_bounds(self, coord: Coord) -> None:
        if not in_bounds(coord.row, coord.col, self._size):
            raise TargetingError(f"coordinate out of bounds: ({coord.row}, {coord.col})")


class FleetInventory:
    """Ordered multiset of ship lengths not yet confirmed sunk."""

    def __init__(self, lengths: Iterable[int]) -> None:
        self._lengths: list[int] = []
        for length in lengths:
            if length <= 0:
                raise TargetingError(f"ship length must be positive, got {length}")
            self._lengths.append(length)

    def remove_if_present(self, length: int) -> bool:
        """Remove one entry equal to ``length``; return whether one was removed."""
        if length in self._lengths:
            self._lengths.remove(length)
            return True
        return False

    def smallest(self) -> int | None:
        return min(self._lengths) if self._lengths else None

    def as_multiset(self) -> tuple[int, ...]:
        return tuple(self._lengths)

    def __len__(self) -> int:
        return len(self._lengths)

    def __iter__(self) -> Iterator[int]:
        return iter(tuple(self._lengths))
