"""Placement-density heat map used by the probability tier."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

import numpy as np
from numpy.lib.stride_tricks import sliding_window_view

from broadside.ai.ledger import FleetInventory, ShotLedger
from broadside.ai.observation import BoardObservation
from broadside.core.models import Coord, Orientation

HIT_BOOST = 10


class ProbabilityHeatmap:
    """Scores each cell by how many legal remaining-ship placements cover it.

    Placements may not cover a MISS or SUNK cell; HIT cells stay occupiable
    because an open hit can belong to a longer, partly revealed ship. Cells
    already fired are forced to zero, and every placement through an open hit
    adds ``HIT_BOOST`` to its unfired cells.
    """

    def __init__(self, hit_boost: int = HIT_BOOST) -> None:
        self._hit_boost = hit_boost

    def compute(
        self,
        observation: BoardObservation,
        inventory: FleetInventory,
        ledger: ShotLedger,
    ) -> np.ndarray:
        size = observation.size
        lengths = inventory.as_multiset()
        fired = ledger.fired_mask()

        scores = np.zeros((size, size), dtype=np.int64)
        for length in lengths:
            scores += placement_density(observation.blocked, length)
        scores[fired] = 0

        hits = observation.hit_cells()
        if hits:
            self._apply_hit_boosts(scores, observation.blocked, fired, hits, lengths)
        return scores

    def _apply_hit_boosts(
        self,
        scores: np.ndarray,
        blocked: np.ndarray,
        fired: np.ndarray,
        hits: list[Coord],
        lengths: Iterable[int],
    ) -> None:
        size = scores.shape[0]
        hint = hit_direction(hits)
        hit_keys = {(hit.row, hit.col) for hit in hits}
        for length in lengths:
            for hit in hits:
                if hint is not Orientation.VERTICAL:
                    for start in range(max(0, hit.col - length + 1), min(hit.col, size - length) + 1):
                        cells = [(hit.row, col) for col in range(start, start + length)]
                        self._boost_placement(scores, blocked, fired, cells, hit_keys)
                if hint is not Orientation.HORIZONTAL:
                    for start in range(max(0, hit.row - length + 1), min(hit.row, size - length) + 1):
                        cells = [(row, hit.col) for row in range(start, start + length)]
                        self._boost_placement(scores, blocked, fired, cells, hit_keys)

    def _boost_placement(
        self,
        scores: np.ndarray,
        blocked: np.ndarray,
        fired: np.ndarray,
        cells: list[tuple[int, int]],
        hit_keys: set[tuple[int, int]],
    ) -> None:
        if any(blocked[cell] for cell in cells):
            return
        if not any(cell in hit_keys for cell in cells):
            return
        for cell in cells:
            if not fired[cell]:
                scores[cell] += self._hit_boost


def placement_density(blocked: np.ndarray, length: int) -> np.ndarray:
    """Count horizontal and vertical placements of ``length`` covering each cell."""
    size = blocked.shape[0]
    density = np.zeros((size, size), dtype=np.int64)
    if length > size:
        return density
    span = size - length + 1

    across = ~sliding_window_view(blocked, length, axis=1).any(axis=-1)
    down = ~sliding_window_view(blocked, length, axis=0).any(axis=-1)
    for offset in range(length):
        density[:, offset : offset + span] += across
        density[offset : offset + span, :] += down
    return density


def hit_direction(hits: Sequence[Coord]) -> Orientation | None:
    """Axis shared by all open hits, or ``None`` when fewer than two or mixed."""
    if len(hits) < 2:
        return None
    rows = {hit.row for hit in hits}
    cols = {hit.col for hit in hits}
    if len(rows) == 1 and len(cols) > 1:
        return Orientation.HORIZONTAL
    if len(cols) == 1 and len(rows) > 1:
        return Orientation.VERTICAL
    return None


def best_cells(scores: np.ndarray, open_mask: np.ndarray) -> list[Coord]:
    """Open cells sharing the maximum positive score, row-major."""
    if not open_mask.any():
        return []
    masked = np.where(open_mask, scores, 0)
    top = int(masked.max())
    if top <= 0:
        return []
    return [Coord(int(row), int(col)) for row, col in np.argwhere(open_mask & (scores == top))]
