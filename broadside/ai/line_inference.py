"""Orientation inference and candidate generation for hit clusters."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from enum import StrEnum

from broadside.ai.ledger import ShotLedger
from broadside.core.models import Coord, Orientation, in_bounds

_ORTHOGONAL: tuple[tuple[int, int], ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))


class CandidatePriority(StrEnum):
    """Confidence tag carried by a target candidate."""

    DEFAULT = "default"
    HIGH = "high"


@dataclass(frozen=True, slots=True)
class TargetCandidate:
    """Cell awaiting evaluation while a hit cluster is open."""

    coord: Coord
    priority: CandidatePriority = CandidatePriority.DEFAULT


def infer_direction(hits: Sequence[Coord]) -> Orientation | None:
    """Infer cluster orientation from its first two hits."""
    if len(hits) < 2:
        return None
    first, second = hits[0], hits[1]
    if first.row == second.row:
        return Orientation.HORIZONTAL
    if first.col == second.col:
        return Orientation.VERTICAL
    return None


def adjacent_candidates(hit: Coord, ledger: ShotLedger) -> list[TargetCandidate]:
    """Orthogonal neighbours of a single hit, in up/down/left/right order."""
    result: list[TargetCandidate] = []
    for dr, dc in _ORTHOGONAL:
        row = hit.row + dr
        col = hit.col + dc
        if not in_bounds(row, col, ledger.size):
            continue
        cell = Coord(row, col)
        if ledger.has_fired(cell):
            continue
        result.append(TargetCandidate(cell))
    return result


def extension_candidates(
    hits: Sequence[Coord],
    direction: Orientation,
    ledger: ShotLedger,
) -> list[TargetCandidate]:
    """Cells just beyond both extreme hits along ``direction``.

    The cell before the lowest hit comes first and the cell after the highest
    hit second, so a stack consumer tries the far end first.
    """
    anchor = hits[0]
    if direction is Orientation.HORIZONTAL:
        cols = [hit.col for hit in hits if hit.row == anchor.row]
        ends = (Coord(anchor.row, min(cols) - 1), Coord(anchor.row, max(cols) + 1))
    else:
        rows = [hit.row for hit in hits if hit.col == anchor.col]
        ends = (Coord(min(rows) - 1, anchor.col), Coord(max(rows) + 1, anchor.col))

    result: list[TargetCandidate] = []
    for cell in ends:
        if not in_bounds(cell.row, cell.col, ledger.size):
            continue
        if ledger.has_fired(cell):
            continue
        result.append(TargetCandidate(cell, CandidatePriority.HIGH))
    return result
