"""Per-difficulty move selection strategies."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import ClassVar

import numpy as np

from broadside.ai.heatmap import ProbabilityHeatmap, best_cells
from broadside.ai.ledger import FleetInventory, ShotLedger
from broadside.ai.modes import TargetingState
from broadside.ai.observation import BoardObservation, cells_from_mask
from broadside.ai.rng import SeededRNG
from broadside.core.models import AIMode, Coord, Difficulty


@dataclass(frozen=True, slots=True)
class MoveDecision:
    """Chosen coordinate plus a human readable reason."""

    coord: Coord
    reason: str


@dataclass(slots=True)
class SearchContext:
    """Everything a strategy may read (and the candidate stack it may pop)."""

    observation: BoardObservation
    ledger: ShotLedger
    state: TargetingState
    inventory: FleetInventory
    rng: SeededRNG
    heatmap: ProbabilityHeatmap

    def is_open(self, coord: Coord) -> bool:
        if self.ledger.has_fired(coord):
            return False
        return not bool(self.observation.resolved[coord.row, coord.col])

    def open_mask(self) -> np.ndarray:
        return self.observation.open_mask(self.ledger)

    def scores(self) -> np.ndarray:
        return self.heatmap.compute(self.observation, self.inventory, self.ledger)


class MoveStrategy(ABC):
    """Selects the next cell to attack for one difficulty tier."""

    difficulty: ClassVar[Difficulty]

    @abstractmethod
    def select_move(self, context: SearchContext) -> MoveDecision | None:
        """Return the next move, or ``None`` when no open cell remains."""


class EasyStrategy(MoveStrategy):
    """Uniformly random open cell; ignores mode entirely."""

    difficulty = Difficulty.EASY

    def select_move(self, context: SearchContext) -> MoveDecision | None:
        return _random_open(context, "Random shot")


class NormalStrategy(MoveStrategy):
    """Candidate stack in TARGET mode, random search otherwise."""

    difficulty = Difficulty.NORMAL

    def select_move(self, context: SearchContext) -> MoveDecision | None:
        target = _pop_target(context)
        if target is not None:
            return target
        return self.hunt(context)

    def hunt(self, context: SearchContext) -> MoveDecision | None:
        return _random_open(context, "Hunt mode: random search")


class HardStrategy(NormalStrategy):
    """Normal targeting with parity hunting keyed to the smallest remaining ship."""

    difficulty = Difficulty.HARD

    def hunt(self, context: SearchContext) -> MoveDecision | None:
        smallest = context.inventory.smallest()
        open_mask = context.open_mask()
        if smallest is not None:
            size = open_mask.shape[0]
            rows, cols = np.indices((size, size))
            eligible = open_mask & ((rows + cols) % smallest == 0)
            cell = context.rng.pick(cells_from_mask(eligible))
            if cell is not None:
                return MoveDecision(cell, f"Hunt mode: parity pattern (smallest ship: {smallest})")

        cell = context.rng.pick(cells_from_mask(open_mask))
        if cell is None:
            return None
        return MoveDecision(cell, "Hunt mode: fallback to available cell")


class ProbabilityStrategy(MoveStrategy):
    """Heat-map ranked targeting and hunting."""

    difficulty = Difficulty.PROBABILITY

    def select_move(self, context: SearchContext) -> MoveDecision | None:
        scores = context.scores()
        if context.state.mode is AIMode.TARGET and context.state.candidates:
            context.state.order_candidates(lambda coord: int(scores[coord.row, coord.col]))
            target = _pop_target(context)
            if target is not None:
                return target

        best = best_cells(scores, context.open_mask())
        cell = context.rng.pick(best)
        if cell is not None:
            return MoveDecision(cell, f"Hunt mode: probability heat map (score {int(scores[cell.row, cell.col])})")
        return _random_open(context, "Hunt mode: fallback to available cell")


_STRATEGIES: dict[Difficulty, MoveStrategy] = {
    strategy.difficulty: strategy
    for strategy in (EasyStrategy(), NormalStrategy(), HardStrategy(), ProbabilityStrategy())
}


def strategy_for(difficulty: Difficulty) -> MoveStrategy:
    """Return the shared strategy instance for a difficulty tier."""
    return _STRATEGIES[difficulty]


def _pop_target(context: SearchContext) -> MoveDecision | None:
    if context.state.mode is not AIMode.TARGET:
        return None
    candidate = context.state.pop_candidate(context.is_open)
    if candidate is None:
        return None
    return MoveDecision(candidate.coord, "Target mode: following up on hit")


def _random_open(context: SearchContext, reason: str) -> MoveDecision | None:
    cell = context.rng.pick(cells_from_mask(context.open_mask()))
    if cell is None:
        return None
    return MoveDecision(cell, reason)
