"""Targeting engine: chooses attacks and learns from their outcomes."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass

import numpy as np

from broadside.ai.heatmap import ProbabilityHeatmap
from broadside.ai.ledger import FleetInventory, ShotLedger
from broadside.ai.line_inference import TargetCandidate
from broadside.ai.modes import TargetingState
from broadside.ai.observation import observe_board
from broadside.ai.rng import SeededRNG
from broadside.ai.strategy import MoveDecision, SearchContext, strategy_for
from broadside.core.errors import TargetingError
from broadside.core.models import (
    ATTACK_OUTCOMES,
    BOARD_SIZE,
    AIMode,
    AttackResult,
    BoardQuery,
    Coord,
    Difficulty,
    Orientation,
    ShotResult,
    default_fleet_lengths,
    in_bounds,
    to_classic_coord,
)
from broadside.infra.config import EngineSettings

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class EngineSnapshot:
    """Immutable copy of the engine's internal state for inspection."""

    difficulty: Difficulty
    mode: AIMode
    active_hits: tuple[Coord, ...]
    line_direction: Orientation | None
    candidates: tuple[TargetCandidate, ...]
    remaining_ships: tuple[int, ...]
    fired_count: int
    seed: int


class TargetingEngine:
    """Automated opponent for one board.

    Callers must follow every ``get_next_move`` with exactly one
    ``record_attack`` for the coordinate actually fired.
    """

    def __init__(
        self,
        difficulty: Difficulty | str = Difficulty.NORMAL,
        seed: int | None = None,
        *,
        size: int = BOARD_SIZE,
        fleet_lengths: Iterable[int] | None = None,
    ) -> None:
        if size <= 0:
            raise TargetingError(f"board size must be positive, got {size}")
        self._size = size
        self._fleet_lengths = tuple(fleet_lengths) if fleet_lengths is not None else default_fleet_lengths()
        self._difficulty = Difficulty(difficulty)
        self._strategy = strategy_for(self._difficulty)
        self._heatmap = ProbabilityHeatmap()
        self._ledger = ShotLedger(size)
        self._inventory = FleetInventory(self._fleet_lengths)
        self._state = TargetingState()
        self._rng = SeededRNG(seed)

    @classmethod
    def from_settings(cls, settings: EngineSettings) -> TargetingEngine:
        return cls(difficulty=settings.difficulty, seed=settings.seed)

    @property
    def difficulty(self) -> Difficulty:
        return self._difficulty

    @property
    def size(self) -> int:
        return self._size

    def get_next_move(self, board: BoardQuery) -> Coord | None:
        """Return the next coordinate to attack, or ``None`` when nothing is left."""
        decision = self.choose_move(board)
        return decision.coord if decision is not None else None

    def choose_move(self, board: BoardQuery) -> MoveDecision | None:
        """Return the next move together with the reason it was chosen."""
        decision = self._strategy.select_move(self._context(board))
        if decision is None:
            logger.info("no_cells_remaining difficulty=%s fired=%d", self._difficulty, len(self._ledger))
            return None
        logger.debug(
            "move_selected cell=%s reason=%s",
            to_classic_coord(decision.coord),
            decision.reason,
            extra={"row": decision.coord.row, "col": decision.coord.col, "mode": str(self._state.mode)},
        )
        return decision

    def record_attack(self, coord: Coord, result: AttackResult | ShotResult) -> None:
        """Learn from the outcome of an attack at ``coord``."""
        if not isinstance(coord, Coord):
            raise TypeError("expected Coord")
        outcome = _coerce_result(result)
        if not in_bounds(coord.row, coord.col, self._size):
            raise TargetingError(f"coordinate out of bounds: ({coord.row}, {coord.col})")
        if self._ledger.has_fired(coord):
            raise TargetingError(f"coordinate already recorded: ({coord.row}, {coord.col})")

        self._ledger.record(coord)
        if outcome.outcome is ShotResult.HIT:
            self._state.on_hit(coord, self._ledger)
        elif outcome.outcome is ShotResult.SUNK:
            if outcome.ship_length is not None:
                removed = self._inventory.remove_if_present(outcome.ship_length)
                logger.debug(
                    "ship_sunk length=%d removed=%s remaining=%s",
                    outcome.ship_length,
                    removed,
                    self._inventory.as_multiset(),
                )
            self._state.on_sunk()

    def reset(self, seed: int | None = None) -> None:
        """Return to a fresh HUNT state with full inventory and an empty ledger."""
        self._ledger = ShotLedger(self._size)
        self._inventory = FleetInventory(self._fleet_lengths)
        self._state = TargetingState()
        self._rng = SeededRNG(seed)
        logger.debug("engine_reset difficulty=%s seed=%d", self._difficulty, self._rng.seed)

    def set_difficulty(self, difficulty: Difficulty | str) -> None:
        self._difficulty = Difficulty(difficulty)
        self._strategy = strategy_for(self._difficulty)

    def set_seed(self, seed: int) -> None:
        self._rng = SeededRNG(seed)

    def snapshot(self) -> EngineSnapshot:
        return EngineSnapshot(
            difficulty=self._difficulty,
            mode=self._state.mode,
            active_hits=self._state.active_hits,
            line_direction=self._state.line_direction,
            candidates=self._state.candidates,
            remaining_ships=self._inventory.as_multiset(),
            fired_count=len(self._ledger),
            seed=self._rng.seed,
        )

    def score_grid(self, board: BoardQuery) -> np.ndarray:
        """Heat map the probability tier would rank cells with right now."""
        return self._context(board).scores()

    def _context(self, board: BoardQuery) -> SearchContext:
        return SearchContext(
            observation=observe_board(board, self._size),
            ledger=self._ledger,
            state=self._state,
            inventory=self._inventory,
            rng=self._rng,
            heatmap=self._heatmap,
        )


def _coerce_result(result: AttackResult | ShotResult) -> AttackResult:
    if isinstance(result, ShotResult):
        result = AttackResult(result)
    if not isinstance(result, AttackResult):
        raise TypeError("expected AttackResult or ShotResult")
    if not isinstance(result.outcome, ShotResult) or result.outcome not in ATTACK_OUTCOMES:
        raise TargetingError(f"unsupported attack outcome: {result.outcome}")
    if result.ship_length is not None and result.ship_length <= 0:
        raise TargetingError(f"ship length must be positive, got {result.ship_length}")
    return result
