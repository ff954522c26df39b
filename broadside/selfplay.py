"""Headless engine-vs-board games for benchmarking difficulty tiers."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass

from broadside.ai.engine import TargetingEngine
from broadside.core.board import BoardState
from broadside.core.fleet import build_board_from_fleet, random_fleet
from broadside.core.models import Difficulty, ShotResult, to_classic_coord

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class SimulationSummary:
    """Shot counts across a batch of self-play games."""

    difficulty: Difficulty
    shots: tuple[int, ...]

    @property
    def games(self) -> int:
        return len(self.shots)

    @property
    def mean(self) -> float:
        return sum(self.shots) / len(self.shots) if self.shots else 0.0

    @property
    def best(self) -> int:
        return min(self.shots) if self.shots else 0

    @property
    def worst(self) -> int:
        return max(self.shots) if self.shots else 0


def play_game(engine: TargetingEngine, board: BoardState) -> int:
    """Attack ``board`` until every ship is sunk; return the number of shots."""
    view = board.opponent_view()
    shots = 0
    while not board.all_ships_sunk():
        move = engine.get_next_move(view)
        if move is None:
            raise RuntimeError("engine ran out of cells before the fleet was sunk")
        result = board.attack(move)
        engine.record_attack(move, result)
        shots += 1
        if result.outcome is ShotResult.SUNK:
            logger.debug("sunk cell=%s length=%s shots=%d", to_classic_coord(move), result.ship_length, shots)
    return shots


def simulate(difficulty: Difficulty, games: int, seed: int) -> SimulationSummary:
    """Play ``games`` seeded games at one difficulty."""
    fleet_rng = random.Random(seed)
    engine = TargetingEngine(difficulty=difficulty, seed=seed)
    results: list[int] = []
    for index in range(games):
        engine.reset(seed=seed + index)
        board = build_board_from_fleet(random_fleet(fleet_rng))
        shots = play_game(engine, board)
        logger.info("game_finished difficulty=%s game=%d shots=%d", difficulty, index + 1, shots)
        results.append(shots)
    return SimulationSummary(difficulty=difficulty, shots=tuple(results))
