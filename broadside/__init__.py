"""Targeting engine for a grid-based naval combat game."""

from broadside.ai.engine import EngineSnapshot, TargetingEngine
from broadside.ai.strategy import MoveDecision
from broadside.core.errors import TargetingError
from broadside.core.models import AIMode, AttackResult, CellState, Coord, Difficulty, ShotResult

__all__ = [
    "AIMode",
    "AttackResult",
    "CellState",
    "Coord",
    "Difficulty",
    "EngineSnapshot",
    "MoveDecision",
    "ShotResult",
    "TargetingEngine",
    "TargetingError",
]
