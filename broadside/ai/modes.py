"""Hunt/target mode state machine for the targeting engine."""

from __future__ import annotations

import logging
from collections.abc import Callable

from broadside.ai.ledger import ShotLedger
from broadside.ai.line_inference import (
    TargetCandidate,
    adjacent_candidates,
    extension_candidates,
    infer_direction,
)
from broadside.core.models import AIMode, Coord, Orientation

logger = logging.getLogger(__name__)


class TargetingState:
    """Owns the open hit cluster and its candidate stack.

    Mode is derived from the cluster: TARGET while it holds at least one hit,
    HUNT otherwise, so the two can never disagree.
    """

    def __init__(self) -> None:
        self._active_hits: list[Coord] = []
        self._line_direction: Orientation | None = None
        self._candidates: list[TargetCandidate] = []

    @property
    def mode(self) -> AIMode:
        return AIMode.TARGET if self._active_hits else AIMode.HUNT

    @property
    def active_hits(self) -> tuple[Coord, ...]:
        return tuple(self._active_hits)

    @property
    def line_direction(self) -> Orientation | None:
        return self._line_direction

    @property
    def candidates(self) -> tuple[TargetCandidate, ...]:
        """Candidate stack, bottom first."""
        return tuple(self._candidates)

    def on_hit(self, coord: Coord, ledger: ShotLedger) -> None:
        """Extend the open cluster with a hit and regenerate candidates."""
        previous_mode = self.mode
        self._active_hits.append(coord)
        if len(self._active_hits) == 1:
            self._push_unique(adjacent_candidates(coord, ledger))
        else:
            direction = infer_direction(self._active_hits)
            if direction is None:
                # Non-colinear cluster: keep probing around the newest hit.
                self._push_unique(adjacent_candidates(coord, ledger))
            else:
                if direction is not self._line_direction:
                    logger.debug("line_inferred direction=%s hits=%d", direction, len(self._active_hits))
                self._line_direction = direction
                self._candidates = extension_candidates(self._active_hits, direction, ledger)
        if previous_mode is not self.mode:
            logger.debug("mode_transition from=%s to=%s", previous_mode, self.mode)

    def on_sunk(self) -> None:
        """Close the cluster unconditionally and return to HUNT."""
        if self._active_hits:
            logger.debug("mode_transition from=%s to=%s", AIMode.TARGET, AIMode.HUNT)
        self.clear()

    def clear(self) -> None:
        self._active_hits.clear()
        self._line_direction = None
        self._candidates.clear()

    def pop_candidate(self, is_open: Callable[[Coord], bool]) -> TargetCandidate | None:
        """Pop the most recently pushed open candidate, discarding stale ones."""
        while self._candidates:
            candidate = self._candidates.pop()
            if is_open(candidate.coord):
                return candidate
        return None

    def order_candidates(self, score: Callable[[Coord], float]) -> None:
        """Stable ascending sort so the best-scoring candidate sits on top."""
        self._candidates.sort(key=lambda candidate: score(candidate.coord))

    def _push_unique(self, additions: list[TargetCandidate]) -> None:
        known = {candidate.coord for candidate in self._candidates}
        for candidate in additions:
            if candidate.coord in known:
                continue
            known.add(candidate.coord)
            self._candidates.append(candidate)
