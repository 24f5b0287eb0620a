"""Drive a board forward until it dies out, repeats, or the budget runs out."""

import logging
from dataclasses import dataclass
from typing import Dict, Iterator, Optional

from .automaton import CONWAY, RuleSet, is_stable, state_at_generation, step
from .convergence import Convergence, ConvergenceDetector, ConvergenceType
from .errors import ConvergenceTimeout, SimulationCancelled
from .fingerprint import fingerprint
from .grid import Grid

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class GameState:
    """Snapshot of a board at one generation."""
    generation: int
    cells: Grid
    is_stable: bool
    population_count: int
    converged_at: Optional[int] = None
    convergence: Optional[Convergence] = None

    @classmethod
    def snapshot(
        cls,
        grid: Grid,
        rules: RuleSet = CONWAY,
        generation: int = 0,
        convergence: Optional[Convergence] = None,
    ) -> "GameState":
        """Build a state, computing the stability flag with one extra step."""
        return cls(
            generation=generation,
            cells=grid,
            is_stable=is_stable(grid, rules),
            population_count=grid.population,
            converged_at=generation if convergence is not None else None,
            convergence=convergence,
        )

    def to_dict(self) -> Dict:
        return {
            "generation": self.generation,
            "cells": self.cells.to_list(),
            "is_stable": self.is_stable,
            "population_count": self.population_count,
            "converged_at": self.converged_at,
            "convergence": self.convergence.to_dict() if self.convergence else None,
        }


class SimulationRunner:
    """Runs one simulation at a time; every call owns its own history."""

    def __init__(self, rules: RuleSet = CONWAY, detector: Optional[ConvergenceDetector] = None):
        self.rules = rules
        self.detector = detector or ConvergenceDetector()

    def run(self, initial: Grid, max_iterations: int, cancel_event=None) -> GameState:
        """Step ``initial`` until it is extinct or cyclical.

        Every state from generation 0 through ``max_iterations`` is checked.
        Raises ConvergenceTimeout when none of them is terminal (immediately
        for a zero budget) and SimulationCancelled when ``cancel_event`` (any
        object with ``is_set()``, e.g. ``threading.Event``) is set.
        """
        if max_iterations < 0:
            raise ValueError(f"max_iterations must be non-negative, got {max_iterations}")
        if max_iterations == 0:
            raise ConvergenceTimeout(0, GameState.snapshot(initial, self.rules, 0))

        # fingerprint -> generation it was first seen at
        history: Dict[str, int] = {}
        state = initial
        generation = 0

        while True:
            if cancel_event is not None and cancel_event.is_set():
                LOGGER.info("Simulation cancelled at generation %d", generation)
                raise SimulationCancelled(generation)

            key = fingerprint(state)
            outcome = self.detector.check(state, history, key)
            if outcome.is_terminal:
                if outcome.type is ConvergenceType.CYCLICAL and key in history:
                    outcome = Convergence.cyclical(generation - history[key])
                LOGGER.debug("Converged at generation %d: %s", generation, outcome.display_name)
                return GameState.snapshot(state, self.rules, generation, convergence=outcome)

            if generation == max_iterations:
                LOGGER.debug("No convergence within %d iterations", max_iterations)
                raise ConvergenceTimeout(
                    max_iterations, GameState.snapshot(state, self.rules, generation)
                )

            history.setdefault(key, generation)
            state = step(state, self.rules)
            generation += 1

    def next_state(self, grid: Grid, generation: int = 0) -> GameState:
        """Advance one generation from ``grid``, which sits at ``generation``."""
        return GameState.snapshot(step(grid, self.rules), self.rules, generation + 1)

    def state_at(self, initial: Grid, generation: int) -> GameState:
        """Jump straight to ``generation``; mid-cycle states are returned as-is."""
        grid = state_at_generation(initial, self.rules, generation)
        return GameState.snapshot(grid, self.rules, generation)

    def iter_states(self, initial: Grid) -> Iterator[Grid]:
        """Yield ``initial`` and then every following generation, forever."""
        state = initial
        while True:
            yield state
            state = step(state, self.rules)
