"""Exception types raised by the simulation core."""

from typing import Optional


class LifeCoreError(Exception):
    """Base class for all lifecore errors."""


class GridShapeError(LifeCoreError, ValueError):
    """A grid was built from ragged or non 2-D data, or a pattern does not fit."""


class RuleSetError(LifeCoreError, ValueError):
    """A rule set names neighbor counts outside 0-8 or cannot be parsed."""


class ConfigError(LifeCoreError, ValueError):
    """A configuration file or value is invalid."""


class ConvergenceTimeout(LifeCoreError):
    """The runner used up its iteration budget without reaching a terminal state.

    ``state`` holds the last examined GameState so callers can still show it.
    """

    def __init__(self, max_iterations: int, state=None):
        self.max_iterations = max_iterations
        self.state = state
        super().__init__(f"Convergence not reached within {max_iterations} iterations.")


class SimulationCancelled(LifeCoreError):
    """The caller asked the runner to stop before it finished."""

    def __init__(self, generation: Optional[int] = None):
        self.generation = generation
        message = "Simulation cancelled"
        if generation is not None:
            message += f" at generation {generation}"
        super().__init__(message)
