"""lifecore - Game of Life simulation core: rule engine, state fingerprints, convergence detection."""

from .automaton import (
    CONWAY,
    DAY_AND_NIGHT,
    HIGHLIFE,
    RULE_PRESETS,
    RuleSet,
    get_rule,
    is_stable,
    state_at_generation,
    step,
)
from .convergence import Convergence, ConvergenceDetector, ConvergenceType
from .errors import (
    ConfigError,
    ConvergenceTimeout,
    GridShapeError,
    LifeCoreError,
    RuleSetError,
    SimulationCancelled,
)
from .fingerprint import EMPTY_FINGERPRINT, fingerprint
from .grid import Grid
from .runner import GameState, SimulationRunner

__all__ = [
    "CONWAY",
    "DAY_AND_NIGHT",
    "HIGHLIFE",
    "RULE_PRESETS",
    "RuleSet",
    "get_rule",
    "is_stable",
    "state_at_generation",
    "step",
    "Convergence",
    "ConvergenceDetector",
    "ConvergenceType",
    "ConfigError",
    "ConvergenceTimeout",
    "GridShapeError",
    "LifeCoreError",
    "RuleSetError",
    "SimulationCancelled",
    "EMPTY_FINGERPRINT",
    "fingerprint",
    "Grid",
    "GameState",
    "SimulationRunner",
]
