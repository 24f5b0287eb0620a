"""Classify a board as extinct, cyclical, or still evolving."""

from dataclasses import dataclass
from enum import Enum
from typing import Container, Dict, Optional

from .fingerprint import fingerprint
from .grid import Grid


class ConvergenceType(Enum):
    CONTINUING = "continuing"
    EXTINCT = "extinct"
    CYCLICAL = "cyclical"


@dataclass(frozen=True)
class Convergence:
    """Outcome of a convergence check.

    ``period`` is only set when the caller knows when the repeated state was
    first seen; a bare check reports a repeat without its period.
    """
    type: ConvergenceType
    period: Optional[int] = None

    @classmethod
    def cyclical(cls, period: Optional[int] = None) -> "Convergence":
        return cls(ConvergenceType.CYCLICAL, period)

    @property
    def is_terminal(self) -> bool:
        return self.type is not ConvergenceType.CONTINUING

    @property
    def display_name(self) -> str:
        if self.type is ConvergenceType.CYCLICAL and self.period:
            return f"Cyclical (period {self.period})"
        return self.type.value.capitalize()

    def to_dict(self) -> Dict:
        return {"type": self.type.value, "period": self.period}

    def __str__(self):
        return self.display_name


CONTINUING = Convergence(ConvergenceType.CONTINUING)
EXTINCT = Convergence(ConvergenceType.EXTINCT)


class ConvergenceDetector:
    """Stateless check against a caller-owned collection of seen fingerprints.

    The detector never records anything; the caller decides when the current
    fingerprint joins its history.
    """

    def check(self, grid: Grid, seen: Container[str], key: Optional[str] = None) -> Convergence:
        """Classify ``grid``; pass ``key`` when its fingerprint is already known."""
        # Extinction wins even if the all-dead board is already in history
        if grid.population == 0:
            return EXTINCT
        if key is None:
            key = fingerprint(grid)
        if key in seen:
            return Convergence.cyclical()
        return CONTINUING
