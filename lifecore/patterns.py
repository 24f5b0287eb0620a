"""Library of well-known Game of Life patterns."""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List

from .grid import Grid


class PatternCategory(Enum):
    STILL_LIFE = "Still Life"
    OSCILLATOR = "Oscillator"
    SPACESHIP = "Spaceship"
    GUN = "Gun"

    @property
    def description(self) -> str:
        return {
            PatternCategory.STILL_LIFE: "Patterns that never change",
            PatternCategory.OSCILLATOR: "Patterns that repeat in cycles",
            PatternCategory.SPACESHIP: "Patterns that move across the grid",
            PatternCategory.GUN: "Patterns that continuously create other patterns",
        }[self]


@dataclass(frozen=True)
class Pattern:
    name: str
    display_name: str
    description: str
    category: PatternCategory
    layout: str  # rows of '*' (alive) and '.' (dead)

    @property
    def cells(self) -> Grid:
        return Grid.from_string(self.layout)


_PATTERN_LIST = [
    Pattern(
        "block", "Block",
        "A simple 2x2 still life that never changes.",
        PatternCategory.STILL_LIFE,
        """
        ....
        .**.
        .**.
        ....
        """,
    ),
    Pattern(
        "beehive", "Beehive",
        "A stable hexagonal still life pattern.",
        PatternCategory.STILL_LIFE,
        """
        ......
        ..**..
        .*..*.
        ..**..
        ......
        """,
    ),
    Pattern(
        "blinker", "Blinker",
        "The simplest oscillator with period 2.",
        PatternCategory.OSCILLATOR,
        """
        .....
        ..*..
        ..*..
        ..*..
        .....
        """,
    ),
    Pattern(
        "toad", "Toad",
        "A period-2 oscillator that resembles a toad.",
        PatternCategory.OSCILLATOR,
        """
        ......
        ......
        ..***.
        .***..
        ......
        ......
        """,
    ),
    Pattern(
        "beacon", "Beacon",
        "A period-2 oscillator made of two blocks.",
        PatternCategory.OSCILLATOR,
        """
        ......
        .**...
        .*....
        ....*.
        ...**.
        ......
        """,
    ),
    Pattern(
        "glider", "Glider",
        "The smallest spaceship that travels diagonally.",
        PatternCategory.SPACESHIP,
        """
        .......
        ..*....
        ...*...
        .***...
        .......
        .......
        .......
        """,
    ),
    Pattern(
        "pulsar", "Pulsar",
        "A period-3 oscillator with complex behavior.",
        PatternCategory.OSCILLATOR,
        """
        .................
        .................
        ....***...***....
        .................
        ..*....*.*....*..
        ..*....*.*....*..
        ..*....*.*....*..
        ....***...***....
        .................
        ....***...***....
        ..*....*.*....*..
        ..*....*.*....*..
        ..*....*.*....*..
        .................
        ....***...***....
        .................
        .................
        """,
    ),
    Pattern(
        "gospergun", "Gosper Glider Gun",
        "A gun that continuously produces gliders.",
        PatternCategory.GUN,
        """
        ......................................
        ........................*.............
        ......................*.*.............
        ............**......**............**..
        ...........*...*....**............**..
        **........*.....*...**................
        **........*...*.**....*.*.............
        ..........*.....*.......*.............
        ...........*...*......................
        ............**........................
        ......................................
        """,
    ),
]

PATTERNS: Dict[str, Pattern] = {p.name: p for p in _PATTERN_LIST}


def get_pattern(name: str) -> Pattern:
    """Look up a pattern by name, ignoring case. Raises KeyError if unknown."""
    key = name.strip().lower()
    if key not in PATTERNS:
        raise KeyError(f"Unknown pattern '{name}'. Available: {', '.join(PATTERNS)}")
    return PATTERNS[key]


def patterns_in(category: PatternCategory) -> List[Pattern]:
    return [p for p in _PATTERN_LIST if p.category is category]
