"""2D cellular automaton engine using outer-totalistic rules on a bounded board."""

import numpy as np
from dataclasses import dataclass
from typing import Dict, FrozenSet, Iterable, Tuple
from scipy import ndimage

from .errors import RuleSetError
from .grid import Grid

# Moore neighborhood, center excluded
NEIGHBOR_KERNEL = np.array(
    [[1, 1, 1],
     [1, 0, 1],
     [1, 1, 1]],
    dtype=np.uint8,
)

MAX_NEIGHBORS = 8


def _validate_counts(counts: Iterable[int], label: str) -> FrozenSet[int]:
    result = set()
    for n in counts:
        if isinstance(n, bool) or not isinstance(n, (int, np.integer)):
            raise RuleSetError(f"{label} neighbor count {n!r} is not an integer")
        if not 0 <= n <= MAX_NEIGHBORS:
            raise RuleSetError(f"{label} neighbor count {n} is outside 0-{MAX_NEIGHBORS}")
        result.add(int(n))
    return frozenset(result)


@dataclass(frozen=True)
class RuleSet:
    """Outer-totalistic rule in Birth/Survival notation (e.g., B3/S23 for Game of Life)."""
    survival: FrozenSet[int]  # Neighbor counts that keep a live cell alive
    birth: FrozenSet[int]  # Neighbor counts that bring a dead cell to life

    def __post_init__(self):
        object.__setattr__(self, "survival", _validate_counts(self.survival, "Survival"))
        object.__setattr__(self, "birth", _validate_counts(self.birth, "Birth"))
        object.__setattr__(self, "_transitions", self._build_transitions())

    @classmethod
    def from_string(cls, rule_str: str) -> "RuleSet":
        """Parse rule from string like 'B3/S23', 'B36S23' or 'b3678/s34678'."""
        rule_str = rule_str.upper().replace(" ", "")
        if not rule_str or any(c not in "BS/0123456789" for c in rule_str):
            raise RuleSetError(f"Cannot parse rule '{rule_str}'")

        birth_part = ""
        survival_part = ""

        if "/" in rule_str:
            parts = rule_str.split("/")
            for part in parts:
                if part.startswith("B"):
                    birth_part = part[1:]
                elif part.startswith("S"):
                    survival_part = part[1:]
                else:
                    raise RuleSetError(f"Cannot parse rule part '{part}'")
        else:
            # Handle format like "B3S23"
            if "S" in rule_str:
                idx = rule_str.index("S")
                birth_part = rule_str[1:idx] if rule_str.startswith("B") else ""
                survival_part = rule_str[idx+1:]
            elif rule_str.startswith("B"):
                birth_part = rule_str[1:]
            else:
                raise RuleSetError(f"Cannot parse rule '{rule_str}'")

        digits = birth_part + survival_part
        if digits and not digits.isdigit():
            raise RuleSetError(f"Cannot parse rule '{rule_str}'")

        birth = [int(c) for c in birth_part]
        survival = [int(c) for c in survival_part]
        return cls(survival=frozenset(survival), birth=frozenset(birth))

    @classmethod
    def from_bits(cls, birth_bits: int, survival_bits: int) -> "RuleSet":
        """Create rule from bit representations (0-511 each, 9 bits for counts 0-8)."""
        if not 0 <= birth_bits < 512 or not 0 <= survival_bits < 512:
            raise RuleSetError("Rule bit masks must lie in 0-511")
        birth = {i for i in range(9) if birth_bits & (1 << i)}
        survival = {i for i in range(9) if survival_bits & (1 << i)}
        return cls(survival=frozenset(survival), birth=frozenset(birth))

    def to_string(self) -> str:
        """Convert to standard notation like 'B3/S23'."""
        b_str = "".join(str(i) for i in sorted(self.birth))
        s_str = "".join(str(i) for i in sorted(self.survival))
        return f"B{b_str}/S{s_str}"

    def to_bits(self) -> Tuple[int, int]:
        """Convert to bit representation."""
        birth_bits = sum(1 << i for i in self.birth)
        survival_bits = sum(1 << i for i in self.survival)
        return birth_bits, survival_bits

    def lambda_parameter(self) -> float:
        """Calculate Langton's lambda parameter (fraction of transitions to alive state)."""
        # 9 possible counts x 2 cell states = 18 transitions
        return (len(self.birth) + len(self.survival)) / 18.0

    def _build_transitions(self) -> np.ndarray:
        # Row 0 is the birth table (dead cells), row 1 the survival table
        table = np.zeros((2, MAX_NEIGHBORS + 1), dtype=bool)
        table[0, list(self.birth)] = True
        table[1, list(self.survival)] = True
        table.flags.writeable = False
        return table

    @property
    def transition_table(self) -> np.ndarray:
        """Read-only table indexed by ``[alive, neighbor_count]``, built once per rule set."""
        return self._transitions

    def __str__(self):
        return self.to_string()


@dataclass(frozen=True)
class RulePreset:
    """A named rule set offered to callers by name."""
    name: str
    display_name: str
    description: str
    rules: RuleSet

    def to_dict(self) -> Dict:
        return {
            "name": self.name,
            "display_name": self.display_name,
            "description": self.description,
            "survival": sorted(self.rules.survival),
            "birth": sorted(self.rules.birth),
            "notation": self.rules.to_string(),
        }


CONWAY = RuleSet(survival=frozenset({2, 3}), birth=frozenset({3}))
HIGHLIFE = RuleSet(survival=frozenset({2, 3}), birth=frozenset({3, 6}))
DAY_AND_NIGHT = RuleSet(survival=frozenset({3, 4, 6, 7, 8}), birth=frozenset({3, 6, 7, 8}))

RULE_PRESETS: Dict[str, RulePreset] = {
    preset.name: preset
    for preset in (
        RulePreset(
            "conway",
            "Conway's Game of Life",
            "The classic Conway's Game of Life rules: B3/S23",
            CONWAY,
        ),
        RulePreset(
            "highlife",
            "HighLife",
            "HighLife variant: B36/S23 - births on 3 or 6 neighbors",
            HIGHLIFE,
        ),
        RulePreset(
            "daynight",
            "Day & Night",
            "Day & Night rules: B3678/S34678 - complex behavior",
            DAY_AND_NIGHT,
        ),
    )
}


def get_rule(name: str) -> RuleSet:
    """Resolve a preset name (case-insensitive) or a rule in B/S notation."""
    key = name.strip().lower()
    if key in RULE_PRESETS:
        return RULE_PRESETS[key].rules
    try:
        return RuleSet.from_string(name)
    except RuleSetError:
        raise RuleSetError(
            f"Unknown rule '{name}'. Use one of {', '.join(RULE_PRESETS)} or B/S notation"
        ) from None


def count_neighbors(cells: np.ndarray) -> np.ndarray:
    """Count live neighbors for each cell. Cells beyond the edge count as dead."""
    # Bool cells are reinterpreted as 0/1 bytes without a copy
    return ndimage.convolve(
        np.asarray(cells, dtype=bool).view(np.uint8), NEIGHBOR_KERNEL, mode="constant", cval=0
    )


def step(grid: Grid, rules: RuleSet = CONWAY) -> Grid:
    """Advance a grid by one generation.

    Returns the input instance itself when no cell changes, so callers can
    test ``next is grid`` before falling back to value equality.
    """
    if grid.is_empty:
        return grid

    cells = grid.cells
    neighbors = count_neighbors(cells)

    # One gather writes the next generation into a single new array
    new_cells = rules.transition_table[cells.view(np.uint8), neighbors]

    if np.array_equal(new_cells, cells):
        return grid
    return Grid._wrap(new_cells)


def state_at_generation(grid: Grid, rules: RuleSet = CONWAY, generation: int = 0) -> Grid:
    """Apply ``step`` exactly ``generation`` times and return the result.

    There is no cycle short-circuit here, so mid-cycle states come back as
    asked. A fixed point stays fixed, so the loop ends once one is reached.
    """
    if generation < 0:
        raise ValueError(f"generation must be non-negative, got {generation}")

    state = grid
    for _ in range(generation):
        next_state = step(state, rules)
        if next_state is state:
            break
        state = next_state
    return state


def is_stable(grid: Grid, rules: RuleSet = CONWAY) -> bool:
    """True when stepping the grid reproduces it exactly."""
    return step(grid, rules) == grid
