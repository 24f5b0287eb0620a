"""Immutable rectangular boolean cell grid."""

import numpy as np
from typing import List, Optional, Sequence, Tuple, Union

from .errors import GridShapeError

GridLike = Union["Grid", np.ndarray, Sequence[Sequence[object]]]


def _as_cells(data) -> np.ndarray:
    """Convert nested sequences or an array into a 2-D bool array, rejecting ragged input."""
    if isinstance(data, Grid):
        return data.cells
    if isinstance(data, np.ndarray):
        if data.ndim != 2:
            raise GridShapeError(f"Grid must be 2-D, got {data.ndim} dimension(s)")
        return data.astype(bool)

    rows = [list(row) for row in data]
    if not rows:
        return np.zeros((0, 0), dtype=bool)
    width = len(rows[0])
    for y, row in enumerate(rows):
        if len(row) != width:
            raise GridShapeError(
                f"Non-rectangular grid: row {y} has {len(row)} cells, expected {width}"
            )
    try:
        arr = np.array(rows, dtype=bool)
    except ValueError as e:
        raise GridShapeError(f"Grid rows must hold single cells: {e}") from e
    if arr.ndim != 2:
        raise GridShapeError(f"Grid rows must hold single cells, got {arr.ndim}-D input")
    return arr.reshape(len(rows), width)


class Grid:
    """A height x width matrix of alive (True) and dead (False) cells.

    Grids never change after construction; the backing array is read-only.
    Equality compares shape and cells, and the hash comes from the packed
    cell bits so grids can be used as set members.
    """

    __slots__ = ("_cells",)

    def __init__(self, cells: GridLike):
        arr = np.array(_as_cells(cells), dtype=bool, copy=True)
        arr.flags.writeable = False
        self._cells = arr

    @classmethod
    def _wrap(cls, arr: np.ndarray) -> "Grid":
        """Adopt a freshly computed bool array without copying it."""
        grid = cls.__new__(cls)
        arr.flags.writeable = False
        grid._cells = arr
        return grid

    @classmethod
    def empty(cls, width: int, height: int) -> "Grid":
        """All-dead grid of the given size."""
        if width < 0 or height < 0:
            raise GridShapeError(f"Grid dimensions must be non-negative, got {width}x{height}")
        return cls._wrap(np.zeros((height, width), dtype=bool))

    @classmethod
    def random(
        cls,
        width: int,
        height: int,
        density: float = 0.3,
        rng: Optional[np.random.Generator] = None,
    ) -> "Grid":
        """Fill a grid with live cells at the given density."""
        if width < 0 or height < 0:
            raise GridShapeError(f"Grid dimensions must be non-negative, got {width}x{height}")
        if rng is None:
            rng = np.random.default_rng()
        return cls._wrap(rng.random((height, width)) < density)

    @classmethod
    def from_string(cls, text: str, alive: str = "*", dead: str = ".") -> "Grid":
        """Parse a grid from lines like ``.*.`` (blank lines are skipped).

        Characters other than ``alive`` and ``dead`` raise GridShapeError.
        """
        lines = [line.strip() for line in text.splitlines()]
        lines = [line for line in lines if line]
        for y, line in enumerate(lines):
            stray = set(line) - {alive, dead}
            if stray:
                raise GridShapeError(
                    f"Unexpected character(s) {''.join(sorted(stray))!r} on line {y}"
                )
        return cls([[c == alive for c in line] for line in lines])

    def to_string(self, alive: str = "*", dead: str = ".") -> str:
        return "\n".join(
            "".join(alive if c else dead for c in row) for row in self._cells
        )

    def to_list(self) -> List[List[bool]]:
        return self._cells.tolist()

    @property
    def cells(self) -> np.ndarray:
        """Read-only view of the cell array, indexed ``[row, column]``."""
        return self._cells

    @property
    def width(self) -> int:
        return int(self._cells.shape[1])

    @property
    def height(self) -> int:
        return int(self._cells.shape[0])

    @property
    def shape(self) -> Tuple[int, int]:
        return self.height, self.width

    @property
    def size(self) -> int:
        return int(self._cells.size)

    @property
    def is_empty(self) -> bool:
        """True for a zero-width or zero-height grid ("no board")."""
        return self._cells.size == 0

    @property
    def population(self) -> int:
        """Count live cells."""
        return int(np.count_nonzero(self._cells))

    def density(self) -> float:
        if self.is_empty:
            return 0.0
        return self.population / self.size

    def place(self, pattern: GridLike, x: int = 0, y: int = 0) -> "Grid":
        """Return a copy with ``pattern`` stamped at column ``x``, row ``y``."""
        stamp = _as_cells(pattern)
        ph, pw = stamp.shape
        if x < 0 or y < 0 or y + ph > self.height or x + pw > self.width:
            raise GridShapeError(
                f"Pattern of size {pw}x{ph} does not fit at ({x}, {y}) "
                f"in a {self.width}x{self.height} grid"
            )
        arr = self._cells.copy()
        arr[y:y + ph, x:x + pw] = stamp
        return Grid._wrap(arr)

    def __getitem__(self, key):
        return self._cells[key]

    def __eq__(self, other):
        if not isinstance(other, Grid):
            return NotImplemented
        if self is other:
            return True
        return self._cells.shape == other._cells.shape and bool(
            np.array_equal(self._cells, other._cells)
        )

    def __hash__(self):
        return hash((self._cells.shape, np.packbits(self._cells).tobytes()))

    def __repr__(self):
        return f"Grid({self.width}x{self.height}, population={self.population})"
