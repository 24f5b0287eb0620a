"""Tests for the Grid value type."""

from __future__ import annotations

import numpy as np
import pytest

from lifecore.errors import GridShapeError
from lifecore.grid import Grid


def test_population_and_dimensions() -> None:
    grid = Grid([[0, 1, 0], [1, 1, 0]])

    assert grid.width == 3
    assert grid.height == 2
    assert grid.shape == (2, 3)
    assert grid.population == 3


def test_ragged_rows_are_rejected() -> None:
    with pytest.raises(GridShapeError):
        Grid([[True, False], [True]])


def test_non_2d_array_is_rejected() -> None:
    with pytest.raises(GridShapeError):
        Grid(np.zeros((2, 2, 2), dtype=bool))


def test_nested_rows_are_rejected() -> None:
    with pytest.raises(GridShapeError):
        Grid([[[1, 0]], [[1, 0]]])


def test_zero_size_grids_are_legal() -> None:
    assert Grid([]).is_empty
    assert Grid([]).shape == (0, 0)
    assert Grid.empty(0, 4).is_empty
    assert Grid([]).population == 0


def test_cells_are_read_only() -> None:
    grid = Grid([[1, 0]])
    with pytest.raises(ValueError):
        grid.cells[0, 0] = False


def test_construction_copies_input() -> None:
    source = np.array([[True, False]])
    grid = Grid(source)
    source[0, 0] = False

    assert grid.population == 1


def test_equality_is_element_wise() -> None:
    a = Grid([[1, 0], [0, 1]])
    b = Grid(np.array([[True, False], [False, True]]))
    c = Grid([[1, 0], [1, 1]])

    assert a == b
    assert hash(a) == hash(b)
    assert a != c
    assert Grid([[0, 0]]) != Grid([[0], [0]])
    assert len({a, b, c}) == 2


def test_string_round_trip() -> None:
    text = ".*.\n**.\n..."
    grid = Grid.from_string(text)

    assert grid.to_string() == text
    assert grid.population == 3


def test_place_stamps_pattern_without_wrapping() -> None:
    block = Grid([[1, 1], [1, 1]])
    board = Grid.empty(4, 4).place(block, x=2, y=1)

    assert board.population == 4
    assert board[1, 2] and board[2, 3]
    with pytest.raises(GridShapeError):
        Grid.empty(4, 4).place(block, x=3, y=0)


def test_random_density_bounds() -> None:
    rng = np.random.default_rng(0)

    assert Grid.random(10, 10, density=0.0, rng=rng).population == 0
    assert Grid.random(10, 10, density=1.0, rng=rng).population == 100


def test_from_string_custom_symbols() -> None:
    grid = Grid.from_string("#_\n_#", alive="#", dead="_")

    assert grid == Grid([[1, 0], [0, 1]])
    assert grid.to_string(alive="#", dead="_") == "#_\n_#"


def test_from_string_rejects_unknown_characters() -> None:
    with pytest.raises(GridShapeError):
        Grid.from_string(".*.\n.o.")


def test_density() -> None:
    assert Grid([[1, 0], [0, 0]]).density() == 0.25
    assert Grid.empty(0, 0).density() == 0.0
