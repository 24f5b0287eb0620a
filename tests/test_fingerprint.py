"""Tests for grid fingerprints."""

from __future__ import annotations

import itertools

import numpy as np

from lifecore.fingerprint import EMPTY_FINGERPRINT, fingerprint, fingerprint_bytes
from lifecore.grid import Grid


def test_bits_are_packed_msb_first_and_zero_padded() -> None:
    grid = Grid([[1, 0, 0, 0, 0, 0, 0, 0, 1]])

    assert fingerprint_bytes(grid) == bytes([0x80, 0x80])
    assert fingerprint(grid) == "gIA="
    assert fingerprint(Grid([[1]])) == "gA=="


def test_packing_is_row_major() -> None:
    grid = Grid([[0, 1], [1, 0]])

    # bits 0110 then padding
    assert fingerprint_bytes(grid) == bytes([0b01100000])


def test_empty_grids_share_the_canonical_key() -> None:
    assert fingerprint(Grid([])) == EMPTY_FINGERPRINT
    assert fingerprint(Grid.empty(0, 5)) == EMPTY_FINGERPRINT
    assert fingerprint_bytes(Grid([])) == b""


def test_equal_grids_have_equal_keys() -> None:
    a = Grid([[1, 0, 1], [0, 1, 0]])
    b = Grid(np.array([[True, False, True], [False, True, False]]))

    assert fingerprint(a) == fingerprint(b)


def test_keys_are_injective_for_a_fixed_shape() -> None:
    keys = set()
    for bits in itertools.product([False, True], repeat=9):
        keys.add(fingerprint(Grid(np.array(bits).reshape(3, 3))))

    assert len(keys) == 512


def test_single_cell_difference_changes_key() -> None:
    base = Grid.random(20, 20, density=0.5, rng=np.random.default_rng(1))
    flipped = base.cells.copy()
    flipped[19, 19] = not flipped[19, 19]

    assert fingerprint(base) != fingerprint(Grid(flipped))


def test_keys_are_hashable_text() -> None:
    key = fingerprint(Grid([[1, 1], [0, 1]]))

    assert isinstance(key, str)
    assert key in {key}
