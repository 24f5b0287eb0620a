"""Tests for the convergence detector."""

from __future__ import annotations

from lifecore.convergence import (
    CONTINUING,
    EXTINCT,
    Convergence,
    ConvergenceDetector,
    ConvergenceType,
)
from lifecore.fingerprint import fingerprint
from lifecore.grid import Grid


def test_all_dead_grid_is_extinct_regardless_of_history() -> None:
    detector = ConvergenceDetector()
    dead = Grid.empty(4, 4)

    assert detector.check(dead, set()) == EXTINCT
    assert detector.check(dead, {fingerprint(dead)}) == EXTINCT
    assert detector.check(Grid([]), set()) == EXTINCT


def test_seen_grid_is_cyclical() -> None:
    detector = ConvergenceDetector()
    grid = Grid([[0, 1, 0], [0, 1, 0], [0, 1, 0]])

    outcome = detector.check(grid, {fingerprint(grid)})

    assert outcome.type is ConvergenceType.CYCLICAL
    assert outcome.period is None
    assert outcome.is_terminal


def test_unseen_grid_continues() -> None:
    detector = ConvergenceDetector()
    grid = Grid([[1, 1], [1, 1]])

    assert detector.check(grid, set()) == CONTINUING
    assert not CONTINUING.is_terminal


def test_history_can_be_a_mapping() -> None:
    detector = ConvergenceDetector()
    grid = Grid([[1, 0], [0, 1]])

    assert detector.check(grid, {fingerprint(grid): 3}).type is ConvergenceType.CYCLICAL


def test_check_does_not_mutate_history() -> None:
    detector = ConvergenceDetector()
    history = set()
    detector.check(Grid([[1, 1]]), history)

    assert history == set()


def test_display_names() -> None:
    assert CONTINUING.display_name == "Continuing"
    assert EXTINCT.display_name == "Extinct"
    assert Convergence.cyclical().display_name == "Cyclical"
    assert Convergence.cyclical(2).display_name == "Cyclical (period 2)"
    assert Convergence.cyclical(2).to_dict() == {"type": "cyclical", "period": 2}


def test_precomputed_key_is_used_as_is() -> None:
    detector = ConvergenceDetector()
    grid = Grid([[1, 1]])

    assert detector.check(grid, {"seen"}, key="seen").type is ConvergenceType.CYCLICAL
    assert detector.check(grid, {fingerprint(grid)}, key="other") == CONTINUING
