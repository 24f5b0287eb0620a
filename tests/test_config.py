"""Tests for config loading and validation."""

from __future__ import annotations

import json

import pytest

from lifecore.automaton import CONWAY, HIGHLIFE
from lifecore.config import CLIDelays, DisplayFrequency, EngineConfig, load_config
from lifecore.errors import ConfigError


def test_defaults() -> None:
    config = EngineConfig()

    assert config.rules == CONWAY
    assert config.default_board_width == 20
    assert config.default_board_height == 15
    assert config.default_random_density == 0.25
    assert config.max_pattern_generations == 50
    assert config.display_frequency == DisplayFrequency(10, 5)
    assert config.cli_delays == CLIDelays(0.2, 0.1)


def test_display_frequency() -> None:
    frequency = DisplayFrequency(initial_generations=10, subsequent_interval=5)

    assert all(frequency.should_display(g) for g in range(11))
    assert not frequency.should_display(11)
    assert frequency.should_display(15)
    assert not frequency.should_display(17)


def test_load_json_config(tmp_path) -> None:
    config_path = tmp_path / "config.json"
    payload = {
        "rule": "highlife",
        "default_board_width": 40,
        "display_frequency": {"initial_generations": 3, "subsequent_interval": 10},
    }
    config_path.write_text(json.dumps(payload), encoding="utf-8")

    config = load_config(config_path)

    assert config.rules == HIGHLIFE
    assert config.default_board_width == 40
    assert config.default_board_height == 15
    assert config.display_frequency.subsequent_interval == 10


def test_round_trip_through_dict() -> None:
    config = EngineConfig(rule="B36/S23", default_random_density=0.5)

    assert EngineConfig.from_dict(config.to_dict()) == config


@pytest.mark.parametrize(
    "payload",
    [
        {"rule": "nonsense"},
        {"default_random_density": 1.5},
        {"default_board_width": 0},
        {"max_pattern_generations": -1},
        {"display_frequency": {"subsequent_interval": 0}},
        {"cli_delays": {"simulation_delay": -1}},
        {"cli_delays": {"typo": 1}},
        {"unexpected": True},
    ],
)
def test_invalid_values_are_rejected(payload) -> None:
    with pytest.raises(ConfigError):
        EngineConfig.from_dict(payload)


def test_missing_and_malformed_files(tmp_path) -> None:
    with pytest.raises(ConfigError):
        load_config(tmp_path / "absent.json")

    broken = tmp_path / "broken.json"
    broken.write_text("{not json", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(broken)

    listing = tmp_path / "list.json"
    listing.write_text("[1, 2]", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(listing)
