"""Engine and CLI defaults, optionally loaded from a JSON file."""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping, Union

from .automaton import RuleSet, get_rule
from .errors import ConfigError, RuleSetError


@dataclass(frozen=True)
class DisplayFrequency:
    """Which generations to print during long runs: every one at first, then every Nth."""
    initial_generations: int = 10
    subsequent_interval: int = 5

    def __post_init__(self):
        if self.initial_generations < 0:
            raise ConfigError("initial_generations must be non-negative")
        if self.subsequent_interval <= 0:
            raise ConfigError("subsequent_interval must be positive")

    def should_display(self, generation: int) -> bool:
        return generation <= self.initial_generations or generation % self.subsequent_interval == 0


@dataclass(frozen=True)
class CLIDelays:
    """Pauses between printed generations, in seconds."""
    simulation_delay: float = 0.2
    pattern_delay: float = 0.1

    def __post_init__(self):
        if self.simulation_delay < 0 or self.pattern_delay < 0:
            raise ConfigError("CLI delays must be non-negative")


@dataclass(frozen=True)
class EngineConfig:
    """Validated defaults shared by the runner and the command line tool."""
    rule: str = "conway"
    default_board_width: int = 20
    default_board_height: int = 15
    default_random_density: float = 0.25
    max_pattern_generations: int = 50
    display_frequency: DisplayFrequency = field(default_factory=DisplayFrequency)
    cli_delays: CLIDelays = field(default_factory=CLIDelays)

    def __post_init__(self):
        if not isinstance(self.rule, str):
            raise ConfigError(f"rule must be a string, got {self.rule!r}")
        try:
            get_rule(self.rule)
        except RuleSetError as e:
            raise ConfigError(str(e)) from e
        if self.default_board_width <= 0 or self.default_board_height <= 0:
            raise ConfigError("Default board dimensions must be positive")
        if not 0.0 <= self.default_random_density <= 1.0:
            raise ConfigError("default_random_density must lie in [0, 1]")
        if self.max_pattern_generations < 0:
            raise ConfigError("max_pattern_generations must be non-negative")

    @property
    def rules(self) -> RuleSet:
        return get_rule(self.rule)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "rule": self.rule,
            "default_board_width": self.default_board_width,
            "default_board_height": self.default_board_height,
            "default_random_density": self.default_random_density,
            "max_pattern_generations": self.max_pattern_generations,
            "display_frequency": {
                "initial_generations": self.display_frequency.initial_generations,
                "subsequent_interval": self.display_frequency.subsequent_interval,
            },
            "cli_delays": {
                "simulation_delay": self.cli_delays.simulation_delay,
                "pattern_delay": self.cli_delays.pattern_delay,
            },
        }

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "EngineConfig":
        """Build a config from a mapping; absent keys keep their defaults."""
        known = {
            "rule", "default_board_width", "default_board_height",
            "default_random_density", "max_pattern_generations",
            "display_frequency", "cli_delays",
        }
        unknown = set(payload) - known
        if unknown:
            raise ConfigError(f"Unknown configuration keys: {', '.join(sorted(unknown))}")

        kwargs = dict(payload)
        try:
            if "display_frequency" in kwargs:
                kwargs["display_frequency"] = DisplayFrequency(**kwargs["display_frequency"])
            if "cli_delays" in kwargs:
                kwargs["cli_delays"] = CLIDelays(**kwargs["cli_delays"])
            return cls(**kwargs)
        except TypeError as e:
            raise ConfigError(f"Invalid configuration: {e}") from e


DEFAULT_CONFIG = EngineConfig()


def load_config(path: Union[str, Path]) -> EngineConfig:
    """Load an EngineConfig from a JSON file."""
    path = Path(path)
    try:
        with open(path, "r") as f:
            payload = json.load(f)
    except FileNotFoundError:
        raise ConfigError(f"Config file not found: {path}") from None
    except json.JSONDecodeError as e:
        raise ConfigError(f"Config file {path} is not valid JSON: {e}") from e

    if not isinstance(payload, Mapping):
        raise ConfigError("Config file must contain a JSON object")
    return EngineConfig.from_dict(payload)
