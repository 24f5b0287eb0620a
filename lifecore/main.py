#!/usr/bin/env python3
"""CLI for running Game of Life simulations in the terminal."""

import argparse
import logging
import sys
import time
from typing import List, Optional

import numpy as np

from .automaton import RULE_PRESETS, RuleSet, get_rule, step
from .config import DEFAULT_CONFIG, EngineConfig, load_config
from .convergence import ConvergenceDetector, ConvergenceType
from .errors import ConfigError, ConvergenceTimeout, RuleSetError
from .fingerprint import fingerprint
from .grid import Grid
from .patterns import PATTERNS, get_pattern
from .runner import SimulationRunner
from .visualize import save_animation

LOGGER = logging.getLogger(__name__)

EXIT_TIMEOUT = 2


def build_grid(
    width: int,
    height: int,
    pattern: str = "random",
    density: float = 0.3,
    rng: Optional[np.random.Generator] = None,
) -> Grid:
    """Create the starting board: 'empty', 'random', or a named pattern centered on the board.

    A pattern larger than the requested board grows the board to fit it.
    """
    name = pattern.lower()
    if name == "empty":
        return Grid.empty(width, height)
    if name == "random":
        return Grid.random(width, height, density=density, rng=rng)

    try:
        cells = get_pattern(name).cells
    except KeyError:
        print(f"Warning: Unknown pattern '{pattern}', using random instead")
        return Grid.random(width, height, density=density, rng=rng)

    w = max(width, cells.width)
    h = max(height, cells.height)
    return Grid.empty(w, h).place(cells, (w - cells.width) // 2, (h - cells.height) // 2)


def print_generation(generation: int, grid: Grid):
    print(f"Generation {generation}:")
    print(grid.to_string())
    print(f"Population: {grid.population}")


def _resolve_rules(args, config: EngineConfig) -> RuleSet:
    if getattr(args, "rule", None):
        return get_rule(args.rule)
    return config.rules


def _resolve_size(args, config: EngineConfig):
    width = args.width if args.width is not None else config.default_board_width
    height = args.height if args.height is not None else config.default_board_height
    return width, height


def cmd_run(args, config: EngineConfig) -> int:
    """Run a simulation, stopping early on extinction or a repeated state."""
    width, height = _resolve_size(args, config)
    generations = (
        args.generations if args.generations is not None else config.max_pattern_generations
    )
    if width <= 0 or height <= 0 or generations < 0:
        print("Error: Invalid dimensions or generation count")
        return 1

    rules = _resolve_rules(args, config)
    density = args.density if args.density is not None else config.default_random_density
    delay = args.delay if args.delay is not None else config.cli_delays.simulation_delay
    rng = np.random.default_rng(args.seed)

    grid = build_grid(width, height, args.pattern, density=density, rng=rng)
    detector = ConvergenceDetector()

    print("Starting Game of Life simulation")
    print(f"Dimensions: {grid.width}x{grid.height}, Generations: {generations}")
    print(f"Initial pattern: {args.pattern}")
    print(f"Rule: {rules.to_string()}")
    print("-" * 50)
    print_generation(0, grid)

    frames = [grid]
    history = set()
    outcome = None

    for generation in range(1, generations + 1):
        history.add(fingerprint(grid))
        grid = step(grid, rules)
        frames.append(grid)
        outcome = detector.check(grid, history)

        if outcome.is_terminal or config.display_frequency.should_display(generation):
            print()
            print_generation(generation, grid)

        if outcome.type is ConvergenceType.EXTINCT:
            print("Game ended - all cells died (extinction)")
            break
        if outcome.type is ConvergenceType.CYCLICAL:
            print("Game ended - pattern is cyclical")
            break

        if delay and generation < generations:
            time.sleep(delay)
    else:
        print(f"Simulation completed after {generations} generations")

    if args.gif:
        count = save_animation(frames, args.gif, cell_size=args.cell_size)
        print(f"Saved {count} frames to: {args.gif}")
    return 0


def cmd_pattern(args, config: EngineConfig) -> int:
    """Run a predefined pattern until it stabilizes or the generation cap is hit."""
    try:
        pattern = get_pattern(args.name)
    except KeyError:
        print(f"Error: Unknown pattern '{args.name}'")
        print(f"Available patterns: {', '.join(PATTERNS)}")
        return 1

    rules = _resolve_rules(args, config)
    delay = args.delay if args.delay is not None else config.cli_delays.pattern_delay
    max_generations = (
        args.generations if args.generations is not None else config.max_pattern_generations
    )

    print(f"Running pattern: {pattern.display_name}")
    print(f"Description: {pattern.description}")
    print("-" * 50)

    grid = pattern.cells
    print_generation(0, grid)

    for generation in range(1, max_generations + 1):
        next_grid = step(grid, rules)
        if next_grid is grid:
            print(f"Pattern stabilized at generation {generation}")
            break
        grid = next_grid

        if config.display_frequency.should_display(generation):
            print()
            print_generation(generation, grid)

        if delay:
            time.sleep(delay)
    return 0


def cmd_final(args, config: EngineConfig) -> int:
    """Run until convergence and report how the board ended."""
    width, height = _resolve_size(args, config)
    if width <= 0 or height <= 0:
        print("Error: Invalid dimensions")
        return 1
    if args.max_iterations < 0:
        print("Error: --max-iterations must be non-negative")
        return 1

    rules = _resolve_rules(args, config)
    density = args.density if args.density is not None else config.default_random_density
    grid = build_grid(
        width, height, args.pattern, density=density,
        rng=np.random.default_rng(args.seed),
    )

    runner = SimulationRunner(rules)
    try:
        state = runner.run(grid, args.max_iterations)
    except ConvergenceTimeout as e:
        print(str(e))
        if e.state is not None:
            print(f"Population after {e.state.generation} generations: {e.state.population_count}")
        return EXIT_TIMEOUT

    print(f"Converged at generation {state.converged_at}: {state.convergence.display_name}")
    print(f"Final population: {state.population_count}")
    print(f"Stable: {'yes' if state.is_stable else 'no'}")
    if args.show:
        print(state.cells.to_string())
    return 0


def cmd_rules(args, config: EngineConfig) -> int:
    """List the built-in rule presets."""
    print(f"{'Name':<12}{'Rule':<16}Description")
    print("-" * 70)
    for preset in RULE_PRESETS.values():
        print(f"{preset.name:<12}{preset.rules.to_string():<16}{preset.description}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Conway's Game of Life and other outer-totalistic automata"
    )
    parser.add_argument("--config", type=str, default=None, help="JSON configuration file")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Run command
    run_parser = subparsers.add_parser("run", help="Run a simulation and print each generation")
    run_parser.add_argument("width", type=int, nargs="?", default=None,
                            help="Board width (default from config)")
    run_parser.add_argument("height", type=int, nargs="?", default=None,
                            help="Board height (default from config)")
    run_parser.add_argument("generations", type=int, nargs="?", default=None,
                            help="Number of generations (default max_pattern_generations)")
    run_parser.add_argument("pattern", nargs="?", default="random",
                            help="random, empty, or a pattern name")
    run_parser.add_argument("--rule", type=str, default=None, help="Preset name or B/S rule")
    run_parser.add_argument("--density", type=float, default=None, help="Random fill density")
    run_parser.add_argument("--seed", type=int, default=None, help="Random seed")
    run_parser.add_argument("--delay", type=float, default=None, help="Seconds between generations")
    run_parser.add_argument("--gif", type=str, default=None, help="Save the run as an animated GIF")
    run_parser.add_argument("--cell-size", type=int, default=4, help="Cell size in pixels")
    run_parser.set_defaults(func=cmd_run)

    # Pattern command
    pattern_parser = subparsers.add_parser("pattern", help="Run a predefined pattern")
    pattern_parser.add_argument("name", type=str, help="Pattern name (e.g., glider)")
    pattern_parser.add_argument("--rule", type=str, default=None, help="Preset name or B/S rule")
    pattern_parser.add_argument("-g", "--generations", type=int, default=None,
                                help="Maximum generations")
    pattern_parser.add_argument("--delay", type=float, default=None,
                                help="Seconds between generations")
    pattern_parser.set_defaults(func=cmd_pattern)

    # Final state command
    final_parser = subparsers.add_parser("final", help="Run until the board converges")
    final_parser.add_argument("width", type=int, nargs="?", default=None,
                              help="Board width (default from config)")
    final_parser.add_argument("height", type=int, nargs="?", default=None,
                              help="Board height (default from config)")
    final_parser.add_argument("pattern", nargs="?", default="random",
                              help="random, empty, or a pattern name")
    final_parser.add_argument("-n", "--max-iterations", type=int, default=500,
                              help="Generation budget")
    final_parser.add_argument("--rule", type=str, default=None, help="Preset name or B/S rule")
    final_parser.add_argument("--density", type=float, default=None, help="Random fill density")
    final_parser.add_argument("--seed", type=int, default=None, help="Random seed")
    final_parser.add_argument("--show", action="store_true", help="Print the final board")
    final_parser.set_defaults(func=cmd_final)

    # Rules command
    rules_parser = subparsers.add_parser("rules", help="List rule presets")
    rules_parser.set_defaults(func=cmd_rules)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command is None:
        parser.print_help()
        return 1

    try:
        config = load_config(args.config) if args.config else DEFAULT_CONFIG
        LOGGER.debug("Configuration: %s", config.to_dict())
        return args.func(args, config)
    except (ConfigError, RuleSetError) as e:
        print(f"Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
