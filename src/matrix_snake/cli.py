"""Command-line tools for inspecting maps and running headless games."""

from __future__ import annotations

import argparse
import logging
import sys

from matrix_snake.config import GameConfig
from matrix_snake.controller import InputAction, ScreenController
from matrix_snake.engine import SnakeSimulation
from matrix_snake.screens import LobbyScreen, PlayingScreen
from matrix_snake.snake import Direction

logger = logging.getLogger(__name__)

_DIRECTION_ACTIONS: dict[Direction, InputAction] = {
    Direction.UP: InputAction.UP,
    Direction.DOWN: InputAction.DOWN,
    Direction.LEFT: InputAction.LEFT,
    Direction.RIGHT: InputAction.RIGHT,
}


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="matrix-snake",
        description="Matrix Snake map and simulation tools.",
    )
    parser.add_argument(
        "--config", type=str, default=None,
        help="Path to a JSON game config file.",
    )
    sub = parser.add_subparsers(dest="command", help="Available commands.")

    # --- map ---
    map_p = sub.add_parser("map", help="Print the map for a seed and density.")
    map_p.add_argument("--seed", type=int, default=1)
    map_p.add_argument("--density", type=float, default=None)

    # --- simulate ---
    sim_p = sub.add_parser(
        "simulate", help="Play a headless game with a simple autopilot.",
    )
    sim_p.add_argument("--seed", type=int, default=1)
    sim_p.add_argument("--density", type=float, default=None)
    sim_p.add_argument("--tick-interval", type=float, default=None)
    sim_p.add_argument("--ticks", type=int, default=500)
    sim_p.add_argument(
        "--save-path", type=str, default=None,
        help="Save file to record the run in (default: none).",
    )

    # --- best ---
    best_p = sub.add_parser("best", help="Show the persisted save record.")
    best_p.add_argument("--save-path", type=str, default=None)

    return parser


def choose_direction(simulation: SnakeSimulation) -> Direction:
    """Keep heading, turning clockwise around anything that would kill.

    Falls back to the current heading when every option is fatal.
    """
    candidate = simulation.pending_direction
    for _ in range(4):
        if candidate != simulation.direction.opposite:
            target = candidate.apply(simulation.snake.head)
            safe = (
                simulation.map.in_bounds(target)
                and not simulation.map.is_wall(target)
                and not simulation.snake.blocks(target, target == simulation.food)
            )
            if safe:
                return candidate
        candidate = candidate.clockwise
    return simulation.direction


class Autopilot:
    """Input source that starts a game, steers, and quits when done."""

    def __init__(self, controller: ScreenController, max_ticks: int) -> None:
        self.controller = controller
        self.max_ticks = max_ticks

    def poll(self) -> set[InputAction]:
        screen = self.controller.screen
        if isinstance(screen, LobbyScreen):
            return {InputAction.CONFIRM}
        if isinstance(screen, PlayingScreen):
            simulation = screen.simulation
            if simulation.tick >= self.max_ticks:
                return {InputAction.QUIT}
            return {_DIRECTION_ACTIONS[choose_direction(simulation)]}
        return {InputAction.QUIT}


def _load_config(args: argparse.Namespace) -> GameConfig:
    return GameConfig.load(args.config) if args.config else GameConfig()


def _run_map(args: argparse.Namespace) -> int:
    from matrix_snake.grid import GridMap
    from matrix_snake.render import render_board

    config = _load_config(args)
    density = config.clamp_wall_density(
        args.density if args.density is not None else config.default_wall_density,
    )
    grid_map = GridMap.generate(
        args.seed, density, config.grid_width, config.grid_height,
        config.safe_spawn_radius,
    )
    for line in render_board({"map": grid_map.to_dict()}):
        print(line)  # noqa: T201
    print(  # noqa: T201
        f"Seed: {grid_map.seed}  Density: {density:.2f}  "
        f"Walls: {len(grid_map.walls)}"
    )
    return 0


def _run_simulate(args: argparse.Namespace) -> int:
    from matrix_snake.audio import RecordingCueSink
    from matrix_snake.persistence import JsonSaveStore, MemorySaveStore
    from matrix_snake.render import TextPresentation
    from matrix_snake.rng import RandomSource

    config = _load_config(args)
    store = JsonSaveStore(args.save_path) if args.save_path else MemorySaveStore()
    sink = RecordingCueSink()
    controller = ScreenController(
        config=config, store=store, cue_sink=sink, rng=RandomSource(args.seed),
    )
    density = args.density if args.density is not None else config.default_wall_density
    interval = (
        args.tick_interval if args.tick_interval is not None
        else config.default_tick_interval
    )
    controller.screen = LobbyScreen(
        seed=args.seed,
        wall_density=config.clamp_wall_density(density),
        tick_interval=config.clamp_tick_interval(interval),
        width=config.grid_width,
        height=config.grid_height,
        safe_radius=config.safe_spawn_radius,
    )

    # Fixed-step clock so runs are reproducible.
    frame = 1 / 60
    ticks = {"now": 0.0}

    def clock() -> float:
        ticks["now"] += frame
        return ticks["now"]

    frames = controller.run(
        Autopilot(controller, args.ticks),
        clock=clock,
        sleep=lambda _: None,
        frame_interval=0,
    )
    logger.info("Simulation finished after %d frames.", frames)

    TextPresentation().present(controller.get_state())
    print(f"Cues: {sink.names.count('ate')} ate, {sink.names.count('died')} died")  # noqa: T201
    return 0


def _run_best(args: argparse.Namespace) -> int:
    from matrix_snake.persistence import JsonSaveStore

    config = _load_config(args)
    store = JsonSaveStore(args.save_path or config.save_path)
    print(store.load().model_dump_json(indent=2))  # noqa: T201
    return 0


def main(argv: list[str] | None = None) -> int:
    """Entry point for the ``matrix-snake`` CLI."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    handlers = {
        "map": _run_map,
        "simulate": _run_simulate,
        "best": _run_best,
    }
    return handlers[args.command](args)


if __name__ == "__main__":
    sys.exit(main())
