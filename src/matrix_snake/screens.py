"""Payloads for the four screens of the game.

Each screen is its own dataclass tagged with a :class:`ScreenKind`; the
controller dispatches on the payload type and owns every transition.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field

from matrix_snake.config import GRID_HEIGHT, GRID_WIDTH, GameConfig
from matrix_snake.engine import GameSnapshot, SnakeSimulation
from matrix_snake.glyphs import glyph_for_cell
from matrix_snake.grid import SAFE_SPAWN_RADIUS, Cell, GridMap
from matrix_snake.rng import SEED_MASK
from matrix_snake.snake import Direction

logger = logging.getLogger(__name__)

_LCG_MULTIPLIER = 6364136223846793005


class ScreenKind(str, enum.Enum):
    """Tag of the active screen."""

    LOBBY = "lobby"
    SETTINGS = "settings"
    PLAYING = "playing"
    GAME_OVER = "game_over"


class LobbyItem(enum.IntEnum):
    """Lobby menu entries, in display order."""

    START = 0
    RESEED = 1
    DENSITY = 2
    SPEED = 3
    QUIT = 4


def next_seed(seed: int) -> int:
    """One linear-congruential step over 64-bit seeds."""
    return (seed * _LCG_MULTIPLIER + 1) & SEED_MASK


class LobbyPreview:
    """A lone head wandering the preview map.

    Purely decorative: blocked moves rotate the heading clockwise, and a
    head boxed in on all four sides jumps back to the centre.
    """

    def __init__(self, grid_map: GridMap) -> None:
        self.grid_map = grid_map
        self.position = grid_map.center
        self.direction = Direction.RIGHT
        self.elapsed = 0.0

    def reset(self, grid_map: GridMap | None = None) -> None:
        if grid_map is not None:
            self.grid_map = grid_map
        self.position = self.grid_map.center
        self.direction = Direction.RIGHT

    def _open(self, cell: Cell) -> bool:
        m = self.grid_map
        interior = 0 < cell.x < m.width - 1 and 0 < cell.y < m.height - 1
        return interior and not m.is_wall(cell)

    def advance(self, dt: float, interval: float) -> bool:
        """Move once if *interval* has elapsed. Returns whether it moved."""
        self.elapsed += dt
        if self.elapsed < interval:
            return False
        self.elapsed = 0.0

        direction = self.direction
        for _ in range(4):
            target = direction.apply(self.position)
            if self._open(target):
                self.position = target
                self.direction = direction
                return True
            direction = direction.clockwise

        logger.debug("Preview head boxed in at %s; resetting.", self.position)
        self.reset()
        return False


@dataclass
class LobbyScreen:
    """Run parameters being chosen, plus the live preview of their map."""

    seed: int
    wall_density: float
    tick_interval: float
    best_score: int = 0
    width: int = GRID_WIDTH
    height: int = GRID_HEIGHT
    safe_radius: int = SAFE_SPAWN_RADIUS
    selected: LobbyItem = LobbyItem.START
    preview_map: GridMap = field(init=False)
    preview: LobbyPreview = field(init=False)
    kind: ScreenKind = field(default=ScreenKind.LOBBY, init=False)

    def __post_init__(self) -> None:
        self.preview_map = self._generate()
        self.preview = LobbyPreview(self.preview_map)

    def _generate(self) -> GridMap:
        return GridMap.generate(
            self.seed, self.wall_density, self.width, self.height, self.safe_radius,
        )

    def _regenerate(self) -> None:
        self.preview_map = self._generate()
        self.preview.reset(self.preview_map)

    def move_selection(self, step: int) -> None:
        self.selected = LobbyItem((self.selected + step) % len(LobbyItem))

    def reseed(self) -> None:
        self.seed = next_seed(self.seed)
        self._regenerate()
        logger.info("Lobby reseeded to %d.", self.seed)

    def adjust_density(self, delta: float, config: GameConfig) -> None:
        self.wall_density = config.clamp_wall_density(self.wall_density + delta)
        self._regenerate()

    def adjust_tick_interval(self, delta: float, config: GameConfig) -> None:
        self.tick_interval = config.clamp_tick_interval(self.tick_interval + delta)

    def to_dict(self) -> dict:
        return {
            "screen": self.kind.value,
            "seed": self.seed,
            "wall_density": self.wall_density,
            "tick_interval": self.tick_interval,
            "best_score": self.best_score,
            "selected": self.selected.name,
            "map": self.preview_map.to_dict(),
            "preview_head": list(self.preview.position),
            "preview_glyph": glyph_for_cell(self.preview.position),
        }


@dataclass
class SettingsScreen:
    volume: float
    kind: ScreenKind = field(default=ScreenKind.SETTINGS, init=False)

    def adjust(self, delta: float) -> None:
        self.volume = min(max(self.volume + delta, 0.0), 1.0)

    def toggle_mute(self) -> None:
        self.volume = 0.0 if self.volume > 0.0 else 1.0

    def to_dict(self) -> dict:
        return {"screen": self.kind.value, "volume": self.volume}


@dataclass
class PlayingScreen:
    simulation: SnakeSimulation
    kind: ScreenKind = field(default=ScreenKind.PLAYING, init=False)

    def to_dict(self) -> dict:
        return {
            "screen": self.kind.value,
            "map": self.simulation.map.to_dict(),
            **self.simulation.get_state(),
        }


@dataclass
class GameOverScreen:
    """A finished run, frozen until the player restarts or leaves."""

    snapshot: GameSnapshot
    best_score: int
    new_best: bool = False
    kind: ScreenKind = field(default=ScreenKind.GAME_OVER, init=False)

    def to_dict(self) -> dict:
        return {
            "screen": self.kind.value,
            "map": self.snapshot.grid_map.to_dict(),
            "best_score": self.best_score,
            "new_best": self.new_best,
            **self.snapshot.to_dict(),
        }


Screen = LobbyScreen | SettingsScreen | PlayingScreen | GameOverScreen
