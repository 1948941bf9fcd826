"""Tunable game constants."""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

# 320×240 canvas at 10px tiles.
GRID_WIDTH = 32
GRID_HEIGHT = 24

DEFAULT_TICK_INTERVAL = 0.12
DEFAULT_WALL_DENSITY = 0.10
DEFAULT_SAVE_PATH = "snake_save.json"


@dataclass(frozen=True)
class GameConfig:
    """Game-wide configuration.

    Supports JSON serialization so a tuned setup can be reused.
    """

    # Grid
    grid_width: int = GRID_WIDTH
    grid_height: int = GRID_HEIGHT
    safe_spawn_radius: int = 2
    initial_snake_length: int = 3

    # Speed (seconds per tick)
    default_tick_interval: float = DEFAULT_TICK_INTERVAL
    min_tick_interval: float = 0.05
    max_tick_interval: float = 0.35
    tick_interval_step: float = 0.02

    # Walls
    default_wall_density: float = DEFAULT_WALL_DENSITY
    max_wall_density: float = 0.35
    wall_density_step: float = 0.02

    # Audio
    default_volume: float = 1.0
    volume_step: float = 0.05
    eat_volume: float = 0.35
    die_volume: float = 0.6

    # Preview
    min_preview_interval: float = 0.05

    # Persistence
    save_path: str = DEFAULT_SAVE_PATH

    def __post_init__(self) -> None:
        if self.grid_width < 8 or self.grid_height < 8:
            raise ValueError("grid_width and grid_height must each be at least 8.")
        if self.safe_spawn_radius < self.initial_snake_length - 1:
            raise ValueError("safe_spawn_radius must cover the initial snake.")
        if 2 * self.safe_spawn_radius + 3 > min(self.grid_width, self.grid_height):
            raise ValueError("safe_spawn_radius does not fit inside the grid.")
        if not 0 < self.min_tick_interval <= self.max_tick_interval:
            raise ValueError("tick interval bounds must satisfy 0 < min <= max.")
        if not 0.0 <= self.max_wall_density < 1.0:
            raise ValueError("max_wall_density must be in [0, 1).")

    def clamp_tick_interval(self, value: float) -> float:
        return min(max(value, self.min_tick_interval), self.max_tick_interval)

    def clamp_wall_density(self, value: float) -> float:
        return min(max(value, 0.0), self.max_wall_density)

    def to_dict(self) -> dict:
        """Serialize to a plain dict."""
        return asdict(self)

    def save(self, path: str | Path) -> None:
        """Write config to a JSON file."""
        p = Path(path)
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(json.dumps(self.to_dict(), indent=2))
        logger.info("Config saved to %s", p)

    @classmethod
    def load(cls, path: str | Path) -> GameConfig:
        """Load config from a JSON file."""
        raw = json.loads(Path(path).read_text())
        return cls(**raw)
