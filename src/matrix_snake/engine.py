"""Fixed-timestep snake simulation composing map, snake, and food logic."""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass

from matrix_snake.audio import ATE, DIED, Cue
from matrix_snake.config import DEFAULT_TICK_INTERVAL, GameConfig
from matrix_snake.food import spawn_food
from matrix_snake.glyphs import random_glyph
from matrix_snake.grid import Cell, GridMap
from matrix_snake.rng import RandomSource
from matrix_snake.snake import Direction, Snake

logger = logging.getLogger(__name__)


class DeathCause(enum.Enum):
    """Why the snake died, in the order the checks run."""

    OUT_OF_BOUNDS = "out_of_bounds"
    WALL = "wall"
    SELF = "self_collision"


@dataclass(frozen=True)
class GameSnapshot:
    """Immutable terminal state of a finished run."""

    snake: tuple[Cell, ...]
    glyphs: tuple[str, ...]
    food: Cell
    food_glyph: str
    score: int
    grid_map: GridMap
    tick_interval: float
    death_cause: DeathCause | None
    ticks: int

    def to_dict(self) -> dict:
        return {
            "tick": self.ticks,
            "score": self.score,
            "alive": False,
            "death_cause": self.death_cause.value if self.death_cause else None,
            "snake": {
                "body": [list(c) for c in self.snake],
                "glyphs": list(self.glyphs),
            },
            "food": list(self.food),
            "food_glyph": self.food_glyph,
            "tick_interval": self.tick_interval,
        }


class SnakeSimulation:
    """Single-snake simulation advanced by elapsed real time.

    Each call to :meth:`step` adds ``dt`` to an accumulator and moves the
    snake at most once, when the accumulator reaches ``tick_interval``.
    The remainder carries over to the next tick.
    """

    def __init__(
        self,
        grid_map: GridMap,
        tick_interval: float = DEFAULT_TICK_INTERVAL,
        rng: RandomSource | None = None,
        volume: float = 1.0,
        snake: Snake | None = None,
        direction: Direction = Direction.RIGHT,
        config: GameConfig | None = None,
    ) -> None:
        if tick_interval <= 0:
            raise ValueError("tick_interval must be positive.")
        self.config = config if config is not None else GameConfig()
        self.map = grid_map
        self.rng = rng if rng is not None else RandomSource()
        self.tick_interval = tick_interval
        self.volume = min(max(volume, 0.0), 1.0)

        if snake is None:
            snake = Snake.spawn(
                grid_map.center,
                direction,
                self.config.initial_snake_length,
                glyphs=[
                    random_glyph(self.rng)
                    for _ in range(self.config.initial_snake_length)
                ],
            )
        self.snake = snake
        self.direction = direction
        self.pending_direction = direction

        self.food = spawn_food(self.snake.body, self.map, self.rng)
        self.food_glyph = random_glyph(self.rng)

        self.score = 0
        self.alive = True
        self.death_cause: DeathCause | None = None
        self.elapsed_since_last_tick = 0.0
        self.tick = 0
        self._grow = False

    def steer(self, direction: Direction) -> bool:
        """Buffer *direction* for the next tick, last write wins.

        A reversal of the current direction is rejected. Returns whether
        the input was accepted.
        """
        if direction == self.direction.opposite:
            return False
        self.pending_direction = direction
        return True

    def step(self, dt: float) -> list[Cue]:
        """Accumulate *dt* and advance one tick if it is due.

        Returns the cues fired during this call.
        """
        if not self.alive:
            return []

        self.elapsed_since_last_tick += dt
        if self.elapsed_since_last_tick < self.tick_interval:
            return []
        self.elapsed_since_last_tick -= self.tick_interval
        self.tick += 1

        self.direction = self.pending_direction
        tentative = self.direction.apply(self.snake.head)

        # --- collisions, first match wins ---
        growing = tentative == self.food
        if not self.map.in_bounds(tentative):
            return [self._kill(DeathCause.OUT_OF_BOUNDS)]
        if self.map.is_wall(tentative):
            return [self._kill(DeathCause.WALL)]
        if self.snake.blocks(tentative, growing):
            return [self._kill(DeathCause.SELF)]

        # --- move ---
        cues: list[Cue] = []
        if growing:
            self.score += 1
            self._grow = True
            cues.append(Cue(ATE, self.config.eat_volume * self.volume))

        self.snake.advance(tentative, random_glyph(self.rng), grow=self._grow)
        self._grow = False

        if growing:
            self.food = spawn_food(self.snake.body, self.map, self.rng)
            self.food_glyph = random_glyph(self.rng)
            logger.debug(
                "Food eaten at tick %d; score %d, next food at %s.",
                self.tick, self.score, self.food,
            )
        return cues

    def freeze(self) -> GameSnapshot:
        """Capture the current state as an immutable snapshot."""
        return GameSnapshot(
            snake=tuple(self.snake.body),
            glyphs=tuple(self.snake.glyphs),
            food=self.food,
            food_glyph=self.food_glyph,
            score=self.score,
            grid_map=self.map,
            tick_interval=self.tick_interval,
            death_cause=self.death_cause,
            ticks=self.tick,
        )

    def get_state(self) -> dict:
        """Return the serializable per-frame state."""
        return {
            "tick": self.tick,
            "score": self.score,
            "alive": self.alive,
            "death_cause": self.death_cause.value if self.death_cause else None,
            "direction": self.direction.name,
            "snake": self.snake.to_dict(),
            "food": list(self.food),
            "food_glyph": self.food_glyph,
            "tick_interval": self.tick_interval,
        }

    def _kill(self, cause: DeathCause) -> Cue:
        """Mark the snake as dead and return the death cue."""
        self.alive = False
        self.death_cause = cause
        logger.info(
            "Snake died (%s) at tick %d with score %d.",
            cause.value, self.tick, self.score,
        )
        return Cue(DIED, self.config.die_volume * self.volume)
