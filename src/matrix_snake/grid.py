"""Grid coordinates and procedurally generated wall maps."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import NamedTuple

import numpy as np

from matrix_snake.config import GRID_HEIGHT, GRID_WIDTH
from matrix_snake.rng import RandomSource

logger = logging.getLogger(__name__)

SAFE_SPAWN_RADIUS = 2


class Cell(NamedTuple):
    """An integer ``(x, y)`` grid coordinate."""

    x: int
    y: int


def grid_center(width: int = GRID_WIDTH, height: int = GRID_HEIGHT) -> Cell:
    return Cell(width // 2, height // 2)


def in_bounds(cell: Cell, width: int = GRID_WIDTH, height: int = GRID_HEIGHT) -> bool:
    """Check whether a coordinate lies within the grid."""
    return 0 <= cell.x < width and 0 <= cell.y < height


@dataclass(frozen=True)
class GridMap:
    """An immutable set of wall cells generated from a seed.

    The outer ring is always wall and the block within the safe radius
    (Chebyshev, ``SAFE_SPAWN_RADIUS`` by default) of the centre is always
    free. Regenerating means building a new map; instances are never edited.
    """

    walls: frozenset[Cell]
    seed: int
    wall_density: float
    width: int = GRID_WIDTH
    height: int = GRID_HEIGHT

    @classmethod
    def generate(
        cls,
        seed: int,
        density: float,
        width: int = GRID_WIDTH,
        height: int = GRID_HEIGHT,
        safe_radius: int = SAFE_SPAWN_RADIUS,
    ) -> GridMap:
        """Build the map for ``(seed, density)``.

        Interior cells are visited row by row and each one draws exactly
        one uniform sample, so identical arguments always give identical
        walls. Callers clamp *density* to its configured range.
        """
        if width < 8 or height < 8:
            raise ValueError("GridMap dimensions must be at least 8×8.")
        if safe_radius < 0:
            raise ValueError("safe_radius must be non-negative.")
        rng = RandomSource(seed)
        walls: set[Cell] = set()

        for x in range(width):
            walls.add(Cell(x, 0))
            walls.add(Cell(x, height - 1))
        for y in range(height):
            walls.add(Cell(0, y))
            walls.add(Cell(width - 1, y))

        center = grid_center(width, height)
        for y in range(1, height - 1):
            for x in range(1, width - 1):
                if (
                    abs(x - center.x) <= safe_radius
                    and abs(y - center.y) <= safe_radius
                ):
                    continue
                if rng.uniform() < density:
                    walls.add(Cell(x, y))

        logger.debug(
            "Generated map seed=%d density=%.2f with %d walls.",
            seed, density, len(walls),
        )
        return cls(
            walls=frozenset(walls),
            seed=seed,
            wall_density=density,
            width=width,
            height=height,
        )

    @classmethod
    def empty(cls, width: int = GRID_WIDTH, height: int = GRID_HEIGHT) -> GridMap:
        """A map with no walls at all, not even the border."""
        return cls(walls=frozenset(), seed=0, wall_density=0.0, width=width, height=height)

    def is_wall(self, cell: Cell) -> bool:
        return cell in self.walls

    def in_bounds(self, cell: Cell) -> bool:
        return in_bounds(cell, self.width, self.height)

    @property
    def center(self) -> Cell:
        return grid_center(self.width, self.height)

    def to_array(self) -> np.ndarray:
        """Boolean wall mask indexed ``[y, x]``."""
        mask = np.zeros((self.height, self.width), dtype=bool)
        for x, y in self.walls:
            mask[y, x] = True
        return mask

    def to_dict(self) -> dict:
        """Serialize map state to a dictionary."""
        return {
            "width": self.width,
            "height": self.height,
            "seed": self.seed,
            "wall_density": self.wall_density,
            "walls": sorted([list(c) for c in self.walls]),
        }
