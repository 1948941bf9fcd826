"""Food placement logic."""

from __future__ import annotations

import logging
from collections.abc import Collection
from typing import TYPE_CHECKING

import numpy as np

from matrix_snake.grid import Cell

if TYPE_CHECKING:
    from matrix_snake.grid import GridMap
    from matrix_snake.rng import RandomSource

logger = logging.getLogger(__name__)

# Rejection-sampling budget, in multiples of the grid area.
ATTEMPTS_PER_CELL = 10


class NoFreeCellError(RuntimeError):
    """Raised when every interior cell is a wall or snake."""


def free_cells(occupied: Collection[Cell], grid_map: GridMap) -> list[Cell]:
    """Return every interior cell that is neither a wall nor occupied."""
    blocked = grid_map.to_array()
    blocked[[0, -1], :] = True
    blocked[:, [0, -1]] = True
    for cell in occupied:
        if grid_map.in_bounds(cell):
            blocked[cell.y, cell.x] = True
    # Row-major order: y outer, x inner.
    ys, xs = np.nonzero(~blocked)
    return [Cell(int(x), int(y)) for y, x in zip(ys, xs)]


def spawn_food(
    occupied: Collection[Cell],
    grid_map: GridMap,
    rng: RandomSource,
) -> Cell:
    """Pick a free interior cell for the next food item.

    Draws uniform interior coordinates until one is free. A crowded board
    falls back to an exhaustive scan once the attempt budget is spent.
    """
    taken = set(occupied)
    budget = ATTEMPTS_PER_CELL * grid_map.width * grid_map.height
    for _ in range(budget):
        cell = Cell(
            rng.randrange(1, grid_map.width - 1),
            rng.randrange(1, grid_map.height - 1),
        )
        if cell not in taken and not grid_map.is_wall(cell):
            return cell

    logger.warning(
        "Food sampling exhausted %d attempts; scanning free cells.", budget,
    )
    candidates = free_cells(taken, grid_map)
    if not candidates:
        raise NoFreeCellError("No free cell available for food.")
    return rng.choice(candidates)
