"""Snake body and movement directions."""

from __future__ import annotations

import enum
from collections import deque
from collections.abc import Iterable, Iterator

from matrix_snake.grid import Cell

MIN_LENGTH = 3


class Direction(enum.Enum):
    """Cardinal movement directions with (dx, dy) values."""

    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    @property
    def opposite(self) -> Direction:
        return _OPPOSITES[self]

    @property
    def clockwise(self) -> Direction:
        """The direction after a quarter turn clockwise."""
        return _CLOCKWISE[self]

    def apply(self, cell: Cell) -> Cell:
        """Return the neighbour of *cell* one step in this direction."""
        dx, dy = self.value
        return Cell(cell.x + dx, cell.y + dy)


# Pairs that would cause an instant 180° reversal.
_OPPOSITES: dict[Direction, Direction] = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}

_CLOCKWISE: dict[Direction, Direction] = {
    Direction.UP: Direction.RIGHT,
    Direction.RIGHT: Direction.DOWN,
    Direction.DOWN: Direction.LEFT,
    Direction.LEFT: Direction.UP,
}


class Snake:
    """A snake represented as an ordered deque of cells.

    The head is ``body[0]``; the tail is ``body[-1]``. Every cell carries a
    decorative glyph in the parallel ``glyphs`` deque.
    """

    def __init__(self, cells: Iterable[Cell], glyphs: Iterable[str] | None = None) -> None:
        self.body: deque[Cell] = deque(Cell(*c) for c in cells)
        if len(self.body) < MIN_LENGTH:
            raise ValueError(f"Snake length must be at least {MIN_LENGTH}.")
        if len(set(self.body)) != len(self.body):
            raise ValueError("Snake cells must be distinct.")
        for a, b in zip(list(self.body)[:-1], list(self.body)[1:]):
            if abs(a.x - b.x) + abs(a.y - b.y) != 1:
                raise ValueError("Snake cells must be contiguous.")

        if glyphs is None:
            self.glyphs: deque[str] = deque("o" * len(self.body))
        else:
            self.glyphs = deque(glyphs)
            if len(self.glyphs) != len(self.body):
                raise ValueError("One glyph is required per snake cell.")

    @classmethod
    def spawn(
        cls,
        head: Cell,
        direction: Direction,
        length: int = MIN_LENGTH,
        glyphs: Iterable[str] | None = None,
    ) -> Snake:
        """Lay out a straight snake trailing behind *head*."""
        back = direction.opposite
        cells = [head]
        for _ in range(length - 1):
            cells.append(back.apply(cells[-1]))
        return cls(cells, glyphs)

    @property
    def head(self) -> Cell:
        """Return the head coordinate."""
        return self.body[0]

    @property
    def tail(self) -> Cell:
        return self.body[-1]

    def __len__(self) -> int:
        return len(self.body)

    def __iter__(self) -> Iterator[Cell]:
        return iter(self.body)

    def occupies(self, cell: Cell) -> bool:
        """Check whether the snake occupies a given cell."""
        return cell in self.body

    def blocks(self, cell: Cell, growing: bool) -> bool:
        """Whether moving the head onto *cell* would hit the body.

        Unless the snake grows this move, the tail vacates its cell, so
        stepping onto it is allowed.
        """
        if not growing and cell == self.tail:
            return False
        return self.occupies(cell)

    def advance(self, new_head: Cell, glyph: str, grow: bool = False) -> Cell | None:
        """Push *new_head* to the front.

        Returns the vacated tail cell, or ``None`` if the snake grew.
        """
        self.body.appendleft(new_head)
        self.glyphs.appendleft(glyph)
        if grow:
            return None
        self.glyphs.pop()
        return self.body.pop()

    def to_dict(self) -> dict:
        """Serialize snake state to a dictionary."""
        return {
            "body": [list(seg) for seg in self.body],
            "glyphs": list(self.glyphs),
        }
