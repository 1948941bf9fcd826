"""Tests for the Snake module."""

import pytest

from matrix_snake.grid import Cell
from matrix_snake.snake import Direction, Snake


class TestDirection:
    def test_opposites(self):
        assert Direction.UP.opposite == Direction.DOWN
        assert Direction.LEFT.opposite == Direction.RIGHT

    def test_clockwise_cycle(self):
        d = Direction.UP
        seen = []
        for _ in range(4):
            seen.append(d)
            d = d.clockwise
        assert seen == [Direction.UP, Direction.RIGHT, Direction.DOWN, Direction.LEFT]
        assert d == Direction.UP

    def test_apply(self):
        assert Direction.RIGHT.apply(Cell(5, 5)) == Cell(6, 5)
        assert Direction.UP.apply(Cell(5, 5)) == Cell(5, 4)
        assert Direction.DOWN.apply(Cell(5, 5)) == Cell(5, 6)
        assert Direction.LEFT.apply(Cell(5, 5)) == Cell(4, 5)


class TestSnakeInit:
    def test_spawn_right(self):
        snake = Snake.spawn(Cell(16, 12), Direction.RIGHT)
        assert list(snake.body) == [(16, 12), (15, 12), (14, 12)]
        assert snake.head == Cell(16, 12)
        assert snake.tail == Cell(14, 12)
        assert len(snake) == 3

    def test_spawn_up(self):
        snake = Snake.spawn(Cell(5, 5), Direction.UP)
        assert list(snake.body) == [(5, 5), (5, 6), (5, 7)]

    def test_default_glyphs(self):
        snake = Snake([(3, 3), (2, 3), (1, 3)])
        assert len(snake.glyphs) == 3

    def test_minimum_length(self):
        with pytest.raises(ValueError, match="at least 3"):
            Snake([(3, 3), (2, 3)])

    def test_cells_must_be_distinct(self):
        with pytest.raises(ValueError, match="distinct"):
            Snake([(1, 1), (2, 1), (1, 1)])

    def test_cells_must_be_contiguous(self):
        with pytest.raises(ValueError, match="contiguous"):
            Snake([(1, 1), (2, 1), (4, 1)])

    def test_glyph_count_must_match(self):
        with pytest.raises(ValueError, match="One glyph"):
            Snake([(3, 3), (2, 3), (1, 3)], glyphs="ab")


class TestSnakeMovement:
    def test_advance_without_growth(self):
        snake = Snake.spawn(Cell(5, 5), Direction.RIGHT, glyphs="abc")
        vacated = snake.advance(Cell(6, 5), "z")
        assert snake.head == Cell(6, 5)
        assert len(snake) == 3
        assert vacated == Cell(3, 5)
        assert list(snake.glyphs) == ["z", "a", "b"]

    def test_advance_with_growth(self):
        snake = Snake.spawn(Cell(5, 5), Direction.RIGHT, glyphs="abc")
        vacated = snake.advance(Cell(6, 5), "z", grow=True)
        assert vacated is None
        assert len(snake) == 4
        assert list(snake.glyphs) == ["z", "a", "b", "c"]


class TestSnakeCollision:
    def test_occupies(self):
        snake = Snake.spawn(Cell(5, 5), Direction.RIGHT)
        assert snake.occupies(Cell(4, 5))
        assert not snake.occupies(Cell(0, 0))

    def test_body_blocks(self):
        snake = Snake([(5, 5), (6, 5), (6, 6), (5, 6), (4, 6)])
        assert snake.blocks(Cell(5, 6), growing=False)
        assert snake.blocks(Cell(5, 6), growing=True)

    def test_tail_free_when_not_growing(self):
        snake = Snake([(5, 5), (6, 5), (6, 6), (5, 6)])
        assert not snake.blocks(Cell(5, 6), growing=False)

    def test_tail_blocks_when_growing(self):
        snake = Snake([(5, 5), (6, 5), (6, 6), (5, 6)])
        assert snake.blocks(Cell(5, 6), growing=True)

    def test_empty_cell_never_blocks(self):
        snake = Snake.spawn(Cell(5, 5), Direction.RIGHT)
        assert not snake.blocks(Cell(9, 9), growing=True)


class TestSnakeSerialization:
    def test_to_dict(self):
        snake = Snake.spawn(Cell(5, 5), Direction.RIGHT, glyphs="xyz")
        d = snake.to_dict()
        assert d["body"] == [[5, 5], [4, 5], [3, 5]]
        assert d["glyphs"] == ["x", "y", "z"]
