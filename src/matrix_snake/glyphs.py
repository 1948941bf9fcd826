"""Decorative glyphs drawn in grid cells."""

from __future__ import annotations

from matrix_snake.grid import Cell
from matrix_snake.rng import RandomSource

GLYPHS = "01<>[]{}()/\\|-=+*;:.,^~ABCDEFGHIJKLMNOPQRSTUVWXYZ"

# Spatial hash primes.
_HASH_X = 73_856_093
_HASH_Y = 19_349_663


def glyph_for_cell(cell: Cell) -> str:
    """Stable glyph for a cell, so walls do not flicker between frames."""
    h = abs((cell.x * _HASH_X) ^ (cell.y * _HASH_Y))
    return GLYPHS[h % len(GLYPHS)]


def random_glyph(rng: RandomSource) -> str:
    return rng.choice(GLYPHS)
