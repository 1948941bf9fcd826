"""Plain-text presentation of controller state."""

from __future__ import annotations

import sys
from typing import Protocol, TextIO

import numpy as np

from matrix_snake.glyphs import glyph_for_cell
from matrix_snake.grid import Cell


class Presentation(Protocol):
    def present(self, state: dict) -> None: ...


def render_board(state: dict) -> list[str]:
    """Draw walls, snake, and food from a state dict as text rows.

    Walls use their stable per-cell glyph; snake and food cells use the
    glyphs carried in the state. Cells outside the grid are skipped.
    """
    grid = state["map"]
    width, height = grid["width"], grid["height"]
    board = np.full((height, width), " ", dtype="<U1")

    for x, y in grid["walls"]:
        board[y, x] = glyph_for_cell(Cell(x, y))

    if "food" in state:
        fx, fy = state["food"]
        board[fy, fx] = state.get("food_glyph", "*")

    snake = state.get("snake")
    if snake is not None:
        # Tail first so the head wins if cells ever coincide.
        for (x, y), glyph in reversed(list(zip(snake["body"], snake["glyphs"]))):
            if 0 <= x < width and 0 <= y < height:
                board[y, x] = glyph

    if "preview_head" in state:
        px, py = state["preview_head"]
        board[py, px] = state.get("preview_glyph", "@")

    return ["".join(row) for row in board]


def describe(state: dict) -> str:
    """One-line status for the active screen."""
    screen = state["screen"]
    if screen == "lobby":
        return (
            f"SNAKE  Seed: {state['seed']}  "
            f"Density: {state['wall_density'] * 100:.0f}%  "
            f"Speed: {state['tick_interval'] * 1000:.0f}ms  "
            f"Best: {state['best_score']}  [{state['selected']}]"
        )
    if screen == "settings":
        return f"SETTINGS  Volume: {round(state['volume'] * 100):>3}%"
    if screen == "playing":
        return f"Score: {state['score']}"
    cause = state.get("death_cause") or "unknown"
    best = " (new best)" if state.get("new_best") else ""
    return f"GAME OVER  Score: {state['score']}{best}  Best: {state['best_score']}  ({cause})"


class TextPresentation:
    """Writes each frame as a status line followed by the board."""

    def __init__(self, stream: TextIO | None = None, every: int = 1) -> None:
        if every < 1:
            raise ValueError("every must be at least 1.")
        self.stream = stream if stream is not None else sys.stdout
        self.every = every
        self.frames = 0

    def present(self, state: dict) -> None:
        self.frames += 1
        if (self.frames - 1) % self.every:
            return
        lines = [describe(state)]
        if "map" in state:
            lines.extend(render_board(state))
        self.stream.write("\n".join(lines) + "\n")
