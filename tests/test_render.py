"""Tests for the plain-text presentation."""

import io

from matrix_snake.engine import SnakeSimulation
from matrix_snake.glyphs import glyph_for_cell
from matrix_snake.grid import Cell, GridMap
from matrix_snake.render import TextPresentation, describe, render_board
from matrix_snake.rng import RandomSource
from matrix_snake.screens import LobbyScreen, PlayingScreen, SettingsScreen


def _playing_state() -> dict:
    sim = SnakeSimulation(GridMap.generate(1, 0.0), rng=RandomSource(0))
    sim.food = Cell(5, 5)
    sim.food_glyph = "%"
    return PlayingScreen(sim).to_dict()


class TestRenderBoard:
    def test_dimensions(self):
        rows = render_board({"map": GridMap.generate(1, 0.0).to_dict()})
        assert len(rows) == 24
        assert all(len(row) == 32 for row in rows)

    def test_walls_use_cell_glyph(self):
        rows = render_board({"map": GridMap.generate(1, 0.0).to_dict()})
        assert rows[0][3] == glyph_for_cell(Cell(3, 0))
        assert rows[5][5] == " "

    def test_snake_and_food(self):
        state = _playing_state()
        rows = render_board(state)
        glyphs = state["snake"]["glyphs"]
        assert rows[12][16] == glyphs[0]
        assert rows[12][14] == glyphs[2]
        assert rows[5][5] == "%"

    def test_off_grid_cells_skipped(self):
        state = {
            "map": GridMap.empty(8, 8).to_dict(),
            "snake": {"body": [[0, 1], [-1, 1], [-2, 1]], "glyphs": ["a", "b", "c"]},
        }
        rows = render_board(state)
        assert rows[1][0] == "a"

    def test_preview_head(self):
        lobby = LobbyScreen(seed=3, wall_density=0.0, tick_interval=0.12)
        rows = render_board(lobby.to_dict())
        assert rows[12][16] == glyph_for_cell(Cell(16, 12))


class TestDescribe:
    def test_lobby(self):
        lobby = LobbyScreen(seed=3, wall_density=0.1, tick_interval=0.12, best_score=8)
        line = describe(lobby.to_dict())
        assert "Seed: 3" in line
        assert "Density: 10%" in line
        assert "Speed: 120ms" in line
        assert "Best: 8" in line

    def test_settings(self):
        assert describe(SettingsScreen(volume=0.45).to_dict()) == "SETTINGS  Volume:  45%"

    def test_playing(self):
        assert describe(_playing_state()) == "Score: 0"


class TestTextPresentation:
    def test_writes_status_and_board(self):
        out = io.StringIO()
        TextPresentation(out).present(_playing_state())
        lines = out.getvalue().splitlines()
        assert lines[0] == "Score: 0"
        assert len(lines) == 25

    def test_every_nth_frame(self):
        out = io.StringIO()
        presentation = TextPresentation(out, every=2)
        for _ in range(3):
            presentation.present(SettingsScreen(volume=1.0).to_dict())
        assert out.getvalue().count("SETTINGS") == 2
