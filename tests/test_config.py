"""Tests for the game configuration dataclass."""

import json

import pytest

from matrix_snake.config import GameConfig


class TestGameConfig:
    def test_defaults(self):
        cfg = GameConfig()
        assert (cfg.grid_width, cfg.grid_height) == (32, 24)
        assert cfg.default_tick_interval == 0.12
        assert (cfg.min_tick_interval, cfg.max_tick_interval) == (0.05, 0.35)
        assert cfg.default_wall_density == 0.10
        assert cfg.max_wall_density == 0.35
        assert cfg.save_path == "snake_save.json"

    def test_clamp_tick_interval(self):
        cfg = GameConfig()
        assert cfg.clamp_tick_interval(0.01) == 0.05
        assert cfg.clamp_tick_interval(1.0) == 0.35
        assert cfg.clamp_tick_interval(0.2) == 0.2

    def test_clamp_wall_density(self):
        cfg = GameConfig()
        assert cfg.clamp_wall_density(-0.1) == 0.0
        assert cfg.clamp_wall_density(0.9) == 0.35

    def test_invalid_grid(self):
        with pytest.raises(ValueError, match="at least 8"):
            GameConfig(grid_width=4)

    def test_safe_radius_must_cover_snake(self):
        with pytest.raises(ValueError, match="initial snake"):
            GameConfig(safe_spawn_radius=1)

    def test_safe_radius_must_fit_grid(self):
        with pytest.raises(ValueError, match="fit inside"):
            GameConfig(grid_width=10, grid_height=10, safe_spawn_radius=4)

    def test_invalid_interval_bounds(self):
        with pytest.raises(ValueError, match="tick interval"):
            GameConfig(min_tick_interval=0.5, max_tick_interval=0.1)

    def test_save_and_load(self, tmp_path):
        cfg = GameConfig(grid_width=20, max_wall_density=0.2)
        path = tmp_path / "nested" / "config.json"
        cfg.save(path)
        loaded = GameConfig.load(path)
        assert loaded == cfg

    def test_to_dict_serializable(self):
        assert isinstance(json.dumps(GameConfig().to_dict()), str)
