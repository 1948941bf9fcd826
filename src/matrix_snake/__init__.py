"""Matrix Snake: a grid snake game engine."""

from matrix_snake.config import GameConfig
from matrix_snake.controller import InputAction, ScreenController, ScriptedInput
from matrix_snake.engine import DeathCause, GameSnapshot, SnakeSimulation
from matrix_snake.grid import Cell, GridMap
from matrix_snake.persistence import JsonSaveStore, SaveRecord
from matrix_snake.rng import RandomSource
from matrix_snake.screens import (
    GameOverScreen,
    LobbyScreen,
    PlayingScreen,
    ScreenKind,
    SettingsScreen,
)
from matrix_snake.snake import Direction, Snake

__all__ = [
    "Cell",
    "DeathCause",
    "Direction",
    "GameConfig",
    "GameOverScreen",
    "GameSnapshot",
    "GridMap",
    "InputAction",
    "JsonSaveStore",
    "LobbyScreen",
    "PlayingScreen",
    "RandomSource",
    "SaveRecord",
    "ScreenController",
    "ScreenKind",
    "ScriptedInput",
    "SettingsScreen",
    "Snake",
    "SnakeSimulation",
]
