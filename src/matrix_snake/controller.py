"""Screen state machine and the real-time frame loop."""

from __future__ import annotations

import enum
import logging
import time
from collections.abc import Callable, Iterable
from typing import Protocol

from matrix_snake.audio import CueSink, NullCueSink
from matrix_snake.config import GameConfig
from matrix_snake.engine import SnakeSimulation
from matrix_snake.grid import GridMap
from matrix_snake.persistence import JsonSaveStore, PersistenceGateway
from matrix_snake.render import Presentation
from matrix_snake.rng import SEED_MASK, RandomSource
from matrix_snake.screens import (
    GameOverScreen,
    LobbyItem,
    LobbyScreen,
    PlayingScreen,
    Screen,
    SettingsScreen,
)
from matrix_snake.snake import Direction

logger = logging.getLogger(__name__)


class InputAction(enum.Enum):
    """Logical actions the input source reports as just pressed."""

    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    CONFIRM = "confirm"
    BACK = "back"
    ADJUST_UP = "adjust_up"
    ADJUST_DOWN = "adjust_down"
    RESEED = "reseed"
    SETTINGS = "settings"
    MUTE = "mute"
    RESTART = "restart"
    QUIT = "quit"


# Checked in this order; the first pressed direction wins the frame.
_STEERING: list[tuple[InputAction, Direction]] = [
    (InputAction.UP, Direction.UP),
    (InputAction.DOWN, Direction.DOWN),
    (InputAction.LEFT, Direction.LEFT),
    (InputAction.RIGHT, Direction.RIGHT),
]


class InputSource(Protocol):
    def poll(self) -> set[InputAction]: ...


class ScriptedInput:
    """Replays a fixed sequence of per-frame action sets, then nothing."""

    def __init__(self, frames: Iterable[Iterable[InputAction]]) -> None:
        self._frames = [set(f) for f in frames]
        self._index = 0

    def poll(self) -> set[InputAction]:
        if self._index >= len(self._frames):
            return set()
        pressed = self._frames[self._index]
        self._index += 1
        return pressed


def _clock_seed() -> int:
    return time.time_ns() & SEED_MASK


class ScreenController:
    """Owns the active screen and runs one frame at a time.

    Screen handlers return the next screen, or ``None`` to stay; the
    controller swaps it in at the end of the frame.
    """

    def __init__(
        self,
        config: GameConfig | None = None,
        store: PersistenceGateway | None = None,
        cue_sink: CueSink | None = None,
        rng: RandomSource | None = None,
        seed_factory: Callable[[], int] = _clock_seed,
    ) -> None:
        self.config = config if config is not None else GameConfig()
        self.store = store if store is not None else JsonSaveStore(self.config.save_path)
        self.cue_sink = cue_sink if cue_sink is not None else NullCueSink()
        self.rng = rng if rng is not None else RandomSource()
        self._seed_factory = seed_factory
        self.quit_requested = False
        self.frame = 0

        record = self.store.load()
        self.sound_volume = record.sound_volume or self.config.default_volume
        self.screen: Screen = self._new_lobby()

        self._handlers: dict[type, Callable[[Screen, float, set[InputAction]], Screen | None]] = {
            LobbyScreen: self._update_lobby,
            SettingsScreen: self._update_settings,
            PlayingScreen: self._update_playing,
            GameOverScreen: self._update_game_over,
        }

    # --- frame driving ---

    def update(self, dt: float, pressed: set[InputAction]) -> Screen:
        """Advance the active screen by one frame.

        Returns the screen that is active after the frame.
        """
        self.frame += 1
        if InputAction.QUIT in pressed:
            logger.info("Quit requested.")
            self.quit_requested = True
            return self.screen

        next_screen = self._handlers[type(self.screen)](self.screen, dt, pressed)
        if next_screen is not None:
            logger.info(
                "Screen %s -> %s.", self.screen.kind.value, next_screen.kind.value,
            )
            self.screen = next_screen
        return self.screen

    def run(
        self,
        input_source: InputSource,
        presentation: Presentation | None = None,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
        frame_interval: float = 1 / 60,
        max_frames: int | None = None,
    ) -> int:
        """Drive frames until quit is requested or *max_frames* is reached.

        Returns the number of frames run.
        """
        frames = 0
        last = clock()
        while not self.quit_requested:
            if max_frames is not None and frames >= max_frames:
                break
            now = clock()
            dt = max(now - last, 0.0)
            last = now

            self.update(dt, input_source.poll())
            if presentation is not None:
                presentation.present(self.get_state())
            frames += 1

            if frame_interval > 0:
                sleep(frame_interval)
        return frames

    def get_state(self) -> dict:
        """Serializable view of the active screen."""
        state = self.screen.to_dict()
        state["quit_requested"] = self.quit_requested
        state["frame"] = self.frame
        return state

    # --- screen construction ---

    def _new_lobby(self) -> LobbyScreen:
        record = self.store.load()
        cfg = self.config
        return LobbyScreen(
            seed=record.last_seed or self._seed_factory(),
            wall_density=cfg.clamp_wall_density(
                record.last_wall_density or cfg.default_wall_density,
            ),
            tick_interval=cfg.clamp_tick_interval(
                record.last_tick_interval or cfg.default_tick_interval,
            ),
            best_score=record.best_score,
            width=cfg.grid_width,
            height=cfg.grid_height,
            safe_radius=cfg.safe_spawn_radius,
        )

    def _new_game(self, grid_map: GridMap, tick_interval: float) -> PlayingScreen:
        simulation = SnakeSimulation(
            grid_map,
            tick_interval=tick_interval,
            rng=self.rng,
            volume=self.sound_volume,
            config=self.config,
        )
        return PlayingScreen(simulation)

    def _start_game(self, lobby: LobbyScreen) -> PlayingScreen:
        grid_map = GridMap.generate(
            lobby.seed, lobby.wall_density,
            self.config.grid_width, self.config.grid_height,
            self.config.safe_spawn_radius,
        )
        record = self.store.load()
        self.store.save(record.model_copy(update={
            "last_seed": lobby.seed,
            "last_wall_density": lobby.wall_density,
            "last_tick_interval": lobby.tick_interval,
        }))
        logger.info(
            "Starting game: seed=%d density=%.2f interval=%.2fs.",
            lobby.seed, lobby.wall_density, lobby.tick_interval,
        )
        return self._new_game(grid_map, lobby.tick_interval)

    def _game_over(self, playing: PlayingScreen) -> GameOverScreen:
        snapshot = playing.simulation.freeze()
        record = self.store.load()
        new_best = snapshot.score > record.best_score
        if new_best:
            self.store.save(record.model_copy(update={"best_score": snapshot.score}))
            logger.info("New best score: %d.", snapshot.score)
        return GameOverScreen(
            snapshot=snapshot,
            best_score=max(snapshot.score, record.best_score),
            new_best=new_best,
        )

    # --- per-screen handlers ---

    def _update_lobby(
        self, lobby: LobbyScreen, dt: float, pressed: set[InputAction],
    ) -> Screen | None:
        cfg = self.config
        lobby.preview.advance(dt, max(lobby.tick_interval, cfg.min_preview_interval))

        if InputAction.UP in pressed:
            lobby.move_selection(-1)
        if InputAction.DOWN in pressed:
            lobby.move_selection(1)

        if InputAction.LEFT in pressed:
            if lobby.selected == LobbyItem.DENSITY:
                lobby.adjust_density(-cfg.wall_density_step, cfg)
            elif lobby.selected == LobbyItem.SPEED:
                lobby.adjust_tick_interval(cfg.tick_interval_step, cfg)
        if InputAction.RIGHT in pressed:
            if lobby.selected == LobbyItem.DENSITY:
                lobby.adjust_density(cfg.wall_density_step, cfg)
            elif lobby.selected == LobbyItem.SPEED:
                lobby.adjust_tick_interval(-cfg.tick_interval_step, cfg)

        if InputAction.ADJUST_DOWN in pressed:
            lobby.adjust_density(-cfg.wall_density_step, cfg)
        if InputAction.ADJUST_UP in pressed:
            lobby.adjust_density(cfg.wall_density_step, cfg)
        if InputAction.RESEED in pressed:
            lobby.reseed()

        if InputAction.SETTINGS in pressed:
            return SettingsScreen(volume=self.sound_volume)

        if InputAction.CONFIRM in pressed:
            if lobby.selected == LobbyItem.START:
                return self._start_game(lobby)
            if lobby.selected == LobbyItem.RESEED:
                lobby.reseed()
            elif lobby.selected == LobbyItem.QUIT:
                logger.info("Quit selected from lobby.")
                self.quit_requested = True
        return None

    def _update_settings(
        self, settings: SettingsScreen, dt: float, pressed: set[InputAction],
    ) -> Screen | None:
        step = self.config.volume_step
        if pressed & {InputAction.LEFT, InputAction.ADJUST_DOWN}:
            settings.adjust(-step)
        if pressed & {InputAction.RIGHT, InputAction.ADJUST_UP}:
            settings.adjust(step)
        if InputAction.MUTE in pressed:
            settings.toggle_mute()

        if pressed & {InputAction.CONFIRM, InputAction.BACK}:
            self.sound_volume = settings.volume
            record = self.store.load()
            self.store.save(record.model_copy(update={"sound_volume": settings.volume}))
            return self._new_lobby()
        return None

    def _update_playing(
        self, playing: PlayingScreen, dt: float, pressed: set[InputAction],
    ) -> Screen | None:
        simulation = playing.simulation
        for action, direction in _STEERING:
            if action in pressed:
                simulation.steer(direction)
                break

        for cue in simulation.step(dt):
            self.cue_sink.play(cue)

        if not simulation.alive:
            return self._game_over(playing)
        return None

    def _update_game_over(
        self, game_over: GameOverScreen, dt: float, pressed: set[InputAction],
    ) -> Screen | None:
        if InputAction.RESTART in pressed:
            snapshot = game_over.snapshot
            return self._new_game(snapshot.grid_map, snapshot.tick_interval)
        if pressed & {InputAction.CONFIRM, InputAction.BACK}:
            return self._new_lobby()
        return None
