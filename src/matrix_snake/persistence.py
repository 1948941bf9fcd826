"""Best-score and preference storage."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Protocol

from pydantic import AliasChoices, BaseModel, Field, ValidationError

from matrix_snake.config import DEFAULT_SAVE_PATH

logger = logging.getLogger(__name__)


class SaveRecord(BaseModel):
    """Persisted preferences and best score.

    Zero means "not set"; consumers substitute their own defaults.
    """

    best_score: int = Field(default=0, ge=0)
    last_seed: int = Field(default=0, ge=0, lt=1 << 64)
    last_wall_density: float = Field(default=0.0, ge=0.0, le=1.0)
    last_tick_interval: float = Field(
        default=0.0,
        ge=0.0,
        validation_alias=AliasChoices("last_tick_interval", "last_move_interval"),
    )
    sound_volume: float = Field(default=0.0, ge=0.0, le=1.0)


class PersistenceGateway(Protocol):
    def load(self) -> SaveRecord: ...

    def save(self, record: SaveRecord) -> None: ...


class JsonSaveStore:
    """Stores a :class:`SaveRecord` as pretty-printed JSON.

    Loading never fails: a missing, unreadable or malformed file yields a
    default record. Saving is best effort.
    """

    def __init__(self, path: str | Path = DEFAULT_SAVE_PATH) -> None:
        self.path = Path(path)

    def load(self) -> SaveRecord:
        if not self.path.exists():
            logger.debug("No save file at %s; using defaults.", self.path)
            return SaveRecord()
        try:
            return SaveRecord.model_validate_json(self.path.read_text())
        except (OSError, UnicodeDecodeError, ValidationError) as exc:
            logger.warning("Ignoring unreadable save file %s: %s", self.path, exc)
            return SaveRecord()

    def save(self, record: SaveRecord) -> None:
        try:
            self.path.write_text(record.model_dump_json(indent=2))
        except OSError as exc:
            logger.warning("Could not write save file %s: %s", self.path, exc)


class MemorySaveStore:
    """In-process store, for headless runs."""

    def __init__(self, record: SaveRecord | None = None) -> None:
        self.record = record if record is not None else SaveRecord()
        self.saves = 0

    def load(self) -> SaveRecord:
        return self.record.model_copy()

    def save(self, record: SaveRecord) -> None:
        self.record = record.model_copy()
        self.saves += 1
