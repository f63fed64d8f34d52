"""Plain records produced by a scan: decoded fields, failures and totals."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path


@dataclass(frozen=True, slots=True)
class LevelInfo:
    """Fields read from a world's ``level.dat``."""

    day_time: int
    difficulty: int
    data_version: int | None
    last_played: int
    random_seed: int | None
    time: int


@dataclass(frozen=True, slots=True)
class PlayerInfo:
    """Fields read from ``playerdata/<uuid>.dat``."""

    uuid: str
    health: float
    food_level: int
    position: tuple[float, float, float]


@dataclass(slots=True)
class RecordFailure:
    """Why one record file could not be read; ``kind`` is the error kind string."""

    path: Path
    kind: str
    message: str


@dataclass(slots=True)
class WorldReport:
    """Everything a scan learned about one world folder.

    A world is valid when its ``level.dat`` decoded; broken player files are
    listed in ``player_errors`` without invalidating it.
    """

    path: Path
    level: LevelInfo | None = None
    level_error: RecordFailure | None = None
    players: list[PlayerInfo] = field(default_factory=list)
    player_errors: list[RecordFailure] = field(default_factory=list)
    modified: datetime | None = None
    size_bytes: int | None = None

    @property
    def is_valid(self) -> bool:
        return self.level is not None


@dataclass(slots=True)
class ScanSummary:
    """Running totals over every world of a scan, plus the DataVersion range seen."""

    worlds_found: int = 0
    worlds_invalid: int = 0
    min_version: int | None = None
    max_version: int | None = None

    def add(self, report: WorldReport) -> None:
        self.worlds_found += 1
        if report.level is None:
            self.worlds_invalid += 1
            return
        version = report.level.data_version
        if version is None:
            return
        if self.min_version is None or version < self.min_version:
            self.min_version = version
        if self.max_version is None or version > self.max_version:
            self.max_version = version
