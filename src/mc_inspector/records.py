"""Projection of decoded tag trees onto world and player records."""

from __future__ import annotations

from typing import Callable, Sequence, TypeVar

from mc_inspector.errors import FieldMissingError, InvalidShapeError
from mc_inspector.models import LevelInfo, PlayerInfo
from mc_inspector.nbt import Tag, as_byte, as_double_triplet, as_float, as_int, as_long, get

T = TypeVar("T")

DIFFICULTIES = {0: "Peaceful", 1: "Easy", 2: "Normal", 3: "Hard"}
MAX_HEALTH = 20.0
MAX_FOOD_LEVEL = 20


def _field_path(prefix: str, path: Sequence[str]) -> str:
    return ".".join([prefix, *path]) if prefix else ".".join(path)


def _optional(source: Tag, path: Sequence[str], accessor: Callable[[Tag, str], T], prefix: str = "") -> T | None:
    tag = get(source, path)
    if tag is None:
        return None
    return accessor(tag, _field_path(prefix, path))


def _required(source: Tag, path: Sequence[str], accessor: Callable[[Tag, str], T], prefix: str = "") -> T:
    tag = get(source, path)
    if tag is None:
        raise FieldMissingError(_field_path(prefix, path))
    return accessor(tag, _field_path(prefix, path))


def level_from_tag(root: Tag) -> LevelInfo:
    """Extract :class:`LevelInfo` from a decoded ``level.dat`` root.

    Game-written files keep the level fields in the root's ``Data`` compound;
    a root without one is read directly.
    """
    data = get(root, ("Data",))
    if data is not None and data.is_compound:
        source, prefix = data, "Data"
    else:
        source, prefix = root, ""

    day_time = _required(source, ("DayTime",), as_long, prefix)
    difficulty = _required(source, ("Difficulty",), as_byte, prefix)
    last_played = _required(source, ("LastPlayed",), as_long, prefix)
    time = _required(source, ("Time",), as_long, prefix)
    data_version = _optional(source, ("DataVersion",), as_int, prefix)

    random_seed = _optional(source, ("RandomSeed",), as_long, prefix)
    if random_seed is None:
        # 1.16+ moved the seed under the world generation settings
        random_seed = _optional(source, ("WorldGenSettings", "seed"), as_long, prefix)

    if difficulty not in DIFFICULTIES:
        raise InvalidShapeError(f"difficulty {difficulty} is not one of 0-3", path=_field_path(prefix, ("Difficulty",)))

    return LevelInfo(
        day_time=day_time,
        difficulty=difficulty,
        data_version=data_version,
        last_played=last_played,
        random_seed=random_seed,
        time=time,
    )


def player_from_tag(root: Tag, uuid: str) -> PlayerInfo:
    """Extract :class:`PlayerInfo`; ``uuid`` comes from the record's file name."""
    health = _required(root, ("Health",), as_float)
    food_level = _required(root, ("foodLevel",), as_int)
    position = _required(root, ("Pos",), as_double_triplet)

    if not 0.0 <= health <= MAX_HEALTH:
        raise InvalidShapeError(f"health {health} is outside 0-{MAX_HEALTH:g}", path="Health")
    if not 0 <= food_level <= MAX_FOOD_LEVEL:
        raise InvalidShapeError(f"food level {food_level} is outside 0-{MAX_FOOD_LEVEL}", path="foodLevel")

    return PlayerInfo(uuid=uuid, health=health, food_level=food_level, position=position)
