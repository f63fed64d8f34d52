from __future__ import annotations

import gzip
from pathlib import Path

import pytest

from mc_inspector.nbt import Tag, TagType, compound, encode, list_of


def _build(entries: dict[str, Tag], drop: tuple[str, ...], overrides: dict[str, Tag]) -> Tag:
    entries.update(overrides)
    for name in drop:
        entries.pop(name)
    return compound(entries)


def level_tree(*, drop: tuple[str, ...] = (), **overrides: Tag) -> Tag:
    data = {
        "DataVersion": Tag(TagType.INT, 3953),
        "DayTime": Tag(TagType.LONG, 30_000),
        "Difficulty": Tag(TagType.BYTE, 2),
        "LastPlayed": Tag(TagType.LONG, 1_700_000_000_000),
        "LevelName": Tag(TagType.STRING, "New World"),
        "RandomSeed": Tag(TagType.LONG, -4_530_634_556_500_121_041),
        "Time": Tag(TagType.LONG, 72_000),
    }
    return compound({"Data": _build(data, drop, overrides)})


def player_tree(
    health: float = 20.0,
    food_level: int = 18,
    pos=(10.5, 64.0, -3.25),
    *,
    drop: tuple[str, ...] = (),
    **overrides: Tag,
) -> Tag:
    entries = {
        "Health": Tag(TagType.FLOAT, health),
        "foodLevel": Tag(TagType.INT, food_level),
        "Pos": list_of(TagType.DOUBLE, [Tag(TagType.DOUBLE, value) for value in pos]),
        "Inventory": list_of(TagType.COMPOUND),
    }
    return _build(entries, drop, overrides)


def write_record(path: Path, root: Tag) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(gzip.compress(encode(root)))
    return path


@pytest.fixture
def world_dir(tmp_path: Path) -> Path:
    """A world folder with a valid level.dat, two players and one broken player file."""
    world = tmp_path / "saves" / "New World"
    write_record(world / "level.dat", level_tree())
    write_record(world / "playerdata" / "afe703c4-0a8f-4b44-8301-974a3305820d.dat", player_tree())
    write_record(world / "playerdata" / "0f3b2c1d-aaaa-bbbb-cccc-000000000001.dat", player_tree(health=7.5, pos=(0.0, 70.0, 1.0)))
    (world / "playerdata" / "0f3b2c1d-aaaa-bbbb-cccc-000000000002.dat").write_bytes(b"not gzip at all")
    (world / "playerdata" / "afe703c4-0a8f-4b44-8301-974a3305820d.dat_old").write_bytes(b"ignored")
    return world
