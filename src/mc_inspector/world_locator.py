"""Locating Minecraft worlds and their record files on disk."""

from __future__ import annotations

import logging
import os
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable, Iterator, Mapping

LEVEL_FILE = "level.dat"
PLAYER_DIR = "playerdata"
PLAYER_SUFFIX = ".dat"

logger = logging.getLogger("mc_inspector.world_locator")


def default_search_roots(
    platform: str | None = None,
    *,
    home: Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> list[Path]:
    """Folders searched when none are given, most specific first.

    The game directory locations follow https://minecraft.wiki/w/.minecraft.
    """
    platform = platform or sys.platform
    home = home or Path.home()
    environ = os.environ if environ is None else environ

    if platform.startswith("win"):
        appdata = environ.get("APPDATA")
        roots = [Path(appdata) / ".minecraft"] if appdata else []
        return [*roots, Path("C:\\")]
    if platform == "darwin":
        return [home / "Library" / "Application Support" / "minecraft", home, Path("/")]
    return [home / ".minecraft", home, Path("/")]


def find_level_files(roots: Iterable[str | Path], *, seen: set[Path] | None = None) -> Iterator[Path]:
    """Yield every ``level.dat`` below ``roots`` exactly once.

    Later roots usually contain earlier ones (``~/.minecraft`` then ``~``), so
    files already yielded are skipped; pass ``seen`` to share that memory
    across calls. Unreadable directories are ignored.
    """
    seen = set() if seen is None else seen
    for root in roots:
        root = Path(root).expanduser()
        logger.info("walk_started", extra={"root": str(root)})
        for dirpath, dirnames, filenames in os.walk(root):
            dirnames.sort()
            if LEVEL_FILE not in filenames:
                continue
            level_dat = Path(dirpath) / LEVEL_FILE
            if not level_dat.is_file():
                continue
            key = level_dat.resolve()
            if key in seen:
                continue
            seen.add(key)
            yield level_dat


def player_files(world_dir: Path) -> list[Path]:
    """``playerdata/<uuid>.dat`` files of a world, sorted by name."""
    folder = world_dir / PLAYER_DIR
    if not folder.is_dir():
        return []
    try:
        entries = list(folder.iterdir())
    except OSError:
        logger.warning("playerdata_unreadable", extra={"path": str(folder)})
        return []
    return sorted(entry for entry in entries if entry.suffix == PLAYER_SUFFIX and entry.is_file())


def folder_size(world_dir: Path) -> int:
    """Total size in bytes of the regular files below ``world_dir``."""
    total = 0
    for dirpath, _dirnames, filenames in os.walk(world_dir):
        for name in filenames:
            try:
                total += (Path(dirpath) / name).lstat().st_size
            except OSError:
                continue
    return total


def last_modified(path: Path) -> datetime | None:
    try:
        return datetime.fromtimestamp(path.stat().st_mtime, tz=timezone.utc)
    except OSError:
        return None
