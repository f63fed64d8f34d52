"""Reading and decompressing record files."""

from __future__ import annotations

import gzip
import logging
import zlib
from pathlib import Path

from mc_inspector.errors import DecompressionError, RecordReadError
from mc_inspector.models import LevelInfo, PlayerInfo
from mc_inspector.nbt import DEFAULT_MAX_DEPTH, Tag, decode
from mc_inspector.records import level_from_tag, player_from_tag

GZIP_MAGIC = b"\x1f\x8b"

logger = logging.getLogger("mc_inspector.storage")


def decompress(raw: bytes) -> bytes:
    """Inflate a gzip stream, or a zlib stream as written by some tools."""
    try:
        if raw[:2] == GZIP_MAGIC:
            return gzip.decompress(raw)
        return zlib.decompress(raw)
    except (OSError, EOFError, zlib.error) as exc:
        raise DecompressionError(f"not a valid compressed stream: {exc}") from exc


def read_record(path: str | Path) -> bytes:
    try:
        return Path(path).read_bytes()
    except OSError as exc:
        raise RecordReadError(f"could not read {path}: {exc.strerror or exc}") from exc


def load_tag(path: str | Path, *, max_depth: int = DEFAULT_MAX_DEPTH) -> Tag:
    raw = read_record(path)
    data = decompress(raw)
    root = decode(data, max_depth=max_depth)
    logger.debug("record_decoded", extra={"path": str(path), "compressed": len(raw), "size": len(data)})
    return root


def load_level(path: str | Path, *, max_depth: int = DEFAULT_MAX_DEPTH) -> LevelInfo:
    return level_from_tag(load_tag(path, max_depth=max_depth))


def player_uuid(path: str | Path) -> str:
    """Player records are named ``<uuid>.dat``."""
    return Path(path).stem


def load_player(path: str | Path, *, max_depth: int = DEFAULT_MAX_DEPTH) -> PlayerInfo:
    return player_from_tag(load_tag(path, max_depth=max_depth), player_uuid(path))
