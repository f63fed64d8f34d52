from __future__ import annotations

import gzip
import zlib
from pathlib import Path

import pytest

from conftest import level_tree, player_tree, write_record
from mc_inspector.errors import DecompressionError, RecordReadError, TruncatedError
from mc_inspector.nbt import encode
from mc_inspector.storage import decompress, load_level, load_player, load_tag, read_record


def test_decompress_gzip_and_zlib() -> None:
    payload = encode(level_tree())

    assert decompress(gzip.compress(payload)) == payload
    assert decompress(zlib.compress(payload)) == payload


@pytest.mark.parametrize("raw", [b"", b"plain bytes", gzip.compress(b"abc")[:-6]])
def test_decompress_rejects_invalid_streams(raw: bytes) -> None:
    with pytest.raises(DecompressionError):
        decompress(raw)


def test_read_record_missing_file(tmp_path: Path) -> None:
    with pytest.raises(RecordReadError):
        read_record(tmp_path / "nope.dat")


def test_load_level(tmp_path: Path) -> None:
    path = write_record(tmp_path / "level.dat", level_tree())

    assert load_level(path).data_version == 3953


def test_load_player_takes_uuid_from_file_name(tmp_path: Path) -> None:
    path = write_record(tmp_path / "afe703c4-0a8f-4b44-8301-974a3305820d.dat", player_tree())

    info = load_player(path)

    assert info.uuid == "afe703c4-0a8f-4b44-8301-974a3305820d"
    assert info.position == (10.5, 64.0, -3.25)


def test_load_tag_reports_structural_errors(tmp_path: Path) -> None:
    path = tmp_path / "level.dat"
    path.write_bytes(gzip.compress(encode(level_tree())[:-1]))

    with pytest.raises(TruncatedError):
        load_tag(path)
