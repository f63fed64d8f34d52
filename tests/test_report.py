from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path

from mc_inspector.data_versions import describe_data_version
from mc_inspector.models import LevelInfo, PlayerInfo, RecordFailure, ScanSummary, WorldReport
from mc_inspector.report import format_size, format_summary, format_timestamp, format_world


class _StaticLookup:
    def lookup(self, uuid: str) -> str:
        return "horstder2te"


def _report() -> WorldReport:
    return WorldReport(
        path=Path("/saves/New World"),
        level=LevelInfo(
            day_time=30_000,
            difficulty=2,
            data_version=3953,
            last_played=1_700_000_000_000,
            random_seed=None,
            time=72_000,
        ),
        players=[PlayerInfo(uuid="afe703c4", health=19.5, food_level=18, position=(10.5, 64.0, -3.25))],
        modified=datetime(2024, 6, 13, 12, 0, tzinfo=timezone.utc),
        size_bytes=2048,
    )


def test_describe_data_version() -> None:
    assert describe_data_version(None) == "<1.9"
    assert describe_data_version(3953) == "3953 (1.21 - June 13, 2024)"
    assert describe_data_version(1000) == "1000 (???)"
    assert describe_data_version(9999) == "9999 (>1.21.4 - December 3, 2024)"


def test_format_world_lines() -> None:
    lines = format_world(_report(), _StaticLookup())

    assert lines[0] == "***** ***** '/saves/New World' ***** *****"
    assert "Minecraft version: 3953 (1.21 - June 13, 2024)" in lines
    assert "Seed: ???" in lines
    assert "Last played: 2023-11-14 22:13:20 (UNIX: 1700000000000)" in lines
    assert "Modified: 2024-06-13 12:00:00" in lines
    assert "Size: 2.00 KiB" in lines
    assert "Ticks passed: 72000 (~1.00 hours)" in lines
    assert "In-game days passed: 1.25" in lines
    assert lines[8].startswith("Current time: 6000 ")
    assert "Players: 1" in lines
    assert lines[-1] == "    - afe703c4 (horstder2te) @ x=10.50, y=64.00, z=-3.25 (Health: 19.50, Food: 18)"


def test_format_invalid_world() -> None:
    report = WorldReport(
        path=Path("/saves/Broken"),
        level_error=RecordFailure(path=Path("/saves/Broken/level.dat"), kind="truncated", message="cut short"),
    )

    assert format_world(report) == ["'/saves/Broken' is invalid: truncated: cut short"]


def test_player_failures_are_listed() -> None:
    report = _report()
    report.player_errors.append(RecordFailure(path=Path("/saves/New World/playerdata/x.dat"), kind="io_error", message="denied"))

    assert format_world(report)[-1] == "    ! x.dat is invalid: io_error: denied"


def test_summary_tracks_version_range() -> None:
    summary = ScanSummary()
    summary.add(_report())
    older = _report()
    older.level = LevelInfo(day_time=0, difficulty=0, data_version=1343, last_played=0, random_seed=1, time=0)
    summary.add(older)
    summary.add(WorldReport(path=Path("/bad")))

    lines = format_summary(summary)

    assert lines[0] == "Done. 3 Minecraft worlds were found (1 invalid)."
    assert lines[1] == "Highest version encountered: 3953 (1.21 - June 13, 2024)"
    assert lines[2] == "Lowest >=1.9 version encountered: 1343 (1.12.2 - September 18, 2017)"


def test_small_helpers() -> None:
    assert format_timestamp(0) == "1970-01-01 00:00:00"
    assert format_size(None) == "???"
    assert format_size(512) == "512 B"
    assert format_size(3 * 1024**3) == "3.00 GiB"


def test_out_of_range_last_played_does_not_abort_the_report() -> None:
    report = _report()
    report.level = LevelInfo(
        day_time=0, difficulty=1, data_version=3953, last_played=2**62, random_seed=1, time=0
    )

    assert format_timestamp(2**62) == "???"
    assert format_timestamp(-(2**62)) == "???"
    assert f"Last played: ??? (UNIX: {2**62})" in format_world(report)
