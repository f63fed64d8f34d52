"""Plain-text rendering of scan results."""

from __future__ import annotations

from datetime import datetime, timezone

from mc_inspector.data_versions import describe_data_version, release_label
from mc_inspector.models import ScanSummary, WorldReport
from mc_inspector.username_lookup import UsernameLookup, display_name

TICKS_PER_DAY = 24_000
TICKS_PER_HOUR = 20 * 3600
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


def format_timestamp(unix_ms: int) -> str:
    """Render a millisecond UNIX timestamp; out-of-range values become ``???``."""
    try:
        return datetime.fromtimestamp(unix_ms / 1000, tz=timezone.utc).strftime(TIMESTAMP_FORMAT)
    except (ValueError, OverflowError, OSError):
        return "???"


def format_size(size_bytes: int | None) -> str:
    if size_bytes is None:
        return "???"
    if size_bytes < 1024:
        return f"{size_bytes} B"
    size = size_bytes / 1024
    for unit in ("KiB", "MiB"):
        if size < 1024:
            return f"{size:.2f} {unit}"
        size /= 1024
    return f"{size:.2f} GiB"


def format_world(report: WorldReport, lookup: UsernameLookup | None = None) -> list[str]:
    if report.level is None:
        error = report.level_error
        reason = f"{error.kind}: {error.message}" if error else "unknown error"
        return [f"{str(report.path)!r} is invalid: {reason}"]

    level = report.level
    seed = str(level.random_seed) if level.random_seed is not None else "???"
    modified = report.modified.strftime(TIMESTAMP_FORMAT) if report.modified else "???"
    lines = [
        f"***** ***** {str(report.path)!r} ***** *****",
        f"Minecraft version: {describe_data_version(level.data_version)}",
        f"Seed: {seed}",
        f"Last played: {format_timestamp(level.last_played)} (UNIX: {level.last_played})",
        f"Modified: {modified}",
        f"Size: {format_size(report.size_bytes)}",
        f"Ticks passed: {level.time} (~{level.time / TICKS_PER_HOUR:.2f} hours)",
        f"In-game days passed: {level.day_time / TICKS_PER_DAY}",
        f"Current time: {level.day_time % TICKS_PER_DAY} (0 = sunrise, 6000 = midday, 12000 = sunset, 18000 = midnight)",
        f"Difficulty: {level.difficulty} (0 = Peaceful, 1 = Easy, 2 = Normal, 3 = Hard)",
        f"Players: {len(report.players)}",
    ]
    for player in report.players:
        x, y, z = player.position
        lines.append(
            f"    - {player.uuid} ({display_name(lookup, player.uuid)}) @ x={x:.2f}, y={y:.2f}, z={z:.2f} "
            f"(Health: {player.health:.2f}, Food: {player.food_level})"
        )
    for failure in report.player_errors:
        lines.append(f"    ! {failure.path.name} is invalid: {failure.kind}: {failure.message}")
    return lines


def format_summary(summary: ScanSummary) -> list[str]:
    lines = [f"Done. {summary.worlds_found} Minecraft worlds were found ({summary.worlds_invalid} invalid)."]
    if summary.max_version is None:
        lines.append("No world carried a DataVersion (all older than 1.9 or invalid).")
        return lines
    lines.append(f"Highest version encountered: {summary.max_version} ({release_label(summary.max_version)})")
    lines.append(f"Lowest >=1.9 version encountered: {summary.min_version} ({release_label(summary.min_version)})")
    return lines
