"""CLI entrypoint for MC Inspector."""

from __future__ import annotations

from dataclasses import asdict
from pathlib import Path
from typing import List, Optional

import typer
from rich import print
from rich.console import Console
from rich.pretty import pprint

from mc_inspector.config import settings
from mc_inspector.errors import InspectorError
from mc_inspector.models import ScanSummary
from mc_inspector.nbt import MAX_DEPTH_CEILING, decode_named, to_python
from mc_inspector.report import format_summary, format_world
from mc_inspector.scan_runtime import run_scan
from mc_inspector.storage import decompress, load_level, load_player, read_record
from mc_inspector.telemetry import configure_logging
from mc_inspector.username_lookup import DisabledUsernameLookup, MojangUsernameLookup, UsernameLookup
from mc_inspector.world_locator import default_search_roots, find_level_files

app = typer.Typer(help="Inspect Minecraft save folders")
console = Console(highlight=False, emoji=False, soft_wrap=True)


@app.callback()
def _setup(log_level: str = typer.Option(None, help="Override MC_INSPECTOR_LOG_LEVEL")) -> None:
    configure_logging(log_level or settings.log_level)


def _build_lookup(enabled: bool) -> UsernameLookup:
    if not enabled:
        return DisabledUsernameLookup()
    return MojangUsernameLookup(
        url_template=settings.username_lookup_url,
        timeout_seconds=settings.username_lookup_timeout_seconds,
        min_interval_seconds=settings.username_lookup_min_interval_seconds,
    )


def _echo(lines: list[str]) -> None:
    for line in lines:
        console.print(line, markup=False)


@app.command()
def config() -> None:
    """Show the effective configuration."""
    print(settings.model_dump())


@app.command()
def scan(
    paths: Optional[List[Path]] = typer.Argument(None, help="Folders to search; defaults to the game folder, ~ and /"),
    workers: int = typer.Option(settings.scan_workers, help="Record files decoded concurrently"),
    timeout: float = typer.Option(settings.file_timeout_seconds, help="Per-file decode timeout in seconds"),
    max_depth: int = typer.Option(
        settings.max_depth, min=1, max=MAX_DEPTH_CEILING, help="Deepest tag nesting accepted"
    ),
    username_lookup: bool = typer.Option(
        settings.username_lookup_enabled, "--username-lookup/--no-username-lookup", help="Resolve player names online"
    ),
) -> None:
    """Find every world below the given folders and print what its records contain."""
    roots = list(paths) if paths else default_search_roots()
    lookup = _build_lookup(username_lookup)
    summary = ScanSummary()
    seen: set[Path] = set()

    for root in roots:
        console.print()
        console.print(f"Walking through {root} ...", markup=False)
        console.print()
        reports = run_scan(
            find_level_files([root], seen=seen),
            workers=workers,
            file_timeout_seconds=timeout,
            max_depth=max_depth,
        )
        for report in reports:
            console.print()
            _echo(format_world(report, lookup))
            summary.add(report)

    console.print()
    _echo(format_summary(summary))
    if paths and summary.worlds_found == summary.worlds_invalid:
        raise typer.Exit(code=1)


@app.command()
def level(file: Path = typer.Argument(..., help="Path to a level.dat file")) -> None:
    """Decode one level.dat and print its fields."""
    try:
        info = load_level(file, max_depth=settings.max_depth)
    except InspectorError as exc:
        print({"file": str(file), "error": exc.describe()})
        raise typer.Exit(code=1)
    print(asdict(info))


@app.command()
def player(file: Path = typer.Argument(..., help="Path to a playerdata/<uuid>.dat file")) -> None:
    """Decode one player record and print its fields."""
    try:
        info = load_player(file, max_depth=settings.max_depth)
    except InspectorError as exc:
        print({"file": str(file), "error": exc.describe()})
        raise typer.Exit(code=1)
    print(asdict(info))


@app.command()
def dump(file: Path = typer.Argument(..., help="Any gzip-compressed NBT file")) -> None:
    """Pretty-print the whole tag tree of a record file."""
    try:
        name, root = decode_named(decompress(read_record(file)), max_depth=settings.max_depth)
    except InspectorError as exc:
        print({"file": str(file), "error": exc.describe()})
        raise typer.Exit(code=1)
    pprint({name: to_python(root)}, expand_all=False)


if __name__ == "__main__":
    app()
