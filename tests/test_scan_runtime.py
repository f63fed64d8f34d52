from __future__ import annotations

import asyncio
import threading
import time
from pathlib import Path

import pytest

from conftest import level_tree, write_record
from mc_inspector.models import LevelInfo
from mc_inspector.nbt import Tag, TagType
from mc_inspector.scan_runtime import RecordJobStatus, RecordKind, ScanRuntime, load_record, run_scan, scan_worlds


def test_scan_reports_world_and_players(world_dir: Path) -> None:
    reports = run_scan([world_dir / "level.dat"], workers=2)

    assert len(reports) == 1
    report = reports[0]
    assert report.path == world_dir
    assert report.level is not None and report.level.data_version == 3953
    assert sorted(player.uuid for player in report.players) == [
        "0f3b2c1d-aaaa-bbbb-cccc-000000000001",
        "afe703c4-0a8f-4b44-8301-974a3305820d",
    ]
    assert [failure.kind for failure in report.player_errors] == ["decompression_error"]
    assert report.size_bytes and report.size_bytes > 0
    assert report.modified is not None


def test_invalid_level_does_not_stop_other_worlds(tmp_path: Path, world_dir: Path) -> None:
    broken = tmp_path / "broken"
    write_record(broken / "level.dat", level_tree(Difficulty=Tag(TagType.INT, 1)))

    reports = run_scan([broken / "level.dat", world_dir / "level.dat"], workers=3)

    assert reports[0].level is None
    assert reports[0].level_error.kind == "type_mismatch"
    assert reports[1].is_valid


def test_timeout_is_scoped_to_one_file(tmp_path: Path) -> None:
    def loader(path: Path, kind: RecordKind, max_depth: int) -> LevelInfo:
        if path.name == "slow.dat":
            time.sleep(0.2)
        return LevelInfo(day_time=0, difficulty=1, data_version=None, last_played=0, random_seed=None, time=0)

    async def _run() -> tuple[RecordJobStatus, RecordJobStatus, str | None]:
        runtime = ScanRuntime(loader=loader, workers=2, file_timeout_seconds=0.05)
        await runtime.start()
        slow = runtime.submit(tmp_path / "slow.dat", RecordKind.LEVEL)
        fast = runtime.submit(tmp_path / "fast.dat", RecordKind.LEVEL)
        await asyncio.wait_for(runtime.join(), timeout=2)
        await runtime.stop()
        slow_job = runtime.get_job(slow)
        return slow_job.status, runtime.get_job(fast).status, slow_job.error.kind if slow_job.error else None

    slow_status, fast_status, kind = asyncio.run(_run())
    assert slow_status == RecordJobStatus.TIMED_OUT
    assert kind == "timeout"
    assert fast_status == RecordJobStatus.SUCCEEDED


def test_unexpected_loader_errors_are_recorded(tmp_path: Path) -> None:
    def loader(path: Path, kind: RecordKind, max_depth: int):
        raise RuntimeError("boom")

    async def _run():
        return await scan_worlds([tmp_path / "level.dat"], ScanRuntime(loader=loader))

    reports = asyncio.run(_run())
    assert reports[0].level_error.kind == "internal_error"
    assert "RuntimeError" in reports[0].level_error.message


def test_load_record_dispatches_on_kind(world_dir: Path) -> None:
    level = load_record(world_dir / "level.dat", RecordKind.LEVEL, 512)
    player = load_record(
        world_dir / "playerdata" / "afe703c4-0a8f-4b44-8301-974a3305820d.dat",
        RecordKind.PLAYER,
        512,
    )

    assert level.difficulty == 2
    assert player.food_level == 18


def _level_info() -> LevelInfo:
    return LevelInfo(day_time=0, difficulty=1, data_version=None, last_played=0, random_seed=None, time=0)


def test_memory_error_aborts_the_run_instead_of_hanging(tmp_path: Path) -> None:
    loaded: list[str] = []

    def loader(path: Path, kind: RecordKind, max_depth: int) -> LevelInfo:
        loaded.append(path.name)
        if path.name == "huge.dat":
            raise MemoryError
        return _level_info()

    async def _run() -> None:
        runtime = ScanRuntime(loader=loader, workers=1)
        await runtime.start()
        runtime.submit(tmp_path / "huge.dat", RecordKind.LEVEL)
        runtime.submit(tmp_path / "next.dat", RecordKind.LEVEL)
        try:
            with pytest.raises(MemoryError):
                await asyncio.wait_for(runtime.join(), timeout=2)
            with pytest.raises(MemoryError):
                runtime.submit(tmp_path / "late.dat", RecordKind.LEVEL)
        finally:
            await runtime.stop()

    asyncio.run(_run())
    assert loaded == ["huge.dat"]


def test_memory_error_propagates_out_of_scan_worlds(tmp_path: Path) -> None:
    def loader(path: Path, kind: RecordKind, max_depth: int) -> LevelInfo:
        if path.parent.name == "b":
            raise MemoryError
        return _level_info()

    level_files = [tmp_path / name / "level.dat" for name in ("a", "b", "c")]

    async def _run():
        return await asyncio.wait_for(scan_worlds(level_files, ScanRuntime(loader=loader, workers=2)), timeout=5)

    with pytest.raises(MemoryError):
        asyncio.run(_run())


def test_stop_reraises_unexpected_worker_failures() -> None:
    async def _run() -> None:
        runtime = ScanRuntime(workers=1)

        async def broken_worker() -> None:
            raise RuntimeError("worker died")

        task = asyncio.create_task(broken_worker())
        await asyncio.sleep(0)
        runtime._worker_tasks = [task]
        await runtime.stop()

    with pytest.raises(RuntimeError, match="worker died"):
        asyncio.run(_run())


def test_discovery_and_metadata_run_off_the_event_loop(world_dir: Path) -> None:
    walked_on: list[int] = []

    def discover():
        walked_on.append(threading.get_ident())
        yield world_dir / "level.dat"
        walked_on.append(threading.get_ident())

    async def _run():
        loop_thread = threading.get_ident()
        reports = await scan_worlds(discover(), ScanRuntime(workers=2))
        return loop_thread, reports

    loop_thread, reports = asyncio.run(_run())

    assert reports[0].is_valid
    assert walked_on and loop_thread not in walked_on
