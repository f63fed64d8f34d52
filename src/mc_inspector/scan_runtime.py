"""Asynchronous worker pool that decodes record files concurrently."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Iterable, Protocol, Union
from uuid import uuid4

from mc_inspector.errors import InspectorError
from mc_inspector.models import LevelInfo, PlayerInfo, RecordFailure, WorldReport
from mc_inspector.nbt import DEFAULT_MAX_DEPTH, MAX_DEPTH_CEILING
from mc_inspector.storage import load_level, load_player
from mc_inspector.world_locator import folder_size, last_modified, player_files

Record = Union[LevelInfo, PlayerInfo]


class RecordKind(str, Enum):
    LEVEL = "level"
    PLAYER = "player"


class RecordJobStatus(str, Enum):
    """Lifecycle states for one record file."""

    QUEUED = "queued"
    RUNNING = "running"
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    TIMED_OUT = "timed_out"


@dataclass(slots=True)
class RecordJob:
    """Decode state and final outcome of one record file."""

    id: str
    path: Path
    kind: RecordKind
    submitted_at: datetime
    status: RecordJobStatus
    result: Record | None = None
    error: RecordFailure | None = None


class RecordLoader(Protocol):
    def __call__(self, path: Path, kind: RecordKind, max_depth: int) -> Record:
        """Read, decode and extract one record file."""


def load_record(path: Path, kind: RecordKind, max_depth: int) -> Record:
    if kind is RecordKind.LEVEL:
        return load_level(path, max_depth=max_depth)
    return load_player(path, max_depth=max_depth)


class ScanRuntime:
    """Queue-backed runtime running one decode job per file on ``workers`` tasks.

    Jobs are only touched from the event loop; the blocking read and decode of
    each file happens in a worker thread under a per-file timeout. Running out
    of memory is not a per-file failure: it stops every worker and is re-raised
    from :meth:`join` and :meth:`submit`.
    """

    def __init__(
        self,
        *,
        loader: RecordLoader = load_record,
        workers: int = 4,
        file_timeout_seconds: float = 10.0,
        max_depth: int = DEFAULT_MAX_DEPTH,
        logger: logging.Logger | None = None,
    ) -> None:
        if not 1 <= max_depth <= MAX_DEPTH_CEILING:
            raise ValueError(f"max_depth must be between 1 and {MAX_DEPTH_CEILING}")
        if workers < 1:
            raise ValueError("workers must be at least 1")
        self._loader = loader
        self._workers = workers
        self._file_timeout_seconds = file_timeout_seconds
        self._max_depth = max_depth
        self._logger = logger or logging.getLogger("mc_inspector.scan_runtime")

        self._jobs: dict[str, RecordJob] = {}
        self._queue: asyncio.Queue[str] = asyncio.Queue()
        self._worker_tasks: list[asyncio.Task[None]] = []
        self._fatal: BaseException | None = None

    async def start(self) -> None:
        """Start the worker tasks once for this runtime."""
        if self._worker_tasks:
            return

        self._worker_tasks = [
            asyncio.create_task(self._worker_loop(), name=f"scan-worker-{index}") for index in range(self._workers)
        ]
        self._logger.info("scan_runtime_started", extra={"workers": self._workers})

    async def stop(self) -> None:
        """Cancel the workers and wait for them to finish.

        Exceptions other than cancellation that ended a worker are re-raised.
        """
        if not self._worker_tasks:
            return

        tasks, self._worker_tasks = self._worker_tasks, []
        for task in tasks:
            task.cancel()
        results = await asyncio.gather(*tasks, return_exceptions=True)
        self._logger.info("scan_runtime_stopped", extra={"jobs": len(self._jobs)})
        for result in results:
            if isinstance(result, BaseException) and not isinstance(result, asyncio.CancelledError):
                raise result

    async def join(self) -> None:
        """Wait until every submitted job has finished."""
        await self._queue.join()
        self._raise_if_aborted()

    def submit(self, path: Path, kind: RecordKind) -> str:
        self._raise_if_aborted()
        job_id = uuid4().hex
        self._jobs[job_id] = RecordJob(
            id=job_id,
            path=Path(path),
            kind=kind,
            submitted_at=datetime.now(timezone.utc),
            status=RecordJobStatus.QUEUED,
        )
        self._queue.put_nowait(job_id)
        self._logger.debug("record_submitted", extra={"job_id": job_id, "path": str(path), "kind": kind.value})
        return job_id

    def get_job(self, job_id: str) -> RecordJob:
        if job_id not in self._jobs:
            raise KeyError(f"Unknown record job id: {job_id}")
        return self._jobs[job_id]

    def _raise_if_aborted(self) -> None:
        if self._fatal is not None:
            raise self._fatal

    def _abort(self, exc: BaseException) -> None:
        self._fatal = exc
        current = asyncio.current_task()
        for task in self._worker_tasks:
            if task is not current:
                task.cancel()
        while True:
            try:
                self._queue.get_nowait()
            except asyncio.QueueEmpty:
                break
            self._queue.task_done()

    async def _worker_loop(self) -> None:
        while self._fatal is None:
            job_id = await self._queue.get()
            try:
                await self._execute_job(job_id)
            finally:
                self._queue.task_done()

    async def _execute_job(self, job_id: str) -> None:
        job = self._jobs[job_id]
        job.status = RecordJobStatus.RUNNING

        try:
            job.result = await asyncio.wait_for(
                asyncio.to_thread(self._loader, job.path, job.kind, self._max_depth),
                timeout=self._file_timeout_seconds,
            )
            job.status = RecordJobStatus.SUCCEEDED
            self._logger.info("record_succeeded", extra={"job_id": job.id, "path": str(job.path)})
        except asyncio.TimeoutError:
            job.status = RecordJobStatus.TIMED_OUT
            job.error = RecordFailure(
                path=job.path,
                kind="timeout",
                message=f"decoding took longer than {self._file_timeout_seconds}s",
            )
            self._logger.warning("record_timeout", extra={"job_id": job.id, "path": str(job.path)})
        except InspectorError as exc:
            job.status = RecordJobStatus.FAILED
            job.error = RecordFailure(path=job.path, kind=exc.kind, message=str(exc))
            self._logger.warning(
                "record_failed",
                extra={"job_id": job.id, "path": str(job.path), "kind": exc.kind, "error": str(exc)},
            )
        except MemoryError as exc:
            job.status = RecordJobStatus.FAILED
            job.error = RecordFailure(path=job.path, kind="out_of_memory", message="ran out of memory")
            self._logger.critical("scan_aborted", extra={"job_id": job.id, "path": str(job.path)})
            self._abort(exc)
        except Exception as exc:  # noqa: BLE001 - one broken file must not stop the scan.
            job.status = RecordJobStatus.FAILED
            job.error = RecordFailure(path=job.path, kind="internal_error", message=f"{type(exc).__name__}: {exc}")
            self._logger.exception("record_crashed", extra={"job_id": job.id, "path": str(job.path)})


async def scan_worlds(level_files: Iterable[Path], runtime: ScanRuntime) -> list[WorldReport]:
    """Decode every world's ``level.dat`` and player files, one job per file.

    Discovery runs in a thread one world at a time, so workers start decoding
    while the directory walk is still going.
    """
    planned: list[tuple[Path, str, list[str]]] = []
    discovered = iter(level_files)
    await runtime.start()
    try:
        while (level_dat := await asyncio.to_thread(next, discovered, None)) is not None:
            level_dat = Path(level_dat)
            players = await asyncio.to_thread(player_files, level_dat.parent)
            level_job = runtime.submit(level_dat, RecordKind.LEVEL)
            player_jobs = [runtime.submit(path, RecordKind.PLAYER) for path in players]
            planned.append((level_dat, level_job, player_jobs))
        await runtime.join()
    finally:
        await runtime.stop()

    reports: list[WorldReport] = []
    for level_dat, level_job, player_jobs in planned:
        report = WorldReport(path=level_dat.parent)
        job = runtime.get_job(level_job)
        if job.status is RecordJobStatus.SUCCEEDED:
            report.level = job.result
        else:
            report.level_error = job.error

        for player_job in player_jobs:
            job = runtime.get_job(player_job)
            if job.status is RecordJobStatus.SUCCEEDED:
                report.players.append(job.result)
            else:
                report.player_errors.append(job.error)

        report.modified = await asyncio.to_thread(last_modified, level_dat)
        report.size_bytes = await asyncio.to_thread(folder_size, report.path)
        reports.append(report)
    return reports


def run_scan(level_files: Iterable[Path], **runtime_options) -> list[WorldReport]:
    """Synchronous entry for the CLI."""

    async def _run() -> list[WorldReport]:
        return await scan_worlds(level_files, ScanRuntime(**runtime_options))

    return asyncio.run(_run())
