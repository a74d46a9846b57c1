"""FastAPI service exposing analysis snapshots.

The analysis runs as a single background task (in a worker thread) and
produces exactly one snapshot. Requests never block on it unless they ask to
with ``?wait=true``; until it is done they get ``202`` and a status body.
"""

import asyncio
import logging

from fastapi import FastAPI, HTTPException, Query
from fastapi.responses import JSONResponse

from . import __version__
from .core import AnalysisSnapshot
from .export import insights_to_dict, shell_config_to_dict, snapshot_to_dict
from .pipeline import run_analysis
from .shells import get_available_shells

logger = logging.getLogger(__name__)

app = FastAPI(title="shell-insights", version=__version__)

# Background analysis task (started on first request)
_task: asyncio.Task | None = None
# Last finished snapshot, served while a refresh is running
_last_snapshot: AnalysisSnapshot | None = None


def _start_analysis() -> asyncio.Task:
    global _task, _last_snapshot
    if _task is not None and _state(_task) == "ready":
        _last_snapshot = _task.result()
    _task = asyncio.create_task(asyncio.to_thread(run_analysis))
    logger.info("Started background analysis")
    return _task


def _get_task() -> asyncio.Task:
    """Lazily start the analysis task."""
    if _task is None:
        return _start_analysis()
    return _task


def _state(task: asyncio.Task) -> str:
    if not task.done():
        return "running"
    if task.cancelled() or task.exception() is not None:
        return "failed"
    return "ready"


async def _get_snapshot(wait: bool) -> AnalysisSnapshot | None:
    """Return the finished snapshot.

    While a run is in flight this is the previous run's snapshot, or None if
    there is none yet. ``wait`` blocks until the current run finishes.
    """
    task = _get_task()
    if not task.done():
        if not wait:
            return _last_snapshot
        await asyncio.wait({task})

    if _state(task) == "failed":
        logger.error("Background analysis failed: %s", None if task.cancelled() else task.exception())
        raise HTTPException(status_code=500, detail="Analysis failed")
    return task.result()


def _running() -> JSONResponse:
    return JSONResponse(status_code=202, content={"state": "running"})


# ── Routes ───────────────────────────────────────────────────────


@app.get("/api/status")
async def get_status():
    """Return the state of the background analysis."""
    task = _get_task()
    state = _state(task)
    body = {"state": state, "available_shells": [s.name for s in get_available_shells()]}
    if state == "ready":
        snapshot = task.result()
        body["generated_at"] = snapshot.generated_at.isoformat() if snapshot.generated_at else None
        body["shells"] = list(snapshot.histories_by_shell)
    return body


@app.get("/api/snapshot")
async def get_snapshot(
    wait: bool = Query(False, description="Block until the analysis finishes"),
    commands: bool = Query(False, description="Include every command record"),
):
    """Return the full analysis snapshot."""
    snapshot = await _get_snapshot(wait)
    if snapshot is None:
        return _running()
    return snapshot_to_dict(snapshot, include_commands=commands)


@app.get("/api/insights")
async def get_insights(wait: bool = Query(False)):
    """Return only the aggregated insights."""
    snapshot = await _get_snapshot(wait)
    if snapshot is None:
        return _running()
    return insights_to_dict(snapshot)


@app.get("/api/shells")
async def get_shells(wait: bool = Query(False)):
    """Return per-shell command counts and configuration."""
    snapshot = await _get_snapshot(wait)
    if snapshot is None:
        return _running()

    shells = {}
    for shell, config in snapshot.shell_configs.items():
        records = snapshot.histories_by_shell.get(shell)
        shells[shell] = {
            "command_count": len(records) if records is not None else None,
            **shell_config_to_dict(config),
        }
    return shells


@app.get("/api/shells/{shell}")
async def get_shell(shell: str, wait: bool = Query(False)):
    """Return configuration for a single shell."""
    snapshot = await _get_snapshot(wait)
    if snapshot is None:
        return _running()

    config = snapshot.shell_configs.get(shell)
    if config is None:
        raise HTTPException(status_code=404, detail=f"Shell not found: {shell}")
    return shell_config_to_dict(config, include_content=True)


@app.post("/api/refresh")
async def refresh():
    """Start a new analysis run unless one is already in flight."""
    task = _get_task()
    if task.done():
        _start_analysis()
    return _running()
