"""Run one full analysis pass and assemble the result snapshot.

Shells are analyzed independently on a thread pool. Each worker returns its
own records, accumulator and config; nothing is shared between workers. The
snapshot is built in one merge step after every worker has finished, so a
failure in one shell never leaves another shell half-written.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from datetime import datetime
from types import MappingProxyType
from typing import Iterable, Optional

from .aggregator import ShellAccumulator, build_insights
from .catalog import TOOL_CATALOG
from .config import get_workflow_threshold, use_full_command
from .core import AnalysisSnapshot, ShellConfig, ToolPresence, ToolSpec
from .errors import SourceUnavailable
from .probe import probe_tools
from .shell import ShellBackend
from .shells import get_supported_shells

logger = logging.getLogger(__name__)


@dataclass
class ShellResult:
    """Everything one worker learned about one shell."""

    shell: str
    records: Optional[tuple] = None  # None when the history was unavailable
    accumulator: ShellAccumulator = field(default_factory=ShellAccumulator)
    config: ShellConfig = field(default_factory=ShellConfig)
    diagnostics: list = field(default_factory=list)


def analyze_shell(
    backend: ShellBackend,
    installed: frozenset,
    catalog: tuple[ToolSpec, ...] = TOOL_CATALOG,
    full_command: bool = False,
    now: datetime | None = None,
) -> ShellResult:
    """Read, classify and fold one shell's history, and load its config."""
    result = ShellResult(shell=backend.name)

    try:
        records = backend.read_history(full_command=full_command, now=now)
    except SourceUnavailable as e:
        logger.info("No %s history: %s", backend.name, e)
        result.diagnostics.append(f"{backend.name}: history unavailable ({e.reason})")
    else:
        result.records = tuple(records)
        result.accumulator.fold_all(records, installed, catalog)

    try:
        result.config = backend.load_config()
    except Exception as e:
        logger.error("Failed to load %s config: %s", backend.name, e)
        result.diagnostics.append(f"{backend.name}: config unavailable ({e})")

    return result


def _safe_analyze(backend: ShellBackend, *args, **kwargs) -> ShellResult:
    try:
        return analyze_shell(backend, *args, **kwargs)
    except Exception as e:
        logger.exception("Analysis of %s failed", backend.name)
        return ShellResult(shell=backend.name, diagnostics=[f"{backend.name}: analysis failed ({e})"])


def merge_results(
    results: Iterable[ShellResult],
    installed: dict[str, bool],
    catalog: tuple[ToolSpec, ...] = TOOL_CATALOG,
    workflow_threshold: int | None = None,
    now: datetime | None = None,
) -> AnalysisSnapshot:
    """Combine per-shell results into one read-only snapshot."""
    if workflow_threshold is None:
        workflow_threshold = get_workflow_threshold()

    histories = {}
    configs = {}
    diagnostics = []
    total = ShellAccumulator()

    for result in results:
        diagnostics.extend(result.diagnostics)
        if result.records is not None:
            histories[result.shell] = result.records
            total = total.merge(result.accumulator)
        if result.records is not None or not result.config.is_empty():
            configs[result.shell] = result.config

    present = frozenset(name for name, ok in installed.items() if ok)
    insights = build_insights(
        total,
        present,
        shell_configs=configs,
        catalog=catalog,
        workflow_threshold=workflow_threshold,
    )

    return AnalysisSnapshot(
        histories_by_shell=MappingProxyType(histories),
        shell_configs=MappingProxyType(configs),
        insights=insights,
        installed_tools=tuple(ToolPresence(name, ok) for name, ok in installed.items()),
        diagnostics=tuple(diagnostics),
        generated_at=now or datetime.now(),
    )


def run_analysis(
    shells: list[ShellBackend] | None = None,
    installed: dict[str, bool] | None = None,
    catalog: tuple[ToolSpec, ...] = TOOL_CATALOG,
    full_command: bool | None = None,
    probe_timeout: float | None = None,
    now: datetime | None = None,
    max_workers: int | None = None,
) -> AnalysisSnapshot:
    """Run a complete analysis pass.

    Args:
        shells: Backends to analyze. Defaults to every supported shell.
        installed: Tool presence map. Probed from the catalog when omitted.
        full_command: Keep whole command lines instead of the last token.
            Defaults to the SHELL_INSIGHTS_FULL_COMMAND setting.
        now: Capture time used for entries without a timestamp.

    Returns:
        A snapshot covering every shell whose history could be read.
    """
    if shells is None:
        shells = get_supported_shells()
    if full_command is None:
        full_command = use_full_command()
    if now is None:
        now = datetime.now()
    if installed is None:
        installed = probe_tools(catalog, timeout=probe_timeout)

    present = frozenset(name for name, ok in installed.items() if ok)
    logger.info("Analyzing shells: %s", [s.name for s in shells])

    results = []
    if shells:
        with ThreadPoolExecutor(max_workers=max_workers or len(shells)) as pool:
            futures = [
                pool.submit(_safe_analyze, backend, present, catalog, full_command, now)
                for backend in shells
            ]
            results = [f.result() for f in futures]

    snapshot = merge_results(results, installed, catalog=catalog, now=now)
    logger.info(
        "Analysis complete: %d shell histories, %d commands",
        len(snapshot.histories_by_shell),
        snapshot.total_commands,
    )
    return snapshot
