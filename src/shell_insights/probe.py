"""Detect which tools from the catalog are installed on this host."""

import logging
import shlex
import subprocess
from concurrent.futures import ThreadPoolExecutor

from .catalog import TOOL_CATALOG
from .config import get_probe_timeout
from .core import ToolPresence, ToolSpec
from .errors import ProbeFailed

logger = logging.getLogger(__name__)

MAX_PROBE_WORKERS = 8


def _run_probe(spec: ToolSpec, timeout: float) -> None:
    """Run a probe command, raising ProbeFailed unless it exits with status 0."""
    try:
        result = subprocess.run(
            shlex.split(spec.probe),
            stdin=subprocess.DEVNULL,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            timeout=timeout,
            check=False,
        )
    except FileNotFoundError:
        raise ProbeFailed(spec.name, "binary not found")
    except PermissionError:
        raise ProbeFailed(spec.name, "permission denied")
    except subprocess.TimeoutExpired:
        raise ProbeFailed(spec.name, f"timed out after {timeout}s")
    except (OSError, ValueError) as e:
        raise ProbeFailed(spec.name, str(e))

    if result.returncode != 0:
        raise ProbeFailed(spec.name, f"exit status {result.returncode}")


def probe_tool(spec: ToolSpec, timeout: float | None = None) -> ToolPresence:
    """Check a single tool. Failures mean "absent" and are never raised."""
    if timeout is None:
        timeout = get_probe_timeout()

    try:
        _run_probe(spec, timeout)
    except ProbeFailed as e:
        logger.debug("Probe failed: %s", e)
        return ToolPresence(name=spec.name, installed=False)

    return ToolPresence(name=spec.name, installed=True)


def probe_tools(
    catalog: tuple[ToolSpec, ...] = TOOL_CATALOG,
    timeout: float | None = None,
) -> dict[str, bool]:
    """Probe every catalog entry concurrently.

    Returns a mapping of tool name to presence, in catalog order.
    """
    if timeout is None:
        timeout = get_probe_timeout()

    if not catalog:
        return {}

    with ThreadPoolExecutor(max_workers=min(MAX_PROBE_WORKERS, len(catalog))) as pool:
        results = list(pool.map(lambda spec: probe_tool(spec, timeout), catalog))

    presence = {r.name: r.installed for r in results}
    logger.info(
        "Probed %d tools, %d installed",
        len(presence),
        sum(1 for v in presence.values() if v),
    )
    return presence
