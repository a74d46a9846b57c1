"""Detect installed shell plugins by the presence of well-known paths.

A plugin manager counts as installed when its directory exists; nothing
checks that it actually works. Drop-in directories (fish ``conf.d``) yield one
plugin per file with the expected suffix.
"""

import logging
from datetime import datetime
from pathlib import Path

from .config import expand_path
from .core import PluginInfo

logger = logging.getLogger(__name__)


def detect_plugin_dirs(candidates: list[str]) -> list[PluginInfo]:
    """Return one PluginInfo per existing directory among ``~/``-form candidates."""
    plugins = []
    for candidate in candidates:
        path = expand_path(candidate)
        try:
            if not path.is_dir():
                continue
            mtime = path.stat().st_mtime
        except OSError as e:
            logger.debug("Cannot inspect plugin directory %s: %s", path, e)
            continue

        plugins.append(PluginInfo(
            name=Path(candidate).name,
            source_location=str(path),
            last_updated=datetime.fromtimestamp(mtime),
        ))
    return plugins


def detect_dropin_plugins(directory: Path, suffix: str) -> list[PluginInfo]:
    """Return one PluginInfo per ``*suffix`` file directly inside ``directory``."""
    plugins = []
    try:
        if not directory.is_dir():
            return []
        entries = sorted(directory.iterdir(), key=lambda p: p.name)
    except OSError as e:
        logger.warning("Cannot list %s: %s", directory, e)
        return []

    for entry in entries:
        if not entry.name.endswith(suffix):
            continue
        try:
            if not entry.is_file():
                continue
            mtime = entry.stat().st_mtime
        except OSError:
            continue
        plugins.append(PluginInfo(
            name=entry.name[:-len(suffix)],
            source_location=str(entry),
            last_updated=datetime.fromtimestamp(mtime),
        ))
    return plugins
