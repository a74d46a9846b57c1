"""Environment-aware path and setting resolution for shell data sources."""

import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_PROBE_TIMEOUT = 3.0
DEFAULT_WORKFLOW_THRESHOLD = 10
DEFAULT_LOG_FILE = "shell_insights.log"

_HISTORY_PATHS = {
    "bash": "~/.bash_history",
    "zsh": "~/.zsh_history",
    "fish": "~/.local/share/fish/fish_history",
}

_CONFIG_PATHS = {
    "bash": ["~/.bashrc", "~/.bash_profile", "~/.bash_aliases"],
    "zsh": ["~/.zshrc", "~/.zsh_plugins", "~/.zprofile"],
    "fish": ["~/.config/fish/config.fish", "~/.config/fish/functions", "~/.config/fish/conf.d"],
}

_PLUGIN_DIRS = {
    "bash": ["~/.bash_it", "~/.oh-my-bash", "~/.local/share/bash-completion"],
    "zsh": ["~/.oh-my-zsh", "~/.antigen", "~/.zinit", "~/.zplug"],
    "fish": ["~/.local/share/omf"],
}

FISH_DROPIN_DIR = "~/.config/fish/conf.d"


def get_home() -> Path:
    """Return the home directory whose shell files are analyzed."""
    env = os.environ.get("SHELL_INSIGHTS_HOME")
    if env:
        return Path(env)
    return Path.home()


def expand_path(path: str) -> Path:
    """Expand a leading ``~/`` against :func:`get_home`."""
    if path.startswith("~/"):
        return get_home() / path[2:]
    return Path(path)


def get_history_path(shell: str) -> Path:
    """Return the history file for a shell family."""
    env = os.environ.get(f"SHELL_INSIGHTS_{shell.upper()}_HISTORY")
    if env:
        return Path(env)

    return expand_path(_HISTORY_PATHS[shell])


def get_config_paths(shell: str) -> list[str]:
    """Return the ``~/``-form rc/profile paths for a shell family."""
    return list(_CONFIG_PATHS.get(shell, []))


def get_plugin_dirs(shell: str) -> list[str]:
    """Return the ``~/``-form plugin-manager directories for a shell family."""
    return list(_PLUGIN_DIRS.get(shell, []))


def get_probe_timeout() -> float:
    env = os.environ.get("SHELL_INSIGHTS_PROBE_TIMEOUT")
    if env:
        try:
            return float(env)
        except ValueError:
            logger.warning("Ignoring invalid SHELL_INSIGHTS_PROBE_TIMEOUT=%r", env)
    return DEFAULT_PROBE_TIMEOUT


def get_workflow_threshold() -> int:
    env = os.environ.get("SHELL_INSIGHTS_WORKFLOW_THRESHOLD")
    if env:
        try:
            return int(env)
        except ValueError:
            logger.warning("Ignoring invalid SHELL_INSIGHTS_WORKFLOW_THRESHOLD=%r", env)
    return DEFAULT_WORKFLOW_THRESHOLD


def use_full_command() -> bool:
    """Return True when whole command lines should be kept instead of the last token."""
    return os.environ.get("SHELL_INSIGHTS_FULL_COMMAND", "").lower() in ("1", "true", "yes", "on")


def get_log_path() -> Path:
    """Return the diagnostic log file path."""
    env = os.environ.get("SHELL_INSIGHTS_LOG")
    if env:
        return Path(env)

    return Path(DEFAULT_LOG_FILE)
