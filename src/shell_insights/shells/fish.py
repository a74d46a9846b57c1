"""Fish history backend.

Reads ~/.local/share/fish/fish_history, a YAML-like file:

    - cmd: git status
      when: 1700000000
      paths:
        - src/

Only ``cmd`` starts an entry; ``when`` sets its timestamp. Fish plugins are
the plugin-manager directories plus every ``*.fish`` file in
~/.config/fish/conf.d.
"""

from typing import Iterable, Iterator

from ..config import FISH_DROPIN_DIR, expand_path
from ..core import PluginInfo
from ..history import Entry, parse_epoch
from ..plugins import detect_dropin_plugins
from ..shell import ShellBackend

_CMD_PREFIX = "- cmd:"
_WHEN_PREFIX = "when:"


class FishShell(ShellBackend):
    """Backend for fish."""

    name = "fish"
    dialect = "fish"

    def entries(self, lines: Iterable[str]) -> Iterator[Entry]:
        command = None
        timestamp = None

        for line in lines:
            stripped = line.strip()
            if stripped.startswith(_CMD_PREFIX):
                if command is not None:
                    yield command, timestamp
                command = stripped[len(_CMD_PREFIX):]
                timestamp = None
            elif stripped.startswith(_WHEN_PREFIX) and command is not None:
                timestamp = parse_epoch(stripped[len(_WHEN_PREFIX):])

        if command is not None:
            yield command, timestamp

    def detect_plugins(self) -> list[PluginInfo]:
        plugins = super().detect_plugins()
        plugins.extend(detect_dropin_plugins(expand_path(FISH_DROPIN_DIR), ".fish"))
        return plugins
