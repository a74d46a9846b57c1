"""Abstract base class for shell family backends."""

from abc import ABC, abstractmethod
from datetime import datetime
from pathlib import Path
from types import MappingProxyType
from typing import Iterable, Iterator

from .config import get_config_paths, get_history_path, get_plugin_dirs
from .config_parser import load_config_files, parse_shell_config
from .core import CommandRecord, PluginInfo, ShellConfig
from .history import Entry, read_history
from .plugins import detect_plugin_dirs


class ShellBackend(ABC):
    """Base class for shell family backends.

    Each backend (bash, zsh, fish) knows where its shell keeps history and
    configuration, how its history lines carry metadata, and where its plugin
    managers live.
    """

    name: str  # "bash", "zsh", "fish"
    dialect: str = "posix"  # config syntax understood by config_parser

    def get_history_path(self) -> Path:
        """Return the history file for this shell."""
        return get_history_path(self.name)

    def get_config_paths(self) -> list[str]:
        """Return ``~/``-form rc/profile paths for this shell."""
        return get_config_paths(self.name)

    def is_available(self) -> bool:
        """Return True if this shell's history exists on this machine."""
        try:
            return self.get_history_path().is_file()
        except OSError:
            return False

    @abstractmethod
    def entries(self, lines: Iterable[str]) -> Iterator[Entry]:
        """Turn raw history lines into ``(command_text, timestamp)`` entries."""
        ...

    def read_history(self, full_command: bool = False, now: datetime | None = None) -> list[CommandRecord]:
        """Read this shell's history.

        Raises:
            SourceUnavailable: the history file is missing or unreadable.
        """
        return read_history(
            self.get_history_path(),
            entries=self.entries,
            full_command=full_command,
            now=now,
        )

    def detect_plugins(self) -> list[PluginInfo]:
        """Return plugins found in this shell's plugin-manager directories."""
        return detect_plugin_dirs(get_plugin_dirs(self.name))

    def load_config(self) -> ShellConfig:
        """Read rc/profile files, parse them, and detect plugins."""
        files = load_config_files(self.get_config_paths())

        aliases: dict[str, str] = {}
        environment: dict[str, str] = {}
        for info in files.values():
            file_aliases, file_env = parse_shell_config(info.raw_content, dialect=self.dialect)
            aliases.update(file_aliases)
            environment.update(file_env)

        return ShellConfig(
            config_files=MappingProxyType(files),
            aliases=MappingProxyType(aliases),
            environment=MappingProxyType(environment),
            plugins=tuple(self.detect_plugins()),
        )
