"""Registry of supported shell families."""

from ..shell import ShellBackend
from .bash import BashShell
from .fish import FishShell
from .zsh import ZshShell

SHELL_CLASSES = (BashShell, ZshShell, FishShell)


def get_supported_shells(names=None) -> list[ShellBackend]:
    """Return backends for every supported shell, optionally filtered by name."""
    shells = [cls() for cls in SHELL_CLASSES]
    if names:
        wanted = set(names)
        shells = [s for s in shells if s.name in wanted]
    return shells


def get_available_shells() -> list[ShellBackend]:
    """Return backends whose history file exists on this machine."""
    return [s for s in get_supported_shells() if s.is_available()]
