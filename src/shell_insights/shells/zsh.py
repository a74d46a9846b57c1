"""Zsh history backend.

Reads ~/.zsh_history. With EXTENDED_HISTORY enabled each entry looks like:

    : 1700000000:0;git commit -m "fix"

i.e. ``: <start time>:<elapsed seconds>;<command>``. Lines without that
prefix are plain commands.
"""

import re
from typing import Iterable, Iterator

from ..history import Entry, parse_epoch
from ..shell import ShellBackend

_EXTENDED_LINE = re.compile(r"^: *(\d+):\d+;(.*)$")


class ZshShell(ShellBackend):
    """Backend for zsh."""

    name = "zsh"

    def entries(self, lines: Iterable[str]) -> Iterator[Entry]:
        for line in lines:
            match = _EXTENDED_LINE.match(line)
            if match:
                yield match.group(2), parse_epoch(match.group(1))
            else:
                yield line, None
