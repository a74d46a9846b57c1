"""Bash history backend.

Reads ~/.bash_history. Entries are one command per line. When HISTTIMEFORMAT
is set, bash writes a comment line with the Unix time before each command:

    #1700000000
    git status

Those timestamp lines are attached to the following command and never
treated as commands themselves.
"""

import re
from typing import Iterable, Iterator

from ..history import Entry, parse_epoch
from ..shell import ShellBackend

_TIMESTAMP_LINE = re.compile(r"^#(\d+)\s*$")


class BashShell(ShellBackend):
    """Backend for bash."""

    name = "bash"

    def entries(self, lines: Iterable[str]) -> Iterator[Entry]:
        pending = None
        for line in lines:
            match = _TIMESTAMP_LINE.match(line.strip())
            if match:
                pending = parse_epoch(match.group(1))
                continue
            if not line.strip():
                continue
            yield line, pending
            pending = None
