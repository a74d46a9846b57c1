"""Read shell history files into classified command records.

History formats differ per shell and often carry metadata (timestamps,
durations) next to the command. Shell backends supply an ``entries`` hook that
turns raw lines into ``(command_text, timestamp)`` pairs; this module cleans
the text, drops empty entries and creates the records.

By default cleaning keeps only the *last* whitespace-separated token of each
entry. That loses arguments but stays robust against formats that prefix
metadata the hook does not know about. ``full_command=True`` keeps the whole
line instead.
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Callable, Iterable, Iterator, Optional

from .classifier import classify
from .core import CommandRecord
from .errors import SourceUnavailable

logger = logging.getLogger(__name__)

Entry = tuple[str, Optional[datetime]]
EntryHook = Callable[[Iterable[str]], Iterator[Entry]]


def clean_history_line(line: str, full_command: bool = False) -> str:
    """Normalize a history entry to the command text used for analysis."""
    parts = line.split()
    if not parts:
        return ""
    if full_command:
        return " ".join(parts)
    return parts[-1]


def plain_entries(lines: Iterable[str]) -> Iterator[Entry]:
    """One entry per line, no timestamps."""
    for line in lines:
        yield line, None


def parse_epoch(value: str) -> datetime | None:
    """Parse a Unix timestamp into a local datetime."""
    try:
        return datetime.fromtimestamp(int(value.strip()))
    except (ValueError, OverflowError, OSError):
        return None


def read_history(
    path: Path,
    entries: EntryHook | None = None,
    full_command: bool = False,
    now: datetime | None = None,
) -> list[CommandRecord]:
    """Read a history file into command records.

    Raises:
        SourceUnavailable: the file does not exist or cannot be read.
    """
    path = Path(path)
    try:
        is_file = path.is_file()
    except OSError as e:
        raise SourceUnavailable(path, str(e)) from e
    if not is_file:
        raise SourceUnavailable(path, "not found")

    if entries is None:
        entries = plain_entries
    if now is None:
        now = datetime.now()

    records = []
    try:
        with path.open(encoding="utf-8", errors="replace") as f:
            lines = (line.rstrip("\n") for line in f)
            for text, timestamp in entries(lines):
                command = clean_history_line(text, full_command=full_command)
                if not command:
                    continue
                records.append(CommandRecord(
                    text=command,
                    approximate_time=timestamp or now,
                    categories=classify(command),
                    timestamp_known=timestamp is not None,
                ))
    except OSError as e:
        raise SourceUnavailable(path, str(e)) from e

    logger.info("Read %d commands from %s", len(records), path)
    return records
