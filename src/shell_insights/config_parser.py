"""Static scan of shell rc/profile files for aliases and environment variables.

This is not a shell interpreter: one definition per physical line, quotes
around the value are stripped, and nothing is expanded. ``$PATH:/x`` stays
``$PATH:/x``.
"""

import logging
from datetime import datetime
from pathlib import Path

from .config import expand_path
from .core import ConfigFileInfo
from .errors import ParseSkipped, SourceUnavailable

logger = logging.getLogger(__name__)

QUOTES = "'\""


def _split_assignment(line: str, body: str) -> tuple[str, str]:
    """Split ``NAME=VALUE`` into a stripped name and unquoted value."""
    name, sep, value = body.partition("=")
    name = name.strip()
    if not sep or not name or any(c.isspace() for c in name):
        raise ParseSkipped(line, "malformed NAME=VALUE")
    return name, value.strip().strip(QUOTES)


def _split_fish_words(line: str, body: str) -> tuple[str, str]:
    """Split fish's ``NAME VALUE`` form."""
    parts = body.split(None, 1)
    if len(parts) != 2:
        raise ParseSkipped(line, "malformed NAME VALUE")
    return parts[0], parts[1].strip().strip(QUOTES)


def parse_config_line(line: str, dialect: str = "posix") -> tuple[str, str, str]:
    """Parse one config line into ``(kind, name, value)``.

    ``kind`` is ``"alias"`` or ``"export"``. The ``fish`` dialect also accepts
    ``alias NAME VALUE`` and ``set -x``/``set -gx NAME VALUE``.

    Raises:
        ParseSkipped: the line is not a definition this scanner understands.
    """
    if line.startswith("alias "):
        body = line[len("alias "):]
        first = body.split(None, 1)[0] if body.strip() else ""
        if dialect == "fish" and "=" not in first:
            name, value = _split_fish_words(line, body)
        else:
            name, value = _split_assignment(line, body)
        return "alias", name, value

    if line.startswith("export "):
        name, value = _split_assignment(line, line[len("export "):])
        return "export", name, value

    if dialect == "fish" and line.startswith("set "):
        return ("export",) + _parse_fish_set(line)

    raise ParseSkipped(line, "not an alias or export")


def _parse_fish_set(line: str) -> tuple[str, str]:
    flags = []
    for word in line.split()[1:]:
        if not word.startswith("-"):
            break
        flags.append(word)

    if not any(f == "--export" or (not f.startswith("--") and "x" in f) for f in flags):
        raise ParseSkipped(line, "fish variable is not exported")

    parts = line.split(None, len(flags) + 2)
    if len(parts) != len(flags) + 3:
        raise ParseSkipped(line, "malformed NAME VALUE")
    return parts[-2], parts[-1].strip().strip(QUOTES)


def parse_shell_config(content: str, dialect: str = "posix") -> tuple[dict[str, str], dict[str, str]]:
    """Extract alias and environment mappings from file content.

    Later definitions of the same name replace earlier ones.
    """
    aliases: dict[str, str] = {}
    environment: dict[str, str] = {}

    for line_num, raw_line in enumerate(content.splitlines(), 1):
        line = raw_line.strip()
        try:
            kind, name, value = parse_config_line(line, dialect=dialect)
        except ParseSkipped as e:
            if line.startswith(("alias ", "export ", "set ")):
                logger.debug("Skipped line %d: %s", line_num, e)
            continue

        if kind == "alias":
            aliases[name] = value
        else:
            environment[name] = value

    return aliases, environment


def read_config_file(path: Path) -> ConfigFileInfo:
    """Read a single rc/profile file.

    Raises:
        SourceUnavailable: the path is missing, not a regular file, or unreadable.
    """
    try:
        if not path.is_file():
            raise SourceUnavailable(path, "not a regular file")
        stat = path.stat()
        content = path.read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        raise SourceUnavailable(path, str(e)) from e

    return ConfigFileInfo(
        path=str(path),
        last_modified=datetime.fromtimestamp(stat.st_mtime),
        raw_content=content,
    )


def load_config_files(paths: list[str]) -> dict[str, ConfigFileInfo]:
    """Read every existing file among ``~/``-form ``paths``, keyed by that form."""
    files = {}
    for display_path in paths:
        path = expand_path(display_path)
        try:
            if not path.exists():
                continue
            if path.is_dir():
                logger.debug("Skipping config directory %s", path)
                continue
        except OSError as e:
            logger.warning("Config file unavailable: %s: %s", path, e)
            continue
        try:
            files[display_path] = read_config_file(path)
        except SourceUnavailable as e:
            logger.warning("Config file unavailable: %s", e)
    return files
