"""Exception hierarchy for shell-insights.

None of these errors aborts an analysis run. Readers and parsers raise them at
the point of failure; the pipeline catches them per shell, per tool or per
line, logs them, and carries on with whatever data is left.
"""


class ShellInsightsError(Exception):
    """Base exception for all shell-insights errors."""


class SourceUnavailable(ShellInsightsError):
    """A history or config source is missing or unreadable.

    The shell it belongs to is treated as unused on this host.
    """

    def __init__(self, source, reason: str = "not found"):
        self.source = str(source)
        self.reason = reason
        super().__init__(f"{self.source}: {reason}")


class ProbeFailed(ShellInsightsError):
    """An external tool check did not succeed; the tool counts as absent."""

    def __init__(self, tool: str, reason: str):
        self.tool = tool
        self.reason = reason
        super().__init__(f"{tool}: {reason}")


class ParseSkipped(ShellInsightsError):
    """A config line is not a recognizable alias/export definition."""

    def __init__(self, line: str, reason: str):
        self.line = line
        self.reason = reason
        super().__init__(f"{reason}: {line!r}")
