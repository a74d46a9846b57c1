"""shell-insights: profile a developer from shell history and configuration."""

__version__ = "0.1.0"
