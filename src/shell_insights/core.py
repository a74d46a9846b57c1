"""Core data models for shell-insights."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional

SUPPORTED_SHELLS = ("bash", "zsh", "fish")


class Category(str, Enum):
    """Semantic tags attached to a command. A command may carry several."""

    DEVELOPMENT = "development"
    SYSTEM = "system"
    FILE = "file"
    NETWORK = "network"
    PACKAGE = "package"

    # Workflow patterns
    GIT_WORKFLOW = "git_workflow"
    BUILD = "build"
    DEPLOY = "deploy"
    TEST = "test"


WORKFLOW_TAGS = frozenset({
    Category.GIT_WORKFLOW,
    Category.BUILD,
    Category.DEPLOY,
    Category.TEST,
})


def _empty_mapping() -> Mapping:
    return MappingProxyType({})


@dataclass(frozen=True)
class CommandRecord:
    """A single cleaned history entry."""

    text: str
    approximate_time: datetime
    categories: frozenset = frozenset()
    timestamp_known: bool = False  # False when approximate_time is the capture-time placeholder


@dataclass(frozen=True)
class ToolSpec:
    """A catalog entry describing how to probe for a tool and spot it in commands."""

    name: str
    probe: str  # e.g. "python --version"
    kind: str  # "language" | "build" | "devops" | "vcs" | "database" | "web" | "editor" | "shell"
    invocation: str = ""  # substring matched in commands; defaults to name
    package_manager: str = ""  # e.g. "pip" for python

    def __post_init__(self):
        if not self.invocation:
            object.__setattr__(self, "invocation", self.name)


@dataclass(frozen=True)
class ToolPresence:
    name: str
    installed: bool


@dataclass(frozen=True)
class ConfigFileInfo:
    path: str  # expanded filesystem path
    last_modified: datetime
    raw_content: str


@dataclass(frozen=True)
class PluginInfo:
    name: str
    source_location: str
    last_updated: datetime


@dataclass(frozen=True)
class ShellConfig:
    """Parsed configuration of one shell family."""

    config_files: Mapping[str, ConfigFileInfo] = field(default_factory=_empty_mapping)  # "~/.bashrc" -> info
    aliases: Mapping[str, str] = field(default_factory=_empty_mapping)
    environment: Mapping[str, str] = field(default_factory=_empty_mapping)
    plugins: tuple = ()

    def is_empty(self) -> bool:
        return not (self.config_files or self.aliases or self.environment or self.plugins)


@dataclass(frozen=True)
class TechnicalProfile:
    primary_role: Optional[str] = None
    tech_stack: frozenset = frozenset()
    secondary_skills: frozenset = frozenset()
    proficiency: Mapping[str, float] = field(default_factory=_empty_mapping)  # skill -> [0, 1]


@dataclass(frozen=True)
class WorkPatterns:
    peak_hours: tuple = ()  # up to 3 hours of day, busiest first
    productivity: Mapping[str, float] = field(default_factory=_empty_mapping)  # metric -> [0, 1]
    common_workflows: tuple = ()


@dataclass(frozen=True)
class ToolUsage:
    editors: Mapping[str, int] = field(default_factory=_empty_mapping)
    languages: Mapping[str, int] = field(default_factory=_empty_mapping)
    build_tools: Mapping[str, int] = field(default_factory=_empty_mapping)


@dataclass(frozen=True)
class Insights:
    technical_profile: TechnicalProfile = field(default_factory=TechnicalProfile)
    work_patterns: WorkPatterns = field(default_factory=WorkPatterns)
    tool_usage: ToolUsage = field(default_factory=ToolUsage)
    category_counts: Mapping[str, int] = field(default_factory=_empty_mapping)  # tag value -> commands
    recommendations: tuple = ()


@dataclass(frozen=True)
class AnalysisSnapshot:
    """The result of one full analysis run. Read-only once built."""

    histories_by_shell: Mapping[str, tuple] = field(default_factory=_empty_mapping)
    shell_configs: Mapping[str, ShellConfig] = field(default_factory=_empty_mapping)
    insights: Insights = field(default_factory=Insights)
    installed_tools: tuple = ()  # ToolPresence entries in catalog order
    diagnostics: tuple = ()  # per-shell failures, also written to the log
    generated_at: Optional[datetime] = None

    @property
    def total_commands(self) -> int:
        return sum(len(h) for h in self.histories_by_shell.values())
