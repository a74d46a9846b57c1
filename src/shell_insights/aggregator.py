"""Fold classified commands into the technical profile and work patterns.

Each shell's history is folded into its own ``ShellAccumulator``. The
pipeline merges the accumulators once, after every shell has been read, and
``build_insights`` turns the merged counts into scores. Nothing here keeps
state between runs.

All ratios use the total number of commands as denominator. When that total
is zero the ratio is left out instead of being reported as 0 or NaN.
"""

from collections import Counter
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterable, Mapping

from .catalog import BUILD_KIND, EDITOR_KIND, LANGUAGE_KIND, TOOL_CATALOG
from .classifier import command_prefix, detect_tools
from .config import DEFAULT_WORKFLOW_THRESHOLD
from .core import (
    Category,
    CommandRecord,
    Insights,
    ShellConfig,
    TechnicalProfile,
    ToolSpec,
    ToolUsage,
    WORKFLOW_TAGS,
    WorkPatterns,
)

MAX_PEAK_HOURS = 3
TRACKED_TOOL_LIMIT = 10
MIN_ALIASES = 5
MIN_PLUGINS = 3

COMMAND_VARIETY = "Command Variety"
WORKFLOW_COMPLEXITY = "Workflow Complexity"
COMMAND_COMPLEXITY = "Command Complexity"

_REDIRECTIONS = ("|", ">", "<")


@dataclass
class ShellAccumulator:
    """Running counts for one stream of commands."""

    total: int = 0
    distinct: set = field(default_factory=set)
    hours: Counter = field(default_factory=Counter)
    categories: Counter = field(default_factory=Counter)
    tool_usage: Counter = field(default_factory=Counter)  # insertion order = first encounter
    prefixes: Counter = field(default_factory=Counter)
    complexity: float = 0.0

    def fold(self, record: CommandRecord, installed: Iterable[str], catalog: tuple[ToolSpec, ...] = TOOL_CATALOG) -> None:
        """Add one command to the running counts."""
        command = record.text
        self.total += 1
        self.distinct.add(command)
        self.hours[record.approximate_time.hour] += 1
        self.categories.update(record.categories)

        for tool in detect_tools(command, installed, catalog):
            self.tool_usage[tool] += 1

        prefix = command_prefix(command)
        if prefix:
            self.prefixes[prefix] += 1

        if any(c in command for c in _REDIRECTIONS):
            self.complexity += 1
        if len(command.split()) > 2:
            self.complexity += 0.5

    def fold_all(self, records: Iterable[CommandRecord], installed: Iterable[str], catalog: tuple[ToolSpec, ...] = TOOL_CATALOG) -> "ShellAccumulator":
        installed = frozenset(installed)
        for record in records:
            self.fold(record, installed, catalog)
        return self

    def merge(self, other: "ShellAccumulator") -> "ShellAccumulator":
        """Return a new accumulator holding the counts of both."""
        merged = ShellAccumulator(
            total=self.total + other.total,
            distinct=self.distinct | other.distinct,
            complexity=self.complexity + other.complexity,
        )
        for name in ("hours", "categories", "tool_usage", "prefixes"):
            counter = getattr(merged, name)
            counter.update(getattr(self, name))
            counter.update(getattr(other, name))
        return merged

    @property
    def workflow_matches(self) -> int:
        return sum(self.categories[tag] for tag in WORKFLOW_TAGS)


def _ratio(count: float, total: int) -> float:
    return min(1.0, max(0.0, count / total))


def _most_used(usage: Mapping[str, int]) -> str | None:
    """Highest count wins; among equal counts the first-encountered one."""
    best, best_count = None, 0
    for name, count in usage.items():
        if count > best_count:
            best, best_count = name, count
    return best


def _top_tools(usage: Counter, limit: int) -> list[str]:
    # Counter.most_common keeps insertion order among equal counts.
    return [name for name, count in usage.most_common(limit) if count > 0]


def peak_hours(hours: Mapping[int, int], limit: int = MAX_PEAK_HOURS) -> tuple[int, ...]:
    """Return the busiest hours of day, busiest first, earlier hour on ties."""
    ranked = sorted(sorted(hours), key=lambda h: hours[h], reverse=True)
    return tuple(h for h in ranked[:limit] if hours[h] > 0)


def productivity_metrics(acc: ShellAccumulator) -> dict[str, float]:
    if acc.total <= 0:
        return {}
    return {
        COMMAND_VARIETY: _ratio(len(acc.distinct), acc.total),
        WORKFLOW_COMPLEXITY: _ratio(acc.workflow_matches, acc.total),
        COMMAND_COMPLEXITY: _ratio(acc.complexity, acc.total),
    }


def common_workflows(prefixes: Counter, threshold: int) -> tuple[str, ...]:
    frequent = sorted(
        ((p, c) for p, c in prefixes.items() if c > threshold),
        key=lambda item: (-item[1], item[0]),
    )
    return tuple(
        f"You frequently use '{prefix}'. Consider creating an alias for this pattern"
        for prefix, _ in frequent
    )


def recommendations(shell_configs: Mapping[str, ShellConfig]) -> tuple[str, ...]:
    tips = []
    for shell, config in shell_configs.items():
        if len(config.aliases) < MIN_ALIASES:
            tips.append(f"Consider adding more aliases to your {shell} configuration to improve productivity")
        if len(config.plugins) < MIN_PLUGINS:
            tips.append(f"Explore popular {shell} plugins to enhance your shell experience")
    return tuple(tips)


def role_title(tool: str) -> str:
    return f"{tool.title()} Developer"


def build_insights(
    acc: ShellAccumulator,
    installed: Iterable[str],
    shell_configs: Mapping[str, ShellConfig] | None = None,
    catalog: tuple[ToolSpec, ...] = TOOL_CATALOG,
    workflow_threshold: int = DEFAULT_WORKFLOW_THRESHOLD,
    tracked_limit: int = TRACKED_TOOL_LIMIT,
) -> Insights:
    """Turn merged counts into the technical profile, work patterns and tool usage."""
    installed = frozenset(installed)
    kinds = {spec.name: spec.kind for spec in catalog}
    usage = Counter({name: count for name, count in acc.tool_usage.items() if count > 0})

    primary = _most_used(usage)

    tech_stack = frozenset(
        name for name in usage
        if name in installed and kinds.get(name) == LANGUAGE_KIND
    )
    secondary = frozenset(
        name for name in usage
        if kinds.get(name) != LANGUAGE_KIND and name != primary
    )

    proficiency = {}
    if acc.total > 0:
        for name in _top_tools(usage, tracked_limit):
            proficiency[name] = _ratio(usage[name], acc.total)

    profile = TechnicalProfile(
        primary_role=role_title(primary) if primary else None,
        tech_stack=tech_stack,
        secondary_skills=secondary,
        proficiency=MappingProxyType(proficiency),
    )

    patterns = WorkPatterns(
        peak_hours=peak_hours(acc.hours),
        productivity=MappingProxyType(productivity_metrics(acc)),
        common_workflows=common_workflows(acc.prefixes, workflow_threshold),
    )

    def by_kind(kind: str) -> Mapping[str, int]:
        return MappingProxyType({n: c for n, c in usage.items() if kinds.get(n) == kind})

    tool_usage = ToolUsage(
        editors=by_kind(EDITOR_KIND),
        languages=by_kind(LANGUAGE_KIND),
        build_tools=by_kind(BUILD_KIND),
    )

    return Insights(
        technical_profile=profile,
        work_patterns=patterns,
        tool_usage=tool_usage,
        category_counts=MappingProxyType(category_counts(acc)),
        recommendations=recommendations(shell_configs or {}),
    )


def category_counts(acc: ShellAccumulator) -> dict[str, int]:
    """Category tag counts in enum order, skipping tags never seen."""
    return {tag.value: acc.categories[tag] for tag in Category if acc.categories[tag]}
