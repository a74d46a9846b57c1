"""Export analysis snapshots to JSON-ready dicts, JSON and Markdown."""

import json

from .core import AnalysisSnapshot, CommandRecord, PluginInfo, ShellConfig

MAX_LISTED_ALIASES = 5
BAR_WIDTH = 20


def _iso(value):
    return value.isoformat() if value else None


def record_to_dict(record: CommandRecord) -> dict:
    return {
        "text": record.text,
        "approximate_time": _iso(record.approximate_time),
        "timestamp_known": record.timestamp_known,
        "categories": sorted(c.value for c in record.categories),
    }


def _plugin_to_dict(plugin: PluginInfo) -> dict:
    return {
        "name": plugin.name,
        "source_location": plugin.source_location,
        "last_updated": _iso(plugin.last_updated),
    }


def shell_config_to_dict(config: ShellConfig, include_content: bool = False) -> dict:
    files = {}
    for key, info in config.config_files.items():
        files[key] = {"path": info.path, "last_modified": _iso(info.last_modified)}
        if include_content:
            files[key]["raw_content"] = info.raw_content
    return {
        "config_files": files,
        "aliases": dict(config.aliases),
        "environment": dict(config.environment),
        "plugins": [_plugin_to_dict(p) for p in config.plugins],
    }


def insights_to_dict(snapshot: AnalysisSnapshot) -> dict:
    insights = snapshot.insights
    profile = insights.technical_profile
    patterns = insights.work_patterns
    usage = insights.tool_usage
    return {
        "technical_profile": {
            "primary_role": profile.primary_role,
            "tech_stack": sorted(profile.tech_stack),
            "secondary_skills": sorted(profile.secondary_skills),
            "proficiency": dict(profile.proficiency),
        },
        "work_patterns": {
            "peak_hours": list(patterns.peak_hours),
            "productivity": dict(patterns.productivity),
            "common_workflows": list(patterns.common_workflows),
        },
        "tool_usage": {
            "editors": dict(usage.editors),
            "languages": dict(usage.languages),
            "build_tools": dict(usage.build_tools),
        },
        "category_counts": dict(insights.category_counts),
        "recommendations": list(insights.recommendations),
    }


def snapshot_to_dict(snapshot: AnalysisSnapshot, include_commands: bool = True) -> dict:
    """Convert a snapshot to a JSON-serializable dict."""
    histories = {}
    for shell, records in snapshot.histories_by_shell.items():
        entry = {"command_count": len(records)}
        if include_commands:
            entry["commands"] = [record_to_dict(r) for r in records]
        histories[shell] = entry

    return {
        "generated_at": _iso(snapshot.generated_at),
        "histories_by_shell": histories,
        "shell_configs": {
            shell: shell_config_to_dict(config)
            for shell, config in snapshot.shell_configs.items()
        },
        "insights": insights_to_dict(snapshot),
        "installed_tools": {t.name: t.installed for t in snapshot.installed_tools},
        "diagnostics": list(snapshot.diagnostics),
    }


def snapshot_to_json(snapshot: AnalysisSnapshot, include_commands: bool = False) -> str:
    return json.dumps(snapshot_to_dict(snapshot, include_commands), indent=2, ensure_ascii=False)


def _bar(value: float) -> str:
    filled = max(0, min(BAR_WIDTH, int(value * BAR_WIDTH)))
    return "█" * filled + "░" * (BAR_WIDTH - filled)


def snapshot_to_markdown(snapshot: AnalysisSnapshot) -> str:
    """Render a snapshot as a Markdown report."""
    insights = snapshot.insights
    profile = insights.technical_profile
    patterns = insights.work_patterns
    lines = ["# Shell Insights", ""]

    if snapshot.generated_at:
        lines.append(f"**Generated:** {snapshot.generated_at.strftime('%Y-%m-%d %H:%M')}")
    lines.append(f"**Commands analyzed:** {snapshot.total_commands}")
    lines.append("")

    lines.extend(["## Overview", ""])
    if not snapshot.histories_by_shell:
        lines.append("No shell history found.")
    for shell, records in snapshot.histories_by_shell.items():
        lines.append(f"### {shell}")
        lines.append("")
        lines.append(f"- Commands: {len(records)}")
        config = snapshot.shell_configs.get(shell)
        if config:
            lines.append(f"- Aliases: {len(config.aliases)}")
            lines.append(f"- Plugins: {len(config.plugins)}")
            lines.append(f"- Environment variables: {len(config.environment)}")
            for plugin in config.plugins:
                lines.append(f"  - plugin `{plugin.name}` (from {plugin.source_location})")
            for name, value in list(config.aliases.items())[:MAX_LISTED_ALIASES]:
                lines.append(f"  - alias `{name}` → `{value}`")
        lines.append("")

    lines.extend(["## Technical Profile", ""])
    lines.append(f"**Primary role:** {profile.primary_role or 'Not enough data'}")
    lines.append("")
    lines.append("**Tech stack:** " + (", ".join(sorted(profile.tech_stack)) or "none"))
    lines.append("")
    lines.append("**Secondary skills:** " + (", ".join(sorted(profile.secondary_skills)) or "none"))
    lines.append("")
    if profile.proficiency:
        lines.append("```")
        for name, level in sorted(profile.proficiency.items(), key=lambda kv: -kv[1]):
            lines.append(f"{name:<15} {_bar(level)} {level * 100:.1f}%")
        lines.append("```")
        lines.append("")

    lines.extend(["## Work Patterns", ""])
    for hour in patterns.peak_hours:
        lines.append(f"- Peak hour: {hour:02d}:00")
    if patterns.productivity:
        lines.append("")
        lines.append("```")
        for metric, value in patterns.productivity.items():
            lines.append(f"{metric:<20} {_bar(value)} {value * 100:.1f}%")
        lines.append("```")
    for workflow in patterns.common_workflows:
        lines.append(f"- {workflow}")
    lines.append("")

    usage = insights.tool_usage
    lines.extend(["## Tool Usage", ""])
    for title, counts in (("Editors", usage.editors), ("Languages", usage.languages), ("Build tools", usage.build_tools)):
        if counts:
            lines.append(f"**{title}:** " + ", ".join(f"{n} ({c})" for n, c in counts.items()))
            lines.append("")

    if insights.recommendations:
        lines.extend(["## Recommendations", ""])
        lines.extend(f"- {tip}" for tip in insights.recommendations)
        lines.append("")

    if snapshot.diagnostics:
        lines.extend(["## Diagnostics", ""])
        lines.extend(f"- {d}" for d in snapshot.diagnostics)
        lines.append("")

    return "\n".join(lines)
