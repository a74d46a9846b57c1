"""Tests for insight aggregation and scoring."""

from collections import Counter
from datetime import datetime

import pytest

from conftest import make_records
from shell_insights.aggregator import (
    COMMAND_COMPLEXITY,
    COMMAND_VARIETY,
    WORKFLOW_COMPLEXITY,
    ShellAccumulator,
    build_insights,
    common_workflows,
    peak_hours,
    recommendations,
)
from shell_insights.core import CommandRecord, PluginInfo, ShellConfig


def _fold(commands, installed, **kwargs):
    return ShellAccumulator().fold_all(make_records(commands, **kwargs), installed)


class TestProficiency:
    def test_python_share(self):
        commands = [
            "python app.py",
            "python -m venv .venv",
            "python manage.py migrate",
            "python setup.py sdist",
            "ls",
            "cd src",
            "vim notes.txt",
            "echo hi",
            "cat README",
            "clear",
        ]
        insights = build_insights(_fold(commands, {"python"}), {"python"})

        assert insights.technical_profile.proficiency["python"] == pytest.approx(0.4)

    def test_scores_in_unit_interval(self):
        commands = ["git status", "git push", "docker ps", "python x.py", "pip install y"]
        installed = {"git", "docker", "python", "pip"}
        insights = build_insights(_fold(commands, installed), installed)

        for score in insights.technical_profile.proficiency.values():
            assert 0.0 <= score <= 1.0
        for score in insights.work_patterns.productivity.values():
            assert 0.0 <= score <= 1.0

    def test_tracked_limit_applied_after_usage(self):
        commands = ["git a", "git b", "git c", "docker a", "docker b", "vim a"]
        installed = {"git", "docker", "vim"}
        insights = build_insights(_fold(commands, installed), installed, tracked_limit=2)

        assert set(insights.technical_profile.proficiency) == {"git", "docker"}


class TestEmptyInput:
    def test_zero_commands(self):
        insights = build_insights(ShellAccumulator(), {"python"})

        assert dict(insights.technical_profile.proficiency) == {}
        assert dict(insights.work_patterns.productivity) == {}
        assert insights.technical_profile.primary_role is None
        assert insights.technical_profile.tech_stack == frozenset()
        assert insights.work_patterns.peak_hours == ()
        assert insights.work_patterns.common_workflows == ()

    def test_no_tool_usage_leaves_role_unset(self):
        insights = build_insights(_fold(["ls", "cd"], {"python"}), {"python"})
        assert insights.technical_profile.primary_role is None


class TestTechnicalProfile:
    def test_primary_role_is_most_used(self):
        commands = ["node a.js", "python a.py", "python b.py"]
        installed = {"node", "python"}
        insights = build_insights(_fold(commands, installed), installed)
        assert insights.technical_profile.primary_role == "Python Developer"

    def test_tie_goes_to_first_encountered(self):
        commands = ["node a.js", "python a.py", "python b.py", "node b.js"]
        installed = {"node", "python"}
        insights = build_insights(_fold(commands, installed), installed)
        assert insights.technical_profile.primary_role == "Node Developer"

    def test_tech_stack_and_secondary_skills(self):
        commands = ["python a.py", "git status", "docker ps", "git log"]
        installed = {"python", "ruby", "git", "docker"}
        insights = build_insights(_fold(commands, installed), installed)
        profile = insights.technical_profile

        assert profile.primary_role == "Git Developer"
        assert profile.tech_stack == frozenset({"python"})
        assert profile.secondary_skills == frozenset({"docker"})

    def test_uninstalled_tools_not_attributed(self):
        insights = build_insights(_fold(["python a.py"], set()), set())
        assert insights.technical_profile.tech_stack == frozenset()
        assert dict(insights.technical_profile.proficiency) == {}


class TestPeakHours:
    def test_single_hour(self):
        acc = _fold(["ls", "cd", "pwd"], set(), hour=14)
        assert peak_hours(acc.hours) == (14,)

    def test_at_most_three_busiest_first(self):
        hours = Counter({9: 2, 10: 5, 11: 1, 14: 5, 22: 3})
        assert peak_hours(hours) == (10, 14, 22)

    def test_ties_prefer_earlier_hour(self):
        hours = Counter({23: 1, 3: 1, 12: 1, 7: 1})
        assert peak_hours(hours) == (3, 7, 12)


class TestProductivity:
    def test_command_variety(self):
        insights = build_insights(_fold(["ls", "ls", "cd", "pwd"], set()), set())
        assert insights.work_patterns.productivity[COMMAND_VARIETY] == pytest.approx(0.75)

    def test_workflow_complexity(self):
        commands = ["git commit -m x", "make", "ls", "pytest"]
        insights = build_insights(_fold(commands, set()), set())
        assert insights.work_patterns.productivity[WORKFLOW_COMPLEXITY] == pytest.approx(0.75)

    def test_workflow_complexity_is_clamped(self):
        # each command matches build, deploy and test
        commands = ["docker build --target test ."] * 3
        insights = build_insights(_fold(commands, set()), set())
        assert insights.work_patterns.productivity[WORKFLOW_COMPLEXITY] == 1.0

    def test_command_complexity(self):
        commands = ["cat a | grep b", "ls", "git commit -m x", "pwd"]
        insights = build_insights(_fold(commands, set()), set())
        # the pipeline scores 1.5, the commit 0.5
        assert insights.work_patterns.productivity[COMMAND_COMPLEXITY] == pytest.approx(0.5)


class TestWorkflowsAndRecommendations:
    def test_common_workflows_above_threshold(self):
        prefixes = Counter({"git status": 12, "docker ps": 11, "ls -la": 3})
        assert common_workflows(prefixes, threshold=10) == (
            "You frequently use 'git status'. Consider creating an alias for this pattern",
            "You frequently use 'docker ps'. Consider creating an alias for this pattern",
        )

    def test_common_workflows_from_history(self):
        acc = _fold(["git status"] * 4 + ["ls"], set())
        insights = build_insights(acc, set(), workflow_threshold=3)
        assert insights.work_patterns.common_workflows == (
            "You frequently use 'git status'. Consider creating an alias for this pattern",
        )

    def test_recommendations(self):
        plugin = PluginInfo("omz", "/x", datetime(2025, 1, 1))
        configs = {
            "bash": ShellConfig(),
            "zsh": ShellConfig(
                aliases={f"a{i}": "x" for i in range(5)},
                plugins=(plugin, plugin, plugin),
            ),
        }
        tips = recommendations(configs)
        assert len(tips) == 2
        assert all("bash" in tip for tip in tips)


class TestAccumulator:
    def test_merge_sums_counts(self):
        bash = _fold(["python a.py", "ls"], {"python"}, hour=9)
        zsh = _fold(["python b.py", "ls"], {"python"}, hour=21)

        merged = bash.merge(zsh)

        assert merged.total == 4
        assert merged.tool_usage["python"] == 2
        assert merged.hours == Counter({9: 2, 21: 2})
        assert len(merged.distinct) == 3
        # inputs untouched
        assert bash.total == 2
        assert zsh.total == 2

    def test_tool_usage_by_kind(self):
        commands = ["vim a", "vim b", "python x.py", "npm install", "make"]
        installed = {"vim", "python", "npm", "make"}
        usage = build_insights(_fold(commands, installed), installed).tool_usage

        assert dict(usage.editors) == {"vim": 2}
        assert dict(usage.languages) == {"python": 1}
        assert dict(usage.build_tools) == {"npm": 1, "make": 1}

    def test_category_counts(self):
        insights = build_insights(_fold(["git status", "rm -rf x", "ls"], set()), set())
        assert insights.category_counts["file"] == 2
        assert insights.category_counts["development"] == 1

    def test_placeholder_records_count_towards_capture_hour(self):
        record = CommandRecord("ls", datetime(2025, 1, 1, 8, 0))
        acc = ShellAccumulator()
        acc.fold(record, set())
        assert peak_hours(acc.hours) == (8,)
