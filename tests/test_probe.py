"""Tests for tool probing."""

import subprocess
from unittest.mock import patch

from shell_insights.catalog import TOOL_CATALOG
from shell_insights.core import ToolSpec
from shell_insights.probe import probe_tool, probe_tools


def _completed(returncode):
    return subprocess.CompletedProcess(args=[], returncode=returncode)


class TestProbeTool:
    def test_success_means_installed(self):
        spec = ToolSpec("git", "git --version", "vcs")
        with patch("shell_insights.probe.subprocess.run", return_value=_completed(0)) as run:
            presence = probe_tool(spec, timeout=1.0)

        assert presence.installed is True
        args, kwargs = run.call_args
        assert args[0] == ["git", "--version"]
        assert kwargs["timeout"] == 1.0

    def test_nonzero_exit_means_absent(self):
        spec = ToolSpec("git", "git --version", "vcs")
        with patch("shell_insights.probe.subprocess.run", return_value=_completed(1)):
            assert probe_tool(spec, timeout=1.0).installed is False

    def test_missing_binary_means_absent(self):
        spec = ToolSpec("nosuchtool", "definitely-not-a-real-binary-xyz --version", "build")
        assert probe_tool(spec, timeout=5.0).installed is False

    def test_timeout_means_absent(self):
        spec = ToolSpec("slow", "slow --version", "build")
        with patch(
            "shell_insights.probe.subprocess.run",
            side_effect=subprocess.TimeoutExpired(cmd="slow", timeout=0.1),
        ):
            assert probe_tool(spec, timeout=0.1).installed is False

    def test_permission_denied_means_absent(self):
        spec = ToolSpec("locked", "locked --version", "build")
        with patch("shell_insights.probe.subprocess.run", side_effect=PermissionError):
            assert probe_tool(spec, timeout=1.0).installed is False

    def test_default_timeout_from_environment(self, monkeypatch):
        monkeypatch.setenv("SHELL_INSIGHTS_PROBE_TIMEOUT", "0.5")
        spec = ToolSpec("git", "git --version", "vcs")
        with patch("shell_insights.probe.subprocess.run", return_value=_completed(0)) as run:
            probe_tool(spec)
        assert run.call_args.kwargs["timeout"] == 0.5


class TestProbeTools:
    def test_presence_in_catalog_order(self):
        catalog = (
            ToolSpec("git", "git --version", "vcs"),
            ToolSpec("docker", "docker --version", "devops"),
            ToolSpec("vim", "vim --version", "editor"),
        )

        def fake_run(argv, **kwargs):
            return _completed(0 if argv[0] in ("git", "vim") else 127)

        with patch("shell_insights.probe.subprocess.run", side_effect=fake_run):
            presence = probe_tools(catalog, timeout=1.0)

        assert list(presence) == ["git", "docker", "vim"]
        assert presence == {"git": True, "docker": False, "vim": True}

    def test_empty_catalog(self):
        assert probe_tools((), timeout=1.0) == {}


class TestCatalog:
    def test_names_are_unique(self):
        names = [spec.name for spec in TOOL_CATALOG]
        assert len(names) == len(set(names))

    def test_invocation_defaults_to_name(self):
        by_name = {spec.name: spec for spec in TOOL_CATALOG}
        assert by_name["python"].invocation == "python"
        assert by_name["python"].package_manager == "pip"
        assert by_name["maven"].invocation == "mvn"
