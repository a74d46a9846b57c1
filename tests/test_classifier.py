"""Tests for command classification and tool detection."""

import re

from shell_insights.classifier import (
    PrefixRule,
    RegexRule,
    classify,
    command_prefix,
    detect_tools,
    leading_token,
)
from shell_insights.core import Category, ToolSpec


class TestClassify:
    def test_git_commit(self):
        tags = classify("git commit -m x")
        assert Category.DEVELOPMENT in tags
        assert Category.GIT_WORKFLOW in tags

    def test_rm_is_file(self):
        assert Category.FILE in classify("rm -rf tmp")

    def test_multiple_workflow_patterns(self):
        tags = classify("docker build -t app:test .")
        assert {Category.DEVELOPMENT, Category.BUILD, Category.DEPLOY, Category.TEST} <= tags

    def test_unmatched_command(self):
        assert classify("echo hello") == frozenset()

    def test_empty_command(self):
        assert classify("") == frozenset()

    def test_prefix_applies_to_leading_token_only(self):
        # "ls" appears but is not the leading token
        assert Category.FILE not in classify("echo ls")

    def test_absolute_path_uses_basename(self):
        assert Category.DEVELOPMENT in classify("/usr/bin/git status")

    def test_sudo_is_system(self):
        assert Category.SYSTEM in classify("sudo apt update")

    def test_network_and_package(self):
        assert Category.NETWORK in classify("curl -sSL https://example.com")
        assert Category.PACKAGE in classify("brew install jq")

    def test_deterministic(self):
        command = "git pull && make test"
        assert classify(command) == classify(command)


class TestRules:
    def test_prefix_rule(self):
        rule = PrefixRule(Category.FILE, ("ls", "cd"))
        assert rule.matches("ls -la")
        assert rule.matches("cd")
        assert not rule.matches("echo cd")
        assert not rule.matches("   ")

    def test_regex_rule_matches_anywhere(self):
        rule = RegexRule(Category.TEST, re.compile(r"pytest"))
        assert rule.matches("python -m pytest tests/")
        assert not rule.matches("python main.py")

    def test_custom_rules(self):
        rules = (PrefixRule(Category.SYSTEM, ("htop",)),)
        assert classify("htop", rules=rules) == frozenset({Category.SYSTEM})


class TestDetectTools:
    def test_only_installed_tools(self):
        assert detect_tools("python app.py", installed={"python"}) == ["python"]
        assert detect_tools("python app.py", installed=set()) == []

    def test_package_manager_alias(self):
        assert detect_tools("pip install requests", installed={"python"}) == ["python"]

    def test_multiple_tools(self):
        found = detect_tools("docker run -it python:3.12", installed={"docker", "python", "node"})
        assert found == ["python", "docker"]

    def test_empty_package_manager_never_matches(self):
        catalog = (ToolSpec("java", "java -version", "language"),)
        assert detect_tools("ls", installed={"java"}, catalog=catalog) == []

    def test_invocation_differs_from_name(self):
        catalog = (ToolSpec("rust", "rustc --version", "language", invocation="rustc", package_manager="cargo"),)
        assert detect_tools("cargo build", installed={"rust"}, catalog=catalog) == ["rust"]
        assert detect_tools("rustc main.rs", installed={"rust"}, catalog=catalog) == ["rust"]


def test_command_prefix():
    assert command_prefix("git status --short") == "git status"
    assert command_prefix("ls") is None


def test_leading_token():
    assert leading_token("  /usr/local/bin/python3 x.py") == "python3"
    assert leading_token("") == ""
