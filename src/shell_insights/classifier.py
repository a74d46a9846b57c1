"""Map raw commands to semantic categories and installed tools.

Two kinds of rules exist:

- ``PrefixRule``: fires when the command's leading token starts with one of
  its prefixes. Used for the broad categories (development, system, file...).
- ``RegexRule``: fires when its pattern matches anywhere in the command. Used
  for workflow patterns (git operations, build, deploy, test).

Every rule is evaluated for every command and all matches are kept, so the
order of the rule tables never changes the result.
"""

import os
import re
from dataclasses import dataclass
from typing import Iterable, Union

from .catalog import TOOL_CATALOG
from .core import Category, ToolSpec


@dataclass(frozen=True)
class PrefixRule:
    tag: Category
    prefixes: tuple[str, ...]

    def matches(self, command: str) -> bool:
        token = leading_token(command)
        if not token:
            return False
        return token.startswith(self.prefixes)


@dataclass(frozen=True)
class RegexRule:
    tag: Category
    pattern: re.Pattern

    def matches(self, command: str) -> bool:
        return self.pattern.search(command) is not None


Rule = Union[PrefixRule, RegexRule]

CATEGORY_RULES: tuple[Rule, ...] = (
    PrefixRule(Category.DEVELOPMENT, ("git", "docker", "npm", "go", "python", "node", "cargo", "make", "kubectl")),
    PrefixRule(Category.SYSTEM, ("sudo", "systemctl", "ps", "top", "htop", "kill", "df", "du", "uname")),
    PrefixRule(Category.FILE, ("ls", "cd", "cp", "mv", "rm", "mkdir", "touch", "cat", "find", "chmod", "chown", "ln")),
    PrefixRule(Category.NETWORK, ("curl", "wget", "ssh", "scp", "ping", "rsync", "nc")),
    PrefixRule(Category.PACKAGE, ("apt", "brew", "dnf", "yum", "pacman", "pip", "gem")),
)

WORKFLOW_RULES: tuple[Rule, ...] = (
    RegexRule(Category.GIT_WORKFLOW, re.compile(r"git (commit|push|pull|merge)")),
    RegexRule(Category.BUILD, re.compile(r"(make|build|compile)")),
    RegexRule(Category.DEPLOY, re.compile(r"(deploy|kubectl|docker)")),
    RegexRule(Category.TEST, re.compile(r"test|spec|pytest")),
)

ALL_RULES: tuple[Rule, ...] = CATEGORY_RULES + WORKFLOW_RULES


def leading_token(command: str) -> str:
    """Return the basename of the first token, or "" for a blank command."""
    parts = command.split(None, 1)
    if not parts:
        return ""
    return os.path.basename(parts[0])


def classify(command: str, rules: Iterable[Rule] = ALL_RULES) -> frozenset:
    """Return every category and workflow tag whose rule fires for ``command``."""
    return frozenset(rule.tag for rule in rules if rule.matches(command))


def detect_tools(
    command: str,
    installed: Iterable[str],
    catalog: tuple[ToolSpec, ...] = TOOL_CATALOG,
) -> list[str]:
    """Return installed catalog tools referenced by ``command``, in catalog order.

    A tool is referenced when its invocation name or its package manager
    appears anywhere in the command.
    """
    installed = set(installed)
    found = []
    for spec in catalog:
        if spec.name not in installed:
            continue
        if spec.invocation in command or (spec.package_manager and spec.package_manager in command):
            found.append(spec.name)
    return found


def command_prefix(command: str) -> str | None:
    """Return the first two tokens of a command, or None if it has fewer."""
    parts = command.split()
    if len(parts) < 2:
        return None
    return " ".join(parts[:2])
