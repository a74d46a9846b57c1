"""Shared test fixtures for shell-insights."""

from datetime import datetime

import pytest

from shell_insights.core import CommandRecord
from shell_insights.history import clean_history_line
from shell_insights.classifier import classify

# 2023-11-14 22:13:20 UTC
EPOCH = 1700000000


@pytest.fixture
def fake_home(tmp_path, monkeypatch):
    """An empty home directory that every path lookup resolves against."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("SHELL_INSIGHTS_HOME", str(home))
    for shell in ("BASH", "ZSH", "FISH"):
        monkeypatch.delenv(f"SHELL_INSIGHTS_{shell}_HISTORY", raising=False)
    monkeypatch.delenv("SHELL_INSIGHTS_FULL_COMMAND", raising=False)
    monkeypatch.delenv("SHELL_INSIGHTS_WORKFLOW_THRESHOLD", raising=False)
    return home


@pytest.fixture
def bash_home(fake_home):
    """A home with bash history (including HISTTIMEFORMAT stamps), rc files and plugins."""
    (fake_home / ".bash_history").write_text(
        "ls -la\n"
        "#1700000000\n"
        "git commit -m fix\n"
        "\n"
        "   \n"
        "python manage.py test\n"
        "docker build .\n",
        encoding="utf-8",
    )
    (fake_home / ".bashrc").write_text(
        "# ~/.bashrc\n"
        "alias ll='ls -la'\n"
        "alias gs=\"git status\"\n"
        "export PATH=$PATH:/x\n"
        "export EDITOR=vim\n"
        "alias broken\n"
        "if [ -f ~/.bash_aliases ]; then\n"
        "    . ~/.bash_aliases\n"
        "fi\n",
        encoding="utf-8",
    )
    (fake_home / ".bash_aliases").write_text("alias ll='ls -lah'\n", encoding="utf-8")
    (fake_home / ".bash_it").mkdir()
    return fake_home


@pytest.fixture
def zsh_home(fake_home):
    """A home with an extended-format zsh history and oh-my-zsh."""
    (fake_home / ".zsh_history").write_text(
        f": {EPOCH}:0;git push origin main\n"
        f": {EPOCH + 60}:0;kubectl get pods\n"
        "npm install\n",
        encoding="utf-8",
    )
    (fake_home / ".zshrc").write_text(
        "export ZSH=\"$HOME/.oh-my-zsh\"\n"
        "plugins=(git docker)\n"
        "alias k=kubectl\n",
        encoding="utf-8",
    )
    (fake_home / ".oh-my-zsh").mkdir()
    (fake_home / ".zinit").mkdir()
    return fake_home


@pytest.fixture
def fish_home(fake_home):
    """A home with fish history, config.fish and conf.d drop-ins."""
    history_dir = fake_home / ".local" / "share" / "fish"
    history_dir.mkdir(parents=True)
    (history_dir / "fish_history").write_text(
        "- cmd: cargo build --release\n"
        f"  when: {EPOCH}\n"
        "- cmd: ls\n"
        f"  when: {EPOCH + 5}\n"
        "  paths:\n"
        "    - src/\n",
        encoding="utf-8",
    )
    config_dir = fake_home / ".config" / "fish"
    (config_dir / "conf.d").mkdir(parents=True)
    (config_dir / "functions").mkdir()
    (config_dir / "config.fish").write_text(
        "set -gx EDITOR nvim\n"
        "set -g fish_greeting ''\n"
        "alias gco 'git checkout'\n",
        encoding="utf-8",
    )
    (config_dir / "conf.d" / "z.fish").write_text("# z\n", encoding="utf-8")
    (config_dir / "conf.d" / "fzf.fish").write_text("# fzf\n", encoding="utf-8")
    (config_dir / "conf.d" / "README.md").write_text("not a plugin\n", encoding="utf-8")
    return fake_home


def make_records(commands, hour=14, full_command=True):
    """Build classified records the way the history reader would."""
    records = []
    for i, line in enumerate(commands):
        text = clean_history_line(line, full_command=full_command)
        records.append(CommandRecord(
            text=text,
            approximate_time=datetime(2025, 1, 15, hour, i % 60),
            categories=classify(text),
            timestamp_known=True,
        ))
    return records


@pytest.fixture
def sample_snapshot(bash_home, zsh_home):
    """A finished analysis of the bash and zsh fixture homes."""
    from shell_insights.pipeline import run_analysis

    return run_analysis(
        installed={"git": True, "python": True, "docker": True, "vim": False},
        full_command=True,
        now=datetime(2025, 1, 15, 10, 30),
    )
