"""Shared fixtures for skillsync tests."""

import shutil
import subprocess
import textwrap
from pathlib import Path

import pytest

from skills.repository import SkillRepository


def write_skill(directory: Path, name: str, content: str) -> Path:
    """Write a skill file with dedented content."""
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / f"{name}.md"
    path.write_text(textwrap.dedent(content).strip(), encoding="utf-8")
    return path


def git(*args: str, cwd: Path) -> str:
    """Run git in a test and return stripped stdout."""
    result = subprocess.run(
        ["git", *args], cwd=cwd, capture_output=True, text=True, check=True
    )
    return result.stdout.strip()


@pytest.fixture
def commands_dir(tmp_path):
    return tmp_path / "commands"


@pytest.fixture
def meta_file(tmp_path):
    return tmp_path / "skill_meta.json"


@pytest.fixture
def repo(commands_dir, meta_file):
    return SkillRepository(commands_dir, meta_file)


@pytest.fixture
def git_env(tmp_path, monkeypatch):
    """Isolate git from the user's configuration and give it an identity."""
    if shutil.which("git") is None:
        pytest.skip("git is not installed")

    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("GIT_CONFIG_NOSYSTEM", "1")
    monkeypatch.setenv("GIT_AUTHOR_NAME", "Skill Tester")
    monkeypatch.setenv("GIT_AUTHOR_EMAIL", "tester@example.com")
    monkeypatch.setenv("GIT_COMMITTER_NAME", "Skill Tester")
    monkeypatch.setenv("GIT_COMMITTER_EMAIL", "tester@example.com")
    monkeypatch.setenv("GIT_TERMINAL_PROMPT", "0")
    return home


@pytest.fixture
def bare_remote(tmp_path, git_env):
    """A local bare repository standing in for the remote."""
    remote = tmp_path / "remote.git"
    subprocess.run(["git", "init", "--bare", str(remote)], capture_output=True, check=True)
    return remote
