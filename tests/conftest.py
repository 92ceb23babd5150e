from __future__ import annotations

import subprocess
from pathlib import Path

import pytest


def git(*args: str, cwd: Path) -> str:
    result = subprocess.run(["git", *args], cwd=str(cwd), check=True, capture_output=True, text=True)
    return result.stdout


@pytest.fixture(autouse=True)
def isolated_git(tmp_path_factory, monkeypatch):
    """Keep the user's git config out of the tests and give commits an identity."""
    home = tmp_path_factory.mktemp("home")
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("GIT_CONFIG_NOSYSTEM", "1")
    monkeypatch.setenv("GIT_CONFIG_GLOBAL", str(home / ".gitconfig"))
    monkeypatch.setenv("GIT_AUTHOR_NAME", "Learner")
    monkeypatch.setenv("GIT_AUTHOR_EMAIL", "learner@example.invalid")
    monkeypatch.setenv("GIT_COMMITTER_NAME", "Learner")
    monkeypatch.setenv("GIT_COMMITTER_EMAIL", "learner@example.invalid")


@pytest.fixture
def origin_repo(tmp_path) -> Path:
    """
    A stand-in for the exercise repository with two iteration branches.

    workshop-it1: README.md, a.txt, b.txt
    workshop-it2: workshop-it1 + step2.txt
    """
    repo = tmp_path / "origin" / "pictures-analyzer-java"
    repo.mkdir(parents=True)
    git("init", "-q", cwd=repo)
    (repo / "README.md").write_text("exercise\n", encoding="utf-8")
    (repo / "a.txt").write_text("a\n", encoding="utf-8")
    (repo / "b.txt").write_text("b\n", encoding="utf-8")
    git("add", "-A", cwd=repo)
    git("commit", "-q", "-m", "initial", cwd=repo)
    git("branch", "workshop-it1", cwd=repo)
    git("checkout", "-q", "-b", "workshop-it2", cwd=repo)
    (repo / "step2.txt").write_text("step 2\n", encoding="utf-8")
    git("add", "-A", cwd=repo)
    git("commit", "-q", "-m", "iteration 2", cwd=repo)
    git("checkout", "-q", "workshop-it1", cwd=repo)
    return repo


@pytest.fixture
def workshop_root(tmp_path) -> Path:
    root = tmp_path / "workshop"
    root.mkdir()
    return root

