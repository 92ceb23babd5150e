"""
vcs.py

Responsibility: Isolate every `git` invocation behind a narrow interface.

`VersionControl` is what the setup steps depend on; `GitClient` is the real
implementation. Tests substitute a fake that records calls instead of
touching a repository.
"""

from __future__ import annotations

import logging
import os
import subprocess
from pathlib import Path
from typing import Protocol

from workshop.errors import BranchNotFoundError, CloneFailureError, VersionControlError

logger = logging.getLogger(__name__)

FALLBACK_IDENTITY_NAME = "workshop-setup"
FALLBACK_IDENTITY_EMAIL = "workshop-setup@example.invalid"


class VersionControl(Protocol):
    def is_working_copy(self, workdir: Path) -> bool: ...

    def is_clean(self, workdir: Path) -> bool: ...

    def status(self, workdir: Path) -> str: ...

    def stage_all(self, workdir: Path) -> None: ...

    def commit(self, workdir: Path, message: str) -> str: ...

    def clone(self, url: str, destination: Path) -> None: ...

    def branch_exists(self, workdir: Path, branch: str) -> bool: ...

    def checkout(self, workdir: Path, branch: str) -> None: ...

    def current_branch(self, workdir: Path) -> str: ...


def _run(
    cmd: list[str],
    *,
    cwd: Path,
    env: dict[str, str] | None = None,
    error_cls: type[VersionControlError] = VersionControlError,
) -> str:
    """
    Run a git command and return stdout, raising `error_cls` with git's own output on failure.
    """
    logger.debug("running %s in %s", " ".join(cmd), cwd)
    try:
        result = subprocess.run(cmd, cwd=str(cwd), env=env, check=True, capture_output=True, text=True)
    except subprocess.CalledProcessError as e:
        output = (e.stderr or "").strip() or (e.stdout or "").strip()
        raise error_cls(f"Command failed: {' '.join(cmd)}\n\n{output}") from e
    except OSError as e:
        raise error_cls(f"Could not run {' '.join(cmd)} in {cwd}: {e}") from e
    return result.stdout


def _ok(cmd: list[str], *, cwd: Path) -> bool:
    """Return True when the command exits with status 0, discarding its output."""
    result = subprocess.run(cmd, cwd=str(cwd), stdout=subprocess.DEVNULL, stderr=subprocess.DEVNULL)
    return result.returncode == 0


class GitClient:
    """`VersionControl` backed by the git command line tool."""

    def __init__(self, executable: str = "git") -> None:
        self._git = executable

    def is_working_copy(self, workdir: Path) -> bool:
        """True only when `workdir` is the top level of its own repository."""
        if not workdir.is_dir():
            return False
        result = subprocess.run(
            [self._git, "rev-parse", "--show-toplevel"],
            cwd=str(workdir),
            check=False,
            capture_output=True,
            text=True,
        )
        if result.returncode != 0:
            return False
        return Path(result.stdout.strip()).resolve() == workdir.resolve()

    def is_clean(self, workdir: Path) -> bool:
        # Porcelain output lists staged, unstaged and untracked entries alike.
        return not self._run(["status", "--porcelain"], cwd=workdir).strip()

    def status(self, workdir: Path) -> str:
        return self._run(["status"], cwd=workdir)

    def stage_all(self, workdir: Path) -> None:
        self._run(["add", "-A"], cwd=workdir)

    def commit(self, workdir: Path, message: str) -> str:
        self._run(["commit", "-m", message], cwd=workdir, env=self._commit_env(workdir))
        return self._run(["rev-parse", "HEAD"], cwd=workdir).strip()

    def clone(self, url: str, destination: Path) -> None:
        destination.parent.mkdir(parents=True, exist_ok=True)
        _run([self._git, "clone", url, str(destination)], cwd=destination.parent, error_cls=CloneFailureError)

    def branch_exists(self, workdir: Path, branch: str) -> bool:
        return any(
            _ok([self._git, "show-ref", "--verify", "--quiet", ref], cwd=workdir)
            for ref in (f"refs/heads/{branch}", f"refs/remotes/origin/{branch}")
        )

    def checkout(self, workdir: Path, branch: str) -> None:
        if not self.branch_exists(workdir, branch):
            raise BranchNotFoundError(branch)
        # A remote-only branch gets a local tracking branch through git's DWIM checkout.
        self._run(["checkout", branch], cwd=workdir)

    def current_branch(self, workdir: Path) -> str:
        return self._run(["rev-parse", "--abbrev-ref", "HEAD"], cwd=workdir).strip()

    def _run(self, args: list[str], *, cwd: Path, env: dict[str, str] | None = None) -> str:
        return _run([self._git, *args], cwd=cwd, env=env)

    def _config_value(self, workdir: Path, key: str) -> str:
        result = subprocess.run(
            [self._git, "config", "--get", key],
            cwd=str(workdir),
            check=False,
            capture_output=True,
            text=True,
        )
        return result.stdout.strip()

    def _commit_env(self, workdir: Path) -> dict[str, str]:
        """
        Environment for the automatic commit.

        Uses a fixed fallback identity when user.name / user.email are not
        configured. Configured or exported identity values are left alone.
        """
        env = os.environ.copy()
        if not self._config_value(workdir, "user.name"):
            env.setdefault("GIT_AUTHOR_NAME", FALLBACK_IDENTITY_NAME)
            env.setdefault("GIT_COMMITTER_NAME", FALLBACK_IDENTITY_NAME)
        if not self._config_value(workdir, "user.email"):
            env.setdefault("GIT_AUTHOR_EMAIL", FALLBACK_IDENTITY_EMAIL)
            env.setdefault("GIT_COMMITTER_EMAIL", FALLBACK_IDENTITY_EMAIL)
        return env
