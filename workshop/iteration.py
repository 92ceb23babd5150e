"""
iteration.py

Responsibility: Bring the exercise working copy to a given workshop iteration.

High-level flow:
1) Check the required external commands exist (before touching anything)
2) Clone the exercise repo, or commit any pending learner work if it already exists
3) Check out `workshop-it<N>`
4) Clean the build

Each step is a function returning a `StepResult`. `setup_iteration` runs them
in order and stops at the first failure; it never retries.
"""

from __future__ import annotations

import logging
import shutil
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable

from workshop.build import BuildTool
from workshop.capabilities import Which, require_capabilities
from workshop.config import WorkshopConfig
from workshop.errors import SetupError, VersionControlError
from workshop.messages import detached_commit_notice, pending_changes_notice
from workshop.vcs import VersionControl

logger = logging.getLogger(__name__)

Echo = Callable[[str], None]


@dataclass(frozen=True)
class StepResult:
    step: str
    ok: bool
    detail: str = ""
    error: SetupError | None = None


@dataclass
class SetupReport:
    iteration: int
    branch: str
    project_dir: Path
    steps: list[StepResult] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return bool(self.steps) and all(s.ok for s in self.steps)

    @property
    def failed_step(self) -> StepResult | None:
        return next((s for s in self.steps if not s.ok), None)

    @property
    def error(self) -> SetupError | None:
        failed = self.failed_step
        return failed.error if failed else None


def branch_name_for(iteration: int, prefix: str = "workshop-it") -> str:
    """
    Map an iteration number to its branch: 1 -> "workshop-it1".

    Raises ValueError for anything but a positive integer.
    """
    if isinstance(iteration, bool) or not isinstance(iteration, int) or iteration < 1:
        raise ValueError(f"Iteration number must be a positive integer, got {iteration!r}")
    return f"{prefix}{iteration}"


def _run_step(name: str, action: Callable[[], str]) -> StepResult:
    logger.debug("step %s: start", name)
    try:
        detail = action()
    except SetupError as e:
        logger.debug("step %s: failed: %s", name, e)
        return StepResult(step=name, ok=False, error=e)
    logger.debug("step %s: ok %s", name, detail)
    return StepResult(step=name, ok=True, detail=detail)


def check_capabilities(config: WorkshopConfig, *, which: Which = shutil.which) -> StepResult:
    def action() -> str:
        require_capabilities(config.capabilities, which=which)
        return ", ".join(c.command for c in config.capabilities)

    return _run_step("capabilities", action)


def clone_working_copy(vcs: VersionControl, config: WorkshopConfig) -> StepResult:
    def action() -> str:
        vcs.clone(config.remote_url, config.project_dir)
        return config.remote_url

    return _run_step("clone", action)


def verify_working_copy(vcs: VersionControl, workdir: Path) -> StepResult:
    def action() -> str:
        if not vcs.is_working_copy(workdir):
            raise VersionControlError(
                f"{workdir} exists but is not a clone of the exercise repository. "
                "Move it out of the way and run the setup again."
            )
        return str(workdir)

    return _run_step("working_copy", action)


def reconcile(vcs: VersionControl, workdir: Path, message: str, *, echo: Echo = print) -> StepResult:
    """
    Commit every pending change in `workdir` on its current branch.

    A clean working copy only gets its status printed; no commit is created,
    so repeated runs never pile up empty commits. The result's detail is the
    new commit hash, or "" when nothing needed committing.
    """

    def action() -> str:
        if vcs.is_clean(workdir):
            echo(vcs.status(workdir))
            return ""
        current = vcs.current_branch(workdir)
        echo(pending_changes_notice(current))
        vcs.stage_all(workdir)
        commit = vcs.commit(workdir, message)
        if current == "HEAD":
            echo(detached_commit_notice(commit))
        return commit

    return _run_step("reconcile", action)


def checkout_iteration(vcs: VersionControl, workdir: Path, branch: str) -> StepResult:
    def action() -> str:
        vcs.checkout(workdir, branch)
        return branch

    return _run_step("checkout", action)


def clean_build(build: BuildTool, workdir: Path, *, echo: Echo = print) -> StepResult:
    def action() -> str:
        output = build.clean(workdir)
        if output.strip():
            echo(output.rstrip("\n"))
        return "clean"

    return _run_step("build", action)


def setup_iteration(
    iteration: int,
    config: WorkshopConfig,
    *,
    vcs: VersionControl,
    build: BuildTool,
    which: Which = shutil.which,
    echo: Echo = print,
) -> SetupReport:
    """
    Prepare the working copy for `iteration` and return what happened.

    The report is failed as soon as one step fails; later steps are not run.
    An existing path must be a clone of its own; it is then always reconciled
    before the checkout.
    """
    branch = branch_name_for(iteration, config.branch_prefix)
    workdir = config.project_dir
    report = SetupReport(iteration=iteration, branch=branch, project_dir=workdir)

    steps: list[Callable[[], StepResult]] = [lambda: check_capabilities(config, which=which)]
    if workdir.exists():
        steps.append(lambda: verify_working_copy(vcs, workdir))
        steps.append(lambda: reconcile(vcs, workdir, config.wip_message, echo=echo))
    else:
        steps.append(lambda: clone_working_copy(vcs, config))
    steps.append(lambda: checkout_iteration(vcs, workdir, branch))
    steps.append(lambda: clean_build(build, workdir, echo=echo))

    for step in steps:
        result = step()
        report.steps.append(result)
        if not result.ok:
            break
    return report
