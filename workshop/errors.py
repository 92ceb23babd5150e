"""
errors.py

Responsibility: The error taxonomy shared by every setup step.

Each step raises one of these; the driver in `iteration.py` turns them into
failed step results and the CLI turns a failed run into a non-zero exit.
"""

from __future__ import annotations


class SetupError(RuntimeError):
    """Base class for every failure that aborts an iteration setup."""


class MissingCapabilityError(SetupError):
    """A required external command is not available on PATH."""

    def __init__(self, command: str, hint: str) -> None:
        super().__init__(hint)
        self.command = command
        self.hint = hint


class VersionControlError(SetupError):
    pass


class CloneFailureError(VersionControlError):
    pass


class BranchNotFoundError(VersionControlError):
    def __init__(self, branch: str) -> None:
        super().__init__(f"Branch '{branch}' not found locally or on origin. Check the iteration number.")
        self.branch = branch


class BuildFailureError(SetupError):
    pass
