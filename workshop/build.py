"""
build.py

Responsibility: Run the exercise project's clean build.

The default command is the Gradle wrapper shipped in the exercise repo
(`./gradlew clean`). Output is captured and surfaced verbatim on failure.
"""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from typing import Protocol, Sequence

from workshop.errors import BuildFailureError

logger = logging.getLogger(__name__)


class BuildTool(Protocol):
    def clean(self, workdir: Path) -> str: ...


class CommandBuildTool:
    """`BuildTool` that runs a fixed command inside the working copy."""

    def __init__(self, command: Sequence[str]) -> None:
        if not command:
            raise ValueError("build command must not be empty")
        self._command = list(command)

    @property
    def command(self) -> list[str]:
        return list(self._command)

    def clean(self, workdir: Path) -> str:
        logger.debug("running %s in %s", " ".join(self._command), workdir)
        try:
            result = subprocess.run(
                self._command,
                cwd=str(workdir),
                check=True,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
            )
        except subprocess.CalledProcessError as e:
            raise BuildFailureError(f"Command failed: {' '.join(self._command)}\n\n{e.stdout}") from e
        except OSError as e:
            raise BuildFailureError(f"Could not run build command {' '.join(self._command)}: {e}") from e
        return result.stdout
