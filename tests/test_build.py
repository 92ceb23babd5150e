from __future__ import annotations

import sys

import pytest

from workshop.build import CommandBuildTool
from workshop.capabilities import require_capabilities, require_capability
from workshop.config import Capability
from workshop.errors import BuildFailureError, MissingCapabilityError


def test_clean_returns_output(tmp_path):
    tool = CommandBuildTool([sys.executable, "-c", "print('BUILD SUCCESSFUL')"])
    assert tool.clean(tmp_path).strip() == "BUILD SUCCESSFUL"


def test_clean_runs_in_working_copy(tmp_path):
    tool = CommandBuildTool([sys.executable, "-c", "import os; print(os.getcwd())"])
    assert tool.clean(tmp_path).strip() == str(tmp_path.resolve())


def test_failure_surfaces_output_verbatim(tmp_path):
    script = "import sys; print('FAILURE: compilation error'); sys.exit(3)"
    tool = CommandBuildTool([sys.executable, "-c", script])
    with pytest.raises(BuildFailureError) as exc:
        tool.clean(tmp_path)
    assert "FAILURE: compilation error" in str(exc.value)


def test_missing_wrapper_is_build_failure(tmp_path):
    tool = CommandBuildTool(["./gradlew", "clean"])
    with pytest.raises(BuildFailureError):
        tool.clean(tmp_path)


def test_empty_command_rejected():
    with pytest.raises(ValueError):
        CommandBuildTool([])


def test_require_capability_found():
    cap = Capability(command="git", hint="install git")
    assert require_capability(cap, which=lambda c: "/usr/bin/git") == "/usr/bin/git"


def test_require_capability_missing_carries_hint():
    cap = Capability(command="java", hint="Java is not installed in your computer. You need to install it.")
    with pytest.raises(MissingCapabilityError) as exc:
        require_capability(cap, which=lambda c: None)
    assert exc.value.command == "java"
    assert str(exc.value) == cap.hint


def test_require_capabilities_stops_at_first_missing():
    seen: list[str] = []

    def which(command):
        seen.append(command)
        return None

    caps = [Capability("git", "install git"), Capability("java", "install java")]
    with pytest.raises(MissingCapabilityError):
        require_capabilities(caps, which=which)
    assert seen == ["git"]
