"""
config.py

Responsibility: Hold every workshop-wide setting in one explicit, typed structure.

Defaults describe the Java "pictures analyzer" workshop. A YAML file can
override any of them, which is also how tests point the tool at a local
remote and a temporary root directory.
"""

from __future__ import annotations

import shlex
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any

import yaml

DEFAULT_CONFIG_FILENAME = "workshop.yaml"


class ConfigError(ValueError):
    pass


@dataclass(frozen=True)
class Capability:
    """An external command the run cannot do without."""

    command: str
    hint: str


DEFAULT_CAPABILITIES: tuple[Capability, ...] = (
    Capability(
        command="git",
        hint="Git command line tool is not installed in your computer. You need to install it.",
    ),
    Capability(
        command="java",
        hint="Java is not installed in your computer. You need to install it.",
    ),
)


@dataclass(frozen=True)
class WorkshopConfig:
    project_name: str = "pictures-analyzer-java"
    repository_url: str = "https://github.com/jcraftsman/{project_name}.git"
    root_dir: Path = field(default_factory=Path.cwd)
    default_iteration: int = 1
    branch_prefix: str = "workshop-it"
    wip_message: str = "work in progress (automatic commit)"
    build_command: tuple[str, ...] = ("./gradlew", "clean")
    capabilities: tuple[Capability, ...] = DEFAULT_CAPABILITIES
    workshop_title: str = "Real world Evolutionary Design with Java"

    @property
    def remote_url(self) -> str:
        return self.repository_url.format(project_name=self.project_name)

    @property
    def project_dir(self) -> Path:
        return self.root_dir / self.project_name

    def branch_for(self, iteration: int) -> str:
        return f"{self.branch_prefix}{iteration}"


def _require_str(data: dict[str, Any], key: str, default: str) -> str:
    value = data.get(key)
    if value is None:
        return default
    if not isinstance(value, (str, int, float)) or isinstance(value, bool):
        raise ConfigError(f"`{key}` must be a string.")
    text = str(value).strip()
    if not text:
        raise ConfigError(f"`{key}` must not be empty.")
    return text


def _parse_build_command(raw: Any) -> tuple[str, ...]:
    if isinstance(raw, str):
        parts = shlex.split(raw)
    elif isinstance(raw, list) and all(isinstance(p, (str, int, float)) for p in raw):
        parts = [str(p) for p in raw]
    else:
        raise ConfigError("`build_command` must be a string or a list of strings.")
    if not parts:
        raise ConfigError("`build_command` must not be empty.")
    return tuple(parts)


def _parse_capabilities(raw: Any) -> tuple[Capability, ...]:
    if not isinstance(raw, list):
        raise ConfigError("`capabilities` must be a list.")
    out: list[Capability] = []
    for item in raw:
        if isinstance(item, str):
            command = item.strip()
            hint = f"{command} is not installed in your computer. You need to install it."
        elif isinstance(item, dict):
            command = str(item.get("command") or "").strip()
            hint = str(item.get("hint") or f"{command} is not installed in your computer. You need to install it.")
        else:
            raise ConfigError("Each capability must be a command name or a mapping with `command`.")
        if not command:
            raise ConfigError("Capability entries require a non-empty `command`.")
        out.append(Capability(command=command, hint=hint))
    return tuple(out)


def config_from_mapping(data: dict[str, Any], *, base: WorkshopConfig | None = None) -> WorkshopConfig:
    """
    Overlay a parsed YAML mapping onto `base` (or the built-in defaults).

    Unknown keys are ignored so a config file can carry notes for humans.
    """
    cfg = base or WorkshopConfig()
    changes: dict[str, Any] = {
        "project_name": _require_str(data, "project_name", cfg.project_name),
        "repository_url": _require_str(data, "repository_url", cfg.repository_url),
        "branch_prefix": _require_str(data, "branch_prefix", cfg.branch_prefix),
        "wip_message": _require_str(data, "wip_message", cfg.wip_message),
        "workshop_title": _require_str(data, "workshop_title", cfg.workshop_title),
    }

    if data.get("root_dir") is not None:
        changes["root_dir"] = Path(str(data["root_dir"])).expanduser()

    if data.get("default_iteration") is not None:
        raw = data["default_iteration"]
        if isinstance(raw, bool) or not isinstance(raw, int) or raw < 1:
            raise ConfigError("`default_iteration` must be a positive integer.")
        changes["default_iteration"] = raw

    if data.get("build_command") is not None:
        changes["build_command"] = _parse_build_command(data["build_command"])

    if data.get("capabilities") is not None:
        changes["capabilities"] = _parse_capabilities(data["capabilities"])

    return replace(cfg, **changes)


def load_config(config_path: str | Path | None = None, *, root_dir: str | Path | None = None) -> WorkshopConfig:
    """
    Build the run configuration.

    Resolution order (later wins):
    - built-in defaults
    - `config_path`, or `<root_dir>/workshop.yaml` when no path is given and that file exists
    - `root_dir` (the `--root` CLI flag)

    A relative `root_dir` inside the file is resolved against the file's directory.
    """
    base = WorkshopConfig()
    if root_dir is not None:
        base = replace(base, root_dir=Path(root_dir))

    path: Path | None
    if config_path is not None:
        path = Path(config_path)
        if not path.exists():
            raise ConfigError(f"Config file does not exist: {path}")
    else:
        candidate = base.root_dir / DEFAULT_CONFIG_FILENAME
        path = candidate if candidate.exists() else None

    cfg = base
    if path is not None:
        try:
            data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Config file is not valid YAML: {path}") from e
        if not isinstance(data, dict):
            raise ConfigError("Config file must be a mapping/object at the top level.")
        cfg = config_from_mapping(data, base=base)
        if not cfg.root_dir.is_absolute():
            cfg = replace(cfg, root_dir=path.parent / cfg.root_dir)

    if root_dir is not None:
        cfg = replace(cfg, root_dir=Path(root_dir))

    return replace(cfg, root_dir=cfg.root_dir.resolve())
