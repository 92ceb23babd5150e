"""
cli.py

Responsibility: CLI entrypoint for workshop-setup.

High-level flow:
1) Parse arguments and load `WorkshopConfig`
2) Run `setup_iteration` with the real git client and build tool
3) Print the completion banner, or the first error, and pick the exit code

Orchestration lives in `iteration.py`; this module only wires real
collaborators in and reports the outcome.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import TextIO

from workshop import __version__
from workshop.build import CommandBuildTool
from workshop.config import ConfigError, load_config
from workshop.iteration import setup_iteration
from workshop.messages import completion_banner
from workshop.vcs import GitClient

EXIT_OK = 0
EXIT_FAILURE = 1


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid iteration number: {value!r}") from None
    if number < 1:
        raise argparse.ArgumentTypeError(f"iteration number must be >= 1, got {number}")
    return number


def _error(message: str, *, stream: TextIO | None = None) -> None:
    print(f"Error: {message}", file=stream or sys.stderr)


def setup_cmd(args: argparse.Namespace) -> int:
    try:
        config = load_config(args.config, root_dir=args.root)
    except ConfigError as e:
        _error(str(e))
        return EXIT_FAILURE

    iteration = args.iteration if args.iteration is not None else config.default_iteration

    report = setup_iteration(
        iteration,
        config,
        vcs=GitClient(),
        build=CommandBuildTool(config.build_command),
    )
    if not report.ok:
        failed = report.failed_step
        step = failed.step if failed else "setup"
        _error(f"{step} step failed: {report.error}")
        return EXIT_FAILURE

    print(
        completion_banner(
            workshop_title=config.workshop_title,
            branch=report.branch,
            project_dir=str(report.project_dir),
        )
    )
    return EXIT_OK


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="workshop-setup",
        description="Clone the workshop exercise repo and move it to an iteration branch",
    )
    p.add_argument(
        "iteration",
        nargs="?",
        type=_positive_int,
        default=None,
        help="Iteration number to set up (default: 1, or `default_iteration` from the config)",
    )
    p.add_argument("--config", default=None, help="YAML config file (default: <root>/workshop.yaml if present)")
    p.add_argument("--root", default=None, help="Directory holding the exercise working copy (default: cwd)")
    p.add_argument("-v", "--verbose", action="store_true", help="Log every external command")
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    p.set_defaults(func=setup_cmd)
    return p


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    return int(args.func(args))


if __name__ == "__main__":
    raise SystemExit(main())
