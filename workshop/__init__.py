"""
workshop package

This package implements workshop-setup, the bootstrap tool learners run
before each workshop iteration.

Key responsibilities are split across modules:
- `config.py`: explicit run configuration, optionally read from YAML
- `capabilities.py`: checks that git and the build runtime are installed
- `vcs.py`: git operations behind the `VersionControl` interface
- `build.py`: the clean build behind the `BuildTool` interface
- `iteration.py`: the setup steps and the fail-fast driver
- `messages.py`: Jinja2-rendered notices and banner
- `cli.py`: CLI entrypoint and exit codes
"""

from __future__ import annotations

__all__ = ["__version__"]

__version__ = "0.1.0"
