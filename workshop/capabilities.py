"""
capabilities.py

Responsibility: Verify that the external commands a run depends on are installed.

Checks happen before any filesystem mutation so a missing tool never leaves
a half-prepared working copy behind.
"""

from __future__ import annotations

import logging
import shutil
from typing import Callable, Iterable

from workshop.config import Capability
from workshop.errors import MissingCapabilityError

logger = logging.getLogger(__name__)

Which = Callable[[str], "str | None"]


def require_capability(capability: Capability, *, which: Which = shutil.which) -> str:
    """
    Return the resolved path of `capability.command` or raise MissingCapabilityError.
    """
    resolved = which(capability.command)
    if not resolved:
        raise MissingCapabilityError(capability.command, capability.hint)
    logger.debug("found %s at %s", capability.command, resolved)
    return resolved


def require_capabilities(capabilities: Iterable[Capability], *, which: Which = shutil.which) -> None:
    for capability in capabilities:
        require_capability(capability, which=which)
