"""Command catalog, discovered from the modules of this package."""

from __future__ import annotations

import importlib
import logging
import pkgutil
from typing import Any, Callable

logger = logging.getLogger(__name__)


def discover_commands() -> dict[str, Callable[..., Any]]:
    """Collect every ``@command`` handler defined in this package's modules."""
    commands: dict[str, Callable[..., Any]] = {}
    for module_info in pkgutil.iter_modules(__path__):
        module = importlib.import_module(f"{__name__}.{module_info.name}")
        for obj in vars(module).values():
            name = getattr(obj, "command_name", None)
            if isinstance(name, str) and callable(obj):
                commands[name] = obj
    logger.debug("Discovered %d commands", len(commands))
    return commands
