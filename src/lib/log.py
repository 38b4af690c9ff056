"""
Centralized logging using Loguru with context-aware verbosity.

This module provides a LOG() function that respects the verbosity of the
currently connected state without requiring explicit state passing through
every rule builder and renderer.

Features:
- Context-aware logging tied to a connected verbosity source
- Falls back to appsettings.verbosity when nothing is connected
- Rich formatting with timestamps, colors, and metadata
- Thread-safe using contextvars

Usage:
    from simpledown.lib.log import LOG, state_connectToLogger

    # Before parsing (any object or mapping with a verbosity):
    state_connectToLogger({"verbosity": 3})

    # Anywhere in that context:
    LOG("This message appears if verbosity >= 1", level=1)
    LOG("Parser construction details appear if verbosity >= 2", level=2)
    LOG("Per-match trace appears if verbosity >= 3", level=3)
"""

from collections.abc import Mapping
from loguru import logger
from typing import Any, Optional
from contextvars import ContextVar
import sys

from ..config import appsettings

# Context variable to hold the current verbosity source
_program_state: ContextVar[Optional[Any]] = ContextVar('program_state', default=None)

# Configure loguru with simpledown-specific format
logger_format = (
    "<green>{time:HH:mm:ss}</green> │ "
    "<level>{level: <5}</level> │ "
    "<cyan>{function: <20}</cyan> @ "
    "<cyan>{line: <4}</cyan> ║ "
    "<level>{message}</level>"
)

logger.remove()  # Remove default handler
logger.add(sys.stderr, format=logger_format, level="DEBUG")


def state_connectToLogger(state: Any) -> None:
    """
    Connect a verbosity source to the logging context.

    Args:
        state: Object with a ``verbosity`` attribute, or a mapping with a
               ``verbosity`` key (a parse state dict works). Pass None to
               disconnect and fall back to appsettings.verbosity.

    Example:
        state = {"verbosity": 2}
        state_connectToLogger(state)
        default_parse("# Hello\\n", state)
    """
    _program_state.set(state)


def verbosity_get() -> int:
    """Resolve the verbosity currently in effect"""
    state = _program_state.get()

    if isinstance(state, Mapping) and 'verbosity' in state:
        return int(state['verbosity'])
    if state is not None and hasattr(state, 'verbosity'):
        return int(state.verbosity)
    return appsettings.verbosity


def LOG(message: str, level: int = 1, **kwargs: Any) -> None:
    """
    Log message if the current verbosity allows.

    Args:
        message: Log message to display
        level: Minimum verbosity level required (1=normal, 2=verbose, 3=debug)
        **kwargs: Additional loguru metadata

    Verbosity levels:
        0 = Silent (default)
        1 = Normal output
        2 = Verbose (parser construction, configuration warnings)
        3 = Debug (every rule match)

    Example:
        LOG("Parser ready", level=2)
        LOG("Matched 'heading' consuming 12 chars", level=3)
    """
    if verbosity_get() >= level:
        logger.opt(depth=1).debug(message, **kwargs)
