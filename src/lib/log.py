"""
Centralized logging using Loguru with context-aware verbosity.

LOG() respects the verbosity of the ProgramState connected to the current
context, so rendering code deep inside lib/ can report progress without
having the state passed to it.

Usage:
    from docdown.lib.log import LOG, state_connectToLogger

    state_connectToLogger(state)

    LOG("Rendering README...", level=1)
    LOG("Rendered 3 examples", level=2)
    LOG("Truncated main body at line 12", level=3)

Without a connected state (e.g., when the library is used directly or from
tests) LOG() stays silent.
"""

from loguru import logger
from typing import Any, Optional
from contextvars import ContextVar
import sys

_program_state: ContextVar[Optional[Any]] = ContextVar('program_state', default=None)

logger_format = (
    "<green>{time:HH:mm:ss}</green> │ "
    "<level>{level: <5}</level> │ "
    "<cyan>{module: <10}</cyan> : "
    "<cyan>{function: <22}</cyan> ║ "
    "<level>{message}</level>"
)

logger.remove()
logger.add(sys.stderr, format=logger_format, level="DEBUG")


def state_connectToLogger(state: Any) -> None:
    """
    Connect a ProgramState to the logging context.

    Args:
        state: ProgramState instance with verbosity attribute
    """
    _program_state.set(state)


def LOG(message: str, level: int = 1, **kwargs: Any) -> None:
    """
    Log message if current state's verbosity allows.

    Args:
        message: Log message to display
        level: Minimum verbosity level required (1=normal, 2=verbose, 3=debug)
        **kwargs: Additional loguru metadata
    """
    state = _program_state.get()

    if state and hasattr(state, 'verbosity') and state.verbosity >= level:
        logger.opt(depth=1).debug(message, **kwargs)


def WARN(message: str, **kwargs: Any) -> None:
    """Log a warning regardless of verbosity, as long as a state is connected"""
    if _program_state.get() is not None:
        logger.opt(depth=1).warning(message, **kwargs)
