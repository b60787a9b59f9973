"""
Log routing for pygenetic records.

The library logs through ``loguru.logger`` under the ``pygenetic`` name and
never configures sinks itself. Applications that want to see the simulator's
records call ``configure_logging``.
"""

import sys
from typing import Any

from loguru import logger

LOG_FORMAT = (
    "<green>{time:HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan> | "
    "<level>{message}</level>"
)


def configure_logging(level: str = "INFO", sink: Any = None) -> int:
    """Send pygenetic records at ``level`` or above to ``sink``.

    Args:
        level: Minimum level (DEBUG shows per-generation and per-selection records)
        sink: Any loguru sink; stderr if None

    Returns:
        Handler id, for ``logger.remove(handler_id)``
    """
    target = sink if sink is not None else sys.stderr
    colorize = target is sys.stderr and sys.stderr.isatty()
    return logger.add(
        target,
        level=level,
        format=LOG_FORMAT,
        filter="pygenetic",
        colorize=colorize,
    )
