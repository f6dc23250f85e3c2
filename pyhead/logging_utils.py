"""
Logging helpers for pyhead.

Stdout carries the copied prefix, so diagnostics always go to stderr
and stay quiet unless --debug is given.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional, TextIO

_LEVELS = (logging.WARNING, logging.INFO, logging.DEBUG)


def level_for(debug: int) -> int:
    """
    Map a --debug count to a logging level.

    debug == 0 -> WARNING
    debug == 1 -> INFO
    debug >= 2 -> DEBUG
    """

    return _LEVELS[max(0, min(debug, len(_LEVELS) - 1))]


def configure_logging(debug: int, stream: Optional[TextIO] = None) -> None:
    logging.basicConfig(
        level=level_for(debug),
        format="%(levelname)s %(name)s: %(message)s",
        stream=stream or sys.stderr,
    )
