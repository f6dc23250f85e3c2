"""
Command-line interface for pyhead.

This module is responsible for wiring argument parsing, logging and
the prefix copier together, and for turning errors into exit codes.
"""

from __future__ import annotations

import io
import logging
import os
import sys
from typing import List, Optional

from .copier import head_files
from .errors import HeadError, UsageError
from .logging_utils import configure_logging
from .options import format_usage, parse_options

LOG = logging.getLogger(__name__)

PROG = "pyhead"

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2
EXIT_INTERRUPTED = 130


def main(argv: Optional[List[str]] = None) -> int:
    if argv is None:
        argv = sys.argv[1:]

    try:
        config, inputs = parse_options(argv)
    except UsageError as exc:
        sys.stderr.write(format_usage())
        print(f"{PROG}: error: {exc}", file=sys.stderr)
        return EXIT_USAGE

    configure_logging(config.debug)
    LOG.debug("Parsed options: %s, inputs: %s", config, inputs)

    try:
        # stdin is passed as-is; it is only touched when "-" is an input.
        head_files(config, inputs, sys.stdout.buffer, sys.stdin)
    except KeyboardInterrupt:
        # Graceful shutdown on Ctrl+C
        return EXIT_INTERRUPTED
    except BrokenPipeError:
        # The reader went away; stay quiet like other filters do.
        _discard_stdout()
        return EXIT_FAILURE
    except HeadError as exc:
        sys.stdout.flush()
        print(f"{PROG}: error: {exc}", file=sys.stderr)
        return EXIT_FAILURE

    return EXIT_OK


def _discard_stdout() -> None:
    """Point stdout at devnull so the flush at interpreter exit cannot fail again."""

    try:
        fileno = sys.stdout.fileno()
    except (AttributeError, io.UnsupportedOperation):
        return
    devnull = os.open(os.devnull, os.O_WRONLY)
    os.dup2(devnull, fileno)
    os.close(devnull)


if __name__ == "__main__":  # pragma: no cover - manual invocation
    raise SystemExit(main())
