"""
Command-line option model for pyhead.

This module turns a raw argument vector into a validated Config plus
the ordered list of input references. It never touches the inputs
themselves; every failure here is a UsageError raised before any file
is opened.
"""

from __future__ import annotations

import argparse
import re
from typing import List, Optional, Sequence, Tuple

from . import __version__
from .config import DEFAULT_LINE_COUNT, Config, Verbosity
from .errors import (
    InvalidArgumentError,
    MissingArgumentValueError,
    UnrecognizedOptionError,
    UsageError,
)

_COUNT_RE = re.compile(r"[0-9]+")
_END_OF_OPTIONS = "--"

# Options whose value is always the next argument, even if it starts with "-".
_SHORT_VALUE_OPTION_RE = re.compile(r"-[qvz]*[cn]")
_LONG_VALUE_OPTIONS = ("--bytes", "--lines")


class _OptionParser(argparse.ArgumentParser):
    """
    ArgumentParser that raises instead of exiting.

    Errors that argparse reports through error() (rather than through
    ArgumentError) still surface as UsageError.
    """

    def error(self, message: str):  # type: ignore[override]
        raise UsageError(message)


def build_arg_parser() -> argparse.ArgumentParser:
    parser = _OptionParser(
        prog="pyhead",
        usage="%(prog)s [OPTION]... [FILE]...",
        description=(
            f"Print the first {DEFAULT_LINE_COUNT} lines of each FILE to "
            "standard output. With more than one FILE, precede each with a "
            "header giving the file name. A FILE of '-' reads standard input."
        ),
        exit_on_error=False,
    )

    parser.add_argument(
        "-c",
        "--bytes",
        metavar="NUM",
        help="Print the first NUM bytes of each file.",
    )
    parser.add_argument(
        "-n",
        "--lines",
        metavar="NUM",
        help=f"Print the first NUM lines instead of the first {DEFAULT_LINE_COUNT}.",
    )

    # -q and -v share one destination so the last flag given wins.
    parser.add_argument(
        "-q",
        "--quiet",
        "--silent",
        dest="verbose",
        action="store_const",
        const=False,
        help="Never print headers giving file names.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        dest="verbose",
        action="store_const",
        const=True,
        help="Always print headers giving file names.",
    )
    parser.set_defaults(verbose=None)

    parser.add_argument(
        "-z",
        "--zero-terminated",
        action="store_true",
        help="Line delimiter is NUL, not newline.",
    )
    parser.add_argument(
        "--debug",
        action="count",
        default=0,
        help="Log diagnostics to stderr (can be specified multiple times).",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    return parser


def parse_options(argv: Sequence[str]) -> Tuple[Config, List[str]]:
    """
    Interpret argv (without the program name) as pyhead options.

    Returns the resolved Config and the input references in the order
    they were given. An empty input list is valid.
    """

    option_args, trailing = _split_at_end_of_options(_attach_option_values(argv))
    parser = build_arg_parser()

    try:
        namespace, extras = parser.parse_known_args(option_args)
    except argparse.ArgumentError as exc:
        raise _classify_argparse_error(exc) from exc

    inputs: List[str] = []
    for token in extras:
        if token.startswith("-") and token != "-":
            raise UnrecognizedOptionError(token)
        inputs.append(token)
    inputs.extend(trailing)

    lines = _parse_count("lines", namespace.lines)
    size = _parse_count("bytes", namespace.bytes)

    # Bytes wins whenever it is present, wherever it appears.
    if size is not None:
        count, mode = size, "bytes"
    else:
        count = DEFAULT_LINE_COUNT if lines is None else lines
        mode = "lines"

    config = Config(
        count=count,
        mode=mode,
        verbosity=_resolve_verbosity(namespace.verbose),
        line_terminator=b"\0" if namespace.zero_terminated else b"\n",
        debug=namespace.debug,
    )
    return config, inputs


def format_usage() -> str:
    return build_arg_parser().format_usage()


def _attach_option_values(argv: Sequence[str]) -> List[str]:
    """
    Glue each count option to the argument that follows it.

    "-n -5" becomes "-n-5" and "--lines -q" becomes "--lines=-q", so a
    following argument that looks like an option is still taken as the
    value, and is then rejected as an invalid count naming that token.
    """

    attached: List[str] = []
    index = 0
    while index < len(argv):
        token = argv[index]
        if token == _END_OF_OPTIONS:
            attached.extend(argv[index:])
            break
        # Only values that argparse would mistake for options need gluing.
        has_value = index + 1 < len(argv) and argv[index + 1].startswith("-")
        if has_value and _SHORT_VALUE_OPTION_RE.fullmatch(token):
            attached.append(token + argv[index + 1])
            index += 2
        elif has_value and _is_long_value_option(token):
            attached.append(f"{token}={argv[index + 1]}")
            index += 2
        else:
            attached.append(token)
            index += 1
    return attached


def _is_long_value_option(token: str) -> bool:
    # argparse accepts unambiguous prefixes such as --lin.
    if len(token) < 3 or "=" in token:
        return False
    return any(option.startswith(token) for option in _LONG_VALUE_OPTIONS)


def _split_at_end_of_options(argv: List[str]) -> Tuple[List[str], List[str]]:
    if _END_OF_OPTIONS not in argv:
        return argv, []
    index = argv.index(_END_OF_OPTIONS)
    return argv[:index], argv[index + 1 :]


def _parse_count(option: str, token: Optional[str]) -> Optional[int]:
    if token is None:
        return None
    if not _COUNT_RE.fullmatch(token):
        raise InvalidArgumentError(option, token)
    return int(token)


def _resolve_verbosity(verbose: Optional[bool]) -> Verbosity:
    if verbose is None:
        return "auto"
    return "always" if verbose else "never"


def _classify_argparse_error(exc: argparse.ArgumentError) -> UsageError:
    option = exc.argument_name or "option"
    if exc.message == "expected one argument":
        return MissingArgumentValueError(option)
    return UsageError(str(exc))
