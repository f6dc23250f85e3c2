"""
Prefix copying for pyhead.

For each input reference, in order, the copier acquires a binary
stream, optionally writes a "==> name <==" header, copies at most
config.count lines or bytes to the output, and releases the stream.
Running out of input early is never an error in either mode.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import IO, BinaryIO, Iterator, Optional, Sequence

from .config import Config
from .errors import InputReadError, UnreadableFileError

LOG = logging.getLogger(__name__)

STDIN_SENTINEL = "-"
STDIN_DISPLAY_NAME = "standard input"

_CHUNK_SIZE = 64 * 1024


def display_name(name: str) -> str:
    if name == STDIN_SENTINEL:
        return STDIN_DISPLAY_NAME
    return name


def format_header(name: str) -> bytes:
    return f"==> {display_name(name)} <==\n".encode("utf-8", "surrogateescape")


def binary_stdin(stdin: Optional[IO]) -> BinaryIO:
    """
    Return the byte stream behind stdin.

    Text streams such as sys.stdin expose it as .buffer; byte streams
    are returned unchanged. A closed stdin shows up as None.
    """

    if stdin is None:
        raise UnreadableFileError(STDIN_SENTINEL, "standard input is closed")
    return getattr(stdin, "buffer", stdin)


class _InputReader:
    """Read-only view of an input that reports read failures as InputReadError."""

    def __init__(self, stream: BinaryIO, name: str):
        self._stream = stream
        self._name = name

    def read(self, size: int = -1) -> bytes:
        try:
            return self._stream.read(size)
        except OSError as exc:
            raise InputReadError(display_name(self._name), exc.strerror or str(exc)) from exc

    def readline(self) -> bytes:
        try:
            return self._stream.readline()
        except OSError as exc:
            raise InputReadError(display_name(self._name), exc.strerror or str(exc)) from exc


@contextmanager
def open_input(name: str, stdin: Optional[IO]) -> Iterator[BinaryIO]:
    """
    Yield a readable binary stream for an input reference.

    The sentinel "-" yields stdin, which is borrowed and left open; it
    is only looked at when "-" is actually given. Named files are
    opened here and closed on every exit path.
    """

    if name == STDIN_SENTINEL:
        LOG.debug("Reading from standard input")
        yield binary_stdin(stdin)
        return

    try:
        stream = open(name, "rb")
    except OSError as exc:  # noqa: BLE001
        raise UnreadableFileError(name, exc.strerror or str(exc)) from exc

    LOG.debug("Opened %s", name)
    with stream:
        yield stream


def read_unit(stream: BinaryIO, terminator: bytes) -> bytes:
    """
    Read one line: everything up to and including the next terminator.

    At end of stream the remaining bytes are returned without a
    terminator, and b"" once nothing is left.
    """

    if terminator == b"\n":
        return stream.readline()

    unit = bytearray()
    while True:
        byte = stream.read(1)
        if not byte:
            break
        unit += byte
        if byte == terminator:
            break
    return bytes(unit)


def copy_lines(stream: BinaryIO, output: BinaryIO, count: int, terminator: bytes) -> int:
    written = 0
    while written < count:
        unit = read_unit(stream, terminator)
        if not unit:
            break
        output.write(unit)
        output.flush()
        written += 1
    return written


def copy_bytes(stream: BinaryIO, output: BinaryIO, count: int) -> int:
    written = 0
    while written < count:
        chunk = stream.read(min(count - written, _CHUNK_SIZE))
        if not chunk:
            break
        output.write(chunk)
        written += len(chunk)
    output.flush()
    return written


def copy_prefix(
    config: Config,
    name: str,
    output: BinaryIO,
    stdin: Optional[IO],
    header: bool = False,
) -> int:
    """
    Copy the configured prefix of one input to output.

    Returns the number of units (lines or bytes) copied. Raises
    UnreadableFileError if a named input cannot be opened; in that case
    nothing, not even the header, is written for it. A read failure
    after that raises InputReadError; write failures propagate as-is.
    """

    with open_input(name, stdin) as raw:
        stream = _InputReader(raw, name)
        if header:
            output.write(format_header(name))
            output.flush()

        if config.mode == "bytes":
            copied = copy_bytes(stream, output, config.count)
        else:
            copied = copy_lines(stream, output, config.count, config.line_terminator)

    LOG.info("Copied %d %s from %s", copied, config.mode, display_name(name))
    return copied


def head_files(
    config: Config,
    names: Sequence[str],
    output: BinaryIO,
    stdin: Optional[IO],
) -> int:
    """
    Run copy_prefix over every input reference, strictly in order.

    The first unreadable input aborts the run. Returns the number of
    inputs processed.
    """

    header = config.header_for(len(names))
    for name in names:
        copy_prefix(config, name, output, stdin, header=header)
    return len(names)
