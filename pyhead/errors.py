"""
Custom exception types used across pyhead.

Usage errors are raised while interpreting argv, before any input is
opened. File errors are raised by the copier while acquiring an input.
The CLI maps each family to its own exit status.
"""

from __future__ import annotations


class HeadError(Exception):
    """Base class for all pyhead specific errors."""


class UsageError(HeadError):
    """Raised when the command line cannot be interpreted."""


class InvalidArgumentError(UsageError):
    """Raised when a count option receives a value that is not a count."""

    def __init__(self, option: str, token: str):
        super().__init__(f"invalid number of {option}: {token!r}")
        self.option = option
        self.token = token


class UnrecognizedOptionError(UsageError):
    """Raised for a flag that pyhead does not know."""

    def __init__(self, token: str):
        super().__init__(f"unrecognized option: {token!r}")
        self.token = token


class MissingArgumentValueError(UsageError):
    """Raised when an option that takes a value is given none."""

    def __init__(self, option: str):
        super().__init__(f"option {option} requires an argument")
        self.option = option


class UnreadableFileError(HeadError):
    """Raised when a named input cannot be opened for reading."""

    def __init__(self, path: str, reason: str):
        super().__init__(f"cannot open {path!r} for reading: {reason}")
        self.path = path
        self.reason = reason


class InputReadError(HeadError):
    """Raised when reading an already opened input fails."""

    def __init__(self, name: str, reason: str):
        super().__init__(f"error reading {name!r}: {reason}")
        self.name = name
        self.reason = reason
