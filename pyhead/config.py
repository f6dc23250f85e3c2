"""
Configuration model for pyhead.

The option parser constructs a single Config instance and passes it
down into the copier so behavior can be adjusted without relying on
global state.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

DEFAULT_LINE_COUNT = 10

Mode = Literal["lines", "bytes"]
Verbosity = Literal["auto", "always", "never"]


@dataclass(frozen=True)
class Config:
    """
    Top-level configuration for a pyhead run.

    count is measured in lines or bytes depending on mode. verbosity
    controls the "==> name <==" headers: "always" and "never" come from
    -v and -q, "auto" means neither flag was given.
    """

    count: int = DEFAULT_LINE_COUNT
    mode: Mode = "lines"
    verbosity: Verbosity = "auto"
    line_terminator: bytes = b"\n"
    debug: int = 0

    def __post_init__(self) -> None:
        if self.count < 0:
            raise ValueError(f"count must be non-negative, got {self.count}")
        if len(self.line_terminator) != 1:
            raise ValueError("line_terminator must be a single byte")

    def header_for(self, input_count: int) -> bool:
        """Return True if headers should be printed for this many inputs."""

        if self.verbosity == "always":
            return True
        if self.verbosity == "never":
            return False
        return input_count > 1
