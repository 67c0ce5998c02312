"""Exception types raised by the dithering engine and its pipeline."""

from __future__ import annotations


class DitherError(Exception):
    """Base class for all ascii_dither errors."""


class OutOfRangeError(DitherError, IndexError):
    """Matrix access outside of its bounds."""

    def __init__(self, row: int, col: int, height: int, width: int) -> None:
        super().__init__(
            f"({row},{col}) is out of range for matrix({height},{width})"
        )
        self.row = row
        self.col = col


class ConfigurationError(DitherError, ValueError):
    """Invalid kernel, breakpoints, dimensions or other settings."""
