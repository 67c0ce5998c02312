"""Serialize processed lines as flat text to a file or stdout."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Iterable, TextIO

from ascii_dither.core.errors import ConfigurationError


def format_lines(lines: Iterable[str], line_fmt: str = "{}\n") -> str:
    """Join lines, wrapping each one in `line_fmt`."""
    return "".join(line_fmt.format(line) for line in lines)


def write_text(
    lines: Iterable[str],
    output_path: str | Path | None = None,
    line_fmt: str = "{}\n",
    stream: TextIO | None = None,
) -> str:
    """Write lines to `output_path`, or to `stream` (stdout) if no path.

    Returns the text that was written.
    """
    text = format_lines(lines, line_fmt)
    if output_path is None:
        out = stream or sys.stdout
        out.write(text)
        out.flush()
        return text

    path = Path(output_path)
    if path.exists() and not path.is_file():
        raise ConfigurationError(
            f"Cannot write to {path}: exists and is not a regular file"
        )
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return text
