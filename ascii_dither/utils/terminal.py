"""Terminal size detection and output grid sizing."""

from __future__ import annotations

import math
import shutil

# Width/height of one output cell. Text cells are two doubled glyphs wide,
# roughly square; a braille character is a 1:2 cell.
TEXT_CELL_ASPECT = 1.0
BRAILLE_CELL_ASPECT = 0.5


def get_terminal_size(
    fallback_width: int = 80,
    fallback_height: int = 24,
) -> tuple[int, int]:
    """Get current terminal size in columns and rows.

    Returns (width, height). Falls back to provided defaults
    if terminal size cannot be determined.
    """
    try:
        size = shutil.get_terminal_size(fallback=(fallback_width, fallback_height))
        return size.columns, size.lines
    except (ValueError, OSError):
        return fallback_width, fallback_height


def fit_to_terminal(
    img_width: int,
    img_height: int,
    max_width: int | None = None,
    max_height: int | None = None,
    char_aspect: float = 0.5,
) -> tuple[int, int]:
    """Calculate dimensions that fit within terminal while preserving aspect ratio.

    Args:
        img_width: original image width in pixels.
        img_height: original image height in pixels.
        max_width: maximum cells per row (defaults to terminal width).
        max_height: maximum rows (defaults to terminal height - 1).
        char_aspect: output cell aspect ratio (width/height).

    Returns:
        (cell_width, cell_height) tuple.
    """
    if max_width is None or max_height is None:
        tw, th = get_terminal_size()
        if max_width is None:
            max_width = tw
        if max_height is None:
            max_height = max(th - 1, 1)  # Leave room for the prompt

    img_aspect = (img_width / img_height) * (1.0 / char_aspect)

    if img_aspect > max_width / max_height:
        # Width-constrained
        char_w = max_width
        char_h = max(1, int(char_w / img_aspect))
    else:
        # Height-constrained
        char_h = max_height
        char_w = max(1, int(char_h * img_aspect))

    return char_w, char_h


def resolve_size(
    img_width: int,
    img_height: int,
    width: int = 0,
    height: int = 0,
    braille: bool = False,
) -> tuple[int, int]:
    """Fill in a missing output width or height (0) from the image aspect.

    With neither given, the grid is fit to the terminal.
    """
    char_aspect = BRAILLE_CELL_ASPECT if braille else TEXT_CELL_ASPECT
    img_aspect = (img_width / img_height) / char_aspect

    if width and height:
        return width, height
    if height:
        return max(1, math.floor(height * img_aspect)), height
    if width:
        return width, max(1, math.floor(width / img_aspect))

    max_width = None
    if not braille:
        max_width = max(get_terminal_size()[0] // 2, 1)
    return fit_to_terminal(
        img_width, img_height, max_width=max_width, char_aspect=char_aspect
    )
