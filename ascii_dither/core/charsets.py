"""Character set presets and glyph encoding.

Each charset is ordered dark to light. Dithered matrices are mapped to
glyphs either by bucket index (interpolating dither) or by scaling a raw
[0, 1] value (on/off dither, legacy averaging).
Braille uses a separate 2x4 bit-mapping code path.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

import numpy as np

from ascii_dither.core.errors import ConfigurationError
from ascii_dither.core.matrix import Matrix


class CharsetName(str, Enum):
    SIMPLE = "simple"
    DETAILED = "detailed"
    BLOCKS = "blocks"


# Ordered dark → light (low luminance → high luminance)
SIMPLE_CHARS = " .:-=+*#%@"

DETAILED_CHARS = (
    " .`'^\",:;Il!i><~+_-?][}{1)(|\\/"
    "tfjrxnuvczXYUJCLQ0OZmwqpdbkhao"
    "*#MW&8%B@$"
)

# Unicode block elements, bottom-up fill (dark → light)
BLOCK_CHARS = " ▁▂▃▄▅▆▇█"

# Glyphs are doubled horizontally to offset tall terminal cells.
REPEAT = 2


@dataclass(frozen=True)
class Charset:
    name: str
    chars: str

    def __post_init__(self) -> None:
        if not self.chars:
            raise ConfigurationError(f"Charset {self.name!r} has no characters")

    def __len__(self) -> int:
        return len(self.chars)

    def char_for_index(self, index: float) -> str:
        """Map a bucket index to a glyph; negative indices give the first."""
        idx = max(0, min(int(index), len(self.chars) - 1))
        return self.chars[idx]

    def char_for_value(self, value: float) -> str:
        """Map a value in [0.0, 1.0] to a glyph via floor(value * len)."""
        idx = math.floor(value * len(self.chars))
        idx = max(0, min(idx, len(self.chars) - 1))
        return self.chars[idx]

    def map_matrix(
        self,
        matrix: Matrix,
        indexed: bool = False,
        repeat: int = REPEAT,
        char_fmt: str = "{}",
    ) -> list[str]:
        """Map a dithered matrix to lines of characters.

        Args:
            matrix: values in [0, 1], or bucket indices if `indexed`.
            indexed: treat values as bucket indices (interpolating dither).
            repeat: how many times each glyph is emitted horizontally.
            char_fmt: template applied to every emitted glyph.
        """
        pick = self.char_for_index if indexed else self.char_for_value
        lines = []
        for row in range(matrix.height):
            parts = []
            for col in range(matrix.width):
                ch = char_fmt.format(pick(matrix.get(row, col)))
                parts.append(ch * repeat)
            lines.append("".join(parts))
        return lines


CHARSETS: dict[CharsetName, Charset] = {
    CharsetName.SIMPLE: Charset(CharsetName.SIMPLE.value, SIMPLE_CHARS),
    CharsetName.DETAILED: Charset(CharsetName.DETAILED.value, DETAILED_CHARS),
    CharsetName.BLOCKS: Charset(CharsetName.BLOCKS.value, BLOCK_CHARS),
}


def load_charset(path: str | Path) -> Charset:
    """Read a custom dark → light charset from a text file.

    Surrounding whitespace and line breaks are dropped.
    """
    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(f"Charset file not found: {path}")
    chars = path.read_text(encoding="utf-8").strip().replace("\n", "")
    chars = chars.replace("\r", "")
    return Charset(path.stem, chars)


# --- Braille encoding ---
# Braille characters use a 2-wide x 4-tall dot grid per character.
# Unicode braille block starts at U+2800.
# Dot positions (col 0, col 1):
#   row 0: bit 0, bit 3
#   row 1: bit 1, bit 4
#   row 2: bit 2, bit 5
#   row 3: bit 6, bit 7

BRAILLE_BASE = 0x2800

# Bit positions for each (row, col) in the 4x2 grid
BRAILLE_DOT_BITS: list[list[int]] = [
    [0, 3],  # row 0
    [1, 4],  # row 1
    [2, 5],  # row 2
    [6, 7],  # row 3
]


def braille_char(dots: np.ndarray) -> str:
    """Convert a 4x2 boolean array to a single braille character.

    Args:
        dots: shape (4, 2) boolean array where True = raised dot.
    """
    code = 0
    for row in range(4):
        for col in range(2):
            if dots[row, col]:
                code |= 1 << BRAILLE_DOT_BITS[row][col]
    return chr(BRAILLE_BASE + code)


def braille_from_matrix(matrix: Matrix, char_fmt: str = "{}") -> list[str]:
    """Pack an on/off dithered matrix into braille lines.

    Cells with value > 0 are raised dots. The matrix is padded with
    lowered dots up to a multiple of 4 rows and 2 columns.
    """
    binary = (matrix.to_array() > 0).astype(np.uint8)
    h, w = binary.shape
    pad_h = (4 - h % 4) % 4
    pad_w = (2 - w % 2) % 2
    if pad_h or pad_w:
        binary = np.pad(binary, ((0, pad_h), (0, pad_w)), constant_values=0)
        h, w = binary.shape

    lines = []
    for y in range(0, h, 4):
        line_chars = []
        for x in range(0, w, 2):
            block = binary[y : y + 4, x : x + 2]
            line_chars.append(char_fmt.format(braille_char(block)))
        lines.append("".join(line_chars))
    return lines
