"""Legacy block-average downsampling.

The source is split into out_width x out_height blocks. When the source size
is not a multiple of the target size, the first `remainder` blocks along an
axis are one pixel larger than the rest.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from ascii_dither.core.errors import ConfigurationError
from ascii_dither.core.matrix import Matrix


@dataclass(frozen=True)
class SegmentInfo:
    out_width: int
    out_height: int
    w_quotient: int
    w_remainder: int
    h_quotient: int
    h_remainder: int

    @classmethod
    def generate(
        cls, in_width: int, in_height: int, out_width: int, out_height: int
    ) -> SegmentInfo:
        if out_width <= 0 or out_height <= 0:
            raise ConfigurationError(
                f"Output size must be positive, got {out_width}x{out_height}"
            )
        if out_width > in_width or out_height > in_height:
            raise ConfigurationError(
                f"Output size {out_width}x{out_height} exceeds "
                f"input size {in_width}x{in_height}"
            )
        return cls(
            out_width=out_width,
            out_height=out_height,
            w_quotient=in_width // out_width,
            w_remainder=in_width % out_width,
            h_quotient=in_height // out_height,
            h_remainder=in_height % out_height,
        )

    def block_dims(self, i: int, j: int) -> tuple[int, int]:
        """(width, height) of the block at output row i, column j."""
        w = self.w_quotient + (1 if j < self.w_remainder else 0)
        h = self.h_quotient + (1 if i < self.h_remainder else 0)
        return w, h

    def block_start(self, i: int, j: int) -> tuple[int, int]:
        """(x, y) source offset of the block at output row i, column j."""
        return (
            _start(j, self.w_quotient, self.w_remainder),
            _start(i, self.h_quotient, self.h_remainder),
        )


def _start(idx: int, quotient: int, remainder: int) -> int:
    if idx < remainder:
        return idx * (quotient + 1)
    return remainder * (quotient + 1) + (idx - remainder) * quotient


def block_average(gray: np.ndarray, out_width: int, out_height: int) -> Matrix:
    """Average 0-255 samples over each block into a [0, 1] Matrix.

    Args:
        gray: 2D array (height, width) of 8-bit luminance.
        out_width: number of output columns.
        out_height: number of output rows.
    """
    in_height, in_width = gray.shape
    info = SegmentInfo.generate(in_width, in_height, out_width, out_height)
    matrix = Matrix(out_width, out_height)
    for i in range(out_height):
        for j in range(out_width):
            w, h = info.block_dims(i, j)
            x, y = info.block_start(i, j)
            block = gray[y : y + h, x : x + w]
            matrix.set(i, j, float(block.mean()) / 255.0)
    return matrix
