"""Error-diffusion kernels.

A kernel is a list of (dx, dy, weight) offsets relative to the pixel being
quantized. Built-in kernels are described as absolute weight grids plus an
origin cell, then flattened into relative offsets.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Sequence

from ascii_dither.core.errors import ConfigurationError

Offset = tuple[int, int, float]


class KernelName(str, Enum):
    NONE = "none"
    FS = "fs"
    STUCKI = "stucki"
    ATKINSON = "atkinson"


@dataclass(frozen=True)
class Kernel:
    """Immutable error-diffusion stencil."""

    offsets: tuple[Offset, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(
            self,
            "offsets",
            tuple((int(dx), int(dy), float(w)) for dx, dy, w in self.offsets),
        )

    @classmethod
    def from_grid(
        cls, origin: tuple[int, int], grid: Sequence[Sequence[float]]
    ) -> Kernel:
        """Flatten an absolute weight grid into origin-relative offsets.

        Cell grid[r][c] becomes (c - origin_x, r - origin_y, grid[r][c]).
        Zero weights are kept; the ditherers skip them.
        """
        ox, oy = origin
        offsets = []
        for r, row in enumerate(grid):
            for c, weight in enumerate(row):
                offsets.append((c - ox, r - oy, weight))
        return cls(offsets)

    @property
    def total_weight(self) -> float:
        return sum(w for _, _, w in self.offsets)

    def nonzero(self) -> tuple[Offset, ...]:
        return tuple(o for o in self.offsets if o[2] != 0.0)


# Weight grids (row-major, first row holds the current pixel) and origins.
KERNEL_GRIDS: dict[KernelName, tuple[tuple[int, int], list[list[float]]]] = {
    KernelName.NONE: ((0, 0), []),
    KernelName.FS: (
        (1, 0),
        [
            [0.0, 0.0, 7 / 16],
            [3 / 16, 5 / 16, 1 / 16],
        ],
    ),
    KernelName.STUCKI: (
        (2, 0),
        [
            [0.0, 0.0, 0.0, 8 / 42, 4 / 42],
            [2 / 42, 4 / 42, 8 / 42, 4 / 42, 2 / 42],
            [1 / 42, 2 / 42, 4 / 42, 2 / 42, 1 / 42],
        ],
    ),
    # Diffuses only 6/8 of the error.
    KernelName.ATKINSON: (
        (1, 0),
        [
            [0.0, 0.0, 0.125, 0.125],
            [0.125, 0.125, 0.125, 0.0],
            [0.0, 0.125, 0.0, 0.0],
        ],
    ),
}

KERNELS: dict[KernelName, Kernel] = {
    name: Kernel.from_grid(origin, grid)
    for name, (origin, grid) in KERNEL_GRIDS.items()
}


def _resolve(name: str | KernelName) -> KernelName:
    if isinstance(name, KernelName):
        return name
    try:
        return KernelName(str(name).strip().lower())
    except ValueError:
        choices = ", ".join(k.value.upper() for k in KernelName)
        raise ConfigurationError(
            f"Unknown kernel: {name!r} (expected one of {choices})"
        ) from None


def get_kernel(name: str | KernelName) -> Kernel:
    """Look up a built-in kernel by name, case-insensitively."""
    return KERNELS[_resolve(name)]


def get_kernel_grid(
    name: str | KernelName,
) -> tuple[list[list[float]], tuple[int, int]]:
    """Return the (weight_grid, origin) a built-in kernel was built from."""
    origin, grid = KERNEL_GRIDS[_resolve(name)]
    return [list(row) for row in grid], origin
