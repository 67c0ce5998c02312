"""Dense 2-D sample buffer with bounds-checked row-major access.

Storage is a flat numpy array; cell (row, col) lives at row * width + col.
"""

from __future__ import annotations

from typing import Sequence

import numpy as np

from ascii_dither.core.errors import ConfigurationError, OutOfRangeError


class Matrix:
    """Fixed-size grid of float samples."""

    __slots__ = ("_storage", "_width", "_height")

    def __init__(self, width: int, height: int, fill: float = 0.0) -> None:
        if width < 0 or height < 0:
            raise ConfigurationError(
                f"Matrix dimensions must be non-negative, got {width}x{height}"
            )
        self._width = int(width)
        self._height = int(height)
        self._storage = np.full(self._width * self._height, fill, dtype=np.float64)

    @classmethod
    def from_values(cls, values: Sequence[float], width: int, height: int) -> Matrix:
        """Wrap a flat row-major sequence of width * height values."""
        if len(values) != width * height:
            raise ConfigurationError(
                f"Expected {width * height} values for a {width}x{height} matrix, "
                f"got {len(values)}"
            )
        matrix = cls(width, height)
        matrix._storage[:] = np.asarray(values, dtype=np.float64)
        return matrix

    @classmethod
    def from_array(cls, arr: np.ndarray) -> Matrix:
        """Build from a 2-D array of shape (height, width)."""
        arr = np.asarray(arr, dtype=np.float64)
        if arr.ndim != 2:
            raise ConfigurationError(f"Expected a 2D array, got shape {arr.shape}")
        height, width = arr.shape
        matrix = cls(width, height)
        matrix._storage[:] = arr.reshape(-1)
        return matrix

    def to_array(self) -> np.ndarray:
        """Return a (height, width) copy of the buffer."""
        return self._storage.reshape(self._height, self._width).copy()

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    def _index(self, row: int, col: int) -> int:
        if row < 0 or col < 0 or row >= self._height or col >= self._width:
            raise OutOfRangeError(row, col, self._height, self._width)
        return row * self._width + col

    def get(self, row: int, col: int) -> float:
        return float(self._storage[self._index(row, col)])

    def set(self, row: int, col: int, value: float) -> None:
        self._storage[self._index(row, col)] = value

    def contains(self, row: int, col: int) -> bool:
        """True if (row, col) addresses a cell of this matrix."""
        return 0 <= row < self._height and 0 <= col < self._width

    def copy(self) -> Matrix:
        clone = Matrix(self._width, self._height)
        clone._storage[:] = self._storage
        return clone

    def __getitem__(self, key: tuple[int, int]) -> float:
        row, col = key
        return self.get(row, col)

    def __setitem__(self, key: tuple[int, int], value: float) -> None:
        row, col = key
        self.set(row, col, value)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        return (
            self._width == other._width
            and self._height == other._height
            and np.array_equal(self._storage, other._storage)
        )

    def __repr__(self) -> str:
        return f"Matrix(width={self._width}, height={self._height})"
