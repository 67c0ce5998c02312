"""Kernel-based error diffusion dithering.

Both ditherers walk the buffer in row-major order. Each sample is quantized,
the result is written to the output buffer, and the quantization error is
spread to neighbouring samples of a separate source copy according to the
kernel weights. Already written output cells are never touched again.

OnOffKernelDitherer writes 0.0 / 1.0. InterpolatingKernelDitherer writes the
bucket index of each sample (-1 .. n-1 for n breakpoints) while diffusing
the error against the bucket's midpoint.
"""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from typing import Iterable, Sequence

import numpy as np

from ascii_dither.core.errors import ConfigurationError
from ascii_dither.core.kernels import Kernel, Offset
from ascii_dither.core.matrix import Matrix


class Ditherer(ABC):
    """Quantizes a Matrix in place."""

    def __init__(self, weights: Kernel | Iterable[Offset]) -> None:
        self.kernel = weights if isinstance(weights, Kernel) else Kernel(tuple(weights))
        self._active = self.kernel.nonzero()

    @property
    def weights(self) -> tuple[Offset, ...]:
        return self.kernel.offsets

    @abstractmethod
    def _quantize(self, value: float) -> tuple[float, float]:
        """Return (output value, reconstruction value) for a sample."""

    def dither(self, buffer: Matrix) -> None:
        source = buffer.copy()
        for row in range(buffer.height):
            for col in range(buffer.width):
                value = source.get(row, col)
                output, reconstructed = self._quantize(value)
                buffer.set(row, col, output)
                error = value - reconstructed

                for dx, dy, weight in self._active:
                    ny = row + dy
                    nx = col + dx
                    # Targets past an edge are dropped, not wrapped.
                    if not source.contains(ny, nx):
                        continue
                    source.set(ny, nx, source.get(ny, nx) + error * weight)


class OnOffKernelDitherer(Ditherer):
    """Binary threshold dithering: samples above the threshold become 1.0."""

    def __init__(
        self, threshold: float, weights: Kernel | Iterable[Offset] = ()
    ) -> None:
        threshold = float(threshold)
        if not math.isfinite(threshold) or not 0.0 <= threshold <= 1.0:
            raise ConfigurationError(
                f"Threshold must be within [0, 1], got {threshold}"
            )
        self.threshold = threshold
        super().__init__(weights)

    @classmethod
    def from_grid(
        cls,
        threshold: float,
        origin: tuple[int, int],
        grid: Sequence[Sequence[float]],
    ) -> OnOffKernelDitherer:
        return cls(threshold, Kernel.from_grid(origin, grid))

    def _quantize(self, value: float) -> tuple[float, float]:
        quantized = 1.0 if value > self.threshold else 0.0
        return quantized, quantized

    def __repr__(self) -> str:
        return f"OnOffKernelDitherer(threshold={self.threshold})"


def _validate_breakpoints(points: Sequence[float]) -> tuple[float, ...]:
    points = tuple(float(p) for p in points)
    if not points:
        raise ConfigurationError("At least one breakpoint is required")
    for p in points:
        if not math.isfinite(p) or not 0.0 <= p <= 1.0:
            raise ConfigurationError(f"Breakpoint {p} is outside [0, 1]")
    for lo, hi in zip(points, points[1:]):
        if hi <= lo:
            raise ConfigurationError(
                f"Breakpoints must be strictly increasing: {lo} >= {hi}"
            )
    return points


def midpoints(inter_points: Sequence[float]) -> tuple[float, ...]:
    """Reconstruction value of each of the len(inter_points) + 1 buckets."""
    bounds = [0.0, *inter_points, 1.0]
    return tuple((lo + hi) / 2 for lo, hi in zip(bounds, bounds[1:]))


class InterpolatingKernelDitherer(Ditherer):
    """Multi-level dithering over increasing breakpoints in [0, 1].

    Writes the bucket index as a float; -1.0 means the sample is below the
    first breakpoint.
    """

    def __init__(
        self,
        inter_points: Sequence[float],
        weights: Kernel | Iterable[Offset] = (),
    ) -> None:
        self.inter_points = _validate_breakpoints(inter_points)
        self.mid_points = midpoints(self.inter_points)
        super().__init__(weights)

    @classmethod
    def from_grid(
        cls,
        inter_points: Sequence[float],
        origin: tuple[int, int],
        grid: Sequence[Sequence[float]],
    ) -> InterpolatingKernelDitherer:
        return cls(inter_points, Kernel.from_grid(origin, grid))

    @property
    def levels(self) -> int:
        return len(self.mid_points)

    def _quantize(self, value: float) -> tuple[float, float]:
        index = -1
        for point in self.inter_points:
            if value < point:
                break
            index += 1
        return float(index), self.mid_points[index + 1]

    def __repr__(self) -> str:
        return f"InterpolatingKernelDitherer(inter_points={list(self.inter_points)})"


def even_breakpoints(threshold: float, symbols: int) -> list[float]:
    """Spread symbols - 1 breakpoints evenly from threshold towards 1.0.

    even_breakpoints(0.5, 2) == [0.5], matching on/off dithering.
    """
    if symbols < 2:
        raise ConfigurationError(f"Need at least 2 symbols, got {symbols}")
    count = symbols - 1
    step = (1.0 - threshold) / count
    return [threshold + i * step for i in range(count)]


def dither_array(gray: np.ndarray, ditherer: Ditherer) -> np.ndarray:
    """Dither a 2D float array and return the quantized copy."""
    matrix = Matrix.from_array(gray)
    ditherer.dither(matrix)
    return matrix.to_array()
