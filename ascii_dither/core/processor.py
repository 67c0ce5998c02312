"""Image processing pipeline.

Adjust → grayscale → resize or block-average → dither → glyph/braille map.
"""

from __future__ import annotations

import hashlib
import logging
from dataclasses import dataclass
from enum import Enum

from PIL import Image

from ascii_dither.core.charsets import (
    CHARSETS,
    Charset,
    CharsetName,
    braille_from_matrix,
)
from ascii_dither.core.dither import (
    Ditherer,
    InterpolatingKernelDitherer,
    OnOffKernelDitherer,
    even_breakpoints,
)
from ascii_dither.core.errors import ConfigurationError
from ascii_dither.core.kernels import KernelName, get_kernel
from ascii_dither.core.matrix import Matrix
from ascii_dither.core.reader import GrayImage, adjust_image, resize_gray
from ascii_dither.core.segment import block_average
from ascii_dither.utils.logs import logger


class OutputType(str, Enum):
    TEXT = "text"
    BRAILLE = "braille"


class Algorithm(str, Enum):
    KERNEL = "kernel"
    LEGACY = "legacy"


class DitherMode(str, Enum):
    ONOFF = "onoff"
    INTERPOLATE = "interpolate"


@dataclass(frozen=True)
class Settings:
    """Processing settings that affect output."""

    output: OutputType = OutputType.TEXT
    algorithm: Algorithm = Algorithm.KERNEL
    kernel: KernelName = KernelName.FS
    mode: DitherMode | None = None  # None: interpolate for text, on/off for braille
    threshold: float = 0.5
    breakpoints: tuple[float, ...] | None = None
    charset: CharsetName = CharsetName.SIMPLE
    chars: str | None = None  # overrides charset
    brightness: int = 0  # added to 0-255 samples
    contrast: float = 0.0  # percent, 0 = no change
    blur: float = 0.0
    sharpen: bool = False
    invert: bool = False
    width: int = 80
    height: int = 24
    char_fmt: str = "{}"
    line_fmt: str = "{}\n"

    def validate(self) -> None:
        """Raise ConfigurationError for settings no pipeline run can use."""
        if self.width <= 0 or self.height <= 0:
            raise ConfigurationError(
                f"Output size must be positive, got {self.width}x{self.height}"
            )
        if not 0.0 <= self.threshold <= 1.0:
            raise ConfigurationError(
                f"Threshold must be within [0, 1], got {self.threshold}"
            )
        if self.contrast < -100:
            raise ConfigurationError(f"Contrast must be >= -100, got {self.contrast}")
        if self.blur < 0:
            raise ConfigurationError(f"Blur must be >= 0, got {self.blur}")
        if self.chars is not None and not self.chars:
            raise ConfigurationError("Custom charset is empty")
        for name, fmt in (("char", self.char_fmt), ("line", self.line_fmt)):
            if "{}" not in fmt:
                raise ConfigurationError(f"The {name} format must contain '{{}}'")
            try:
                fmt.format("x")
            except (IndexError, KeyError, ValueError) as e:
                raise ConfigurationError(
                    f"Invalid {name} format {fmt!r}: {e}"
                ) from e

    @property
    def glyphs(self) -> Charset:
        if self.chars is not None:
            return Charset("custom", self.chars)
        return CHARSETS[self.charset]

    def hash(self) -> str:
        """Deterministic hash for cache keying."""
        data = (
            f"{self.output}:{self.algorithm}:{self.kernel}:{self.mode}:"
            f"{self.threshold}:{self.breakpoints}:{self.charset}:{self.chars}:"
            f"{self.brightness}:{self.contrast}:{self.blur}:{self.sharpen}:"
            f"{self.invert}:{self.width}:{self.height}:"
            f"{self.char_fmt!r}:{self.line_fmt!r}"
        )
        return hashlib.md5(data.encode()).hexdigest()[:12]


@dataclass
class ProcessedImage:
    """Result of processing a single image."""

    lines: list[str]
    matrix: Matrix  # dithered samples or bucket indices
    width: int = 0
    height: int = 0


def resolve_mode(settings: Settings, log: logging.Logger = logger) -> DitherMode:
    """Pick the quantization policy, falling back to on/off for braille."""
    if settings.output == OutputType.BRAILLE:
        if settings.mode == DitherMode.INTERPOLATE:
            log.warning(
                "Interpolating dither is not supported for braille output; "
                "using on/off dithering"
            )
        return DitherMode.ONOFF
    return settings.mode or DitherMode.INTERPOLATE


def check_breakpoints(
    breakpoints: tuple[float, ...], symbols: int, log: logging.Logger = logger
) -> None:
    """Warn when the breakpoint count does not match the glyph count."""
    expected = symbols - 1
    if len(breakpoints) < expected:
        log.warning(
            "Only %d breakpoints for %d symbols; the brightest symbols "
            "will never be used",
            len(breakpoints),
            symbols,
        )
    elif len(breakpoints) > expected:
        log.warning(
            "%d breakpoints for %d symbols; upper levels share the last symbol",
            len(breakpoints),
            symbols,
        )


def build_ditherer(
    settings: Settings, symbols: int, log: logging.Logger = logger
) -> tuple[Ditherer, DitherMode]:
    """Create the ditherer described by `settings` for `symbols` glyphs."""
    kernel = get_kernel(settings.kernel)
    mode = resolve_mode(settings, log)
    if mode == DitherMode.ONOFF:
        return OnOffKernelDitherer(settings.threshold, kernel), mode

    if settings.breakpoints is None:
        points = even_breakpoints(settings.threshold, max(symbols, 2))
        log.debug("Derived breakpoints %s", [round(p, 4) for p in points])
    else:
        points = list(settings.breakpoints)
    ditherer = InterpolatingKernelDitherer(points, kernel)
    if settings.breakpoints is not None:
        check_breakpoints(ditherer.inter_points, symbols, log)
    return ditherer, mode


def _sample_size(settings: Settings) -> tuple[int, int]:
    """Pixel grid sampled for the requested character grid."""
    if settings.output == OutputType.BRAILLE:
        return settings.width * 2, settings.height * 4
    return settings.width, settings.height


def process_image(
    image: Image.Image, settings: Settings, log: logging.Logger = logger
) -> ProcessedImage:
    """Process a single image through the full pipeline."""
    settings.validate()
    glyphs = settings.glyphs
    is_braille = settings.output == OutputType.BRAILLE
    pixel_w, pixel_h = _sample_size(settings)

    gray = adjust_image(
        image,
        brightness=settings.brightness,
        contrast=settings.contrast,
        blur=settings.blur,
        sharpen=settings.sharpen,
    )

    indexed = False
    if settings.algorithm == Algorithm.LEGACY:
        source = GrayImage.from_image(gray, invert=settings.invert)
        matrix = block_average(source.as_bytes(), pixel_w, pixel_h)
        if is_braille:
            OnOffKernelDitherer(settings.threshold).dither(matrix)
    else:
        resized = resize_gray(gray, pixel_w, pixel_h)
        matrix = GrayImage.from_image(resized, invert=settings.invert).to_matrix()
        ditherer, mode = build_ditherer(settings, len(glyphs), log)
        log.debug("Dithering %dx%d samples with %r", pixel_w, pixel_h, ditherer)
        ditherer.dither(matrix)
        indexed = mode == DitherMode.INTERPOLATE

    if is_braille:
        lines = braille_from_matrix(matrix, char_fmt=settings.char_fmt)
    else:
        lines = glyphs.map_matrix(matrix, indexed=indexed, char_fmt=settings.char_fmt)

    return ProcessedImage(
        lines=lines,
        matrix=matrix,
        width=settings.width,
        height=settings.height,
    )
