"""Image loading and grayscale preparation.

Decoding, resizing and tone adjustments are done with Pillow; the result is
exposed as normalized [0.0, 1.0] samples.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import numpy as np
from PIL import Image, ImageFilter, UnidentifiedImageError

from ascii_dither.core.errors import ConfigurationError
from ascii_dither.core.matrix import Matrix


@dataclass
class ImageInfo:
    """Metadata about the input file."""

    path: Path
    format: str
    width: int
    height: int
    frame_count: int = 1


def load_image(path: str | Path) -> tuple[Image.Image, ImageInfo]:
    """Open a still image; animated files yield their first frame."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")
    if not path.is_file():
        raise ConfigurationError(f"{path} exists and is not a regular file")
    try:
        with Image.open(path) as img:
            img.seek(0)
            info = ImageInfo(
                path=path,
                format=(img.format or path.suffix.lstrip(".")).lower(),
                width=img.width,
                height=img.height,
                frame_count=getattr(img, "n_frames", 1),
            )
            rgb = img.convert("RGB")
    except UnidentifiedImageError as e:
        raise ConfigurationError(f"Cannot decode image: {path}") from e
    except OSError as e:
        # Truncated or corrupt pixel data surfaces on convert, not open.
        raise ConfigurationError(f"Cannot decode image: {path}: {e}") from e
    return rgb, info


def _brighten_table(amount: int) -> list[int]:
    return [max(0, min(255, v + amount)) for v in range(256)]


def _contrast_table(contrast: float) -> list[int]:
    # contrast is a percentage: 0 leaves samples alone, -100 flattens to gray.
    factor = ((100.0 + contrast) / 100.0) ** 2
    table = []
    for v in range(256):
        c = ((v / 255.0 - 0.5) * factor + 0.5) * 255.0
        table.append(int(max(0.0, min(255.0, c))))
    return table


def adjust_image(
    img: Image.Image,
    brightness: int = 0,
    contrast: float = 0.0,
    blur: float = 0.0,
    sharpen: bool = False,
) -> Image.Image:
    """Apply tone and filter adjustments and convert to 8-bit grayscale.

    brightness: added to every 0-255 channel sample (clamped).
    contrast: percentage, 0 = unchanged.
    blur: gaussian blur radius, 0 = none.
    """
    result = img.convert("RGB")
    if brightness:
        result = result.point(_brighten_table(brightness) * 3)
    if contrast:
        result = result.point(_contrast_table(contrast) * 3)
    if blur > 0:
        result = result.filter(ImageFilter.GaussianBlur(radius=blur))
    if sharpen:
        result = result.filter(ImageFilter.SHARPEN)
    return result.convert("L")


class GrayImage:
    """Normalized grayscale samples backed by a (height, width) array."""

    def __init__(self, samples: np.ndarray) -> None:
        if samples.ndim != 2:
            raise ConfigurationError(f"Expected a 2D array, got shape {samples.shape}")
        self._samples = samples.astype(np.float64)

    @classmethod
    def from_image(cls, img: Image.Image, invert: bool = False) -> GrayImage:
        gray = np.array(img.convert("L"), dtype=np.float64) / 255.0
        if invert:
            gray = 1.0 - gray
        return cls(gray)

    def width(self) -> int:
        return self._samples.shape[1]

    def height(self) -> int:
        return self._samples.shape[0]

    def get_normalized(self, row: int, col: int) -> float:
        return float(self._samples[row, col])

    def as_array(self) -> np.ndarray:
        return self._samples.copy()

    def as_bytes(self) -> np.ndarray:
        """Samples rescaled to 0-255, as used by block averaging."""
        return np.rint(self._samples * 255.0).astype(np.uint8)

    def to_matrix(self) -> Matrix:
        return Matrix.from_array(self._samples)


def resize_gray(img: Image.Image, width: int, height: int) -> Image.Image:
    """Resize to an exact pixel grid."""
    return img.resize((width, height), Image.Resampling.LANCZOS)
