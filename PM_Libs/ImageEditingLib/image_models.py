"""
Image editing data models for the photo mosaic editor.

This module defines the core data structures shared by the transform
engine, the edit history and the mosaic compositor.

Classes:
    PixelBuffer: Immutable RGBA raster with channels normalized to [0, 1]
    CropRect: Crop rectangle in source-buffer pixel coordinates

Type Aliases:
    RgbaColor: A tuple of 4 integers representing RGBA color values (0-255)
    RgbaSample: A tuple of 4 floats representing normalized RGBA values (0-1)
"""

from dataclasses import dataclass
from typing import Any, List, Sequence, Tuple

import numpy as np

from PM_Libs.errors import InvalidParameterError
from PM_Libs.pillow_compat import Image

RgbaColor = Tuple[int, int, int, int]
RgbaSample = Tuple[float, float, float, float]

CHANNELS = 4

# Pillow opens 16-bit grayscale PNGs in one of these modes
WIDE_GRAY_MODES = ("I;16", "I;16L", "I;16B", "I")
WIDE_GRAY_MAX = 65535.0


@dataclass(frozen=True, eq=False)
class PixelBuffer:
    """Dense row-major RGBA raster.

    Samples are stored as a read-only float64 array of shape
    (height, width, 4) with every channel in [0, 1]. Buffers never change
    after construction, so holding a reference is as good as holding a copy.

    Attributes:
        width: Width in pixels (> 0)
        height: Height in pixels (> 0)
        samples: Read-only numpy array of shape (height, width, 4)
    """
    width: int
    height: int
    samples: Any

    def __post_init__(self):
        """Validate dimensions and freeze the sample array."""
        width = int(self.width)
        height = int(self.height)

        if width <= 0 or height <= 0:
            raise InvalidParameterError(f"Buffer dimensions must be positive, got {width}x{height}")

        array = np.array(self.samples, dtype=np.float64)
        if array.size != width * height * CHANNELS:
            raise InvalidParameterError(
                f"Expected {width * height * CHANNELS} samples for a {width}x{height} buffer, "
                f"got {array.size}"
            )
        array = array.reshape(height, width, CHANNELS)

        if np.isnan(array).any() or array.min() < 0.0 or array.max() > 1.0:
            raise InvalidParameterError("Sample values must be within [0, 1]")

        array.setflags(write=False)
        object.__setattr__(self, "width", width)
        object.__setattr__(self, "height", height)
        object.__setattr__(self, "samples", array)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PixelBuffer):
            return NotImplemented
        return (
            self.width == other.width
            and self.height == other.height
            and np.array_equal(self.samples, other.samples)
        )

    def __repr__(self) -> str:
        return f"PixelBuffer(width={self.width}, height={self.height})"

    @property
    def size(self) -> Tuple[int, int]:
        """(width, height), in the same order Pillow uses."""
        return self.width, self.height

    @property
    def sample_count(self) -> int:
        return self.samples.size

    def pixel(self, x: int, y: int) -> RgbaSample:
        """Return the normalized RGBA sample at column x, row y."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise InvalidParameterError(
                f"Pixel ({x}, {y}) is outside a {self.width}x{self.height} buffer"
            )
        r, g, b, a = self.samples[y, x]
        return float(r), float(g), float(b), float(a)

    @classmethod
    def filled(cls, width: int, height: int, color: Sequence[float]) -> "PixelBuffer":
        """Create a buffer with every pixel set to one normalized RGBA color."""
        samples = np.empty((int(height), int(width), CHANNELS), dtype=np.float64)
        samples[:, :] = tuple(color)
        return cls(width, height, samples)

    @classmethod
    def from_pixels(cls, width: int, height: int, pixels: Sequence[Sequence[float]]) -> "PixelBuffer":
        """Create a buffer from a row-major sequence of normalized RGBA tuples."""
        return cls(width, height, np.array(pixels, dtype=np.float64))

    @classmethod
    def from_image(cls, image: Any) -> "PixelBuffer":
        """
        Create a buffer from a PIL Image.

        16-bit grayscale images (such as 16-bit PNGs) are scaled from
        [0, 65535] rather than clipped by Pillow's 8-bit conversion.

        Args:
            image: PIL Image in any mode (converted to RGBA)

        Returns:
            PixelBuffer with channels scaled to [0, 1]
        """
        if not hasattr(image, "convert"):
            raise TypeError(f"Expected PIL Image, got {type(image)}")

        if image.mode in WIDE_GRAY_MODES:
            gray = np.clip(np.asarray(image, dtype=np.float64) / WIDE_GRAY_MAX, 0.0, 1.0)
            height, width = gray.shape
            samples = np.ones((height, width, CHANNELS), dtype=np.float64)
            samples[:, :, :3] = gray[:, :, np.newaxis]
            return cls(width, height, samples)

        rgba = image.convert("RGBA")
        width, height = rgba.size
        samples = np.asarray(rgba, dtype=np.float64) / 255.0
        return cls(width, height, samples)

    def to_rgba8(self) -> Any:
        """Return the samples as a (height, width, 4) uint8 array."""
        return np.clip(np.round(self.samples * 255.0), 0, 255).astype(np.uint8)

    def to_image(self) -> Any:
        """Convert to an 8-bit RGBA PIL Image for display or encoding."""
        return Image.fromarray(self.to_rgba8())

    def to_colors(self) -> List[RgbaColor]:
        """Return row-major 8-bit RGBA tuples."""
        return [tuple(int(c) for c in px) for px in self.to_rgba8().reshape(-1, CHANNELS)]


@dataclass(frozen=True)
class CropRect:
    """Crop rectangle (x, y, width, height) in source-buffer pixels.

    A rectangle is only checked against a buffer when it is used; an
    out-of-bounds rectangle is rejected, never clamped.
    """
    x: int
    y: int
    width: int
    height: int

    def __post_init__(self):
        for name in ("x", "y", "width", "height"):
            object.__setattr__(self, name, int(getattr(self, name)))

    @classmethod
    def from_points(cls, start: Tuple[float, float], end: Tuple[float, float]) -> "CropRect":
        """
        Build a rectangle from two drag corners in any order.

        Args:
            start: (x, y) where the drag began
            end: (x, y) where the drag ended

        Returns:
            CropRect anchored at the top-left of the two points
        """
        (x0, y0), (x1, y1) = start, end
        return cls(
            x=int(min(x0, x1)),
            y=int(min(y0, y1)),
            width=int(abs(x1 - x0)),
            height=int(abs(y1 - y0)),
        )

    @property
    def box(self) -> Tuple[int, int, int, int]:
        """(left, top, right, bottom), exclusive of right and bottom."""
        return self.x, self.y, self.x + self.width, self.y + self.height

    def fits_within(self, width: int, height: int) -> bool:
        """Check the rectangle is non-empty and lies inside a width x height buffer."""
        return (
            self.x >= 0
            and self.y >= 0
            and self.width > 0
            and self.height > 0
            and self.x + self.width <= width
            and self.y + self.height <= height
        )
