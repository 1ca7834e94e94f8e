"""
Shape masks for mosaic compositing.

A mask is a size x size RGBA image whose alpha is 255 inside the shape and
0 everywhere else. Shapes are traced as closed polygons and filled without
anti-aliasing, so no intermediate alpha values ever appear.

Example:
    >>> mask = create_mask(600, "heart")
    >>> mask.alpha_at(300, 300)
    255
    >>> mask.alpha_at(0, 0)
    0

Functions:
    heart_outline: Polygon vertices for the parametric heart curve
    star_outline: Polygon vertices for a five-pointed star
    choose_shape: Pick heart or star at random
    create_mask: Rasterize a named shape into a MosaicMask
"""

from dataclasses import dataclass
from typing import Any, List, Optional, Tuple
import math
import numbers
import random

import numpy as np

from PM_Libs.constants import (
    HEART_CURVE_SPAN,
    HEART_T_STEP,
    MASK_INSIDE_ALPHA,
    MASK_OUTSIDE_ALPHA,
    MASK_SHAPES,
    SHAPE_HEART,
    SHAPE_STAR,
    STAR_INNER_RATIO,
    STAR_OUTER_RATIO,
    STAR_POINTS,
)
from PM_Libs.errors import InvalidParameterError
from PM_Libs.ImageEditingLib.image_models import PixelBuffer
from PM_Libs.pillow_compat import Image, ImageDraw

Point = Tuple[float, float]


@dataclass(frozen=True)
class MosaicMask:
    """Binary alpha mask.

    Attributes:
        size: Width and height in pixels
        shape: Name of the rasterized shape ('heart', 'star' or 'solid')
        image: RGBA PIL Image whose alpha channel is 0 or 255
    """
    size: int
    shape: str
    image: Any

    def alpha_at(self, x: int, y: int) -> int:
        """Alpha (0 or 255) at pixel (x, y); points off the mask count as outside."""
        if not (0 <= x < self.size and 0 <= y < self.size):
            return MASK_OUTSIDE_ALPHA
        return self.image.getpixel((x, y))[3]

    def alpha_array(self) -> Any:
        """(size, size) uint8 array of alpha values."""
        return np.asarray(self.image.getchannel("A"), dtype=np.uint8)

    def coverage(self) -> float:
        """Fraction of pixels inside the shape."""
        return float(np.count_nonzero(self.alpha_array())) / float(self.size * self.size)

    def to_pixel_buffer(self) -> PixelBuffer:
        return PixelBuffer.from_image(self.image)

    @classmethod
    def solid(cls, size: int) -> "MosaicMask":
        """A mask that is inside everywhere."""
        size = _check_size(size)
        image = Image.new("RGBA", (size, size), (0, 0, 0, MASK_INSIDE_ALPHA))
        return cls(size=size, shape="solid", image=image)


def _check_size(size: int) -> int:
    if isinstance(size, bool) or not isinstance(size, numbers.Integral) or size <= 0:
        raise InvalidParameterError(f"Mask size must be a positive integer, got {size!r}")
    return int(size)


def heart_outline(size: int, step: float = HEART_T_STEP) -> List[Point]:
    """
    Trace the heart curve.

    x(t) = 16 sin^3 t
    y(t) = 13 cos t - 5 cos 2t - 2 cos 3t - cos 4t

    sampled from t = 0 to 2*pi, scaled by size / 32, centered on the mask
    with y flipped so the lobes point up.

    Args:
        size: Mask width and height
        step: Parameter increment

    Returns:
        List of (x, y) vertices in pixel coordinates
    """
    if step <= 0:
        raise InvalidParameterError(f"step must be positive, got {step}")

    cx = size / 2.0
    cy = size / 2.0
    scale = size / HEART_CURVE_SPAN

    count = int(math.floor(2 * math.pi / step)) + 1
    t = np.arange(count, dtype=np.float64) * step

    x = 16 * np.sin(t) ** 3
    y = 13 * np.cos(t) - 5 * np.cos(2 * t) - 2 * np.cos(3 * t) - np.cos(4 * t)

    px = cx + x * scale
    py = cy - y * scale
    return list(zip(px.tolist(), py.tolist()))


def star_outline(size: int) -> List[Point]:
    """
    Trace a five-pointed star.

    Ten vertices alternate between an outer radius of 0.4 * size and an inner
    radius of half that, starting straight up at angle -pi/2.
    """
    cx = size / 2.0
    cy = size / 2.0
    outer = size * STAR_OUTER_RATIO
    inner = outer * STAR_INNER_RATIO

    points: List[Point] = []
    for i in range(STAR_POINTS * 2):
        radius = outer if i % 2 == 0 else inner
        angle = -math.pi / 2 + i * math.pi / STAR_POINTS
        points.append((cx + radius * math.cos(angle), cy + radius * math.sin(angle)))
    return points


def choose_shape(rng: Optional[random.Random] = None) -> str:
    """Pick 'heart' or 'star' uniformly at random."""
    chooser = rng if rng is not None else random
    return chooser.choice(MASK_SHAPES)


def create_mask(size: int, shape: str) -> MosaicMask:
    """
    Rasterize a shape into a binary mask.

    Args:
        size: Width and height of the mask in pixels
        shape: 'heart' or 'star'

    Returns:
        MosaicMask with alpha 255 inside the shape, 0 outside

    Raises:
        InvalidParameterError: If size is not positive or shape is unknown
    """
    size = _check_size(size)
    shape = str(shape).strip().lower()

    if shape == SHAPE_HEART:
        outline = heart_outline(size)
    elif shape == SHAPE_STAR:
        outline = star_outline(size)
    else:
        raise InvalidParameterError(
            f"Unsupported mask shape: {shape}. Use one of {', '.join(MASK_SHAPES)}"
        )

    image = Image.new("RGBA", (size, size), (0, 0, 0, MASK_OUTSIDE_ALPHA))
    draw = ImageDraw.Draw(image)
    draw.polygon(outline, fill=(0, 0, 0, MASK_INSIDE_ALPHA))

    return MosaicMask(size=size, shape=shape, image=image)
