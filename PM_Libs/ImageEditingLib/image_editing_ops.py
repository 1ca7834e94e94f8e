"""
Core image editing operations for the photo mosaic editor.

Every function here is pure: it reads a PixelBuffer, allocates a new one
and returns it. Inputs are never modified, and a function either returns a
complete result or raises InvalidParameterError before doing any work.

Functions:
    adjust_brightness: Shift R, G, B by offset/255
    adjust_contrast: Scale R, G, B around mid-gray
    convert_to_grayscale: Replace R, G, B with their unweighted mean
    rotate_90: Quarter turn clockwise
    add_border: Surround the image with an opaque black frame
    crop: Extract an exact sub-rectangle
"""

import numbers

import numpy as np

from PM_Libs.constants import (
    BORDER_COLOR,
    BORDER_WIDTH_MIN,
    BRIGHTNESS_MAX,
    BRIGHTNESS_MIN,
    BRIGHTNESS_SCALE,
    CONTRAST_MAX,
    CONTRAST_MIN,
    CONTRAST_PIVOT,
    DEFAULT_BORDER_WIDTH,
)
from PM_Libs.errors import InvalidParameterError
from PM_Libs.ImageEditingLib.image_models import CropRect, PixelBuffer


def _check_buffer(buffer: PixelBuffer) -> None:
    if not isinstance(buffer, PixelBuffer):
        raise TypeError(f"Expected PixelBuffer, got {type(buffer)}")


def _with_rgb(buffer: PixelBuffer, rgb: np.ndarray) -> PixelBuffer:
    """Build a new buffer from replacement RGB planes and the original alpha."""
    samples = np.empty_like(buffer.samples)
    samples[:, :, :3] = np.clip(rgb, 0.0, 1.0)
    samples[:, :, 3] = buffer.samples[:, :, 3]
    return PixelBuffer(buffer.width, buffer.height, samples)


def adjust_brightness(buffer: PixelBuffer, offset: int) -> PixelBuffer:
    """
    Brighten or darken an image.

    Adds offset/255 to the red, green and blue channels of every pixel and
    clamps to [0, 1]. Alpha is left untouched.

    Args:
        buffer: Source PixelBuffer
        offset: Integer shift in [-100, 100]

    Returns:
        New PixelBuffer with the adjustment applied

    Raises:
        InvalidParameterError: If offset is not an integer in range
    """
    _check_buffer(buffer)

    if isinstance(offset, bool) or not isinstance(offset, numbers.Integral):
        raise InvalidParameterError(f"offset must be an integer, got {offset!r}")

    if not (BRIGHTNESS_MIN <= offset <= BRIGHTNESS_MAX):
        raise InvalidParameterError(
            f"offset must be {BRIGHTNESS_MIN} to {BRIGHTNESS_MAX}, got {offset}"
        )

    return _with_rgb(buffer, buffer.samples[:, :, :3] + offset / BRIGHTNESS_SCALE)


def adjust_contrast(buffer: PixelBuffer, factor: float) -> PixelBuffer:
    """
    Stretch or compress contrast around mid-gray.

    Each of R, G, B becomes clamp((c - 0.5) * factor + 0.5); a channel at
    exactly 0.5 is a fixed point for every factor.

    Args:
        buffer: Source PixelBuffer
        factor: Contrast multiplier in [0.5, 2.0]

    Returns:
        New PixelBuffer with the adjustment applied

    Raises:
        InvalidParameterError: If factor is not a number or is out of range
    """
    _check_buffer(buffer)

    if isinstance(factor, bool) or not isinstance(factor, numbers.Real):
        raise InvalidParameterError(f"factor must be a number, got {factor!r}")

    factor = float(factor)
    if not (CONTRAST_MIN <= factor <= CONTRAST_MAX):
        raise InvalidParameterError(
            f"factor must be {CONTRAST_MIN} to {CONTRAST_MAX}, got {factor}"
        )

    rgb = (buffer.samples[:, :, :3] - CONTRAST_PIVOT) * factor + CONTRAST_PIVOT
    return _with_rgb(buffer, rgb)


def convert_to_grayscale(buffer: PixelBuffer) -> PixelBuffer:
    """
    Convert an image to grayscale using the plain mean of R, G and B.

    Args:
        buffer: Source PixelBuffer

    Returns:
        New PixelBuffer where R == G == B for every pixel
    """
    _check_buffer(buffer)

    gray = buffer.samples[:, :, :3].sum(axis=2) / 3.0
    return _with_rgb(buffer, np.repeat(gray[:, :, np.newaxis], 3, axis=2))


def rotate_90(buffer: PixelBuffer) -> PixelBuffer:
    """
    Rotate an image a quarter turn clockwise.

    Source pixel (x, y) lands on (height - 1 - y, x) of a height x width
    result.
    """
    _check_buffer(buffer)

    # k=-1 turns clockwise in (row, column) space
    rotated = np.rot90(buffer.samples, k=-1)
    return PixelBuffer(buffer.height, buffer.width, rotated)


def add_border(buffer: PixelBuffer, border_width: int = DEFAULT_BORDER_WIDTH) -> PixelBuffer:
    """
    Add an opaque black border around an image.

    Args:
        buffer: Source PixelBuffer
        border_width: Border thickness in pixels (positive integer, default 20)

    Returns:
        New PixelBuffer of size (width + 2*border, height + 2*border) with
        the source copied unchanged at offset (border, border)

    Raises:
        InvalidParameterError: If border_width is not a positive integer
    """
    _check_buffer(buffer)

    if isinstance(border_width, bool) or not isinstance(border_width, numbers.Integral):
        raise InvalidParameterError(f"border_width must be an integer, got {border_width!r}")

    if border_width < BORDER_WIDTH_MIN:
        raise InvalidParameterError(f"border_width must be positive, got {border_width}")

    border = int(border_width)
    width = buffer.width + 2 * border
    height = buffer.height + 2 * border

    samples = np.empty((height, width, 4), dtype=np.float64)
    samples[:, :] = BORDER_COLOR
    samples[border:border + buffer.height, border:border + buffer.width] = buffer.samples

    return PixelBuffer(width, height, samples)


def crop(buffer: PixelBuffer, rect: CropRect) -> PixelBuffer:
    """
    Extract the exact sub-rectangle described by rect.

    Args:
        buffer: Source PixelBuffer
        rect: CropRect in source pixel coordinates

    Returns:
        New PixelBuffer of size (rect.width, rect.height)

    Raises:
        InvalidParameterError: If rect is empty or not fully inside the buffer
    """
    _check_buffer(buffer)

    if not isinstance(rect, CropRect):
        raise TypeError(f"Expected CropRect, got {type(rect)}")

    if not rect.fits_within(buffer.width, buffer.height):
        raise InvalidParameterError(
            f"Crop rectangle {rect.box} is outside a {buffer.width}x{buffer.height} buffer"
        )

    left, top, right, bottom = rect.box
    return PixelBuffer(rect.width, rect.height, buffer.samples[top:bottom, left:right])
