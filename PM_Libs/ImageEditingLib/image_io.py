"""
Image loading and saving for the photo mosaic editor.

Decoding and encoding are the only places the editing side touches the
file system. Failures are reported as DecodeFailureError or
EncodeFailureError with the offending path in the message.

Functions:
    get_supported_image_formats: List of readable file extensions
    is_supported_format: Check a path's extension
    open_image: Decode a path or binary file object into a PIL Image
    load_pixel_buffer: Decode a path or file object into a PixelBuffer
    save_pixel_buffer: Encode a PixelBuffer to disk (PNG by default)
"""

import logging
from pathlib import Path
from typing import Any, BinaryIO, List, Union

from PM_Libs.constants import DEFAULT_OUTPUT_FORMAT, SUPPORTED_STANDARD_IMAGES
from PM_Libs.errors import DecodeFailureError, EncodeFailureError
from PM_Libs.ImageEditingLib.image_models import PixelBuffer
from PM_Libs.pillow_compat import Image

logger = logging.getLogger(__name__)

ImageSource = Union[str, Path, BinaryIO]


def get_supported_image_formats() -> List[str]:
    """
    Get list of supported standard image formats.

    Returns:
        Sorted list of file extensions (e.g., ['.bmp', '.gif', ...])
    """
    return sorted(SUPPORTED_STANDARD_IMAGES)


def is_supported_format(file_path: Union[str, Path]) -> bool:
    """Check if a file path has a supported image extension."""
    return Path(file_path).suffix.lower() in SUPPORTED_STANDARD_IMAGES


def _describe(source: ImageSource) -> str:
    if isinstance(source, (str, Path)):
        return str(source)
    return str(getattr(source, "name", repr(source)))


def open_image(source: ImageSource) -> Any:
    """
    Open and fully decode an image.

    Args:
        source: Path or binary file object

    Returns:
        Decoded PIL Image (pixel data loaded, file handle released)

    Raises:
        DecodeFailureError: If the file is missing or cannot be decoded
    """
    try:
        with Image.open(source) as img:
            img.load()
            return img.copy()
    except (OSError, ValueError, SyntaxError, Image.DecompressionBombError) as e:
        raise DecodeFailureError(f"Failed to load image from {_describe(source)}: {e}") from e


def load_pixel_buffer(source: ImageSource) -> PixelBuffer:
    """
    Decode an image into a PixelBuffer.

    Args:
        source: Path or binary file object

    Returns:
        PixelBuffer in RGBA

    Raises:
        DecodeFailureError: If the image cannot be read
    """
    buffer = PixelBuffer.from_image(open_image(source))
    logger.debug(f"Loaded {buffer.width}x{buffer.height} image from {_describe(source)}")
    return buffer


def save_pixel_buffer(
    buffer: PixelBuffer,
    destination: Union[str, Path, BinaryIO],
    save_format: str = DEFAULT_OUTPUT_FORMAT,
) -> None:
    """
    Encode a PixelBuffer and write it out.

    Args:
        buffer: PixelBuffer to save
        destination: Path or writable binary file object
        save_format: Pillow format name (default 'PNG')

    Raises:
        EncodeFailureError: If the image cannot be encoded or written
    """
    save_format = save_format.upper()
    if save_format == "JPG":
        save_format = "JPEG"

    image = buffer.to_image()
    if save_format == "JPEG":
        # JPEG has no alpha channel
        image = image.convert("RGB")

    try:
        image.save(destination, format=save_format)
    except (OSError, ValueError, KeyError) as e:
        raise EncodeFailureError(f"Failed to save image to {_describe(destination)}: {e}") from e

    logger.debug(f"Saved {buffer.width}x{buffer.height} image to {_describe(destination)}")
