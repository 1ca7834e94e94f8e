"""
Tile preparation for mosaic compositing.

Every source image is decoded and squeezed to exactly tile_size x tile_size
with bilinear resampling. Aspect ratio is not preserved and alpha is
dropped, so every tile is an opaque RGB square.

Functions:
    prepare_tile: Resize one decoded image into a tile
    prepare_tiles: Decode and resize a list of sources
"""

from typing import Any, List, Sequence
import logging

from PM_Libs.constants import DEFAULT_TILE_SIZE
from PM_Libs.errors import InvalidParameterError
from PM_Libs.ImageEditingLib.image_io import open_image
from PM_Libs.pillow_compat import Image

logger = logging.getLogger(__name__)


def prepare_tile(image: Any, tile_size: int = DEFAULT_TILE_SIZE) -> Any:
    """
    Resize a decoded image into a square opaque tile.

    Args:
        image: PIL Image in any mode
        tile_size: Tile width and height in pixels

    Returns:
        RGB PIL Image of size (tile_size, tile_size)

    Raises:
        InvalidParameterError: If tile_size is not positive
        TypeError: If image is not a PIL Image
    """
    if not hasattr(image, "convert"):
        raise TypeError(f"Expected PIL Image, got {type(image)}")

    if tile_size <= 0:
        raise InvalidParameterError(f"tile_size must be positive, got {tile_size}")

    rgb = image.convert("RGB")
    if rgb.size == (tile_size, tile_size):
        return rgb.copy()
    return rgb.resize((tile_size, tile_size), Image.Resampling.BILINEAR)


def prepare_tiles(sources: Sequence[Any], tile_size: int = DEFAULT_TILE_SIZE) -> List[Any]:
    """
    Decode and resize every source into a tile.

    Sources may be file paths, binary file objects, or already-decoded PIL
    Images. All sources are processed before anything is returned, so one
    bad file fails the whole batch.

    Args:
        sources: Sequence of paths, file objects or PIL Images
        tile_size: Tile width and height in pixels

    Returns:
        List of RGB tiles in source order

    Raises:
        DecodeFailureError: If any source cannot be decoded
    """
    tiles = []
    for source in sources:
        image = source if hasattr(source, "convert") else open_image(source)
        tiles.append(prepare_tile(image, tile_size))

    logger.debug(f"Prepared {len(tiles)} tiles at {tile_size}x{tile_size}")
    return tiles
