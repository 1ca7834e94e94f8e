"""
Mask-driven mosaic compositor.

Builds a square mosaic in one pass:

1. pick a mask shape (heart or star) unless one is given
2. rasterize the mask at canvas size
3. decode and resize every source image into a tile
4. walk the canvas in tile_size steps, row by row; wherever the mask alpha
   at a cell's center is above the threshold, stamp the next tile
   (round-robin, wrapping when tiles run out)

The canvas starts opaque white, and cells outside the mask stay white.
Nothing is kept between builds.

Example:
    >>> compositor = MosaicCompositor(MosaicConfig(tile_size=40, canvas_size=600))
    >>> mosaic = compositor.build(["a.png", "b.png"], shape="heart")
    >>> mosaic.size
    (600, 600)
"""

from dataclasses import dataclass, asdict
from typing import Any, Dict, List, Optional, Sequence, Tuple
import logging
import numbers
import random

from PM_Libs.constants import (
    DEFAULT_ALPHA_THRESHOLD,
    DEFAULT_CANVAS_SIZE,
    DEFAULT_TILE_SIZE,
    MOSAIC_BACKGROUND_COLOR,
)
from PM_Libs.errors import InvalidParameterError
from PM_Libs.ImageEditingLib.image_models import PixelBuffer
from PM_Libs.MosaicLib.mask_shapes import MosaicMask, choose_shape, create_mask
from PM_Libs.MosaicLib.tile_loader import prepare_tiles
from PM_Libs.pillow_compat import Image

logger = logging.getLogger(__name__)

Cell = Tuple[int, int]


@dataclass
class MosaicConfig:
    """Configuration for mosaic generation.

    Attributes:
        tile_size: Tile width and height in pixels (default: 40)
        canvas_size: Canvas width and height in pixels (default: 600)
        alpha_threshold: A cell is active when mask alpha exceeds this (default: 127)
        background: RGB fill for cells without a tile (default: white)
    """
    tile_size: int = DEFAULT_TILE_SIZE
    canvas_size: int = DEFAULT_CANVAS_SIZE
    alpha_threshold: int = DEFAULT_ALPHA_THRESHOLD
    background: Tuple[int, int, int] = MOSAIC_BACKGROUND_COLOR

    def __post_init__(self):
        """Validate sizes and threshold."""
        for name in ("tile_size", "canvas_size", "alpha_threshold"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, numbers.Integral):
                raise InvalidParameterError(f"{name} must be an integer, got {value!r}")

        if self.tile_size <= 0:
            raise InvalidParameterError(f"tile_size must be positive, got {self.tile_size}")

        if self.canvas_size <= 0:
            raise InvalidParameterError(f"canvas_size must be positive, got {self.canvas_size}")

        if self.tile_size > self.canvas_size:
            raise InvalidParameterError(
                f"tile_size ({self.tile_size}) cannot exceed canvas_size ({self.canvas_size})"
            )

        if not (0 <= self.alpha_threshold <= 255):
            raise InvalidParameterError(f"alpha_threshold must be 0-255, got {self.alpha_threshold}")

        self.background = tuple(int(c) for c in self.background)
        if len(self.background) != 3 or not all(0 <= c <= 255 for c in self.background):
            raise InvalidParameterError(f"background must be an RGB triple, got {self.background}")

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        data = asdict(self)
        data["background"] = list(self.background)
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MosaicConfig":
        """Create from dictionary."""
        filtered = {k: v for k, v in data.items()
                    if k in cls.__dataclass_fields__}
        return cls(**filtered)


def active_cells(mask: MosaicMask, config: MosaicConfig) -> List[Cell]:
    """
    List the top-left corners of cells that should receive a tile.

    Cells are visited row by row, left to right. A cell is active when the
    mask alpha at its center exceeds config.alpha_threshold; a center that
    falls off the mask counts as outside.
    """
    half = config.tile_size // 2
    cells = []
    for y in range(0, config.canvas_size, config.tile_size):
        for x in range(0, config.canvas_size, config.tile_size):
            if mask.alpha_at(x + half, y + half) > config.alpha_threshold:
                cells.append((x, y))
    return cells


def composite_tiles(mask: MosaicMask, tiles: Sequence[Any], config: MosaicConfig) -> PixelBuffer:
    """
    Stamp tiles onto a blank canvas wherever the mask is inside.

    Args:
        mask: MosaicMask of size config.canvas_size
        tiles: Non-empty sequence of RGB tiles, each tile_size x tile_size
        config: Mosaic configuration

    Returns:
        Opaque PixelBuffer of size (canvas_size, canvas_size)

    Raises:
        InvalidParameterError: If the mask size, tile list or tile sizes are wrong
    """
    if mask.size != config.canvas_size:
        raise InvalidParameterError(
            f"Mask size {mask.size} does not match canvas size {config.canvas_size}"
        )

    if not tiles:
        raise InvalidParameterError("At least one tile is required")

    expected = (config.tile_size, config.tile_size)
    for index, tile in enumerate(tiles):
        if tuple(tile.size) != expected:
            raise InvalidParameterError(
                f"Tile {index} is {tile.size[0]}x{tile.size[1]}, expected {expected[0]}x{expected[1]}"
            )

    canvas = Image.new("RGB", (config.canvas_size, config.canvas_size), config.background)

    cells = active_cells(mask, config)
    for index, (x, y) in enumerate(cells):
        canvas.paste(tiles[index % len(tiles)], (x, y))

    logger.debug(f"Stamped {len(cells)} cells using {len(tiles)} tiles")
    return PixelBuffer.from_image(canvas)


class MosaicCompositor:
    """
    Builds mask-shaped mosaics from a list of source images.

    Attributes:
        config: MosaicConfig with tile size, canvas size and threshold
        rng: Random source used to pick the mask shape when none is given
    """

    def __init__(self, config: Optional[MosaicConfig] = None, rng: Optional[random.Random] = None):
        self.config = config if config is not None else MosaicConfig()
        self.rng = rng

    def make_mask(self, shape: Optional[str] = None) -> MosaicMask:
        """Rasterize the given shape, or a randomly chosen one, at canvas size."""
        if shape is None:
            shape = choose_shape(self.rng)
        return create_mask(self.config.canvas_size, shape)

    def build(
        self,
        sources: Sequence[Any],
        shape: Optional[str] = None,
        mask: Optional[MosaicMask] = None,
    ) -> Optional[PixelBuffer]:
        """
        Build a mosaic.

        Args:
            sources: Paths, binary file objects or PIL Images to use as tiles
            shape: 'heart' or 'star'; chosen at random when None
            mask: Ready-made mask; overrides shape when given

        Returns:
            The finished canvas, or None if sources is empty

        Raises:
            DecodeFailureError: If any source cannot be decoded
            InvalidParameterError: If shape or mask is invalid
        """
        if not sources:
            logger.debug("No mosaic sources given, nothing to build")
            return None

        if mask is None:
            mask = self.make_mask(shape)

        # decode everything up front so a bad file never yields a partial canvas
        tiles = prepare_tiles(sources, self.config.tile_size)
        result = composite_tiles(mask, tiles, self.config)

        logger.info(
            f"Built {mask.shape} mosaic {self.config.canvas_size}x{self.config.canvas_size} "
            f"from {len(tiles)} source images"
        )
        return result


def build_mosaic(
    sources: Sequence[Any],
    shape: Optional[str] = None,
    rng: Optional[random.Random] = None,
    config: Optional[MosaicConfig] = None,
    mask: Optional[MosaicMask] = None,
) -> Optional[PixelBuffer]:
    """
    One-shot helper around MosaicCompositor.build().

    Returns:
        The finished canvas, or None if sources is empty
    """
    return MosaicCompositor(config=config, rng=rng).build(sources, shape=shape, mask=mask)
