"""
MosaicLib - Mask-shaped photo mosaics

This module provides shape mask rasterization, tile preparation and
the round-robin mosaic compositor.
"""

from PM_Libs.MosaicLib.mask_shapes import (
    MosaicMask,
    heart_outline,
    star_outline,
    choose_shape,
    create_mask,
)
from PM_Libs.MosaicLib.tile_loader import (
    prepare_tile,
    prepare_tiles,
)
from PM_Libs.MosaicLib.mosaic_compositor import (
    MosaicConfig,
    MosaicCompositor,
    active_cells,
    composite_tiles,
    build_mosaic,
)

__all__ = [
    "MosaicMask",
    "heart_outline",
    "star_outline",
    "choose_shape",
    "create_mask",
    "prepare_tile",
    "prepare_tiles",
    "MosaicConfig",
    "MosaicCompositor",
    "active_cells",
    "composite_tiles",
    "build_mosaic",
]
