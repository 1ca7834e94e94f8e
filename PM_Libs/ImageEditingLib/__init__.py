"""
ImageEditingLib - Core image editing functionality

This module provides the pixel buffer model, the pure transform
operations, the editor action catalog, and image file I/O.
"""

from PM_Libs.ImageEditingLib.image_models import (
    CropRect,
    PixelBuffer,
    RgbaColor,
    RgbaSample,
)
from PM_Libs.ImageEditingLib.image_editing_ops import (
    adjust_brightness,
    adjust_contrast,
    convert_to_grayscale,
    rotate_90,
    add_border,
    crop,
)
from PM_Libs.ImageEditingLib.image_io import (
    get_supported_image_formats,
    is_supported_format,
    open_image,
    load_pixel_buffer,
    save_pixel_buffer,
)
from PM_Libs.ImageEditingLib.edit_actions import (
    EDIT_ACTIONS,
    EditAction,
    get_action,
    list_actions,
)

__all__ = [
    "CropRect",
    "PixelBuffer",
    "RgbaColor",
    "RgbaSample",
    "adjust_brightness",
    "adjust_contrast",
    "convert_to_grayscale",
    "rotate_90",
    "add_border",
    "crop",
    "get_supported_image_formats",
    "is_supported_format",
    "open_image",
    "load_pixel_buffer",
    "save_pixel_buffer",
    "EDIT_ACTIONS",
    "EditAction",
    "get_action",
    "list_actions",
]
