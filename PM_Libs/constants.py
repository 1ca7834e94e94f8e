"""
Constants and configuration values for the photo mosaic editor.

This module centralizes all default values, parameter ranges and
magic numbers used throughout the library.
"""

# Brightness / contrast ranges
BRIGHTNESS_MIN = -100
BRIGHTNESS_MAX = 100
BRIGHTNESS_SCALE = 255.0
DEFAULT_BRIGHTNESS = 0
CONTRAST_MIN = 0.5
CONTRAST_MAX = 2.0
CONTRAST_PIVOT = 0.5
DEFAULT_CONTRAST = 1.0

# Border
DEFAULT_BORDER_WIDTH = 20
BORDER_WIDTH_MIN = 1
BORDER_COLOR = (0.0, 0.0, 0.0, 1.0)

# Mosaic defaults
DEFAULT_TILE_SIZE = 40
DEFAULT_CANVAS_SIZE = 600
DEFAULT_ALPHA_THRESHOLD = 127
MOSAIC_BACKGROUND_COLOR = (255, 255, 255)

# Mask shapes
SHAPE_HEART = "heart"
SHAPE_STAR = "star"
MASK_SHAPES = (SHAPE_HEART, SHAPE_STAR)
MASK_INSIDE_ALPHA = 255
MASK_OUTSIDE_ALPHA = 0

# Heart curve: x spans [-16, 16], so size / 32 fits it to the mask
HEART_CURVE_SPAN = 32.0
HEART_T_STEP = 0.01

# Star polygon
STAR_POINTS = 5
STAR_OUTER_RATIO = 0.4
STAR_INNER_RATIO = 0.5  # inner radius relative to outer radius

# File I/O
DEFAULT_OUTPUT_FORMAT = "PNG"
SUPPORTED_STANDARD_IMAGES = {".png", ".jpg", ".jpeg", ".bmp", ".gif", ".tiff", ".webp"}
