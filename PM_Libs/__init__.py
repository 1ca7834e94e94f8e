"""
PM_Libs - Photo Mosaic Editor Library Modules

This package contains the core functionality for the photo mosaic editor,
organized into specialized sub-packages:

- ImageEditingLib: Pixel buffers, pure image transforms and image I/O
- HistoryLib: Edit sessions with linear undo/redo history
- MosaicLib: Shape masks, tile preparation and mosaic compositing
"""

__version__ = "0.1.0"
