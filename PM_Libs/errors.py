"""
Exception types for the photo mosaic editor.

Each error derives from the builtin exception a caller would otherwise
expect (ValueError for bad arguments, IOError for decode/encode problems),
so code catching the builtins keeps working.

Classes:
    PhotoMosaicError: Base class for all library errors
    InvalidParameterError: A parameter is outside its allowed range
    DecodeFailureError: A source image could not be read or decoded
    EncodeFailureError: A buffer could not be encoded or written
"""


class PhotoMosaicError(Exception):
    """Base class for all photo mosaic editor errors."""


class InvalidParameterError(PhotoMosaicError, ValueError):
    """Raised when an operation parameter is invalid. No state is changed."""


class DecodeFailureError(PhotoMosaicError, IOError):
    """Raised when a source image cannot be opened or decoded."""


class EncodeFailureError(PhotoMosaicError, IOError):
    """Raised when a pixel buffer cannot be encoded or written to disk."""
