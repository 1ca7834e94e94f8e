"""
Edit session with linear undo/redo history.

An EditSession owns the current PixelBuffer of one open image plus two
last-in-first-out lists of earlier buffers. Buffers are immutable, so a
snapshot is just a reference and no pixel data is copied per edit.

Classes:
    EditSession: Current buffer plus undo and redo history
"""

from pathlib import Path
from threading import RLock
from typing import Any, BinaryIO, Callable, List, Optional, Union
import logging

from PM_Libs.constants import DEFAULT_BORDER_WIDTH, DEFAULT_OUTPUT_FORMAT
from PM_Libs.ImageEditingLib import image_editing_ops
from PM_Libs.ImageEditingLib.edit_actions import get_action
from PM_Libs.ImageEditingLib.image_io import load_pixel_buffer, save_pixel_buffer
from PM_Libs.ImageEditingLib.image_models import CropRect, PixelBuffer

logger = logging.getLogger(__name__)


class EditSession:
    """
    Holds the image being edited and its history.

    The undo list holds pre-edit states and the redo list holds states that
    were undone. Committing a new edit after an undo drops the redo list.

    Example:
        >>> session = EditSession.open("photo.png")
        >>> session.brightness(30)
        >>> session.rotate()
        >>> session.undo()          # back to the brightened image
        >>> session.save("photo.png")
    """

    def __init__(self, buffer: PixelBuffer):
        if not isinstance(buffer, PixelBuffer):
            raise TypeError(f"Expected PixelBuffer, got {type(buffer)}")

        self._current = buffer
        self._undo: List[PixelBuffer] = []
        self._redo: List[PixelBuffer] = []
        self._lock = RLock()

    @classmethod
    def open(cls, source: Union[str, Path, BinaryIO]) -> "EditSession":
        """
        Start a session on an image file.

        Raises:
            DecodeFailureError: If the image cannot be read
        """
        return cls(load_pixel_buffer(source))

    def save(
        self,
        destination: Union[str, Path, BinaryIO],
        save_format: str = DEFAULT_OUTPUT_FORMAT,
    ) -> None:
        """
        Write the current buffer out. History is not affected.

        Raises:
            EncodeFailureError: If the image cannot be written
        """
        save_pixel_buffer(self.current, destination, save_format)

    @property
    def current(self) -> PixelBuffer:
        return self._current

    @property
    def can_undo(self) -> bool:
        return bool(self._undo)

    @property
    def can_redo(self) -> bool:
        return bool(self._redo)

    @property
    def undo_depth(self) -> int:
        return len(self._undo)

    @property
    def redo_depth(self) -> int:
        return len(self._redo)

    def commit(self, new_buffer: PixelBuffer) -> PixelBuffer:
        """
        Record the current buffer in history and make new_buffer current.

        The redo list is cleared entirely.

        Args:
            new_buffer: The result of an edit

        Returns:
            new_buffer
        """
        if not isinstance(new_buffer, PixelBuffer):
            raise TypeError(f"Expected PixelBuffer, got {type(new_buffer)}")

        with self._lock:
            self._undo.append(self._current)
            dropped = len(self._redo)
            self._redo.clear()
            self._current = new_buffer

        logger.debug(
            f"Committed {new_buffer.width}x{new_buffer.height} buffer "
            f"(undo depth {len(self._undo)}, dropped {dropped} redo states)"
        )
        return new_buffer

    def apply(self, transform: Callable[..., PixelBuffer], *args: Any, **kwargs: Any) -> PixelBuffer:
        """
        Run a pure transform on the current buffer and commit the result.

        The transform runs before anything is recorded, so a transform that
        raises leaves the session exactly as it was.

        Returns:
            The new current buffer
        """
        with self._lock:
            result = transform(self._current, *args, **kwargs)
            return self.commit(result)

    def apply_named(self, name: str, value: Any = None) -> PixelBuffer:
        """
        Run an editor action by name and commit the result.

        The value is checked against the action's range before the
        transform runs; None selects the action's default.

        Raises:
            KeyError: If no action has that name
            InvalidParameterError: If the value is missing or out of range
        """
        return self.apply(get_action(name).run, value)

    def undo(self) -> Optional[PixelBuffer]:
        """
        Step back one edit.

        Returns:
            The restored buffer, or None if there was nothing to undo
        """
        with self._lock:
            if not self._undo:
                logger.debug("Nothing to undo")
                return None

            self._redo.append(self._current)
            self._current = self._undo.pop()

        logger.debug(f"Undo (undo depth {len(self._undo)}, redo depth {len(self._redo)})")
        return self._current

    def redo(self) -> Optional[PixelBuffer]:
        """
        Step forward one undone edit.

        Returns:
            The restored buffer, or None if there was nothing to redo
        """
        with self._lock:
            if not self._redo:
                logger.debug("Nothing to redo")
                return None

            self._undo.append(self._current)
            self._current = self._redo.pop()

        logger.debug(f"Redo (undo depth {len(self._undo)}, redo depth {len(self._redo)})")
        return self._current

    def reset(self, buffer: PixelBuffer) -> None:
        """Replace the current buffer and forget all history."""
        if not isinstance(buffer, PixelBuffer):
            raise TypeError(f"Expected PixelBuffer, got {type(buffer)}")

        with self._lock:
            self._current = buffer
            self._undo.clear()
            self._redo.clear()

        logger.warning("Edit history reset")

    # Editor actions

    def brightness(self, offset: int) -> PixelBuffer:
        return self.apply(image_editing_ops.adjust_brightness, offset)

    def contrast(self, factor: float) -> PixelBuffer:
        return self.apply(image_editing_ops.adjust_contrast, factor)

    def grayscale(self) -> PixelBuffer:
        return self.apply(image_editing_ops.convert_to_grayscale)

    def rotate(self) -> PixelBuffer:
        return self.apply(image_editing_ops.rotate_90)

    def add_border(self, border_width: int = DEFAULT_BORDER_WIDTH) -> PixelBuffer:
        return self.apply(image_editing_ops.add_border, border_width)

    def crop(self, rect: CropRect) -> PixelBuffer:
        return self.apply(image_editing_ops.crop, rect)
