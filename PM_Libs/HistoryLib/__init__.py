"""
HistoryLib - Edit sessions with undo/redo

This module provides the EditSession that owns the image being edited
and its linear undo/redo history.
"""

from PM_Libs.HistoryLib.edit_session import EditSession

__all__ = [
    "EditSession",
]
