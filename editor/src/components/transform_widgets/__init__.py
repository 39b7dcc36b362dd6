"""
Feedback Editor - Transform Object Handle Components

This package contains the handle architecture of transform objects:
- handles.py: ABC-based handle classes (RotateHandle, TranslateHandle, etc.)
- handle_set.py: Priority-ordered handle set used for hit-testing
- drag_context.py: Grab state captured on press
"""

from .handles import (
    Handle, HandleKind, RotateHandle, TranslateHandle,
    ScaleHandle, DeleteHandle, OpacityHandle, handle_unit
)
from .handle_set import HandleSet, DEFAULT_HANDLES
from .drag_context import DragContext

__all__ = [
    'Handle', 'HandleKind', 'RotateHandle', 'TranslateHandle',
    'ScaleHandle', 'DeleteHandle', 'OpacityHandle', 'handle_unit',
    'HandleSet', 'DEFAULT_HANDLES',
    'DragContext',
]
