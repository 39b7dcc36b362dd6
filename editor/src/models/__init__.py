"""
Feedback Editor - Data Models

Value types shared by the core and its hosts:
- Vec2, Transform: 2D affine math (local <-> buffer space)
- PixelGrid: non-owning RGBA framebuffer view
- ClickState, EditMode, InputSample, ButtonTracker: per-tick input
"""

from .transform import Vec2, Transform
from .pixel_grid import PixelGrid
from .input import ClickState, EditMode, InputSample, ButtonTracker

__all__ = [
    'Vec2', 'Transform', 'PixelGrid',
    'ClickState', 'EditMode', 'InputSample', 'ButtonTracker',
]
