"""Drag context dataclass for transform objects.

Unified grab state: which handle is held, where the press happened and
what the transform looked like at that moment.
"""

from dataclasses import dataclass


@dataclass
class DragContext:
    """State captured when a handle is pressed, cleared on release."""
    kind: object  # HandleKind
    anchor: object = None  # Vec2, raw cursor at press (buffer space)
    start: object = None  # Transform snapshot at press
    reference_distance: float = 0.0  # Scale handle: local distance of the grabbed point
