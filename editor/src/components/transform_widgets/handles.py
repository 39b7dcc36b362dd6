"""Transform object handle system - ABC-based handle architecture.

Each handle type is a class that knows:
- Where its region lies in transform-local space
- How to test if a local point hits it
- How to draw itself into a PixelGrid
- What a press and a drag do to its owner's transform

Regions are sized in a local "unit" equal to HANDLE_UNIT screen pixels
divided by the owner's scale, capped at a fraction of the canvas so the
regions stay disjoint at every scale:

    Delete    square, top-left corner
    Opacity   square, top-right corner
    Scale     square, bottom-right corner
    Translate plus sign at the center
    Rotate    arc band under the top edge, within ROTATE_ARC_HALF_ANGLE of up
"""

from abc import ABC, abstractmethod
from enum import Enum
import logging

import numpy as np

from models.transform import Vec2
from constants import (
    HANDLE_UNIT, HANDLE_UNIT_MAX_FRACTION, ROTATE_ARC_HALF_ANGLE,
    SCALE_MIN, SCALE_MAX, OPACITY_MIN, OPACITY_MAX, OPACITY_DRAG_RATE
)
from .drag_context import DragContext

logger = logging.getLogger(__name__)


class HandleKind(Enum):
    """Closed set of manipulation handles on a transform object."""
    ROTATE = "rotate"
    TRANSLATE = "translate"
    SCALE = "scale"
    DELETE = "delete"
    OPACITY = "opacity"


def handle_unit(scale, half_w, half_h):
    """Local-space size of one handle unit for an object at this scale."""
    return min(HANDLE_UNIT / scale, min(half_w, half_h) * HANDLE_UNIT_MAX_FRACTION)


class Handle(ABC):
    """Abstract base class for transform object handles."""

    kind = None

    @abstractmethod
    def contains(self, x, y, half_w, half_h, unit):
        """Region membership test in local space.

        Works on float scalars and on numpy arrays (elementwise).

        Args:
            x, y: Local-space coordinates
            half_w, half_h: Half-dimensions of the object's canvas
            unit: Local handle unit (see handle_unit)
        """
        pass

    @abstractmethod
    def bounds(self, half_w, half_h, unit):
        """Axis-aligned local bounding box (min_x, min_y, max_x, max_y)."""
        pass

    def hit_test(self, local, half_w, half_h, unit) -> bool:
        return bool(self.contains(local.x, local.y, half_w, half_h, unit))

    def draw(self, grid, transform, half_w, half_h, unit, color):
        """Fill the handle region with a direct (unblended) write.

        The region is sampled at half a screen pixel so the fill has no gaps
        after scaling and rotation.
        """
        min_x, min_y, max_x, max_y = self.bounds(half_w, half_h, unit)
        step = 0.5 / transform.scale
        xs, ys = np.meshgrid(
            np.arange(min_x, max_x + step, step),
            np.arange(min_y, max_y + step, step),
        )
        mask = self.contains(xs, ys, half_w, half_h, unit)
        if not np.any(mask):
            return
        grid.set_pixels(transform.apply(Vec2(xs[mask], ys[mask])), color)

    def begin(self, obj, cursor):
        """Press on this handle. Returns True if a grab starts."""
        obj.drag = DragContext(self.kind, anchor=cursor, start=obj.transform.copy())
        return True

    @abstractmethod
    def drag(self, obj, cursor):
        """Apply this handle's effect for the raw buffer-space cursor."""
        pass


class _CornerSquare(Handle):
    """Square handle inset from one canvas corner."""

    def __init__(self, sign_x, sign_y):
        self.sign_x = sign_x
        self.sign_y = sign_y

    def _extent(self, half_w, half_h, unit):
        # Inset half a unit from the corner, two units wide
        inner_x = half_w - 2.5 * unit
        outer_x = half_w - 0.5 * unit
        inner_y = half_h - 2.5 * unit
        outer_y = half_h - 0.5 * unit
        return inner_x, outer_x, inner_y, outer_y

    def contains(self, x, y, half_w, half_h, unit):
        inner_x, outer_x, inner_y, outer_y = self._extent(half_w, half_h, unit)
        lx = x * self.sign_x
        ly = y * self.sign_y
        return (lx >= inner_x) & (lx <= outer_x) & (ly >= inner_y) & (ly <= outer_y)

    def bounds(self, half_w, half_h, unit):
        inner_x, outer_x, inner_y, outer_y = self._extent(half_w, half_h, unit)
        xs = sorted((inner_x * self.sign_x, outer_x * self.sign_x))
        ys = sorted((inner_y * self.sign_y, outer_y * self.sign_y))
        return xs[0], ys[0], xs[1], ys[1]


class DeleteHandle(_CornerSquare):
    """Top-left square. Pressing it marks the owner dead; it never grabs."""

    kind = HandleKind.DELETE

    def __init__(self):
        super().__init__(-1, -1)

    def begin(self, obj, cursor):
        obj.dead = True
        logger.debug("Object marked for deletion at %s", obj.transform.position)
        return False

    def drag(self, obj, cursor):
        pass


class ScaleHandle(_CornerSquare):
    """Bottom-right square for uniform scaling about the center."""

    kind = HandleKind.SCALE

    def __init__(self):
        super().__init__(1, 1)

    def begin(self, obj, cursor):
        super().begin(obj, cursor)
        # Local distance of the grabbed point; it keeps following the cursor
        obj.drag.reference_distance = obj.transform.apply_inverse(cursor).magnitude()
        return True

    def drag(self, obj, cursor):
        reference = obj.drag.reference_distance
        if reference <= 0:
            return
        distance = (cursor - obj.transform.position).magnitude()
        obj.transform.scale = max(SCALE_MIN, min(SCALE_MAX, distance / reference))


class OpacityHandle(_CornerSquare):
    """Top-right square. Dragging up raises opacity, down lowers it."""

    kind = HandleKind.OPACITY

    def __init__(self):
        super().__init__(1, -1)

    def drag(self, obj, cursor):
        start = obj.drag.start.opacity
        delta = (obj.drag.anchor.y - cursor.y) * OPACITY_DRAG_RATE
        obj.transform.opacity = int(max(OPACITY_MIN, min(OPACITY_MAX, round(start + delta))))


class TranslateHandle(Handle):
    """Plus sign at the center; the center follows the cursor."""

    kind = HandleKind.TRANSLATE

    def contains(self, x, y, half_w, half_h, unit):
        arm = 2.0 * unit
        thickness = 0.5 * unit
        ax = np.abs(x)
        ay = np.abs(y)
        vertical = (ax <= thickness) & (ay <= arm)
        horizontal = (ay <= thickness) & (ax <= arm)
        return vertical | horizontal

    def bounds(self, half_w, half_h, unit):
        arm = 2.0 * unit
        return -arm, -arm, arm, arm

    def drag(self, obj, cursor):
        obj.transform.position = Vec2(cursor.x, cursor.y)


class RotateHandle(Handle):
    """Arc band under the top edge for rotation about the center."""

    kind = HandleKind.ROTATE

    def __init__(self, half_angle=ROTATE_ARC_HALF_ANGLE):
        self.half_angle = half_angle

    def contains(self, x, y, half_w, half_h, unit):
        radius = np.hypot(x, y)
        inner = half_h - 2.5 * unit
        outer = half_h - 0.5 * unit
        in_band = (radius >= inner) & (radius <= outer)
        # Angle away from straight up (negative y)
        in_arc = (y < 0) & (np.arctan2(np.abs(x), -y) <= self.half_angle)
        # Stay clear of the corner squares
        clear_of_corners = np.abs(x) <= half_w - 3.0 * unit
        return in_band & in_arc & clear_of_corners

    def bounds(self, half_w, half_h, unit):
        outer = half_h - 0.5 * unit
        inner = half_h - 2.5 * unit
        reach = min(outer * np.sin(self.half_angle), half_w - 3.0 * unit)
        return -reach, -outer, reach, -inner * np.cos(self.half_angle)

    def drag(self, obj, cursor):
        start = obj.drag.start
        position = obj.transform.position
        grabbed = (obj.drag.anchor - position).angle_from_down()
        current = (cursor - position).angle_from_down()
        obj.transform.rotation = start.rotation + (current - grabbed)
