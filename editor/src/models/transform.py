"""Transform data structures for coordinate and state representation."""
import math
from dataclasses import dataclass, replace


@dataclass
class Vec2:
    """2D vector for coordinate pairs.

    Used for any x/y coordinate pair across different spaces:
    - Buffer pixels (top-left origin, Y-down)
    - Transform-local space (origin at the object's center)

    Operations return new values. Components may also be numpy arrays, in
    which case every operation applies elementwise (used by the vectorized
    feedback and overlay passes).
    """
    x: float
    y: float

    def __iter__(self):
        """Allow tuple unpacking: x, y = vec2"""
        return iter((self.x, self.y))

    def __add__(self, other):
        return Vec2(self.x + other.x, self.y + other.y)

    def __sub__(self, other):
        return Vec2(self.x - other.x, self.y - other.y)

    def __neg__(self):
        return Vec2(-self.x, -self.y)

    def __mul__(self, other):
        """Elementwise product with a Vec2, or scale by a scalar."""
        if isinstance(other, Vec2):
            return Vec2(self.x * other.x, self.y * other.y)
        return Vec2(self.x * other, self.y * other)

    __rmul__ = __mul__

    def __truediv__(self, other):
        """Elementwise quotient with a Vec2, or divide by a scalar."""
        if isinstance(other, Vec2):
            return Vec2(self.x / other.x, self.y / other.y)
        return Vec2(self.x / other, self.y / other)

    def rotate(self, angle):
        """Rotate by angle (radians) using the standard 2D rotation matrix.

        In the buffer's Y-down convention a positive angle turns clockwise
        on screen.
        """
        sin = math.sin(angle)
        cos = math.cos(angle)
        return Vec2(self.x * cos - self.y * sin, self.y * cos + self.x * sin)

    def magnitude(self):
        return (self.x * self.x + self.y * self.y) ** 0.5

    def normalized(self):
        """Unit vector in the same direction.

        Precondition: magnitude is non-zero.
        """
        magnitude = self.magnitude()
        return Vec2(self.x / magnitude, self.y / magnitude)

    def angle_from_down(self):
        """Angle of this vector measured from straight down (0, 1).

        Matches rotate(): Vec2(0, 1).rotate(a).angle_from_down() == a
        for a in (-pi, pi].
        """
        return math.atan2(-self.x, self.y)


@dataclass
class Transform:
    """Transform state: position, rotation, uniform scale and opacity.

    Maps transform-local space (origin at the canvas center) into buffer
    space. Scale must be non-zero; the object layer keeps it within
    [SCALE_MIN, SCALE_MAX].
    """
    position: Vec2
    rotation: float = 0.0
    scale: float = 1.0
    opacity: int = 255

    @property
    def alpha(self):
        """Opacity normalized to [0, 1]."""
        return self.opacity / 255.0

    def apply(self, point):
        """Local -> buffer: scale, then rotate, then translate."""
        point = point * self.scale
        point = point.rotate(self.rotation)
        return point + self.position

    def apply_inverse(self, point):
        """Buffer -> local: untranslate, then unrotate, then unscale."""
        point = point - self.position
        point = point.rotate(-self.rotation)
        return point / self.scale

    def copy(self):
        return replace(self, position=Vec2(self.position.x, self.position.y))
