"""
Transform Object - a single manipulable feedback window

Wraps a Transform plus its interaction state:
- hovered handle (at most one)
- grabbed handle, held as a DragContext (at most one)
- controls visibility (cursor is over the object's canvas)
- dead flag (delete handle pressed; removed by the Scene)

Input state machine, one call per tick:

    Idle --cursor over handle--> Hovering(h) --Pressed--> Grabbing(h)
    Grabbing(h) --Released--> Idle / Hovering (re-evaluated next tick)

While grabbing, the raw buffer-space cursor drives the handle and no hover
is computed. Otherwise the cursor is mapped into local space; once inside
the canvas the object absorbs the input even over empty space.
"""

import numpy as np

from models.input import ClickState
from models.transform import Vec2
from components.transform_widgets import DEFAULT_HANDLES, HandleKind, handle_unit
from constants import (
	COLOR_NEUTRAL, COLOR_HOVERABLE, COLOR_HOVERING, COLOR_GRABBING,
	BORDER_GRID_DIVISIONS
)


class TransformObject:
	"""A positioned, rotated, scaled, semi-transparent window onto the previous frame."""

	def __init__(self, transform, width, height, handles=DEFAULT_HANDLES):
		"""
		Args:
			transform: Transform mapping local canvas space to buffer space
			width, height: Canvas size in local units (the buffer size)
			handles: HandleSet used for hit-testing and drawing
		"""
		self.transform = transform
		self.half_w = width / 2.0
		self.half_h = height / 2.0
		self.handles = handles

		# Interaction state
		self.hovered = None  # HandleKind
		self.drag = None  # DragContext while a handle is grabbed
		self.controls_visible = False
		self.dead = False

	def __repr__(self):
		t = self.transform
		return (f"TransformObject(pos=({t.position.x:.1f}, {t.position.y:.1f}), "
				f"rot={t.rotation:.3f}, scale={t.scale:.3f}, opacity={t.opacity})")

	@property
	def grabbed(self):
		"""Kind of the grabbed handle, or None."""
		return self.drag.kind if self.drag is not None else None

	@property
	def scale_anchor(self):
		"""Press position of an active scale drag, or None."""
		if self.drag is not None and self.drag.kind is HandleKind.SCALE:
			return self.drag.anchor
		return None

	@property
	def unit(self):
		return handle_unit(self.transform.scale, self.half_w, self.half_h)

	# ========================================
	# Hit-testing (pure)
	# ========================================

	def local_point(self, cursor):
		return self.transform.apply_inverse(cursor)

	def contains(self, local):
		"""True if a local-space point lies on this object's canvas."""
		return abs(local.x) <= self.half_w and abs(local.y) <= self.half_h

	def hit_test(self, local):
		"""Handle kind under a local-space point, or None."""
		handle = self.handles.get_handle_at_pos(local, self.half_w, self.half_h, self.unit)
		return handle.kind if handle is not None else None

	# ========================================
	# Input
	# ========================================

	def handle_input(self, cursor, click):
		"""Update interaction state from one input sample.

		Args:
			cursor: Vec2 in buffer pixels
			click: ClickState for this tick

		Returns:
			bool: True if this object consumed the input
		"""
		if self.drag is not None:
			self.handles[self.drag.kind].drag(self, cursor)
			if click is ClickState.RELEASED:
				self.end_grab()
			return True

		local = self.local_point(cursor)
		if not self.contains(local):
			self.controls_visible = False
			self.hovered = None
			return False

		self.controls_visible = True
		self.hovered = self.hit_test(local)
		if self.hovered is not None and click is ClickState.PRESSED:
			self.handles[self.hovered].begin(self, cursor)
		return True

	def end_grab(self):
		self.drag = None

	# ========================================
	# Drawing
	# ========================================

	def _handle_color(self, kind):
		if kind is self.grabbed:
			return COLOR_GRABBING
		if kind is self.hovered:
			return COLOR_HOVERING
		return COLOR_HOVERABLE

	def _border_points(self):
		"""Local points along the canvas outline and its interior grid lines."""
		step = 0.5 / self.transform.scale
		xs_line = np.arange(-self.half_w, self.half_w + step, step)
		ys_line = np.arange(-self.half_h, self.half_h + step, step)
		xs_parts = []
		ys_parts = []
		for i in range(BORDER_GRID_DIVISIONS + 1):
			t = i / BORDER_GRID_DIVISIONS
			# Vertical line
			x = -self.half_w + t * 2.0 * self.half_w
			xs_parts.append(np.full_like(ys_line, x))
			ys_parts.append(ys_line)
			# Horizontal line
			y = -self.half_h + t * 2.0 * self.half_h
			xs_parts.append(xs_line)
			ys_parts.append(np.full_like(xs_line, y))
		return Vec2(np.concatenate(xs_parts), np.concatenate(ys_parts))

	def draw(self, grid):
		"""Render border grid-lines and, if visible, the handles into a PixelGrid."""
		grid.set_pixels(self.transform.apply(self._border_points()), COLOR_NEUTRAL)

		if not self.controls_visible:
			return
		unit = self.unit
		for handle in self.handles:
			handle.draw(grid, self.transform, self.half_w, self.half_h, unit,
						self._handle_color(handle.kind))
