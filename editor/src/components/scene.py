"""
Scene - the ordered collection of transform objects and its framebuffers

Per tick:
1. update(cursor, click): dispatch input front-to-back, promote the
   consumer to the front, drop dead objects, handle the spawn zone
2. draw(previous, current, mode): background, feedback pass (previous frame
   resampled through every live transform), overlay pass (spawn zone,
   borders, handles)
3. swap: the finished frame becomes next tick's previous frame

Ordering: objects[0] is the front. It wins hit-testing and is composited
and drawn last, so it sits on top.
"""

import logging
import random

import numpy as np

from models.input import ClickState, EditMode, InputSample
from models.pixel_grid import PixelGrid
from models.transform import Transform, Vec2
from components.transform_object import TransformObject
from constants import (
	DEFAULT_BUFFER_WIDTH, DEFAULT_BUFFER_HEIGHT,
	BUFFER_MIN_WIDTH, BUFFER_MIN_HEIGHT, BUFFER_MAX_WIDTH, BUFFER_MAX_HEIGHT,
	BYTES_PER_PIXEL, BACKGROUND_COLOR, BACKGROUND_ALPHA,
	SEED_SCALE, SEED_ROTATION, DEFAULT_OPACITY,
	SPAWN_ZONE_MIN, SPAWN_ZONE_MAX, SPAWN_ZONE_COLOR, SPAWN_ZONE_HOVER_COLOR,
	SPAWN_SCALE, SPAWN_SCALE_JITTER, SPAWN_ROTATION_JITTER, SPAWN_POSITION_JITTER
)

logger = logging.getLogger(__name__)


def make_background(width, height):
	"""Static background frame: the sentinel color at full alpha."""
	return bytes(BACKGROUND_COLOR + (BACKGROUND_ALPHA,)) * (width * height)


class FrameBuffers:
	"""Owning double buffer: the frame being written and the previous frame."""

	def __init__(self, width, height, background=None):
		self.width = width
		self.height = height
		self.background = background if background is not None else make_background(width, height)
		self.current = bytearray(self.background)
		self.previous = bytearray(self.background)

	def swap(self):
		self.current, self.previous = self.previous, self.current

	def reset(self):
		self.current[:] = self.background
		self.previous[:] = self.background


class Scene:
	"""Transform objects, spawn zone and framebuffers of the feedback editor."""

	def __init__(self, width=DEFAULT_BUFFER_WIDTH, height=DEFAULT_BUFFER_HEIGHT, rng=None):
		"""
		Args:
			width, height: Buffer size in pixels, fixed for the Scene's lifetime
			rng: random.Random used for spawning (seed it for reproducible runs)
		"""
		if not (BUFFER_MIN_WIDTH <= width <= BUFFER_MAX_WIDTH
				and BUFFER_MIN_HEIGHT <= height <= BUFFER_MAX_HEIGHT):
			raise ValueError(
				f"Buffer size {width}x{height} outside "
				f"{BUFFER_MIN_WIDTH}x{BUFFER_MIN_HEIGHT}..{BUFFER_MAX_WIDTH}x{BUFFER_MAX_HEIGHT}"
			)
		self.width = width
		self.height = height
		self.rng = rng if rng is not None else random.Random()

		self.objects = [self._seed_object()]
		self.hovering_spawn = False

		self.buffers = FrameBuffers(width, height)
		self._background_pixels = np.frombuffer(
			self.buffers.background, dtype=np.uint8
		).reshape(height, width, BYTES_PER_PIXEL)

		# Local-space coordinates of every buffer pixel (feedback pass sources)
		xs, ys = np.meshgrid(
			np.arange(width, dtype=np.float64) - width / 2.0,
			np.arange(height, dtype=np.float64) - height / 2.0,
		)
		self._local_x = xs.reshape(-1)
		self._local_y = ys.reshape(-1)

	@property
	def center(self):
		return Vec2(self.width / 2.0, self.height / 2.0)

	@property
	def frame(self):
		"""The most recently finished frame (RGBA bytes).

		This is the live back buffer: the tick after next draws over it, so
		copy it (e.g. bytes(scene.frame)) to keep it across ticks.
		"""
		return self.buffers.previous

	# ========================================
	# Object lifecycle
	# ========================================

	def create_object(self, position, rotation=0.0, scale=SEED_SCALE, opacity=DEFAULT_OPACITY):
		transform = Transform(position, rotation=rotation, scale=scale, opacity=opacity)
		return TransformObject(transform, self.width, self.height)

	def _seed_object(self):
		return self.create_object(self.center, rotation=SEED_ROTATION, scale=SEED_SCALE)

	def spawn_object(self):
		"""Append one object at a randomized pose near the buffer center."""
		rng = self.rng
		position = Vec2(
			self.width / 2.0 + rng.uniform(-1.0, 1.0) * SPAWN_POSITION_JITTER * self.width,
			self.height / 2.0 + rng.uniform(-1.0, 1.0) * SPAWN_POSITION_JITTER * self.height,
		)
		rotation = rng.uniform(-SPAWN_ROTATION_JITTER, SPAWN_ROTATION_JITTER)
		scale = rng.uniform(SPAWN_SCALE - SPAWN_SCALE_JITTER, SPAWN_SCALE + SPAWN_SCALE_JITTER)
		obj = self.create_object(position, rotation=rotation, scale=scale)
		self.objects.append(obj)
		logger.debug("Spawned %r (%d objects)", obj, len(self.objects))
		return obj

	def clear(self):
		"""Drop every object, restore the seed object and blank both frames."""
		self.objects = [self._seed_object()]
		self.hovering_spawn = False
		self.buffers.reset()
		logger.info("Scene reset")

	def in_spawn_zone(self, cursor):
		return (SPAWN_ZONE_MIN[0] <= cursor.x <= SPAWN_ZONE_MAX[0]
				and SPAWN_ZONE_MIN[1] <= cursor.y <= SPAWN_ZONE_MAX[1])

	def end_grabs(self):
		for obj in self.objects:
			obj.end_grab()

	def hovered_handle(self):
		"""Handle kind under the cursor on the front-most interactive object."""
		for obj in self.objects:
			if obj.grabbed is not None:
				return obj.grabbed
			if obj.controls_visible:
				return obj.hovered
		return None

	# ========================================
	# Update
	# ========================================

	def update(self, cursor, click):
		"""Dispatch one input sample.

		Args:
			cursor: Vec2 in buffer pixels, or None when the cursor is away
			click: ClickState for this tick

		Returns:
			bool: True if an object consumed the input
		"""
		if cursor is None:
			self.hovering_spawn = False
			if click is ClickState.RELEASED:
				self.end_grabs()
			return False

		consumer = None
		for index, obj in enumerate(self.objects):
			if obj.handle_input(cursor, click):
				consumer = index
				break

		if consumer is not None:
			# Objects behind the consumer never saw this cursor
			for obj in self.objects[consumer + 1:]:
				obj.controls_visible = False
				obj.hovered = None
			if consumer > 0:
				self.objects.insert(0, self.objects.pop(consumer))
				logger.debug("Promoted object %d to front", consumer)

		dead = [obj for obj in self.objects if obj.dead]
		if dead:
			self.objects = [obj for obj in self.objects if not obj.dead]
			logger.debug("Removed %d object(s) (%d left)", len(dead), len(self.objects))

		self.hovering_spawn = self.in_spawn_zone(cursor)
		if self.hovering_spawn and click is ClickState.PRESSED:
			self.spawn_object()

		return consumer is not None

	# ========================================
	# Draw
	# ========================================

	def draw(self, prev_buffer, out_buffer, mode=EditMode.DUAL):
		"""Build the next frame in out_buffer from prev_buffer.

		prev_buffer and out_buffer must be distinct buffers.
		"""
		grid = PixelGrid(out_buffer, self.width, self.height)
		grid.pixels[...] = self._background_pixels

		if mode.draws_feedback:
			self._feedback_pass(PixelGrid(prev_buffer, self.width, self.height), grid)
		if mode.draws_overlay:
			self._overlay_pass(grid)

	def _feedback_pass(self, prev_grid, grid):
		"""Resample every non-background pixel of the previous frame through each transform.

		Transforms are composited back-to-front, so the front object's copy
		lands on top; within one transform sources blend in row-major order.
		"""
		src = prev_grid.pixels[:, :, :3].reshape(-1, 3)
		mask = np.any(src != np.array(BACKGROUND_COLOR, dtype=np.uint8), axis=1)
		if not mask.any():
			return
		points = Vec2(self._local_x[mask], self._local_y[mask])
		colors = src[mask]
		for obj in reversed(self.objects):
			grid.composite_transformed(points, colors, obj.transform)

	def _overlay_pass(self, grid):
		"""Spawn zone affordance, then every object's chrome, front drawn last."""
		color = SPAWN_ZONE_HOVER_COLOR if self.hovering_spawn else SPAWN_ZONE_COLOR
		grid.pixels[SPAWN_ZONE_MIN[1]:SPAWN_ZONE_MAX[1] + 1,
					SPAWN_ZONE_MIN[0]:SPAWN_ZONE_MAX[0] + 1, :3] = color
		for obj in reversed(self.objects):
			obj.draw(grid)

	# ========================================
	# Tick
	# ========================================

	def render(self, mode=EditMode.DUAL):
		"""Draw into the current buffer from the previous one, then swap.

		Returns the live frame buffer (see frame); copy it before the next
		tick if it must outlive that tick.
		"""
		self.draw(self.buffers.previous, self.buffers.current, mode)
		self.buffers.swap()
		return self.frame

	def tick(self, sample, mode=EditMode.DUAL):
		"""One logical tick: input (unless View mode), then render.

		Args:
			sample: InputSample (or a (cursor, click) pair)
			mode: EditMode selecting the draw passes

		Returns:
			The finished frame (live RGBA bytearray, width * height * 4; see frame)
		"""
		if not isinstance(sample, InputSample):
			sample = InputSample(*sample)
		if mode.dispatches_input:
			self.update(sample.cursor, sample.click)
		elif sample.click is ClickState.RELEASED:
			# Input is ignored in View mode, but a release still ends any grab
			self.end_grabs()
		return self.render(mode)
