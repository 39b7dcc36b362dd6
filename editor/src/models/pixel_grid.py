"""
Pixel Grid - non-owning RGBA view over a framebuffer

The grid never owns its bytes: it is built fresh for each draw call over
whichever buffer is the current write target. Coordinates outside the
buffer are clamped to the nearest edge pixel, never rejected.

Two write paths:
- Direct writes (set_pixel, set_pixels) for UI chrome and borders
- Transform-mediated alpha-blended writes (set_pixel_transformed,
  composite_transformed) for the feedback pass
"""

import numpy as np

from constants import BYTES_PER_PIXEL


class PixelGrid:
	"""Row-major RGBA framebuffer view of fixed width x height."""

	def __init__(self, buffer, width, height):
		"""
		Args:
			buffer: Writable bytes-like object (bytearray, memoryview, numpy array)
			        of exactly width * height * 4 bytes
			width: Buffer width in pixels
			height: Buffer height in pixels
		"""
		expected = width * height * BYTES_PER_PIXEL
		nbytes = memoryview(buffer).nbytes
		if nbytes != expected:
			raise ValueError(
				f"Buffer holds {nbytes} bytes, expected {expected} for {width}x{height} RGBA"
			)
		self.width = width
		self.height = height
		self.pixels = np.frombuffer(buffer, dtype=np.uint8).reshape(height, width, BYTES_PER_PIXEL)
		if not self.pixels.flags.writeable:
			raise ValueError("PixelGrid requires a writable buffer")

	# ========================================
	# Coordinate clamping
	# ========================================

	def _clamp(self, point):
		"""Clamp a buffer-space point to integer pixel indices."""
		x = int(min(max(point.x, 0.0), self.width - 1))
		y = int(min(max(point.y, 0.0), self.height - 1))
		return x, y

	def _clamp_arrays(self, xs, ys):
		"""Vectorized _clamp for numpy coordinate arrays."""
		xs = np.clip(xs, 0.0, self.width - 1).astype(np.intp)
		ys = np.clip(ys, 0.0, self.height - 1).astype(np.intp)
		return xs, ys

	# ========================================
	# Direct writes
	# ========================================

	def get_pixel(self, point):
		"""Return (r, g, b, a) at the clamped point."""
		x, y = self._clamp(point)
		return tuple(int(c) for c in self.pixels[y, x])

	def set_pixel(self, point, rgb, a=None):
		"""Overwrite the pixel at the clamped point (no blending).

		Alpha is left untouched unless given.
		"""
		x, y = self._clamp(point)
		self.pixels[y, x, :3] = rgb
		if a is not None:
			self.pixels[y, x, 3] = a

	def set_pixels(self, points, rgb):
		"""Vectorized set_pixel for a Vec2 of coordinate arrays."""
		xs, ys = self._clamp_arrays(np.asarray(points.x), np.asarray(points.y))
		self.pixels[ys, xs, :3] = rgb

	def fill(self, rgb, a=255):
		self.pixels[:, :, :3] = rgb
		self.pixels[:, :, 3] = a

	# ========================================
	# Blended writes
	# ========================================

	def set_pixel_transformed(self, point, transform, rgb):
		"""Map point through transform and blend rgb over the destination.

		Each channel becomes dst * (1 - a) + src * a with a = opacity / 255,
		computed in [0, 1] float space and rounded back to a byte. The
		destination is read before it is overwritten, so repeated calls on
		the same pixel compound in call order.
		"""
		x, y = self._clamp(transform.apply(point))
		alpha = transform.alpha
		for c in range(3):
			dst = self.pixels[y, x, c] / 255.0
			src = rgb[c] / 255.0
			self.pixels[y, x, c] = int(round((dst * (1.0 - alpha) + src * alpha) * 255.0))

	def composite_transformed(self, points, colors, transform):
		"""Vectorized set_pixel_transformed over many source pixels.

		Equivalent to calling set_pixel_transformed for each point in array
		order: when several sources land on the same destination pixel, the
		blends compound with later sources on top. The compounded result is
		evaluated in closed form and rounded once per destination pixel.

		Args:
			points: Vec2 of numpy arrays (local-space source positions)
			colors: (N, 3) uint8 array of source colors
			transform: Transform applied to every point
		"""
		if len(colors) == 0:
			return

		target = transform.apply(points)
		xs, ys = self._clamp_arrays(target.x, target.y)
		index = ys * self.width + xs

		alpha = transform.alpha
		keep = 1.0 - alpha

		# Group writes by destination, preserving source order within a group
		order = np.argsort(index, kind='stable')
		index = index[order]
		src = colors[order].astype(np.float64) / 255.0
		targets, starts, counts = np.unique(index, return_index=True, return_counts=True)
		group = np.repeat(np.arange(len(targets)), counts)
		rank = np.arange(len(index)) - starts[group]
		later_writes = counts[group] - 1 - rank
		weights = alpha * keep ** later_writes

		flat = self.pixels.reshape(-1, BYTES_PER_PIXEL)
		dst = flat[targets, :3].astype(np.float64) / 255.0
		blended = dst * (keep ** counts)[:, None]
		for c in range(3):
			blended[:, c] += np.bincount(group, weights=weights * src[:, c], minlength=len(targets))

		flat[targets, :3] = np.rint(np.clip(blended, 0.0, 1.0) * 255.0).astype(np.uint8)
