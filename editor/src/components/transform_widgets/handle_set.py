"""Handle set for transform objects - which handles exist and in what order they are hit-tested."""

from .handles import (
	HandleKind, RotateHandle, TranslateHandle, ScaleHandle, DeleteHandle, OpacityHandle
)


class HandleSet:
	"""Handles of a transform object, hit-tested in priority order."""

	# Check order: rotate -> translate -> scale -> delete -> opacity
	CHECK_ORDER = (
		HandleKind.ROTATE,
		HandleKind.TRANSLATE,
		HandleKind.SCALE,
		HandleKind.DELETE,
		HandleKind.OPACITY,
	)

	def __init__(self):
		self.handles = {
			HandleKind.ROTATE: RotateHandle(),
			HandleKind.TRANSLATE: TranslateHandle(),
			HandleKind.SCALE: ScaleHandle(),
			HandleKind.DELETE: DeleteHandle(),
			HandleKind.OPACITY: OpacityHandle(),
		}

	def __getitem__(self, kind):
		return self.handles[kind]

	def __iter__(self):
		"""Iterate handles in priority order."""
		return (self.handles[kind] for kind in self.CHECK_ORDER)

	def get_handle_at_pos(self, local, half_w, half_h, unit):
		"""Find which handle (if any) contains a local-space point.

		Returns:
			Handle object or None
		"""
		for handle in self:
			if handle.hit_test(local, half_w, half_h, unit):
				return handle
		return None


# Shared, stateless instance: handles hold geometry only
DEFAULT_HANDLES = HandleSet()
