"""
Feedback Canvas - Qt host for the Scene

Translates native mouse events into (cursor, click-state) samples, runs one
Scene tick per input event and presents the finished RGBA frame as a
QImage. The framebuffer size is fixed; the image is letterboxed into the
widget and resizing the widget never resizes the buffer.
"""

import logging
import time

from PyQt5.QtWidgets import QWidget
from PyQt5.QtCore import Qt, QRectF, pyqtSignal
from PyQt5.QtGui import QPainter, QImage, QColor

from components.scene import Scene
from components.transform_widgets import HandleKind
from models.input import ButtonTracker, EditMode, InputSample
from models.transform import Vec2
from services.frame_timer import FrameTimer
from services.frame_export import save_frame
from constants import DEFAULT_BUFFER_WIDTH, DEFAULT_BUFFER_HEIGHT, BYTES_PER_PIXEL

logger = logging.getLogger(__name__)

# Qt cursor shown while hovering or dragging each handle kind
HANDLE_CURSORS = {
	HandleKind.ROTATE: Qt.CrossCursor,
	HandleKind.TRANSLATE: Qt.SizeAllCursor,
	HandleKind.SCALE: Qt.SizeFDiagCursor,
	HandleKind.DELETE: Qt.PointingHandCursor,
	HandleKind.OPACITY: Qt.SizeVerCursor,
}


class FeedbackCanvas(QWidget):
	"""Interactive view of a feedback Scene"""

	# Signals
	modeChanged = pyqtSignal(str)  # EditMode value
	frameTimed = pyqtSignal(float)  # Average frame time in seconds

	def __init__(self, parent=None, buffer_width=DEFAULT_BUFFER_WIDTH,
				 buffer_height=DEFAULT_BUFFER_HEIGHT, mode=EditMode.DUAL, rng=None,
				 clock=time.perf_counter):
		super().__init__(parent)
		self.setMouseTracking(True)
		self.setMinimumSize(320, 240)

		self.scene = Scene(buffer_width, buffer_height, rng=rng)
		self.buttons = ButtonTracker()
		self.mode = mode
		self.frame_timer = FrameTimer()
		self._clock = clock

		# Cursor in buffer pixels, None when away from the image
		self.cursor_pos = None
		self._image = None

		self.tick()

	@property
	def buffer_width(self):
		return self.scene.width

	@property
	def buffer_height(self):
		return self.scene.height

	# ========================================
	# Coordinates
	# ========================================

	def image_rect(self):
		"""Widget-space rect the frame is drawn into (aspect preserved, centered)."""
		scale = min(self.width() / self.buffer_width, self.height() / self.buffer_height)
		w = self.buffer_width * scale
		h = self.buffer_height * scale
		return QRectF((self.width() - w) / 2, (self.height() - h) / 2, w, h)

	def widget_to_buffer(self, pos, allow_outside=False):
		"""Convert a widget position to buffer pixels.

		Returns None outside the image unless allow_outside is set (used while
		the button is held so drags continue past the edge).
		"""
		rect = self.image_rect()
		if rect.width() <= 0 or rect.height() <= 0:
			return None
		x = (pos.x() - rect.x()) * self.buffer_width / rect.width()
		y = (pos.y() - rect.y()) * self.buffer_height / rect.height()
		inside = 0 <= x < self.buffer_width and 0 <= y < self.buffer_height
		if not inside and not allow_outside:
			return None
		return Vec2(x, y)

	# ========================================
	# Mode / scene control
	# ========================================

	def set_mode(self, mode):
		if mode is self.mode:
			return
		self.mode = mode
		logger.info("Edit mode: %s", mode.value)
		self.modeChanged.emit(mode.value)
		self.tick()

	def cycle_mode(self):
		self.set_mode(self.mode.next())

	def reset_scene(self):
		self.scene.clear()
		self.tick()

	def save_frame(self, path):
		"""Save the last finished frame as PNG."""
		return save_frame(self.scene.frame, self.buffer_width, self.buffer_height, path)

	# ========================================
	# Tick
	# ========================================

	def tick(self):
		"""Run one Scene tick from the current input state and schedule a repaint."""
		click = self.buttons.sample()
		frame = self.scene.tick(InputSample(self.cursor_pos, click), self.mode)
		self._image = QImage(
			bytes(frame), self.buffer_width, self.buffer_height,
			self.buffer_width * BYTES_PER_PIXEL, QImage.Format_RGBA8888
		).copy()

		average = self.frame_timer.tick(self._clock())
		if average is not None:
			self.frameTimed.emit(average)

		self._update_cursor_shape()
		self.update()

	def _update_cursor_shape(self):
		if self.mode.dispatches_input:
			kind = self.scene.hovered_handle()
			if kind is not None:
				self.setCursor(HANDLE_CURSORS[kind])
				return
			if self.scene.hovering_spawn:
				self.setCursor(Qt.PointingHandCursor)
				return
		self.setCursor(Qt.ArrowCursor)

	# ========================================
	# Qt events
	# ========================================

	def mousePressEvent(self, event):
		if event.button() != Qt.LeftButton:
			return super().mousePressEvent(event)
		self.cursor_pos = self.widget_to_buffer(event.pos())
		self.buttons.press()
		self.tick()

	def mouseMoveEvent(self, event):
		self.cursor_pos = self.widget_to_buffer(event.pos(), allow_outside=self.buttons.is_down)
		self.tick()

	def mouseReleaseEvent(self, event):
		if event.button() != Qt.LeftButton:
			return super().mouseReleaseEvent(event)
		self.cursor_pos = self.widget_to_buffer(event.pos(), allow_outside=True)
		self.buttons.release()
		self.tick()

	def leaveEvent(self, event):
		if not self.buttons.is_down:
			self.cursor_pos = None
			self.tick()
		super().leaveEvent(event)

	def paintEvent(self, event):
		painter = QPainter(self)
		painter.fillRect(self.rect(), QColor(20, 20, 20))
		if self._image is not None:
			painter.drawImage(self.image_rect(), self._image)
		painter.end()
