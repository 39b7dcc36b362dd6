"""Window event handlers for the Feedback Editor"""

import logging

from PyQt5.QtWidgets import QFileDialog
from PyQt5.QtCore import Qt

from models.input import EditMode
from utils.logger import loggerRaise

logger = logging.getLogger(__name__)

# Number keys select a mode directly
MODE_KEYS = {
	Qt.Key_1: EditMode.DUAL,
	Qt.Key_2: EditMode.EDIT,
	Qt.Key_3: EditMode.VIEW,
}


class EventMixin:
	"""Keyboard shortcuts and close handling. Requires self.canvas."""

	def focusNextPrevChild(self, next):
		# Keep Tab for mode cycling instead of focus navigation
		return False

	def keyPressEvent(self, event):
		"""Handle keyboard shortcuts"""
		key = event.key()

		if key == Qt.Key_Escape:
			self.close()
		elif key == Qt.Key_Tab:
			self.canvas.cycle_mode()
		elif key in MODE_KEYS:
			self.canvas.set_mode(MODE_KEYS[key])
		elif key == Qt.Key_R and not event.modifiers():
			self.canvas.reset_scene()
		elif key == Qt.Key_S and event.modifiers() & Qt.ControlModifier:
			self._save_frame_dialog()
		else:
			super().keyPressEvent(event)

	def _save_frame_dialog(self):
		"""Ask for a path and save the current frame as PNG"""
		path, _ = QFileDialog.getSaveFileName(self, "Save Frame", "frame.png", "PNG Images (*.png)")
		if not path:
			return
		try:
			self.canvas.save_frame(path)
			self.statusBar().showMessage(f"Saved {path}", 3000)
		except OSError as e:
			loggerRaise(e, f"Could not save frame to {path}", "Save Frame")

	def closeEvent(self, event):
		"""Save config before closing"""
		self._save_config()
		super().closeEvent(event)
