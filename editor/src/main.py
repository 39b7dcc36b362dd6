"""Feedback Editor - interactive window.

Usage:
    python editor/src/main.py [--width W] [--height H] [--config PATH] [-v]

Keys:
    Tab       cycle Dual / Edit / View
    1, 2, 3   Dual, Edit, View
    R         reset the scene
    Ctrl+S    save the current frame as PNG
    Escape    quit
"""

import sys
import os
import argparse
import random
import logging

# Add editor/src to path so imports work when running directly
if __name__ == "__main__":
	current_dir = os.path.dirname(os.path.abspath(__file__))
	if current_dir not in sys.path:
		sys.path.insert(0, current_dir)

# PyQt5 import/s
from PyQt5.QtWidgets import QMainWindow, QApplication, QLabel

# Component imports
from components.canvas_widget import FeedbackCanvas

# Service / utility imports
from services.editor_config import default_config_path
from utils.logger import configure_logging, set_main_window
from version import get_version

# Mixin imports
from window import ConfigMixin, EventMixin

logger = logging.getLogger(__name__)


class MainWindow(ConfigMixin, EventMixin, QMainWindow):
	"""Top-level window: the feedback canvas plus a status bar"""

	def __init__(self, config_file=None, buffer_width=None, buffer_height=None):
		super().__init__()
		self.config_file = config_file or default_config_path()
		self._load_config()

		# Command line overrides the config file
		if buffer_width is not None:
			self.config.width = buffer_width
		if buffer_height is not None:
			self.config.height = buffer_height
		self.config = self.config.clamped()

		self.setWindowTitle(f"Feedback Editor {get_version()}")

		rng = random.Random(self.config.seed) if self.config.seed is not None else None
		self.canvas = FeedbackCanvas(
			self, self.config.width, self.config.height,
			mode=self.config.edit_mode, rng=rng
		)
		self.setCentralWidget(self.canvas)
		self.resize(self.config.width, self.config.height + 24)

		self._setup_status_bar()
		self.canvas.modeChanged.connect(self._on_mode_changed)
		self.canvas.frameTimed.connect(self._on_frame_timed)

		set_main_window(self)

	def _setup_status_bar(self):
		self.mode_label = QLabel()
		self.frame_label = QLabel("-- ms")
		self.statusBar().addPermanentWidget(self.mode_label)
		self.statusBar().addPermanentWidget(self.frame_label)
		self._on_mode_changed(self.canvas.mode.value)

	def _on_mode_changed(self, mode_name):
		self.mode_label.setText(f"Mode: {mode_name.capitalize()}")

	def _on_frame_timed(self, seconds):
		self.frame_label.setText(f"{seconds * 1000.0:.2f} ms")


def main(argv=None):
	parser = argparse.ArgumentParser(description='Interactive pixel feedback editor.')
	parser.add_argument('--width', type=int, default=None, help='Framebuffer width in pixels.')
	parser.add_argument('--height', type=int, default=None, help='Framebuffer height in pixels.')
	parser.add_argument('--config', default=None, help='Config file path (default: ~/.feedback_editor/config.json).')
	parser.add_argument('-v', '--verbose', action='store_true', help='Enable verbose logging.')
	args = parser.parse_args(argv)

	configure_logging(args.verbose)

	app = QApplication(sys.argv)
	window = MainWindow(args.config, args.width, args.height)
	window.show()
	logger.info("Started with %dx%d buffer", window.config.width, window.config.height)
	return app.exec_()


if __name__ == "__main__":
	sys.exit(main())
