"""Configuration management for the main window"""

from services.editor_config import ConfigError, load_config, save_config
from utils.logger import loggerRaise


class ConfigMixin:
	"""Config file load/save.

	Requires self.config_file; save also reads self.canvas.mode.
	"""

	def _load_config(self):
		"""Load buffer size, edit mode and seed from the config file"""
		try:
			self.config = load_config(self.config_file)
		except ConfigError as e:
			loggerRaise(e, "Error loading config")

	def _save_config(self):
		"""Persist the current edit mode alongside the loaded settings"""
		if hasattr(self, 'canvas'):
			self.config.edit_mode = self.canvas.mode
		try:
			save_config(self.config, self.config_file)
		except ConfigError as e:
			loggerRaise(e, "Error saving config")
