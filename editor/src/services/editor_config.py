"""Editor configuration file (buffer size, last edit mode, spawn seed)."""

import json
import logging
import os
from dataclasses import dataclass, asdict
from typing import Optional

from models.input import EditMode
from constants import (
    DEFAULT_BUFFER_WIDTH, DEFAULT_BUFFER_HEIGHT,
    BUFFER_MIN_WIDTH, BUFFER_MIN_HEIGHT, BUFFER_MAX_WIDTH, BUFFER_MAX_HEIGHT
)

logger = logging.getLogger(__name__)

CONFIG_DIR_NAME = '.feedback_editor'
CONFIG_FILE_NAME = 'config.json'


class ConfigError(Exception):
    """Config file could not be read or written."""


@dataclass
class EditorConfig:
    width: int = DEFAULT_BUFFER_WIDTH
    height: int = DEFAULT_BUFFER_HEIGHT
    edit_mode: EditMode = EditMode.DUAL
    seed: Optional[int] = None

    def clamped(self):
        """Copy with the buffer size forced into the supported range."""
        return EditorConfig(
            width=max(BUFFER_MIN_WIDTH, min(BUFFER_MAX_WIDTH, int(self.width))),
            height=max(BUFFER_MIN_HEIGHT, min(BUFFER_MAX_HEIGHT, int(self.height))),
            edit_mode=self.edit_mode,
            seed=self.seed,
        )

    def to_dict(self):
        data = asdict(self)
        data['edit_mode'] = self.edit_mode.value
        return data

    @classmethod
    def from_dict(cls, data):
        defaults = cls()
        seed = data.get('seed')
        try:
            config = cls(
                width=int(data.get('width', defaults.width)),
                height=int(data.get('height', defaults.height)),
                edit_mode=EditMode.from_name(data.get('edit_mode', defaults.edit_mode.value)),
                seed=int(seed) if seed is not None else None,
            )
        except (TypeError, ValueError) as e:
            raise ConfigError(f"Invalid config value: {e}") from e
        return config.clamped()


def default_config_path():
    return os.path.join(os.path.expanduser('~'), CONFIG_DIR_NAME, CONFIG_FILE_NAME)


def load_config(path=None):
    """Load config from path; a missing file yields defaults.

    Raises:
        ConfigError: unreadable file or malformed JSON
    """
    path = path or default_config_path()
    if not os.path.exists(path):
        logger.debug("No config at %s, using defaults", path)
        return EditorConfig()
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigError(f"Error loading config {path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"Config {path} must contain a JSON object")
    return EditorConfig.from_dict(data)


def save_config(config, path=None):
    """Write config as JSON, creating the config directory if needed."""
    path = path or default_config_path()
    try:
        os.makedirs(os.path.dirname(os.path.abspath(path)), exist_ok=True)
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(config.to_dict(), f, indent=2)
    except OSError as e:
        raise ConfigError(f"Error saving config {path}: {e}") from e
    return path
