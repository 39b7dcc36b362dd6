"""Main window mixins for the Feedback Editor."""

from .config_mixin import ConfigMixin
from .event_mixin import EventMixin

__all__ = ['ConfigMixin', 'EventMixin']
