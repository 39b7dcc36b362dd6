"""Per-tick input sample, click classification and edit modes."""
from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from models.transform import Vec2


class ClickState(Enum):
    """Primary button state for one tick."""
    PRESSED = "pressed"    # down transition, fires once
    HELD = "held"
    RELEASED = "released"  # up transition, fires once
    IDLE = "idle"


class EditMode(Enum):
    """Which draw passes run, and whether objects receive input."""
    DUAL = "dual"  # feedback + overlay
    EDIT = "edit"  # overlay only
    VIEW = "view"  # feedback only, no input dispatch

    @property
    def draws_feedback(self):
        return self is not EditMode.EDIT

    @property
    def draws_overlay(self):
        return self is not EditMode.VIEW

    @property
    def dispatches_input(self):
        return self is not EditMode.VIEW

    def next(self):
        """Cycle Dual -> Edit -> View -> Dual."""
        members = list(EditMode)
        return members[(members.index(self) + 1) % len(members)]

    @classmethod
    def from_name(cls, name, default=None):
        """Look up a mode by its value, falling back to default (DUAL)."""
        try:
            return cls(str(name).lower())
        except ValueError:
            return default if default is not None else cls.DUAL


@dataclass
class InputSample:
    """One tick of input: cursor in buffer pixels (or None) plus click state."""
    cursor: Optional[Vec2] = None
    click: ClickState = ClickState.IDLE


class ButtonTracker:
    """Classifies raw button up/down observations into ClickStates.

    Hosts call press()/release() from their native events and sample() once
    per tick. Edges that land between two samples are queued, so every
    press and release is reported once, in order, on consecutive samples.
    """

    def __init__(self):
        self._down = False
        self._edges = deque()

    @property
    def is_down(self):
        return self._down

    def press(self):
        if not self._down:
            self._down = True
            self._edges.append(ClickState.PRESSED)

    def release(self):
        if self._down:
            self._down = False
            self._edges.append(ClickState.RELEASED)

    def sample(self) -> ClickState:
        """Return the click state for this tick and consume one pending edge."""
        if self._edges:
            return self._edges.popleft()
        if self._down:
            return ClickState.HELD
        return ClickState.IDLE
