"""Frame timing instrumentation.

Accumulates the time between ticks and reports the average once every
FRAME_REPORT_INTERVAL frames. The caller supplies timestamps, so nothing
here reads the clock.
"""

import logging

from constants import FRAME_REPORT_INTERVAL

logger = logging.getLogger(__name__)


class FrameTimer:
    """Rolling average of frame deltas over a fixed window."""

    def __init__(self, interval=FRAME_REPORT_INTERVAL):
        if interval < 1:
            raise ValueError("interval must be at least 1 frame")
        self.interval = interval
        self.last_time = None
        self.cumulative = 0.0
        self.frame_count = 0
        self.last_average = None

    def tick(self, now):
        """Record a frame at timestamp now (seconds).

        Returns:
            float average frame time in seconds when a window completes,
            otherwise None. The first call only sets the reference time.
        """
        if self.last_time is None:
            self.last_time = now
            return None

        self.cumulative += now - self.last_time
        self.last_time = now
        self.frame_count += 1

        if self.frame_count < self.interval:
            return None

        average = self.cumulative / self.frame_count
        self.last_average = average
        self.cumulative = 0.0
        self.frame_count = 0
        logger.info("Average frame time: %.2f ms", average * 1000.0)
        return average

    def reset(self):
        self.__init__(self.interval)
