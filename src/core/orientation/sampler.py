"""
Latest-sample store for device orientation readings.

The device (browser deviceorientation events, a phone bridge, or the mock
sampler) pushes readings through the callbacks; the measuring loop pulls the
most recent one each tick. Nothing here interprets the reading.
"""

import threading
import time
import logging
from typing import Any, Dict, Optional

from core.orientation.sample import OrientationSample, ScreenMode

log = logging.getLogger(__name__)


class OrientationSampler:
    """
    Thread-safe holder of the latest OrientationSample.
    """

    def __init__(self, mode: ScreenMode = ScreenMode.LANDSCAPE):
        self._lock = threading.Lock()
        self._mode = mode
        self._latest: Optional[OrientationSample] = None

        # Statistics
        self.sample_count = 0
        self.incomplete_count = 0
        self.start_time = time.time()

    def on_orientation(
        self,
        heading: Optional[float],
        tilt: Optional[float],
        timestamp: Optional[float] = None,
    ) -> OrientationSample:
        """
        Callback for a new orientation reading.

        Args:
            heading: Compass bearing in degrees, None if the device omitted it
            tilt: Gamma value, None if the device omitted it
            timestamp: Reading time in seconds (defaults to now)

        Returns:
            The stored sample
        """
        if timestamp is None:
            timestamp = time.time()

        with self._lock:
            sample = OrientationSample(
                heading=heading, tilt=tilt, mode=self._mode, timestamp=timestamp
            )
            self._latest = sample
            self.sample_count += 1
            if not sample.is_complete:
                self.incomplete_count += 1
        return sample

    def on_screen_mode(self, mode) -> None:
        """Callback for screen orientation changes."""
        mode = ScreenMode.parse(mode)
        with self._lock:
            if mode is self._mode:
                return
            self._mode = mode
            if self._latest is not None:
                self._latest = OrientationSample(
                    heading=self._latest.heading,
                    tilt=self._latest.tilt,
                    mode=mode,
                    timestamp=self._latest.timestamp,
                )
        log.debug("Screen mode changed to %s", mode.value)

    # ============================================================================
    # PUBLIC API - Thread-safe access methods
    # ============================================================================

    def get_latest_sample(self) -> Optional[OrientationSample]:
        """Most recent reading, or None before the first one."""
        with self._lock:
            return self._latest

    @property
    def screen_mode(self) -> ScreenMode:
        with self._lock:
            return self._mode

    def get_stats(self) -> Dict[str, Any]:
        uptime = time.time() - self.start_time
        with self._lock:
            return {
                'uptime_seconds': uptime,
                'sample_count': self.sample_count,
                'incomplete_count': self.incomplete_count,
                'rate_hz': self.sample_count / uptime if uptime > 0 else 0.0,
                'screen_mode': self._mode.value,
            }
