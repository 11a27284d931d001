"""Orientation samples delivered by the device sensor."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class ScreenMode(Enum):
    """Coarse screen orientation reported alongside each reading."""

    PORTRAIT = "portrait"
    LANDSCAPE = "landscape"

    @classmethod
    def parse(cls, value) -> "ScreenMode":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValueError(f"Unknown screen mode: {value!r}") from None


@dataclass(frozen=True)
class OrientationSample:
    """Latest known device orientation.

    heading: compass-relative bearing in [0, 360), None when not reported
    tilt:    gamma value; positive means the device is held inverted
    mode:    screen orientation at the time of the reading
    """

    heading: Optional[float]
    tilt: Optional[float]
    mode: ScreenMode
    timestamp: Optional[float] = None

    @property
    def is_complete(self) -> bool:
        return self.heading is not None and self.tilt is not None

    @property
    def is_landscape(self) -> bool:
        return self.mode is ScreenMode.LANDSCAPE
