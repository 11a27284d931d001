"""
Heading math for angular triangulation.

Pure functions shared by the sampler-facing engine and the distance
estimator:
- normalize_heading: fold the 180 degree ambiguity of an inverted device
- angle_diff: unsigned circular separation between two bearings
- degrees_to_radians / trim_to_decimals: numeric helpers

None means "undefined" everywhere in this module; 0.0 is a valid bearing.
"""

from __future__ import annotations

import math
from typing import Optional

import numpy as np

from core.orientation.sample import OrientationSample, ScreenMode


def normalize_heading(
    heading: Optional[float],
    tilt: Optional[float],
    mode: ScreenMode = ScreenMode.LANDSCAPE,
    *,
    require_landscape: bool = True,
) -> Optional[float]:
    """
    Convert a raw reading into a heading comparable across device flips.

    Args:
        heading: Raw compass bearing in degrees, or None
        tilt: Gamma value, or None. Positive means the device is inverted
        mode: Screen orientation of the reading
        require_landscape: Treat non-landscape readings as undefined

    Returns:
        Normalized heading in [0, 360), or None when the reading is unusable
    """
    if heading is None or tilt is None:
        return None
    if require_landscape and mode is not ScreenMode.LANDSCAPE:
        return None

    if tilt > 0:
        return (180.0 + heading) % 360.0
    return heading


def normalize_sample(sample: Optional[OrientationSample], *, require_landscape: bool = True) -> Optional[float]:
    """normalize_heading applied to a whole sample (None-safe)."""
    if sample is None:
        return None
    return normalize_heading(
        sample.heading, sample.tilt, sample.mode, require_landscape=require_landscape
    )


def angle_diff(a: Optional[float], b: Optional[float]) -> Optional[float]:
    """
    Minimum rotation between two bearings.

    Returns:
        Value in [0, 180], or None if either bearing is undefined
    """
    if a is None or b is None:
        return None

    diff = abs(a - b) % 360.0
    if diff > 180.0:
        diff = 360.0 - diff
    return diff


def degrees_to_radians(degrees: float) -> float:
    return float(np.radians(degrees))


def trim_to_decimals(value: float, decimals: int = 1) -> float:
    """Round half away from zero to a fixed number of decimals."""
    factor = 10 ** decimals
    scaled = abs(value) * factor
    rounded = math.floor(scaled + 0.5) / factor
    return math.copysign(rounded, value) if value != 0 else 0.0
