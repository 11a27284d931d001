"""Law-of-sines distance estimate from two anchor angles."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Optional

import numpy as np

from core.orientation.heading import degrees_to_radians, trim_to_decimals


class DistanceStatus(Enum):
    UNDEFINED = "undefined"   # an input is missing or zero
    INVALID = "invalid"       # degenerate geometry or negative length
    VALID = "valid"


@dataclass(frozen=True)
class DistanceResult:
    """Outcome of one estimate.

    value is the full-precision result when it could be computed (also for
    INVALID negatives), display_value the rounded number for the screen.
    """

    status: DistanceStatus
    value: Optional[float] = None
    display_value: Optional[float] = None

    @property
    def is_valid(self) -> bool:
        return self.status is DistanceStatus.VALID


UNDEFINED = DistanceResult(DistanceStatus.UNDEFINED)


def estimate_distance(
    angle_a: Optional[float],
    angle_c: Optional[float],
    known_distance: Optional[float],
    *,
    decimals: int = 1,
    sine_epsilon: float = 1e-12,
) -> DistanceResult:
    """
    distance = known_distance * sin(angle_a) / sin(angle_c)

    Args:
        angle_a: Separation between close anchor and live heading (degrees)
        angle_c: Separation between far anchor and live heading (degrees)
        known_distance: Calibration length of the triangle
        decimals: Rounding applied to display_value
        sine_epsilon: |sin(angle_c)| at or below this is a zero denominator

    Returns:
        DistanceResult; never raises for degenerate inputs

    A zero or missing angle (angle_c == 0 when the live heading sits on the
    far anchor) is UNDEFINED here; the measuring screen shows every
    non-VALID result, UNDEFINED included, as the invalid-distance indicator.
    """
    if not angle_a or not angle_c or not known_distance:
        return UNDEFINED
    if math.isnan(known_distance) or math.isinf(known_distance):
        return UNDEFINED

    sin_c = float(np.sin(degrees_to_radians(angle_c)))
    if sin_c <= sine_epsilon:
        return DistanceResult(DistanceStatus.INVALID)

    sin_a = float(np.sin(degrees_to_radians(angle_a)))
    value = known_distance * sin_a / sin_c
    if not math.isfinite(value) or value < 0:
        return DistanceResult(DistanceStatus.INVALID, value=value)

    return DistanceResult(
        DistanceStatus.VALID,
        value=value,
        display_value=trim_to_decimals(value, decimals),
    )
