"""
Anchor-marking state machine for one measurement attempt.

States advance only on the user's Mark / Measure Again action:

    STARTED --mark--> FAR_ANCHOR_MARKED --mark--> CLOSE_ANCHOR_MARKED --again--> STARTED

Each instance owns its anchors; a fresh session is created for every
measurement view and discarded when the view closes.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Optional

from core.measurement.distance import UNDEFINED, DistanceResult, estimate_distance
from core.orientation.heading import angle_diff


class MeasuringState(Enum):
    STARTED = 0
    FAR_ANCHOR_MARKED = 1
    CLOSE_ANCHOR_MARKED = 2


class MeasurementSession:
    """Anchors and state of a single measurement attempt."""

    def __init__(
        self,
        known_distance: float,
        *,
        decimals: int = 1,
        sine_epsilon: float = 1e-12,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.known_distance = known_distance
        self.decimals = decimals
        self.sine_epsilon = sine_epsilon
        self.logger = logger or logging.getLogger("measure.session")

        self.state = MeasuringState.STARTED
        self.far_anchor_heading: Optional[float] = None
        self.close_anchor_heading: Optional[float] = None

    def advance(self, live_heading: Optional[float]) -> MeasuringState:
        """
        Apply the single user action to the current state.

        Args:
            live_heading: Normalized heading at the moment of the tap, or None

        Returns:
            The new state
        """
        if self.state is MeasuringState.STARTED:
            self._warn_if_unset(live_heading, "far")
            self.far_anchor_heading = live_heading
            self.state = MeasuringState.FAR_ANCHOR_MARKED
        elif self.state is MeasuringState.FAR_ANCHOR_MARKED:
            self._warn_if_unset(live_heading, "close")
            self.close_anchor_heading = live_heading
            self.state = MeasuringState.CLOSE_ANCHOR_MARKED
        elif self.state is MeasuringState.CLOSE_ANCHOR_MARKED:
            self.reset()
        else:
            raise ValueError(f"Unhandled measuring state: {self.state}")

        self.logger.info(
            f"state={self.state.name} far={self.far_anchor_heading} close={self.close_anchor_heading}"
        )
        return self.state

    def reset(self) -> None:
        self.far_anchor_heading = None
        self.close_anchor_heading = None
        self.state = MeasuringState.STARTED

    def _warn_if_unset(self, live_heading: Optional[float], anchor: str) -> None:
        if live_heading is None:
            self.logger.warning(f"Marking {anchor} anchor without a landscape heading; anchor left unset")

    # ------------------------------------------------------------------
    # queries
    # ------------------------------------------------------------------

    def far_anchor_angle(self, live_heading: Optional[float]) -> Optional[float]:
        return angle_diff(self.far_anchor_heading, live_heading)

    def close_anchor_angle(self, live_heading: Optional[float]) -> Optional[float]:
        return angle_diff(self.close_anchor_heading, live_heading)

    def distance(self, live_heading: Optional[float]) -> DistanceResult:
        """Distance estimate for the current live heading (UNDEFINED before the last mark)."""
        if self.state is not MeasuringState.CLOSE_ANCHOR_MARKED:
            return UNDEFINED

        return estimate_distance(
            self.close_anchor_angle(live_heading),
            self.far_anchor_angle(live_heading),
            self.known_distance,
            decimals=self.decimals,
            sine_epsilon=self.sine_epsilon,
        )
