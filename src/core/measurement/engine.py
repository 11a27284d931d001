"""
Triangulation engine driving one measuring screen.

Usage:
    sampler = OrientationSampler()
    engine = TriangulationEngine(sampler, known_distance=10.0)

    view = engine.tick()          # every sensor tick / render
    engine.advance()              # on Mark / Measure Again
    engine.close()                # when the screen is dismissed
"""

from __future__ import annotations

import logging
import math
import threading
from dataclasses import dataclass
from typing import Optional

from core.measurement.distance import UNDEFINED, DistanceResult
from core.measurement.prompts import PromptFormatter
from core.measurement.session import MeasurementSession, MeasuringState
from core.orientation.heading import normalize_sample
from core.orientation.sampler import OrientationSampler
from utils.config_sections import MeasurementConfig, load_measurement_config


@dataclass(frozen=True)
class MeasurementView:
    """Everything the UI needs to render one tick."""

    state: MeasuringState
    prompt: str
    button_label: str
    requires_rotation: bool
    live_heading: Optional[float]
    far_anchor_heading: Optional[float]
    close_anchor_heading: Optional[float]
    distance: DistanceResult
    distance_text: Optional[str]

    @property
    def shows_invalid_distance(self) -> bool:
        return self.state is MeasuringState.CLOSE_ANCHOR_MARKED and self.distance_text is None


class TriangulationEngine:
    """Owns a MeasurementSession and evaluates it against the latest sample.

    tick() and advance() share one lock so an anchor is always snapshotted
    from the heading of the most recent sample.
    """

    def __init__(
        self,
        sampler: OrientationSampler,
        known_distance: Optional[float] = None,
        *,
        config: Optional[MeasurementConfig] = None,
        formatter: Optional[PromptFormatter] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.config = config or load_measurement_config()
        if known_distance is None:
            known_distance = self.config.known_distance
        if not isinstance(known_distance, (int, float)) or not math.isfinite(known_distance):
            raise ValueError(f"known_distance must be a finite number, got {known_distance!r}")

        self.sampler = sampler
        self.known_distance = float(known_distance)
        self.formatter = formatter or PromptFormatter(self.config)
        self.logger = logger or logging.getLogger("measure.session")

        self._lock = threading.RLock()
        self.session: Optional[MeasurementSession] = MeasurementSession(
            self.known_distance,
            decimals=self.config.decimals,
            sine_epsilon=self.config.sine_epsilon,
            logger=self.logger,
        )
        self.live_heading: Optional[float] = None
        self.requires_rotation = False
        self._last_distance: DistanceResult = UNDEFINED

        self.logger.info(f"Measurement session opened (known distance {self.known_distance})")

    @property
    def closed(self) -> bool:
        return self.session is None

    @property
    def state(self) -> MeasuringState:
        return self._require_session().state

    def _require_session(self) -> MeasurementSession:
        if self.session is None:
            raise RuntimeError("Measurement session is closed")
        return self.session

    def _refresh_heading(self) -> bool:
        """Pull the latest sample; True when it produced a new live heading."""
        sample = self.sampler.get_latest_sample()
        self.requires_rotation = sample is not None and not sample.is_landscape

        heading = normalize_sample(sample, require_landscape=self.config.require_landscape)
        if heading is None:
            return False
        self.live_heading = heading
        return True

    def _recompute(self, session: MeasurementSession) -> None:
        self._last_distance = session.distance(self.live_heading)

    # ------------------------------------------------------------------
    # public API
    # ------------------------------------------------------------------

    def tick(self) -> MeasurementView:
        """Evaluate the session against the latest sample.

        Ticks without a usable landscape reading keep the previous heading and
        the previous distance.
        """
        with self._lock:
            session = self._require_session()
            if self._refresh_heading():
                self._recompute(session)
            return self._build_view(session)

    def advance(self) -> MeasuringState:
        """Mark / Measure Again.

        The anchor comes from the latest sample only: an incomplete reading
        leaves it unset, and the action is ignored while the device needs
        rotating (the screen hides the button then).
        """
        with self._lock:
            session = self._require_session()
            fresh = self._refresh_heading()
            if self.requires_rotation:
                self.logger.info(f"Ignoring {self.formatter.button_label(session.state)} while in portrait")
                return session.state

            snapshot = self.live_heading if fresh else None
            state = session.advance(snapshot)
            self._recompute(session)
            if state is MeasuringState.CLOSE_ANCHOR_MARKED:
                self.logger.debug(f"distance={self._last_distance}")
            return state

    def view(self) -> MeasurementView:
        """Current view without pulling a new sample."""
        with self._lock:
            return self._build_view(self._require_session())

    def close(self) -> None:
        """Discard the session; further calls raise RuntimeError."""
        with self._lock:
            if self.session is None:
                return
            self.session.reset()
            self.session = None
            self._last_distance = UNDEFINED
        self.logger.info("Measurement session closed")

    def _build_view(self, session: MeasurementSession) -> MeasurementView:
        state = session.state
        terminal = state is MeasuringState.CLOSE_ANCHOR_MARKED
        distance = self._last_distance if terminal else UNDEFINED
        if self.requires_rotation:
            prompt = self.formatter.rotate_prompt()
        else:
            prompt = self.formatter.prompt(state, distance)

        return MeasurementView(
            state=state,
            prompt=prompt,
            button_label=self.formatter.button_label(state),
            requires_rotation=self.requires_rotation,
            live_heading=self.live_heading,
            far_anchor_heading=session.far_anchor_heading,
            close_anchor_heading=session.close_anchor_heading,
            distance=distance,
            distance_text=self.formatter.format_distance(distance) if terminal else None,
        )
