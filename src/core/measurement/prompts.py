"""
Prompt formatter for the measuring screen.

Maps each measuring state to the instruction text and button label shown to
the user, and formats the distance shown once both anchors are marked.
"""

from typing import Optional

from core.measurement.distance import DistanceResult
from core.measurement.session import MeasuringState
from utils.config_sections import MeasurementConfig, load_measurement_config


class PromptFormatter:
    """
    Centralized texts for the measuring screen.

    Handles:
    - Instruction text per state
    - Button label per state
    - Distance formatting ("5.8 m") and the invalid-distance indicator
    """

    def __init__(self, config: Optional[MeasurementConfig] = None):
        self.config = config or load_measurement_config()

    def format_distance(self, result: Optional[DistanceResult]) -> Optional[str]:
        """
        Format a valid result as "<value> <unit>".

        Returns:
            The formatted distance, or None when the result is not displayable

        Examples:
            >>> formatter.format_distance(DistanceResult(DistanceStatus.VALID, 5.77, 5.8))
            "5.8 m"
        """
        if result is None or not result.is_valid or result.display_value is None:
            return None
        return f"{result.display_value:.{self.config.decimals}f} {self.config.unit}"

    def prompt(self, state: MeasuringState, result: Optional[DistanceResult] = None) -> str:
        if state is MeasuringState.STARTED:
            return self.config.prompt_started
        if state is MeasuringState.FAR_ANCHOR_MARKED:
            return self.config.prompt_far_anchor_marked
        if state is MeasuringState.CLOSE_ANCHOR_MARKED:
            text = self.format_distance(result)
            return text if text is not None else self.config.prompt_invalid_distance
        raise ValueError(f"Unhandled measuring state: {state}")

    def button_label(self, state: MeasuringState) -> str:
        if state is MeasuringState.STARTED:
            return self.config.button_mark
        if state is MeasuringState.FAR_ANCHOR_MARKED:
            return self.config.button_mark
        if state is MeasuringState.CLOSE_ANCHOR_MARKED:
            return self.config.button_measure_again
        raise ValueError(f"Unhandled measuring state: {state}")

    def rotate_prompt(self) -> str:
        return self.config.prompt_rotate_device
