"""
Typed configuration sections for the Length Measurer.

This module provides strongly-typed configuration sections so components
receive their settings as one object instead of reaching into Config.

Benefits:
- Type safety: IDE autocomplete and type checking
- Default values: Centralized and documented
- Better testing: Can pass a whole section to a component
"""

from dataclasses import dataclass


@dataclass
class MeasurementConfig:
    """Configuration for the triangulation engine and its prompts."""

    # Triangle calibration
    known_distance: float = 10.0  # Length between close anchor and standing point

    # Display
    decimals: int = 1
    unit: str = "m"

    # Degenerate geometry
    sine_epsilon: float = 1e-12

    # Orientation gating
    require_landscape: bool = True

    # Texts
    prompt_started: str = (
        "Stand on the close anchor, then point to the far anchor, then press Mark"
    )
    prompt_far_anchor_marked: str = (
        "Stand on your measured spot, then point to the close anchor, then press Mark"
    )
    prompt_invalid_distance: str = "Invalid distance"
    prompt_rotate_device: str = "Rotate your device to landscape"
    button_mark: str = "Mark"
    button_measure_again: str = "Measure Again"


@dataclass
class SamplerConfig:
    """Configuration for the mock orientation sampler."""

    rate_hz: float = 30.0
    start_heading: float = 20.0
    sweep_deg_per_tick: float = 0.5
    noise_deg: float = 0.0
    tilt: float = -45.0
    seed: int = 7


def load_measurement_config() -> MeasurementConfig:
    """
    Load measurement configuration from Config with fallback defaults.

    Returns:
        MeasurementConfig with values from Config or defaults
    """
    from utils.config import Config

    defaults = MeasurementConfig()
    return MeasurementConfig(
        known_distance=getattr(Config, "KNOWN_DISTANCE", defaults.known_distance),
        decimals=getattr(Config, "DISTANCE_DECIMALS", defaults.decimals),
        unit=getattr(Config, "DISTANCE_UNIT", defaults.unit),
        sine_epsilon=getattr(Config, "SINE_EPSILON", defaults.sine_epsilon),
        require_landscape=getattr(Config, "REQUIRE_LANDSCAPE", defaults.require_landscape),
        prompt_started=getattr(Config, "PROMPT_STARTED", defaults.prompt_started),
        prompt_far_anchor_marked=getattr(
            Config, "PROMPT_FAR_ANCHOR_MARKED", defaults.prompt_far_anchor_marked
        ),
        prompt_invalid_distance=getattr(
            Config, "PROMPT_INVALID_DISTANCE", defaults.prompt_invalid_distance
        ),
        prompt_rotate_device=getattr(Config, "PROMPT_ROTATE_DEVICE", defaults.prompt_rotate_device),
        button_mark=getattr(Config, "BUTTON_MARK", defaults.button_mark),
        button_measure_again=getattr(Config, "BUTTON_MEASURE_AGAIN", defaults.button_measure_again),
    )


def load_sampler_config() -> SamplerConfig:
    """
    Load mock sampler configuration from Config with fallback defaults.

    Returns:
        SamplerConfig with values from Config or defaults
    """
    from utils.config import Config

    return SamplerConfig(
        rate_hz=getattr(Config, "SAMPLER_RATE_HZ", 30.0),
        start_heading=getattr(Config, "SYNTHETIC_START_HEADING", 20.0),
        sweep_deg_per_tick=getattr(Config, "SYNTHETIC_SWEEP_DEG_PER_TICK", 0.5),
        noise_deg=getattr(Config, "SYNTHETIC_NOISE_DEG", 0.0),
        tilt=getattr(Config, "SYNTHETIC_TILT", -45.0),
        seed=getattr(Config, "SYNTHETIC_SEED", 7),
    )
