"""
Centralized configuration for the Length Measurer.

This module provides all configuration constants and runtime settings for:
- Triangulation (known distance, display precision, degenerate-angle tolerance)
- User-facing prompt and button texts
- Orientation sampling (mock sampler rate and synthetic sweep)
- Session logging

The Config class contains all constants as class attributes, making them
accessible throughout the application without instantiation.

Usage:
    from utils.config import Config

    decimals = Config.DISTANCE_DECIMALS
    if Config.REQUIRE_LANDSCAPE:
        # Only landscape samples update the live heading
"""

import os
import logging

log = logging.getLogger(__name__)


def _env_float(name: str, default: float) -> float:
    """Read a float override from the environment, falling back on bad input."""
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        log.warning("Ignoring %s=%r (not a number), using %s", name, raw, default)
        return default


class Config:
    """System configuration constants for the Length Measurer."""

    # ==========================================================================
    # TRIANGULATION
    # ==========================================================================

    KNOWN_DISTANCE = _env_float("LENGTH_MEASURER_KNOWN_DISTANCE", 10.0)  # metres
    DISTANCE_DECIMALS = 1                   # Decimals shown on screen
    DISTANCE_UNIT = "m"
    SINE_EPSILON = 1e-12                    # |sin(angle)| below this counts as zero

    # ==========================================================================
    # ORIENTATION
    # ==========================================================================

    REQUIRE_LANDSCAPE = True                # Portrait ticks never update the heading

    # ==========================================================================
    # PROMPTS: One per measuring state
    # ==========================================================================

    PROMPT_STARTED = (
        "Stand on the close anchor, then point to the far anchor, then press Mark"
    )
    PROMPT_FAR_ANCHOR_MARKED = (
        "Stand on your measured spot, then point to the close anchor, then press Mark"
    )
    PROMPT_INVALID_DISTANCE = "Invalid distance"
    PROMPT_ROTATE_DEVICE = "Rotate your device to landscape"

    BUTTON_MARK = "Mark"
    BUTTON_MEASURE_AGAIN = "Measure Again"

    # ==========================================================================
    # MOCK SAMPLER: Replay and synthetic sweep
    # ==========================================================================

    SAMPLER_RATE_HZ = 30                    # deviceorientation fires ~30-60 Hz on phones
    SYNTHETIC_START_HEADING = 20.0          # Degrees
    SYNTHETIC_SWEEP_DEG_PER_TICK = 0.5
    SYNTHETIC_NOISE_DEG = 0.0               # Std-dev of heading jitter
    SYNTHETIC_TILT = -45.0                  # Negative = held normally
    SYNTHETIC_SEED = 7

    # ==========================================================================
    # LOGGING
    # ==========================================================================

    LOG_DIR = os.getenv("LENGTH_MEASURER_LOG_DIR", "logs")
    LOG_FORMAT = '%(asctime)s.%(msecs)03d [%(levelname)s] %(message)s'
    LOG_DATE_FORMAT = '%H:%M:%S'
