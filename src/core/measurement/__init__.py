"""
Measurement Module

Angular triangulation of the distance to a remote object from two marked
heading anchors and one known distance.

Components:
- TriangulationEngine: per-tick view and the Mark / Measure Again action
- MeasurementSession / MeasuringState: anchor-marking state machine
- estimate_distance / DistanceResult: law-of-sines estimate with validity
- PromptFormatter: on-screen texts per state
"""

from .distance import DistanceResult, DistanceStatus, estimate_distance
from .session import MeasurementSession, MeasuringState
from .prompts import PromptFormatter
from .engine import MeasurementView, TriangulationEngine
