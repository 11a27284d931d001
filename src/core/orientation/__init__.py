"""
Orientation Module

Device orientation readings and the heading math built on them.

Components:
- OrientationSample / ScreenMode: one reading and its screen orientation
- OrientationSampler: thread-safe latest-sample store fed by device callbacks
- normalize_heading / angle_diff: pure heading math
"""

from .sample import OrientationSample, ScreenMode
from .sampler import OrientationSampler
from .heading import angle_diff, normalize_heading, normalize_sample
