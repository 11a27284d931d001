#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Mock orientation source for measuring without a phone.

This module feeds an OrientationSampler with readings that would normally
come from the browser's deviceorientation events:
1. Replay of a recorded JSONL trace
2. Synthetic slow heading sweep with optional jitter

Operating modes:
- 'replay': one JSON object per line
    {"heading": 12.5, "tilt": -40.0, "mode": "landscape", "mark": false}
  heading/tilt may be null or missing, mode defaults to landscape, mark
  flags the tick at which the user pressed the button.
- 'synthetic': heading advances by a fixed step per tick in landscape mode.

Usage:
    sampler = OrientationSampler()
    mock = MockOrientationSampler(sampler, mode='replay', trace_path='walk.jsonl')
    while (record := mock.step()) is not None:
        ...

    # Background thread at the configured rate
    mock = MockOrientationSampler(sampler, mode='synthetic')
    mock.start()
"""

import json
import threading
import time
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

import numpy as np

from core.orientation.sample import ScreenMode
from core.orientation.sampler import OrientationSampler
from utils.config_sections import SamplerConfig, load_sampler_config

log = logging.getLogger("MockOrientationSampler")


@dataclass(frozen=True)
class TraceRecord:
    """One tick of a recorded or generated session."""

    heading: Optional[float]
    tilt: Optional[float]
    mode: ScreenMode = ScreenMode.LANDSCAPE
    mark: bool = False


def _optional_float(data: dict, key: str, line_no: int) -> Optional[float]:
    value = data.get(key)
    if value is None:
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        raise ValueError(f"Line {line_no}: '{key}' is not a number: {value!r}") from None


def load_trace(path) -> List[TraceRecord]:
    """Parse a JSONL trace file into records."""
    path = Path(path)
    if not path.exists():
        raise ValueError(f"Trace file not found: {path}")

    records: List[TraceRecord] = []
    with open(path, 'r') as f:
        for line_no, line in enumerate(f, start=1):
            line = line.strip()
            if not line:
                continue
            try:
                data = json.loads(line)
            except json.JSONDecodeError as exc:
                raise ValueError(f"Line {line_no}: invalid JSON ({exc.msg})") from exc
            if not isinstance(data, dict):
                raise ValueError(f"Line {line_no}: expected an object")

            records.append(TraceRecord(
                heading=_optional_float(data, "heading", line_no),
                tilt=_optional_float(data, "tilt", line_no),
                mode=ScreenMode.parse(data.get("mode", "landscape")),
                mark=bool(data.get("mark", False)),
            ))
    return records


class MockOrientationSampler:
    """
    Drives an OrientationSampler from a trace or a synthetic sweep.

    step() pushes exactly one reading; start()/stop() do the same from a
    daemon thread at config.rate_hz.
    """

    def __init__(
        self,
        sampler: OrientationSampler,
        mode: str = 'synthetic',
        trace_path: Optional[str] = None,
        config: Optional[SamplerConfig] = None,
        max_ticks: Optional[int] = None,
    ) -> None:
        self.sampler = sampler
        self.mode = mode
        self.trace_path = trace_path
        self.config = config or load_sampler_config()
        self.max_ticks = max_ticks

        self.tick_count = 0
        self.running = False
        self._thread = None
        self._records: List[TraceRecord] = []
        self._rng = np.random.default_rng(self.config.seed)

        self._init_mode()

    def _init_mode(self) -> None:
        if self.mode == 'replay':
            if not self.trace_path:
                raise ValueError("Replay mode needs a trace_path")
            self._records = load_trace(self.trace_path)
            log.info("Loaded %d trace records from %s", len(self._records), self.trace_path)
        elif self.mode == 'synthetic':
            log.info("Synthetic sweep ready (%.2f deg/tick)", self.config.sweep_deg_per_tick)
        else:
            raise ValueError(f"Unknown mode: {self.mode}")

    @property
    def exhausted(self) -> bool:
        if self.max_ticks is not None and self.tick_count >= self.max_ticks:
            return True
        return self.mode == 'replay' and self.tick_count >= len(self._records)

    def step(self) -> Optional[TraceRecord]:
        """Push the next reading into the sampler. None when exhausted."""
        if self.exhausted:
            return None

        if self.mode == 'replay':
            record = self._records[self.tick_count]
        else:
            record = self._synthetic_record(self.tick_count)

        self.sampler.on_screen_mode(record.mode)
        self.sampler.on_orientation(record.heading, record.tilt)
        self.tick_count += 1
        return record

    def _synthetic_record(self, tick: int) -> TraceRecord:
        heading = self.config.start_heading + tick * self.config.sweep_deg_per_tick
        if self.config.noise_deg > 0:
            heading += float(self._rng.normal(0.0, self.config.noise_deg))
        return TraceRecord(
            heading=heading % 360.0,
            tilt=self.config.tilt,
            mode=ScreenMode.LANDSCAPE,
        )

    def start(self) -> None:
        """Start pushing readings from a background thread."""
        if self.running:
            log.warning("Already running")
            return

        self.running = True
        self._thread = threading.Thread(target=self._run, daemon=True)
        self._thread.start()
        log.info("Started at %.1f Hz", self.config.rate_hz)

    def stop(self) -> None:
        self.running = False
        if self._thread:
            self._thread.join(timeout=2.0)
            self._thread = None
        log.info("Stopped after %d ticks", self.tick_count)

    def _run(self) -> None:
        interval = 1.0 / self.config.rate_hz if self.config.rate_hz > 0 else 0.0

        while self.running:
            loop_start = time.time()
            if self.step() is None:
                self.running = False
                break

            elapsed = time.time() - loop_start
            sleep_time = max(0, interval - elapsed)
            if sleep_time > 0:
                time.sleep(sleep_time)
