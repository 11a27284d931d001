#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Length Measurer - distance to a remote object by angular triangulation

Drives the measuring screen without a phone:
- MockOrientationSampler: replays a recorded trace or sweeps synthetically
- TriangulationEngine: state machine + law-of-sines estimate
- Console output stands in for the screen (prompt, button, distance)

Modes:
    python run.py --trace walk.jsonl --known-distance 10
    python run.py --synthetic --marks 0,60,120 --known-distance 10
    python run.py --synthetic --interactive     # Enter = Mark / Measure Again, q = quit
"""

import argparse
import sys
from typing import List, Optional, Set, TextIO

from utils.ctrl_handler import CtrlCHandler
from utils.config import Config
from utils.config_sections import MeasurementConfig, load_measurement_config, load_sampler_config
from core.orientation.sampler import OrientationSampler
from core.orientation.mock_sampler import MockOrientationSampler
from core.measurement.engine import MeasurementView, TriangulationEngine
from core.telemetry.loggers.measurement_logger import (
    close_measurement_logger,
    get_measurement_logger,
)

QUIT_COMMANDS = {"q", "quit", "exit"}


def parse_marks(raw: Optional[str]) -> Set[int]:
    """Parse "0,60,120" into tick indices."""
    if not raw:
        return set()
    try:
        return {int(part) for part in raw.split(",") if part.strip()}
    except ValueError:
        raise argparse.ArgumentTypeError(f"--marks expects comma-separated integers, got {raw!r}")


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    ap = argparse.ArgumentParser(description="Measure distance to a remote object by angular triangulation")
    source = ap.add_mutually_exclusive_group(required=True)
    source.add_argument("--trace", help="JSONL orientation trace to replay")
    source.add_argument("--synthetic", action="store_true", help="Use a synthetic heading sweep")
    ap.add_argument("--known-distance", type=float, default=Config.KNOWN_DISTANCE,
                    help="Distance between close anchor and standing point (m)")
    ap.add_argument("--marks", type=parse_marks, default=set(),
                    help="Tick indices at which Mark is pressed (synthetic mode)")
    ap.add_argument("--interactive", action="store_true",
                    help="Feed ticks in the background; press Enter to Mark, q to quit")
    ap.add_argument("--max-ticks", type=int, default=None, help="Stop after N ticks")
    ap.add_argument("--log-dir", default=None, help="Session log directory")
    ap.add_argument("--quiet", action="store_true", help="Only print the final view")
    args = ap.parse_args(argv)
    if args.synthetic and not args.interactive and args.max_ticks is None:
        args.max_ticks = max(args.marks, default=0) + 1
    return args


def render(view: MeasurementView) -> str:
    heading = "--" if view.live_heading is None else f"{view.live_heading:.1f}"
    return f"[{view.state.name}] heading={heading}  {view.prompt}  [{view.button_label}]"


def build_sampler(args: argparse.Namespace, sampler: OrientationSampler) -> MockOrientationSampler:
    if args.trace:
        return MockOrientationSampler(sampler, mode='replay', trace_path=args.trace,
                                      config=load_sampler_config(), max_ticks=args.max_ticks)
    return MockOrientationSampler(sampler, mode='synthetic',
                                  config=load_sampler_config(), max_ticks=args.max_ticks)


def replay(args: argparse.Namespace, mock: MockOrientationSampler,
           engine: TriangulationEngine, ctrl_handler: CtrlCHandler) -> MeasurementView:
    """Step the sampler tick by tick, pressing Mark where scripted."""
    last_printed = None
    view = engine.view()
    while not ctrl_handler.should_stop:
        tick_index = mock.tick_count
        record = mock.step()
        if record is None:
            break

        view = engine.tick()
        if record.mark or tick_index in args.marks:
            engine.advance()
            view = engine.view()

        if not args.quiet and (view.state, view.prompt) != last_printed:
            print(render(view))
            last_printed = (view.state, view.prompt)
    return view


def interact(mock: MockOrientationSampler, engine: TriangulationEngine,
             ctrl_handler: CtrlCHandler, stream: TextIO) -> MeasurementView:
    """Let the sampler run on its own thread; each input line is one button press."""
    mock.start()
    try:
        view = engine.tick()
        print(render(view))
        for line in stream:
            if ctrl_handler.should_stop or line.strip().lower() in QUIT_COMMANDS:
                break
            engine.tick()
            engine.advance()
            view = engine.view()
            print(render(view))
        return engine.tick()
    finally:
        mock.stop()


def run(args: argparse.Namespace, config: Optional[MeasurementConfig] = None,
        stream: Optional[TextIO] = None) -> MeasurementView:
    """Drive the engine from the chosen sampler and return the final view."""
    sampler = OrientationSampler()
    mock = build_sampler(args, sampler)
    engine = TriangulationEngine(sampler, known_distance=args.known_distance,
                                 config=config or load_measurement_config())
    ctrl_handler = CtrlCHandler()

    try:
        if args.interactive:
            return interact(mock, engine, ctrl_handler, stream or sys.stdin)
        return replay(args, mock, engine, ctrl_handler)
    finally:
        engine.close()
        ctrl_handler.restore()


def main(argv: Optional[List[str]] = None, stream: Optional[TextIO] = None) -> int:
    args = parse_args(argv)
    config = load_measurement_config()
    get_measurement_logger(session_dir=args.log_dir)

    try:
        view = run(args, config=config, stream=stream)
    except ValueError as exc:
        print(f"[ERROR] {exc}", file=sys.stderr)
        return 1
    finally:
        close_measurement_logger()

    print("=" * 60)
    print(render(view))
    if view.distance_text is not None:
        print(f"Distance: {view.distance_text}")
    elif view.shows_invalid_distance:
        print(f"Distance: {config.prompt_invalid_distance}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
