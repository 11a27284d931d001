"""Basic integration test - runs the measuring CLI end to end"""

from __future__ import annotations

import io
import json
import signal
from pathlib import Path

import pytest

import main as main_module
from core.orientation import mock_sampler as mock_sampler_module
from utils.config_sections import MeasurementConfig


def write_trace(path: Path, records) -> Path:
    path.write_text("\n".join(json.dumps(r) for r in records) + "\n")
    return path


def test_synthetic_run_reports_distance(tmp_path: Path, capsys: pytest.CaptureFixture) -> None:
    # Sweep starts at 20 deg, 0.5 deg/tick: far=20 at tick 0, close=50 at tick 60, live=80 at tick 120
    code = main_module.main([
        "--synthetic", "--marks", "0,60", "--max-ticks", "121",
        "--known-distance", "10", "--log-dir", str(tmp_path / "logs"), "--quiet",
    ])

    out = capsys.readouterr().out
    assert code == 0
    assert "Distance: 5.8 m" in out
    assert (tmp_path / "logs" / "session.log").exists()


def test_trace_replay_with_gaps_and_rotation(tmp_path: Path, capsys: pytest.CaptureFixture) -> None:
    trace = write_trace(tmp_path / "walk.jsonl", [
        {"heading": 20.0, "tilt": -30.0, "mark": True},
        {"heading": None, "tilt": -30.0},
        {"heading": 50.0, "tilt": -30.0, "mark": True},
        {"heading": 80.0, "tilt": -30.0},
        {"heading": 170.0, "tilt": -30.0, "mode": "portrait"},
    ])

    code = main_module.main(["--trace", str(trace), "--log-dir", str(tmp_path / "logs"), "--known-distance", "10"])

    out = capsys.readouterr().out
    assert code == 0
    assert "[FAR_ANCHOR_MARKED]" in out
    assert "Distance: 5.8 m" in out
    assert "Rotate your device" in out


def test_far_anchor_sightline_reports_invalid(tmp_path: Path, capsys: pytest.CaptureFixture) -> None:
    trace = write_trace(tmp_path / "walk.jsonl", [
        {"heading": 20.0, "tilt": -30.0, "mark": True},
        {"heading": 50.0, "tilt": -30.0, "mark": True},
        {"heading": 20.0, "tilt": -30.0},
    ])

    code = main_module.main(["--trace", str(trace), "--log-dir", str(tmp_path / "logs"), "--quiet"])

    assert code == 0
    assert "Distance: Invalid distance" in capsys.readouterr().out


def test_missing_trace_exits_with_error(tmp_path: Path, capsys: pytest.CaptureFixture) -> None:
    code = main_module.main(["--trace", str(tmp_path / "nope.jsonl"), "--log-dir", str(tmp_path / "logs")])

    assert code == 1
    assert "not found" in capsys.readouterr().err


def test_parse_marks() -> None:
    assert main_module.parse_marks("0, 60,120") == {0, 60, 120}
    assert main_module.parse_marks("") == set()


def test_run_restores_sigint_handler(tmp_path: Path) -> None:
    previous = signal.getsignal(signal.SIGINT)

    main_module.main(["--synthetic", "--max-ticks", "3", "--log-dir", str(tmp_path / "logs"), "--quiet"])

    assert signal.getsignal(signal.SIGINT) is previous


def test_invalid_text_follows_measurement_config(
    tmp_path: Path, capsys: pytest.CaptureFixture, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setattr(
        main_module, "load_measurement_config",
        lambda: MeasurementConfig(prompt_invalid_distance="No reading"),
    )
    trace = write_trace(tmp_path / "walk.jsonl", [
        {"heading": 20.0, "tilt": -30.0, "mark": True},
        {"heading": 50.0, "tilt": -30.0, "mark": True},
    ])

    code = main_module.main(["--trace", str(trace), "--log-dir", str(tmp_path / "logs"), "--quiet"])

    assert code == 0
    assert "Distance: No reading" in capsys.readouterr().out


class SyncThread:
    def __init__(self, target, daemon=False):
        self.target = target
        self.daemon = daemon

    def start(self):
        self.target()

    def join(self, timeout=None):
        pass


def test_interactive_presses_follow_input_lines(
    tmp_path: Path, capsys: pytest.CaptureFixture, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setattr(mock_sampler_module.threading, "Thread", SyncThread)
    monkeypatch.setattr(mock_sampler_module.time, "sleep", lambda _: None)
    trace = write_trace(tmp_path / "walk.jsonl", [
        {"heading": 10.0, "tilt": -30.0},
        {"heading": 20.0, "tilt": -30.0},
    ])

    code = main_module.main(
        ["--trace", str(trace), "--interactive", "--log-dir", str(tmp_path / "logs")],
        stream=io.StringIO("\n\nq\n\n"),
    )

    out = capsys.readouterr().out
    assert code == 0
    assert "[FAR_ANCHOR_MARKED] heading=20.0" in out
    assert "[CLOSE_ANCHOR_MARKED]" in out
    assert "Distance: Invalid distance" in out


def test_interactive_synthetic_stops_at_end_of_input(tmp_path: Path, capsys: pytest.CaptureFixture) -> None:
    code = main_module.main(
        ["--synthetic", "--interactive", "--log-dir", str(tmp_path / "logs")],
        stream=io.StringIO("\n"),
    )

    out = capsys.readouterr().out
    assert code == 0
    assert "[FAR_ANCHOR_MARKED]" in out
