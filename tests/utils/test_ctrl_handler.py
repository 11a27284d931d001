"""Tests for CtrlCHandler install/restore."""

from __future__ import annotations

import signal

from utils.ctrl_handler import CtrlCHandler


def test_handler_sets_stop_flag_and_restores_previous() -> None:
    previous = signal.getsignal(signal.SIGINT)

    handler = CtrlCHandler()
    assert signal.getsignal(signal.SIGINT) == handler._signal_handler

    handler._signal_handler(signal.SIGINT, None)
    assert handler.should_stop

    handler.restore()
    handler.restore()
    assert signal.getsignal(signal.SIGINT) is previous
