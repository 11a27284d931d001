import signal


class CtrlCHandler:
    """
    Turn Ctrl+C into a stop flag for the measuring loop so the sampler
    thread stops and the session logs are flushed.

    restore() puts back whatever SIGINT handler was installed before.
    """
    def __init__(self):
        self.should_stop = False
        self._previous = signal.signal(signal.SIGINT, self._signal_handler)

    def _signal_handler(self, sig, frame):
        """Callback executed when Ctrl+C is detected"""
        print("\n[INFO] Interrupt signal detected, stopping measurement...")
        self.should_stop = True

    def restore(self) -> None:
        if self._previous is not None:
            signal.signal(signal.SIGINT, self._previous)
            self._previous = None
