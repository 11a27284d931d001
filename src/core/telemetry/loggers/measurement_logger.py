"""
Dedicated logger for measuring sessions.

This module provides a singleton logger that writes the measuring screen's
activity into per-run files for later troubleshooting.

Features:
- Singleton pattern (one instance per run)
- Separate log files for the session state machine and the orientation sampler
- DEBUG level logging to files
- WARNING level console output

Log Files:
- session.log: state transitions, anchor snapshots and distance results
- sampler.log: sampler lifecycle (replay loading, start/stop)

Usage:
    from core.telemetry.loggers.measurement_logger import get_measurement_logger

    measure_logger = get_measurement_logger(session_dir=Path("logs/session_2026-10-19_10-30-00"))
    measure_logger.session.info("Far anchor marked")
"""

import logging
from pathlib import Path
from datetime import datetime

from utils.config import Config

LOGGER_FILES = {
    "session": ("measure.session", "session.log"),
    "sampler": ("MockOrientationSampler", "sampler.log"),
}


class MeasurementLogger:
    """Singleton logger for measuring sessions."""

    _instance = None
    _initialized = False

    def __new__(cls, session_dir: Path = None):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self, session_dir: Path = None):
        if self._initialized:
            return

        if session_dir is None:
            timestamp = datetime.now().strftime("%Y-%m-%d_%H-%M-%S")
            self.log_dir = Path(Config.LOG_DIR) / f"session_{timestamp}"
        else:
            self.log_dir = Path(session_dir)

        self.log_dir.mkdir(parents=True, exist_ok=True)

        for attr, (logger_name, filename) in LOGGER_FILES.items():
            self._setup_logger(attr, logger_name, filename)

        self._initialized = True

    def _setup_logger(self, attr: str, logger_name: str, filename: str):
        """Setup individual logger with file handler."""
        logger = logging.getLogger(logger_name)
        logger.setLevel(logging.DEBUG)
        logger.propagate = False

        logger.handlers.clear()

        fh = logging.FileHandler(self.log_dir / filename, mode='w')
        fh.setLevel(logging.DEBUG)

        ch = logging.StreamHandler()
        ch.setLevel(logging.WARNING)

        formatter = logging.Formatter(Config.LOG_FORMAT, datefmt=Config.LOG_DATE_FORMAT)
        fh.setFormatter(formatter)
        ch.setFormatter(formatter)

        logger.addHandler(fh)
        logger.addHandler(ch)

        setattr(self, attr, logger)

    def close(self):
        """Close all handlers and allow a fresh instance."""
        for attr in LOGGER_FILES:
            logger = getattr(self, attr, None)
            if logger:
                for handler in logger.handlers[:]:
                    handler.close()
                    logger.removeHandler(handler)
                logger.propagate = True
        type(self)._instance = None


_measure_logger = None


def get_measurement_logger(session_dir: Path = None) -> MeasurementLogger:
    """Get or create measurement logger instance."""
    global _measure_logger
    if _measure_logger is None:
        _measure_logger = MeasurementLogger(session_dir=session_dir)
    return _measure_logger


def close_measurement_logger() -> None:
    global _measure_logger
    if _measure_logger is not None:
        _measure_logger.close()
        _measure_logger = None
