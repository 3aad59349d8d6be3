"""Bridge from the logging module to the window's log view."""
from __future__ import annotations

import logging

from PySide6.QtCore import QObject, Signal


class _LogSignals(QObject):
    message = Signal(str)


class QtLogHandler(logging.Handler):
    """Emits formatted records as a Qt signal so worker threads never touch widgets."""

    def __init__(self, level: int = logging.INFO) -> None:
        super().__init__(level)
        self.signals = _LogSignals()
        self.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))

    def emit(self, record: logging.LogRecord) -> None:
        self.signals.message.emit(self.format(record))
