"""
Background Workers (Threading)
==============================
This module contains the QThread subclass used for board service requests.

Why is this file needed?
------------------------
1. Responsiveness: If we wait for the board service on the main thread, the
   GUI freezes (and any running replay stutters). Requests run in a
   background thread instead.
2. Signals: The result or the error reaches the GUI thread through Qt Signals,
   so the store is only ever written from the main thread.

Classes:
    ServiceWorker: Runs one board service call.
"""
from __future__ import annotations

import logging
from typing import Any, Callable

from PySide6.QtCore import QThread, Signal

logger = logging.getLogger(__name__)


class ServiceWorker(QThread):
    # Signals to report back to the GUI thread
    succeeded = Signal(object)
    error_occurred = Signal(str)

    def __init__(self, task: Callable[[], Any], label: str = "request", parent=None) -> None:
        super().__init__(parent)
        self.task = task
        self.label = label

    def run(self) -> None:
        try:
            logger.info(f"Starting {self.label} in background thread...")
            result = self.task()
        except Exception as e:
            logger.error(f"Error in {self.label}: {e}")
            self.error_occurred.emit(str(e))
            return
        self.succeeded.emit(result)
