"""
Shared pytest fixtures for the seiti tests.

Qt runs on the offscreen platform so the scene tests work without a display.
Timers used by the choreographer are replaced by FakeTimer instances that the
tests fire by hand.
"""
import os

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from typing import Callable, Dict, List, Optional, Tuple

import numpy as np
import pytest

from seiti.model.board import BoardSnapshot, Stone, Territory


# =============================================================================
# QT APPLICATION
# =============================================================================


@pytest.fixture(scope="session")
def qapp():
    """One QApplication for the whole test session."""
    from PySide6.QtWidgets import QApplication

    app = QApplication.instance() or QApplication([])
    yield app


# =============================================================================
# BOARDS
# =============================================================================


def make_board(
    size: int = 19,
    stones: Optional[Dict[Tuple[int, int], Stone]] = None,
    territory: Optional[Dict[Tuple[int, int], Territory]] = None,
    seed: int = 0,
) -> BoardSnapshot:
    """Build a snapshot from sparse {(x, y): value} maps."""
    s = np.zeros(size * size, dtype=np.uint8)
    t = np.zeros(size * size, dtype=np.uint8)
    for (x, y), v in (stones or {}).items():
        s[y * size + x] = int(v)
    for (x, y), v in (territory or {}).items():
        t[y * size + x] = int(v)
    return BoardSnapshot(size=size, stones=s, territory=t, seed=seed)


@pytest.fixture
def board_factory() -> Callable[..., BoardSnapshot]:
    return make_board


# =============================================================================
# FAKE TIMERS
# =============================================================================


class FakeSignal:
    def __init__(self) -> None:
        self._slots: List[Callable[[], None]] = []

    def connect(self, slot: Callable[[], None]) -> None:
        self._slots.append(slot)

    def emit(self) -> None:
        for slot in list(self._slots):
            slot()


class FakeTimer:
    """Single-shot QTimer stand-in; fire() delivers the timeout if started."""

    def __init__(self) -> None:
        self.timeout = FakeSignal()
        self.interval = 0
        self.single_shot = False
        self.active = False
        self.start_count = 0

    def setSingleShot(self, single_shot: bool) -> None:
        self.single_shot = single_shot

    def setInterval(self, ms: int) -> None:
        self.interval = ms

    def start(self) -> None:
        self.active = True
        self.start_count += 1

    def stop(self) -> None:
        self.active = False

    def isActive(self) -> bool:
        return self.active

    def fire(self) -> bool:
        if not self.active:
            return False
        if self.single_shot:
            self.active = False
        self.timeout.emit()
        return True


class FakeTimerFactory:
    """Creates FakeTimers and remembers them in creation order (delay, commit, duration)."""

    def __init__(self) -> None:
        self.timers: List[FakeTimer] = []

    def __call__(self) -> FakeTimer:
        timer = FakeTimer()
        self.timers.append(timer)
        return timer

    @property
    def delay(self) -> FakeTimer:
        return self.timers[0]

    @property
    def commit(self) -> FakeTimer:
        return self.timers[1]

    @property
    def duration(self) -> FakeTimer:
        return self.timers[2]


@pytest.fixture
def fake_timers() -> FakeTimerFactory:
    return FakeTimerFactory()
