"""
Animation Choreographer
=======================
Timed state machine that replays the stone moves between the generated and
the leveled board: Idle -> Pending -> Animating -> Idle.

Why is this file needed?
------------------------
1. Sequencing: The before-board is shown for a fixed delay, then stones are
   released towards their destinations, then the final board settles. Three
   single-shot timers drive this without ever overlapping.
2. Ownership: The phase lives here and nowhere else. Projection and the
   rendering surface receive it through signals, so the whole sequence can be
   tested by firing fake timers by hand.

Timeline:
    trigger()        -> PENDING     (delay timer started)
    delay elapsed    -> ANIMATING   (commit tick and duration timer started)
    commit tick      -> commit_requested emitted (surface moves stones)
    duration elapsed -> IDLE        (finished emitted)
"""
from __future__ import annotations

import logging
from typing import Any, Callable, Optional

from PySide6.QtCore import QObject, QTimer, Signal

from seiti.config import ANIMATION_DELAY_MS, ANIMATION_DURATION_MS, COMMIT_TICK_MS
from seiti.model.projection import AnimationPhase

logger = logging.getLogger(__name__)

TimerFactory = Callable[[], Any]


class AnimationChoreographer(QObject):
    phase_changed = Signal(int)
    commit_requested = Signal()
    finished = Signal()

    def __init__(
        self,
        can_start: Callable[[], bool],
        delay_ms: int = ANIMATION_DELAY_MS,
        duration_ms: int = ANIMATION_DURATION_MS,
        commit_tick_ms: int = COMMIT_TICK_MS,
        timer_factory: Optional[TimerFactory] = None,
        parent: Optional[QObject] = None,
    ) -> None:
        super().__init__(parent)
        if delay_ms <= 0 or duration_ms <= 0:
            raise ValueError(f"Delay and duration must be positive, got {delay_ms} ms and {duration_ms} ms.")
        if not 0 <= commit_tick_ms < duration_ms:
            raise ValueError(f"Commit tick must be in [0, {duration_ms}) ms, got {commit_tick_ms} ms.")

        self._can_start = can_start
        self._phase = AnimationPhase.IDLE

        factory = timer_factory or self._make_timer
        self._delay_timer = self._single_shot(factory(), delay_ms, self._on_delay_elapsed)
        self._commit_timer = self._single_shot(factory(), commit_tick_ms, self._on_commit_tick)
        self._duration_timer = self._single_shot(factory(), duration_ms, self._on_duration_elapsed)

    # ------------------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------------------

    @property
    def phase(self) -> AnimationPhase:
        return self._phase

    @property
    def is_busy(self) -> bool:
        return self._phase is not AnimationPhase.IDLE

    def trigger(self) -> bool:
        """
        Start a replay.

        Returns:
            True if a replay was started; False when one is already running or
            there is nothing to replay.
        """
        if self.is_busy:
            logger.debug(f"Replay ignored: already {self._phase.name}.")
            return False
        if not self._can_start():
            logger.debug("Replay ignored: no leveled board or no moves.")
            return False

        self._set_phase(AnimationPhase.PENDING)
        self._delay_timer.start()
        return True

    def cancel(self) -> None:
        """Stop every pending timer and fall back to Idle without moving any stone."""
        for timer in (self._delay_timer, self._commit_timer, self._duration_timer):
            timer.stop()
        if self.is_busy:
            logger.debug(f"Replay cancelled during {self._phase.name}.")
            self._set_phase(AnimationPhase.IDLE)

    # ------------------------------------------------------------------------------
    # Internal methods
    # ------------------------------------------------------------------------------

    def _make_timer(self) -> QTimer:
        return QTimer(self)

    @staticmethod
    def _single_shot(timer: Any, interval_ms: int, slot: Callable[[], None]) -> Any:
        timer.setSingleShot(True)
        timer.setInterval(interval_ms)
        timer.timeout.connect(slot)
        return timer

    def _set_phase(self, phase: AnimationPhase) -> None:
        if phase is self._phase:
            return
        logger.debug(f"Animation phase {self._phase.name} -> {phase.name}")
        self._phase = phase
        self.phase_changed.emit(int(phase))

    def _on_delay_elapsed(self) -> None:
        if self._phase is not AnimationPhase.PENDING:
            return
        self._set_phase(AnimationPhase.ANIMATING)
        # Origin positions are on screen once the tick fires
        self._commit_timer.start()
        self._duration_timer.start()

    def _on_commit_tick(self) -> None:
        if self._phase is not AnimationPhase.ANIMATING:
            return
        self.commit_requested.emit()

    def _on_duration_elapsed(self) -> None:
        if self._phase is not AnimationPhase.ANIMATING:
            return
        self._commit_timer.stop()
        self._set_phase(AnimationPhase.IDLE)
        self.finished.emit()
