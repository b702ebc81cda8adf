"""
Board Session
=============
The three user operations of the viewer: generate a board, level it, replay
the moves between the two.

Why is this file needed?
------------------------
It is the only writer of the BoardStore. Service calls run through a
ServiceWorker; a failed call sets the ERROR status and leaves every committed
board untouched. Replacing a board or its moves cancels a running replay.
"""
from __future__ import annotations

import logging
from typing import Any, Callable, Optional

from PySide6.QtCore import QObject, Slot

from seiti.app.state import BoardStore, Status
from seiti.controller.choreographer import AnimationChoreographer
from seiti.controller.service import BoardServiceClient, BoardServiceError
from seiti.controller.workers import ServiceWorker
from seiti.model.board import BoardSnapshot
from seiti.model.io import LevelResult

logger = logging.getLogger(__name__)


class BoardSession(QObject):
    def __init__(
        self,
        store: BoardStore,
        client: BoardServiceClient,
        choreographer: Optional[AnimationChoreographer] = None,
        background: bool = True,
        parent: Optional[QObject] = None,
    ) -> None:
        super().__init__(parent)
        self.store = store
        self.client = client
        self.background = background
        self.choreographer = choreographer or AnimationChoreographer(can_start=store.can_replay, parent=self)

        self._worker: Optional[ServiceWorker] = None
        self._on_success: Optional[Callable[[Any], None]] = None

        # New boards or moves invalidate a running replay
        self.store.board_changed.connect(self._on_boards_replaced)
        self.store.leveled_changed.connect(self._on_boards_replaced)

    # ------------------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------------------

    @property
    def is_loading(self) -> bool:
        return self.store.status is Status.LOADING

    def load_initial(self) -> bool:
        """Fetch the board of the current seed (application start)."""
        return self._generate(self.store.seed)

    def generate(self) -> bool:
        """Fetch the board of the next seed; the seed only advances on success."""
        return self._generate(self.store.seed + 1)

    def level(self) -> bool:
        board = self.store.board
        if board is None or self.is_loading:
            return False
        self.choreographer.cancel()

        def commit(result: LevelResult) -> None:
            self.store.set_leveled(result.board, result.moves)

        self._request(lambda: self.client.level(board), commit, "level")
        return True

    def replay(self) -> bool:
        if self.is_loading:
            return False
        return self.choreographer.trigger()

    def shutdown(self) -> None:
        """Teardown: stop the replay and wait for a running request."""
        self.choreographer.cancel()
        if self._worker is not None:
            self._worker.wait()
            self._worker = None

    # ------------------------------------------------------------------------------
    # Internal methods
    # ------------------------------------------------------------------------------

    def _generate(self, seed: int) -> bool:
        if self.is_loading:
            return False

        def commit(board: BoardSnapshot) -> None:
            self.store.set_generated(seed, board)

        self._request(lambda: self.client.generate(seed), commit, f"generate(seed={seed})")
        return True

    def _request(self, task: Callable[[], Any], on_success: Callable[[Any], None], label: str) -> None:
        self.store.set_status(Status.LOADING)
        self._on_success = on_success

        if not self.background:
            try:
                result = task()
            except BoardServiceError as e:
                logger.error(f"{label} failed: {e}")
                self._on_worker_error(str(e))
                return
            self._on_worker_succeeded(result)
            return

        worker = ServiceWorker(task, label=label, parent=self)
        worker.succeeded.connect(self._on_worker_succeeded)
        worker.error_occurred.connect(self._on_worker_error)
        worker.finished.connect(worker.deleteLater)
        self._worker = worker
        worker.start()

    @Slot(object)
    def _on_worker_succeeded(self, result: Any) -> None:
        on_success, self._on_success = self._on_success, None
        self._worker = None
        if on_success is not None:
            on_success(result)
        self.store.set_status(Status.IDLE)

    @Slot(str)
    def _on_worker_error(self, message: str) -> None:
        self._on_success = None
        self._worker = None
        self.store.set_status(Status.ERROR, message)

    @Slot(object)
    def _on_boards_replaced(self, _board: object = None) -> None:
        self.choreographer.cancel()
