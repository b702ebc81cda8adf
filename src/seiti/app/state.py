from __future__ import annotations

import logging
from enum import Enum
from typing import Iterable, Optional

from PySide6.QtCore import QObject, Signal

from seiti.config import DEFAULT_SEED
from seiti.model.board import BoardSnapshot, Move, TerritoryCounts, count_territory
from seiti.model.moves import MoveIndex

logger = logging.getLogger(__name__)


class Status(Enum):
    """Board service request status."""
    IDLE = "idle"
    LOADING = "loading"
    ERROR = "error"


class BoardStore(QObject):
    """Central state store with signals for pane/control sync."""
    board_changed = Signal(object)
    leveled_changed = Signal(object)
    status_changed = Signal(object)

    def __init__(self, seed: int = DEFAULT_SEED) -> None:
        super().__init__()
        self.seed: int = seed
        self.board: Optional[BoardSnapshot] = None
        self.leveled_board: Optional[BoardSnapshot] = None
        self.moves: tuple[Move, ...] = ()
        self.move_index: MoveIndex = MoveIndex.EMPTY
        self.status: Status = Status.IDLE
        self.last_error: str = ""

    def can_replay(self) -> bool:
        return self.leveled_board is not None and len(self.moves) > 0

    def territory_counts(self) -> Optional[TerritoryCounts]:
        if self.board is None:
            return None
        return count_territory(self.board)

    def set_generated(self, seed: int, board: BoardSnapshot) -> None:
        """Commit a freshly generated board; any leveling result is dropped."""
        self.seed = seed
        self.board = board
        self._set_leveled(None, ())
        logger.info(f"Board for seed {seed} committed.")
        self.board_changed.emit(self.board)
        self.leveled_changed.emit(self.leveled_board)

    def set_leveled(self, board: BoardSnapshot, moves: Iterable[Move]) -> None:
        self._set_leveled(board, moves)
        logger.info(f"Leveled board committed with {len(self.moves)} moves.")
        self.leveled_changed.emit(self.leveled_board)

    def set_status(self, status: Status, message: str = "") -> None:
        self.status = status
        self.last_error = message if status is Status.ERROR else ""
        self.status_changed.emit(self.status)

    def _set_leveled(self, board: Optional[BoardSnapshot], moves: Iterable[Move]) -> None:
        self.leveled_board = board
        self.moves = tuple(moves)
        self.move_index = MoveIndex.from_moves(self.moves)
