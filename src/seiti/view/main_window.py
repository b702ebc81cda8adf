"""
Main Application Window
=======================
Controls on top, the generated board and the leveled board side by side.

Why is this file needed?
------------------------
1. Layout: It organizes the two board panes, the buttons and the status bar.
2. Routing: It connects store and choreographer signals to the board scenes,
   re-projecting the leveled pane on every animation phase change.
"""
from __future__ import annotations

import logging
from typing import Optional

from PySide6.QtCore import Qt
from PySide6.QtGui import QCloseEvent
from PySide6.QtWidgets import (
    QHBoxLayout, QLabel, QMainWindow, QPushButton, QStackedWidget, QStatusBar, QVBoxLayout, QWidget
)

from seiti.app.application import VISIBLE_APP_NAME, save_last_seed
from seiti.app.state import Status
from seiti.controller.session import BoardSession
from seiti.model.board import BoardSnapshot, count_territory
from seiti.model.moves import MoveIndex
from seiti.model.projection import AnimationPhase, project
from seiti.view.board_scene import BoardScene
from seiti.view.board_view import BoardView

logger = logging.getLogger(__name__)


def counts_text(board: Optional[BoardSnapshot]) -> str:
    if board is None:
        return ""
    counts = count_territory(board)
    return f"Black territory: {counts.black} / White territory: {counts.white}"


class MainWindow(QMainWindow):
    def __init__(self, session: BoardSession) -> None:
        super().__init__()
        self.session = session
        self.store = session.store
        self.choreographer = session.choreographer

        self.setWindowTitle(VISIBLE_APP_NAME)
        self.resize(1200, 700)

        main_widget = QWidget()
        self.setCentralWidget(main_widget)
        main_layout = QVBoxLayout(main_widget)

        # --- 1. CONTROLS ---
        controls = QHBoxLayout()
        self.btn_generate = QPushButton("Generate board")
        self.btn_generate.clicked.connect(self.session.generate)
        controls.addWidget(self.btn_generate)

        self.btn_level = QPushButton("Level")
        self.btn_level.clicked.connect(self.session.level)
        controls.addWidget(self.btn_level)

        self.btn_replay = QPushButton("Replay")
        self.btn_replay.clicked.connect(self.session.replay)
        controls.addWidget(self.btn_replay)

        self.lbl_counts = QLabel("")
        controls.addWidget(self.lbl_counts)
        controls.addStretch()
        main_layout.addLayout(controls)

        # --- 2. BOARD PANES ---
        panes = QHBoxLayout()

        self.before_scene = BoardScene(parent=self)
        self.before_view = BoardView(self.before_scene)
        panes.addLayout(self._pane("Generated board", self.before_view), 1)

        self.after_scene = BoardScene(parent=self)
        self.after_view = BoardView(self.after_scene)
        self.lbl_hint = QLabel("Not leveled yet (press Level).")
        self.lbl_hint.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.after_stack = QStackedWidget()
        self.after_stack.addWidget(self.lbl_hint)  # Index 0
        self.after_stack.addWidget(self.after_view)  # Index 1
        self.lbl_after_title = QLabel("Leveled board")
        panes.addLayout(self._pane(self.lbl_after_title, self.after_stack), 1)

        main_layout.addLayout(panes, 1)

        self.setStatusBar(QStatusBar())

        # --- SIGNAL CONNECTIONS ---
        self.store.board_changed.connect(self.on_board_changed)
        self.store.leveled_changed.connect(self.on_leveled_changed)
        self.store.status_changed.connect(self.on_status_changed)
        self.choreographer.phase_changed.connect(self.on_phase_changed)
        self.choreographer.commit_requested.connect(self.after_scene.apply_destinations)

        self.on_board_changed(self.store.board)
        self.on_leveled_changed(self.store.leveled_board)
        self.update_buttons()

    @staticmethod
    def _pane(title: str | QLabel, body: QWidget) -> QVBoxLayout:
        layout = QVBoxLayout()
        label = title if isinstance(title, QLabel) else QLabel(title)
        label.setStyleSheet("font-weight: bold;")
        layout.addWidget(label)
        layout.addWidget(body, 1)
        return layout

    # --- SLOTS ---

    def on_board_changed(self, board: Optional[BoardSnapshot]) -> None:
        self.before_scene.set_projection(project(board, None, MoveIndex.EMPTY, AnimationPhase.IDLE))
        self.lbl_counts.setText(counts_text(board))
        if board is not None:
            save_last_seed(self.store.seed)
        self.update_buttons()

    def on_leveled_changed(self, board: Optional[BoardSnapshot]) -> None:
        self.after_stack.setCurrentIndex(0 if board is None else 1)
        self.lbl_after_title.setText("Leveled board" if board is None else f"Leveled board ({counts_text(board)})")
        self.refresh_leveled_pane()
        self.update_buttons()

    def on_phase_changed(self, phase: int) -> None:
        self.refresh_leveled_pane()
        self.update_buttons()

    def on_status_changed(self, status: Status) -> None:
        if status is Status.LOADING:
            self.statusBar().showMessage("Waiting for the board service...")
        elif status is Status.ERROR:
            self.statusBar().showMessage(f"Board service error: {self.store.last_error}")
        else:
            self.statusBar().clearMessage()
        self.update_buttons()

    def refresh_leveled_pane(self) -> None:
        """Re-project the leveled pane for the current boards and phase."""
        projection = project(
            self.store.leveled_board,
            self.store.board,
            self.store.move_index,
            self.choreographer.phase,
        )
        self.after_scene.set_projection(projection)

    def update_buttons(self) -> None:
        loading = self.store.status is Status.LOADING
        self.btn_generate.setEnabled(not loading)
        self.btn_level.setEnabled(not loading and self.store.board is not None)
        self.btn_replay.setEnabled(
            not loading and self.store.can_replay() and not self.choreographer.is_busy
        )

    def closeEvent(self, event: QCloseEvent) -> None:
        self.session.shutdown()
        super().closeEvent(event)
