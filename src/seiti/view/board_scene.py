"""
Board Scene (Rendering Surface)
===============================
Draws a Go board into a QGraphicsScene and places the markers of a Projection.

One scene unit is one grid interval; intersections sit on integer coordinates
0..size-1, with one unit of margin around the board.

Layers (bottom to top):
    background, territory tints (clipped to the board), grid lines,
    star points, border, stones.
"""
from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Mapping, Optional

from PySide6.QtCore import QAbstractAnimation, QEasingCurve, QPointF, QPropertyAnimation, QRectF, Qt
from PySide6.QtGui import QBrush, QColor, QPainter, QPen
from PySide6.QtWidgets import (
    QGraphicsItem, QGraphicsObject, QGraphicsRectItem, QGraphicsScene, QStyleOptionGraphicsItem, QWidget
)

from seiti.config import BOARD_SIZE, STAR_POINT_RADIUS, STONE_RADIUS, STONE_TRANSITION_MS, star_points
from seiti.model.board import Stone, Territory
from seiti.model.coords import Coordinate
from seiti.model.projection import Projection

logger = logging.getLogger(__name__)

BOARD_COLOR = QColor("#DCB35C")
LINE_COLOR = QColor(40, 30, 20)
BLACK_STONE = QColor(20, 20, 20)
WHITE_STONE = QColor(245, 245, 240)
TERRITORY_COLORS = {
    Territory.BLACK: QColor(0, 0, 0, 90),
    Territory.WHITE: QColor(255, 255, 255, 140),
}

Z_BACKGROUND = 0
Z_TERRITORY = 1
Z_GRID = 2
Z_STAR = 3
Z_BORDER = 4
Z_STONE = 10


class StoneItem(QGraphicsObject):
    """A stone circle whose position change can be eased instead of jumping."""

    def __init__(self, color: Stone, parent: Optional[QGraphicsItem] = None) -> None:
        super().__init__(parent)
        self._color = Stone(color)
        self._animation: Optional[QPropertyAnimation] = None
        self._destination: Optional[QPointF] = None
        self.setZValue(Z_STONE)

    @property
    def color(self) -> Stone:
        return self._color

    @property
    def destination(self) -> Optional[QPointF]:
        """Where a running or finished transition ends, None if not moved."""
        return self._destination

    def set_color(self, color: Stone) -> None:
        if color != self._color:
            self._color = Stone(color)
            self.update()

    def place(self, coord: tuple[int, int]) -> None:
        """Put the stone on a coordinate at once, dropping any transition."""
        self.stop_transition()
        self._destination = None
        self.setPos(QPointF(coord[0], coord[1]))

    def move_to(self, coord: tuple[int, int], duration_ms: int) -> None:
        """Ease the stone to a coordinate."""
        self.stop_transition()
        target = QPointF(coord[0], coord[1])
        self._destination = target
        if duration_ms <= 0:
            self.setPos(target)
            return

        anim = QPropertyAnimation(self, b"pos", self)
        anim.setDuration(duration_ms)
        anim.setStartValue(self.pos())
        anim.setEndValue(target)
        anim.setEasingCurve(QEasingCurve.Type.InOutCubic)
        self._animation = anim
        anim.start()

    def finish_transition(self) -> None:
        """Jump a running transition to its end."""
        anim = self._animation
        if anim is None:
            return
        anim.setCurrentTime(anim.duration())
        self.stop_transition()

    def stop_transition(self) -> None:
        anim, self._animation = self._animation, None
        if anim is not None:
            anim.stop()
            anim.deleteLater()

    def is_transitioning(self) -> bool:
        return self._animation is not None and self._animation.state() == QAbstractAnimation.State.Running

    # ---- QGraphicsItem ----

    def boundingRect(self) -> QRectF:
        r = STONE_RADIUS + 0.02
        return QRectF(-r, -r, 2 * r, 2 * r)

    def paint(self, painter: QPainter, option: QStyleOptionGraphicsItem, widget: Optional[QWidget] = None) -> None:
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)
        if self._color == Stone.BLACK:
            painter.setPen(QPen(BLACK_STONE, 0))
            painter.setBrush(QBrush(BLACK_STONE))
        else:
            painter.setPen(QPen(LINE_COLOR, 0))
            painter.setBrush(QBrush(WHITE_STONE))
        painter.drawEllipse(QPointF(0.0, 0.0), STONE_RADIUS, STONE_RADIUS)


class BoardScene(QGraphicsScene):
    def __init__(self, size: int = BOARD_SIZE, transition_ms: int = STONE_TRANSITION_MS, parent=None) -> None:
        super().__init__(parent)
        self.transition_ms = transition_ms

        self._size: Optional[int] = None
        self._static_items: list[QGraphicsItem] = []

        # Territory tints are children of a clip item so edge cells stay on the board
        self._territory_layer = QGraphicsRectItem()
        self._territory_layer.setPen(QPen(Qt.PenStyle.NoPen))
        self._territory_layer.setFlag(QGraphicsItem.GraphicsItemFlag.ItemClipsChildrenToShape, True)
        self._territory_layer.setZValue(Z_TERRITORY)
        self.addItem(self._territory_layer)
        self._territory_items: list[QGraphicsRectItem] = []

        self._stones: dict[Coordinate, StoneItem] = {}
        self._projection: Projection = Projection.EMPTY

        self.draw_grid(size)

    # ------------------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------------------

    @property
    def board_size(self) -> Optional[int]:
        return self._size

    @property
    def projection(self) -> Projection:
        return self._projection

    def stone_items(self) -> Mapping[Coordinate, StoneItem]:
        return MappingProxyType(self._stones)

    def territory_items(self) -> list[QGraphicsRectItem]:
        return list(self._territory_items)

    def draw_grid(self, size: int) -> None:
        """Draw background, lines, star points and border; no-op if the size is unchanged."""
        if size == self._size:
            return
        for item in self._static_items:
            self.removeItem(item)
        self._static_items.clear()
        self._size = size

        last = size - 1
        self.setSceneRect(QRectF(-1, -1, size + 1, size + 1))

        bg = self.addRect(QRectF(-1, -1, size + 1, size + 1), QPen(Qt.PenStyle.NoPen), QBrush(BOARD_COLOR))
        bg.setZValue(Z_BACKGROUND)
        self._static_items.append(bg)

        line_pen = QPen(LINE_COLOR, 0)
        for i in range(size):
            for item in (self.addLine(0, i, last, i, line_pen), self.addLine(i, 0, i, last, line_pen)):
                item.setZValue(Z_GRID)
                self._static_items.append(item)

        star_brush = QBrush(LINE_COLOR)
        r = STAR_POINT_RADIUS
        for x, y in star_points(size):
            star = self.addEllipse(QRectF(x - r, y - r, 2 * r, 2 * r), QPen(Qt.PenStyle.NoPen), star_brush)
            star.setZValue(Z_STAR)
            self._static_items.append(star)

        border_pen = QPen(LINE_COLOR, 0.06)
        border = self.addRect(QRectF(0, 0, last, last), border_pen, QBrush(Qt.BrushStyle.NoBrush))
        border.setZValue(Z_BORDER)
        self._static_items.append(border)

        self._territory_layer.setRect(QRectF(0, 0, last, last))
        logger.debug(f"Grid drawn for size {size}.")

    def set_projection(self, projection: Projection) -> None:
        """
        Show the markers of a projection.

        Stone items are matched by marker key: an item whose key is still
        present is reused (so a later transition animates the same item),
        new keys get new items and vanished keys are removed.
        """
        self._projection = projection
        self._sync_territory(projection)
        self._sync_stones(projection)

    def apply_destinations(self) -> None:
        """Send every transitioning stone of the current projection to its move destination."""
        moved = 0
        for marker in self._projection.transitioning():
            item = self._stones.get(marker.key)
            if item is None or marker.move is None:
                continue
            item.move_to(marker.move.destination, self.transition_ms)
            moved += 1
        logger.debug(f"{moved} stones sent to their destinations.")

    def clear_board(self) -> None:
        self.set_projection(Projection.EMPTY)

    # ------------------------------------------------------------------------------
    # Internal methods
    # ------------------------------------------------------------------------------

    def _sync_territory(self, projection: Projection) -> None:
        for item in self._territory_items:
            self.removeItem(item)
        self._territory_items.clear()

        for marker in projection.territory_markers:
            x, y = marker.position
            item = QGraphicsRectItem(QRectF(x - 0.5, y - 0.5, 1.0, 1.0), self._territory_layer)
            item.setPen(QPen(Qt.PenStyle.NoPen))
            item.setBrush(QBrush(TERRITORY_COLORS[marker.owner]))
            item.setData(0, int(marker.owner))
            self._territory_items.append(item)

    def _sync_stones(self, projection: Projection) -> None:
        seen: set[Coordinate] = set()
        for marker in projection.stone_markers:
            key = marker.key
            item = self._stones.get(key)
            if item is None:
                item = StoneItem(marker.color)
                self.addItem(item)
                self._stones[key] = item
            else:
                item.set_color(marker.color)
            item.place(marker.position)
            seen.add(key)

        for key in [k for k in self._stones if k not in seen]:
            item = self._stones.pop(key)
            item.stop_transition()
            self.removeItem(item)
