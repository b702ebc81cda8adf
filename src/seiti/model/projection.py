"""
Board Projection
================
Turns board snapshots, the move index and the current animation phase into
render-ready markers.

Why is this file needed?
------------------------
1. Purity: The rendering surface only places what it is given. Every decision
   about which board to read stones from, and which stones belong to a move,
   is made here, without Qt.
2. Testability: The same inputs always give the same markers, so every phase
   of a replay can be checked without a live scene.

Classes:
    AnimationPhase: Idle / Pending / Animating.
    StoneMarker, TerritoryMarker: One drawable stone or territory tint.
    Projection: The marker lists for one render.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import IntEnum
from typing import ClassVar, Optional

from seiti.config import BOARD_SIZE
from seiti.model.board import BoardSnapshot, Move, Stone, Territory
from seiti.model.coords import Coordinate, occupied_cells
from seiti.model.moves import MoveIndex

logger = logging.getLogger(__name__)


class AnimationPhase(IntEnum):
    """Stage of a replay."""
    IDLE = 0
    PENDING = 1
    ANIMATING = 2

    @property
    def reads_before_board(self) -> bool:
        return self is not AnimationPhase.IDLE


@dataclass(frozen=True)
class StoneMarker:
    position: Coordinate
    color: Stone
    move: Optional[Move] = None
    is_transitioning: bool = False

    @property
    def key(self) -> Coordinate:
        """Coordinate the marker was looked up by; identifies its graphic item."""
        return self.position


@dataclass(frozen=True)
class TerritoryMarker:
    position: Coordinate
    owner: Territory


@dataclass(frozen=True)
class Projection:
    stone_markers: tuple[StoneMarker, ...] = ()
    territory_markers: tuple[TerritoryMarker, ...] = ()

    EMPTY: ClassVar[Projection]

    def transitioning(self) -> list[StoneMarker]:
        return [m for m in self.stone_markers if m.is_transitioning]


Projection.EMPTY = Projection()


def project(
    primary: BoardSnapshot | None,
    counterpart: BoardSnapshot | None,
    move_index: MoveIndex,
    phase: AnimationPhase,
    expected_size: int = BOARD_SIZE,
) -> Projection:
    """
    Compute stone and territory markers for one render.

    Args:
        primary: The board this pane shows when no replay runs (the after-board).
        counterpart: The before-board, read for stones while a replay runs.
        move_index: Index over the moves between counterpart and primary.
        phase: Current animation phase.
        expected_size: Board size the rendering surface is built for.

    Returns:
        A Projection; empty when there is no primary board or its size does
        not match the rendering surface.
    """
    if primary is None:
        return Projection.EMPTY
    if primary.size != expected_size:
        logger.warning(f"Board size {primary.size} does not match rendering size {expected_size}; drawing nothing.")
        return Projection.EMPTY

    size = primary.size
    phase = AnimationPhase(phase)

    # 1. Territory belongs to the leveled result and never animates
    territory_markers = tuple(
        TerritoryMarker(position=coord, owner=Territory(value))
        for coord, value in occupied_cells(primary.territory, size)
    )

    # 2. During a replay, start from the before-board
    replaying = phase.reads_before_board
    source = primary
    if replaying and counterpart is not None and counterpart.size == size:
        source = counterpart
    lookup = move_index.by_origin if replaying else move_index.by_destination

    # 3./4. Associate stones with moves, flag the ones in flight
    stone_markers: list[StoneMarker] = []
    for coord, value in occupied_cells(source.stones, size):
        move = lookup.get(coord)
        transitioning = phase is AnimationPhase.ANIMATING and move is not None
        stone_markers.append(
            StoneMarker(
                position=move.origin if transitioning else coord,
                color=Stone(value),
                move=move,
                is_transitioning=transitioning,
            )
        )

    return Projection(stone_markers=tuple(stone_markers), territory_markers=territory_markers)
