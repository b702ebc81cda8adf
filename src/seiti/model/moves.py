"""
Move Index
==========
Two read-only lookups over one move list: by origin and by destination.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import ClassVar, Iterable, Mapping

from seiti.model.board import Move
from seiti.model.coords import Coordinate

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MoveIndex:
    """
    Coordinate-keyed views of a move list.

    The same board cell is a move's origin when read from the before-board and
    a different cell is its destination when read from the after-board, so the
    projection needs both directions. Build a new index whenever the move list
    changes; an index is never updated in place.
    """
    moves: tuple[Move, ...]
    by_origin: Mapping[Coordinate, Move]
    by_destination: Mapping[Coordinate, Move]

    EMPTY: ClassVar[MoveIndex]

    @classmethod
    def from_moves(cls, moves: Iterable[Move]) -> MoveIndex:
        moves = tuple(moves)
        by_origin: dict[Coordinate, Move] = {}
        by_destination: dict[Coordinate, Move] = {}
        for move in moves:
            # Shared keys: the last move wins
            by_origin[move.origin] = move
            by_destination[move.destination] = move

        collisions = (len(moves) - len(by_origin)) + (len(moves) - len(by_destination))
        if collisions:
            logger.debug(f"Move index built with {collisions} colliding key(s); last move wins.")

        return cls(
            moves=moves,
            by_origin=MappingProxyType(by_origin),
            by_destination=MappingProxyType(by_destination),
        )

    def lookup_origin(self, coord: tuple[int, int]) -> Move | None:
        return self.by_origin.get(Coordinate(*coord))

    def lookup_destination(self, coord: tuple[int, int]) -> Move | None:
        return self.by_destination.get(Coordinate(*coord))

    def __len__(self) -> int:
        return len(self.moves)

    def __bool__(self) -> bool:
        return bool(self.moves)


MoveIndex.EMPTY = MoveIndex.from_moves(())
