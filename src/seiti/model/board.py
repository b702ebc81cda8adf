"""
Board Data Model
================
Immutable board snapshots and the stone relocations between two of them.

Classes:
    Stone: Cell occupant (empty/black/white).
    Territory: Cell ownership (none/black/white).
    BoardSnapshot: One board state as produced by the board service.
    Move: A stone moved from an origin to a destination by leveling.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import NamedTuple, Sequence, TYPE_CHECKING

import numpy as np

from seiti.model.coords import Coordinate, coordinate_to_index

if TYPE_CHECKING:
    import numpy.typing as npt

__all__ = [
    "Stone", "Territory", "Coordinate", "BoardSnapshot", "Move",
    "TerritoryCounts", "count_territory",
]


class Stone(IntEnum):
    EMPTY = 0
    BLACK = 1
    WHITE = 2


class Territory(IntEnum):
    NONE = 0
    BLACK = 1
    WHITE = 2


def _frozen_cells(values: Sequence[int] | npt.NDArray, allowed: type[IntEnum], what: str) -> npt.NDArray[np.uint8]:
    arr = np.array(values, dtype=np.int64).reshape(-1)
    valid = {int(v) for v in allowed}
    if arr.size and not np.isin(arr, list(valid)).all():
        bad = sorted(set(arr.tolist()) - valid)
        raise ValueError(f"Unknown {what} value(s): {bad}")
    out = arr.astype(np.uint8)
    out.setflags(write=False)
    return out


@dataclass(frozen=True, eq=False)
class BoardSnapshot:
    """
    One board state: stones and territory, both row-major (i = y*size + x).

    The arrays are copied on construction and made read-only, so a snapshot
    never changes once produced.
    """
    size: int
    stones: npt.NDArray[np.uint8]
    territory: npt.NDArray[np.uint8]
    seed: int = 0

    def __post_init__(self) -> None:
        if self.size <= 0:
            raise ValueError(f"Board size must be positive, got {self.size}.")
        stones = _frozen_cells(self.stones, Stone, "stone")
        territory = _frozen_cells(self.territory, Territory, "territory")
        n = self.size * self.size
        if stones.size != n or territory.size != n:
            raise ValueError(
                f"Expected {n} cells for size {self.size}, "
                f"got {stones.size} stones and {territory.size} territory cells."
            )
        object.__setattr__(self, "stones", stones)
        object.__setattr__(self, "territory", territory)

    @classmethod
    def empty(cls, size: int, seed: int = 0) -> BoardSnapshot:
        n = size * size
        return cls(size=size, stones=np.zeros(n, np.uint8), territory=np.zeros(n, np.uint8), seed=seed)

    def stone_at(self, coord: tuple[int, int]) -> Stone:
        return Stone(int(self.stones[coordinate_to_index(coord, self.size)]))

    def territory_at(self, coord: tuple[int, int]) -> Territory:
        return Territory(int(self.territory[coordinate_to_index(coord, self.size)]))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BoardSnapshot):
            return NotImplemented
        return (
            self.size == other.size
            and self.seed == other.seed
            and np.array_equal(self.stones, other.stones)
            and np.array_equal(self.territory, other.territory)
        )

    __hash__ = None  # type: ignore[assignment]


@dataclass(frozen=True)
class Move:
    """A stone relocated by the leveling algorithm (wire names: from/to)."""
    color: Stone
    origin: Coordinate
    destination: Coordinate

    def __post_init__(self) -> None:
        if self.color not in (Stone.BLACK, Stone.WHITE):
            raise ValueError(f"Move colour must be black or white, got {self.color!r}.")
        object.__setattr__(self, "color", Stone(self.color))
        object.__setattr__(self, "origin", Coordinate(*map(int, self.origin)))
        object.__setattr__(self, "destination", Coordinate(*map(int, self.destination)))


class TerritoryCounts(NamedTuple):
    black: int
    white: int


def count_territory(snapshot: BoardSnapshot) -> TerritoryCounts:
    """Number of black and white territory cells of a snapshot."""
    t = snapshot.territory
    return TerritoryCounts(
        black=int(np.count_nonzero(t == Territory.BLACK)),
        white=int(np.count_nonzero(t == Territory.WHITE)),
    )
