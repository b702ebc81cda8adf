"""
Coordinate Indexer
Converts between row-major cell indices and (x, y) board coordinates.
"""
from __future__ import annotations

from typing import Iterator, NamedTuple, Sequence

import numpy as np


class Coordinate(NamedTuple):
    """Board intersection, 0 <= x, y < size."""
    x: int
    y: int


def index_to_coordinate(i: int, size: int) -> Coordinate:
    """Row-major index -> (x, y)."""
    y, x = divmod(int(i), size)
    return Coordinate(x, y)


def coordinate_to_index(coord: tuple[int, int], size: int) -> int:
    """(x, y) -> row-major index."""
    x, y = coord
    return y * size + x


def occupied_cells(values: Sequence[int] | np.ndarray, size: int) -> Iterator[tuple[Coordinate, int]]:
    """
    Yield the coordinate and value of every non-zero cell.

    Args:
        values: Flat row-major sequence of length size*size.
        size: Board edge length.

    Returns:
        Iterator over (coordinate, value) pairs in row-major order.
    """
    arr = np.asarray(values)
    for i in np.flatnonzero(arr):
        yield index_to_coordinate(i, size), int(arr[i])
