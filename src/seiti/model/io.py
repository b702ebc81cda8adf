"""
Wire Format
Converts board service JSON payloads to and from model objects.

Shapes:
    BoardState: {"size": 19, "seed": 1, "stones": [...], "territory": [...]}
    StoneMove:  {"color": 1, "from": [x, y], "to": [x, y]}
    LevelResp:  {"board": BoardState, "moves": [StoneMove, ...]}
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping

from seiti.model.board import BoardSnapshot, Move, Stone

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LevelResult:
    """Leveled board plus the stone relocations that produced it."""
    board: BoardSnapshot
    moves: tuple[Move, ...]


def _require(obj: Mapping[str, Any], key: str, what: str) -> Any:
    if not isinstance(obj, Mapping):
        raise ValueError(f"{what} must be a JSON object, got {type(obj).__name__}.")
    if key not in obj:
        raise ValueError(f"{what} is missing '{key}'.")
    return obj[key]


def _pair(value: Any, what: str) -> tuple[int, int]:
    try:
        x, y = value
        return int(x), int(y)
    except (TypeError, ValueError) as e:
        raise ValueError(f"{what} must be an [x, y] pair, got {value!r}.") from e


def board_from_dict(data: Mapping[str, Any]) -> BoardSnapshot:
    size = int(_require(data, "size", "BoardState"))
    stones = _require(data, "stones", "BoardState")
    territory = _require(data, "territory", "BoardState")
    seed = int(data.get("seed", 0))
    return BoardSnapshot(size=size, stones=stones, territory=territory, seed=seed)


def board_to_dict(board: BoardSnapshot) -> dict[str, Any]:
    return {
        "size": int(board.size),
        "seed": int(board.seed),
        "stones": board.stones.tolist(),
        "territory": board.territory.tolist(),
    }


def move_from_dict(data: Mapping[str, Any]) -> Move:
    color = int(_require(data, "color", "StoneMove"))
    origin = _pair(_require(data, "from", "StoneMove"), "StoneMove.from")
    destination = _pair(_require(data, "to", "StoneMove"), "StoneMove.to")
    return Move(color=Stone(color), origin=origin, destination=destination)


def move_to_dict(move: Move) -> dict[str, Any]:
    return {
        "color": int(move.color),
        "from": [move.origin.x, move.origin.y],
        "to": [move.destination.x, move.destination.y],
    }


def level_result_from_dict(data: Mapping[str, Any]) -> LevelResult:
    board = board_from_dict(_require(data, "board", "LevelResp"))
    raw_moves = _require(data, "moves", "LevelResp")
    if not isinstance(raw_moves, list):
        raise ValueError(f"LevelResp.moves must be a list, got {type(raw_moves).__name__}.")
    moves = tuple(move_from_dict(m) for m in raw_moves)
    logger.debug(f"Decoded leveled board with {len(moves)} moves.")
    return LevelResult(board=board, moves=moves)
