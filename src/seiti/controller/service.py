"""
Board Service Client
====================
HTTP client for the external board service that generates and levels boards.

Why is this file needed?
------------------------
1. Boundary: Board generation and leveling live in a separate backend. This
   module is the only place that knows its URLs and JSON shapes.
2. Errors: Every transport, status or payload problem is turned into a single
   BoardServiceError, so callers never commit a half-received board.

Classes:
    BoardServiceClient: generate / level / health requests.
    BoardServiceError: Any failure of the collaborator.
"""
from __future__ import annotations

import logging
from typing import Any, Optional

import requests

from seiti.config import DEFAULT_TIMEOUT_S
from seiti.model.board import BoardSnapshot
from seiti.model.io import LevelResult, board_from_dict, board_to_dict, level_result_from_dict

logger = logging.getLogger(__name__)

GENERATE_PATH = "/api/board/generate"
LEVEL_PATH = "/api/board/level"
HEALTH_PATH = "/health"


class BoardServiceError(RuntimeError):
    """The board service could not produce a usable response."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class BoardServiceClient:
    def __init__(
        self,
        base_url: str,
        timeout: float = DEFAULT_TIMEOUT_S,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    # ------------------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------------------

    def generate(self, seed: int) -> BoardSnapshot:
        """Ask the service for the deterministic board of a seed."""
        logger.info(f"Requesting board for seed {seed}")
        payload = self._post_json(GENERATE_PATH, {"seed": int(seed)})
        try:
            return board_from_dict(payload)
        except (TypeError, ValueError) as e:
            raise BoardServiceError(f"Malformed board from service: {e}") from e

    def level(self, board: BoardSnapshot) -> LevelResult:
        """Ask the service to level a board; returns the leveled board and its moves."""
        logger.info(f"Requesting leveling of board (seed {board.seed})")
        payload = self._post_json(LEVEL_PATH, {"board": board_to_dict(board)})
        try:
            result = level_result_from_dict(payload)
        except (TypeError, ValueError) as e:
            raise BoardServiceError(f"Malformed level response from service: {e}") from e
        logger.info(f"Leveling done: {len(result.moves)} stones moved")
        return result

    def health(self) -> bool:
        """True when the service answers its health probe with 'ok'."""
        try:
            resp = self.session.get(self._url(HEALTH_PATH), timeout=self.timeout)
        except requests.RequestException as e:
            logger.warning(f"Board service health check failed: {e}")
            return False
        return resp.ok and resp.text.strip() == "ok"

    # ------------------------------------------------------------------------------
    # Internal methods
    # ------------------------------------------------------------------------------

    def _url(self, path: str) -> str:
        return f"{self.base_url}{path}"

    def _post_json(self, path: str, body: dict[str, Any]) -> Any:
        url = self._url(path)
        try:
            resp = self.session.post(url, json=body, timeout=self.timeout)
        except requests.RequestException as e:
            raise BoardServiceError(f"Request to {url} failed: {e}") from e

        if not resp.ok:
            raise BoardServiceError(
                f"{resp.status_code} {resp.reason}: {self._error_text(resp)}",
                status_code=resp.status_code,
            )

        try:
            return resp.json()
        except ValueError as e:
            raise BoardServiceError(f"Invalid JSON from {url}: {e}", status_code=resp.status_code) from e

    @staticmethod
    def _error_text(resp: requests.Response) -> str:
        """The service reports failures as {"error": "..."}; fall back to the raw body."""
        try:
            data = resp.json()
        except ValueError:
            return resp.text
        if isinstance(data, dict) and "error" in data:
            return str(data["error"])
        return resp.text
