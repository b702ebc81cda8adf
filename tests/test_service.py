"""Tests for the board service HTTP client against a stubbed requests session."""

import json

import pytest
import requests

from conftest import make_board
from seiti.controller.service import (
    GENERATE_PATH, HEALTH_PATH, LEVEL_PATH, BoardServiceClient, BoardServiceError
)
from seiti.model.board import Stone

BASE = "http://board.test:3000"


class FakeResponse:
    def __init__(self, status_code: int = 200, payload=None, text: str = None, reason: str = "OK") -> None:
        self.status_code = status_code
        self.reason = reason
        self._payload = payload
        self.text = text if text is not None else json.dumps(payload)

    @property
    def ok(self) -> bool:
        return self.status_code < 400

    def json(self):
        if self._payload is None:
            return json.loads(self.text)
        return self._payload


class FakeSession:
    """Records calls and answers with queued responses (or raises queued exceptions)."""

    def __init__(self, *responses) -> None:
        self.responses = list(responses)
        self.calls = []

    def _next(self):
        item = self.responses.pop(0)
        if isinstance(item, Exception):
            raise item
        return item

    def post(self, url, json=None, timeout=None):
        self.calls.append(("POST", url, json, timeout))
        return self._next()

    def get(self, url, timeout=None):
        self.calls.append(("GET", url, None, timeout))
        return self._next()


def _board_payload(size: int = 19, seed: int = 3) -> dict:
    stones = [0] * (size * size)
    stones[0] = 1
    return {"size": size, "seed": seed, "stones": stones, "territory": [0] * (size * size)}


def _client(*responses) -> tuple[BoardServiceClient, FakeSession]:
    session = FakeSession(*responses)
    return BoardServiceClient(BASE + "/", timeout=5.0, session=session), session


class TestGenerate:
    def test_posts_seed_and_parses_board(self) -> None:
        client, session = _client(FakeResponse(payload=_board_payload(seed=3)))
        board = client.generate(3)
        assert session.calls == [("POST", BASE + GENERATE_PATH, {"seed": 3}, 5.0)]
        assert board.seed == 3
        assert board.stone_at((0, 0)) is Stone.BLACK

    def test_http_error_carries_status_and_message(self) -> None:
        client, _ = _client(FakeResponse(500, payload={"error": "generator exploded"}, reason="Internal Server Error"))
        with pytest.raises(BoardServiceError, match="generator exploded") as exc_info:
            client.generate(1)
        assert exc_info.value.status_code == 500

    def test_http_error_with_plain_body(self) -> None:
        client, _ = _client(FakeResponse(502, text="bad gateway", reason="Bad Gateway"))
        with pytest.raises(BoardServiceError, match="502 Bad Gateway: bad gateway"):
            client.generate(1)

    def test_connection_error(self) -> None:
        client, _ = _client(requests.ConnectionError("refused"))
        with pytest.raises(BoardServiceError, match="failed"):
            client.generate(1)

    def test_invalid_json(self) -> None:
        client, _ = _client(FakeResponse(text="<html>"))
        with pytest.raises(BoardServiceError, match="Invalid JSON"):
            client.generate(1)

    def test_malformed_board(self) -> None:
        client, _ = _client(FakeResponse(payload={"size": 19}))
        with pytest.raises(BoardServiceError, match="Malformed board"):
            client.generate(1)


class TestLevel:
    def test_posts_board_and_parses_moves(self) -> None:
        payload = {
            "board": _board_payload(),
            "moves": [{"color": 1, "from": [0, 0], "to": [5, 5]}],
        }
        client, session = _client(FakeResponse(payload=payload))
        board = make_board(stones={(0, 0): Stone.BLACK}, seed=3)

        result = client.level(board)

        method, url, body, _ = session.calls[0]
        assert (method, url) == ("POST", BASE + LEVEL_PATH)
        assert body["board"]["seed"] == 3
        assert body["board"]["stones"][0] == 1
        assert len(result.moves) == 1
        assert result.moves[0].destination == (5, 5)

    def test_malformed_response(self) -> None:
        client, _ = _client(FakeResponse(payload={"board": _board_payload(), "moves": "nope"}))
        with pytest.raises(BoardServiceError, match="Malformed level response"):
            client.level(make_board())


class TestHealth:
    def test_ok(self) -> None:
        client, session = _client(FakeResponse(text="ok\n"))
        assert client.health() is True
        assert session.calls[0][:2] == ("GET", BASE + HEALTH_PATH)

    def test_unexpected_body(self) -> None:
        client, _ = _client(FakeResponse(text="starting"))
        assert client.health() is False

    def test_unreachable(self) -> None:
        client, _ = _client(requests.ConnectionError("refused"))
        assert client.health() is False
