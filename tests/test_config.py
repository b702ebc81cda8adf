"""Tests for configuration helpers."""

import pytest

from seiti.config import DEFAULT_SERVICE_URL, SERVICE_URL_ENV, get_service_url, star_points


class TestStarPoints:
    def test_full_board(self) -> None:
        points = star_points(19)
        assert len(points) == 9
        assert {x for x, _ in points} == {3, 9, 15}
        assert (9, 9) in points

    def test_small_boards(self) -> None:
        assert sorted(star_points(9)) == sorted([(x, y) for x in (2, 4, 6) for y in (2, 4, 6)])
        assert sorted(star_points(13)) == sorted([(x, y) for x in (3, 6, 9) for y in (3, 6, 9)])

    def test_even_board_has_no_centre(self) -> None:
        assert star_points(10) == [(2, 2), (7, 2), (2, 7), (7, 7)]

    @pytest.mark.parametrize("size", [1, 5, 6])
    def test_too_small(self, size) -> None:
        assert star_points(size) == []


class TestServiceUrl:
    def test_default(self, monkeypatch) -> None:
        monkeypatch.delenv(SERVICE_URL_ENV, raising=False)
        assert get_service_url() == DEFAULT_SERVICE_URL

    def test_environment(self, monkeypatch) -> None:
        monkeypatch.setenv(SERVICE_URL_ENV, "http://remote:8080/")
        assert get_service_url() == "http://remote:8080"

    def test_command_line_wins(self, monkeypatch) -> None:
        monkeypatch.setenv(SERVICE_URL_ENV, "http://remote:8080")
        assert get_service_url("http://cli:1") == "http://cli:1"
