"""
Configuration & Constants
=========================
This module serves as the central registry for board geometry, animation
timing and the board service location.

Why is this file needed?
------------------------
1. Abstraction: It prevents magic numbers (board size, timer delays, port)
   scattered throughout the code.
2. Deployment: It resolves the board service URL from the command line or the
   environment, so the same build works against a local or a remote backend.

Exports:
    BOARD_SIZE (int): Edge length the rendering surface is built for.
    ANIMATION_DELAY_MS (int): How long the pre-transition board is shown.
    ANIMATION_DURATION_MS (int): How long the transition phase lasts.
    DEFAULT_SERVICE_URL (str): Where the board service listens by default.
"""
from __future__ import annotations

import os

# Board geometry
BOARD_SIZE: int = 19
STONE_RADIUS: float = 0.46
STAR_POINT_RADIUS: float = 0.18

# Animation timing (milliseconds)
ANIMATION_DELAY_MS: int = 1000  # before-board display time
ANIMATION_DURATION_MS: int = 900  # time for the transition to complete
COMMIT_TICK_MS: int = 10  # lets the surface commit origin positions first
STONE_TRANSITION_MS: int = 800  # easing duration of a single stone

# Board service
DEFAULT_SEED: int = 1
DEFAULT_SERVICE_URL: str = "http://127.0.0.1:3000"
SERVICE_URL_ENV: str = "SEITI_SERVICE_URL"
DEFAULT_TIMEOUT_S: float = 30.0


def star_points(size: int) -> list[tuple[int, int]]:
    """
    Hoshi coordinates for the given board size.

    Args:
        size: Board edge length.

    Returns:
        List of (x, y) intersections, empty for boards too small to have any.
    """
    if size < 7:
        return []
    edge = 2 if size < 13 else 3
    lines = [edge, size - 1 - edge]
    if size % 2 == 1 and size >= 9:
        lines.insert(1, size // 2)
    return [(x, y) for y in lines for x in lines]


def get_service_url(cli_value: str | None = None) -> str:
    """Resolve the board service URL: CLI value, then environment, then default."""
    url = cli_value or os.environ.get(SERVICE_URL_ENV) or DEFAULT_SERVICE_URL
    return url.rstrip("/")
