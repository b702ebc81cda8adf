"""
Application Initialization
==========================
This module wires the state store, the board service client, the session
and the main window together and starts the Qt Event Loop.

Why is this file needed?
------------------------
It acts as the "Dependency Injection" root. It:
1. Parses the command line and sets up logging.
2. Instantiates the state store (BoardStore) and the service client.
3. Passes both into the session, and the session into the window.
4. Fetches the first board and runs the event loop.
"""
from __future__ import annotations

import argparse
import logging
from typing import Optional, Sequence

from seiti.app.application import create_app, load_last_seed
from seiti.app.state import BoardStore
from seiti.config import DEFAULT_SEED, DEFAULT_TIMEOUT_S, get_service_url
from seiti.controller.service import BoardServiceClient
from seiti.controller.session import BoardSession
from seiti.logging_config import setup_logging
from seiti.view.main_window import MainWindow

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="seiti", description="Go board leveling viewer")
    parser.add_argument("--service-url", default=None, help="Board service base URL (default: $SEITI_SERVICE_URL or localhost:3000)")
    parser.add_argument("--seed", type=int, default=None, help="Seed of the first board (default: last used seed)")
    parser.add_argument("--timeout", type=float, default=DEFAULT_TIMEOUT_S, help="Request timeout in seconds")
    parser.add_argument("--debug", action="store_true", help="Verbose logging")
    parser.add_argument("--log-file", default=None, help="Also write the log to this file")
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)

    # 1. Setup Logging (Console + Optional File)
    setup_logging(level=logging.DEBUG if args.debug else logging.INFO, log_file=args.log_file)

    # 2. Create the Qt Application
    app = create_app()

    # 3. Initialize the state and the board service client
    seed = args.seed if args.seed is not None else load_last_seed(DEFAULT_SEED)
    store = BoardStore(seed=seed)
    service_url = get_service_url(args.service_url)
    client = BoardServiceClient(service_url, timeout=args.timeout)
    if not client.health():
        logger.warning(f"Board service at {service_url} is not reachable; requests will fail until it is up.")

    # 4. Initialize the session and the Main Window
    session = BoardSession(store, client)
    window = MainWindow(session)
    window.show()

    # 5. First board, then the event loop
    session.load_initial()
    return app.exec()


if __name__ == "__main__":
    raise SystemExit(main())
