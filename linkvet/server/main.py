"""Standalone check server process.

Run:
  python -m linkvet.server.main
"""

from __future__ import annotations

import asyncio
import logging
import signal
import sys

from ..config import Config, load_config, validate_config
from ..pipeline.check import LinkChecker
from .app import CheckServer

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)
logger = logging.getLogger(__name__)


async def run_server(config: Config | None = None) -> None:
    config = config or load_config()
    errors = validate_config(config)
    if errors:
        for error in errors:
            logger.error("Configuration error: %s", error)
        raise SystemExit(1)

    server = CheckServer(LinkChecker.from_config(config), host=config.host, port=config.port)

    stop_event = asyncio.Event()

    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, stop_event.set)
        except NotImplementedError:
            # Windows event loop does not support add_signal_handler.
            pass

    await server.start()
    logger.info("LinkVet running on http://%s:%s", config.host, config.port)
    try:
        await stop_event.wait()
    finally:
        await server.stop()


def main() -> None:
    asyncio.run(run_server())


if __name__ == "__main__":
    main()
