"""LinkVet command line.

  linkvet check URL [--context TEXT]
  linkvet serve [--host HOST] [--port PORT]
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys

from .config import load_config
from .errors import InputError, ResolutionError
from .pipeline.check import LinkChecker

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="linkvet", description="Score a link for phishing risk")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    check = sub.add_parser("check", help="Check a single URL and print the result as JSON")
    check.add_argument("url")
    check.add_argument("--context", default=None, help="Message text the link appeared in")

    serve = sub.add_parser("serve", help="Run the HTTP API")
    serve.add_argument("--host", default=None)
    serve.add_argument("--port", type=int, default=None)
    return parser


async def _run_check(url: str, context: str | None) -> dict:
    checker = LinkChecker.from_config(load_config())
    result = await checker.check(url, context)
    return result.to_dict()


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    if args.verbose:
        level = logging.DEBUG
    elif args.command == "serve":
        level = logging.INFO
    else:
        level = logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
    )

    if args.command == "serve":
        from .server.main import run_server

        config = load_config()
        if args.host:
            config.host = args.host
        if args.port:
            config.port = args.port
        asyncio.run(run_server(config))
        return 0

    try:
        payload = asyncio.run(_run_check(args.url, args.context))
    except InputError as exc:
        print(f"error: {exc.message}", file=sys.stderr)
        return 2
    except ResolutionError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    print(json.dumps(payload, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
