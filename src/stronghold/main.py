"""Command line entrypoint: play in the console or serve the HTTP API."""

from __future__ import annotations

import argparse
import logging

import uvicorn

from stronghold.config import get_settings


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="stronghold", description="Rule your medieval kingdom")
    commands = parser.add_subparsers(dest="command")

    commands.add_parser("play", help="Play a kingdom in the interactive console (default)")

    serve = commands.add_parser("serve", help="Run the Stronghold API server")
    serve.add_argument("--host", default="127.0.0.1", help="Host interface to bind")
    serve.add_argument("--port", type=int, default=8000, help="TCP port to listen on")
    serve.add_argument(
        "--reload",
        action="store_true",
        help="Enable autoreload (dev mode)",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "serve":
        uvicorn.run(
            "stronghold.api.app:create_app",
            host=args.host,
            port=args.port,
            reload=args.reload,
            factory=True,
        )
        return 0

    from stronghold.console import start_console

    try:
        start_console(settings=settings)
    except (EOFError, KeyboardInterrupt):
        print()
    return 0


if __name__ == "__main__":  # pragma: no cover - manual launch helper
    raise SystemExit(main())
