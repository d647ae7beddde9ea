from __future__ import annotations

import argparse
import logging
from typing import List, Optional

import uvicorn

from ..protocol.console.loop import DEFAULT_COOLDOWN_MS, ConsoleSession, run_console


LOG_LEVELS = ("critical", "error", "warning", "info", "debug")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="pokechess", description="Two-player board game engine")
    sub = parser.add_subparsers(dest="command", required=True)

    serve = sub.add_parser("serve", help="Run the HTTP API")
    serve.add_argument("--host", type=str, default="0.0.0.0", help="Bind address (default: 0.0.0.0)")
    serve.add_argument("--port", type=int, default=8000, help="Port (default: 8000)")
    serve.add_argument("--log-level", choices=LOG_LEVELS, default="info", help="Log level (default: info)")

    console = sub.add_parser("console", help="Play in the terminal")
    console.add_argument(
        "--cooldown-ms",
        type=int,
        default=DEFAULT_COOLDOWN_MS,
        help=f"Input pause after each move in ms (default: {DEFAULT_COOLDOWN_MS})",
    )
    console.add_argument("--log-level", choices=LOG_LEVELS, default="warning", help="Log level (default: warning)")
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=args.log_level.upper())

    if args.command == "serve":
        uvicorn.run(
            "pokechess.protocol.http.app:create_app",
            factory=True,
            host=args.host,
            port=args.port,
            log_level=args.log_level,
        )
    elif args.command == "console":
        if args.cooldown_ms < 0:
            raise SystemExit("--cooldown-ms must be >= 0")
        run_console(ConsoleSession(cooldown_ms=args.cooldown_ms))


if __name__ == "__main__":
    main()
