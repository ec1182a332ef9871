"""CLI entry point for the Grow API server."""

import argparse
import os

from grow.config import settings


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="grow-server",
        description="Grow API server: project discovery, participation and skills",
    )
    parser.add_argument("--host", default=settings.host, help=f"Bind host (default: {settings.host})")
    parser.add_argument("--port", type=int, default=settings.port, help=f"Bind port (default: {settings.port})")
    parser.add_argument(
        "--local",
        action="store_true",
        help="Local dev mode: SQLite database with tables created on startup",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)

    # Read by Settings when grow.main is imported by uvicorn
    if args.local:
        os.environ["GROW_LOCAL_MODE"] = "1"

    import uvicorn

    uvicorn.run("grow.main:app", host=args.host, port=args.port, log_level=settings.log_level)


if __name__ == "__main__":
    main()
