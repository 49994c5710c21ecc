"""CLI entry point for launching the FastAPI app with uvicorn."""

from __future__ import annotations

import argparse
from typing import List, Optional

import uvicorn

from .dependencies import get_config


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    server = get_config().server
    parser = argparse.ArgumentParser(description="Run the todo lists web server.")
    parser.add_argument(
        "--host",
        default=server.host,
        help=f"Interface to bind (default: {server.host})",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=server.port,
        help=f"Port to listen on (default: {server.port})",
    )
    parser.add_argument(
        "--reload",
        action="store_true",
        default=server.reload,
        help="Restart the server when source files change",
    )
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> None:
    """Run the server."""
    args = parse_args(argv)
    uvicorn.run(
        "src.server.app:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        reload_dirs=["src"] if args.reload else None,
    )


if __name__ == "__main__":
    main()
