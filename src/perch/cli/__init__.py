"""Perch CLI — serve a directory or a dispatcher.

Entry point registered as ``perch`` in ``pyproject.toml``::

    [project.scripts]
    perch = "perch.cli:main"
"""

import argparse
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``perch`` command."""
    parser = argparse.ArgumentParser(
        prog="perch",
        description="Perch — a minimal HTTP request dispatcher.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- perch serve ------------------------------------------------------
    serve_parser = subparsers.add_parser("serve", help="Serve a directory or a dispatcher")
    serve_parser.add_argument(
        "directory",
        nargs="?",
        default=None,
        help="Base directory for static files (default: the dispatcher's, or '.')",
    )
    serve_parser.add_argument(
        "--app",
        default=None,
        help="Import string of a Dispatcher (e.g. myapp:dispatcher)",
    )
    serve_parser.add_argument("--host", default=None, help="Bind host address")
    serve_parser.add_argument("--port", type=int, default=None, help="Bind port number")
    serve_parser.add_argument(
        "--log-level",
        default=None,
        choices=("debug", "info", "warning", "error"),
        help="Logging level (default: the dispatcher config)",
    )

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "serve":
        from perch.cli._serve import serve

        serve(args)
