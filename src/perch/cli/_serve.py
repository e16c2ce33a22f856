"""``perch serve`` — start serving a directory or a dispatcher."""

import argparse
import dataclasses
import sys

from perch.cli._resolve import resolve_dispatcher
from perch.config import ServerConfig
from perch.dispatcher import Dispatcher


def build_dispatcher(args: argparse.Namespace) -> Dispatcher:
    """Resolve ``--app`` or build a static-only dispatcher.

    A ``directory`` argument overrides the resolved dispatcher's base
    directory; its routes carry over.
    """
    if args.app is None:
        return Dispatcher(ServerConfig(base_dir=args.directory or "."))

    dispatcher = resolve_dispatcher(args.app)
    if args.directory is None:
        return dispatcher

    config = dataclasses.replace(dispatcher.config, base_dir=args.directory)
    return Dispatcher(
        config,
        routes=dispatcher.dynamic_router.routes,
        direct_routes=dispatcher.direct_table.routes,
        cors=dispatcher.cors,
    )


def serve(args: argparse.Namespace) -> None:
    """Run the dispatcher until interrupted; ``--log-level`` overrides its config."""
    try:
        dispatcher = build_dispatcher(args)
    except (ModuleNotFoundError, AttributeError, TypeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    dispatcher.run(host=args.host, port=args.port, log_level=args.log_level)
