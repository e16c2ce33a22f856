"""Serving a dispatcher over HTTP with pounce.

Pounce's ``run()`` takes an import string (e.g. ``"myapp:dispatcher"``),
but the host usually holds a live ``Dispatcher``. We use
``pounce.Server`` directly with the ASGI callable.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from perch.dispatcher import Dispatcher

logger = logging.getLogger("perch.server")

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str) -> None:
    """Send ``perch.*`` records to stderr at *level*.

    A no-op for the root handler when the host already configured
    logging; the level is still applied to the ``perch`` logger.
    """
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
    logging.getLogger("perch").setLevel(level.upper())


def run_server(dispatcher: Dispatcher, host: str, port: int, log_level: str = "info") -> None:
    """Start a single-worker pounce server for *dispatcher*.

    One worker keeps every request on one event loop, so route tables
    and the base directory are never touched from two threads.

    Args:
        dispatcher: ASGI callable (perch Dispatcher instance).
        host: Bind host address.
        port: Bind port number.
        log_level: Passed through to pounce's own logging.
    """
    from pounce.config import ServerConfig
    from pounce.server import Server

    config = ServerConfig(host=host, port=port, workers=1, reload=False, log_level=log_level)
    logger.info("Server is listening on %s:%d", host, port)
    Server(config, dispatcher).run()
