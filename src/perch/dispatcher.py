"""The request dispatcher.

Mutable during setup (route tables). Frozen at runtime when serving
starts: on lifespan startup or on the first request, whichever comes
first.

Every request takes exactly one branch::

    OPTIONS                -> 204 preflight, no routing
    direct route           -> handler(request, writer)
    dynamic route          -> handler(view, emit)
    anything else          -> static file (default document for "/")
"""

import logging
import threading
from collections.abc import Callable

from perch._internal.asgi import Receive, Scope, Send
from perch._internal.types import Handler, RouteMapping
from perch.config import ServerConfig
from perch.cors import CORSPolicy
from perch.http.request import RawRequest
from perch.http.writer import ResponseWriter
from perch.routing.direct import DirectDispatchTable
from perch.routing.dynamic import DynamicRouter
from perch.server.sender import send_response
from perch.static.sanitize import sanitize, strip_traversal
from perch.static.server import StaticContentServer

logger = logging.getLogger("perch.server")


class Dispatcher:
    """ASGI application that classifies and serves each request.

    Usage::

        dispatcher = Dispatcher(ServerConfig(base_dir="./public"))

        @dispatcher.route("/api/employees")
        def employees(view, emit):
            emit(200, {"name": "John Smith"})

        dispatcher.run()

    Thread safety:
        Route tables are read-only once frozen. The freeze transition
        uses a Lock + double-check so exactly one thread performs it,
        even if several workers see their first request at once.
    """

    __slots__ = (
        "_direct",
        "_dynamic",
        "_freeze_lock",
        "_frozen",
        "_static",
        "config",
        "cors",
    )

    def __init__(
        self,
        config: ServerConfig | None = None,
        *,
        routes: RouteMapping | None = None,
        direct_routes: RouteMapping | None = None,
        cors: CORSPolicy | None = None,
    ) -> None:
        self.config: ServerConfig = config or ServerConfig()
        self.cors: CORSPolicy = cors or CORSPolicy()
        self._dynamic = DynamicRouter(self.cors, routes, timeout=self.config.request_timeout)
        self._direct = DirectDispatchTable(direct_routes)
        self._static = StaticContentServer(
            self.config.base_path,
            self.cors,
            default_document=self.config.default_document,
        )
        self._frozen = False
        self._freeze_lock = threading.Lock()

    # -- Setup --

    def set_allowed_paths(self, routes: RouteMapping) -> None:
        """Replace the buffered route table wholesale."""
        self._dynamic.set_allowed_paths(routes)

    def set_direct_paths(self, routes: RouteMapping) -> None:
        """Replace the direct route table wholesale."""
        self._direct.set_paths(routes)

    def route(self, path: str) -> Callable[[Handler], Handler]:
        """Register a buffered handler for an exact path.

        Usage::

            @dispatcher.route("/api/echo")
            async def echo(view: RequestView, emit: Emitter) -> None:
                emit(200, view.buffer)
        """

        def decorator(func: Handler) -> Handler:
            self._dynamic.add(path, func)
            return func

        return decorator

    def direct(self, path: str) -> Callable[[Handler], Handler]:
        """Register a direct handler for an exact path."""

        def decorator(func: Handler) -> Handler:
            self._direct.add(path, func)
            return func

        return decorator

    @property
    def dynamic_router(self) -> DynamicRouter:
        return self._dynamic

    @property
    def direct_table(self) -> DirectDispatchTable:
        return self._direct

    @property
    def static_server(self) -> StaticContentServer:
        return self._static

    # -- Serving --

    def run(
        self,
        host: str | None = None,
        port: int | None = None,
        *,
        log_level: str | None = None,
    ) -> None:
        """Configure logging, freeze the route tables, and serve until interrupted.

        Arguments left as ``None`` fall back to ``self.config``.
        """
        from perch.server.run import configure_logging, run_server

        level = log_level or self.config.log_level
        configure_logging(level)
        self._ensure_frozen()
        run_server(self, host or self.config.host, port or self.config.port, level)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI 3.0 entry point."""
        if scope["type"] == "lifespan":
            await self._handle_lifespan(receive, send)
            return
        if scope["type"] != "http":
            return

        self._ensure_frozen()
        await self.dispatch(scope, receive, send)

    async def dispatch(self, scope: Scope, receive: Receive, send: Send) -> None:
        """Run one HTTP request through exactly one branch."""
        method: str = scope["method"]

        if self.cors.is_preflight(method):
            logger.debug("preflight %s", scope["path"])
            await send_response(self.cors.preflight_response(), send)
            return

        path = strip_traversal(scope["path"])
        request = RawRequest.from_asgi(scope, receive, path=path)

        if await self._direct.dispatch(path, request, ResponseWriter(send)):
            logger.debug("direct %s %s", method, path)
            return

        if path in self._dynamic:
            logger.debug("dynamic %s %s", method, path)
            response = await self._dynamic.dispatch(request)
        else:
            logger.debug("static %s %s", method, path)
            response = await self._static.serve(sanitize(path, self.config.default_document))

        await send_response(response, send)

    async def _handle_lifespan(self, receive: Receive, send: Send) -> None:
        """Run the ASGI lifespan protocol.

        Freezes the route tables at startup, before the first request.
        """
        while True:
            message = await receive()
            msg_type = message["type"]

            if msg_type == "lifespan.startup":
                self._ensure_frozen()
                logger.info(
                    "Serving %s (%d dynamic, %d direct routes)",
                    self.config.base_path,
                    len(self._dynamic),
                    len(self._direct),
                )
                await send({"type": "lifespan.startup.complete"})

            elif msg_type == "lifespan.shutdown":
                await send({"type": "lifespan.shutdown.complete"})
                return

    # -- Internal --

    def _ensure_frozen(self) -> None:
        """Thread-safe freeze with double-check locking."""
        if self._frozen:
            return
        with self._freeze_lock:
            if self._frozen:
                return
            self._dynamic.freeze()
            self._direct.freeze()
            self._frozen = True
