"""Dynamic (buffered) routing.

Reads the whole request body, builds a ``RequestView``, and calls the
handler registered for the exact path with the view and an ``Emitter``.
Stream failures end the request with 500; the handler never runs.
"""

import logging

import anyio

from perch._internal.invoke import invoke
from perch._internal.types import RouteMapping
from perch.cors import CORSPolicy
from perch.errors import HandlerTimeout, HTTPError, NotFound, RequestTimeout, StreamError
from perch.http.request import RawRequest, RequestView
from perch.http.response import Response
from perch.routing.emit import Emitter
from perch.routing.table import RouteTable

logger = logging.getLogger("perch.routing")


class DynamicRouter(RouteTable):
    """Route table for buffered handlers.

    Usage::

        def employees(view: RequestView, emit: Emitter) -> None:
            emit(200, {"name": "John Smith", "id": view.query["id"]})

        router = DynamicRouter(CORSPolicy())
        router.set_allowed_paths({"/api/employees": employees})
        response = await router.dispatch(request)

    Handlers may be sync or async. Instead of calling ``emit`` a handler
    may return a ``Response``. A handler that does neither gets a 500.
    """

    __slots__ = ("_cors", "_timeout")

    def __init__(
        self,
        cors: CORSPolicy,
        routes: RouteMapping | None = None,
        *,
        timeout: float | None = None,
    ) -> None:
        super().__init__(routes)
        self._cors = cors
        self._timeout = timeout

    def set_allowed_paths(self, routes: RouteMapping) -> None:
        """Replace the route table wholesale."""
        self.set_paths(routes)

    def get_allowed_dynamic_path(self, path: str) -> str | None:
        """Alias of ``match``: the registered path, or ``None``."""
        return self.match(path)

    async def dispatch(self, request: RawRequest) -> Response:
        """Buffer the body, run the handler, and return its response.

        An unregistered path gets the 404 response without reading the body.
        """
        handler = self._routes.get(request.path)
        if handler is None:
            return self._error_response(NotFound())

        try:
            with anyio.fail_after(self._timeout):
                buffer = await request.body()
        except StreamError as exc:
            logger.warning("Body stream failed: %s %s", request.method, request.path)
            return self._error_response(exc)
        except TimeoutError:
            logger.warning("Body not received in time: %s %s", request.method, request.path)
            return self._error_response(RequestTimeout())

        view = RequestView(
            method=request.method.lower(),
            pathname=request.path,
            query=request.query,
            buffer=buffer,
        )
        emit = Emitter(self._cors)

        try:
            with anyio.fail_after(self._timeout) as scope:
                result = await invoke(handler, view, emit)
        except TimeoutError:
            if not scope.cancelled_caught:
                raise
            logger.error("Handler for %s did not finish in time", request.path)
            return self._error_response(HandlerTimeout())

        if emit.response is not None:
            return emit.response
        if isinstance(result, Response):
            return self._cors.apply(result)

        logger.error("Handler for %s returned without emitting a response", request.path)
        return self._error_response(
            HTTPError(status=500, detail="Handler did not emit a response")
        )

    def _error_response(self, exc: HTTPError) -> Response:
        return self._cors.apply(Response.plain(exc.detail, status=exc.status))
