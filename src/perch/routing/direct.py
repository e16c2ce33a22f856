"""Direct routing.

Hands the unbuffered request and a response writer straight to the
handler registered for the exact path. The handler owns the whole
response: status, headers, body, streaming, and ending it.
"""

import logging

from perch._internal.invoke import invoke
from perch.http.request import RawRequest
from perch.http.writer import ResponseWriter
from perch.routing.table import RouteTable

logger = logging.getLogger("perch.routing")


class DirectDispatchTable(RouteTable):
    """Route table for handlers that bypass body buffering.

    Usage::

        async def upload(request: RawRequest, writer: ResponseWriter) -> None:
            size = 0
            async for chunk in request.stream():
                size += len(chunk)
            await writer.write_head(200, {"Content-Type": "text/plain"})
            await writer.end(str(size))

        table = DirectDispatchTable({"/upload": upload})
    """

    __slots__ = ()

    async def dispatch(self, pathname: str, request: RawRequest, writer: ResponseWriter) -> bool:
        """Run the handler for *pathname* if one is registered.

        Returns whether a handler matched. A handler that returns
        without starting a response gets a 500; one that started but
        did not end is ended.
        """
        handler = self._routes.get(pathname)
        if handler is None:
            return False

        await invoke(handler, request, writer)

        if not writer.started:
            logger.warning("Direct handler for %s returned without responding", pathname)
            await writer.write_head(500, {"Content-Type": "text/plain; charset=utf-8"})
            await writer.end(b"Handler did not send a response")
        elif not writer.finished:
            logger.warning("Direct handler for %s did not end its response", pathname)
            await writer.end()
        return True
