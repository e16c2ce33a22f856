"""Response writer for direct route handlers.

A narrow capability over ASGI ``send``: set status and headers once,
write body chunks, end. Handlers never see ASGI messages.
"""

from collections.abc import Iterable, Mapping

from perch._internal.asgi import Send
from perch.errors import ResponseAlreadySent
from perch.server.sender import body_allowed, encode_headers


class ResponseWriter:
    """Streams one response for a direct route handler.

    Usage::

        async def events(request: RawRequest, writer: ResponseWriter) -> None:
            await writer.write_head(200, {"Content-Type": "text/plain"})
            await writer.write(b"one\\n")
            await writer.end(b"two\\n")

    ``write`` before ``write_head`` starts the response with status 200
    and no headers. ``write_head`` after the start, or anything after
    ``end``, raises ``ResponseAlreadySent``.
    """

    __slots__ = ("_finished", "_send", "_started", "_status")

    def __init__(self, send: Send) -> None:
        self._send = send
        self._started = False
        self._finished = False
        self._status = 200

    @property
    def started(self) -> bool:
        """True once the status line and headers were sent."""
        return self._started

    @property
    def finished(self) -> bool:
        """True once the response was ended."""
        return self._finished

    @property
    def status(self) -> int:
        """The status sent (or to be sent) for this response."""
        return self._status

    async def write_head(
        self,
        status: int,
        headers: Mapping[str, str] | Iterable[tuple[str, str]] = (),
    ) -> None:
        """Send the status code and headers."""
        if self._started:
            msg = "Response headers were already sent."
            raise ResponseAlreadySent(msg)
        pairs = tuple(headers.items() if isinstance(headers, Mapping) else headers)
        self._started = True
        self._status = status
        await self._send(
            {
                "type": "http.response.start",
                "status": status,
                "headers": encode_headers(pairs),
            }
        )

    async def write(self, chunk: bytes | str) -> None:
        """Send one body chunk, starting the response if needed."""
        self._check_open()
        if not self._started:
            await self.write_head(200)
        data = chunk.encode("utf-8") if isinstance(chunk, str) else chunk
        if not data or not body_allowed(self._status):
            return
        await self._send({"type": "http.response.body", "body": data, "more_body": True})

    async def end(self, chunk: bytes | str = b"") -> None:
        """Send an optional last chunk and close the response."""
        self._check_open()
        if not self._started:
            await self.write_head(200)
        data = chunk.encode("utf-8") if isinstance(chunk, str) else chunk
        if not body_allowed(self._status):
            data = b""
        self._finished = True
        await self._send({"type": "http.response.body", "body": data, "more_body": False})

    def _check_open(self) -> None:
        if self._finished:
            msg = "Response was already ended."
            raise ResponseAlreadySent(msg)
