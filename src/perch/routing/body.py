"""Request body accumulation.

Collects ``http.request`` body chunks for one request, in arrival order,
into a single contiguous buffer. A disconnect before the final chunk is
a ``StreamError``; completion and failure are mutually exclusive.
"""

from collections.abc import AsyncGenerator

from perch._internal.asgi import Receive
from perch.errors import StreamError


async def iter_body(receive: Receive) -> AsyncGenerator[bytes]:
    """Yield body chunks until the client signals the last one.

    Raises:
        StreamError: The client disconnected or the transport failed
            before ``more_body`` went false.
    """
    while True:
        try:
            message = await receive()
        except OSError as exc:
            raise StreamError() from exc

        if message["type"] == "http.disconnect":
            raise StreamError()

        body = message.get("body", b"")
        if body:
            yield body
        if not message.get("more_body", False):
            break


class BodyAccumulator:
    """Ordered byte buffer for a single request body.

    Usage::

        body = await BodyAccumulator().consume(receive)
    """

    __slots__ = ("_chunks", "_finished")

    def __init__(self) -> None:
        self._chunks: list[bytes] = []
        self._finished = False

    def feed(self, chunk: bytes) -> None:
        """Append one chunk."""
        if self._finished:
            msg = "Cannot feed a finished body accumulator."
            raise RuntimeError(msg)
        self._chunks.append(chunk)

    def finish(self) -> bytes:
        """Mark the body complete and return all chunks joined."""
        if self._finished:
            msg = "Body accumulator already finished."
            raise RuntimeError(msg)
        self._finished = True
        return b"".join(self._chunks)

    @property
    def size(self) -> int:
        """Bytes buffered so far."""
        return sum(len(chunk) for chunk in self._chunks)

    async def consume(self, receive: Receive) -> bytes:
        """Drain *receive* into the buffer and return the full body."""
        async for chunk in iter_body(receive):
            self.feed(chunk)
        return self.finish()


async def accumulate_body(receive: Receive) -> bytes:
    """Read the full request body from *receive*."""
    return await BodyAccumulator().consume(receive)
