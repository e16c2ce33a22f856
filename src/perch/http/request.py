"""Request types handed to handlers.

``RequestView`` is what buffered handlers see: frozen, fully read.
``RawRequest`` is what direct handlers see: frozen metadata with async
body access, and nothing of the ASGI transport beyond that.
"""

from __future__ import annotations

import json as json_module
from collections.abc import AsyncGenerator
from dataclasses import dataclass, field
from typing import Any

from perch._internal.asgi import Receive, Scope
from perch.http.headers import Headers
from perch.http.query import QueryParams
from perch.routing.body import accumulate_body, iter_body


@dataclass(frozen=True, slots=True)
class RequestView:
    """A buffered request as seen by a dynamic route handler.

    ``method`` is lower-cased. ``buffer`` holds the whole body.
    """

    method: str
    pathname: str
    query: QueryParams
    buffer: bytes = b""

    def json(self) -> Any:
        """Parse the buffer as JSON."""
        return json_module.loads(self.buffer)

    def text(self) -> str:
        """Decode the buffer as UTF-8."""
        return self.buffer.decode("utf-8")


@dataclass(frozen=True, slots=True)
class RawRequest:
    """An unbuffered request for direct route handlers.

    Metadata is frozen at creation. The body has not been read: use
    ``stream()`` to consume it chunk by chunk, or ``body()`` to read it
    all. Both raise ``StreamError`` if the client goes away mid-body.
    """

    method: str
    path: str
    query: QueryParams
    headers: Headers
    http_version: str
    client: tuple[str, int] | None

    # Private: ASGI receive callable for body streaming
    _receive: Receive

    # Private: mutable cache for the body
    # (dict contents are mutable even though the field reference is frozen)
    _cache: dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    @property
    def content_type(self) -> str | None:
        """The Content-Type header value."""
        return self.headers.get("content-type")

    @property
    def url(self) -> str:
        """Full request URL (path + query string)."""
        qs = self.query.raw
        if qs:
            return f"{self.path}?{qs.decode('latin-1')}"
        return self.path

    async def stream(self) -> AsyncGenerator[bytes]:
        """Stream the request body in chunks."""
        async for chunk in iter_body(self._receive):
            yield chunk

    async def body(self) -> bytes:
        """Read the full request body.

        Result is cached — the ASGI receive is consumed once, then the
        same bytes are returned on subsequent calls.
        """
        if "_body" in self._cache:
            return self._cache["_body"]
        result = await accumulate_body(self._receive)
        self._cache["_body"] = result
        return result

    async def json(self) -> Any:
        """Parse the body as JSON."""
        return json_module.loads(await self.body())

    @classmethod
    def from_asgi(cls, scope: Scope, receive: Receive, *, path: str | None = None) -> RawRequest:
        """Create a RawRequest from an ASGI scope and receive callable.

        *path* overrides ``scope["path"]``; the dispatcher passes the
        traversal-stripped path here.
        """
        client = scope.get("client")
        return cls(
            method=scope["method"],
            path=scope["path"] if path is None else path,
            query=QueryParams(scope.get("query_string", b"")),
            headers=Headers(tuple(scope.get("headers", ()))),
            http_version=scope.get("http_version", "1.1"),
            client=tuple(client) if client else None,
            _receive=receive,
        )
