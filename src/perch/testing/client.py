"""In-process test client for perch dispatchers.

Calls the ASGI callable with a synthetic scope and collects what it
sends into a ``Response``. No sockets, no server.
"""

from __future__ import annotations

import json as json_module
from collections.abc import Sequence
from typing import Any

from perch._internal.asgi import Message, Scope
from perch.dispatcher import Dispatcher
from perch.http.response import Response

Headers = dict[str, str] | None


def _build_scope(method: str, target: str, headers: Headers) -> Scope:
    path, _, query = target.partition("?")
    return {
        "type": "http",
        "asgi": {"version": "3.0"},
        "http_version": "1.1",
        "method": method.upper(),
        "path": path,
        "raw_path": path.encode("latin-1"),
        "query_string": query.encode("latin-1"),
        "root_path": "",
        "headers": [
            (name.lower().encode("latin-1"), value.encode("latin-1"))
            for name, value in (headers or {}).items()
        ],
        "server": ("testserver", 80),
        "client": ("127.0.0.1", 0),
    }


def _body_messages(parts: Sequence[bytes], *, disconnect: bool) -> list[Message]:
    messages: list[Message] = [
        {"type": "http.request", "body": part, "more_body": True} for part in parts
    ]
    if disconnect:
        messages.append({"type": "http.disconnect"})
    else:
        messages[-1]["more_body"] = False
    return messages


class _Capture:
    """Collects the ``http.response.*`` messages sent by the app."""

    def __init__(self) -> None:
        self.status = 200
        self.headers: list[tuple[bytes, bytes]] = []
        self.chunks: list[bytes] = []

    async def __call__(self, message: Message) -> None:
        if message["type"] == "http.response.start":
            self.status = message["status"]
            self.headers = list(message.get("headers", []))
        elif message["type"] == "http.response.body":
            self.chunks.append(message.get("body", b""))

    def to_response(self) -> Response:
        content_type: str | None = None
        extra: list[tuple[str, str]] = []
        for raw_name, raw_value in self.headers:
            name = raw_name.decode("latin-1")
            value = raw_value.decode("latin-1")
            if name == "content-type":
                content_type = value
            elif name != "content-length":
                extra.append((name, value))
        return Response(
            body=b"".join(self.chunks),
            status=self.status,
            content_type=content_type,
            headers=tuple(extra),
        )


class TestClient:
    """Async test client for perch dispatchers.

    Usage::

        async with TestClient(dispatcher) as client:
            response = await client.get("/index.html")
            assert response.status == 200

    ``chunks`` delivers the body in several ``http.request`` messages;
    ``disconnect=True`` drops the connection after them, before the
    body is complete.
    """

    __test__ = False

    __slots__ = ("dispatcher",)

    def __init__(self, dispatcher: Dispatcher) -> None:
        self.dispatcher = dispatcher

    async def __aenter__(self) -> TestClient:
        self.dispatcher._ensure_frozen()
        return self

    async def __aexit__(self, *args: object) -> None:
        pass

    async def get(self, path: str, *, headers: Headers = None) -> Response:
        return await self.request("GET", path, headers=headers)

    async def post(
        self,
        path: str,
        *,
        headers: Headers = None,
        body: bytes | None = None,
        json: Any = None,
    ) -> Response:
        """Send a POST; ``json`` is encoded and typed as application/json."""
        if json is not None:
            body = json_module.dumps(json).encode("utf-8")
            headers = {"content-type": "application/json", **(headers or {})}
        return await self.request("POST", path, headers=headers, body=body)

    async def put(
        self, path: str, *, headers: Headers = None, body: bytes | None = None
    ) -> Response:
        return await self.request("PUT", path, headers=headers, body=body)

    async def delete(self, path: str, *, headers: Headers = None) -> Response:
        return await self.request("DELETE", path, headers=headers)

    async def options(self, path: str, *, headers: Headers = None) -> Response:
        return await self.request("OPTIONS", path, headers=headers)

    async def request(
        self,
        method: str,
        path: str,
        *,
        headers: Headers = None,
        body: bytes | None = None,
        chunks: Sequence[bytes] | None = None,
        disconnect: bool = False,
    ) -> Response:
        """Send one request through the dispatcher and capture the reply."""
        parts = list(chunks) if chunks else [body or b""]
        pending = _body_messages(parts, disconnect=disconnect)

        async def receive() -> Message:
            if pending:
                return pending.pop(0)
            return {"type": "http.disconnect"}

        capture = _Capture()
        await self.dispatcher(_build_scope(method, path, headers), receive, capture)
        return capture.to_response()
