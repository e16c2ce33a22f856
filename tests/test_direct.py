"""Tests for direct routing and the response writer."""

import pytest

from perch.dispatcher import Dispatcher
from perch.errors import ResponseAlreadySent
from perch.http.request import RawRequest
from perch.http.writer import ResponseWriter
from perch.routing.direct import DirectDispatchTable
from perch.testing import TestClient


class TestDirectDispatchTable:
    async def test_unmatched_path_returns_false(self) -> None:
        table = DirectDispatchTable({"/stream": None})
        messages: list[dict] = []

        async def send(message: dict) -> None:
            messages.append(message)

        matched = await table.dispatch("/other", None, ResponseWriter(send))
        assert matched is False
        assert messages == []

    async def test_matched_path_returns_true(self) -> None:
        calls: list[tuple] = []

        async def handler(request, writer: ResponseWriter) -> None:
            calls.append((request, writer))
            await writer.end(b"ok")

        table = DirectDispatchTable()
        table.add("/stream", handler)

        async def send(message: dict) -> None:
            pass

        writer = ResponseWriter(send)
        assert await table.dispatch("/stream", "raw-request", writer) is True
        assert calls == [("raw-request", writer)]
        assert writer.finished


class TestDirectThroughDispatcher:
    async def test_streams_chunks_with_custom_headers(self) -> None:
        dispatcher = Dispatcher()

        @dispatcher.direct("/events")
        async def events(request: RawRequest, writer: ResponseWriter) -> None:
            await writer.write_head(200, {"Content-Type": "text/plain", "X-Custom": "yes"})
            await writer.write(b"one\n")
            await writer.write("two\n")
            await writer.end(b"three\n")

        async with TestClient(dispatcher) as client:
            response = await client.get("/events")

        assert response.status == 200
        assert response.content_type == "text/plain"
        assert response.header("x-custom") == "yes"
        assert response.body == b"one\ntwo\nthree\n"

    async def test_no_cors_headers_added(self) -> None:
        dispatcher = Dispatcher()

        @dispatcher.direct("/raw")
        async def raw(request: RawRequest, writer: ResponseWriter) -> None:
            await writer.end(b"raw")

        async with TestClient(dispatcher) as client:
            response = await client.get("/raw")

        assert response.header("access-control-allow-origin") is None

    async def test_body_is_not_buffered_first(self) -> None:
        dispatcher = Dispatcher()
        seen: list[bytes] = []

        @dispatcher.direct("/upload")
        async def upload(request: RawRequest, writer: ResponseWriter) -> None:
            async for chunk in request.stream():
                seen.append(chunk)
            await writer.end(str(len(seen)))

        async with TestClient(dispatcher) as client:
            response = await client.request("POST", "/upload", chunks=[b"a", b"b", b"c"])

        assert seen == [b"a", b"b", b"c"]
        assert response.text == "3"

    async def test_raw_request_metadata(self) -> None:
        dispatcher = Dispatcher()
        captured: list[RawRequest] = []

        @dispatcher.direct("/meta")
        async def meta(request: RawRequest, writer: ResponseWriter) -> None:
            captured.append(request)
            await writer.end(await request.body())

        async with TestClient(dispatcher) as client:
            response = await client.post(
                "/meta?x=1", json={"k": "v"}, headers={"X-Token": "abc"}
            )

        request = captured[0]
        assert request.method == "POST"
        assert request.path == "/meta"
        assert request.query["x"] == "1"
        assert request.headers["x-token"] == "abc"
        assert request.content_type == "application/json"
        assert request.url == "/meta?x=1"
        assert response.json() == {"k": "v"}

    async def test_direct_wins_over_dynamic(self) -> None:
        dispatcher = Dispatcher()
        dispatcher.set_allowed_paths({"/both": lambda view, emit: emit(200, "dynamic")})

        @dispatcher.direct("/both")
        async def both(request: RawRequest, writer: ResponseWriter) -> None:
            await writer.end("direct")

        async with TestClient(dispatcher) as client:
            response = await client.get("/both")

        assert response.text == "direct"

    async def test_handler_that_never_responds_gets_500(self) -> None:
        dispatcher = Dispatcher()

        @dispatcher.direct("/lazy")
        async def lazy(request: RawRequest, writer: ResponseWriter) -> None:
            pass

        async with TestClient(dispatcher) as client:
            response = await client.get("/lazy")

        assert response.status == 500

    async def test_unfinished_response_is_ended(self) -> None:
        dispatcher = Dispatcher()

        @dispatcher.direct("/partial")
        async def partial(request: RawRequest, writer: ResponseWriter) -> None:
            await writer.write_head(206)
            await writer.write(b"half")

        async with TestClient(dispatcher) as client:
            response = await client.get("/partial")

        assert response.status == 206
        assert response.body == b"half"


class TestResponseWriter:
    async def test_write_starts_with_200(self) -> None:
        messages: list[dict] = []

        async def send(message: dict) -> None:
            messages.append(message)

        writer = ResponseWriter(send)
        await writer.write(b"x")
        await writer.end()

        assert messages[0] == {"type": "http.response.start", "status": 200, "headers": []}
        assert messages[1]["more_body"] is True
        assert messages[-1] == {"type": "http.response.body", "body": b"", "more_body": False}

    async def test_headers_twice_raises(self) -> None:
        async def send(message: dict) -> None:
            pass

        writer = ResponseWriter(send)
        await writer.write_head(200)
        with pytest.raises(ResponseAlreadySent):
            await writer.write_head(201)

    async def test_write_after_end_raises(self) -> None:
        async def send(message: dict) -> None:
            pass

        writer = ResponseWriter(send)
        await writer.end(b"done")
        with pytest.raises(ResponseAlreadySent):
            await writer.write(b"more")
        with pytest.raises(ResponseAlreadySent):
            await writer.end()

    async def test_no_body_for_204(self) -> None:
        messages: list[dict] = []

        async def send(message: dict) -> None:
            messages.append(message)

        writer = ResponseWriter(send)
        await writer.write_head(204)
        await writer.write(b"ignored")
        await writer.end(b"ignored")

        assert len(messages) == 2
        assert messages[1]["body"] == b""
