"""HTTP response with chainable .with_*() transformation API.

Each transformation returns a new Response. Immutable by convention,
built incrementally by design.
"""

from __future__ import annotations

import json as json_module
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, replace
from typing import Any
from urllib.parse import quote

TEXT_PLAIN = "text/plain; charset=utf-8"
APPLICATION_JSON = "application/json"

# Reserved and already-escaped characters stay as they are in Location.
_LOCATION_SAFE = ":/?#[]@!$&'()*+,;=%"


def encode_payload(data: Any) -> tuple[bytes, str | None]:
    """Encode a handler payload into body bytes and a content type.

    ``bytes`` pass through untyped, ``str`` becomes UTF-8 plain text,
    anything else is JSON-encoded.
    """
    if isinstance(data, (bytes, bytearray, memoryview)):
        return bytes(data), None
    if isinstance(data, str):
        return data.encode("utf-8"), TEXT_PLAIN
    return json_module.dumps(data).encode("utf-8"), APPLICATION_JSON


@dataclass(frozen=True, slots=True)
class Response:
    """An HTTP response built through immutable transformations.

    Construct with a body, then chain ``.with_*()`` calls to set status
    and headers. Each call returns a new ``Response``. A ``None``
    content type means no ``Content-Type`` header is sent.
    """

    body: str | bytes = b""
    status: int = 200
    content_type: str | None = None
    headers: tuple[tuple[str, str], ...] = ()

    @classmethod
    def from_payload(cls, data: Any, *, status: int = 200) -> Response:
        """Build a response from an ``emit`` payload."""
        body, content_type = encode_payload(data)
        return cls(body=body, status=status, content_type=content_type)

    @classmethod
    def redirect(cls, location: str, *, status: int = 301) -> Response:
        """Build an empty-bodied redirect to *location*.

        Characters outside ASCII are percent-encoded as UTF-8 so the
        header can go out on the wire.
        """
        return cls(body=b"", status=status).with_header(
            "Location", quote(location, safe=_LOCATION_SAFE)
        )

    @classmethod
    def plain(cls, text: str, *, status: int) -> Response:
        """Build a plain-text response."""
        return cls(body=text, status=status, content_type=TEXT_PLAIN)

    # -- Chainable transformations --

    def with_status(self, status: int) -> Response:
        """Return a new Response with a different status code."""
        return replace(self, status=status)

    def with_header(self, name: str, value: str) -> Response:
        """Return a new Response with an additional header."""
        return replace(self, headers=(*self.headers, (name, value)))

    def with_headers(self, headers: Mapping[str, str] | Iterable[tuple[str, str]]) -> Response:
        """Return a new Response with additional headers."""
        pairs = headers.items() if isinstance(headers, Mapping) else headers
        return replace(self, headers=(*self.headers, *pairs))

    # -- Accessors --

    def header(self, name: str) -> str | None:
        """Return the first value of header *name* (case-insensitive)."""
        if name.lower() == "content-type":
            return self.content_type
        name_lower = name.lower()
        for key, value in self.headers:
            if key.lower() == name_lower:
                return value
        return None

    @property
    def body_bytes(self) -> bytes:
        """Body as bytes."""
        if isinstance(self.body, str):
            return self.body.encode("utf-8")
        return self.body

    @property
    def text(self) -> str:
        """Body as string."""
        if isinstance(self.body, bytes):
            return self.body.decode("utf-8")
        return self.body

    def json(self) -> Any:
        """Body parsed as JSON."""
        return json_module.loads(self.body_bytes)
