"""Perch exception hierarchy.

Shared across the dispatcher, routers, static server, and sender so every
module raises and catches the same types.
"""


class PerchError(Exception):
    """Base for all perch-specific errors."""


class ConfigurationError(PerchError):
    """Raised when dispatcher configuration is invalid.

    Also raised when a route table is changed after the dispatcher froze.
    """


class ResponseAlreadySent(PerchError):  # noqa: N818
    """A buffered handler called ``emit`` more than once."""


class HTTPError(PerchError):
    """An error that maps directly to an HTTP status code.

    Raised inside a component and converted to a terminal response at
    that component's boundary. Never reaches the ASGI server.

    Instances must stay mutable: context managers
    such as ``anyio.fail_after`` assign ``__traceback__`` on the way out.
    """

    def __init__(self, status: int, detail: str = "") -> None:
        super().__init__(status, detail)
        self.status = status
        self.detail = detail

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class NotFound(HTTPError):  # noqa: N818
    """404 — the static file could not be read."""

    def __init__(self, detail: str = "404 - File Not Found") -> None:
        super().__init__(status=404, detail=detail)


class StreamError(HTTPError):
    """500 — the request body stream failed before it completed."""

    def __init__(self, detail: str = "Error occurred while processing HTTP request") -> None:
        super().__init__(status=500, detail=detail)


class RequestTimeout(HTTPError):  # noqa: N818
    """408 — the request body did not arrive before the deadline."""

    def __init__(self, detail: str = "Request Timeout") -> None:
        super().__init__(status=408, detail=detail)


class HandlerTimeout(HTTPError):  # noqa: N818
    """504 — a buffered handler did not finish before the deadline."""

    def __init__(self, detail: str = "Handler Timeout") -> None:
        super().__init__(status=504, detail=detail)
