"""Perch — a minimal HTTP request dispatcher.

Classifies every request as a direct route, a dynamic (buffered) route,
or a static file, and answers CORS preflights before any routing.

Basic usage::

    from perch import Dispatcher, ServerConfig

    dispatcher = Dispatcher(ServerConfig(base_dir="./public"))

    @dispatcher.route("/api/employees")
    def employees(view, emit):
        emit(200, {"name": "John Smith"})

    dispatcher.run()
"""

__version__ = "0.1.0"
__all__ = [
    "CORSPolicy",
    "ConfigurationError",
    "Dispatcher",
    "Emitter",
    "HTTPError",
    "NotFound",
    "PerchError",
    "RawRequest",
    "RequestView",
    "Response",
    "ResponseAlreadySent",
    "ResponseWriter",
    "ServerConfig",
    "StreamError",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import perch`` fast while providing a clean top-level API.
    """
    if name == "Dispatcher":
        from perch.dispatcher import Dispatcher

        return Dispatcher

    if name == "ServerConfig":
        from perch.config import ServerConfig

        return ServerConfig

    if name == "CORSPolicy":
        from perch.cors import CORSPolicy

        return CORSPolicy

    if name in ("RawRequest", "RequestView"):
        from perch.http import request as _req

        return getattr(_req, name)

    if name == "Response":
        from perch.http.response import Response

        return Response

    if name == "ResponseWriter":
        from perch.http.writer import ResponseWriter

        return ResponseWriter

    if name == "Emitter":
        from perch.routing.emit import Emitter

        return Emitter

    if name in (
        "ConfigurationError",
        "HTTPError",
        "NotFound",
        "PerchError",
        "ResponseAlreadySent",
        "StreamError",
    ):
        from perch import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
