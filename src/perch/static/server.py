"""Static file serving.

Resolves a sanitized request path under the base directory and reads it
without blocking the event loop. Every call produces exactly one
response: the file with its content type, or the literal 404 page.
"""

import logging
from pathlib import Path

import anyio

from perch.cors import CORSPolicy
from perch.errors import NotFound
from perch.http.response import Response
from perch.static.content_types import resolve_content_type
from perch.static.sanitize import sanitize

logger = logging.getLogger("perch.static")


class StaticContentServer:
    """Serves files from a base directory.

    Usage::

        server = StaticContentServer("./public", CORSPolicy())
        response = await server.serve("/css/site.css")

    Paths must already be sanitized; ``serve`` sanitizes again so a
    direct caller cannot skip it.
    """

    __slots__ = ("_base_dir", "_cors", "_default_document")

    def __init__(
        self,
        base_dir: str | Path,
        cors: CORSPolicy,
        *,
        default_document: str = "/index.html",
    ) -> None:
        self._base_dir = Path(base_dir)
        self._cors = cors
        self._default_document = default_document

    @property
    def base_dir(self) -> Path:
        return self._base_dir

    def file_path(self, clean_path: str) -> Path:
        """Join the base directory with a sanitized request path."""
        return self._base_dir / clean_path.lstrip("/")

    async def serve(self, clean_path: str) -> Response:
        """Read the file for *clean_path* and build the response."""
        clean_path = sanitize(clean_path, self._default_document)
        try:
            body = await self.read(clean_path)
        except NotFound as exc:
            return self._cors.apply(Response.plain(exc.detail, status=exc.status))

        content_type = resolve_content_type(clean_path)
        return self._cors.apply(Response(body=body, status=200, content_type=content_type))

    async def read(self, clean_path: str) -> bytes:
        """Read the file bytes.

        Raises:
            NotFound: The file is missing, a directory, unreadable, or the
                path is not a valid filename (an embedded NUL byte).
        """
        path = anyio.Path(self.file_path(clean_path))
        try:
            return await path.read_bytes()
        except (OSError, ValueError) as exc:
            logger.debug("404 %s (%s)", clean_path, exc.__class__.__name__)
            raise NotFound() from exc
