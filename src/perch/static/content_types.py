"""Content type resolution from a fixed extension table.

Lookup is case-sensitive: ``/logo.PNG`` does not hit ``.png`` and is
served as ``application/octet-stream``.
"""

import posixpath
from types import MappingProxyType

DEFAULT_CONTENT_TYPE = "application/octet-stream"

MIME_TYPES = MappingProxyType(
    {
        ".html": "text/html",
        ".htm": "text/html",
        ".css": "text/css",
        ".js": "text/javascript",
        ".json": "application/json",
        ".png": "image/png",
        ".jpg": "image/jpeg",
        ".jpeg": "image/jpeg",
        ".gif": "image/gif",
        ".svg": "image/svg+xml",
        ".ico": "image/x-icon",
        ".txt": "text/plain",
    }
)


def extension(path: str) -> str:
    """Return the extension of the last path segment, including the dot.

    A dotfile's leading dot is not an extension: ``/.env`` -> ``""``.
    """
    _, ext = posixpath.splitext(path)
    return ext


def resolve_content_type(path: str) -> str:
    """Map *path* to a MIME type, defaulting to ``application/octet-stream``."""
    return MIME_TYPES.get(extension(path), DEFAULT_CONTENT_TYPE)
