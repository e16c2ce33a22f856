"""Request path sanitizing.

Strips parent-directory sequences so a request path can never climb out
of the base directory, and maps the site root to the default document.
This is not a canonicalizer: symlinks and ``.`` segments are left alone.
"""

TRAVERSAL = ".."


def strip_traversal(raw_path: str) -> str:
    """Remove every ``..`` occurrence from *raw_path*."""
    path = raw_path
    while TRAVERSAL in path:
        path = path.replace(TRAVERSAL, "")
    return path


def sanitize(raw_path: str, default_document: str = "/index.html") -> str:
    """Strip traversal sequences, then substitute the default document for ``/``."""
    path = strip_traversal(raw_path)
    if path == "/":
        return default_document
    return path
