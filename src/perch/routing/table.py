"""Exact-path route table shared by the dynamic and direct routers."""

from types import MappingProxyType

from perch._internal.types import Handler, RouteMapping
from perch.errors import ConfigurationError


class RouteTable:
    """Mapping from exact path strings to handlers.

    Mutable during setup, frozen once serving begins. Keys are compared
    by exact string equality: no prefixes, patterns, case folding, or
    trailing-slash normalization.
    """

    __slots__ = ("_frozen", "_routes")

    def __init__(self, routes: RouteMapping | None = None) -> None:
        self._routes: dict[str, Handler] = dict(routes or {})
        self._frozen = False

    def set_paths(self, routes: RouteMapping) -> None:
        """Replace the whole table. Nothing from the old table survives."""
        self._check_not_frozen()
        self._routes = dict(routes)

    def add(self, path: str, handler: Handler) -> None:
        """Register (or replace) the handler for one path."""
        self._check_not_frozen()
        self._routes[path] = handler

    def freeze(self) -> None:
        """Forbid further changes."""
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    @property
    def routes(self) -> MappingProxyType[str, Handler]:
        """Read-only view of the registered routes."""
        return MappingProxyType(self._routes)

    def match(self, path: str) -> str | None:
        """Return *path* if it is registered, else ``None``."""
        if path in self._routes:
            return path
        return None

    def __contains__(self, path: object) -> bool:
        return path in self._routes

    def __len__(self) -> int:
        return len(self._routes)

    def _check_not_frozen(self) -> None:
        if self._frozen:
            msg = (
                "Cannot change routes after the dispatcher started serving. "
                "Register all routes before the first request."
            )
            raise ConfigurationError(msg)
