"""Shared type aliases used across perch modules."""

from collections.abc import Callable, Mapping
from typing import Any, TypeAlias

# Route handler — buffered handler(view, emit) or direct handler(request, writer)
Handler: TypeAlias = Callable[..., Any]

# Exact path -> handler, as supplied by the host
RouteMapping: TypeAlias = Mapping[str, Handler]
