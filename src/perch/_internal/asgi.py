"""Typed ASGI definitions.

Aliases for the raw ASGI callables. Only the dispatcher, the sender, and
the request/writer capabilities touch these; handlers never do.
"""

from collections.abc import Awaitable, Callable, MutableMapping
from typing import Any, TypeAlias

Scope: TypeAlias = MutableMapping[str, Any]
Message: TypeAlias = MutableMapping[str, Any]
Receive: TypeAlias = Callable[[], Awaitable[Message]]
Send: TypeAlias = Callable[[Message], Awaitable[None]]
