"""Immutable query string parameters.

A key that appears once maps to its string value; a key that repeats
maps to the list of its values, in order::

    QueryParams(b"id=1&tag=a&tag=b")
    # {'id': '1', 'tag': ['a', 'b']}
"""

from collections.abc import Iterator, Mapping
from urllib.parse import parse_qsl


class QueryParams(Mapping[str, str | list[str]]):
    """Parsed query string; blank values are kept."""

    __slots__ = ("_raw", "_values")

    def __init__(self, query_string: bytes = b"") -> None:
        values: dict[str, list[str]] = {}
        for name, value in parse_qsl(query_string.decode("latin-1"), keep_blank_values=True):
            values.setdefault(name, []).append(value)
        object.__setattr__(self, "_raw", query_string)
        object.__setattr__(self, "_values", values)

    def __getitem__(self, key: str) -> str | list[str]:
        match self._values[key]:
            case [only]:
                return only
            case many:
                return list(many)

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"QueryParams({dict(self)!r})"

    def get_first(self, key: str, default: str | None = None) -> str | None:
        """Return the first value for *key*, or *default* if missing."""
        values = self._values.get(key)
        return values[0] if values else default

    def get_list(self, key: str) -> list[str]:
        """Return all values for *key*."""
        return list(self._values.get(key, ()))

    @property
    def raw(self) -> bytes:
        """The query string exactly as received."""
        return self._raw
