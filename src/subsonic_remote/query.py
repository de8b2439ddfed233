"""Query parameter builder for Subsonic requests.

Subsonic repeats a key to pass a list (``id=3&id=7&id=9``), so parameters
are kept as an ordered list of pairs rather than a dict. httpx accepts that
shape directly as ``params``.
"""

from typing import Any, Iterable, List, Optional, Tuple

QueryParams = List[Tuple[str, str]]


def _format(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class Query:
    """Accumulates key/value pairs for a single remote action.

    Example:
        >>> Query.with_("action", "add").arg_list("id", [3, 7]).build()
        [('action', 'add'), ('id', '3'), ('id', '7')]
    """

    def __init__(self):
        self._pairs: QueryParams = []

    @classmethod
    def with_(cls, key: str, value: Any) -> "Query":
        """Start a query with one parameter."""
        return cls().arg(key, value)

    def arg(self, key: str, value: Optional[Any]) -> "Query":
        """Add ``key=value``. A ``None`` value adds nothing."""
        if value is not None:
            self._pairs.append((key, _format(value)))
        return self

    def arg_list(self, key: str, values: Iterable[Any]) -> "Query":
        """Add ``key`` once per element, in order, keeping duplicates."""
        for value in values:
            self.arg(key, value)
        return self

    def build(self) -> QueryParams:
        return list(self._pairs)

    def __repr__(self):
        return f"Query({self._pairs!r})"
