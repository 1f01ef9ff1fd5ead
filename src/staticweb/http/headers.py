"""Case-insensitive request headers.

Built once from the ASGI header pairs; names are lowercased and values
decoded as latin-1 up front, so lookups are plain string comparisons.
"""

from collections.abc import Iterable, Iterator, Mapping


class Headers(Mapping[str, str]):
    """Read-only view of request headers.

    Indexing returns the first value for a name; ``get_list`` returns
    every value, in arrival order.
    """

    __slots__ = ("_items",)

    def __init__(self, raw: Iterable[tuple[bytes, bytes]] = ()) -> None:
        self._items = tuple((name.decode("latin-1").lower(), value.decode("latin-1")) for name, value in raw)

    def __getitem__(self, key: str) -> str:
        wanted = key.lower()
        for name, value in self._items:
            if name == wanted:
                return value
        raise KeyError(key)

    def __iter__(self) -> Iterator[str]:
        return iter(dict.fromkeys(name for name, _ in self._items))

    def __len__(self) -> int:
        return len({name for name, _ in self._items})

    def __repr__(self) -> str:
        return f"Headers({self._items!r})"

    def get_list(self, key: str) -> list[str]:
        wanted = key.lower()
        return [value for name, value in self._items if name == wanted]

    def tokens(self, key: str) -> list[tuple[str, float]]:
        """Split a comma-separated list header into lowercase ``(token, q)`` pairs.

        Repeated headers are merged. A missing or malformed ``q`` counts
        as ``1.0``::

            Accept-Encoding: gzip;q=0.8, br
            -> [("gzip", 0.8), ("br", 1.0)]
        """
        result: list[tuple[str, float]] = []
        for item in ",".join(self.get_list(key)).split(","):
            token, *params = item.split(";")
            token = token.strip().lower()
            if not token:
                continue
            q = 1.0
            for param in params:
                name, _, raw_q = param.partition("=")
                if name.strip().lower() != "q":
                    continue
                try:
                    q = float(raw_q)
                except ValueError:
                    q = 1.0
            result.append((token, q))
        return result
