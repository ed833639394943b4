from collections.abc import MutableMapping


class Headers(MutableMapping):
    """
    Header mapping with case-insensitive lookups.

    Keys keep the casing they were last written with. Writing a key that
    differs only in case replaces the previous entry.
    """

    def __init__(self, data=None):
        self._store: dict[str, tuple[str, str]] = {}
        if data:
            self.update(data)

    def __setitem__(self, key: str, value: str) -> None:
        self._store[key.lower()] = (key, value)

    def __getitem__(self, key: str) -> str:
        return self._store[key.lower()][1]

    def __delitem__(self, key: str) -> None:
        del self._store[key.lower()]

    def __iter__(self):
        return (original for original, _ in self._store.values())

    def __len__(self) -> int:
        return len(self._store)

    def __eq__(self, other):
        if not isinstance(other, MutableMapping):
            return NotImplemented
        return dict(self.lower_items()) == dict(Headers(other).lower_items())

    def lower_items(self):
        return ((lower, value) for lower, (_, value) in self._store.items())

    def __repr__(self) -> str:
        return f"Headers({dict(self.items())!r})"
