from typing import Any, Generic, Hashable, TypeVar

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")

_MISSING = object()


class ArrayMultimap(Generic[K, V]):
    """
    Map from key to an ordered list of values.

    Unknown keys read as an empty list and are not created by reading.
    """

    def __init__(self):
        self._values: dict[K, list[V]] = {}

    def put(self, key: K, value: V) -> None:
        self._values.setdefault(key, []).append(value)

    def get(self, key: K) -> list[V]:
        return self._values.get(key, [])

    def keys(self):
        return self._values.keys()

    def __contains__(self, key: Any) -> bool:
        return key in self._values

    def __len__(self) -> int:
        return len(self._values)


class StrictMap(Generic[K, V]):
    """
    Single-valued map whose lookups raise KeyError on a missing key
    unless a default is given.
    """

    def __init__(self):
        self._values: dict[K, V] = {}

    def set(self, key: K, value: V) -> None:
        self._values[key] = value

    def get(self, key: K, default: Any = _MISSING) -> V:
        try:
            return self._values[key]
        except KeyError:
            if default is _MISSING:
                raise
            return default

    def __contains__(self, key: Any) -> bool:
        return key in self._values

    def __len__(self) -> int:
        return len(self._values)
