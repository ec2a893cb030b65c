"""Mapping that iterates in key order regardless of insertion order."""
from __future__ import annotations

from bisect import bisect_left, insort
from typing import (
    Any,
    Callable,
    Dict,
    Hashable,
    Iterable,
    Iterator,
    List,
    Mapping,
    MutableMapping,
    Optional,
    Tuple,
    TypeVar,
)

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


def _identity(key: Any) -> Any:
    return key


class SortedMap(MutableMapping[K, V]):
    """Dict whose keys iterate ordered by ``sort_key(key)``.

    ``sort_key`` must be injective over the keys stored.
    """

    def __init__(
        self,
        items: Optional[Iterable[Tuple[K, V]]] = None,
        *,
        sort_key: Callable[[K], Any] = _identity,
    ) -> None:
        self._sort_key = sort_key
        self._values: Dict[K, V] = {}
        self._order: List[Tuple[Any, K]] = []
        for key, value in items or ():
            self[key] = value

    def __getitem__(self, key: K) -> V:
        return self._values[key]

    def __setitem__(self, key: K, value: V) -> None:
        if key not in self._values:
            insort(self._order, (self._sort_key(key), key))
        self._values[key] = value

    def __delitem__(self, key: K) -> None:
        del self._values[key]
        entry = (self._sort_key(key), key)
        index = bisect_left(self._order, entry)
        del self._order[index]

    def __iter__(self) -> Iterator[K]:
        return iter([key for _, key in self._order])

    def __len__(self) -> int:
        return len(self._values)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, SortedMap):
            return self._values == other._values
        if isinstance(other, Mapping):
            return self._values == dict(other)
        return NotImplemented

    def __repr__(self) -> str:
        body = ", ".join(f"{key!r}: {self._values[key]!r}" for key in self)
        return f"SortedMap({{{body}}})"
