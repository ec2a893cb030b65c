"""Mapping from a key to a set of values."""
from __future__ import annotations

from collections import defaultdict
from typing import (
    AbstractSet,
    DefaultDict,
    Generic,
    Hashable,
    Iterable,
    Iterator,
    Set,
    Tuple,
    TypeVar,
)

K = TypeVar("K", bound=Hashable)
V = TypeVar("V", bound=Hashable)


class MultiMap(Generic[K, V]):
    """Keys without values are dropped, so ``len`` counts non-empty keys only."""

    def __init__(self) -> None:
        self._map: DefaultDict[K, Set[V]] = defaultdict(set)

    def insert(self, key: K, value: V) -> None:
        self._map[key].add(value)

    def remove(self, key: K, value: V) -> None:
        values = self._map.get(key)
        if values is None:
            return
        values.discard(value)
        if not values:
            del self._map[key]

    def set(self, key: K, values: Iterable[V]) -> None:
        replacement = set(values)
        if replacement:
            self._map[key] = replacement
        else:
            self._map.pop(key, None)

    def get(self, key: K) -> AbstractSet[V]:
        values = self._map.get(key)
        return frozenset(values) if values else frozenset()

    def keys(self) -> Iterator[K]:
        return iter(list(self._map.keys()))

    def items(self) -> Iterator[Tuple[K, AbstractSet[V]]]:
        for key, values in list(self._map.items()):
            yield key, frozenset(values)

    def is_empty(self) -> bool:
        return not self._map

    def __contains__(self, key: object) -> bool:
        return key in self._map

    def __len__(self) -> int:
        return len(self._map)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MultiMap):
            return NotImplemented
        return dict(self._map) == dict(other._map)

    def __repr__(self) -> str:
        body = ", ".join(f"{key!r}: {sorted(values, key=repr)!r}" for key, values in self._map.items())
        return f"MultiMap({{{body}}})"
