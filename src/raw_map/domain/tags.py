"""Raw key/value tags copied from source objects."""
from __future__ import annotations

from typing import Dict, Iterable, Iterator, Mapping, MutableMapping, Optional


class Tags(MutableMapping[str, str]):
    """String-to-string mapping with the lookups source tags usually need."""

    def __init__(self, items: Optional[Mapping[str, str]] = None) -> None:
        self._inner: Dict[str, str] = dict(items or {})

    def __getitem__(self, key: str) -> str:
        return self._inner[key]

    def __setitem__(self, key: str, value: str) -> None:
        self._inner[key] = value

    def __delitem__(self, key: str) -> None:
        del self._inner[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._inner)

    def __len__(self) -> int:
        return len(self._inner)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Tags):
            return self._inner == other._inner
        if isinstance(other, Mapping):
            return self._inner == dict(other)
        return NotImplemented

    def __repr__(self) -> str:
        return f"Tags({self._inner!r})"

    def contains_key(self, key: str) -> bool:
        return key in self._inner

    def is_(self, key: str, value: str) -> bool:
        return self._inner.get(key) == value

    def is_any(self, key: str, values: Iterable[str]) -> bool:
        current = self._inner.get(key)
        return current is not None and current in set(values)

    def insert(self, key: str, value: str) -> None:
        self._inner[key] = value

    def remove(self, key: str) -> Optional[str]:
        return self._inner.pop(key, None)

    def to_dict(self) -> Dict[str, str]:
        """Return a copy with keys in sorted order."""
        return {key: self._inner[key] for key in sorted(self._inner)}
