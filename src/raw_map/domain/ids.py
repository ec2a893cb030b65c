"""OpenStreetMap identifier value types.

Identifiers from the source data are non-negative. Negative values are
synthetic and produced by the pipeline when the source has no usable id (see
:mod:`raw_map.builder.ids`).
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple, Union


@dataclass(frozen=True, order=True)
class NodeID:
    id: int

    def is_synthetic(self) -> bool:
        return self.id < 0

    def __str__(self) -> str:
        return f"https://www.openstreetmap.org/node/{self.id}"


@dataclass(frozen=True, order=True)
class WayID:
    id: int

    def is_synthetic(self) -> bool:
        return self.id < 0

    def __str__(self) -> str:
        return f"https://www.openstreetmap.org/way/{self.id}"


@dataclass(frozen=True, order=True)
class RelationID:
    id: int

    def is_synthetic(self) -> bool:
        return self.id < 0

    def __str__(self) -> str:
        return f"https://www.openstreetmap.org/relation/{self.id}"


OsmID = Union[NodeID, WayID, RelationID]

_KIND_BY_TYPE = {NodeID: "node", WayID: "way", RelationID: "relation"}
_TYPE_BY_KIND = {kind: cls for cls, kind in _KIND_BY_TYPE.items()}
_KIND_RANK = {"way": 0, "node": 1, "relation": 2}


def osm_id_kind(osm_id: OsmID) -> str:
    try:
        return _KIND_BY_TYPE[type(osm_id)]
    except KeyError as exc:
        raise TypeError(f"not an OSM identifier: {osm_id!r}") from exc


def osm_id_from_kind(kind: str, value: int) -> OsmID:
    try:
        cls = _TYPE_BY_KIND[kind]
    except KeyError as exc:
        raise ValueError(f"Unsupported OSM identifier kind: {kind!r}") from exc
    return cls(int(value))


def osm_id_sort_key(osm_id: OsmID) -> Tuple[int, int]:
    """Order ways before nodes before relations, then numerically."""

    return (_KIND_RANK[osm_id_kind(osm_id)], osm_id.id)
