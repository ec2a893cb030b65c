"""Intermediate raw map produced by source parsing and consumed by map finalization."""
from __future__ import annotations

from .builder.ids import new_osm_node_id, new_osm_way_id
from .domain.geometry import PolyLine, Polygon, Pt2D
from .domain.ids import NodeID, OsmID, RelationID, WayID
from .domain.models import (
    RawArea,
    RawBuilding,
    RawMap,
    RawParkingLot,
    RawTransitRoute,
    RawTransitStop,
    RawTransitType,
    SnapshotOptions,
)
from .domain.multimap import MultiMap
from .domain.names import CityName, MapName
from .domain.tags import Tags
from .domain.types import Amenity, AmenityType, AreaType
from .streets.network import (
    IntersectionType,
    OriginalRoad,
    RawIntersection,
    RawRoad,
    StreetNetwork,
)
from .utils.io import path_raw_map, read_snapshot, write_snapshot

__all__ = [
    "Amenity",
    "AmenityType",
    "AreaType",
    "CityName",
    "IntersectionType",
    "MapName",
    "MultiMap",
    "NodeID",
    "OriginalRoad",
    "OsmID",
    "PolyLine",
    "Polygon",
    "Pt2D",
    "RawArea",
    "RawBuilding",
    "RawIntersection",
    "RawMap",
    "RawParkingLot",
    "RawRoad",
    "RawTransitRoute",
    "RawTransitStop",
    "RawTransitType",
    "RelationID",
    "SnapshotOptions",
    "StreetNetwork",
    "Tags",
    "new_osm_node_id",
    "new_osm_way_id",
    "path_raw_map",
    "read_snapshot",
    "write_snapshot",
]
