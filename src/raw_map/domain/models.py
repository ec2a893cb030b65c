"""Domain models for the intermediate raw map."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

from ..builder.ids import new_osm_node_id, new_osm_way_id
from ..streets.network import StreetNetwork
from ..utils.constants import DATA_ROOT, DEFAULT_COMPRESSION_LEVEL
from .geometry import PolyLine, Polygon, Pt2D
from .ids import NodeID, OsmID, WayID, osm_id_sort_key
from .multimap import MultiMap
from .names import CityName, MapName
from .sorted_map import SortedMap
from .tags import Tags
from .types import Amenity, AreaType


@dataclass(frozen=True)
class SnapshotOptions:
    """Where snapshots live and how hard they are compressed."""

    data_root: Path = DATA_ROOT
    compression_level: int = DEFAULT_COMPRESSION_LEVEL


@dataclass
class RawBuilding:
    polygon: Polygon
    osm_tags: Tags = field(default_factory=Tags)
    public_garage_name: Optional[str] = None
    num_parking_spots: int = 0
    amenities: List[Amenity] = field(default_factory=list)


@dataclass
class RawArea:
    area_type: AreaType
    polygon: Polygon
    osm_tags: Tags
    osm_id: OsmID


@dataclass
class RawParkingLot:
    osm_id: OsmID
    polygon: Polygon
    osm_tags: Tags = field(default_factory=Tags)


class RawTransitType(str, Enum):
    BUS = "bus"
    TRAIN = "train"


@dataclass
class RawTransitRoute:
    long_name: str
    short_name: str
    gtfs_id: str
    # May begin and/or end outside the map boundary.
    shape: PolyLine
    # Keys into RawMap.transit_stops
    stops: List[str]
    route_type: RawTransitType


@dataclass
class RawTransitStop:
    gtfs_id: str
    # Only stops within the map boundary are kept.
    position: Pt2D
    name: str


def building_map(items: Optional[Iterable[Tuple[OsmID, RawBuilding]]] = None) -> SortedMap[OsmID, RawBuilding]:
    """Buildings keyed by source id, iterating ways, then nodes, then relations."""
    return SortedMap(items, sort_key=osm_id_sort_key)


def stop_map(items: Optional[Iterable[Tuple[str, RawTransitStop]]] = None) -> SortedMap[str, RawTransitStop]:
    return SortedMap(items)


@dataclass
class RawMap:
    """Partially processed map, snapshotted between parsing and finalization.

    ``bus_routes_on_roads`` is scraped from route relations for every map,
    unlike ``transit_routes`` which only exists where GTFS data does. It is
    best-effort and goes stale once the map is edited or transformed.
    """

    name: MapName
    streets: StreetNetwork = field(default_factory=StreetNetwork.blank)
    buildings: SortedMap[OsmID, RawBuilding] = field(default_factory=building_map)
    areas: List[RawArea] = field(default_factory=list)
    parking_lots: List[RawParkingLot] = field(default_factory=list)
    parking_aisles: List[Tuple[WayID, List[Pt2D]]] = field(default_factory=list)
    transit_routes: List[RawTransitRoute] = field(default_factory=list)
    transit_stops: SortedMap[str, RawTransitStop] = field(default_factory=stop_map)
    bus_routes_on_roads: MultiMap[WayID, str] = field(default_factory=MultiMap)

    def __post_init__(self) -> None:
        if not isinstance(self.buildings, SortedMap):
            self.buildings = building_map(self.buildings.items())
        if not isinstance(self.transit_stops, SortedMap):
            self.transit_stops = stop_map(self.transit_stops.items())

    @classmethod
    def blank(cls, name: MapName) -> "RawMap":
        return cls(name=name)

    @classmethod
    def load(cls, name: MapName, options: Optional[SnapshotOptions] = None) -> "RawMap":
        from ..utils.io import path_raw_map, read_snapshot

        opts = options or SnapshotOptions()
        return read_snapshot(path_raw_map(name, opts.data_root))

    def get_city_name(self) -> CityName:
        return self.name.city

    def new_osm_way_id(self, start: int) -> WayID:
        return new_osm_way_id(self, start)

    def new_osm_node_id(self, start: int) -> NodeID:
        return new_osm_node_id(self, start)

    def snapshot(self, options: Optional[SnapshotOptions] = None) -> Path:
        """Write this map to its snapshot path, replacing any earlier snapshot."""
        from ..utils.io import path_raw_map, write_snapshot

        opts = options or SnapshotOptions()
        path = path_raw_map(self.name, opts.data_root)
        write_snapshot(path, self, level=opts.compression_level)
        return path

    def dangling_stop_references(self) -> List[Tuple[str, str]]:
        """List ``(route gtfs_id, stop id)`` pairs naming stops this map lacks.

        Reporting only; nothing here removes or rejects such routes.
        """

        return [
            (route.gtfs_id, stop_id)
            for route in self.transit_routes
            for stop_id in route.stops
            if stop_id not in self.transit_stops
        ]
