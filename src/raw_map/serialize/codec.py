"""Convert raw maps to and from JSON-compatible payloads.

Mappings are written as lists of ``[key, value]`` pairs in key order, so
payloads are deterministic and decode into the same key-ordered mappings.
Sequences keep their order.
"""
from __future__ import annotations

from typing import Any, Dict, List, Sequence

from ..domain.geometry import PolyLine, Polygon, Pt2D
from ..domain.ids import NodeID, OsmID, WayID, osm_id_from_kind, osm_id_kind
from ..domain.models import (
    RawArea,
    RawBuilding,
    RawMap,
    RawParkingLot,
    RawTransitRoute,
    RawTransitStop,
    RawTransitType,
    building_map,
    stop_map,
)
from ..domain.multimap import MultiMap
from ..domain.names import MapName
from ..domain.tags import Tags
from ..domain.types import Amenity, AreaType
from ..streets.network import (
    IntersectionType,
    OriginalRoad,
    RawIntersection,
    RawRoad,
    StreetNetwork,
)
from ..utils.constants import SNAPSHOT_FORMAT_VERSION

Payload = Dict[str, Any]


def _encode_pt(pt: Pt2D) -> List[float]:
    return [pt.x, pt.y]


def _decode_pt(raw: Sequence[float]) -> Pt2D:
    x, y = raw
    return Pt2D(float(x), float(y))


def _encode_pts(points: Sequence[Pt2D]) -> List[List[float]]:
    return [_encode_pt(pt) for pt in points]


def _decode_pts(raw: Sequence[Sequence[float]]) -> List[Pt2D]:
    return [_decode_pt(pt) for pt in raw]


def _encode_osm_id(osm_id: OsmID) -> List[Any]:
    return [osm_id_kind(osm_id), osm_id.id]


def _decode_osm_id(raw: Sequence[Any]) -> OsmID:
    kind, value = raw
    return osm_id_from_kind(kind, value)


def _encode_tags(tags: Tags) -> Dict[str, str]:
    return tags.to_dict()


def _encode_amenity(amenity: Amenity) -> Payload:
    names = sorted(amenity.names.items(), key=lambda item: (item[0] is not None, item[0] or ""))
    return {
        "names": [[lang, name] for lang, name in names],
        "amenity_type": amenity.amenity_type,
        "osm_tags": _encode_tags(amenity.osm_tags),
    }


def _decode_amenity(raw: Payload) -> Amenity:
    return Amenity(
        names={lang: name for lang, name in raw["names"]},
        amenity_type=raw["amenity_type"],
        osm_tags=Tags(raw["osm_tags"]),
    )


def _encode_building(building: RawBuilding) -> Payload:
    return {
        "polygon": _encode_pts(building.polygon.points),
        "osm_tags": _encode_tags(building.osm_tags),
        "public_garage_name": building.public_garage_name,
        "num_parking_spots": building.num_parking_spots,
        "amenities": [_encode_amenity(amenity) for amenity in building.amenities],
    }


def _decode_building(raw: Payload) -> RawBuilding:
    return RawBuilding(
        polygon=Polygon.from_points(_decode_pts(raw["polygon"])),
        osm_tags=Tags(raw["osm_tags"]),
        public_garage_name=raw.get("public_garage_name"),
        num_parking_spots=int(raw["num_parking_spots"]),
        amenities=[_decode_amenity(amenity) for amenity in raw["amenities"]],
    )


def _encode_area(area: RawArea) -> Payload:
    return {
        "area_type": area.area_type.value,
        "polygon": _encode_pts(area.polygon.points),
        "osm_tags": _encode_tags(area.osm_tags),
        "osm_id": _encode_osm_id(area.osm_id),
    }


def _decode_area(raw: Payload) -> RawArea:
    return RawArea(
        area_type=AreaType(raw["area_type"]),
        polygon=Polygon.from_points(_decode_pts(raw["polygon"])),
        osm_tags=Tags(raw["osm_tags"]),
        osm_id=_decode_osm_id(raw["osm_id"]),
    )


def _encode_parking_lot(lot: RawParkingLot) -> Payload:
    return {
        "osm_id": _encode_osm_id(lot.osm_id),
        "polygon": _encode_pts(lot.polygon.points),
        "osm_tags": _encode_tags(lot.osm_tags),
    }


def _decode_parking_lot(raw: Payload) -> RawParkingLot:
    return RawParkingLot(
        osm_id=_decode_osm_id(raw["osm_id"]),
        polygon=Polygon.from_points(_decode_pts(raw["polygon"])),
        osm_tags=Tags(raw["osm_tags"]),
    )


def _encode_transit_route(route: RawTransitRoute) -> Payload:
    return {
        "long_name": route.long_name,
        "short_name": route.short_name,
        "gtfs_id": route.gtfs_id,
        "shape": _encode_pts(route.shape.points),
        "stops": list(route.stops),
        "route_type": route.route_type.value,
    }


def _decode_transit_route(raw: Payload) -> RawTransitRoute:
    return RawTransitRoute(
        long_name=raw["long_name"],
        short_name=raw["short_name"],
        gtfs_id=raw["gtfs_id"],
        shape=PolyLine.from_points(_decode_pts(raw["shape"])),
        stops=list(raw["stops"]),
        route_type=RawTransitType(raw["route_type"]),
    )


def _encode_transit_stop(stop: RawTransitStop) -> Payload:
    return {"gtfs_id": stop.gtfs_id, "position": _encode_pt(stop.position), "name": stop.name}


def _decode_transit_stop(raw: Payload) -> RawTransitStop:
    return RawTransitStop(
        gtfs_id=raw["gtfs_id"],
        position=_decode_pt(raw["position"]),
        name=raw["name"],
    )


def _encode_streets(streets: StreetNetwork) -> Payload:
    return {
        "intersections": [
            [
                node_id.id,
                {
                    "point": _encode_pt(intersection.point),
                    "intersection_type": intersection.intersection_type.value,
                    "elevation_m": intersection.elevation_m,
                },
            ]
            for node_id, intersection in streets.sorted_intersections()
        ],
        "roads": [
            [
                [road_id.osm_way_id.id, road_id.i1.id, road_id.i2.id],
                {
                    "center_points": _encode_pts(road.center_points),
                    "osm_tags": _encode_tags(road.osm_tags),
                },
            ]
            for road_id, road in streets.sorted_roads()
        ],
    }


def _decode_streets(raw: Payload) -> StreetNetwork:
    streets = StreetNetwork.blank()
    for node_id, data in raw["intersections"]:
        streets.insert_intersection(
            NodeID(node_id),
            RawIntersection(
                point=_decode_pt(data["point"]),
                intersection_type=IntersectionType(data["intersection_type"]),
                elevation_m=float(data["elevation_m"]),
            ),
        )
    for (way_id, i1, i2), data in raw["roads"]:
        streets.insert_road(
            OriginalRoad(WayID(way_id), NodeID(i1), NodeID(i2)),
            RawRoad(
                center_points=_decode_pts(data["center_points"]),
                osm_tags=Tags(data["osm_tags"]),
            ),
        )
    return streets


def _encode_bus_routes(bus_routes: MultiMap[WayID, str]) -> List[List[Any]]:
    return [[way_id.id, sorted(bus_routes.get(way_id))] for way_id in sorted(bus_routes.keys())]


def _decode_bus_routes(raw: Sequence[Sequence[Any]]) -> MultiMap[WayID, str]:
    bus_routes: MultiMap[WayID, str] = MultiMap()
    for way_id, routes in raw:
        bus_routes.set(WayID(way_id), routes)
    return bus_routes


def encode_raw_map(raw_map: RawMap) -> Payload:
    """Return a JSON-compatible payload describing ``raw_map`` completely."""

    name = raw_map.name
    return {
        "version": SNAPSHOT_FORMAT_VERSION,
        "name": {"country": name.city.country, "city": name.city.city, "map": name.map},
        "streets": _encode_streets(raw_map.streets),
        "buildings": [
            [_encode_osm_id(osm_id), _encode_building(building)]
            for osm_id, building in raw_map.buildings.items()
        ],
        "areas": [_encode_area(area) for area in raw_map.areas],
        "parking_lots": [_encode_parking_lot(lot) for lot in raw_map.parking_lots],
        "parking_aisles": [[way_id.id, _encode_pts(points)] for way_id, points in raw_map.parking_aisles],
        "transit_routes": [_encode_transit_route(route) for route in raw_map.transit_routes],
        "transit_stops": [
            [gtfs_id, _encode_transit_stop(stop)]
            for gtfs_id, stop in raw_map.transit_stops.items()
        ],
        "bus_routes_on_roads": _encode_bus_routes(raw_map.bus_routes_on_roads),
    }


def decode_raw_map(payload: Payload) -> RawMap:
    """Rebuild a raw map from :func:`encode_raw_map` output.

    The payload is assumed to be schema-valid already; see
    :func:`raw_map.utils.io.read_snapshot`.
    """

    raw_name = payload["name"]
    map_name = MapName.new(raw_name["country"], raw_name["city"], raw_name["map"])
    return RawMap(
        name=map_name,
        streets=_decode_streets(payload["streets"]),
        buildings=building_map(
            (_decode_osm_id(osm_id), _decode_building(building))
            for osm_id, building in payload["buildings"]
        ),
        areas=[_decode_area(area) for area in payload["areas"]],
        parking_lots=[_decode_parking_lot(lot) for lot in payload["parking_lots"]],
        parking_aisles=[(WayID(way_id), _decode_pts(points)) for way_id, points in payload["parking_aisles"]],
        transit_routes=[_decode_transit_route(route) for route in payload["transit_routes"]],
        transit_stops=stop_map(
            (gtfs_id, _decode_transit_stop(stop)) for gtfs_id, stop in payload["transit_stops"]
        ),
        bus_routes_on_roads=_decode_bus_routes(payload["bus_routes_on_roads"]),
    )
