from __future__ import annotations

import logging

import pytest

from raw_map.builder.ids import new_osm_node_id, new_osm_way_id
from raw_map.domain.geometry import Polygon, Pt2D
from raw_map.domain.ids import NodeID, RelationID, WayID
from raw_map.domain.models import RawArea, RawBuilding, RawMap, RawParkingLot
from raw_map.domain.names import MapName
from raw_map.domain.tags import Tags
from raw_map.domain.types import AreaType
from raw_map.streets.network import OriginalRoad, RawIntersection, RawRoad


def _square() -> Polygon:
    return Polygon.from_points([Pt2D(0.0, 0.0), Pt2D(1.0, 0.0), Pt2D(1.0, 1.0), Pt2D(0.0, 0.0)])


def _map_with_road(way_id: int, i1: int = 1, i2: int = 2) -> RawMap:
    raw_map = RawMap.blank(MapName.new("us", "seattle", "test"))
    raw_map.streets.insert_intersection(NodeID(i1), RawIntersection(point=Pt2D(0.0, 0.0)))
    raw_map.streets.insert_intersection(NodeID(i2), RawIntersection(point=Pt2D(10.0, 0.0)))
    raw_map.streets.insert_road(
        OriginalRoad(WayID(way_id), NodeID(i1), NodeID(i2)),
        RawRoad(center_points=[Pt2D(0.0, 0.0), Pt2D(10.0, 0.0)]),
    )
    return raw_map


def test_way_id_without_collision_returns_start() -> None:
    raw_map = _map_with_road(5)

    assert new_osm_way_id(raw_map, -1) == WayID(-1)


def test_way_id_skips_building_keyed_by_way() -> None:
    raw_map = _map_with_road(5)
    raw_map.buildings[WayID(-1)] = RawBuilding(polygon=_square())

    assert new_osm_way_id(raw_map, -1) == WayID(-2)


def test_way_id_skips_road_way_ids() -> None:
    raw_map = _map_with_road(-3)

    assert new_osm_way_id(raw_map, -3) == WayID(-4)


def test_way_id_returns_nearest_free_value_without_skipping() -> None:
    raw_map = _map_with_road(-10)
    for value in (-10, -11, -13):
        raw_map.buildings[WayID(value)] = RawBuilding(polygon=_square())

    assert new_osm_way_id(raw_map, -10) == WayID(-12)


def test_way_id_ignores_node_and_relation_keyed_buildings() -> None:
    raw_map = _map_with_road(5)
    raw_map.buildings[NodeID(-1)] = RawBuilding(polygon=_square())
    raw_map.buildings[RelationID(-1)] = RawBuilding(polygon=_square())

    assert new_osm_way_id(raw_map, -1) == WayID(-1)


def test_way_id_does_not_consult_areas_or_parking_lots() -> None:
    raw_map = _map_with_road(5)
    raw_map.areas.append(
        RawArea(area_type=AreaType.PARK, polygon=_square(), osm_tags=Tags(), osm_id=WayID(-1))
    )
    raw_map.parking_lots.append(RawParkingLot(osm_id=WayID(-1), polygon=_square()))
    raw_map.parking_aisles.append((WayID(-1), [Pt2D(0.0, 0.0), Pt2D(1.0, 1.0)]))

    assert new_osm_way_id(raw_map, -1) == WayID(-1)


def test_way_id_is_idempotent_on_unmodified_map() -> None:
    raw_map = _map_with_road(-1)
    raw_map.buildings[WayID(-2)] = RawBuilding(polygon=_square())

    first = new_osm_way_id(raw_map, -1)
    second = new_osm_way_id(raw_map, -1)

    assert first == second == WayID(-3)


def test_node_id_skips_intersections() -> None:
    raw_map = _map_with_road(5, i1=-1, i2=-2)

    assert new_osm_node_id(raw_map, -1) == NodeID(-3)
    assert new_osm_node_id(raw_map, -5) == NodeID(-5)


def test_node_id_ignores_way_ids() -> None:
    raw_map = _map_with_road(-1)
    raw_map.buildings[WayID(-2)] = RawBuilding(polygon=_square())

    assert new_osm_node_id(raw_map, -1) == NodeID(-1)


def test_node_id_ignores_node_keyed_buildings() -> None:
    raw_map = _map_with_road(5)
    raw_map.buildings[NodeID(-1)] = RawBuilding(polygon=_square())

    assert new_osm_node_id(raw_map, -1) == NodeID(-1)


def test_allocators_on_blank_map_return_start() -> None:
    raw_map = RawMap.blank(MapName.new("us", "seattle", "test"))

    assert raw_map.new_osm_way_id(-7) == WayID(-7)
    assert raw_map.new_osm_node_id(-7) == NodeID(-7)


@pytest.mark.parametrize("start", [0, 1, 42])
def test_allocators_reject_non_negative_start(start: int) -> None:
    raw_map = _map_with_road(5)

    with pytest.raises(ValueError, match="below zero"):
        new_osm_way_id(raw_map, start)
    with pytest.raises(ValueError, match="below zero"):
        new_osm_node_id(raw_map, start)


def test_allocators_reject_non_int_start() -> None:
    raw_map = _map_with_road(5)

    with pytest.raises(ValueError):
        new_osm_way_id(raw_map, -1.5)  # type: ignore[arg-type]
    with pytest.raises(ValueError):
        new_osm_node_id(raw_map, True)  # type: ignore[arg-type]


def test_collision_is_logged_at_debug(caplog: pytest.LogCaptureFixture) -> None:
    raw_map = _map_with_road(-1)

    with caplog.at_level(logging.DEBUG, logger="raw_map"):
        allocated = new_osm_way_id(raw_map, -1)

    assert allocated == WayID(-2)
    assert "allocated -2" in caplog.text
