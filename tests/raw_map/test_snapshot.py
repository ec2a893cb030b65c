from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest
import zstandard as zstd

from raw_map.domain.geometry import Polygon, PolyLine, Pt2D
from raw_map.domain.ids import NodeID, RelationID, WayID
from raw_map.domain.models import (
    RawArea,
    RawBuilding,
    RawMap,
    RawParkingLot,
    RawTransitRoute,
    RawTransitStop,
    RawTransitType,
    SnapshotOptions,
)
from raw_map.domain.names import MapName
from raw_map.domain.tags import Tags
from raw_map.domain.types import Amenity, AreaType
from raw_map.serialize.codec import encode_raw_map
from raw_map.streets.network import IntersectionType, OriginalRoad, RawIntersection, RawRoad
from raw_map.utils import io
from raw_map.utils.errors import (
    IoError,
    SnapshotDecodeError,
    SnapshotNotFound,
    SnapshotValidationError,
    UnsupportedVersionError,
)


def _polygon(offset: float) -> Polygon:
    return Polygon.from_points(
        [Pt2D(offset, offset), Pt2D(offset + 1.5, offset), Pt2D(offset + 1.5, offset + 2.25), Pt2D(offset, offset)]
    )


def _populated_map() -> RawMap:
    raw_map = RawMap.blank(MapName.new("us", "seattle", "montlake"))

    streets = raw_map.streets
    streets.insert_intersection(NodeID(30), RawIntersection(point=Pt2D(10.0, 0.0)))
    streets.insert_intersection(
        NodeID(-1),
        RawIntersection(point=Pt2D(0.0, 0.0), intersection_type=IntersectionType.TRAFFIC_SIGNAL, elevation_m=12.5),
    )
    streets.insert_intersection(NodeID(7), RawIntersection(point=Pt2D(0.0, 10.0), intersection_type=IntersectionType.BORDER))
    streets.insert_road(
        OriginalRoad(WayID(200), NodeID(-1), NodeID(30)),
        RawRoad(center_points=[Pt2D(0.0, 0.0), Pt2D(10.0, 0.0)], osm_tags=Tags({"highway": "residential", "name": "E Shelby St"})),
    )
    streets.insert_road(
        OriginalRoad(WayID(5), NodeID(-1), NodeID(7)),
        RawRoad(center_points=[Pt2D(0.0, 0.0), Pt2D(0.0, 10.0)], osm_tags=Tags({"highway": "primary"})),
    )

    raw_map.buildings[WayID(900)] = RawBuilding(
        polygon=_polygon(20.0),
        osm_tags=Tags({"building": "garage"}),
        public_garage_name="Montlake Garage",
        num_parking_spots=120,
    )
    raw_map.buildings[NodeID(44)] = RawBuilding(
        polygon=_polygon(30.0),
        osm_tags=Tags({"building": "yes"}),
        amenities=[
            Amenity(names={None: "Cafe Allegro", "es": "Café Allegro"}, amenity_type="cafe", osm_tags=Tags({"amenity": "cafe"})),
            Amenity(names={}, amenity_type="books"),
        ],
    )
    raw_map.buildings[WayID(-3)] = RawBuilding(polygon=_polygon(40.0))

    raw_map.areas.append(RawArea(AreaType.WATER, _polygon(50.0), Tags({"natural": "water"}), RelationID(77)))
    raw_map.areas.append(RawArea(AreaType.PARK, _polygon(60.0), Tags({"leisure": "park"}), WayID(12)))

    raw_map.parking_lots.append(RawParkingLot(osm_id=WayID(300), polygon=_polygon(70.0), osm_tags=Tags({"amenity": "parking"})))
    raw_map.parking_lots.append(RawParkingLot(osm_id=NodeID(3), polygon=_polygon(80.0)))

    raw_map.parking_aisles.append((WayID(401), [Pt2D(1.0, 2.0), Pt2D(3.0, 4.0)]))
    raw_map.parking_aisles.append((WayID(400), [Pt2D(5.0, 6.0), Pt2D(7.0, 8.0), Pt2D(9.0, 10.0)]))

    raw_map.transit_stops["stop-b"] = RawTransitStop(gtfs_id="stop-b", position=Pt2D(2.0, 2.0), name="Montlake Blvd")
    raw_map.transit_stops["stop-a"] = RawTransitStop(gtfs_id="stop-a", position=Pt2D(1.0, 1.0), name="Husky Stadium")
    raw_map.transit_routes.append(
        RawTransitRoute(
            long_name="Link Light Rail",
            short_name="1 Line",
            gtfs_id="100479",
            shape=PolyLine.from_points([Pt2D(-100.0, 0.0), Pt2D(100.0, 0.0)]),
            stops=["stop-a"],
            route_type=RawTransitType.TRAIN,
        )
    )
    raw_map.transit_routes.append(
        RawTransitRoute(
            long_name="Montlake - Downtown",
            short_name="43",
            gtfs_id="100221",
            shape=PolyLine.from_points([Pt2D(0.0, 0.0), Pt2D(0.0, 10.0)]),
            stops=["stop-b", "stop-a"],
            route_type=RawTransitType.BUS,
        )
    )

    raw_map.bus_routes_on_roads.insert(WayID(5), "Route 43")
    raw_map.bus_routes_on_roads.insert(WayID(5), "Route 48")
    raw_map.bus_routes_on_roads.insert(WayID(200), "Route 43")
    return raw_map


def test_path_raw_map_follows_city_layout(tmp_path: Path) -> None:
    name = MapName.new("us", "seattle", "montlake")

    assert io.path_raw_map(name) == Path("data/input/us/seattle/raw_maps/montlake.bin")
    assert io.path_raw_map(name, tmp_path) == tmp_path / "input" / "us" / "seattle" / "raw_maps" / "montlake.bin"


def test_snapshot_round_trip_preserves_every_field(tmp_path: Path) -> None:
    original = _populated_map()
    options = SnapshotOptions(data_root=tmp_path)

    path = original.snapshot(options)
    loaded = RawMap.load(original.name, options)

    assert path.exists()
    assert loaded == original
    assert loaded.streets.sorted_roads() == original.streets.sorted_roads()
    assert loaded.bus_routes_on_roads.get(WayID(5)) == {"Route 43", "Route 48"}


def test_snapshot_round_trip_orders_maps_by_key_and_keeps_sequences(tmp_path: Path) -> None:
    original = _populated_map()
    path = tmp_path / "map.bin"

    io.write_snapshot(path, original)
    loaded = io.read_snapshot(path)

    assert list(loaded.buildings) == [WayID(-3), WayID(900), NodeID(44)]
    assert list(loaded.transit_stops) == ["stop-a", "stop-b"]
    assert [area.osm_id for area in loaded.areas] == [RelationID(77), WayID(12)]
    assert [lot.osm_id for lot in loaded.parking_lots] == [WayID(300), NodeID(3)]
    assert [way_id for way_id, _ in loaded.parking_aisles] == [WayID(401), WayID(400)]
    assert [route.gtfs_id for route in loaded.transit_routes] == ["100479", "100221"]
    assert loaded.transit_routes[1].stops == ["stop-b", "stop-a"]


def test_blank_snapshot_round_trip(tmp_path: Path) -> None:
    original = RawMap.blank(MapName.new("de", "berlin", "center"))
    path = tmp_path / "blank.bin"

    io.write_snapshot(path, original)
    loaded = io.read_snapshot(path)

    assert loaded == original
    assert loaded.streets.num_intersections() == 0


def test_snapshot_overwrites_previous_file(tmp_path: Path) -> None:
    raw_map = _populated_map()
    options = SnapshotOptions(data_root=tmp_path, compression_level=1)
    raw_map.snapshot(options)

    raw_map.buildings.clear()
    path = raw_map.snapshot(options)

    assert io.read_snapshot(path).buildings == {}
    assert not path.with_name(path.name + ".tmp").exists()


def test_snapshot_is_zstd_compressed_json(tmp_path: Path) -> None:
    path = tmp_path / "map.bin"
    io.write_snapshot(path, _populated_map())

    payload = json.loads(zstd.ZstdDecompressor().decompress(path.read_bytes()))

    assert payload == encode_raw_map(_populated_map())


def test_snapshot_write_logs_path(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    path = tmp_path / "map.bin"

    with caplog.at_level(logging.INFO, logger="raw_map"):
        io.write_snapshot(path, _populated_map())

    assert "wrote raw map montlake (in seattle)" in caplog.text


def test_read_missing_snapshot(tmp_path: Path) -> None:
    with pytest.raises(SnapshotNotFound):
        io.read_snapshot(tmp_path / "absent.bin")


def test_load_missing_map_propagates(tmp_path: Path) -> None:
    with pytest.raises(SnapshotNotFound):
        RawMap.load(MapName.new("us", "nowhere", "none"), SnapshotOptions(data_root=tmp_path))


def test_read_garbage_snapshot(tmp_path: Path) -> None:
    path = tmp_path / "garbage.bin"
    path.write_bytes(b"definitely not zstd")

    with pytest.raises(SnapshotDecodeError):
        io.read_snapshot(path)


def _write_payload(path: Path, payload: object) -> None:
    path.write_bytes(zstd.ZstdCompressor().compress(json.dumps(payload).encode("utf-8")))


def test_read_snapshot_rejects_unknown_version(tmp_path: Path) -> None:
    payload = encode_raw_map(_populated_map())
    payload["version"] = "99"
    path = tmp_path / "future.bin"
    _write_payload(path, payload)

    with pytest.raises(UnsupportedVersionError):
        io.read_snapshot(path)


def test_read_snapshot_rejects_schema_violations(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    payload = encode_raw_map(_populated_map())
    payload["transit_routes"][0]["route_type"] = "ferry"
    del payload["areas"]
    path = tmp_path / "broken.bin"
    _write_payload(path, payload)

    with caplog.at_level(logging.ERROR, logger="raw_map"):
        with pytest.raises(SnapshotValidationError, match="2 error"):
            io.read_snapshot(path)

    assert "[SCH] snapshot validation: FAILED" in caplog.text


def test_read_snapshot_rejects_non_object_payload(tmp_path: Path) -> None:
    path = tmp_path / "list.bin"
    _write_payload(path, [1, 2, 3])

    with pytest.raises(SnapshotDecodeError):
        io.read_snapshot(path)


def test_write_failure_surfaces_as_io_error(tmp_path: Path) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("a file, not a directory", encoding="utf-8")

    with pytest.raises(IoError):
        io.write_snapshot(blocker / "map.bin", _populated_map())


def test_write_rejects_map_that_could_not_be_read_back(tmp_path: Path) -> None:
    raw_map = _populated_map()
    raw_map.buildings[WayID(900)].num_parking_spots = -1
    path = tmp_path / "map.bin"

    with pytest.raises(SnapshotValidationError):
        io.write_snapshot(path, raw_map)

    assert not path.exists()
    assert not path.with_name(path.name + ".tmp").exists()


def test_read_snapshot_rejects_road_between_unknown_intersections(tmp_path: Path) -> None:
    payload = encode_raw_map(RawMap.blank(MapName.new("us", "seattle", "montlake")))
    payload["streets"]["roads"] = [[[1, 2, 3], {"center_points": [], "osm_tags": {}}]]
    path = tmp_path / "dangling.bin"
    _write_payload(path, payload)

    with pytest.raises(SnapshotDecodeError, match="unknown intersection"):
        io.read_snapshot(path)


def test_failed_replace_leaves_no_temporary_file(tmp_path: Path) -> None:
    target = tmp_path / "map.bin"
    target.mkdir()
    (target / "keep").write_text("occupied", encoding="utf-8")

    with pytest.raises(IoError):
        io.write_snapshot(target, _populated_map())

    assert not (tmp_path / "map.bin.tmp").exists()
    assert target.is_dir()
