"""Street network held by a raw map.

Intersections are graph nodes keyed by their source node id, roads are
graph edges keyed by :class:`OriginalRoad`. Only insertion and lookup live
here; topology and geometry algorithms belong to later pipeline stages.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterator, List, Tuple

import networkx as nx

from ..domain.geometry import Pt2D
from ..domain.ids import NodeID, WayID
from ..domain.tags import Tags

GraphType = nx.MultiGraph


class IntersectionType(str, Enum):
    STOP_SIGN = "stop_sign"
    TRAFFIC_SIGNAL = "traffic_signal"
    BORDER = "border"
    CONSTRUCTION = "construction"


@dataclass(frozen=True, order=True)
class OriginalRoad:
    """Identifies a road by its source way and the two nodes it spans."""

    osm_way_id: WayID
    i1: NodeID
    i2: NodeID


@dataclass
class RawIntersection:
    point: Pt2D
    intersection_type: IntersectionType = IntersectionType.STOP_SIGN
    elevation_m: float = 0.0


@dataclass
class RawRoad:
    center_points: List[Pt2D]
    osm_tags: Tags = field(default_factory=Tags)


class StreetNetwork:
    def __init__(self) -> None:
        self._graph: GraphType = nx.MultiGraph()

    @classmethod
    def blank(cls) -> "StreetNetwork":
        return cls()

    @property
    def graph(self) -> GraphType:
        return self._graph

    def insert_intersection(self, node_id: NodeID, intersection: RawIntersection) -> None:
        self._graph.add_node(node_id, intersection=intersection)

    def insert_road(self, road_id: OriginalRoad, road: RawRoad) -> None:
        for endpoint in (road_id.i1, road_id.i2):
            if endpoint not in self._graph:
                raise KeyError(f"road {road_id} references unknown intersection {endpoint}")
        self._graph.add_edge(road_id.i1, road_id.i2, key=road_id, road=road)

    def remove_road(self, road_id: OriginalRoad) -> RawRoad:
        road = self.road(road_id)
        self._graph.remove_edge(road_id.i1, road_id.i2, key=road_id)
        return road

    def intersection(self, node_id: NodeID) -> RawIntersection:
        return self._graph.nodes[node_id]["intersection"]

    def road(self, road_id: OriginalRoad) -> RawRoad:
        return self._graph.edges[road_id.i1, road_id.i2, road_id]["road"]

    def intersection_ids(self) -> Iterator[NodeID]:
        return iter(self._graph.nodes)

    def road_ids(self) -> Iterator[OriginalRoad]:
        for _u, _v, key in self._graph.edges(keys=True):
            yield key

    def intersections(self) -> Dict[NodeID, RawIntersection]:
        return {node_id: data["intersection"] for node_id, data in self._graph.nodes(data=True)}

    def roads(self) -> Dict[OriginalRoad, RawRoad]:
        return {key: data["road"] for _u, _v, key, data in self._graph.edges(keys=True, data=True)}

    def roads_per_intersection(self, node_id: NodeID) -> List[OriginalRoad]:
        return sorted(key for _u, _v, key in self._graph.edges(node_id, keys=True))

    def num_intersections(self) -> int:
        return self._graph.number_of_nodes()

    def num_roads(self) -> int:
        return self._graph.number_of_edges()

    def sorted_intersections(self) -> List[Tuple[NodeID, RawIntersection]]:
        return sorted(self.intersections().items())

    def sorted_roads(self) -> List[Tuple[OriginalRoad, RawRoad]]:
        return sorted(self.roads().items())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, StreetNetwork):
            return NotImplemented
        return self.intersections() == other.intersections() and self.roads() == other.roads()

    def __repr__(self) -> str:
        return f"StreetNetwork(intersections={self.num_intersections()}, roads={self.num_roads()})"
