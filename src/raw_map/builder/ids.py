"""Synthetic identifier allocation for raw maps.

Source identifiers are non-negative. When the pipeline needs an identifier
the source data does not provide, it scans downward from a negative
``start`` and takes the first value unused by the relevant collections.
The scan is slow but deterministic, so repeated runs over the same input
produce the same synthetic ids.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Set

from ..domain.ids import NodeID, WayID
from ..utils.logging import get_logger

if TYPE_CHECKING:
    from ..domain.models import RawMap

LOG = get_logger()


def _require_negative(start: int) -> None:
    if isinstance(start, bool) or not isinstance(start, int):
        raise ValueError(f"Synthetic id start must be an int (got {start!r})")
    if not start < 0:
        raise ValueError(f"Synthetic ids must start below zero (got {start})")


def _scan_down(start: int, occupied: Callable[[int], bool], kind: str) -> int:
    candidate = start
    while occupied(candidate):
        candidate -= 1
    if candidate != start:
        LOG.debug("synthetic %s id %d taken; allocated %d instead", kind, start, candidate)
    return candidate


def new_osm_way_id(raw_map: "RawMap", start: int) -> WayID:
    """Return the first unused way id at or below ``start``.

    Checked against the originating way of every road and every building
    keyed by a way. Areas, parking lots and parking aisles are not checked,
    so callers that need those collections collision-free must screen them
    separately.
    """

    _require_negative(start)
    used: Set[int] = {road_id.osm_way_id.id for road_id in raw_map.streets.road_ids()}
    used.update(osm_id.id for osm_id in raw_map.buildings if isinstance(osm_id, WayID))
    return WayID(_scan_down(start, used.__contains__, "way"))


def new_osm_node_id(raw_map: "RawMap", start: int) -> NodeID:
    """Return the first node id at or below ``start`` not used by an intersection."""

    _require_negative(start)
    used: Set[int] = {node_id.id for node_id in raw_map.streets.intersection_ids()}
    return NodeID(_scan_down(start, used.__contains__, "node"))
