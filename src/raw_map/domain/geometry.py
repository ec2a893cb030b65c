"""Geometry value types held by the raw map.

These only carry coordinates. Geometric operations belong to the later
stages of the pipeline.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Tuple


@dataclass(frozen=True)
class Pt2D:
    x: float
    y: float


@dataclass(frozen=True)
class Polygon:
    """Closed ring of points in map-space."""

    points: Tuple[Pt2D, ...]

    @classmethod
    def from_points(cls, points: Iterable[Pt2D]) -> "Polygon":
        return cls(tuple(points))


@dataclass(frozen=True)
class PolyLine:
    points: Tuple[Pt2D, ...]

    @classmethod
    def from_points(cls, points: Iterable[Pt2D]) -> "PolyLine":
        return cls(tuple(points))
