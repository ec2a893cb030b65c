"""Structured names identifying a city and a map within it."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, order=True)
class CityName:
    country: str
    city: str

    def describe(self) -> str:
        return f"{self.city} ({self.country})"


@dataclass(frozen=True, order=True)
class MapName:
    city: CityName
    map: str

    @classmethod
    def new(cls, country: str, city: str, map: str) -> "MapName":
        return cls(CityName(country, city), map)

    def describe(self) -> str:
        return f"{self.map} (in {self.city.city})"

    def as_filename(self) -> str:
        return f"{self.city.country}_{self.city.city}_{self.map}"
