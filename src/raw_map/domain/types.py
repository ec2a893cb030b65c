"""Supporting value types for areas and amenities."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional

from .tags import Tags


class AreaType(str, Enum):
    PARK = "park"
    WATER = "water"
    ISLAND = "island"
    # Not from the source data; a user-specified area to focus on.
    STUDY_AREA = "study_area"


class AmenityType(str, Enum):
    BANK = "bank"
    BAR = "bar"
    BEAUTY = "beauty"
    BIKE = "bike"
    CAFE = "cafe"
    CAR_REPAIR = "car_repair"
    CAR_SHARE = "car_share"
    CHILDCARE = "childcare"
    CONVENIENCE_STORE = "convenience_store"
    CULTURE = "culture"
    EXERCISE = "exercise"
    FAST_FOOD = "fast_food"
    FOOD = "food"
    GREEN_SPACE = "green_space"
    HOTEL = "hotel"
    LAUNDRY = "laundry"
    LIBRARY = "library"
    MEDICAL = "medical"
    PET = "pet"
    PLAYGROUND = "playground"
    POOL = "pool"
    POST_OFFICE = "post_office"
    RELIGIOUS = "religious"
    SCHOOL = "school"
    SHOPPING = "shopping"
    SUPERMARKET = "supermarket"
    TOURISM = "tourism"
    UNIVERSITY = "university"

    @classmethod
    def categorize(cls, raw: str) -> Optional["AmenityType"]:
        """Group a raw ``amenity=*`` or ``shop=*`` value into a broad category."""

        for category, values in _CATEGORIES.items():
            if raw in values:
                return category
        return None


_CATEGORIES: Dict[AmenityType, frozenset] = {
    AmenityType.BANK: frozenset({"bank"}),
    AmenityType.BAR: frozenset({"bar", "pub", "nightclub", "biergarten"}),
    AmenityType.BEAUTY: frozenset({"hairdresser", "beauty", "chemist", "cosmetics"}),
    AmenityType.BIKE: frozenset({"bicycle"}),
    AmenityType.CAFE: frozenset({"cafe", "pastry", "coffee", "tea", "bakery"}),
    AmenityType.CAR_REPAIR: frozenset({"car_repair"}),
    AmenityType.CAR_SHARE: frozenset({"car_sharing"}),
    AmenityType.CHILDCARE: frozenset({"childcare", "kindergarten"}),
    AmenityType.CONVENIENCE_STORE: frozenset({"convenience"}),
    AmenityType.CULTURE: frozenset({"arts_centre", "art", "cinema", "theatre"}),
    AmenityType.EXERCISE: frozenset({"fitness_centre", "sports_centre", "track", "pitch"}),
    AmenityType.FAST_FOOD: frozenset({"fast_food", "food_court"}),
    AmenityType.FOOD: frozenset(
        {"restaurant", "farm", "ice_cream", "seafood", "cheese", "chocolate", "deli", "butcher", "confectionery", "beverages", "alcohol"}
    ),
    AmenityType.GREEN_SPACE: frozenset({"park", "garden", "nature_reserve"}),
    AmenityType.HOTEL: frozenset({"hotel", "hostel", "guest_house", "motel"}),
    AmenityType.LAUNDRY: frozenset({"dry_cleaning", "laundry", "tailor"}),
    AmenityType.LIBRARY: frozenset({"library"}),
    AmenityType.MEDICAL: frozenset({"clinic", "dentist", "hospital", "pharmacy", "doctors", "optician"}),
    AmenityType.PET: frozenset({"veterinary", "pet", "animal_boarding", "animal_shelter"}),
    AmenityType.PLAYGROUND: frozenset({"playground"}),
    AmenityType.POOL: frozenset({"swimming_pool"}),
    AmenityType.POST_OFFICE: frozenset({"post_office"}),
    AmenityType.RELIGIOUS: frozenset({"place_of_worship", "religion"}),
    AmenityType.SCHOOL: frozenset({"school"}),
    AmenityType.SHOPPING: frozenset(
        {
            "department_store",
            "mall",
            "clothes",
            "shoes",
            "books",
            "gift",
            "hardware",
            "doityourself",
            "electronics",
            "furniture",
            "jewelry",
            "mobile_phone",
            "variety_store",
            "second_hand",
        }
    ),
    AmenityType.SUPERMARKET: frozenset({"supermarket", "greengrocer"}),
    AmenityType.TOURISM: frozenset({"gallery", "museum", "zoo", "attraction", "viewpoint"}),
    AmenityType.UNIVERSITY: frozenset({"college", "university"}),
}


@dataclass
class Amenity:
    """A named point of interest inside a building.

    ``names`` maps a language code to a name; the ``None`` key holds the
    default name. ``amenity_type`` keeps the raw source value, use
    :meth:`AmenityType.categorize` for a broad category.
    """

    names: Dict[Optional[str], str]
    amenity_type: str
    osm_tags: Tags = field(default_factory=Tags)

    def default_name(self) -> Optional[str]:
        return self.names.get(None)

    def category(self) -> Optional[AmenityType]:
        return AmenityType.categorize(self.amenity_type)
