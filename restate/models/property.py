"""
Property vocabulary shared by the repositories, the seeder and the API.
Holds the property type and facility enumerations and the attribute names
used by the properties collection.
"""

import enum
from typing import List, Dict


class PropertyType(str, enum.Enum):
    """Property type enumeration, stored verbatim in the collection."""
    HOUSE = "House"
    TOWNHOUSE = "Townhouse"
    CONDO = "Condo"
    DUPLEX = "Duplex"
    STUDIO = "Studio"
    VILLA = "Villa"
    APARTMENT = "Apartment"
    OTHER = "Other"


class Facility(str, enum.Enum):
    """Facilities a property can list."""
    LAUNDRY = "Laundry"
    PARKING = "Parking"
    GYM = "Gym"
    WIFI = "wifi"
    PET_FRIENDLY = "Pet-friendly"


# Attribute names as declared in the properties collection schema
TYPE_ATTRIBUTE = "properties"
FACILITIES_ATTRIBUTE = "facillites"
NAME_ATTRIBUTE = "name"

# Reviews and galleries reference their property through this attribute
PROPERTY_REFERENCE_ATTRIBUTE = "property"

CREATED_AT_ATTRIBUTE = "$createdAt"

# Category filter value meaning "no type filter"
ALL_CATEGORIES = "All"

CATEGORIES: List[Dict[str, str]] = [
    {"title": "All", "category": ALL_CATEGORIES},
    {"title": "Houses", "category": PropertyType.HOUSE.value},
    {"title": "Condos", "category": PropertyType.CONDO.value},
    {"title": "Duplexes", "category": PropertyType.DUPLEX.value},
    {"title": "Studios", "category": PropertyType.STUDIO.value},
    {"title": "Villas", "category": PropertyType.VILLA.value},
    {"title": "Apartments", "category": PropertyType.APARTMENT.value},
    {"title": "Townhomes", "category": PropertyType.TOWNHOUSE.value},
    {"title": "Others", "category": PropertyType.OTHER.value},
]


def category_names() -> List[str]:
    """Valid values for the category filter."""
    return [item["category"] for item in CATEGORIES]
