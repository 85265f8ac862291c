"""
Domain vocabulary for ReState listings.
"""

from restate.models.property import (
    PropertyType,
    Facility,
    CATEGORIES,
    ALL_CATEGORIES,
    category_names,
)

__all__ = [
    "PropertyType",
    "Facility",
    "CATEGORIES",
    "ALL_CATEGORIES",
    "category_names",
]
