"""
FieldSpectra Catalog Module

Static field geometry lookup.
"""

from fieldspectra.catalog.fields import (
    FIELD_COORDINATES,
    Bounds,
    Coordinate,
    FieldGeometry,
    FieldRegistry,
)

__all__ = [
    "FIELD_COORDINATES",
    "Bounds",
    "Coordinate",
    "FieldGeometry",
    "FieldRegistry",
]
