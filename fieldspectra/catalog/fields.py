"""
Field catalog for FieldSpectra.

Static geometry (bounding box and center point) for the demo fields. The
geometry is only used to stamp acquisition metadata and to georeference
exported rasters; it is never mutated by the service.
"""

import logging
from dataclasses import dataclass
from typing import Any

from shapely.geometry import Polygon, box

from fieldspectra.core.exceptions import UnknownFieldError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Coordinate:
    """Latitude/longitude pair in decimal degrees."""

    lat: float
    lon: float

    def to_dict(self) -> dict[str, float]:
        return {"lat": self.lat, "lon": self.lon}


@dataclass(frozen=True)
class Bounds:
    """Geographic bounding box in decimal degrees."""

    north: float
    south: float
    east: float
    west: float

    def as_tuple(self) -> tuple[float, float, float, float]:
        """(west, south, east, north), the order rasterio and shapely expect."""
        return (self.west, self.south, self.east, self.north)

    def to_dict(self) -> dict[str, float]:
        return {"north": self.north, "south": self.south, "east": self.east, "west": self.west}


@dataclass(frozen=True)
class FieldGeometry:
    """
    Static description of a monitored field.

    Attributes:
        id: Field identifier (e.g. "field-1")
        name: Display name
        bounds: Bounding box
        center: Center coordinate copied into acquisition metadata

    Examples:
        >>> field = FIELD_COORDINATES["field-1"]
        >>> field.name
        'North Field'
        >>> field.polygon.bounds
        (77.1005, 28.7021, 77.1025, 28.7041)
    """

    id: str
    name: str
    bounds: Bounds
    center: Coordinate

    @property
    def polygon(self) -> Polygon:
        """Bounding box as a shapely polygon."""
        return box(*self.bounds.as_tuple())

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "bounds": self.bounds.to_dict(),
            "center": self.center.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "FieldGeometry":
        return cls(
            id=data["id"],
            name=data.get("name", data["id"]),
            bounds=Bounds(**data["bounds"]),
            center=Coordinate(**data["center"]),
        )

    def __repr__(self):
        return (
            f"<FieldGeometry: {self.id}>\n"
            f"  Name: {self.name}\n"
            f"  Center: ({self.center.lat}, {self.center.lon})"
        )


# Demo fields near Delhi
FIELD_COORDINATES: dict[str, FieldGeometry] = {
    "field-1": FieldGeometry(
        id="field-1",
        name="North Field",
        bounds=Bounds(north=28.7041, south=28.7021, east=77.1025, west=77.1005),
        center=Coordinate(lat=28.7031, lon=77.1015),
    ),
    "field-2": FieldGeometry(
        id="field-2",
        name="South Field",
        bounds=Bounds(north=28.7021, south=28.7001, east=77.1025, west=77.1005),
        center=Coordinate(lat=28.7011, lon=77.1015),
    ),
    "field-3": FieldGeometry(
        id="field-3",
        name="East Field",
        bounds=Bounds(north=28.7041, south=28.7011, east=77.1045, west=77.1025),
        center=Coordinate(lat=28.7026, lon=77.1035),
    ),
}


class FieldRegistry:
    """
    In-memory lookup table of field geometries.

    Starts from the built-in demo fields; additional fields can be registered
    per registry instance without touching the module-level table.
    """

    def __init__(self, fields: dict[str, FieldGeometry] | None = None):
        self._fields: dict[str, FieldGeometry] = dict(
            FIELD_COORDINATES if fields is None else fields
        )

    def register(self, field: FieldGeometry) -> None:
        """Register a field geometry."""
        self._fields[field.id] = field
        logger.info("Registered field: %s (%s)", field.id, field.name)

    def get(self, field_id: str) -> FieldGeometry | None:
        """Get a field by id, or None if unknown."""
        return self._fields.get(field_id)

    def require(self, field_id: str) -> FieldGeometry:
        """
        Get a field by id.

        Raises:
            UnknownFieldError: If the field id is not registered
        """
        field = self._fields.get(field_id)
        if field is None:
            raise UnknownFieldError(field_id)
        return field

    def list_fields(self) -> list[str]:
        """List all registered field ids."""
        return sorted(self._fields)

    def __contains__(self, field_id: object) -> bool:
        return field_id in self._fields

    def __len__(self) -> int:
        return len(self._fields)
