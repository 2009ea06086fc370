"""
Dataset types for FieldSpectra

A SatelliteDataset pairs a BandSet (ten co-registered Sentinel-2 bands) with
its AcquisitionMetadata. A SpectralIndexSet holds the six rasters derived
from a dataset. Rasters are 2D float64 numpy arrays.
"""

from collections.abc import Iterator
from dataclasses import dataclass, field, fields
from typing import TYPE_CHECKING, Any

import numpy as np
import xarray as xr
from numpy.typing import NDArray

from fieldspectra.catalog.fields import Coordinate
from fieldspectra.core.exceptions import ValidationError
from fieldspectra.products.sentinel2 import SENTINEL2_BANDS

if TYPE_CHECKING:
    from fieldspectra.catalog.fields import FieldGeometry

Raster = NDArray[np.float64]

INDEX_NAMES = ("ndvi", "evi", "savi", "ndwi", "chlorophyll", "lai")


def _spatial_coords(shape: tuple[int, int], field_geometry: "FieldGeometry | None") -> dict:
    """Pixel-center lat/lon coordinates spanning the field bounding box."""
    if field_geometry is None:
        return {}
    rows, cols = shape
    b = field_geometry.bounds
    lat_step = (b.north - b.south) / rows
    lon_step = (b.east - b.west) / cols
    return {
        "y": b.north - lat_step * (np.arange(rows) + 0.5),
        "x": b.west + lon_step * (np.arange(cols) + 0.5),
    }


@dataclass(frozen=True, eq=False)
class BandSet:
    """
    The ten Sentinel-2 bands of one acquisition.

    All bands are 2D and share one square shape; this is checked on
    construction so consumers can index band pairs without re-checking.

    Examples:
        >>> bands = synthesize_band_set(80)
        >>> bands.shape
        (80, 80)
        >>> red = bands["B04"]
    """

    B02: Raster  # Blue (490nm)
    B03: Raster  # Green (560nm)
    B04: Raster  # Red (665nm)
    B05: Raster  # Red Edge (705nm)
    B06: Raster  # Red Edge (740nm)
    B07: Raster  # Red Edge (783nm)
    B08: Raster  # NIR (842nm)
    B8A: Raster  # Narrow NIR (865nm)
    B11: Raster  # SWIR (1610nm)
    B12: Raster  # SWIR (2190nm)

    def __post_init__(self):
        shape = None
        for name in self.names():
            band = np.asarray(getattr(self, name), dtype=np.float64)
            if band.ndim != 2:
                raise ValidationError(f"Band {name} must be 2D, got shape {band.shape}")
            if band.shape[0] != band.shape[1]:
                raise ValidationError(f"Band {name} must be square, got shape {band.shape}")
            if shape is None:
                shape = band.shape
            elif band.shape != shape:
                raise ValidationError(
                    f"Band {name} has shape {band.shape}, expected {shape}"
                )
            object.__setattr__(self, name, band)

    @staticmethod
    def names() -> list[str]:
        return [f.name for f in fields(BandSet)]

    @property
    def shape(self) -> tuple[int, int]:
        return self.B02.shape

    def __getitem__(self, name: str) -> Raster:
        if name not in SENTINEL2_BANDS:
            raise KeyError(f"Band '{name}' not found. Available: {self.names()}")
        return getattr(self, name)

    def __iter__(self) -> Iterator[str]:
        return iter(self.names())

    def __len__(self) -> int:
        return len(SENTINEL2_BANDS)

    def as_dict(self) -> dict[str, Raster]:
        return {name: getattr(self, name) for name in self.names()}

    @classmethod
    def from_dict(cls, bands: dict[str, Any]) -> "BandSet":
        missing = [name for name in cls.names() if name not in bands]
        if missing:
            raise ValidationError(f"Missing bands: {missing}")
        return cls(**{name: bands[name] for name in cls.names()})

    def stack(self) -> Raster:
        """All bands as one (band, y, x) array."""
        return np.stack([getattr(self, name) for name in self.names()])


@dataclass(frozen=True)
class AcquisitionMetadata:
    """
    Acquisition metadata

    Attributes:
        acquisition_date: ISO date string (YYYY-MM-DD)
        cloud_cover: Cloud cover percentage
        resolution: Ground sampling distance in meters/pixel
        coordinates: Field center
    """

    acquisition_date: str
    cloud_cover: float
    resolution: int
    coordinates: Coordinate

    def to_dict(self) -> dict[str, Any]:
        return {
            "acquisition_date": self.acquisition_date,
            "cloud_cover": self.cloud_cover,
            "resolution": self.resolution,
            "coordinates": self.coordinates.to_dict(),
        }


# eq=False keeps identity semantics; cached datasets are compared by reference
@dataclass(eq=False)
class SatelliteDataset:
    """
    A BandSet together with its acquisition metadata.

    Attributes:
        bands: The ten spectral bands
        metadata: Acquisition metadata
        field_id: Field the data was synthesized for
    """

    bands: BandSet
    metadata: AcquisitionMetadata
    field_id: str = ""

    @property
    def shape(self) -> tuple[int, int]:
        return self.bands.shape

    def to_xarray(self, field_geometry: "FieldGeometry | None" = None) -> xr.Dataset:
        """
        Convert to an xarray Dataset with a single ``data`` variable.

        Dimensions are (band, y, x) with band names as coordinates. When the
        field geometry is given, y/x carry latitude/longitude pixel centers.
        """
        coords: dict[str, Any] = {"band": self.bands.names()}
        coords.update(_spatial_coords(self.shape, field_geometry))
        da = xr.DataArray(self.bands.stack(), dims=["band", "y", "x"], coords=coords)
        ds = da.to_dataset(name="data")
        ds.attrs = {
            "field_id": self.field_id,
            "acquisition_date": self.metadata.acquisition_date,
            "cloud_cover": self.metadata.cloud_cover,
            "resolution": self.metadata.resolution,
            "center_lat": self.metadata.coordinates.lat,
            "center_lon": self.metadata.coordinates.lon,
        }
        return ds

    def __repr__(self) -> str:
        return (
            f"<SatelliteDataset: {self.field_id or '?'} @ {self.metadata.acquisition_date}>\n"
            f"  Bands: {len(self.bands)} x {self.shape[0]}x{self.shape[1]}\n"
            f"  Cloud cover: {self.metadata.cloud_cover:.1f}%"
        )


@dataclass(frozen=True, eq=False)
class SpectralIndexSet:
    """Six index rasters derived from one SatelliteDataset."""

    ndvi: Raster
    evi: Raster
    savi: Raster
    ndwi: Raster
    chlorophyll: Raster
    lai: Raster
    attrs: dict[str, Any] = field(default_factory=dict)

    def __getitem__(self, name: str) -> Raster:
        if name not in INDEX_NAMES:
            raise KeyError(f"Index '{name}' not found. Available: {list(INDEX_NAMES)}")
        return getattr(self, name)

    @property
    def shape(self) -> tuple[int, int]:
        return self.ndvi.shape

    def as_dict(self) -> dict[str, Raster]:
        return {name: getattr(self, name) for name in INDEX_NAMES}

    def to_xarray(self, field_geometry: "FieldGeometry | None" = None) -> xr.Dataset:
        """One (y, x) variable per index."""
        coords = _spatial_coords(self.shape, field_geometry)
        return xr.Dataset(
            {name: (("y", "x"), raster) for name, raster in self.as_dict().items()},
            coords=coords,
            attrs=dict(self.attrs),
        )
