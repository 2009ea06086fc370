"""
FieldSpectra - Synthetic Sentinel-2 field imagery and spectral indices

Synthesizes ten-band Sentinel-2 rasters with agricultural field structure,
derives vegetation/water indices, and caches datasets per field and date.

Quick Start:
    >>> import asyncio
    >>> import fieldspectra as fs
    >>>
    >>> service = fs.Sentinel2Service(fs.ServiceConfig(fetch_delay=0.0))
    >>> dataset = asyncio.run(service.fetch_sentinel2_data("field-1"))
    >>> indices = service.calculate_spectral_indices(dataset)
    >>> ndvi = service.get_visualization_data(indices, "ndvi")
    >>>
    >>> # xarray view
    >>> ds = dataset.to_xarray(service.get_field("field-1"))
    >>> ds.spectral("(B08 - B04) / (B08 + B04)")
"""

from fieldspectra.core import (
    INDEX_NAMES,
    AcquisitionMetadata,
    # Classes
    BandSet,
    # Exceptions
    ExportError,
    FieldSpectraError,
    LRUCache,
    SatelliteDataset,
    Sentinel2Service,
    ServiceConfig,
    SpectralIndexSet,
    SpectralLayer,
    UnknownFieldError,
    ValidationError,
    # Functions
    calculate_spectral_indices,
    generate_band,
    get_visualization_data,
    synthesize_band_set,
)
from fieldspectra.catalog import FIELD_COORDINATES, FieldGeometry, FieldRegistry

# Register xarray accessor (ds.spectral.ndvi(), etc.)
import fieldspectra.core.spectral

__version__ = "0.1.0"

__all__ = [
    "FIELD_COORDINATES",
    "INDEX_NAMES",
    "AcquisitionMetadata",
    "BandSet",
    "ExportError",
    "FieldGeometry",
    "FieldRegistry",
    "FieldSpectraError",
    "LRUCache",
    "SatelliteDataset",
    "Sentinel2Service",
    "ServiceConfig",
    "SpectralIndexSet",
    "SpectralLayer",
    "UnknownFieldError",
    "ValidationError",
    "__version__",
    "calculate_spectral_indices",
    "colorize",
    "export_dataset",
    "export_indices",
    "generate_band",
    "get_visualization_data",
    "summarize_indices",
    "synthesize_band_set",
]


# Lazy imports (rasterio, scipy and pandas are only loaded when used)
def __getattr__(name):
    if name == "export_dataset":
        from fieldspectra.io.export import export_dataset

        return export_dataset
    elif name == "export_indices":
        from fieldspectra.io.export import export_indices

        return export_indices
    elif name == "colorize":
        from fieldspectra.render.colormap import colorize

        return colorize
    elif name == "summarize_indices":
        from fieldspectra.core.stats import summarize_indices

        return summarize_indices
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
