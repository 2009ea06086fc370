"""
FieldSpectra Core Module

Band synthesis, index calculation, dataset types, the cached service,
configuration and exceptions.
"""

from fieldspectra.core.exceptions import (
    ExportError,
    FieldSpectraError,
    UnknownFieldError,
    ValidationError,
)
from fieldspectra.core.config import ServiceConfig
from fieldspectra.core.dataset import (
    INDEX_NAMES,
    AcquisitionMetadata,
    BandSet,
    SatelliteDataset,
    SpectralIndexSet,
)
from fieldspectra.core.synthesis import generate_band, synthesize_band_set
from fieldspectra.core.indices import (
    SpectralLayer,
    calculate_chlorophyll_index,
    calculate_evi,
    calculate_lai,
    calculate_ndvi,
    calculate_ndwi,
    calculate_savi,
    calculate_spectral_indices,
    get_visualization_data,
)
from fieldspectra.core.cache import LRUCache
from fieldspectra.core.service import Sentinel2Service

__all__ = [
    # Types
    "INDEX_NAMES",
    "AcquisitionMetadata",
    "BandSet",
    "SatelliteDataset",
    "SpectralIndexSet",
    "SpectralLayer",
    # Service
    "LRUCache",
    "Sentinel2Service",
    "ServiceConfig",
    # Functions
    "calculate_chlorophyll_index",
    "calculate_evi",
    "calculate_lai",
    "calculate_ndvi",
    "calculate_ndwi",
    "calculate_savi",
    "calculate_spectral_indices",
    "generate_band",
    "get_visualization_data",
    "synthesize_band_set",
    # Exceptions
    "ExportError",
    "FieldSpectraError",
    "UnknownFieldError",
    "ValidationError",
]
