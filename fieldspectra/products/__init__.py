"""
FieldSpectra Products Module

Satellite band metadata.
"""

from fieldspectra.products.sentinel2 import (
    NATIVE_RESOLUTION,
    SENTINEL2_BANDS,
    Sentinel2BandInfo,
    band_names,
    get_band,
    get_band_by_common_name,
)

__all__ = [
    "NATIVE_RESOLUTION",
    "SENTINEL2_BANDS",
    "Sentinel2BandInfo",
    "band_names",
    "get_band",
    "get_band_by_common_name",
]
