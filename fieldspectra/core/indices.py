"""
Spectral index calculator.

Per-pixel band algebra for the six indices derived from a SatelliteDataset.
Every function returns a new raster shaped like its first (primary) input.

Zero-division policy: wherever a formula's denominator is exactly zero the
output pixel is 0, never NaN or inf. Secondary inputs that do not cover the
primary grid (ragged or mismatched rows/columns) are zero-filled: uncovered
pixels are 0 in the output.

    NDVI        = (NIR - Red) / (NIR + Red)
    EVI         = 2.5 * (NIR - Red) / (NIR + 6*Red - 7.5*Blue + 1)
    SAVI        = (1 + L) * (NIR - Red) / (NIR + Red + L)
    NDWI        = (NIR - SWIR) / (NIR + SWIR)
    Chlorophyll = RedEdge / Red - 1
    LAI         = max(0, -ln(1 - NDVI) / 0.5)
"""

import logging
from collections.abc import Sequence
from enum import Enum
from typing import Any

import numpy as np
from numpy.typing import NDArray

from fieldspectra.core.dataset import Raster, SatelliteDataset, SpectralIndexSet

logger = logging.getLogger(__name__)

SAVI_L = 0.5
LAI_EXTINCTION = 0.5


class SpectralLayer(str, Enum):
    """Index layers that can be selected for visualization."""

    NDVI = "ndvi"
    EVI = "evi"
    SAVI = "savi"
    NDWI = "ndwi"
    CHLOROPHYLL = "chlorophyll"
    LAI = "lai"

    @classmethod
    def parse(cls, name: "str | SpectralLayer") -> "SpectralLayer":
        """Resolve an exact layer name; anything else falls back to NDVI."""
        if isinstance(name, cls):
            return name
        try:
            return cls(name)
        except ValueError:
            logger.debug("Unknown layer %r, falling back to ndvi", name)
            return cls.NDVI


def _to_grid(band: Any) -> tuple[NDArray[np.float64], NDArray[np.bool_]]:
    """
    Convert a band to a dense float grid plus a mask of real pixels.

    Ragged nested sequences are zero-padded to their longest row.
    """
    if isinstance(band, np.ndarray) and band.ndim == 2:
        return band.astype(np.float64, copy=False), np.ones(band.shape, dtype=bool)

    rows: Sequence = band
    width = max((len(row) for row in rows), default=0)
    grid = np.zeros((len(rows), width), dtype=np.float64)
    valid = np.zeros((len(rows), width), dtype=bool)
    for r, row in enumerate(rows):
        grid[r, : len(row)] = row
        valid[r, : len(row)] = True
    return grid, valid


def _align(*bands: Any) -> tuple[list[NDArray[np.float64]], NDArray[np.bool_]]:
    """
    Bring every band onto the primary band's grid.

    Returns the aligned arrays and the mask of pixels covered by all inputs.
    """
    primary, valid = _to_grid(bands[0])
    shape = primary.shape
    aligned = [primary]
    for band in bands[1:]:
        grid, mask = _to_grid(band)
        if grid.shape != shape:
            out = np.zeros(shape, dtype=np.float64)
            out_mask = np.zeros(shape, dtype=bool)
            rows = min(shape[0], grid.shape[0])
            cols = min(shape[1], grid.shape[1])
            out[:rows, :cols] = grid[:rows, :cols]
            out_mask[:rows, :cols] = mask[:rows, :cols]
            grid, mask = out, out_mask
        aligned.append(grid)
        valid = valid & mask
    return aligned, valid


def _safe_divide(numerator: NDArray, denominator: NDArray, valid: NDArray) -> Raster:
    """numerator / denominator, 0 where the denominator is 0 or the pixel is invalid."""
    out = np.zeros(numerator.shape, dtype=np.float64)
    np.divide(numerator, denominator, out=out, where=valid & (denominator != 0))
    return out


def calculate_ndvi(nir: Any, red: Any) -> Raster:
    """Normalized Difference Vegetation Index from NIR (B08) and Red (B04)."""
    (nir, red), valid = _align(nir, red)
    return _safe_divide(nir - red, nir + red, valid)


def calculate_evi(nir: Any, red: Any, blue: Any) -> Raster:
    """Enhanced Vegetation Index from NIR (B08), Red (B04) and Blue (B02)."""
    (nir, red, blue), valid = _align(nir, red, blue)
    return _safe_divide(2.5 * (nir - red), nir + 6 * red - 7.5 * blue + 1, valid)


def calculate_savi(nir: Any, red: Any, L: float = SAVI_L) -> Raster:
    """Soil Adjusted Vegetation Index with soil brightness factor L."""
    (nir, red), valid = _align(nir, red)
    return _safe_divide((1 + L) * (nir - red), nir + red + L, valid)


def calculate_ndwi(nir: Any, swir: Any) -> Raster:
    """Normalized Difference Water Index from NIR (B08) and SWIR (B11)."""
    (nir, swir), valid = _align(nir, swir)
    return _safe_divide(nir - swir, nir + swir, valid)


def calculate_chlorophyll_index(red_edge: Any, red: Any) -> Raster:
    """Red-edge chlorophyll proxy: RedEdge (B05) / Red (B04) - 1, 0 where Red is 0."""
    (red_edge, red), valid = _align(red_edge, red)
    ok = valid & (red != 0)
    return np.where(ok, _safe_divide(red_edge, red, ok) - 1, 0.0)


def calculate_lai(nir: Any, red: Any) -> Raster:
    """
    Leaf Area Index approximation from NDVI.

    NDVI is recomputed with the zero fallback. Where 1 - NDVI is not
    positive (NDVI == 1 when Red is 0, or above 1 for out-of-range input)
    the log is undefined and the pixel is 0.
    """
    ndvi = calculate_ndvi(nir, red)
    remainder = 1.0 - ndvi
    ok = remainder > 0
    log_term = np.zeros(ndvi.shape, dtype=np.float64)
    np.log(remainder, out=log_term, where=ok)
    return np.maximum(0.0, -log_term / LAI_EXTINCTION)


def calculate_spectral_indices(dataset: SatelliteDataset) -> SpectralIndexSet:
    """
    Derive all six index rasters from a dataset.

    Pure and idempotent: the same bands always give the same rasters.
    """
    b = dataset.bands
    return SpectralIndexSet(
        ndvi=calculate_ndvi(b.B08, b.B04),
        evi=calculate_evi(b.B08, b.B04, b.B02),
        savi=calculate_savi(b.B08, b.B04),
        ndwi=calculate_ndwi(b.B08, b.B11),
        chlorophyll=calculate_chlorophyll_index(b.B05, b.B04),
        lai=calculate_lai(b.B08, b.B04),
        attrs={
            "field_id": dataset.field_id,
            "acquisition_date": dataset.metadata.acquisition_date,
        },
    )


def get_visualization_data(indices: SpectralIndexSet, layer: "str | SpectralLayer") -> Raster:
    """
    Select one index raster for display.

    Unknown layer names resolve to NDVI instead of raising.
    """
    return indices[SpectralLayer.parse(layer).value]
