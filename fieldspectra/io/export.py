"""
GeoTIFF export for synthesized datasets and index rasters.

Rasters are written as float32 multi-band GeoTIFFs in EPSG:4326, with the
transform stretched over the field bounding box and one band description
per layer name.
"""

import logging
from collections.abc import Mapping
from pathlib import Path

import numpy as np
import rasterio
from rasterio.crs import CRS
from rasterio.errors import RasterioError
from rasterio.transform import from_bounds

from fieldspectra.catalog.fields import Bounds, FieldGeometry
from fieldspectra.core.dataset import SatelliteDataset, SpectralIndexSet
from fieldspectra.core.exceptions import ExportError, ValidationError

logger = logging.getLogger(__name__)

CRS_EPSG = 4326


def write_geotiff(
    path: str | Path,
    rasters: Mapping[str, np.ndarray],
    bounds: Bounds,
    tags: Mapping[str, object] | None = None,
) -> Path:
    """
    Write named 2D rasters as one multi-band GeoTIFF.

    Args:
        path: Output file path (parent directories are created)
        rasters: Ordered mapping of band description to 2D array; all arrays
                 must share one shape
        bounds: Geographic extent of the raster grid
        tags: Optional dataset-level metadata tags

    Returns:
        Path of the written file

    Raises:
        ValidationError: If rasters is empty or shapes differ
        ExportError: If rasterio fails to write the file
    """
    if not rasters:
        raise ValidationError("No rasters to export")

    names = list(rasters)
    shapes = {n: np.shape(rasters[n]) for n in names}
    if len(set(shapes.values())) != 1 or len(shapes[names[0]]) != 2:
        raise ValidationError(f"Rasters must be 2D with a common shape, got {shapes}")

    stack = np.stack([np.asarray(rasters[n], dtype=np.float32) for n in names])
    count, height, width = stack.shape
    out_path = Path(path)
    out_path.parent.mkdir(parents=True, exist_ok=True)

    profile = {
        "driver": "GTiff",
        "dtype": "float32",
        "width": width,
        "height": height,
        "count": count,
        "crs": CRS.from_epsg(CRS_EPSG),
        "transform": from_bounds(*bounds.as_tuple(), width, height),
        "compress": "deflate",
    }

    try:
        with rasterio.open(str(out_path), "w", **profile) as dst:
            for i, name in enumerate(names, 1):
                dst.write(stack[i - 1], i)
                dst.set_band_description(i, name)
            if tags:
                dst.update_tags(**{k: str(v) for k, v in tags.items()})
    except RasterioError as e:
        raise ExportError(f"Failed to write {out_path}: {e}") from e

    logger.info("Wrote %d-band GeoTIFF: %s", count, out_path)
    return out_path


def export_dataset(
    dataset: SatelliteDataset, field: FieldGeometry, path: str | Path
) -> Path:
    """Write the ten spectral bands of a dataset."""
    tags = {"field_id": field.id, "field_name": field.name, **dataset.metadata.to_dict()}
    tags.pop("coordinates")
    return write_geotiff(path, dataset.bands.as_dict(), field.bounds, tags=tags)


def export_indices(
    indices: SpectralIndexSet, field: FieldGeometry, path: str | Path
) -> Path:
    """Write the six index rasters."""
    tags = {"field_id": field.id, "field_name": field.name, **indices.attrs}
    return write_geotiff(path, indices.as_dict(), field.bounds, tags=tags)
