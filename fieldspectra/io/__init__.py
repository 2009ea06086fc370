"""
FieldSpectra I/O Module

GeoTIFF export.
"""

from fieldspectra.io.export import export_dataset, export_indices, write_geotiff

__all__ = [
    "export_dataset",
    "export_indices",
    "write_geotiff",
]
