"""
FieldSpectra Render Module

Colour ramps and RGBA rendering of index rasters.
"""

from fieldspectra.render.colormap import (
    COLOR_SCHEMES,
    colorize,
    interpolate_color,
    resample_bilinear,
    scheme_for,
)

__all__ = [
    "COLOR_SCHEMES",
    "colorize",
    "interpolate_color",
    "resample_bilinear",
    "scheme_for",
]
