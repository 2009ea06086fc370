"""
Colour ramps for index rasters.

Each scheme is a list of (value, (r, g, b)) stops; values between stops are
linearly interpolated and values outside the ramp are clamped to its ends.
Rasters are upsampled bilinearly before colouring for smoother overlays.
"""

import logging

import numpy as np
from numpy.typing import NDArray
from scipy.ndimage import zoom

from fieldspectra.core.indices import SpectralLayer

logger = logging.getLogger(__name__)

ColorStop = tuple[float, tuple[int, int, int]]

COLOR_SCHEMES: dict[str, list[ColorStop]] = {
    "ndvi": [
        (-1.0, (139, 69, 19)),  # bare soil / dead vegetation
        (0.0, (255, 255, 0)),  # sparse vegetation
        (0.3, (173, 255, 47)),  # moderate vegetation
        (0.6, (0, 255, 0)),  # healthy vegetation
        (1.0, (0, 100, 0)),  # very healthy vegetation
    ],
    "evi": [
        (-1.0, (139, 69, 19)),
        (0.0, (255, 165, 0)),
        (0.4, (255, 255, 0)),
        (0.8, (0, 255, 0)),
        (1.0, (0, 128, 0)),
    ],
    "savi": [
        (-1.0, (165, 42, 42)),
        (0.0, (255, 140, 0)),
        (0.3, (255, 215, 0)),
        (0.6, (50, 205, 50)),
        (1.0, (34, 139, 34)),
    ],
    "chlorophyll": [
        (-1.0, (255, 0, 0)),
        (0.0, (255, 255, 0)),
        (0.5, (173, 255, 47)),
        (1.0, (0, 255, 0)),
        (2.0, (0, 100, 0)),
    ],
    "water": [
        (-1.0, (139, 69, 19)),
        (0.0, (255, 165, 0)),
        (0.3, (135, 206, 235)),
        (0.6, (0, 191, 255)),
        (1.0, (0, 0, 255)),
    ],
    "stress": [
        (0.0, (0, 255, 0)),  # no stress
        (0.3, (255, 255, 0)),
        (0.6, (255, 165, 0)),
        (1.0, (255, 0, 0)),  # high stress
    ],
}

# Layers whose ramp is named differently; anything else without a ramp uses ndvi
_LAYER_SCHEMES = {SpectralLayer.NDWI.value: "water"}


def scheme_for(layer: "str | SpectralLayer") -> list[ColorStop]:
    """Colour ramp for a layer or scheme name, defaulting to ndvi."""
    name = layer.value if isinstance(layer, SpectralLayer) else str(layer)
    name = _LAYER_SCHEMES.get(name, name)
    if name not in COLOR_SCHEMES:
        logger.debug("No colour scheme for %r, using ndvi", layer)
        return COLOR_SCHEMES["ndvi"]
    return COLOR_SCHEMES[name]


def interpolate_color(value: float, scheme: list[ColorStop]) -> tuple[int, int, int]:
    """
    Colour for a single value.

    Examples:
        >>> interpolate_color(0.0, COLOR_SCHEMES["ndvi"])
        (255, 255, 0)
    """
    low, high = scheme[0][0], scheme[-1][0]
    value = max(low, min(high, value))
    for (v0, c0), (v1, c1) in zip(scheme, scheme[1:]):
        if v0 <= value <= v1:
            t = (value - v0) / (v1 - v0)
            return tuple(int(np.floor(a + t * (b - a) + 0.5)) for a, b in zip(c0, c1))
    return scheme[0][1]


def resample_bilinear(raster: NDArray, shape: tuple[int, int]) -> NDArray[np.float64]:
    """Bilinear resample of a 2D raster to ``shape`` (height, width)."""
    raster = np.asarray(raster, dtype=np.float64)
    if raster.shape == tuple(shape):
        return raster.copy()
    factors = (shape[0] / raster.shape[0], shape[1] / raster.shape[1])
    return zoom(raster, factors, order=1, mode="nearest", grid_mode=False)


def colorize(
    raster: NDArray,
    layer: "str | SpectralLayer" = SpectralLayer.NDVI,
    shape: tuple[int, int] | None = None,
) -> NDArray[np.uint8]:
    """
    Render a raster to an RGBA image.

    Args:
        raster: 2D index values
        layer: Layer or scheme name selecting the colour ramp
        shape: Optional output (height, width); bilinear upsampling is applied

    Returns:
        uint8 array of shape (height, width, 4), fully opaque
    """
    values = np.asarray(raster, dtype=np.float64)
    if shape is not None:
        values = resample_bilinear(values, shape)

    scheme = scheme_for(layer)
    stops = np.array([v for v, _ in scheme])
    colors = np.array([c for _, c in scheme], dtype=np.float64)

    # np.interp clamps outside the stop range, matching interpolate_color
    rgba = np.empty(values.shape + (4,), dtype=np.uint8)
    for channel in range(3):
        rgba[..., channel] = np.floor(np.interp(values, stops, colors[:, channel]) + 0.5)
    rgba[..., 3] = 255
    return rgba
