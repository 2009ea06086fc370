"""
Synthetic Sentinel-2 band generation.

Each band is a square grid with agricultural field structure: three column
zones of differing crop health, an irrigated lower half, crop row/furrow
ripples, random field variation, edge decay and two stressed patches
(disease/pest areas).

Usage:
    >>> import numpy as np
    >>> red = generate_band(80, 0.3, 0.4, rng=np.random.default_rng(0))
    >>> bands = synthesize_band_set(80)
"""

import logging
from typing import Protocol

import numpy as np
from numpy.typing import NDArray

from fieldspectra.core.dataset import BandSet
from fieldspectra.core.exceptions import ValidationError
from fieldspectra.products.sentinel2 import SENTINEL2_BANDS

logger = logging.getLogger(__name__)

# Fractions of the [min, max] span
BASE_LEVEL = 0.6
HEALTHY_ZONE_BIAS = 0.25
STRESSED_ZONE_BIAS = -0.15
IRRIGATED_ZONE_BIAS = 0.1

# Absolute reflectance offsets
ROW_AMPLITUDE = 0.03
COLUMN_AMPLITUDE = 0.02
NOISE_AMPLITUDE = 0.08
EDGE_PENALTY = -0.08
EDGE_RADIUS = 0.45

# (row_start, row_stop, col_start, col_stop) as fractions of size, and offset
STRESS_PATCHES = (
    ((0.6, 0.8, 0.1, 0.3), -0.15),
    ((0.2, 0.4, 0.7, 0.9), -0.10),
)


class NoiseSource(Protocol):
    """Anything with a numpy-Generator-style ``random`` method."""

    def random(self, size=None): ...


def generate_band(
    size: int,
    min_value: float,
    max_value: float,
    rng: NoiseSource | None = None,
) -> NDArray[np.float64]:
    """
    Generate one synthetic band.

    Args:
        size: Grid edge length; the result is size x size
        min_value: Nominal lower reflectance of the band
        max_value: Nominal upper reflectance of the band
        rng: Uniform [0, 1) noise source. Defaults to a fresh unseeded
             numpy Generator. Pass a seeded Generator (or a stub returning
             0.5 everywhere) for reproducible output.

    Returns:
        float64 array of shape (size, size) clamped to [0, 1]. The clamp is
        to the unit interval, not to [min_value, max_value].

    Raises:
        ValidationError: If size is not a positive integer
    """
    if size <= 0:
        raise ValidationError(f"Band size must be positive, got {size}")
    if rng is None:
        rng = np.random.default_rng()

    span = max_value - min_value
    i = np.arange(size, dtype=np.float64)[:, None]  # rows
    j = np.arange(size, dtype=np.float64)[None, :]  # columns

    zone_x = np.floor(j / (size / 3))
    zone_y = np.floor(i / (size / 2))

    value = np.full((size, size), min_value + span * BASE_LEVEL)
    value += np.where(zone_x == 0, span * HEALTHY_ZONE_BIAS, 0.0)
    value += np.where(zone_x == 2, span * STRESSED_ZONE_BIAS, 0.0)
    value += np.where(zone_y == 1, span * IRRIGATED_ZONE_BIAS, 0.0)

    # Crop rows and furrows
    value += np.sin(j * 0.8) * ROW_AMPLITUDE
    value += np.cos(i * 0.6) * COLUMN_AMPLITUDE

    value += (np.asarray(rng.random((size, size)), dtype=np.float64) - 0.5) * NOISE_AMPLITUDE

    distance = np.sqrt((i - size / 2) ** 2 + (j - size / 2) ** 2)
    value += np.where(distance > size * EDGE_RADIUS, EDGE_PENALTY, 0.0)

    for (r0, r1, c0, c1), offset in STRESS_PATCHES:
        inside = (
            (i >= size * r0) & (i < size * r1) & (j >= size * c0) & (j < size * c1)
        )
        value += np.where(inside, offset, 0.0)

    return np.clip(value, 0.0, 1.0)


def synthesize_band_set(size: int, rng: NoiseSource | None = None) -> BandSet:
    """
    Generate all ten Sentinel-2 bands at a common grid size.

    Band ranges come from the Sentinel-2 profile; all bands share ``rng``.
    """
    if rng is None:
        rng = np.random.default_rng()

    bands = {
        name: generate_band(size, *info.reflectance_range, rng=rng)
        for name, info in SENTINEL2_BANDS.items()
    }
    logger.debug("Synthesized %d bands at %dx%d", len(bands), size, size)
    return BandSet(**bands)
