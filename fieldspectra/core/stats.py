"""
Summary statistics over index rasters.

Tables are pandas DataFrames so they print cleanly from the CLI and can be
joined with other field data.
"""

import numpy as np
import pandas as pd

from fieldspectra.core.dataset import Raster, SpectralIndexSet

ZONE_COLUMNS = 3
ZONE_ROWS = 2


def summarize_indices(indices: SpectralIndexSet) -> pd.DataFrame:
    """
    Mean, standard deviation, min and max of every index.

    Returns:
        DataFrame indexed by index name with columns mean/std/min/max
    """
    rows = {
        name: {
            "mean": float(np.mean(raster)),
            "std": float(np.std(raster)),
            "min": float(np.min(raster)),
            "max": float(np.max(raster)),
        }
        for name, raster in indices.as_dict().items()
    }
    df = pd.DataFrame.from_dict(rows, orient="index", columns=["mean", "std", "min", "max"])
    df.index.name = "index"
    return df


def zone_labels(size: int) -> tuple[np.ndarray, np.ndarray]:
    """
    Zone row/column of every pixel on a size x size grid.

    Uses the same partition as the band synthesizer: three column zones and
    two row zones.
    """
    i = np.arange(size)
    zone_y = np.floor(i / (size / ZONE_ROWS)).astype(int)
    zone_x = np.floor(i / (size / ZONE_COLUMNS)).astype(int)
    return zone_y, zone_x


def zone_means(raster: Raster) -> pd.DataFrame:
    """
    Mean value per synthetic zone.

    Returns:
        DataFrame with one row per zone_y and one column per zone_x
    """
    raster = np.asarray(raster, dtype=np.float64)
    rows, cols = raster.shape
    zone_y, _ = zone_labels(rows)
    _, zone_x = zone_labels(cols)

    yy, xx = np.meshgrid(zone_y, zone_x, indexing="ij")
    df = pd.DataFrame({"zone_y": yy.ravel(), "zone_x": xx.ravel(), "value": raster.ravel()})
    return df.pivot_table(index="zone_y", columns="zone_x", values="value", aggfunc="mean")
