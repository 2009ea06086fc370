"""
Sentinel-2 Band Profile

Band metadata for the ten Sentinel-2 MSI bands carried by a BandSet, together
with the nominal reflectance range used when synthesizing each band.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Sentinel2BandInfo:
    """
    Sentinel-2 band metadata

    Attributes:
        native_name: Sentinel-2 band name (e.g., "B04")
        common_name: Descriptive name (e.g., "red")
        wavelength: Center wavelength in nanometers
        resolution: Native spatial resolution in meters (10m or 20m)
        bandwidth: Spectral bandwidth in nanometers
        reflectance_range: (min, max) reflectance used for synthetic data
    """

    native_name: str
    common_name: str
    wavelength: float
    resolution: float
    bandwidth: float
    reflectance_range: tuple[float, float]

    @property
    def span(self) -> float:
        low, high = self.reflectance_range
        return high - low


# Band order matches the Sentinel-2 L2A product layout
SENTINEL2_BANDS: dict[str, Sentinel2BandInfo] = {
    # 10m resolution bands
    "B02": Sentinel2BandInfo("B02", "blue", 490.0, 10.0, 65.0, (0.1, 0.2)),
    "B03": Sentinel2BandInfo("B03", "green", 560.0, 10.0, 35.0, (0.2, 0.3)),
    "B04": Sentinel2BandInfo("B04", "red", 665.0, 10.0, 30.0, (0.3, 0.4)),
    # 20m red edge triad
    "B05": Sentinel2BandInfo("B05", "red_edge_1", 705.0, 20.0, 15.0, (0.4, 0.5)),
    "B06": Sentinel2BandInfo("B06", "red_edge_2", 740.0, 20.0, 15.0, (0.5, 0.6)),
    "B07": Sentinel2BandInfo("B07", "red_edge_3", 783.0, 20.0, 20.0, (0.6, 0.7)),
    "B08": Sentinel2BandInfo("B08", "nir", 842.0, 10.0, 115.0, (0.7, 0.8)),
    "B8A": Sentinel2BandInfo("B8A", "nir_narrow", 865.0, 20.0, 20.0, (0.75, 0.85)),
    # 20m SWIR pair
    "B11": Sentinel2BandInfo("B11", "swir_1", 1610.0, 20.0, 90.0, (0.2, 0.4)),
    "B12": Sentinel2BandInfo("B12", "swir_2", 2190.0, 20.0, 180.0, (0.1, 0.3)),
}

# Acquisition resolution stamped on every synthesized dataset (meters/pixel)
NATIVE_RESOLUTION = 10


def band_names() -> list[str]:
    """Native band names in product order."""
    return list(SENTINEL2_BANDS)


def get_band(native_name: str) -> Sentinel2BandInfo:
    """
    Get band info by Sentinel-2 native name (e.g., "B04")

    Raises:
        KeyError: If band name not found

    Examples:
        >>> get_band("B08").common_name
        'nir'
    """
    try:
        return SENTINEL2_BANDS[native_name]
    except KeyError:
        raise KeyError(f"Band '{native_name}' not found in Sentinel-2 profile") from None


def get_band_by_common_name(common_name: str) -> Sentinel2BandInfo:
    """Look up a band by its descriptive name (e.g., "swir_1")."""
    for band_info in SENTINEL2_BANDS.values():
        if band_info.common_name == common_name:
            return band_info
    raise KeyError(f"Band '{common_name}' not found in Sentinel-2 profile")
