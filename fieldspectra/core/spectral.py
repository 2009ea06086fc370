"""
Spectral index accessor for xarray Datasets.

Works on datasets produced by ``SatelliteDataset.to_xarray()``: a variable
with a ``band`` dimension whose coordinates are Sentinel-2 band names.
Named indices go through the same kernels as calculate_spectral_indices;
free-form expressions may reference bands by name or index.

Usage:
    >>> ds = dataset.to_xarray()
    >>> ndvi = ds.spectral.ndvi()
    >>> ratio = ds.spectral("B08 / B04")
    >>> same = ds.spectral("(b6 - b2) / (b6 + b2)")
"""

import numpy as np
import xarray as xr

from fieldspectra.core import indices as _indices
from fieldspectra.core.dataset import INDEX_NAMES, BandSet
from fieldspectra.core.exceptions import ValidationError


@xr.register_dataset_accessor("spectral")
class SpectralAccessor:
    """
    xarray Dataset accessor for Sentinel-2 index math.

    Bands can be referenced by:
    - Name: B02, B03, ..., B8A, B11, B12
    - Index: b0, b1, b2, ... (order matches the band dimension)
    """

    def __init__(self, ds: xr.Dataset):
        self._ds = ds
        self._var = self._detect_var()

    def _detect_var(self) -> str:
        """Find the primary data variable with a 'band' dimension."""
        for name, var in self._ds.data_vars.items():
            if "band" in var.dims:
                return name
        raise ValidationError("Dataset has no variable with a 'band' dimension")

    @property
    def bands(self) -> dict[str, str]:
        """Index references mapped to band names."""
        da = self._ds[self._var]
        return {f"b{i}": str(name) for i, name in enumerate(da.coords["band"].values)}

    def band(self, name: str) -> xr.DataArray:
        return self._ds[self._var].sel(band=name)

    def _index(self, func, *band_names: str, name: str) -> xr.DataArray:
        sources = [self.band(b) for b in band_names]
        template = sources[0]
        values = func(*(s.values for s in sources))
        coords = {k: v for k, v in template.coords.items() if k != "band"}
        return xr.DataArray(values, dims=template.dims, coords=coords, name=name)

    def ndvi(self) -> xr.DataArray:
        return self._index(_indices.calculate_ndvi, "B08", "B04", name="ndvi")

    def evi(self) -> xr.DataArray:
        return self._index(_indices.calculate_evi, "B08", "B04", "B02", name="evi")

    def savi(self) -> xr.DataArray:
        return self._index(_indices.calculate_savi, "B08", "B04", name="savi")

    def ndwi(self) -> xr.DataArray:
        return self._index(_indices.calculate_ndwi, "B08", "B11", name="ndwi")

    def chlorophyll(self) -> xr.DataArray:
        return self._index(_indices.calculate_chlorophyll_index, "B05", "B04", name="chlorophyll")

    def lai(self) -> xr.DataArray:
        return self._index(_indices.calculate_lai, "B08", "B04", name="lai")

    def indices(self) -> xr.Dataset:
        """All six indices as one Dataset."""
        return xr.Dataset({name: getattr(self, name)() for name in INDEX_NAMES})

    def to_band_set(self) -> BandSet:
        """Rebuild a BandSet from the band variable."""
        return BandSet.from_dict({name: self.band(name).values for name in BandSet.names()})

    def __call__(self, expr: str) -> xr.DataArray:
        """
        Evaluate a band math expression.

        Args:
            expr: Expression using band names or b0/b1/b2...
                  numpy is available as 'np'.

        Examples:
            >>> ds.spectral("(B08 - B04) / (B08 + B04)")
            >>> ds.spectral("np.sqrt(B08 * B04)")
        """
        namespace = {"np": np}
        da = self._ds[self._var]
        for i, band_name in enumerate(da.coords["band"].values):
            band = da.sel(band=band_name).drop_vars("band")
            namespace[f"b{i}"] = band
            namespace[str(band_name)] = band

        result = eval(expr, {"__builtins__": {}}, namespace)
        if isinstance(result, xr.DataArray):
            result.name = "spectral"
        return result

    def __repr__(self) -> str:
        lines = ["<Spectral>"]
        for idx, name in self.bands.items():
            lines.append(f"  {idx}: {name}")
        return "\n".join(lines)
