"""
Sentinel-2 data service.

Synthesizes Sentinel-2 datasets on demand and memoizes them per
(field, date). The cache is an injected MutableMapping owned by whoever
constructs the service, so its lifetime and eviction policy are explicit.

Usage:
    >>> service = Sentinel2Service(ServiceConfig(fetch_delay=0.0))
    >>> dataset = await service.fetch_sentinel2_data("field-1", "2024-01-01")
    >>> indices = service.calculate_spectral_indices(dataset)
    >>> ndvi = service.get_visualization_data(indices, "ndvi")
"""

import asyncio
import datetime
import logging
from collections.abc import Callable, MutableMapping

import numpy as np

from fieldspectra.catalog.fields import FieldGeometry, FieldRegistry
from fieldspectra.core.cache import LRUCache
from fieldspectra.core.config import ServiceConfig
from fieldspectra.core.dataset import (
    AcquisitionMetadata,
    Raster,
    SatelliteDataset,
    SpectralIndexSet,
)
from fieldspectra.core.indices import (
    SpectralLayer,
    calculate_spectral_indices,
    get_visualization_data,
)
from fieldspectra.core.synthesis import NoiseSource, synthesize_band_set
from fieldspectra.products.sentinel2 import NATIVE_RESOLUTION

logger = logging.getLogger(__name__)

MAX_CLOUD_COVER = 20.0


def utc_today() -> datetime.date:
    """Current date in UTC, used to stamp "latest" acquisitions."""
    return datetime.datetime.now(datetime.timezone.utc).date()


class Sentinel2Service:
    """
    Lazily synthesized, cached Sentinel-2 datasets per field and date.

    Concurrent cache misses for the same key share one in-flight load, so a
    dataset is synthesized once and every caller receives the same object.

    Args:
        config: Service settings (defaults to ServiceConfig())
        cache: Mapping used to store datasets by cache key. Defaults to an
               LRUCache when ``config.max_cache_entries`` is set, otherwise
               an unbounded dict.
        fields: Field lookup (defaults to the built-in demo fields)
        rng: Noise source for synthesis and cloud cover (defaults to a
             numpy Generator seeded with ``config.seed``)
        clock: Returns today's date (defaults to the UTC date)
    """

    def __init__(
        self,
        config: ServiceConfig | None = None,
        cache: MutableMapping[str, SatelliteDataset] | None = None,
        fields: FieldRegistry | None = None,
        rng: NoiseSource | None = None,
        clock: Callable[[], datetime.date] = utc_today,
    ):
        self.config = config or ServiceConfig()
        if cache is None:
            if self.config.max_cache_entries is not None:
                cache = LRUCache(self.config.max_cache_entries)
            else:
                cache = {}
        self._cache = cache
        self.fields = fields if fields is not None else FieldRegistry()
        self._rng = rng if rng is not None else np.random.default_rng(self.config.seed)
        self._clock = clock
        self._pending: dict[str, asyncio.Task] = {}

    @property
    def cache(self) -> MutableMapping[str, SatelliteDataset]:
        return self._cache

    @staticmethod
    def cache_key(field_id: str, date: str | None = None) -> str:
        return f"{field_id}-{date or 'latest'}"

    async def fetch_sentinel2_data(
        self, field_id: str, date: str | None = None
    ) -> SatelliteDataset:
        """
        Get the dataset for a field and acquisition date.

        Returns the cached object on a hit without suspending. On a miss,
        waits ``config.fetch_delay`` seconds, then synthesizes and caches a
        new dataset.

        Args:
            field_id: Field identifier (e.g. "field-1")
            date: ISO acquisition date; None means latest (today)

        Returns:
            SatelliteDataset, reference-stable per (field_id, date)

        Raises:
            UnknownFieldError: If field_id is not in the field catalog
        """
        key = self.cache_key(field_id, date)

        cached = self._cache.get(key)
        if cached is not None:
            logger.debug("Cache hit: %s", key)
            return cached

        task = self._pending.get(key)
        if task is None:
            logger.debug("Cache miss: %s", key)
            task = asyncio.create_task(self._load(key, field_id, date))
            self._pending[key] = task
            task.add_done_callback(lambda t, key=key: self._forget(key, t))
        else:
            logger.debug("Joining in-flight load: %s", key)

        return await asyncio.shield(task)

    def _forget(self, key: str, task: asyncio.Task) -> None:
        if self._pending.get(key) is task:
            del self._pending[key]

    async def _load(self, key: str, field_id: str, date: str | None) -> SatelliteDataset:
        # Simulated network latency
        await asyncio.sleep(self.config.fetch_delay)

        field = self.fields.require(field_id)
        bands = synthesize_band_set(self.config.grid_size, rng=self._rng)
        metadata = AcquisitionMetadata(
            acquisition_date=date or self._clock().isoformat(),
            cloud_cover=float(self._rng.random() * MAX_CLOUD_COVER),
            resolution=NATIVE_RESOLUTION,
            coordinates=field.center,
        )
        dataset = SatelliteDataset(bands=bands, metadata=metadata, field_id=field_id)

        self._cache[key] = dataset
        logger.info(
            "Synthesized %s for %s (%dx%d, %.1f%% cloud)",
            metadata.acquisition_date,
            field_id,
            *bands.shape,
            metadata.cloud_cover,
        )
        return dataset

    async def fetch_indices(self, field_id: str, date: str | None = None) -> SpectralIndexSet:
        """Fetch a dataset and derive its index rasters."""
        dataset = await self.fetch_sentinel2_data(field_id, date)
        return self.calculate_spectral_indices(dataset)

    def calculate_spectral_indices(self, dataset: SatelliteDataset) -> SpectralIndexSet:
        """Derive all six index rasters (not cached)."""
        return calculate_spectral_indices(dataset)

    def get_available_dates(
        self, field_id: str, today: datetime.date | None = None
    ) -> list[str]:
        """
        List acquisition dates for a field, newest first.

        Dates are ``config.revisit_days`` apart, ending today. The field id is
        not validated and the cache is not consulted.

        Examples:
            >>> service.get_available_dates("field-1", today=datetime.date(2024, 3, 1))[:3]
            ['2024-03-01', '2024-02-25', '2024-02-20']
        """
        today = today or self._clock()
        step = datetime.timedelta(days=self.config.revisit_days)
        return [(today - step * i).isoformat() for i in range(self.config.date_count)]

    def get_visualization_data(
        self, indices: SpectralIndexSet, layer: "str | SpectralLayer"
    ) -> Raster:
        """Select one index raster; unknown names fall back to ndvi."""
        return get_visualization_data(indices, layer)

    def get_field(self, field_id: str) -> FieldGeometry:
        """
        Raises:
            UnknownFieldError: If field_id is not in the field catalog
        """
        return self.fields.require(field_id)

    def cached_keys(self) -> list[str]:
        return list(self._cache)

    def clear_cache(self) -> None:
        self._cache.clear()
        logger.debug("Cleared dataset cache")

    def __repr__(self) -> str:
        return (
            f"<Sentinel2Service>\n"
            f"  Fields: {len(self.fields)}\n"
            f"  Cached datasets: {len(self._cache)}\n"
            f"  Grid: {self.config.grid_size}x{self.config.grid_size}"
        )
