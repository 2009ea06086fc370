"""
Tests for Sentinel2Service
"""

import asyncio
import datetime

import numpy as np
import pytest

import fieldspectra.core.service as service_module
from fieldspectra.catalog.fields import FIELD_COORDINATES, FieldRegistry
from fieldspectra.core.cache import LRUCache
from fieldspectra.core.config import ServiceConfig
from fieldspectra.core.dataset import INDEX_NAMES, SatelliteDataset
from fieldspectra.core.exceptions import UnknownFieldError
from fieldspectra.core.service import Sentinel2Service


class TestFetch:
    """Test fetch_sentinel2_data"""

    @pytest.mark.asyncio
    async def test_returns_dataset(self, service):
        dataset = await service.fetch_sentinel2_data("field-1", "2024-01-01")

        assert isinstance(dataset, SatelliteDataset)
        assert dataset.field_id == "field-1"
        assert dataset.shape == (16, 16)
        assert dataset.metadata.acquisition_date == "2024-01-01"
        assert dataset.metadata.resolution == 10
        assert dataset.metadata.coordinates == FIELD_COORDINATES["field-1"].center
        assert 0.0 <= dataset.metadata.cloud_cover < 20.0

    @pytest.mark.asyncio
    async def test_cache_identity(self, service):
        first = await service.fetch_sentinel2_data("field-1", "2024-01-01")
        second = await service.fetch_sentinel2_data("field-1", "2024-01-01")

        assert first is second

    @pytest.mark.asyncio
    async def test_different_date_distinct(self, service):
        first = await service.fetch_sentinel2_data("field-1", "2024-01-01")
        other = await service.fetch_sentinel2_data("field-1", "2024-01-06")

        assert first is not other
        assert other.metadata.acquisition_date == "2024-01-06"

    @pytest.mark.asyncio
    async def test_different_field_distinct(self, service):
        first = await service.fetch_sentinel2_data("field-1", "2024-01-01")
        other = await service.fetch_sentinel2_data("field-2", "2024-01-01")

        assert first is not other
        assert other.metadata.coordinates == FIELD_COORDINATES["field-2"].center

    @pytest.mark.asyncio
    async def test_latest_uses_today(self, service, fixed_today):
        dataset = await service.fetch_sentinel2_data("field-3")

        assert dataset.metadata.acquisition_date == fixed_today.isoformat()
        assert service.cached_keys() == ["field-3-latest"]

    @pytest.mark.asyncio
    async def test_latest_and_dated_keys_differ(self, service, fixed_today):
        latest = await service.fetch_sentinel2_data("field-1")
        dated = await service.fetch_sentinel2_data("field-1", fixed_today.isoformat())

        assert latest is not dated

    @pytest.mark.asyncio
    async def test_unknown_field(self, service):
        with pytest.raises(UnknownFieldError) as excinfo:
            await service.fetch_sentinel2_data("field-does-not-exist")

        assert excinfo.value.field_id == "field-does-not-exist"
        assert "field-does-not-exist" in str(excinfo.value)
        assert service.cached_keys() == []

    @pytest.mark.asyncio
    async def test_unknown_field_is_key_error(self, service):
        with pytest.raises(KeyError):
            await service.fetch_sentinel2_data("nope", "2024-01-01")

    @pytest.mark.asyncio
    async def test_cache_hit_does_not_wait(self, sample_dataset):
        """A cached entry is returned without the simulated delay"""
        cache = {"field-1-2024-01-01": sample_dataset}
        slow = Sentinel2Service(ServiceConfig(fetch_delay=60.0), cache=cache)

        result = await asyncio.wait_for(
            slow.fetch_sentinel2_data("field-1", "2024-01-01"), timeout=1.0
        )
        assert result is sample_dataset

    @pytest.mark.asyncio
    async def test_miss_waits_for_delay(self):
        slow = Sentinel2Service(ServiceConfig(grid_size=8, fetch_delay=60.0))

        with pytest.raises(asyncio.TimeoutError):
            await asyncio.wait_for(slow.fetch_sentinel2_data("field-1"), timeout=0.05)

        # The shielded load keeps running; stop it before the loop closes
        for task in list(slow._pending.values()):
            task.cancel()
        assert slow.cached_keys() == []

    @pytest.mark.asyncio
    async def test_injected_cache(self):
        cache = {}
        svc = Sentinel2Service(ServiceConfig(grid_size=8, fetch_delay=0.0), cache=cache)

        dataset = await svc.fetch_sentinel2_data("field-2", "2024-05-05")

        assert svc.cache is cache
        assert cache["field-2-2024-05-05"] is dataset

    @pytest.mark.asyncio
    async def test_injected_empty_registry(self):
        svc = Sentinel2Service(
            ServiceConfig(grid_size=8, fetch_delay=0.0), fields=FieldRegistry({})
        )

        assert len(svc.fields) == 0
        with pytest.raises(UnknownFieldError):
            await svc.fetch_sentinel2_data("field-1")

    @pytest.mark.asyncio
    async def test_seeded_services_match(self):
        config = ServiceConfig(grid_size=8, fetch_delay=0.0, seed=11)
        a = await Sentinel2Service(config).fetch_sentinel2_data("field-1", "2024-01-01")
        b = await Sentinel2Service(config).fetch_sentinel2_data("field-1", "2024-01-01")

        np.testing.assert_array_equal(a.bands.B08, b.bands.B08)
        assert a.metadata.cloud_cover == b.metadata.cloud_cover


class TestConcurrentFetch:
    """Concurrent misses for one key share a single load"""

    @pytest.mark.asyncio
    async def test_shared_result(self, monkeypatch):
        calls = []
        original = service_module.synthesize_band_set

        def counting(size, rng=None):
            calls.append(size)
            return original(size, rng=rng)

        monkeypatch.setattr(service_module, "synthesize_band_set", counting)
        svc = Sentinel2Service(ServiceConfig(grid_size=8, fetch_delay=0.01))

        results = await asyncio.gather(
            *(svc.fetch_sentinel2_data("field-1", "2024-01-01") for _ in range(5))
        )

        assert len(calls) == 1
        assert all(r is results[0] for r in results)
        assert svc.cached_keys() == ["field-1-2024-01-01"]

    @pytest.mark.asyncio
    async def test_distinct_keys_not_shared(self):
        svc = Sentinel2Service(ServiceConfig(grid_size=8, fetch_delay=0.01))

        a, b = await asyncio.gather(
            svc.fetch_sentinel2_data("field-1", "2024-01-01"),
            svc.fetch_sentinel2_data("field-1", "2024-01-06"),
        )
        assert a is not b

    @pytest.mark.asyncio
    async def test_failure_propagates_to_all(self):
        svc = Sentinel2Service(ServiceConfig(grid_size=8, fetch_delay=0.01))

        results = await asyncio.gather(
            svc.fetch_sentinel2_data("ghost"),
            svc.fetch_sentinel2_data("ghost"),
            return_exceptions=True,
        )
        assert all(isinstance(r, UnknownFieldError) for r in results)

    @pytest.mark.asyncio
    async def test_retry_after_failure(self):
        """A failed load is not remembered"""
        svc = Sentinel2Service(ServiceConfig(grid_size=8, fetch_delay=0.0))

        with pytest.raises(UnknownFieldError):
            await svc.fetch_sentinel2_data("ghost")
        with pytest.raises(UnknownFieldError):
            await svc.fetch_sentinel2_data("ghost")


class TestBoundedCache:
    @pytest.mark.asyncio
    async def test_lru_from_config(self):
        svc = Sentinel2Service(ServiceConfig(grid_size=8, fetch_delay=0.0, max_cache_entries=2))
        assert isinstance(svc.cache, LRUCache)

        first = await svc.fetch_sentinel2_data("field-1", "2024-01-01")
        await svc.fetch_sentinel2_data("field-1", "2024-01-06")
        await svc.fetch_sentinel2_data("field-1", "2024-01-11")

        assert len(svc.cache) == 2
        assert "field-1-2024-01-01" not in svc.cache

        again = await svc.fetch_sentinel2_data("field-1", "2024-01-01")
        assert again is not first

    def test_unbounded_default(self, service):
        assert isinstance(service.cache, dict)

    @pytest.mark.asyncio
    async def test_clear_cache(self, service):
        await service.fetch_sentinel2_data("field-1")
        service.clear_cache()

        assert service.cached_keys() == []


class TestAvailableDates:
    """Test get_available_dates"""

    def test_count_and_order(self, service, fixed_today):
        dates = service.get_available_dates("field-1")

        assert len(dates) == 36
        assert dates[0] == fixed_today.isoformat()
        assert dates == sorted(dates, reverse=True)

    def test_five_day_spacing(self, service):
        dates = [datetime.date.fromisoformat(d) for d in service.get_available_dates("field-1")]
        gaps = {(a - b).days for a, b in zip(dates, dates[1:])}

        assert gaps == {5}

    def test_explicit_today(self, service):
        dates = service.get_available_dates("field-2", today=datetime.date(2024, 3, 1))

        assert dates[:3] == ["2024-03-01", "2024-02-25", "2024-02-20"]
        assert dates[-1] == (datetime.date(2024, 3, 1) - datetime.timedelta(days=175)).isoformat()

    def test_unknown_field_not_validated(self, service):
        assert len(service.get_available_dates("field-does-not-exist")) == 36

    def test_does_not_touch_cache(self, service):
        service.get_available_dates("field-1")
        assert service.cached_keys() == []

    def test_default_clock_is_utc(self):
        dates = Sentinel2Service().get_available_dates("field-1")
        assert dates[0] == datetime.datetime.now(datetime.timezone.utc).date().isoformat()

    def test_utc_today(self, monkeypatch):
        class FrozenDateTime(datetime.datetime):
            @classmethod
            def now(cls, tz=None):
                # 23:30 on Feb 29 in UTC-5 is already Mar 1 in UTC
                local = datetime.datetime(
                    2024, 2, 29, 23, 30, tzinfo=datetime.timezone(datetime.timedelta(hours=-5))
                )
                return local.astimezone(tz)

        monkeypatch.setattr(service_module.datetime, "datetime", FrozenDateTime)
        assert service_module.utc_today() == datetime.date(2024, 3, 1)


class TestIndexAccess:
    @pytest.mark.asyncio
    async def test_fetch_indices(self, service):
        indices = await service.fetch_indices("field-1", "2024-01-01")

        for name in INDEX_NAMES:
            assert indices[name].shape == (16, 16)

    @pytest.mark.asyncio
    async def test_visualization_fallback(self, service):
        dataset = await service.fetch_sentinel2_data("field-1", "2024-01-01")
        indices = service.calculate_spectral_indices(dataset)

        bogus = service.get_visualization_data(indices, "bogus-layer")
        ndvi = service.get_visualization_data(indices, "ndvi")
        assert bogus is ndvi

    def test_get_field(self, service):
        assert service.get_field("field-2").name == "South Field"

        with pytest.raises(UnknownFieldError):
            service.get_field("field-9")

    def test_repr(self, service):
        assert "Sentinel2Service" in repr(service)
