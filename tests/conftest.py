"""
FieldSpectra Test Configuration

Shared pytest fixtures for all tests.
"""

import datetime

import numpy as np
import pytest

from fieldspectra.catalog.fields import FIELD_COORDINATES
from fieldspectra.core.config import ServiceConfig
from fieldspectra.core.dataset import AcquisitionMetadata, SatelliteDataset
from fieldspectra.core.service import Sentinel2Service
from fieldspectra.core.synthesis import synthesize_band_set


class ConstantNoise:
    """Noise source returning 0.5 everywhere, i.e. zero noise after centering."""

    def random(self, size=None):
        if size is None:
            return 0.5
        return np.full(size, 0.5)


@pytest.fixture
def constant_noise():
    return ConstantNoise()


@pytest.fixture
def rng():
    return np.random.default_rng(42)


@pytest.fixture
def fixed_today():
    return datetime.date(2024, 3, 1)


@pytest.fixture
def sample_dataset(rng):
    """Small synthesized dataset for field-1"""
    field = FIELD_COORDINATES["field-1"]
    return SatelliteDataset(
        bands=synthesize_band_set(24, rng=rng),
        metadata=AcquisitionMetadata(
            acquisition_date="2024-01-01",
            cloud_cover=7.5,
            resolution=10,
            coordinates=field.center,
        ),
        field_id="field-1",
    )


@pytest.fixture
def service(fixed_today):
    """Service with no fetch delay and a small deterministic grid"""
    config = ServiceConfig(grid_size=16, fetch_delay=0.0, seed=7)
    return Sentinel2Service(config, clock=lambda: fixed_today)
