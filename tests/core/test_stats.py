"""
Tests for index summary statistics
"""

import numpy as np
import pytest

from fieldspectra.core.dataset import INDEX_NAMES
from fieldspectra.core.indices import calculate_spectral_indices
from fieldspectra.core.stats import summarize_indices, zone_labels, zone_means
from fieldspectra.core.synthesis import generate_band


class TestSummarizeIndices:
    def test_table(self, sample_dataset):
        indices = calculate_spectral_indices(sample_dataset)
        df = summarize_indices(indices)

        assert list(df.index) == list(INDEX_NAMES)
        assert list(df.columns) == ["mean", "std", "min", "max"]
        assert df.index.name == "index"
        assert df.loc["ndvi", "mean"] == pytest.approx(indices.ndvi.mean())
        assert (df["min"] <= df["max"]).all()


class TestZones:
    def test_labels(self):
        zone_y, zone_x = zone_labels(6)

        assert list(zone_y) == [0, 0, 0, 1, 1, 1]
        assert list(zone_x) == [0, 0, 1, 1, 2, 2]

    def test_zone_means_shape(self):
        df = zone_means(np.ones((9, 9)))

        assert df.shape == (2, 3)
        assert np.all(df.values == 1.0)

    def test_zone_means_values(self):
        raster = np.zeros((6, 6))
        raster[:, :2] = 1.0
        raster[3:, 4:] = 2.0
        df = zone_means(raster)

        assert df.loc[0, 0] == 1.0
        assert df.loc[1, 2] == 2.0
        assert df.loc[0, 2] == 0.0

    def test_synthetic_zone_ordering(self, constant_noise):
        df = zone_means(generate_band(60, 0.3, 0.4, rng=constant_noise))

        # Healthy western zone beats the stressed eastern one
        assert df.loc[0, 0] > df.loc[0, 2]
