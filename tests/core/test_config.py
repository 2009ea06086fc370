"""
Tests for ServiceConfig
"""

import pytest

from fieldspectra.core.config import ServiceConfig
from fieldspectra.core.exceptions import ValidationError


class TestServiceConfig:
    def test_defaults(self):
        config = ServiceConfig()

        assert config.grid_size == 80
        assert config.fetch_delay == 1.0
        assert config.revisit_days == 5
        assert config.date_count == 36
        assert config.max_cache_entries is None
        assert config.seed is None

    def test_round_trip(self):
        config = ServiceConfig(grid_size=32, fetch_delay=0.0, seed=3, max_cache_entries=4)
        assert ServiceConfig.from_dict(config.to_dict()) == config

    def test_partial_dict(self):
        config = ServiceConfig.from_dict({"fetch_delay": 0.25})
        assert config.fetch_delay == 0.25
        assert config.grid_size == 80

    def test_unknown_key(self):
        with pytest.raises(ValidationError, match="grid"):
            ServiceConfig.from_dict({"grid": 10})

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"grid_size": 0},
            {"fetch_delay": -0.1},
            {"revisit_days": 0},
            {"date_count": -1},
            {"max_cache_entries": 0},
        ],
    )
    def test_invalid_values(self, kwargs):
        with pytest.raises(ValidationError):
            ServiceConfig(**kwargs)

    def test_zero_dates_allowed(self):
        assert ServiceConfig(date_count=0).date_count == 0
