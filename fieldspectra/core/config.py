"""
Service configuration.
"""

from dataclasses import asdict, dataclass, fields
from typing import Any

from fieldspectra.core.exceptions import ValidationError


@dataclass
class ServiceConfig:
    """
    Settings for Sentinel2Service.

    Attributes:
        grid_size: Edge length of synthesized rasters in pixels
        fetch_delay: Simulated fetch latency on a cache miss, in seconds
        revisit_days: Spacing between listed acquisition dates
        date_count: Number of acquisition dates listed per field
        max_cache_entries: LRU bound on cached datasets (None = unbounded)
        seed: Seed for the noise source (None = nondeterministic)

    Examples:
        >>> config = ServiceConfig(fetch_delay=0.0, seed=42)
        >>> ServiceConfig.from_dict(config.to_dict()) == config
        True
    """

    grid_size: int = 80
    fetch_delay: float = 1.0
    revisit_days: int = 5
    date_count: int = 36
    max_cache_entries: int | None = None
    seed: int | None = None

    def __post_init__(self):
        if self.grid_size <= 0:
            raise ValidationError(f"grid_size must be positive, got {self.grid_size}")
        if self.fetch_delay < 0:
            raise ValidationError(f"fetch_delay must be >= 0, got {self.fetch_delay}")
        if self.revisit_days <= 0:
            raise ValidationError(f"revisit_days must be positive, got {self.revisit_days}")
        if self.date_count < 0:
            raise ValidationError(f"date_count must be >= 0, got {self.date_count}")
        if self.max_cache_entries is not None and self.max_cache_entries <= 0:
            raise ValidationError(
                f"max_cache_entries must be positive, got {self.max_cache_entries}"
            )

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ServiceConfig":
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ValidationError(f"Unknown config keys: {sorted(unknown)}")
        return cls(**data)
