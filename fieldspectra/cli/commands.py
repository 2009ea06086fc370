"""
CLI command implementations.

The CLI is the composition root: each command builds its own service.
"""

import argparse
import asyncio

from fieldspectra.catalog.fields import FieldRegistry
from fieldspectra.core.config import ServiceConfig
from fieldspectra.core.service import Sentinel2Service


def _service(args: argparse.Namespace, **overrides) -> Sentinel2Service:
    config = ServiceConfig(
        grid_size=getattr(args, "grid_size", 80),
        seed=getattr(args, "seed", None),
        fetch_delay=0.0,
        **overrides,
    )
    return Sentinel2Service(config)


def run_fields(args: argparse.Namespace) -> None:
    """List known fields"""
    registry = FieldRegistry()
    for field_id in registry.list_fields():
        field = registry.require(field_id)
        b = field.bounds
        print(
            f"{field.id:10}  {field.name:12}  center=({field.center.lat}, {field.center.lon})  "
            f"bounds=N{b.north} S{b.south} E{b.east} W{b.west}"
        )


def run_dates(args: argparse.Namespace) -> None:
    """List acquisition dates for a field"""
    service = _service(args, date_count=args.count)
    for d in service.get_available_dates(args.field_id):
        print(d)


def run_summary(args: argparse.Namespace) -> None:
    """Print index statistics for a field acquisition"""
    from fieldspectra.core.stats import summarize_indices, zone_means

    service = _service(args)
    dataset = asyncio.run(service.fetch_sentinel2_data(args.field_id, args.date))
    indices = service.calculate_spectral_indices(dataset)
    field = service.get_field(args.field_id)

    meta = dataset.metadata
    print(f"Field: {field.name} ({field.id})")
    print(f"Acquired: {meta.acquisition_date}  Cloud cover: {meta.cloud_cover:.1f}%")
    print(f"Grid: {dataset.shape[0]}x{dataset.shape[1]} @ {meta.resolution}m")
    print()
    print(summarize_indices(indices).round(4).to_string())

    if args.zones:
        print()
        print(f"Zone means ({args.layer}):")
        raster = service.get_visualization_data(indices, args.layer)
        print(zone_means(raster).round(4).to_string())


def run_export(args: argparse.Namespace) -> None:
    """Write bands or indices of a field acquisition to GeoTIFF"""
    from fieldspectra.io.export import export_dataset, export_indices

    service = _service(args)
    dataset = asyncio.run(service.fetch_sentinel2_data(args.field_id, args.date))
    field = service.get_field(args.field_id)

    if args.indices:
        path = export_indices(service.calculate_spectral_indices(dataset), field, args.output)
    else:
        path = export_dataset(dataset, field, args.output)
    print(f"Wrote {path}")
