"""
FieldSpectra CLI Entry Points

Provides command-line interface for:
- fields: List known fields
- dates: List acquisition dates for a field
- summary: Index statistics for a field acquisition
- export: Write bands or indices to GeoTIFF
"""

import argparse
import logging
import sys

from fieldspectra.core.exceptions import FieldSpectraError

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="fieldspectra",
        description="FieldSpectra - Synthetic Sentinel-2 field imagery",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  fieldspectra fields                          List known fields
  fieldspectra dates field-1                   List acquisition dates
  fieldspectra summary field-1 --zones         Index statistics with zone means
  fieldspectra export field-1 out.tif --indices
        """,
    )

    parser.add_argument("--verbose", "-v", action="store_true", help="Verbose output")

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    subparsers.add_parser("fields", help="List known fields")

    dates_parser = subparsers.add_parser("dates", help="List acquisition dates for a field")
    dates_parser.add_argument("field_id", help="Field id (e.g. field-1)")
    dates_parser.add_argument(
        "--count", type=int, default=36, help="Number of dates (default: 36)"
    )

    summary_parser = subparsers.add_parser("summary", help="Index statistics for a field")
    summary_parser.add_argument("field_id", help="Field id (e.g. field-1)")
    summary_parser.add_argument("--date", help="Acquisition date (default: latest)")
    summary_parser.add_argument(
        "--zones", action="store_true", help="Also show per-zone means for --layer"
    )
    summary_parser.add_argument(
        "--layer", default="ndvi", help="Layer for zone means (default: ndvi)"
    )

    export_parser = subparsers.add_parser("export", help="Write a field raster to GeoTIFF")
    export_parser.add_argument("field_id", help="Field id (e.g. field-1)")
    export_parser.add_argument("output", help="Output GeoTIFF path")
    export_parser.add_argument("--date", help="Acquisition date (default: latest)")
    export_parser.add_argument(
        "--indices", action="store_true", help="Export index rasters instead of bands"
    )

    for sub in (summary_parser, export_parser):
        sub.add_argument("--seed", type=int, default=None, help="Noise seed")
        sub.add_argument(
            "--grid-size", type=int, default=80, help="Raster edge length (default: 80)"
        )

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point"""
    parser = build_parser()
    args = parser.parse_args(argv)

    level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(
        level=level, format="%(message)s" if not args.verbose else "%(levelname)s: %(message)s"
    )

    from fieldspectra.cli import commands

    handlers = {
        "fields": commands.run_fields,
        "dates": commands.run_dates,
        "summary": commands.run_summary,
        "export": commands.run_export,
    }
    handler = handlers.get(args.command)
    if handler is None:
        parser.print_help()
        return 1

    try:
        handler(args)
    except FieldSpectraError as e:
        logger.error("Error: %s", e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
