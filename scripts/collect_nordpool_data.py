"""Nord Pool day-ahead price collection and normalization script.

Two-stage pipeline:
1. Collection (Bronze): Fetch the raw page-10 feed → data/raw/nordpool/
2. Normalization (Silver): Per-region hourly prices → data/processed/elspot/

Usage:
    # Collect Bronze (raw) feed for the default currency
    python scripts/collect_nordpool_data.py

    # Collect and normalize to Silver
    python scripts/collect_nordpool_data.py --currency NOK --preprocess

    # Normalize a feed saved earlier, only for some regions, in Øre/kWh
    python scripts/collect_nordpool_data.py --file feed.json --region Oslo --region SE3 \
        --fraction --kwh --preprocess

    # Health check only
    python scripts/collect_nordpool_data.py --health-check

Example:
    $ python scripts/collect_nordpool_data.py --currency NOK --preprocess
    [INFO] NordpoolCollector initialized
    [INFO] Health check: PASSED
    [INFO] Exported raw payload to data/raw/nordpool/nordpool_page10_NOK_20230326.json
    [INFO] Starting Silver normalization...
    [INFO] Oslo: 23 prices → elspot_Oslo_2023-03-26_2023-03-26.csv
"""

import argparse
import sys

from elspot.ingestion.collectors.nordpool_collector import NordpoolCollector
from elspot.ingestion.feed import PriceFeed
from elspot.ingestion.preprocessors.price_normalizer import PriceNormalizer
from elspot.market.currencies import SUPPORTED_CURRENCIES
from elspot.shared.config import Config
from elspot.shared.exceptions import ElspotError
from elspot.shared.utils import parse_date, setup_logger


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Collect and normalize Nord Pool day-ahead prices",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )

    parser.add_argument(
        "--currency",
        type=str,
        choices=SUPPORTED_CURRENCIES,
        default=Config.DEFAULT_CURRENCY,
        help=f"Feed currency (default: {Config.DEFAULT_CURRENCY})",
    )

    parser.add_argument(
        "--date",
        type=str,
        help="Delivery date (YYYY-MM-DD). Default: latest published day",
        metavar="DATE",
    )

    parser.add_argument(
        "--file",
        type=str,
        help="Load a saved page-10 feed instead of downloading",
        metavar="PATH",
    )

    parser.add_argument(
        "--region",
        action="append",
        help="Region to normalize (repeatable). Default: all regions in the feed",
    )

    parser.add_argument("--fraction", action="store_true", help="Convert to currency sub-unit")
    parser.add_argument("--kwh", action="store_true", help="Convert to price per kWh")

    parser.add_argument(
        "--format",
        choices=["csv", "parquet"],
        default="csv",
        help="Silver export format (default: csv)",
    )

    parser.add_argument(
        "--health-check",
        action="store_true",
        help="Run health check only and exit",
    )

    parser.add_argument(
        "--preprocess",
        action="store_true",
        help="Also run Silver normalization after collection",
    )

    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose logging",
    )

    return parser.parse_args()


def main() -> int:
    """Main collection script."""
    args = parse_args()

    logger = setup_logger(
        "collect_nordpool",
        Config().log_path,
        level="DEBUG" if args.verbose or Config.DEBUG else Config.LOG_LEVEL,
    )

    try:
        if args.file:
            feed = PriceFeed.from_file(args.file)
            logger.info("Loaded feed from %s: %r", args.file, feed)
        else:
            collector = NordpoolCollector(currencies=[args.currency])

            if not collector.health_check():
                logger.error("Nord Pool health check failed")
                logger.error("Please check your internet connection")
                return 1

            logger.info("Health check: PASSED")

            if args.health_check:
                logger.info("Health check complete, exiting")
                return 0

            end_date = parse_date(args.date) if args.date else None
            payload = collector.fetch_payload(args.currency, end_date)
            feed = PriceFeed.from_dict(payload)
            collector.export_json(payload, f"page10_{args.currency}", day=feed.date)

        if not args.preprocess:
            logger.info("Bronze collection complete (%s)", feed.date)
            return 0

        logger.info("Starting Silver normalization...")
        normalizer = PriceNormalizer(feed=feed)

        if args.region:
            selected = {region: normalizer.extract(region) for region in args.region}
        else:
            selected = normalizer.extract_all()

        for region, prices in selected.items():
            if not prices:
                logger.warning("No prices for %s", region)
                continue
            if args.fraction:
                prices = [p.to_currency_fraction() for p in prices]
            if args.kwh:
                prices = [p.to_kwh() for p in prices]

            df = normalizer.to_dataframe(prices)
            normalizer.validate(df)
            path = normalizer.export(df, region, feed.date, feed.date, format=args.format)
            logger.info("%s: %d prices → %s", region, len(prices), path.name)

        return 0

    except KeyboardInterrupt:
        logger.warning("Collection interrupted by user")
        return 130

    except ElspotError as e:
        logger.error("Invalid price data: %s", e)
        return 1

    except Exception as e:
        logger.exception("Unexpected error during collection: %s", e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
