"""Day-ahead price normalizer for Bronze → Silver transformation.

Turns a Nord Pool page-10 feed into ordered per-region ``Price`` records and
into Silver DataFrames.

Silver Schema:
    - from_utc, to_utc: UTC delivery interval
    - date: delivery date declared by the feed
    - region: region code as spelled by the feed (e.g. "Oslo", "SE3")
    - value: exact decimal string
    - currency, currency_unit, power_unit: unit tags
    - mtu_minutes: delivery interval length

Validation:
    - Hour count matches the DST-aware number of local hours of the date
    - Every interval falls on the feed date in the region's local time
      (except the system price "SYS")
    - No duplicate intervals per region
"""

from datetime import datetime
from pathlib import Path

import pandas as pd
import pytz

from elspot.ingestion.feed import PriceFeed
from elspot.ingestion.preprocessors.base_preprocessor import BasePreprocessor
from elspot.market.price import Price
from elspot.market.reconciler import delivery_intervals, rows_for_day, select_row
from elspot.market.regions import SYSTEM_REGION, local_from_utc
from elspot.market.rows import RawRow
from elspot.market.units import CurrencyUnit, Mtu
from elspot.shared.config import Config
from elspot.shared.exceptions import (
    DateMismatchError,
    RegionNotFoundError,
    UnsupportedRegionError,
)


def clean_value(raw: str) -> str:
    """Strip thousands separators and use '.' as decimal separator ("1 012,30" -> "1012.30")."""
    return raw.replace("\xa0", "").replace(" ", "").replace(",", ".")


class PriceNormalizer(BasePreprocessor):
    """Preprocessor turning page-10 feeds into Silver price records.

    Reads ``nordpool_*.json`` feeds from data/raw/nordpool/ when used as a
    batch preprocessor, or works directly on a single ``PriceFeed``.
    Outputs to data/processed/elspot/.
    """

    CATEGORY = "elspot"

    FEED_GLOB = "nordpool_*.json"

    # Required columns in Silver schema
    REQUIRED_COLUMNS = [
        "from_utc",
        "to_utc",
        "date",
        "region",
        "value",
        "currency",
        "currency_unit",
        "power_unit",
        "mtu_minutes",
    ]

    def __init__(
        self,
        feed: PriceFeed | None = None,
        input_dir: Path | None = None,
        output_dir: Path | None = None,
        log_file: Path | None = None,
    ) -> None:
        """Initialize the price normalizer.

        Args:
            feed: Feed to extract prices from (optional for batch preprocessing).
            input_dir: Directory containing Bronze feeds (default: data/raw/nordpool/).
            output_dir: Directory for Silver exports (default: data/processed/elspot/).
            log_file: Log file path (default: LOG_FILE setting).
        """
        super().__init__(
            input_dir=input_dir or Config.DATA_DIR / "raw" / "nordpool",
            output_dir=output_dir or Config.DATA_DIR / "processed" / self.CATEGORY,
            log_file=log_file,
        )
        self.feed = feed

    def _require_feed(self, feed: PriceFeed | None) -> PriceFeed:
        feed = feed or self.feed
        if feed is None:
            raise ValueError("No price feed loaded")
        return feed

    # ------------------------------------------------------------------
    # Extraction
    # ------------------------------------------------------------------

    def extract(self, region: str, feed: PriceFeed | None = None) -> list[Price]:
        """Extract all prices of a day for one region, in time order.

        Args:
            region: Region name as spelled in the feed.
            feed: Feed to read (default: the normalizer's feed).

        Returns:
            One Price per local hour of the feed date, or an empty list if the
            region carries no data in this feed.

        Raises:
            RegionNotFoundError: The feed has no column for the region.
            UnsupportedRegionError: The region has no known timezone.
            RowCountMismatchError: Row count disagrees with the DST hour count.
            DateMismatchError: An interval falls outside the feed date.
            InvalidDecimalValueError: A price value is malformed.
        """
        feed = self._require_feed(feed)
        index = feed.column_index(region)
        rows = rows_for_day(feed.rows, index, region, feed.date)
        if not rows:
            self.logger.info("No prices for region %s on %s", region, feed.date)
            return []

        mtu = Mtu.from_interval(rows[0].start, rows[0].end)
        intervals = delivery_intervals(rows[0].start, len(rows), region, mtu)

        prices = []
        for row, (from_utc, to_utc) in zip(rows, intervals):
            if region != SYSTEM_REGION:
                local_date = local_from_utc(from_utc, region).date()
                if local_date != feed.date:
                    raise DateMismatchError(
                        f"Interval starting {from_utc.isoformat()} is on {local_date}, "
                        f"feed date is {feed.date} (region '{region}')"
                    )
            prices.append(self._build_price(feed, region, row, index, from_utc, to_utc, mtu))

        self.logger.debug("Extracted %d prices for region %s", len(prices), region)
        return prices

    def extract_all(self, feed: PriceFeed | None = None) -> dict[str, list[Price]]:
        """Extract prices for every region of the feed.

        Regions without a column or without a known timezone are skipped with
        a warning; regions without data are left out.
        """
        feed = self._require_feed(feed)
        all_prices: dict[str, list[Price]] = {}

        for region in feed.regions():
            try:
                prices = self.extract(region, feed)
            except (RegionNotFoundError, UnsupportedRegionError) as exc:
                self.logger.warning("Skipping region %s: %s", region, exc)
                continue

            if prices:
                all_prices[region] = prices

        self.logger.info(
            "Extracted prices for %d of %d regions on %s",
            len(all_prices),
            len(feed.regions()),
            feed.date,
        )
        return all_prices

    def price_at(self, region: str, utc_dt: datetime, feed: PriceFeed | None = None) -> Price:
        """Price for the delivery interval containing ``utc_dt``.

        Agrees with ``extract`` for every interval of the day, including the
        repeated and skipped hours of eastern regions on DST days.

        Raises:
            RegionNotFoundError: The feed has no column for the region.
            DateMismatchError: The instant is not on the feed date locally.
            HourNotFoundError: No row or no data for the local hour.
            RowCountMismatchError: Row count disagrees with the DST hour count.
            AmbiguousHourUnresolvedError: Duplicated hour could not be resolved.
        """
        feed = self._require_feed(feed)
        index = feed.column_index(region)
        row = select_row(feed.rows, index, region, utc_dt, feed.date)

        mtu = Mtu.from_interval(row.start, row.end)
        utc = utc_dt.astimezone(pytz.UTC)
        from_utc = utc.replace(minute=utc.minute - utc.minute % mtu.value, second=0, microsecond=0)
        return self._build_price(feed, region, row, index, from_utc, from_utc + mtu.delta, mtu)

    def price_now(self, region: str, feed: PriceFeed | None = None) -> Price:
        return self.price_at(region, datetime.now(pytz.UTC), feed)

    def _build_price(
        self,
        feed: PriceFeed,
        region: str,
        row: RawRow,
        index: int,
        from_utc: datetime,
        to_utc: datetime,
        mtu: Mtu,
    ) -> Price:
        return Price(
            region=region,
            from_utc=from_utc,
            to_utc=to_utc,
            date=feed.date,
            value=clean_value(row.value_at(index)),
            currency=feed.unit_string.currency,
            currency_unit=CurrencyUnit.FULL,
            power_unit=feed.unit_string.power_unit,
            market_time_unit=mtu,
        )

    # ------------------------------------------------------------------
    # Silver layer
    # ------------------------------------------------------------------

    def to_dataframe(self, prices: list[Price]) -> pd.DataFrame:
        """Convert prices to a Silver DataFrame (one row per interval)."""
        if not prices:
            return pd.DataFrame(columns=self.REQUIRED_COLUMNS)

        df = pd.DataFrame([p.to_dict() for p in prices])
        df["from_utc"] = pd.to_datetime(df["from_utc"], utc=True)
        df["to_utc"] = pd.to_datetime(df["to_utc"], utc=True)
        return df[self.REQUIRED_COLUMNS]

    def preprocess(
        self,
        start_date: datetime | None = None,
        end_date: datetime | None = None,
    ) -> dict[str, pd.DataFrame]:
        """Transform Bronze feeds to Silver DataFrames.

        Reads ``nordpool_*.json`` files from input_dir, keeps feeds whose date
        falls within the window and extracts every region.

        Args:
            start_date: Earliest feed date to include.
            end_date: Latest feed date to include.

        Returns:
            Mapping of "{region}_{YYYY-MM-DD}_{currency}" to Silver DataFrame.

        Raises:
            ValueError: If the input directory does not exist or nothing was processed.
        """
        if not self.input_dir.exists():
            raise ValueError(f"Input directory does not exist: {self.input_dir}")

        feed_files = sorted(self.input_dir.glob(self.FEED_GLOB))
        self.logger.info("Found %d Bronze feed files to preprocess", len(feed_files))

        datasets: dict[str, pd.DataFrame] = {}
        for path in feed_files:
            feed = PriceFeed.from_file(path)

            if start_date and feed.date < start_date.date():
                continue
            if end_date and feed.date > end_date.date():
                continue

            self.logger.info("Processing %s (%s, %s)", path.name, feed.date, feed.unit_string)
            for region, prices in self.extract_all(feed).items():
                df = self.to_dataframe(prices)
                self.validate(df)
                datasets[f"{region}_{feed.date.isoformat()}_{feed.currency}"] = df

        if not datasets:
            raise ValueError("No valid datasets processed")

        return datasets

    def validate(self, df: pd.DataFrame) -> bool:
        """Validate that DataFrame conforms to the Silver price schema.

        Checks:
        - All required columns present
        - No missing values
        - Intervals are strictly increasing per region
        - No duplicate intervals per region

        Raises:
            ValueError: If validation fails with details.
        """
        self.check_schema(df)

        duplicates = df.duplicated(subset=["region", "from_utc"], keep=False)
        if duplicates.any():
            raise ValueError(f"Found {duplicates.sum()} duplicate interval records")

        for region, group in df.groupby("region"):
            if not group["from_utc"].is_monotonic_increasing:
                raise ValueError(f"Intervals for region '{region}' are not in time order")

        self.logger.debug("Validation passed: %d records", len(df))
        return True
