"""Nord Pool day-ahead price collector.

Bronze Layer: fetches raw JSON from Nord Pool and stores it in
data/raw/nordpool/ without transformation.

Collects:
    - Hourly day-ahead prices ("marketdata page 10"), one payload per currency
    - Day-ahead prices from the data portal API for selected delivery areas

Preprocessing (Bronze → Silver) is handled by price_normalizer.py.
"""

import time
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any
from urllib.parse import urlencode

import requests

from elspot.ingestion.collectors.base_collector import BaseCollector
from elspot.ingestion.feed import PriceFeed
from elspot.market.currencies import SUPPORTED_CURRENCIES
from elspot.market.regions import supported_regions
from elspot.shared.config import Config
from elspot.shared.exceptions import InvalidFeedError, InvalidQueryError
from elspot.shared.utils import parse_date


@dataclass(frozen=True)
class DayAheadQuery:
    """Validated query for the day-ahead data portal API."""

    currency: str
    date: str
    regions: tuple[str, ...] = field(default_factory=tuple)
    market: str = "DayAhead"

    def __post_init__(self) -> None:
        if self.currency not in SUPPORTED_CURRENCIES:
            raise InvalidQueryError(
                f"'{self.currency}' is not a supported currency, use one of: "
                f"{', '.join(SUPPORTED_CURRENCIES)}"
            )

        try:
            parse_date(self.date)
        except ValueError as exc:
            raise InvalidQueryError(str(exc)) from exc

        if not self.regions:
            raise InvalidQueryError("No regions set, select one or more delivery areas")

        queryable = supported_regions(queryable_only=True)
        for region in self.regions:
            if region not in queryable:
                raise InvalidQueryError(
                    f"'{region}' is not a supported region, use any of: {', '.join(queryable)}"
                )

        # Drop duplicates, keep the caller's order.
        object.__setattr__(self, "regions", tuple(dict.fromkeys(self.regions)))

    def params(self) -> dict[str, str]:
        return {
            "currency": self.currency,
            "date": self.date,
            "market": self.market,
            "deliveryArea": ",".join(self.regions),
        }

    def build_url(self, base_url: str | None = None) -> str:
        return f"{base_url or Config.NORDPOOL_DAYAHEAD_URL}?{urlencode(self.params())}"


class NordpoolCollector(BaseCollector):
    """Collector for Nord Pool hourly day-ahead prices.

    Uses a requests session with automatic retry logic. Raw output is stored
    in data/raw/nordpool/ following the Bronze contract.
    """

    SOURCE_NAME = "nordpool"

    DEFAULT_TIMEOUT = Config.REQUEST_TIMEOUT
    REQUEST_DELAY = 1.0  # politeness delay between consecutive API calls (seconds)

    def __init__(
        self,
        output_dir: Path | None = None,
        log_file: Path | None = None,
        currencies: list[str] | None = None,
    ) -> None:
        super().__init__(
            output_dir=output_dir or Config.DATA_DIR / "raw" / "nordpool",
            log_file=log_file,
        )
        self.currencies = currencies or [Config.DEFAULT_CURRENCY]
        self._session = self.create_session()
        self.logger.info("NordpoolCollector initialized, output_dir=%s", self.output_dir)

    # ------------------------------------------------------------------
    # BaseCollector interface
    # ------------------------------------------------------------------

    def collect(
        self,
        start_date: datetime | None = None,
        end_date: datetime | None = None,
    ) -> dict[str, dict[str, Any]]:
        """Collect raw page-10 payloads for every configured currency.

        Page 10 serves a single delivery day; ``end_date`` selects it and
        ``start_date`` is ignored.

        Returns:
            {"page10_<CUR>": payload, ...}
        """
        if start_date:
            self.logger.debug("start_date is ignored, page 10 serves a single day")

        payloads: dict[str, dict[str, Any]] = {}
        for position, currency in enumerate(self.currencies):
            if position:
                time.sleep(self.REQUEST_DELAY)
            payloads[f"page10_{currency}"] = self.fetch_payload(currency, end_date)

        self.logger.info("Collected %d payloads", len(payloads))
        return payloads

    def health_check(self) -> bool:
        """Check Nord Pool availability by requesting the default currency page."""
        try:
            url = self._build_page10_url(Config.DEFAULT_CURRENCY)
            return self._session.get(url, timeout=10).ok
        except requests.exceptions.RequestException:
            return False

    # ------------------------------------------------------------------
    # Nord Pool specific collection methods
    # ------------------------------------------------------------------

    def fetch_payload(self, currency: str, end_date: datetime | None = None) -> dict[str, Any]:
        """Fetch the raw page-10 payload for one currency."""
        if currency not in SUPPORTED_CURRENCIES:
            raise InvalidQueryError(f"'{currency}' is not a supported currency")
        return self._get_json(self._build_page10_url(currency, end_date))

    def fetch_feed(self, currency: str, end_date: datetime | None = None) -> PriceFeed:
        """Fetch and decode the page-10 feed for one currency."""
        return PriceFeed.from_dict(self.fetch_payload(currency, end_date))

    def collect_dayahead(self, query: DayAheadQuery) -> dict[str, Any]:
        """Fetch the raw data portal payload for a day-ahead query."""
        return self._get_json(query.build_url())

    # ------------------------------------------------------------------
    # Private: HTTP layer
    # ------------------------------------------------------------------

    def _build_page10_url(self, currency: str, end_date: datetime | None = None) -> str:
        params = {"currency": currency}
        if end_date:
            params["endDate"] = end_date.strftime("%d-%m-%Y")
        return f"{Config.NORDPOOL_PAGE10_URL}?{urlencode(params)}"

    def _get_json(self, url: str) -> dict[str, Any]:
        """GET a URL and decode its JSON body.

        Raises:
            InvalidFeedError: Endpoint not found (HTTP 404) or body is not JSON.
            requests.exceptions.RequestException: Network / HTTP failure.
        """
        self.logger.debug("GET %s", url)

        try:
            response = self._session.get(url, timeout=self.DEFAULT_TIMEOUT)
            response.raise_for_status()
        except requests.exceptions.HTTPError as exc:
            if exc.response is not None and exc.response.status_code == 404:
                raise InvalidFeedError(f"Nord Pool endpoint not found: {url}") from exc
            raise

        try:
            payload = response.json()
        except ValueError as exc:
            raise InvalidFeedError(f"Response from {url} is not valid JSON") from exc

        self.logger.info("Received payload from %s", url)
        return payload
