"""
Root pytest configuration.

Builds Nord Pool page-10 payloads for the three kinds of delivery day
(23, 24 and 25 local hours) so that no test needs network access.
"""

from collections.abc import Callable, Iterable
from datetime import date, datetime, time, timedelta
from typing import Any

import pytest

from elspot.ingestion.feed import PriceFeed

FEED_REGIONS = [
    "SYS",
    "SE1",
    "SE2",
    "SE3",
    "SE4",
    "FI",
    "DK1",
    "DK2",
    "Oslo",
    "Kr.sand",
    "Bergen",
    "Molde",
    "Tr.heim",
    "Tromsø",
    "EE",
    "LV",
    "LT",
    "AT",
    "BE",
    "DE-LU",
    "FR",
    "NL",
]

# Regions published without any price on 2023-03-26
CWE_REGIONS = ("AT", "BE", "DE-LU", "FR", "NL")

EXTRA_ROWS = ("Min", "Max", "Average", "Peak", "Off-peak 1", "Off-peak 2")


def feed_value(position: int, column: int) -> str:
    """Deterministic price in feed formatting for an hourly row and column.

    The system price carries a thousands separator ("1 002,50").
    """
    if column == 0:
        return f"1 {position:03d},50"
    return f"{100 + position},{column:02d}"


def hour_offsets(hours: int) -> list[int]:
    """Hour labels as published: 02:00 stays in on 23-hour days, twice on 25-hour days."""
    if hours == 25:
        return [0, 1, 2, 2] + list(range(3, 24))
    return list(range(24))


def build_payload(
    day: date,
    currency: str = "NOK",
    hours: int = 24,
    regions: list[str] | None = None,
    no_data: Iterable[str] = (),
    overrides: dict[tuple[int, str], str] | None = None,
    preliminary: bool = False,
    with_extra_rows: bool = True,
) -> dict[str, Any]:
    """Build a page-10 payload.

    Args:
        day: Delivery date.
        currency: Feed currency, also used for the unit string.
        hours: Local hour count of the day (23, 24 or 25).
        regions: Column names in order (default: FEED_REGIONS).
        no_data: Regions whose every cell is "-".
        overrides: {(row position, region): value} applied to hourly rows.
        preliminary: Value of ContainsPreliminaryValues.
        with_extra_rows: Append the daily aggregate rows.
    """
    regions = regions or FEED_REGIONS
    no_data = set(no_data)
    overrides = overrides or {}
    midnight = datetime.combine(day, time())

    rows = []
    for position, offset in enumerate(hour_offsets(hours)):
        start = midnight + timedelta(hours=offset)
        columns = []
        for column, name in enumerate(regions):
            if name in no_data or (hours == 23 and offset == 2):
                value = "-"
            else:
                value = feed_value(position, column)
            value = overrides.get((position, name), value)
            columns.append({"Index": column, "Name": name, "Value": value, "IsOfficial": True})

        rows.append(
            {
                "StartTime": start.isoformat(),
                "EndTime": (start + timedelta(hours=1)).isoformat(),
                "IsExtraRow": False,
                "Columns": columns,
            }
        )

    if with_extra_rows:
        for label in EXTRA_ROWS:
            rows.append(
                {
                    "Name": label,
                    "StartTime": midnight.isoformat(),
                    "EndTime": (midnight + timedelta(days=1)).isoformat(),
                    "IsExtraRow": True,
                    "Columns": [
                        {"Index": column, "Name": name, "Value": "99,99"}
                        for column, name in enumerate(regions)
                    ],
                }
            )

    return {
        "pageId": 10,
        "currency": currency,
        "data": {
            "DataStartdate": midnight.isoformat(),
            "DataEnddate": (midnight + timedelta(days=1)).isoformat(),
            "ContainsPreliminaryValues": preliminary,
            "Units": [f"{currency}/MWh"],
            "Rows": rows,
        },
    }


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def make_payload() -> Callable[..., dict[str, Any]]:
    """Factory for custom page-10 payloads."""
    return build_payload


@pytest.fixture
def eur_24h_payload() -> dict[str, Any]:
    """Ordinary summer day in EUR, FI opens with a negative price."""
    return build_payload(date(2024, 6, 20), currency="EUR", overrides={(0, "FI"): "-5,00"})


@pytest.fixture
def nok_23h_payload() -> dict[str, Any]:
    """Spring-forward day in NOK, Central Western Europe without data."""
    return build_payload(date(2023, 3, 26), currency="NOK", hours=23, no_data=CWE_REGIONS)


@pytest.fixture
def nok_25h_payload() -> dict[str, Any]:
    """Fall-back day in NOK with two rows labelled 02:00."""
    return build_payload(date(2022, 10, 30), currency="NOK", hours=25)


@pytest.fixture
def eur_24h_feed(eur_24h_payload) -> PriceFeed:
    return PriceFeed.from_dict(eur_24h_payload)


@pytest.fixture
def nok_23h_feed(nok_23h_payload) -> PriceFeed:
    return PriceFeed.from_dict(nok_23h_payload)


@pytest.fixture
def nok_25h_feed(nok_25h_payload) -> PriceFeed:
    return PriceFeed.from_dict(nok_25h_payload)
