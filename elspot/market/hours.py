"""Number of local hours in a delivery day.

The feed carries no flag for DST days, so the hour count is derived from the
date and the region's timezone: starting at local midnight, adding 23 hours
lands on the next midnight only on a spring-forward day, and adding 25 hours
does so only on a fall-back day.
"""

from datetime import date, datetime, time, timedelta
from enum import IntEnum

import pytz

from elspot.market.regions import resolve_timezone


class HourCount(IntEnum):
    TWENTY_THREE = 23
    TWENTY_FOUR = 24
    TWENTY_FIVE = 25


def _lands_on_midnight(midnight_utc: datetime, hours: int, tz: pytz.BaseTzInfo) -> bool:
    return (midnight_utc + timedelta(hours=hours)).astimezone(tz).hour == 0


def hours_in_day(day: date, region: str) -> HourCount:
    """Return how many local hours ``day`` has in ``region``.

    Raises:
        UnsupportedRegionError: If the region has no timezone.
    """
    tz = resolve_timezone(region)
    midnight_utc = tz.localize(datetime.combine(day, time())).astimezone(pytz.UTC)

    if _lands_on_midnight(midnight_utc, 23, tz):
        return HourCount.TWENTY_THREE
    if _lands_on_midnight(midnight_utc, 25, tz):
        return HourCount.TWENTY_FIVE
    return HourCount.TWENTY_FOUR
