"""Region catalog and region -> timezone resolution.

One table holds every fact known about a delivery region. The page-10 feed
uses city names for the Norwegian areas ("Oslo", "Tr.heim", ...) while the
day-ahead data portal uses bidding-zone codes ("NO1", "SE3", ...); both are
listed here.
"""

from dataclasses import dataclass
from datetime import date, datetime

import pytz

from elspot.shared.exceptions import UnsupportedRegionError

SYSTEM_REGION = "SYS"
DEFAULT_TIMEZONE = "Europe/Oslo"


@dataclass(frozen=True)
class Region:
    """Immutable descriptor for a delivery region."""

    code: str
    timezone: str
    group: str
    queryable: bool = True  # accepted by the day-ahead data portal


_CATALOG: tuple[Region, ...] = (
    # Norwegian areas as named in the page-10 feed
    Region("Oslo", "Europe/Oslo", "Nordic", queryable=False),
    Region("Bergen", "Europe/Oslo", "Nordic", queryable=False),
    Region("Kr.sand", "Europe/Oslo", "Nordic", queryable=False),
    Region("Molde", "Europe/Oslo", "Nordic", queryable=False),
    Region("Tr.heim", "Europe/Oslo", "Nordic", queryable=False),
    Region("Tromsø", "Europe/Oslo", "Nordic", queryable=False),
    # Nordic
    Region("NO1", "Europe/Oslo", "Nordic"),
    Region("NO2", "Europe/Oslo", "Nordic"),
    Region("NO3", "Europe/Oslo", "Nordic"),
    Region("NO4", "Europe/Oslo", "Nordic"),
    Region("NO5", "Europe/Oslo", "Nordic"),
    Region("SE1", "Europe/Stockholm", "Nordic"),
    Region("SE2", "Europe/Stockholm", "Nordic"),
    Region("SE3", "Europe/Stockholm", "Nordic"),
    Region("SE4", "Europe/Stockholm", "Nordic"),
    Region("DK1", "Europe/Copenhagen", "Nordic"),
    Region("DK2", "Europe/Copenhagen", "Nordic"),
    Region("FI", "Europe/Helsinki", "Nordic"),
    # Baltic
    Region("EE", "Europe/Tallinn", "Baltic"),
    Region("LV", "Europe/Riga", "Baltic"),
    Region("LT", "Europe/Vilnius", "Baltic"),
    # Central Western Europe
    Region("AT", "Europe/Vienna", "CWE"),
    Region("BE", "Europe/Brussels", "CWE"),
    Region("DE-LU", "Europe/Luxembourg", "CWE", queryable=False),
    Region("GER", "Europe/Berlin", "CWE"),
    Region("FR", "Europe/Paris", "CWE"),
    Region("NL", "Europe/Amsterdam", "CWE"),
    Region("PL", "Europe/Warsaw", "CWE"),
    # Romania
    Region("TEL", "Europe/Bucharest", "Romania", queryable=False),
    # Cross-region system price, no geography of its own
    Region(SYSTEM_REGION, DEFAULT_TIMEZONE, "System"),
)

REGIONS: dict[str, Region] = {region.code: region for region in _CATALOG}


def get_region(code: str) -> Region:
    """Look up a region descriptor.

    Raises:
        UnsupportedRegionError: If the code is not in the catalog.
    """
    try:
        return REGIONS[code]
    except KeyError:
        raise UnsupportedRegionError(code) from None


def supported_regions(queryable_only: bool = False) -> list[str]:
    """Return region codes in catalog order."""
    return [r.code for r in _CATALOG if r.queryable or not queryable_only]


def resolve_timezone(region: str) -> pytz.BaseTzInfo:
    """Map a region code to its pytz timezone."""
    return pytz.timezone(get_region(region).timezone)


def localize(naive_dt: datetime, region: str) -> datetime:
    """Attach the region's timezone to a naive wall-clock datetime.

    Ambiguous wall-clock times resolve to standard time, matching how pytz
    treats ``is_dst=False``.
    """
    return resolve_timezone(region).localize(naive_dt)


def local_from_utc(utc_dt: datetime, region: str) -> datetime:
    """Express an aware datetime in the region's local time."""
    if utc_dt.tzinfo is None:
        raise ValueError("utc_dt must be timezone-aware")
    return utc_dt.astimezone(resolve_timezone(region))


def region_now(region: str) -> datetime:
    """Current wall-clock time in the region."""
    return datetime.now(resolve_timezone(region))


def region_today(region: str) -> date:
    return region_now(region).date()


def is_nonexistent_local_time(naive_dt: datetime, region: str) -> bool:
    """True if the wall-clock time falls in a spring-forward gap."""
    try:
        resolve_timezone(region).localize(naive_dt, is_dst=None)
    except pytz.exceptions.NonExistentTimeError:
        return True
    except pytz.exceptions.AmbiguousTimeError:
        return False
    return False


def is_ambiguous_local_time(naive_dt: datetime, region: str) -> bool:
    """True if the wall-clock time occurs twice (fall-back overlap)."""
    try:
        resolve_timezone(region).localize(naive_dt, is_dst=None)
    except pytz.exceptions.AmbiguousTimeError:
        return True
    except pytz.exceptions.NonExistentTimeError:
        return False
    return False
