"""Reconcile raw feed rows with the local hours of a delivery day.

A feed day is a list of hourly rows labelled with naive local times. On a
spring-forward day one hour does not exist and the feed carries an empty
row for it; on a fall-back day one hour occurs twice and the feed carries
two rows with the same label. Rows are always processed in document order,
the first of two duplicated rows belongs to the earlier UTC offset. The
feed writes every region's labels on one clock, so the local hour a row
covers is found by stepping the day on the UTC timeline.
"""

from collections.abc import Iterable, Sequence
from datetime import date, datetime, timedelta

import pytz

from elspot.market.hours import hours_in_day
from elspot.market.regions import (
    is_ambiguous_local_time,
    is_nonexistent_local_time,
    local_from_utc,
    localize,
)
from elspot.market.rows import RawRow
from elspot.market.units import Mtu
from elspot.shared.exceptions import (
    AmbiguousHourUnresolvedError,
    DateMismatchError,
    HourNotFoundError,
    RowCountMismatchError,
)
from elspot.shared.config import config
from elspot.shared.utils import setup_logger

logger = setup_logger(__name__, config.log_path)

# The feed labels the skipped spring-forward hour 02:00 in every region.
SPRING_FORWARD_LABEL_HOUR = 2


def hourly_rows(rows: Iterable[RawRow]) -> list[RawRow]:
    """Drop aggregate rows, keeping document order."""
    return [row for row in rows if not row.is_extra]


def select_row(
    rows: Sequence[RawRow],
    column_index: int,
    region: str,
    utc_dt: datetime,
    feed_date: date | None = None,
) -> RawRow:
    """Pick the row holding the price for the instant ``utc_dt``.

    Rows are matched on the local hour they cover in the region, found by
    stepping the day's rows on the UTC timeline exactly as ``rows_for_day``
    and ``delivery_intervals`` do for the full day. Row labels are not used
    directly because the feed labels every region on the same clock.

    Args:
        rows: Feed rows for one day, in document order.
        column_index: Column of ``region`` in each row.
        region: Region code, used to resolve the local hour.
        utc_dt: Timezone-aware instant to look up.
        feed_date: Declared feed date; when given the instant must fall on it.

    Returns:
        The single matching row.

    Raises:
        DateMismatchError: The instant is on another local date than the feed.
        HourNotFoundError: No row, or only an empty row, matches the hour.
        AmbiguousHourUnresolvedError: The duplicated hour cannot be resolved
            or more than two rows share the hour.
        RowCountMismatchError: The rows do not fit the day's local hours.
    """
    local_dt = local_from_utc(utc_dt, region)

    if feed_date is not None and local_dt.date() != feed_date:
        raise DateMismatchError(
            f"{local_dt.isoformat()} is not on feed date {feed_date.isoformat()}"
        )

    day_rows = rows_for_day(rows, column_index, region, feed_date or local_dt.date())
    if not day_rows:
        raise HourNotFoundError(f"No data for region '{region}' on {local_dt.date()}")

    matches = [
        row
        for row, local_hour in zip(day_rows, _local_hours(day_rows, region))
        if local_hour == local_dt.hour
    ]

    if not matches:
        raise HourNotFoundError(f"No row for local hour {local_dt.hour:02d} in region '{region}'")

    if len(matches) == 1:
        row = matches[0]
    elif len(matches) == 2:
        row = matches[_duplicated_hour_position(utc_dt, local_dt, region)]
    else:
        raise AmbiguousHourUnresolvedError(
            f"{len(matches)} rows share local hour {local_dt.hour:02d} in region '{region}'"
        )

    if not row.has_data_at(column_index):
        raise HourNotFoundError(f"No data for local hour {local_dt.hour:02d} in region '{region}'")
    return row


def _local_hours(day_rows: Sequence[RawRow], region: str) -> list[int]:
    """Local start hour of each row of a reconciled day."""
    first = day_rows[0]
    mtu = Mtu.from_interval(first.start, first.end)
    intervals = delivery_intervals(first.start, len(day_rows), region, mtu)
    return [local_from_utc(from_utc, region).hour for from_utc, _ in intervals]


def _duplicated_hour_position(utc_dt: datetime, local_dt: datetime, region: str) -> int:
    """Return 0 for the first occurrence of a repeated hour, 1 for the second.

    One hour after the first occurrence the clock still shows the same hour
    (it has been turned back); one hour after the second it shows the next.
    Only wall-clock hours that really occur twice in the region are resolved.
    """
    if not is_ambiguous_local_time(local_dt.replace(tzinfo=None), region):
        raise AmbiguousHourUnresolvedError(
            f"Cannot resolve duplicated local hour {local_dt.hour:02d} in region '{region}', "
            "the hour is not repeated on this day"
        )

    next_local = local_from_utc(utc_dt + timedelta(hours=1), region)
    if next_local.hour == local_dt.hour:
        logger.debug("Hour %02d in %s resolved to first occurrence", local_dt.hour, region)
        return 0
    if next_local.hour == (local_dt.hour + 1) % 24:
        logger.debug("Hour %02d in %s resolved to second occurrence", local_dt.hour, region)
        return 1
    raise AmbiguousHourUnresolvedError(
        f"Cannot resolve duplicated local hour {local_dt.hour:02d} in region '{region}'"
    )


def _in_spring_forward_gap(row: RawRow, region: str) -> bool:
    return row.start.hour == SPRING_FORWARD_LABEL_HOUR or is_nonexistent_local_time(row.start, region)


def rows_for_day(
    rows: Sequence[RawRow],
    column_index: int,
    region: str,
    feed_date: date,
) -> list[RawRow]:
    """Select one row per local hour of ``feed_date``.

    Empty rows standing in for the skipped spring-forward hour are dropped.
    Returns an empty list when the region carries no data at all for the day.

    Raises:
        RowCountMismatchError: The selected rows do not match the number of
            local hours the date has in the region.
    """
    candidates = hourly_rows(rows)
    if not any(row.has_data_at(column_index) for row in candidates):
        logger.debug("No data for region %s on %s", region, feed_date)
        return []

    selected = [
        row
        for row in candidates
        if row.has_data_at(column_index) or not _in_spring_forward_gap(row, region)
    ]

    expected = hours_in_day(feed_date, region)
    if len(selected) != expected:
        raise RowCountMismatchError(region, int(expected), len(selected))
    return selected


def delivery_intervals(
    first_start: datetime,
    count: int,
    region: str,
    mtu: Mtu = Mtu.SIXTY,
) -> list[tuple[datetime, datetime]]:
    """UTC (from, to) pairs stepping one MTU at a time from a local start.

    Steps are taken on the UTC timeline so DST transitions inside the day
    are crossed without gaps or overlaps.
    """
    start_utc = localize(first_start, region).astimezone(pytz.UTC)
    intervals = []
    for position in range(count):
        from_utc = start_utc + position * mtu.delta
        intervals.append((from_utc, from_utc + mtu.delta))
    return intervals
