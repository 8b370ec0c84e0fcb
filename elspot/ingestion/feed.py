"""Nord Pool "marketdata page 10" feed loader.

Decodes the vendor JSON into ``RawRow`` objects and feed metadata. The raw
payload is kept untouched so that it can be written back out unchanged.

Payload outline::

    {
        "pageId": 10,
        "currency": "NOK",
        "data": {
            "DataStartdate": "2023-03-26T00:00:00",
            "ContainsPreliminaryValues": true,
            "Units": ["NOK/MWh"],
            "Rows": [
                {
                    "StartTime": "2023-03-26T00:00:00",
                    "EndTime": "2023-03-26T01:00:00",
                    "IsExtraRow": false,
                    "Columns": [{"Index": 0, "Name": "SYS", "Value": "1 012,30"}, ...]
                },
                ...
            ]
        }
    }
"""

import json
from datetime import date, datetime
from pathlib import Path
from typing import Any

from elspot.market.regions import region_today
from elspot.market.rows import RawColumn, RawRow
from elspot.market.units import UnitString
from elspot.shared.exceptions import InvalidFeedError, RegionNotFoundError

PAGE_ID = 10


def _parse_timestamp(value: Any, field_name: str) -> datetime:
    try:
        return datetime.fromisoformat(value)
    except (TypeError, ValueError) as exc:
        raise InvalidFeedError(f"Invalid timestamp in '{field_name}': {value!r}") from exc


def _parse_row(entry: dict[str, Any]) -> RawRow:
    try:
        columns = tuple(
            RawColumn(
                index=int(col["Index"]),
                name=str(col["Name"]),
                value=str(col["Value"]),
                is_official=bool(col.get("IsOfficial", True)),
            )
            for col in entry["Columns"]
        )
        return RawRow(
            start=_parse_timestamp(entry["StartTime"], "StartTime"),
            end=_parse_timestamp(entry["EndTime"], "EndTime"),
            is_extra=bool(entry.get("IsExtraRow", False)),
            columns=columns,
        )
    except (KeyError, TypeError) as exc:
        raise InvalidFeedError(f"Malformed feed row: {exc}") from exc


class PriceFeed:
    """One day of hourly prices for every region in one currency."""

    def __init__(self, payload: dict[str, Any]) -> None:
        """Validate and decode a page-10 payload.

        Raises:
            InvalidFeedError: Wrong page id, missing fields or malformed rows.
            InvalidUnitStringError: Unit string outside the supported vocabulary.
        """
        if not isinstance(payload, dict):
            raise InvalidFeedError("Feed payload must be a JSON object")

        if payload.get("pageId") != PAGE_ID:
            raise InvalidFeedError(f"Invalid page id: {payload.get('pageId')!r}, expected {PAGE_ID}")

        data = payload.get("data")
        if not isinstance(data, dict):
            raise InvalidFeedError("Feed payload has no 'data' object")

        units = data.get("Units") or []
        if not units:
            raise InvalidFeedError("Feed payload is missing its unit string")

        self._payload = payload
        self.unit_string = UnitString.parse(units[0])
        self.currency: str = str(payload.get("currency") or self.unit_string.currency.code)
        self.date: date = _parse_timestamp(data.get("DataStartdate"), "DataStartdate").date()
        self.contains_preliminary_values = bool(data.get("ContainsPreliminaryValues", False))
        self.rows: tuple[RawRow, ...] = tuple(_parse_row(entry) for entry in data.get("Rows") or [])

        if not self.rows:
            raise InvalidFeedError("Feed payload has no rows")

    # ------------------------------------------------------------------
    # Loading / saving
    # ------------------------------------------------------------------

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> "PriceFeed":
        return cls(payload)

    @classmethod
    def from_json(cls, json_str: str) -> "PriceFeed":
        try:
            payload = json.loads(json_str)
        except json.JSONDecodeError as exc:
            raise InvalidFeedError(f"Invalid JSON: {exc}") from exc
        return cls(payload)

    @classmethod
    def from_file(cls, path: Path | str) -> "PriceFeed":
        return cls.from_json(Path(path).read_text(encoding="utf-8"))

    def to_dict(self) -> dict[str, Any]:
        return self._payload

    def to_json(self) -> str:
        return json.dumps(self._payload, ensure_ascii=False)

    def to_file(self, path: Path | str) -> Path:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.to_json(), encoding="utf-8")
        return path

    # ------------------------------------------------------------------
    # Metadata
    # ------------------------------------------------------------------

    def is_final(self) -> bool:
        return not self.contains_preliminary_values

    def is_preliminary(self) -> bool:
        return self.contains_preliminary_values

    def regions(self) -> list[str]:
        """Region names in column order, as spelled by the feed."""
        return [col.name for col in self.rows[0].columns]

    def has_region(self, region: str) -> bool:
        return region in self.regions()

    def column_index(self, region: str) -> int:
        """Position of the region's column, taken from the first row.

        Raises:
            RegionNotFoundError: If the feed has no column for the region.
        """
        for position, col in enumerate(self.rows[0].columns):
            if col.name == region:
                return position
        raise RegionNotFoundError(region)

    def is_today_for_region(self, region: str, today: date | None = None) -> bool:
        """True if the feed date is the current local date in the region."""
        return self.date == (today or region_today(region))

    def __repr__(self) -> str:
        return (
            f"PriceFeed(date={self.date.isoformat()}, unit='{self.unit_string}', "
            f"rows={len(self.rows)}, regions={len(self.regions())})"
        )
