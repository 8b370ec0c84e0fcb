"""Unit tests for the page-10 feed loader."""

import copy
import json
from datetime import date

import pytest

from elspot.ingestion.feed import PriceFeed
from elspot.market.units import PowerUnit
from elspot.shared.exceptions import InvalidFeedError, InvalidUnitStringError, RegionNotFoundError

# ---------------------------------------------------------------------------
# Decoding
# ---------------------------------------------------------------------------


class TestPriceFeedDecode:
    def test_metadata(self, nok_23h_feed):
        assert nok_23h_feed.date == date(2023, 3, 26)
        assert nok_23h_feed.currency == "NOK"
        assert str(nok_23h_feed.unit_string) == "NOK/MWh"
        assert nok_23h_feed.unit_string.power_unit is PowerUnit.MWH

    def test_rows_keep_document_order(self, nok_25h_feed):
        hourly = [row for row in nok_25h_feed.rows if not row.is_extra]

        assert len(hourly) == 25
        assert [row.start.hour for row in hourly[:5]] == [0, 1, 2, 2, 3]
        assert hourly[2].value_at(0) != hourly[3].value_at(0)

    def test_extra_rows_are_flagged(self, eur_24h_feed):
        extra = [row for row in eur_24h_feed.rows if row.is_extra]
        assert len(extra) == 6

    def test_rows_are_naive_local_times(self, eur_24h_feed):
        row = eur_24h_feed.rows[0]
        assert row.start.tzinfo is None
        assert row.start.isoformat() == "2024-06-20T00:00:00"

    def test_wrong_page_id(self, eur_24h_payload):
        eur_24h_payload["pageId"] = 11
        with pytest.raises(InvalidFeedError, match="page id"):
            PriceFeed.from_dict(eur_24h_payload)

    def test_missing_data(self):
        with pytest.raises(InvalidFeedError, match="'data'"):
            PriceFeed.from_dict({"pageId": 10})

    def test_not_an_object(self):
        with pytest.raises(InvalidFeedError):
            PriceFeed.from_json("[1, 2, 3]")

    def test_missing_units(self, eur_24h_payload):
        eur_24h_payload["data"]["Units"] = []
        with pytest.raises(InvalidFeedError, match="unit string"):
            PriceFeed.from_dict(eur_24h_payload)

    def test_unsupported_unit(self, eur_24h_payload):
        eur_24h_payload["data"]["Units"] = ["USD/MWh"]
        with pytest.raises(InvalidUnitStringError):
            PriceFeed.from_dict(eur_24h_payload)

    def test_no_rows(self, eur_24h_payload):
        eur_24h_payload["data"]["Rows"] = []
        with pytest.raises(InvalidFeedError, match="no rows"):
            PriceFeed.from_dict(eur_24h_payload)

    def test_bad_timestamp(self, eur_24h_payload):
        eur_24h_payload["data"]["Rows"][0]["StartTime"] = "yesterday"
        with pytest.raises(InvalidFeedError, match="StartTime"):
            PriceFeed.from_dict(eur_24h_payload)

    def test_malformed_row(self, eur_24h_payload):
        del eur_24h_payload["data"]["Rows"][0]["Columns"]
        with pytest.raises(InvalidFeedError, match="Malformed"):
            PriceFeed.from_dict(eur_24h_payload)

    def test_invalid_json(self):
        with pytest.raises(InvalidFeedError, match="Invalid JSON"):
            PriceFeed.from_json('{"pageId": 10,')


# ---------------------------------------------------------------------------
# Loading / saving
# ---------------------------------------------------------------------------


class TestPriceFeedIO:
    def test_to_dict_returns_payload_unchanged(self, eur_24h_payload):
        original = copy.deepcopy(eur_24h_payload)
        assert PriceFeed.from_dict(eur_24h_payload).to_dict() == original

    def test_json_round_trip(self, nok_23h_feed):
        restored = PriceFeed.from_json(nok_23h_feed.to_json())

        assert restored.date == nok_23h_feed.date
        assert restored.rows == nok_23h_feed.rows

    def test_to_json_keeps_non_ascii(self, nok_23h_feed):
        assert "Tromsø" in nok_23h_feed.to_json()

    def test_file_round_trip(self, tmp_path, eur_24h_feed):
        path = eur_24h_feed.to_file(tmp_path / "feeds" / "nordpool_page10_EUR.json")

        assert path.exists()
        assert json.loads(path.read_text(encoding="utf-8"))["pageId"] == 10
        assert PriceFeed.from_file(path).regions() == eur_24h_feed.regions()


# ---------------------------------------------------------------------------
# Metadata
# ---------------------------------------------------------------------------


class TestPriceFeedMetadata:
    def test_regions_in_column_order(self, eur_24h_feed):
        regions = eur_24h_feed.regions()

        assert regions[0] == "SYS"
        assert "Oslo" in regions
        assert len(regions) == 22

    def test_has_region(self, eur_24h_feed):
        assert eur_24h_feed.has_region("Kr.sand")
        assert not eur_24h_feed.has_region("NO1")

    def test_column_index(self, eur_24h_feed):
        assert eur_24h_feed.column_index("SYS") == 0
        assert eur_24h_feed.column_index("FI") == 5

    def test_column_index_unknown_region(self, eur_24h_feed):
        with pytest.raises(RegionNotFoundError, match="'NO1' not found") as exc_info:
            eur_24h_feed.column_index("NO1")
        assert exc_info.value.region == "NO1"

    def test_final_and_preliminary(self, make_payload):
        final = PriceFeed.from_dict(make_payload(date(2024, 6, 20)))
        preliminary = PriceFeed.from_dict(make_payload(date(2024, 6, 20), preliminary=True))

        assert final.is_final() and not final.is_preliminary()
        assert preliminary.is_preliminary() and not preliminary.is_final()

    def test_is_today_for_region(self, eur_24h_feed):
        assert eur_24h_feed.is_today_for_region("Oslo", today=date(2024, 6, 20))
        assert not eur_24h_feed.is_today_for_region("Oslo", today=date(2024, 6, 21))

    def test_repr(self, nok_25h_feed):
        text = repr(nok_25h_feed)

        assert "2022-10-30" in text
        assert "NOK/MWh" in text
        assert "rows=31" in text
