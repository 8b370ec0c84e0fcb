"""Hourly price record and its unit conversions."""

from dataclasses import dataclass, replace
from datetime import date, datetime
from decimal import ROUND_DOWN, ROUND_HALF_UP, Decimal
from typing import Any

import pytz

from elspot.market import decimal_shift
from elspot.market.currencies import FRACTION_DIGITS, Currency
from elspot.market.regions import local_from_utc
from elspot.market.units import CurrencyUnit, Mtu, PowerUnit

POWER_DIGITS = 3  # 1 MWh = 1000 kWh


@dataclass(frozen=True)
class Price:
    """One delivery interval price for a region.

    ``value`` is kept as the exact decimal string. Conversions never mutate the
    record; they return a copy with the new value and one flipped unit tag.
    """

    region: str
    from_utc: datetime
    to_utc: datetime
    date: date
    value: str
    currency: Currency
    currency_unit: CurrencyUnit
    power_unit: PowerUnit
    market_time_unit: Mtu = Mtu.SIXTY

    def __post_init__(self) -> None:
        decimal_shift.parse_decimal(self.value)
        if self.from_utc.tzinfo is None or self.to_utc.tzinfo is None:
            raise ValueError("Price interval bounds must be timezone-aware")
        if self.to_utc - self.from_utc != self.market_time_unit.delta:
            raise ValueError(
                f"Price interval {self.from_utc.isoformat()} - {self.to_utc.isoformat()} "
                f"does not match MTU of {self.market_time_unit.label()}"
            )

    # ------------------------------------------------------------------
    # Unit conversions
    # ------------------------------------------------------------------

    def to_currency_fraction(self) -> "Price":
        """Full currency -> sub-unit (e.g. Kr. -> Øre)."""
        if self.currency_unit is CurrencyUnit.FRACTION:
            return self
        return replace(
            self,
            value=decimal_shift.shift_right(self.value, FRACTION_DIGITS),
            currency_unit=CurrencyUnit.FRACTION,
        )

    def to_currency_full(self) -> "Price":
        """Sub-unit -> full currency (e.g. Øre -> Kr.)."""
        if self.currency_unit is CurrencyUnit.FULL:
            return self
        return replace(
            self,
            value=decimal_shift.shift_left(self.value, FRACTION_DIGITS),
            currency_unit=CurrencyUnit.FULL,
        )

    def to_kwh(self) -> "Price":
        """Price per MWh -> price per kWh (1/1000 of the value)."""
        if self.power_unit is PowerUnit.KWH:
            return self
        return replace(
            self,
            value=decimal_shift.shift_left(self.value, POWER_DIGITS),
            power_unit=PowerUnit.KWH,
        )

    def to_mwh(self) -> "Price":
        """Price per kWh -> price per MWh (1000x the value)."""
        if self.power_unit is PowerUnit.MWH:
            return self
        return replace(
            self,
            value=decimal_shift.shift_right(self.value, POWER_DIGITS),
            power_unit=PowerUnit.MWH,
        )

    # ------------------------------------------------------------------
    # Numeric views
    # ------------------------------------------------------------------

    def as_decimal(self) -> Decimal:
        """Exact value as a ``Decimal``."""
        return Decimal(decimal_shift.normalize(self.value))

    def _rounded(self) -> Decimal:
        # Truncate to three fractional digits, then round to two.
        value = self.as_decimal().quantize(Decimal("0.001"), rounding=ROUND_DOWN)
        value = value.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
        if self.currency_unit is CurrencyUnit.FRACTION:
            value = value.quantize(Decimal("1"), rounding=ROUND_HALF_UP)
        return value

    def as_float(self) -> float:
        """Value rounded to two decimals (whole numbers for sub-units)."""
        return float(self._rounded())

    def as_int(self) -> int:
        return int(self._rounded().quantize(Decimal("1"), rounding=ROUND_HALF_UP))

    # ------------------------------------------------------------------
    # Time views
    # ------------------------------------------------------------------

    def from_to(self) -> tuple[datetime, datetime]:
        """Interval bounds in the price region's local time."""
        return self.from_to_with_region(self.region)

    def from_to_as_utc(self) -> tuple[datetime, datetime]:
        return self.from_utc, self.to_utc

    def from_to_with_region(self, region: str) -> tuple[datetime, datetime]:
        return local_from_utc(self.from_utc, region), local_from_utc(self.to_utc, region)

    def from_to_with_tz(self, tz: pytz.BaseTzInfo | str) -> tuple[datetime, datetime]:
        if isinstance(tz, str):
            tz = pytz.timezone(tz)
        return self.from_utc.astimezone(tz), self.to_utc.astimezone(tz)

    def hour(self) -> str:
        """Local start of the interval formatted as HH:MM."""
        return self.from_to()[0].strftime("%H:%M")

    # ------------------------------------------------------------------
    # Presentation
    # ------------------------------------------------------------------

    @property
    def currency_symbol(self) -> str:
        if self.currency_unit is CurrencyUnit.FRACTION:
            return self.currency.fraction_symbol
        return self.currency.full_symbol

    def price_label(self) -> str:
        """Human readable label, e.g. "NOK 167,68 Kr./MWh"."""
        rounded = self._rounded()
        text = "0" if rounded == 0 else format(rounded.normalize(), "f")
        value = text.replace(".", ",")
        return f"{self.currency.code} {value} {self.currency_symbol}/{self.power_unit.value}"

    def to_dict(self) -> dict[str, Any]:
        return {
            "region": self.region,
            "from_utc": self.from_utc,
            "to_utc": self.to_utc,
            "date": self.date,
            "value": self.value,
            "currency": self.currency.code,
            "currency_unit": self.currency_unit.value,
            "power_unit": self.power_unit.value,
            "mtu_minutes": self.market_time_unit.value,
        }

    def __str__(self) -> str:
        return f"{self.region} {self.from_utc.isoformat()} {self.price_label()}"
