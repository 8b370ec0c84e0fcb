"""Unit tags attached to prices: currency unit, power unit and MTU."""

from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum

from elspot.market.currencies import Currency, get_currency
from elspot.shared.exceptions import InvalidMarketTimeUnitError, InvalidUnitStringError


class CurrencyUnit(str, Enum):
    """Whole currency ("Kr.") or its sub-unit ("Øre")."""

    FULL = "full"
    FRACTION = "fraction"


class PowerUnit(str, Enum):
    MWH = "MWh"
    KWH = "kWh"


class Mtu(int, Enum):
    """Market Time Unit, length of one delivery interval in minutes."""

    SIXTY = 60
    FIFTEEN = 15

    @classmethod
    def from_interval(cls, start: datetime, end: datetime) -> "Mtu":
        """Derive the MTU from a delivery interval.

        Raises:
            InvalidMarketTimeUnitError: If the interval is not 15 or 60 minutes.
        """
        minutes = (end - start) / timedelta(minutes=1)
        for mtu in cls:
            if minutes == mtu.value:
                return mtu
        raise InvalidMarketTimeUnitError(f"Unsupported delivery interval of {minutes:g} minutes")

    @property
    def delta(self) -> timedelta:
        return timedelta(minutes=self.value)

    def label(self) -> str:
        return f"{self.value} minutes"


@dataclass(frozen=True)
class UnitString:
    """Parsed '<CUR>/<PWR>' token declared by the feed (e.g. "NOK/MWh")."""

    currency: Currency
    power_unit: PowerUnit

    @classmethod
    def parse(cls, text: str) -> "UnitString":
        """Validate a unit string against the supported vocabulary.

        Raises:
            InvalidUnitStringError: If the token is malformed or unsupported.
        """
        parts = text.split("/") if isinstance(text, str) else []
        if len(parts) != 2:
            raise InvalidUnitStringError(f"Invalid unit string: '{text}'")

        currency_code, power = parts
        try:
            power_unit = PowerUnit(power)
        except ValueError:
            raise InvalidUnitStringError(f"Invalid power unit in unit string: '{text}'") from None

        return cls(currency=get_currency(currency_code), power_unit=power_unit)

    def __str__(self) -> str:
        return f"{self.currency.code}/{self.power_unit.value}"
