"""Market primitives: regions, units, exact decimal shifting and row reconciliation."""

from elspot.market.decimal_shift import FixedDecimal, normalize, shift_left, shift_right
from elspot.market.hours import HourCount, hours_in_day
from elspot.market.price import Price
from elspot.market.regions import SYSTEM_REGION, get_region, resolve_timezone, supported_regions
from elspot.market.rows import NO_DATA, RawColumn, RawRow
from elspot.market.units import CurrencyUnit, Mtu, PowerUnit, UnitString

__all__ = [
    "CurrencyUnit",
    "FixedDecimal",
    "HourCount",
    "Mtu",
    "NO_DATA",
    "PowerUnit",
    "Price",
    "RawColumn",
    "RawRow",
    "SYSTEM_REGION",
    "UnitString",
    "get_region",
    "hours_in_day",
    "normalize",
    "resolve_timezone",
    "shift_left",
    "shift_right",
    "supported_regions",
]
