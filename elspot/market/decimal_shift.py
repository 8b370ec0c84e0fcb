"""Exact decimal-point relocation for price strings.

Currency and power conversions are powers of ten (sub-unit = x100,
kWh = /1000), so they are done by moving the decimal point instead of
multiplying floats. Values are held as an integer mantissa plus a scale
(number of fractional digits) and only parsed/formatted at the boundary.

Examples:
    >>> shift_right("0167.680", 2)
    '16768'
    >>> shift_left("16768", 3)
    '16.768'
    >>> shift_left("-30", 3)
    '-0.03'
"""

import re
from dataclasses import dataclass

from elspot.shared.exceptions import InvalidDecimalValueError

_DECIMAL_RE = re.compile(r"^(?P<sign>[+-])?(?P<int>\d*)(?:\.(?P<frac>\d*))?$")


@dataclass(frozen=True)
class FixedDecimal:
    """Decimal number represented as ``mantissa * 10 ** -scale``."""

    mantissa: int
    scale: int = 0

    @classmethod
    def parse(cls, text: str) -> "FixedDecimal":
        """Parse a plain decimal string (optional sign, at most one '.').

        Raises:
            InvalidDecimalValueError: On empty input, exponents, separators
                other than '.', or anything without at least one digit.
        """
        if not isinstance(text, str):
            raise InvalidDecimalValueError(f"Decimal value must be a string, got {type(text).__name__}")

        match = _DECIMAL_RE.fullmatch(text)
        if match is None:
            raise InvalidDecimalValueError(f"Invalid decimal value: '{text}'")

        int_digits = match.group("int")
        frac_digits = match.group("frac") or ""
        if not int_digits and not frac_digits:
            raise InvalidDecimalValueError(f"Invalid decimal value: '{text}'")

        mantissa = int((int_digits + frac_digits) or "0")
        if match.group("sign") == "-":
            mantissa = -mantissa
        return cls(mantissa=mantissa, scale=len(frac_digits))

    def shift_right(self, places: int) -> "FixedDecimal":
        """Multiply by ``10 ** places``."""
        _check_places(places)
        scale = self.scale - places
        if scale < 0:
            return FixedDecimal(self.mantissa * 10 ** -scale, 0)
        return FixedDecimal(self.mantissa, scale)

    def shift_left(self, places: int) -> "FixedDecimal":
        """Divide by ``10 ** places``."""
        _check_places(places)
        return FixedDecimal(self.mantissa, self.scale + places)

    def normalized(self) -> "FixedDecimal":
        """Drop trailing fractional zeros."""
        mantissa, scale = self.mantissa, self.scale
        while scale > 0 and mantissa % 10 == 0:
            mantissa //= 10
            scale -= 1
        return FixedDecimal(mantissa, scale)

    def __str__(self) -> str:
        value = self.normalized()
        digits = str(abs(value.mantissa))
        sign = "-" if value.mantissa < 0 else ""

        if value.scale == 0:
            return sign + digits

        # Left-pad so at least one integer digit remains ("5" -> "0.005").
        digits = digits.rjust(value.scale + 1, "0")
        return f"{sign}{digits[:-value.scale]}.{digits[-value.scale:]}"


def _check_places(places: int) -> None:
    if places < 0:
        raise ValueError(f"places must be non-negative, got {places}")


def parse_decimal(value: str) -> FixedDecimal:
    return FixedDecimal.parse(value)


def normalize(value: str) -> str:
    """Canonical form of a decimal string ("0167.680" -> "167.68")."""
    return str(FixedDecimal.parse(value))


def shift_right(value: str, places: int) -> str:
    """Move the decimal point ``places`` positions to the right.

    >>> shift_right("-0.6", 2)
    '-60'
    """
    return str(FixedDecimal.parse(value).shift_right(places))


def shift_left(value: str, places: int) -> str:
    """Move the decimal point ``places`` positions to the left.

    >>> shift_left("5", 3)
    '0.005'
    """
    return str(FixedDecimal.parse(value).shift_left(places))
