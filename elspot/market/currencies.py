"""Currency catalog.

Every supported currency carries its display symbols for the full unit and
for the sub-unit (always 1/100 of the full unit).
"""

from dataclasses import dataclass

from elspot.shared.exceptions import InvalidUnitStringError

FRACTION_DIGITS = 2  # sub-unit = 1/100 of the full unit


@dataclass(frozen=True)
class Currency:
    """Immutable descriptor for a supported currency."""

    code: str
    full_symbol: str
    fraction_symbol: str


_CATALOG: tuple[Currency, ...] = (
    Currency("BGN", "lev.", "stotinka"),
    Currency("DKK", "Kr.", "Øre"),
    Currency("EUR", "Eur.", "Cent"),
    Currency("NOK", "Kr.", "Øre"),
    Currency("PLN", "zł.", "grosz"),
    Currency("RON", "leu.", "bani"),
    Currency("SEK", "Kr.", "Öre"),
)

CURRENCIES: dict[str, Currency] = {c.code: c for c in _CATALOG}
SUPPORTED_CURRENCIES: list[str] = [c.code for c in _CATALOG]


def get_currency(code: str) -> Currency:
    """Look up a currency by its ISO code.

    Raises:
        InvalidUnitStringError: If the currency is not supported.
    """
    try:
        return CURRENCIES[code]
    except KeyError:
        raise InvalidUnitStringError(f"Unsupported currency '{code}'") from None
