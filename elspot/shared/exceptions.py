"""Typed errors raised by elspot.

All errors derive from ``ElspotError`` which itself is a ``ValueError``, so
callers that only guard against bad input keep working.
"""


class ElspotError(ValueError):
    """Base class for every elspot failure."""


class UnsupportedRegionError(ElspotError):
    """Region has no entry in the region/timezone catalog."""

    def __init__(self, region: str) -> None:
        super().__init__(f"Region '{region}' is not supported")
        self.region = region


class RegionNotFoundError(ElspotError):
    """Region has no column in the price feed."""

    def __init__(self, region: str) -> None:
        super().__init__(f"Region '{region}' not found in price data")
        self.region = region


class HourNotFoundError(ElspotError):
    """No row in the feed matches the requested local hour."""


class DateMismatchError(HourNotFoundError):
    """Requested or produced local date differs from the feed date."""


class AmbiguousHourUnresolvedError(ElspotError):
    """Several rows share a local hour and could not be told apart."""


class RowCountMismatchError(ElspotError):
    """Full-day extraction does not match the DST-derived hour count."""

    def __init__(self, region: str, expected: int, actual: int) -> None:
        super().__init__(
            f"Expected {expected} hourly prices for region '{region}', got {actual}"
        )
        self.region = region
        self.expected = expected
        self.actual = actual


class InvalidUnitStringError(ElspotError):
    """Unit string is outside the supported '<CUR>/<PWR>' vocabulary."""


class InvalidDecimalValueError(ElspotError):
    """Price value is not a well-formed signed decimal string."""


class InvalidMarketTimeUnitError(ElspotError):
    """Delivery interval length is neither 15 nor 60 minutes."""


class InvalidFeedError(ElspotError):
    """Feed payload cannot be decoded or fails its envelope checks."""


class InvalidQueryError(ElspotError):
    """Day-ahead query options are incomplete or unsupported."""
