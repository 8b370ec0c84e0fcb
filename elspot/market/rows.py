"""Deserialized hourly rows of a day-ahead feed."""

from dataclasses import dataclass, field
from datetime import datetime

NO_DATA = "-"


@dataclass(frozen=True)
class RawColumn:
    """One region's cell in a feed row."""

    index: int
    name: str
    value: str
    is_official: bool = True


@dataclass(frozen=True)
class RawRow:
    """One feed row: naive local start/end plus a cell per region.

    Rows flagged ``is_extra`` hold daily aggregates (min, max, average, ...)
    and never represent a delivery hour.
    """

    start: datetime
    end: datetime
    is_extra: bool = False
    columns: tuple[RawColumn, ...] = field(default_factory=tuple)

    def value_at(self, index: int) -> str:
        return self.columns[index].value

    def has_data_at(self, index: int) -> bool:
        return self.value_at(index).strip() != NO_DATA
