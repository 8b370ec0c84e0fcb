"""Collectors package."""

from elspot.ingestion.collectors.base_collector import BaseCollector
from elspot.ingestion.collectors.nordpool_collector import DayAheadQuery, NordpoolCollector

__all__ = ["BaseCollector", "DayAheadQuery", "NordpoolCollector"]
