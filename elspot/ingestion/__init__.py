"""Data ingestion module - feed loader, collectors and preprocessors."""

from elspot.ingestion.collectors import BaseCollector, DayAheadQuery, NordpoolCollector
from elspot.ingestion.feed import PriceFeed
from elspot.ingestion.preprocessors import BasePreprocessor, PriceNormalizer

__all__ = [
    "BaseCollector",
    "BasePreprocessor",
    "DayAheadQuery",
    "NordpoolCollector",
    "PriceFeed",
    "PriceNormalizer",
]
