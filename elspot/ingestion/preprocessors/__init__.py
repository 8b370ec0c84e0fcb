"""Data preprocessors for Bronze → Silver transformation."""

from elspot.ingestion.preprocessors.base_preprocessor import BasePreprocessor
from elspot.ingestion.preprocessors.price_normalizer import PriceNormalizer

__all__ = [
    "BasePreprocessor",
    "PriceNormalizer",
]
