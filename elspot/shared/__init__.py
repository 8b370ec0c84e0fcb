"""Shared utilities and configuration."""

from elspot.shared.config import Config
from elspot.shared.utils import parse_date, setup_logger

__all__ = ["Config", "setup_logger", "parse_date"]
