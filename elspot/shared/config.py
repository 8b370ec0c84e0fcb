"""Configuration management for elspot."""
import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

# Load environment variables
load_dotenv()


class Config:
    """Application configuration."""

    # Project paths
    ROOT_DIR = Path(__file__).parent.parent.parent
    DATA_DIR = ROOT_DIR / "data"
    LOGS_DIR = ROOT_DIR / "logs"

    # Nord Pool endpoints
    NORDPOOL_PAGE10_URL: str = os.getenv(
        "NORDPOOL_PAGE10_URL", "https://www.nordpoolgroup.com/api/marketdata/page/10"
    )
    NORDPOOL_DAYAHEAD_URL: str = os.getenv(
        "NORDPOOL_DAYAHEAD_URL", "https://dataportal-api.nordpoolgroup.com/api/DayAheadPrices"
    )

    # Data collection settings
    DEFAULT_CURRENCY: str = os.getenv("DEFAULT_CURRENCY", "EUR")
    REQUEST_TIMEOUT: int = int(os.getenv("REQUEST_TIMEOUT", "30"))

    # Logging
    DEBUG: bool = os.getenv("ELSPOT_DEBUG") is not None
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "DEBUG" if DEBUG else "INFO")
    LOG_FILE: Optional[str] = os.getenv("LOG_FILE")

    @classmethod
    def validate(cls) -> None:
        """Validate required configuration."""
        # Imported here so that config stays importable on its own.
        from elspot.market.currencies import SUPPORTED_CURRENCIES

        if cls.DEFAULT_CURRENCY not in SUPPORTED_CURRENCIES:
            raise ValueError(
                f"DEFAULT_CURRENCY '{cls.DEFAULT_CURRENCY}' is not supported, "
                f"use one of: {', '.join(SUPPORTED_CURRENCIES)}"
            )
        if cls.REQUEST_TIMEOUT <= 0:
            raise ValueError("REQUEST_TIMEOUT must be positive")

    @property
    def log_path(self) -> Path | None:
        """Resolve LOG_FILE relative to LOGS_DIR."""
        if not self.LOG_FILE:
            return None
        path = Path(self.LOG_FILE)
        return path if path.is_absolute() else self.LOGS_DIR / path


config = Config()
