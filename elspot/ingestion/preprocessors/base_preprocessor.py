"""Common base for Bronze → Silver preprocessors.

Silver files hold one row per delivery interval with UTC bounds
(``from_utc`` / ``to_utc``) and live under data/processed/{category}/ as
``{category}_{identifier}_{first day}_{last day}.{csv|parquet}``.
"""

from abc import ABC, abstractmethod
from datetime import date, datetime
from pathlib import Path

import pandas as pd

from elspot.shared.config import config
from elspot.shared.utils import setup_logger

SILVER_FORMATS = ("csv", "parquet")


class BasePreprocessor(ABC):
    """Shared plumbing for preprocessors.

    Subclasses set ``CATEGORY`` and ``REQUIRED_COLUMNS`` and implement
    ``preprocess`` and ``validate``; ``check_schema`` and ``export`` are
    provided.
    """

    CATEGORY: str
    REQUIRED_COLUMNS: list[str] = []

    def __init__(
        self,
        input_dir: Path,
        output_dir: Path,
        log_file: Path | None = None,
    ) -> None:
        """Set up directories and the preprocessor's logger.

        Args:
            input_dir: Where Bronze payloads are read from.
            output_dir: Where Silver files are written (created if missing).
            log_file: Log file in addition to the console (default: LOG_FILE setting).
        """
        self.input_dir = input_dir
        self.output_dir = output_dir
        self.output_dir.mkdir(parents=True, exist_ok=True)
        self.logger = setup_logger(self.__class__.__name__, log_file or config.log_path)

    @abstractmethod
    def preprocess(
        self,
        start_date: datetime | None = None,
        end_date: datetime | None = None,
    ) -> dict[str, pd.DataFrame]:
        """Read Bronze payloads in the window and return Silver frames by key."""
        ...

    @abstractmethod
    def validate(self, df: pd.DataFrame) -> bool:
        """Return True for a valid Silver frame, raise ValueError otherwise."""
        ...

    def check_schema(self, df: pd.DataFrame) -> None:
        """Reject empty frames, missing required columns and missing values.

        Raises:
            ValueError: Naming the first problem found.
        """
        if df.empty:
            raise ValueError("DataFrame is empty")

        missing_cols = set(self.REQUIRED_COLUMNS) - set(df.columns)
        if missing_cols:
            raise ValueError(f"Missing required columns: {sorted(missing_cols)}")

        for column in self.REQUIRED_COLUMNS:
            if df[column].isna().any():
                raise ValueError(f"Missing values found in '{column}'")

    def export(
        self,
        df: pd.DataFrame,
        identifier: str,
        start_date: date,
        end_date: date,
        format: str = "csv",
    ) -> Path:
        """Write a Silver frame to output_dir.

        Args:
            df: Frame to write.
            identifier: Dataset key inserted in the file name (e.g. a region).
            start_date: First delivery day covered.
            end_date: Last delivery day covered.
            format: "csv" or "parquet".

        Returns:
            Path of the written file.

        Raises:
            ValueError: Empty frame or unknown format.
        """
        if df.empty:
            raise ValueError(f"Cannot export empty DataFrame for '{identifier}'")
        if format not in SILVER_FORMATS:
            raise ValueError(f"Invalid format '{format}', use one of: {', '.join(SILVER_FORMATS)}")

        name_parts = [self.CATEGORY, identifier, f"{start_date:%Y-%m-%d}", f"{end_date:%Y-%m-%d}"]
        path = self.output_dir / f"{'_'.join(p for p in name_parts if p)}.{format}"

        if format == "parquet":
            df.to_parquet(path, index=False, engine="pyarrow")
        else:
            df.to_csv(path, index=False, encoding="utf-8")

        self.logger.info("Wrote %d %s records to %s", len(df), self.CATEGORY, path)
        return path
