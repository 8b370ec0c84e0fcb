"""Common base for Bronze collectors.

A collector downloads source payloads as delivered and stores them as UTF-8
JSON under data/raw/{source}/ named ``{source}_{dataset}_{YYYYMMDD}.json``
after the delivery date.
Turning them into Silver records is the preprocessors' job.
"""

import json
from abc import ABC, abstractmethod
from datetime import date, datetime
from pathlib import Path
from typing import Any

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from elspot.shared.config import config
from elspot.shared.utils import setup_logger


class BaseCollector(ABC):
    """Shared plumbing for collectors: output directory, logger, HTTP session.

    Subclasses set ``SOURCE_NAME`` and implement ``collect`` and
    ``health_check``.
    """

    SOURCE_NAME: str

    MAX_RETRIES = 3
    RETRY_BACKOFF = 2.0
    RETRY_STATUSES = (429, 500, 502, 503, 504)

    def __init__(self, output_dir: Path, log_file: Path | None = None) -> None:
        """Set up the output directory and the collector's logger.

        Args:
            output_dir: Where raw payloads are written (created if missing).
            log_file: Log file in addition to the console (default: LOG_FILE setting).
        """
        self.output_dir = output_dir
        self.output_dir.mkdir(parents=True, exist_ok=True)
        self.logger = setup_logger(self.__class__.__name__, log_file or config.log_path)

    @abstractmethod
    def collect(
        self,
        start_date: datetime | None = None,
        end_date: datetime | None = None,
    ) -> dict[str, dict[str, Any]]:
        """Download every dataset of the source, keyed by dataset name."""
        ...

    @abstractmethod
    def health_check(self) -> bool:
        """Return True if the source answers, False otherwise."""
        ...

    def create_session(self) -> requests.Session:
        """GET-only session retrying throttled and failed requests with backoff."""
        session = requests.Session()
        retry = Retry(
            total=self.MAX_RETRIES,
            backoff_factor=self.RETRY_BACKOFF,
            status_forcelist=list(self.RETRY_STATUSES),
            allowed_methods=["GET"],
        )
        adapter = HTTPAdapter(max_retries=retry)
        session.mount("https://", adapter)
        session.mount("http://", adapter)
        return session

    def export_json(
        self, payload: dict[str, Any], dataset_name: str, day: date | None = None
    ) -> Path:
        """Store a raw payload in output_dir.

        Args:
            payload: Decoded payload, written back unchanged.
            dataset_name: Dataset key inserted in the file name (e.g. "page10_NOK").
            day: Delivery date of the payload (default: today).

        Returns:
            Path of the written file.

        Raises:
            ValueError: If the payload is empty.
        """
        if not payload:
            raise ValueError(f"Cannot export empty payload for '{dataset_name}'")

        day = day or date.today()
        path = self.output_dir / f"{self.SOURCE_NAME}_{dataset_name}_{day:%Y%m%d}.json"
        path.write_text(json.dumps(payload, ensure_ascii=False), encoding="utf-8")
        self.logger.info("Stored raw %s payload at %s", dataset_name, path)
        return path
