"""
Client for the bulk-import webhook that turns timesheet CSVs into labor-day rows.
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import requests

from project_finance.errors import ImportServiceError
from project_finance.readers.import_rows_reader import extract_rows
from project_finance.utils.logging_utils import redact

logger = logging.getLogger(__name__)


class LaborDayImportService:
    """
    Upload a CSV to the import webhook and return the rows it extracted.

    The webhook receives a multipart form (``file``, ``projectId``, ``year``)
    authenticated with an ``x-api-key`` header, and answers with either a
    JSON list of rows or an object whose ``data`` key holds that list.

    Example:
        >>> service = LaborDayImportService("https://hooks.example.com/upload-csv", "key")
        >>> rows = service.upload("timesheet.csv", "proj-001", "2024")
        >>> rows[0]
        {'Role': 'BE', 'Month': '04', 'TotalDuration': '80'}
    """

    def __init__(
        self,
        webhook_url: str,
        api_key: Optional[str] = None,
        timeout: float = 30.0,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize the import client.

        Args:
            webhook_url: Endpoint receiving the CSV upload
            api_key: Value of the x-api-key header, if the webhook needs one
            timeout: Request timeout in seconds
            session: Optional requests session (tests inject a mock)
        """
        if not webhook_url:
            raise ImportServiceError(
                "No import webhook configured",
                recovery_hint="Set IMPORT_WEBHOOK_URL in .env",
            )
        self.webhook_url = webhook_url
        self.api_key = api_key
        self.timeout = timeout
        self.session = session or requests.Session()

    @classmethod
    def from_config(cls, config) -> "LaborDayImportService":
        """Build the client from FinanceTrackerConfig."""
        return cls(
            webhook_url=config.import_webhook_url,
            api_key=config.import_api_key,
            timeout=config.import_timeout,
        )

    def _headers(self) -> Dict[str, str]:
        return {"x-api-key": self.api_key} if self.api_key else {}

    def upload(
        self, file_path: Union[str, Path], project_id: str, year: str
    ) -> List[Dict[str, Any]]:
        """
        Post the CSV file and return the raw row list.

        Args:
            file_path: CSV file to upload
            project_id: Project the hours belong to
            year: Year the hours belong to

        Returns:
            Rows as returned by the webhook (not yet validated)

        Raises:
            ImportServiceError: If the file is unreadable, the webhook fails,
                or the response has an unexpected shape
        """
        path = Path(file_path)
        if not path.is_file():
            raise ImportServiceError(f"CSV file not found: {path}")

        headers = self._headers()
        logger.info(f"Uploading {path.name} to import webhook for {project_id}/{year}")
        logger.debug(f"Import request headers: {redact(headers)}")

        try:
            with open(path, "rb") as f:
                response = self.session.post(
                    self.webhook_url,
                    headers=headers,
                    files={"file": (path.name, f, "text/csv")},
                    data={"projectId": project_id, "year": year},
                    timeout=self.timeout,
                )
            response.raise_for_status()
        except requests.exceptions.RequestException as e:
            logger.error(f"Import webhook request failed: {e}")
            raise ImportServiceError(
                f"Failed to reach import webhook: {e}",
                recovery_hint="Check IMPORT_WEBHOOK_URL and IMPORT_API_KEY",
            ) from e
        except OSError as e:
            raise ImportServiceError(f"Cannot read CSV file {path}: {e}") from e

        try:
            payload = response.json()
        except ValueError as e:
            logger.error(f"Import webhook returned non-JSON body: {e}")
            raise ImportServiceError("Import webhook returned invalid JSON") from e

        rows = extract_rows(payload)
        if rows is None:
            logger.error(f"Unexpected import webhook payload: {type(payload).__name__}")
            raise ImportServiceError("Unexpected response format from import webhook")

        logger.info(f"Import webhook returned {len(rows)} rows")
        return rows
