"""
Google Sheets service backing the spreadsheet store.
"""

import logging
from typing import Any, Callable, Dict, List, Optional

import google.auth
import pandas as pd
from google.auth.exceptions import GoogleAuthError
from google.oauth2 import service_account
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from project_finance.errors import StoreError

logger = logging.getLogger(__name__)


def values_to_dataframe(values: List[List[Any]]) -> pd.DataFrame:
    """Turn a Sheets values payload (first row = headers) into a DataFrame.

    Short rows are padded with empty strings. A header row without data
    yields an empty DataFrame that still carries the columns.
    """
    if not values:
        return pd.DataFrame()

    headers = [str(header).strip() for header in values[0]]
    width = len(headers)
    data = [list(row[:width]) + [""] * (width - len(row)) for row in values[1:]]
    return pd.DataFrame(data, columns=headers)


def dataframe_to_values(data: pd.DataFrame, include_headers: bool) -> List[List[str]]:
    """Flatten a DataFrame to the list-of-lists shape the Sheets API expects."""
    values = []
    if include_headers:
        values.append(data.columns.tolist())
    for _, row in data.iterrows():
        values.append(row.astype(str).tolist())
    return values


class GoogleSheetsService:
    """
    Thin wrapper over the Sheets v4 API.

    Features:
    - Service account credentials (from .env) or Application Default Credentials (ADC)
    - Pandas DataFrame integration
    - API failures surfaced as StoreError; no retries are attempted
    """

    def __init__(
        self,
        credentials: Optional[Dict[str, Any]] = None,
        scopes: Optional[List[str]] = None,
    ):
        """
        Initialize the Google Sheets service.

        Args:
            credentials: Service account credentials dict from
                        config.get_google_service_account_info().
                        If None, falls back to ADC (Application Default Credentials)
            scopes: Custom OAuth scopes for authentication
        """
        self.credentials_info = credentials
        self.scopes = scopes or ["https://www.googleapis.com/auth/spreadsheets"]
        self._service = self._create_service()

    def _create_service(self):
        """
        Create the Sheets API client from service account info or ADC.

        Raises:
            StoreError: If no usable credentials are available
        """
        try:
            if self.credentials_info:
                credentials = service_account.Credentials.from_service_account_info(
                    self.credentials_info, scopes=self.scopes
                )
                project = self.credentials_info.get("project_id", "unknown")
                logger.info(
                    f"Google Sheets service initialized with service account "
                    f"for project: {project}"
                )
            else:
                credentials, project = google.auth.default(scopes=self.scopes)
                logger.info(
                    f"Google Sheets service initialized with ADC for project: {project}"
                )

            return build("sheets", "v4", credentials=credentials)

        except (GoogleAuthError, ValueError) as e:
            logger.error(f"Failed to initialize Google Sheets service: {e}")
            raise StoreError(
                f"Cannot authenticate with Google Sheets: {e}",
                recovery_hint="Set the GOOGLE_* service account variables in .env "
                "or run 'gcloud auth application-default login'",
            ) from e

    def _execute(self, description: str, operation: Callable[[], Dict[str, Any]]):
        try:
            return operation()
        except HttpError as e:
            logger.error(f"Failed to {description}: {e}")
            raise StoreError(
                f"Google Sheets request failed ({description}): {e}"
            ) from e
        except (GoogleAuthError, OSError) as e:
            # Timeouts, refused connections and token refresh failures
            logger.error(f"Failed to {description}: {type(e).__name__}: {e}")
            raise StoreError(
                f"Could not reach Google Sheets ({description}): {e}",
                recovery_hint="Check your network connection and credentials",
            ) from e

    def read_sheet(
        self,
        spreadsheet_id: str,
        range_name: str,
        value_render_option: str = "UNFORMATTED_VALUE",
    ) -> pd.DataFrame:
        """
        Read a range and return it as a DataFrame (first row = headers).

        Args:
            spreadsheet_id: The ID of the spreadsheet
            range_name: The A1 notation range to read
            value_render_option: How values should be rendered

        Raises:
            StoreError: If the API request fails
        """
        result = self._execute(
            f"read {spreadsheet_id}:{range_name}",
            lambda: self._service.spreadsheets()
            .values()
            .get(
                spreadsheetId=spreadsheet_id,
                range=range_name,
                valueRenderOption=value_render_option,
            )
            .execute(),
        )
        values = result.get("values", [])
        if not values:
            logger.info(f"No data found in range {range_name}")

        df = values_to_dataframe(values)
        logger.debug(f"Read {len(df)} rows from {range_name}")
        return df

    def write_sheet(
        self,
        spreadsheet_id: str,
        range_name: str,
        data: pd.DataFrame,
        include_headers: bool = False,
        value_input_option: str = "RAW",
    ) -> Dict[str, Any]:
        """
        Write a DataFrame to a range.

        Raises:
            StoreError: If the API request fails
        """
        values = dataframe_to_values(data, include_headers)
        result = self._execute(
            f"write to {spreadsheet_id}:{range_name}",
            lambda: self._service.spreadsheets()
            .values()
            .update(
                spreadsheetId=spreadsheet_id,
                range=range_name,
                valueInputOption=value_input_option,
                body={"values": values},
            )
            .execute(),
        )
        logger.info(
            f"Wrote {len(values)} rows to {spreadsheet_id}:{range_name}. "
            f"Updated {result.get('updatedCells', 0)} cells"
        )
        return result

    def append_data(
        self,
        spreadsheet_id: str,
        range_name: str,
        data: pd.DataFrame,
        value_input_option: str = "RAW",
    ) -> Dict[str, Any]:
        """
        Append DataFrame rows after the last row of a range.

        Raises:
            StoreError: If the API request fails
        """
        values = dataframe_to_values(data, include_headers=False)
        result = self._execute(
            f"append to {spreadsheet_id}:{range_name}",
            lambda: self._service.spreadsheets()
            .values()
            .append(
                spreadsheetId=spreadsheet_id,
                range=range_name,
                valueInputOption=value_input_option,
                insertDataOption="INSERT_ROWS",
                body={"values": values},
            )
            .execute(),
        )
        logger.info(f"Appended {len(values)} rows to {spreadsheet_id}:{range_name}")
        return result

    def clear_sheet_range(self, spreadsheet_id: str, range_name: str) -> Dict[str, Any]:
        """
        Clear a range in a spreadsheet.

        Raises:
            StoreError: If the API request fails
        """
        result = self._execute(
            f"clear {spreadsheet_id}:{range_name}",
            lambda: self._service.spreadsheets()
            .values()
            .clear(spreadsheetId=spreadsheet_id, range=range_name, body={})
            .execute(),
        )
        logger.info(f"Cleared range {range_name} in {spreadsheet_id}")
        return result

    def get_sheet_metadata(self, spreadsheet_id: str) -> Dict[str, Any]:
        """
        Get metadata about a spreadsheet.

        Raises:
            StoreError: If the API request fails
        """
        result = self._execute(
            f"get metadata for {spreadsheet_id}",
            lambda: self._service.spreadsheets()
            .get(spreadsheetId=spreadsheet_id)
            .execute(),
        )
        logger.debug(f"Retrieved metadata for spreadsheet {spreadsheet_id}")
        return result

    def list_sheet_titles(self, spreadsheet_id: str) -> List[str]:
        """Titles of every tab in the spreadsheet."""
        metadata = self.get_sheet_metadata(spreadsheet_id)
        return [
            sheet.get("properties", {}).get("title", "")
            for sheet in metadata.get("sheets", [])
        ]

    def create_sheet(
        self,
        spreadsheet_id: str,
        sheet_title: str,
        row_count: int = 1000,
        column_count: int = 26,
    ) -> Dict[str, Any]:
        """
        Create a new tab in an existing spreadsheet.

        Raises:
            StoreError: If the API request fails
        """
        requests = [
            {
                "addSheet": {
                    "properties": {
                        "title": sheet_title,
                        "gridProperties": {
                            "rowCount": row_count,
                            "columnCount": column_count,
                        },
                    }
                }
            }
        ]
        result = self._execute(
            f"create sheet '{sheet_title}' in {spreadsheet_id}",
            lambda: self._service.spreadsheets()
            .batchUpdate(spreadsheetId=spreadsheet_id, body={"requests": requests})
            .execute(),
        )
        logger.info(f"Created sheet '{sheet_title}' in {spreadsheet_id}")
        return result
