"""Sheet table writer for persisting store tables to Google Sheets.

Each store table lives on its own tab. Row 1 holds the column names (the
model field names), every following row one record.
"""

import logging
from typing import Any, Dict, List, Sequence, Tuple

import pandas as pd

from project_finance.models.base import BaseDataModel
from project_finance.services.google_sheets_service import GoogleSheetsService

logger = logging.getLogger(__name__)

# table -> (tab title, columns)
TABLE_LAYOUTS: Dict[str, Tuple[str, List[str]]] = {
    "projects": (
        "Projects",
        [
            "id",
            "name",
            "status",
            "budget",
            "spent",
            "burn_rate",
            "labor_days_allocated",
            "labor_days_consumed",
            "department",
            "start_date",
            "end_date",
            "description",
            "created_at",
            "ledger_totals_stale",
            "labor_days_stale",
            "totals_reconciled_at",
        ],
    ),
    "ledger": (
        "Ledger",
        ["id", "project_id", "type", "category", "amount", "notes", "created_at"],
    ),
    "role_rates": (
        "Role Rates",
        ["id", "project_id", "role", "cost_per_labor_day"],
    ),
    "labor_days": (
        "Labor Days",
        [
            "id",
            "project_id",
            "role",
            "month",
            "year",
            "total_hours",
            "labor_days",
            "created_at",
        ],
    ),
}


def sheet_range(table: str) -> str:
    """A1 range covering every column of a table's tab, e.g. "'Ledger'!A1:G"."""
    title, columns = TABLE_LAYOUTS[table]
    return f"'{title}'!A1:{_column_letter(len(columns))}"


def _column_letter(number: int) -> str:
    letters = ""
    while number > 0:
        number, remainder = divmod(number - 1, 26)
        letters = chr(ord("A") + remainder) + letters
    return letters


def _cell(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def models_to_dataframe(table: str, models: Sequence[BaseDataModel]) -> pd.DataFrame:
    """Serialize models into a DataFrame with the table's column layout.

    Example:
        >>> df = models_to_dataframe("role_rates", [rate])
        >>> df.columns.tolist()
        ['id', 'project_id', 'role', 'cost_per_labor_day']
    """
    _, columns = TABLE_LAYOUTS[table]
    rows = []
    for model in models:
        data = model.model_dump(mode="json")
        rows.append([_cell(data.get(column)) for column in columns])
    return pd.DataFrame(rows, columns=columns)


class SheetTableWriter:
    """Write store tables to their tabs in one spreadsheet.

    Attributes:
        sheets_service: Google Sheets service for data access
        spreadsheet_id: The spreadsheet holding every table

    Example:
        >>> writer = SheetTableWriter(sheets_service, "spreadsheet-id-123")
        >>> writer.append_rows("ledger", [entry])
    """

    def __init__(self, sheets_service: GoogleSheetsService, spreadsheet_id: str):
        self.sheets_service = sheets_service
        self.spreadsheet_id = spreadsheet_id

    def ensure_tabs(self) -> List[str]:
        """Create missing table tabs with their header row.

        Returns:
            Titles of the tabs that were created
        """
        existing = set(self.sheets_service.list_sheet_titles(self.spreadsheet_id))
        created = []
        for table, (title, columns) in TABLE_LAYOUTS.items():
            if title in existing:
                continue
            self.sheets_service.create_sheet(
                self.spreadsheet_id, title, column_count=max(len(columns), 26)
            )
            self.replace_table(table, [])
            created.append(title)

        if created:
            logger.info(f"Created table tabs: {', '.join(created)}")
        return created

    def append_rows(self, table: str, models: Sequence[BaseDataModel]) -> None:
        """Append records after the last row of a table's tab."""
        if not models:
            return
        df = models_to_dataframe(table, models)
        self.sheets_service.append_data(self.spreadsheet_id, sheet_range(table), df)
        logger.debug(f"Appended {len(df)} rows to {table}")

    def replace_table(self, table: str, models: Sequence[BaseDataModel]) -> None:
        """Rewrite a table's tab: header row plus the given records."""
        df = models_to_dataframe(table, models)
        range_name = sheet_range(table)
        self.sheets_service.clear_sheet_range(self.spreadsheet_id, range_name)
        self.sheets_service.write_sheet(
            self.spreadsheet_id, range_name, df, include_headers=True
        )
        logger.debug(f"Rewrote {table} with {len(df)} rows")
