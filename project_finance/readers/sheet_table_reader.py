"""Sheet table reader for loading store tables from Google Sheets.

This module reads the tabs written by SheetTableWriter back into validated
models. Rows that fail validation are skipped with a warning so one bad
hand-edited cell does not make the whole table unreadable. Strict reads,
used before a tab is rewritten, refuse instead of dropping those rows.
"""

import logging
import math
from typing import Any, Dict, List, Optional, Type

from pydantic import ValidationError

from project_finance.errors import StoreError
from project_finance.models.base import BaseDataModel
from project_finance.models.labor_day import LaborDayRecord
from project_finance.models.ledger import LedgerEntry
from project_finance.models.project import Project
from project_finance.models.role_rate import RoleRate
from project_finance.services.google_sheets_service import GoogleSheetsService
from project_finance.writers.sheet_table_writer import TABLE_LAYOUTS, sheet_range

logger = logging.getLogger(__name__)

TABLE_MODELS: Dict[str, Type[BaseDataModel]] = {
    "projects": Project,
    "ledger": LedgerEntry,
    "role_rates": RoleRate,
    "labor_days": LaborDayRecord,
}


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, float) and math.isnan(value):
        return True
    return isinstance(value, str) and not value.strip()


class SheetTableReader:
    """Reader for store tables kept in Google Sheets tabs.

    Attributes:
        sheets_service: Google Sheets service for data access
        spreadsheet_id: The spreadsheet holding every table

    Example:
        >>> reader = SheetTableReader(sheets_service, "spreadsheet-id-123")
        >>> projects = reader.read_table("projects")
        >>> projects[0].name
        'Website Redesign'
    """

    def __init__(self, sheets_service: GoogleSheetsService, spreadsheet_id: str):
        self.sheets_service = sheets_service
        self.spreadsheet_id = spreadsheet_id

    def read_table(self, table: str, strict: bool = False) -> List[BaseDataModel]:
        """Read and validate every row of a table.

        Args:
            table: One of "projects", "ledger", "role_rates", "labor_days"
            strict: Refuse to return a partial table. Callers that rewrite
                the whole tab pass True so invalid rows are never dropped.

        Returns:
            Valid records in sheet order

        Raises:
            StoreError: If the sheet cannot be read, or if strict and any
                non-blank row fails validation
        """
        if table not in TABLE_LAYOUTS:
            raise ValueError(f"Unknown table '{table}'")

        df = self.sheets_service.read_sheet(self.spreadsheet_id, sheet_range(table))
        if df.empty:
            logger.debug(f"No rows found in {table}")
            return []

        model_cls = TABLE_MODELS[table]
        records = []
        invalid_rows = []
        for index, row in df.iterrows():
            data = {k: v for k, v in row.to_dict().items() if not _is_blank(v)}
            if not data:
                continue
            # Header is sheet row 1
            row_number = index + 2
            record = self._parse_row(model_cls, data, table, row_number)
            if record is None:
                invalid_rows.append(row_number)
            else:
                records.append(record)

        if strict and invalid_rows:
            rows = ", ".join(str(number) for number in invalid_rows)
            raise StoreError(
                f"Refusing to rewrite '{TABLE_LAYOUTS[table][0]}': "
                f"invalid rows {rows} would be lost",
                recovery_hint="Fix or remove those rows in the sheet and retry",
            )

        logger.debug(f"Read {len(records)} of {len(df)} rows from {table}")
        return records

    def _parse_row(
        self,
        model_cls: Type[BaseDataModel],
        row: Dict[str, Any],
        table: str,
        row_number: int,
    ) -> Optional[BaseDataModel]:
        """Parse one row; blank cells were dropped so model defaults apply."""
        try:
            return model_cls.model_validate(row)
        except ValidationError as e:
            logger.warning(f"Skipping invalid {table} row {row_number}: {e}")
            return None
