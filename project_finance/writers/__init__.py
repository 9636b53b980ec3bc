"""Writers for persisting store tables to Google Sheets."""

from project_finance.writers.sheet_table_writer import (
    TABLE_LAYOUTS,
    SheetTableWriter,
    models_to_dataframe,
)

__all__ = ["SheetTableWriter", "TABLE_LAYOUTS", "models_to_dataframe"]
