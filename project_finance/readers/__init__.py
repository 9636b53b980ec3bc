"""
Data readers for store tables and bulk-import payloads.
"""

from .import_rows_reader import ImportRowsReader, ImportRowsResult
from .sheet_table_reader import SheetTableReader

__all__ = ["ImportRowsReader", "ImportRowsResult", "SheetTableReader"]
