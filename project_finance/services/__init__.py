"""
Services for external integrations (Google Sheets, bulk-import webhook).
"""

from .google_sheets_service import GoogleSheetsService
from .labor_day_import_service import LaborDayImportService

__all__ = ["GoogleSheetsService", "LaborDayImportService"]
