"""Store and settings access for CLI commands."""

from project_finance.config.settings import get_config
from project_finance.services.labor_day_import_service import LaborDayImportService
from project_finance.stores.base import ReadOnlyStore
from project_finance.stores.factory import create_store


def open_store(admin: bool = False) -> ReadOnlyStore:
    """Build the configured store; read-only unless admin is requested."""
    return create_store(get_config(), admin=admin)


def currency_label() -> str:
    return get_config().currency_label


def open_import_service() -> LaborDayImportService:
    return LaborDayImportService.from_config(get_config())
