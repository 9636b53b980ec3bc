"""Build store handles from configuration."""

import logging
from typing import Optional

from project_finance.config.settings import FinanceTrackerConfig, get_config
from project_finance.errors import StoreError
from project_finance.stores.base import ReadOnlyStore, restricted
from project_finance.stores.json_store import JsonFileStore
from project_finance.stores.memory_store import InMemoryStore

logger = logging.getLogger(__name__)


def create_store(
    config: Optional[FinanceTrackerConfig] = None, admin: bool = True
) -> ReadOnlyStore:
    """Create the store configured by STORE_BACKEND.

    Args:
        config: Configuration to use (defaults to the global configuration)
        admin: Return the privileged handle; otherwise a restricted one

    Returns:
        An AdminStore when admin is True, else a read-only handle

    Raises:
        StoreError: If the sheets backend is selected without a spreadsheet id
    """
    config = config or get_config()
    backend = config.store_backend

    if backend == "memory":
        store = InMemoryStore()
    elif backend == "json":
        store = JsonFileStore(config.store_path)
    else:
        # Imported lazily so the Google client only loads when it is used
        from project_finance.services.google_sheets_service import (
            GoogleSheetsService,
        )
        from project_finance.stores.sheets_store import SheetsStore

        if not config.spreadsheet_id:
            raise StoreError(
                "The sheets store needs a spreadsheet id",
                recovery_hint="Set SPREADSHEET_ID in .env",
            )
        service = GoogleSheetsService(
            credentials=config.get_google_service_account_info(),
            scopes=config.google_scopes,
        )
        store = SheetsStore(service, config.spreadsheet_id)
        if admin:
            store.ensure_tables()

    logger.debug(f"Created {backend} store (admin={admin})")
    return store if admin else restricted(store)
