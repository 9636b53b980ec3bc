"""Store health and table access diagnostics."""

import logging
from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional

from project_finance.errors import FinanceTrackerError
from project_finance.stores.base import TABLE_NAMES, ReadOnlyStore, restricted

logger = logging.getLogger(__name__)


@dataclass
class TableAccess:
    """Result of probing one table with a restricted handle."""

    success: bool
    error: Optional[str] = None
    has_data: bool = False
    row_count: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def check_health(store: ReadOnlyStore) -> Dict[str, Any]:
    """Check that the store answers a project listing.

    Returns:
        {"status": "ok", "message", "backend", "project_count"} on success,
        {"status": "error", "error", "backend"} on failure
    """
    backend = store.backend_name
    try:
        projects = store.list_projects()
    except FinanceTrackerError as e:
        logger.error(f"Health check failed for {backend} store: {e}")
        return {"status": "error", "error": str(e), "backend": backend}

    return {
        "status": "ok",
        "message": "Store connection successful",
        "backend": backend,
        "project_count": len(projects),
    }


def check_table_access(store: ReadOnlyStore) -> Dict[str, TableAccess]:
    """Read every table through a restricted handle.

    A failure on one table is reported and the remaining tables are still
    checked.
    """
    handle = restricted(store)
    results: Dict[str, TableAccess] = {}
    for table in TABLE_NAMES:
        try:
            count = handle.count_rows(table)
        except FinanceTrackerError as e:
            logger.warning(f"Access check failed for {table}: {e}")
            results[table] = TableAccess(success=False, error=str(e))
            continue
        results[table] = TableAccess(success=True, has_data=count > 0, row_count=count)
    return results
