"""Labor-day handlers: list records, upsert one, and bulk-import a CSV."""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable, List, Mapping, Optional, Union

from project_finance.errors import ValidationError
from project_finance.handlers.validation import build_model, pick_fields, require_fields
from project_finance.models.labor_day import (
    LaborDayRecord,
    normalize_month,
    normalize_year,
)
from project_finance.readers.import_rows_reader import ImportRowsReader
from project_finance.services.labor_day_import_service import LaborDayImportService
from project_finance.stores.base import AdminStore, ReadOnlyStore
from project_finance.utils.logging_utils import project_context

logger = logging.getLogger(__name__)

RECORD_FIELDS = ("project_id", "role", "month", "year", "total_hours", "labor_days")
ALL_PROJECTS = "all"


@dataclass
class ImportSummary:
    """Result of a bulk import.

    Attributes:
        project_id: Project the rows were imported into
        year: Year the rows were imported for
        upserted: Records inserted or updated
        discarded: Payload rows dropped as missing or invalid
    """

    project_id: str
    year: str
    upserted: int
    discarded: int


def _normalized(value: Optional[Any], normalize, name: str) -> Optional[str]:
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    try:
        return normalize(value)
    except ValueError as e:
        raise ValidationError(str(e), field=name) from e


def list_labor_days(
    store: ReadOnlyStore,
    project_id: str,
    month: Optional[Any] = None,
    year: Optional[Any] = None,
) -> List[LaborDayRecord]:
    """Labor-day records of a project ("all" for every project).

    Raises:
        ValidationError: If project_id is missing or month/year are malformed
    """
    require_fields({"project_id": project_id}, "project_id")
    return store.list_labor_days(
        project_id=None if project_id == ALL_PROJECTS else project_id,
        month=_normalized(month, normalize_month, "month"),
        year=_normalized(year, normalize_year, "year"),
    )


def upsert_labor_day(store: AdminStore, payload: Mapping[str, Any]) -> LaborDayRecord:
    """Insert or update one labor-day record and flag labor-days as stale.

    Raises:
        ValidationError: If a required field is missing or invalid
        NotFoundError: If the project does not exist
    """
    require_fields(payload, "project_id", "role", "month", "year", "total_hours")
    record = build_model(LaborDayRecord, pick_fields(payload, RECORD_FIELDS))

    with project_context(record.project_id, "upsert_labor_day"):
        project = store.get_project(record.project_id)
        stored = _upsert_all(store, project, [record])[0]
        logger.info(
            f"Stored {stored.labor_days} labor-days for {stored.role} "
            f"in {stored.year}-{stored.month}"
        )
        return stored


def import_labor_days(
    store: AdminStore,
    import_service: LaborDayImportService,
    file_path: Union[str, Path],
    project_id: str,
    year: Any,
) -> ImportSummary:
    """Upload a CSV to the import webhook and upsert the rows it returns.

    Raises:
        ValidationError: If inputs are missing or no usable row came back
        NotFoundError: If the project does not exist
        ImportServiceError: If the webhook call fails
    """
    require_fields({"project_id": project_id, "year": year}, "project_id", "year")
    year = _normalized(year, normalize_year, "year")

    with project_context(project_id, "import_labor_days"):
        project = store.get_project(project_id)
        rows = import_service.upload(file_path, project_id, year)
        parsed = ImportRowsReader().parse_rows(rows, project_id, year)
        if not parsed.records:
            raise ValidationError(
                "No valid labor-day rows returned by the import webhook",
                recovery_hint="Rows need Role, Month and TotalDuration values",
            )

        stored = _upsert_all(store, project, parsed.records)
        logger.info(
            f"Imported {len(stored)} labor-day rows for {year} "
            f"({parsed.discarded} discarded)"
        )
        return ImportSummary(
            project_id=project_id,
            year=year,
            upserted=len(stored),
            discarded=parsed.discarded,
        )


def _upsert_all(
    store: AdminStore, project, records: Iterable[LaborDayRecord]
) -> List[LaborDayRecord]:
    stored = [store.upsert_labor_day(record) for record in records]
    if not project.labor_days_stale:
        store.update_project(project.id, {"labor_days_stale": True})
    return stored
