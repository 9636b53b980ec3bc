"""Reader for labor-day rows returned by the bulk-import webhook.

The webhook turns an uploaded timesheet CSV into rows shaped like::

    {"Role": "BE", "Month": "04", "TotalDuration": "160.5"}

The payload is untrusted: rows missing one of the three fields, or
carrying values the LaborDayRecord model rejects, are discarded and
counted rather than failing the whole import.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from project_finance.models.labor_day import LaborDayRecord

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("Role", "Month", "TotalDuration")


@dataclass
class ImportRowsResult:
    """Outcome of parsing an import payload.

    Attributes:
        records: Valid labor-day records ready to upsert
        discarded: Number of rows dropped as missing or invalid
        total_rows: Number of rows in the payload
    """

    records: List[LaborDayRecord] = field(default_factory=list)
    discarded: int = 0
    total_rows: int = 0


class ImportRowsReader:
    """Parse webhook rows into LaborDayRecord objects for one project and year.

    Example:
        >>> reader = ImportRowsReader()
        >>> result = reader.parse_rows(
        ...     [{"Role": "BE", "Month": "4", "TotalDuration": "80"}, {"Role": "QA"}],
        ...     project_id="proj-001",
        ...     year="2024",
        ... )
        >>> (len(result.records), result.discarded)
        (1, 1)
        >>> result.records[0].labor_days
        Decimal('10')
    """

    def parse_rows(
        self, rows: List[Any], project_id: str, year: str
    ) -> ImportRowsResult:
        """Parse every row, keeping the valid ones.

        Args:
            rows: Raw rows from the webhook payload
            project_id: Project the rows belong to
            year: Year the rows belong to (the webhook reports months only)

        Returns:
            ImportRowsResult with the valid records and the discard count
        """
        result = ImportRowsResult(total_rows=len(rows))
        for index, row in enumerate(rows):
            record = self._parse_row(row, project_id, year, index)
            if record is None:
                result.discarded += 1
            else:
                result.records.append(record)

        if result.discarded:
            logger.warning(
                f"Discarded {result.discarded} of {result.total_rows} import rows"
            )
        logger.info(f"Parsed {len(result.records)} labor-day rows for {project_id}")
        return result

    def _parse_row(
        self, row: Any, project_id: str, year: str, index: int
    ) -> Optional[LaborDayRecord]:
        if not isinstance(row, dict):
            logger.debug(f"Import row {index} is not an object: {row!r}")
            return None

        missing = [name for name in REQUIRED_FIELDS if not _present(row.get(name))]
        if missing:
            logger.debug(f"Import row {index} missing {', '.join(missing)}")
            return None

        try:
            return LaborDayRecord(
                project_id=project_id,
                role=str(row["Role"]),
                month=row["Month"],
                year=year,
                total_hours=row["TotalDuration"],
            )
        except ValidationError as e:
            logger.warning(f"Invalid import row {index}: {e}")
            return None


def _present(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    # A TotalDuration of 0 counts as missing, as in the webhook's own filter
    return bool(value)


def extract_rows(payload: Any) -> Optional[List[Dict[str, Any]]]:
    """Pull the row list out of a webhook response body.

    Accepts either a bare JSON list or an object with a ``data`` list;
    returns None for any other shape.
    """
    if isinstance(payload, list):
        return payload
    if isinstance(payload, dict) and isinstance(payload.get("data"), list):
        return payload["data"]
    return None
