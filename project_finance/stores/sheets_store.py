"""Google Sheets store.

Each table is one tab of a single spreadsheet (layout in
writers/sheet_table_writer.py). Reads always go to the sheet; inserts append
a row, while updates and deletes rewrite the affected tab after a strict
read, so a tab holding invalid rows is never rewritten. Sheets keeps no
precomputed spending view, so aggregation always joins the tables.
"""

import logging
from typing import Any, Dict, List, Optional

from project_finance.errors import NotFoundError
from project_finance.models.labor_day import LaborDayRecord
from project_finance.models.ledger import LedgerEntry
from project_finance.models.project import Project
from project_finance.models.role_rate import RoleRate
from project_finance.readers.sheet_table_reader import SheetTableReader
from project_finance.services.google_sheets_service import GoogleSheetsService
from project_finance.stores.base import AdminStore, revalidate
from project_finance.writers.sheet_table_writer import SheetTableWriter

logger = logging.getLogger(__name__)


class SheetsStore(AdminStore):
    """Store backed by one Google Sheets spreadsheet.

    Attributes:
        reader: Loads and validates table rows
        writer: Appends and rewrites table tabs

    Example:
        >>> service = GoogleSheetsService(config.get_google_service_account_info())
        >>> store = SheetsStore(service, config.spreadsheet_id)
        >>> store.ensure_tables()
        >>> store.list_projects()
        []
    """

    backend_name = "sheets"

    def __init__(self, sheets_service: GoogleSheetsService, spreadsheet_id: str):
        self.spreadsheet_id = spreadsheet_id
        self.reader = SheetTableReader(sheets_service, spreadsheet_id)
        self.writer = SheetTableWriter(sheets_service, spreadsheet_id)

    def ensure_tables(self) -> List[str]:
        """Create any missing table tabs. Returns the titles created."""
        return self.writer.ensure_tabs()

    # Reads

    def list_projects(self) -> List[Project]:
        return sorted(self.reader.read_table("projects"), key=lambda p: p.created_at)

    def get_project(self, project_id: str) -> Project:
        for project in self.reader.read_table("projects"):
            if project.id == project_id:
                return project
        raise NotFoundError("Project", project_id)

    def list_ledger_entries(self, project_id: str) -> List[LedgerEntry]:
        entries = [
            e for e in self.reader.read_table("ledger") if e.project_id == project_id
        ]
        return sorted(reversed(entries), key=lambda e: e.created_at, reverse=True)

    def list_role_rates(self, project_id: Optional[str] = None) -> List[RoleRate]:
        rates = [
            r
            for r in self.reader.read_table("role_rates")
            if project_id is None or r.project_id == project_id
        ]
        return sorted(rates, key=lambda r: r.role)

    def list_labor_days(
        self,
        project_id: Optional[str] = None,
        month: Optional[str] = None,
        year: Optional[str] = None,
    ) -> List[LaborDayRecord]:
        return [
            record
            for record in self.reader.read_table("labor_days")
            if (project_id is None or record.project_id == project_id)
            and (month is None or record.month == month)
            and (year is None or record.year == year)
        ]

    # Writes

    def create_project(self, project: Project) -> Project:
        self.writer.append_rows("projects", [project])
        logger.debug(f"Created project {project.id} ({project.name})")
        return project

    def update_project(self, project_id: str, fields: Dict[str, Any]) -> Project:
        projects = self.reader.read_table("projects", strict=True)
        index = _index_of(projects, project_id, "Project")
        projects[index] = revalidate(Project, projects[index], fields)
        self.writer.replace_table("projects", projects)
        return projects[index]

    def delete_project(self, project_id: str) -> None:
        projects = self.reader.read_table("projects", strict=True)
        index = _index_of(projects, project_id, "Project")

        labor_days = self.reader.read_table("labor_days", strict=True)
        remaining = [r for r in labor_days if r.project_id != project_id]
        if len(remaining) != len(labor_days):
            self.writer.replace_table("labor_days", remaining)

        del projects[index]
        self.writer.replace_table("projects", projects)
        logger.debug(
            f"Deleted project {project_id} and "
            f"{len(labor_days) - len(remaining)} labor-day records"
        )

    def create_ledger_entry(self, entry: LedgerEntry) -> LedgerEntry:
        self.writer.append_rows("ledger", [entry])
        return entry

    def create_role_rate(self, rate: RoleRate) -> RoleRate:
        self.writer.append_rows("role_rates", [rate])
        return rate

    def update_role_rate(self, rate_id: str, fields: Dict[str, Any]) -> RoleRate:
        rates = self.reader.read_table("role_rates", strict=True)
        index = _index_of(rates, rate_id, "Role rate")
        rates[index] = revalidate(RoleRate, rates[index], fields)
        self.writer.replace_table("role_rates", rates)
        return rates[index]

    def delete_role_rate(self, rate_id: str) -> None:
        rates = self.reader.read_table("role_rates", strict=True)
        index = _index_of(rates, rate_id, "Role rate")
        del rates[index]
        self.writer.replace_table("role_rates", rates)

    def upsert_labor_day(self, record: LaborDayRecord) -> LaborDayRecord:
        records = self.reader.read_table("labor_days", strict=True)
        for index, existing in enumerate(records):
            if existing.upsert_key == record.upsert_key:
                records[index] = revalidate(
                    LaborDayRecord,
                    existing,
                    {
                        "total_hours": record.total_hours,
                        "labor_days": record.labor_days,
                    },
                )
                self.writer.replace_table("labor_days", records)
                return records[index]

        self.writer.append_rows("labor_days", [record])
        return record


def _index_of(models: List[Any], model_id: str, entity: str) -> int:
    for index, model in enumerate(models):
        if model.id == model_id:
            return index
    raise NotFoundError(entity, model_id)
