"""In-memory store.

Keeps every table in insertion-ordered dictionaries. Besides serving as the
store for tests, it is the base of the JSON file store, and it is the one
backend that can serve the precomputed spending view.
"""

import logging
from collections import defaultdict
from contextlib import contextmanager
from decimal import Decimal
from typing import Any, Dict, List, Optional, Tuple

from project_finance.calculators.spending_calculator import CostInputs
from project_finance.errors import NotFoundError, StoreError, ViewUnavailableError
from project_finance.models.labor_day import LaborDayRecord
from project_finance.models.ledger import LedgerEntry
from project_finance.models.project import Project
from project_finance.models.role_rate import RoleRate
from project_finance.stores.base import AdminStore, revalidate

logger = logging.getLogger(__name__)


class InMemoryStore(AdminStore):
    """Store that keeps all rows in process memory.

    Attributes:
        view_enabled: Whether read_spending_view() serves the precomputed view

    Example:
        >>> store = InMemoryStore()
        >>> project = store.create_project(Project(name="CRM Implementation"))
        >>> [p.name for p in store.list_projects()]
        ['CRM Implementation']
    """

    backend_name = "memory"

    def __init__(self, view_enabled: bool = True):
        self.view_enabled = view_enabled
        self._projects: Dict[str, Project] = {}
        self._ledger: Dict[str, LedgerEntry] = {}
        self._role_rates: Dict[str, RoleRate] = {}
        self._labor_days: Dict[str, LaborDayRecord] = {}

    # Reads

    def list_projects(self) -> List[Project]:
        return sorted(self._projects.values(), key=lambda p: p.created_at)

    def get_project(self, project_id: str) -> Project:
        try:
            return self._projects[project_id]
        except KeyError:
            raise NotFoundError("Project", project_id)

    def list_ledger_entries(self, project_id: str) -> List[LedgerEntry]:
        entries = [e for e in self._ledger.values() if e.project_id == project_id]
        # Reverse first so entries sharing a timestamp stay newest first
        return sorted(reversed(entries), key=lambda e: e.created_at, reverse=True)

    def list_role_rates(self, project_id: Optional[str] = None) -> List[RoleRate]:
        rates = [
            r
            for r in self._role_rates.values()
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
            for record in self._labor_days.values()
            if (project_id is None or record.project_id == project_id)
            and (month is None or record.month == month)
            and (year is None or record.year == year)
        ]

    def read_spending_view(self) -> List[CostInputs]:
        """Per-project cost rows pre-aggregated by role and ledger bucket."""
        if not self.view_enabled:
            raise ViewUnavailableError("Spending view is disabled for this store")

        rates: Dict[str, List[Tuple[str, Any]]] = defaultdict(list)
        for rate in self._role_rates.values():
            rates[rate.project_id].append((rate.role, rate.cost_per_labor_day))

        labor_days: Dict[str, Dict[str, Decimal]] = defaultdict(dict)
        for record in self._labor_days.values():
            by_role = labor_days[record.project_id]
            previous = by_role.get(record.role, Decimal("0"))
            by_role[record.role] = previous + record.labor_days

        ledger: Dict[str, Dict[Tuple[str, str], Decimal]] = defaultdict(dict)
        for entry in self._ledger.values():
            key = (entry.type.value, entry.category.value)
            buckets = ledger[entry.project_id]
            buckets[key] = buckets.get(key, Decimal("0")) + entry.amount

        view = []
        for project in self.list_projects():
            view.append(
                CostInputs(
                    project_id=project.id,
                    project_name=project.name,
                    budget=project.budget,
                    rate_rows=rates.get(project.id, []),
                    labor_day_rows=list(labor_days.get(project.id, {}).items()),
                    ledger_rows=[
                        (entry_type, category, amount)
                        for (entry_type, category), amount in ledger.get(
                            project.id, {}
                        ).items()
                    ],
                )
            )
        return view

    # Writes

    def create_project(self, project: Project) -> Project:
        with self._writing():
            self._projects[project.id] = project
        logger.debug(f"Created project {project.id} ({project.name})")
        return project

    def update_project(self, project_id: str, fields: Dict[str, Any]) -> Project:
        current = self.get_project(project_id)
        updated = revalidate(Project, current, fields)
        with self._writing():
            self._projects[project_id] = updated
        logger.debug(f"Updated project {project_id}: {sorted(fields)}")
        return updated

    def delete_project(self, project_id: str) -> None:
        self.get_project(project_id)

        labor_day_ids = [
            record_id
            for record_id, record in self._labor_days.items()
            if record.project_id == project_id
        ]
        with self._writing():
            for record_id in labor_day_ids:
                del self._labor_days[record_id]
            del self._projects[project_id]
        logger.debug(
            f"Deleted project {project_id} and {len(labor_day_ids)} labor-day records"
        )

    def create_ledger_entry(self, entry: LedgerEntry) -> LedgerEntry:
        with self._writing():
            self._ledger[entry.id] = entry
        return entry

    def create_role_rate(self, rate: RoleRate) -> RoleRate:
        with self._writing():
            self._role_rates[rate.id] = rate
        return rate

    def update_role_rate(self, rate_id: str, fields: Dict[str, Any]) -> RoleRate:
        try:
            current = self._role_rates[rate_id]
        except KeyError:
            raise NotFoundError("Role rate", rate_id)
        updated = revalidate(RoleRate, current, fields)
        with self._writing():
            self._role_rates[rate_id] = updated
        return updated

    def delete_role_rate(self, rate_id: str) -> None:
        if rate_id not in self._role_rates:
            raise NotFoundError("Role rate", rate_id)
        with self._writing():
            del self._role_rates[rate_id]

    def upsert_labor_day(self, record: LaborDayRecord) -> LaborDayRecord:
        for existing in self._labor_days.values():
            if existing.upsert_key == record.upsert_key:
                updated = revalidate(
                    LaborDayRecord,
                    existing,
                    {
                        "total_hours": record.total_hours,
                        "labor_days": record.labor_days,
                    },
                )
                with self._writing():
                    self._labor_days[existing.id] = updated
                return updated

        with self._writing():
            self._labor_days[record.id] = record
        return record

    # Helpers

    def _tables(self) -> Tuple[Dict[str, Any], ...]:
        return (self._projects, self._ledger, self._role_rates, self._labor_days)

    @contextmanager
    def _writing(self):
        """Apply the block's changes, then commit them.

        If the commit fails the tables are restored to their state before
        the block, so memory never holds rows that were not saved.
        """
        # Rows are replaced on update, never mutated, so shallow copies suffice
        snapshot = [dict(table) for table in self._tables()]
        try:
            yield
            self._commit()
        except StoreError:
            for table, saved in zip(self._tables(), snapshot):
                table.clear()
                table.update(saved)
            logger.warning("Write not saved; in-memory tables rolled back")
            raise

    def _commit(self) -> None:
        """Hook called after every write; persistent subclasses save here."""
