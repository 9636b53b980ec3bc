"""Store interfaces for projects, ledger entries, role rates and labor-days.

Store handles are constructed explicitly and passed to the components that
need them. Capability is expressed by type:

- ReadOnlyStore: the restricted handle. Reads only.
- AdminStore: the privileged handle. Reads plus every write operation.

``restricted(store)`` narrows any store to a ReadOnlyStore so read paths
(reports, diagnostics) can be handed a handle that cannot write.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from pydantic import ValidationError as PydanticValidationError

from project_finance.calculators.spending_calculator import CostInputs
from project_finance.errors import ValidationError, ViewUnavailableError
from project_finance.models.labor_day import LaborDayRecord
from project_finance.models.ledger import LedgerEntry
from project_finance.models.project import Project
from project_finance.models.role_rate import RoleRate

TABLE_NAMES = ("projects", "labor_days", "role_rates", "ledger")


class ReadOnlyStore(ABC):
    """Read operations every store supports."""

    backend_name = "abstract"

    @abstractmethod
    def list_projects(self) -> List[Project]:
        """All projects in creation order (oldest first)."""

    @abstractmethod
    def get_project(self, project_id: str) -> Project:
        """Fetch one project.

        Raises:
            NotFoundError: If the project does not exist
        """

    @abstractmethod
    def list_ledger_entries(self, project_id: str) -> List[LedgerEntry]:
        """Ledger entries of a project, newest first."""

    @abstractmethod
    def list_role_rates(self, project_id: Optional[str] = None) -> List[RoleRate]:
        """Role rates of a project (or of all projects), ordered by role."""

    @abstractmethod
    def list_labor_days(
        self,
        project_id: Optional[str] = None,
        month: Optional[str] = None,
        year: Optional[str] = None,
    ) -> List[LaborDayRecord]:
        """Labor-day records matching every filter that is given."""

    def read_spending_view(self) -> List[CostInputs]:
        """Precomputed per-project cost rows, in project creation order.

        Raises:
            ViewUnavailableError: If this backend keeps no precomputed view
        """
        raise ViewUnavailableError(
            f"The {self.backend_name} store has no precomputed spending view"
        )

    def count_rows(self, table: str) -> int:
        """Number of rows in one of TABLE_NAMES; used by access diagnostics."""
        if table == "projects":
            return len(self.list_projects())
        if table == "labor_days":
            return len(self.list_labor_days())
        if table == "role_rates":
            return len(self.list_role_rates())
        if table == "ledger":
            return sum(
                len(self.list_ledger_entries(project.id))
                for project in self.list_projects()
            )
        raise ValueError(f"Unknown table '{table}'. Must be one of: {TABLE_NAMES}")


class AdminStore(ReadOnlyStore):
    """Privileged store handle: reads plus writes."""

    @abstractmethod
    def create_project(self, project: Project) -> Project:
        """Persist a new project."""

    @abstractmethod
    def update_project(self, project_id: str, fields: Dict[str, Any]) -> Project:
        """Overwrite the given fields of a project in one write.

        Raises:
            NotFoundError: If the project does not exist
        """

    @abstractmethod
    def delete_project(self, project_id: str) -> None:
        """Delete a project's labor-day records, then the project.

        Raises:
            NotFoundError: If the project does not exist
        """

    @abstractmethod
    def create_ledger_entry(self, entry: LedgerEntry) -> LedgerEntry:
        """Append a ledger entry. Entries are never updated or deleted."""

    @abstractmethod
    def create_role_rate(self, rate: RoleRate) -> RoleRate:
        """Persist a new role rate."""

    @abstractmethod
    def update_role_rate(self, rate_id: str, fields: Dict[str, Any]) -> RoleRate:
        """Overwrite fields of a role rate.

        Raises:
            NotFoundError: If the rate does not exist
        """

    @abstractmethod
    def delete_role_rate(self, rate_id: str) -> None:
        """Delete a role rate.

        Raises:
            NotFoundError: If the rate does not exist
        """

    @abstractmethod
    def upsert_labor_day(self, record: LaborDayRecord) -> LaborDayRecord:
        """Insert a record, or update the one with the same upsert key.

        The key is (project_id, role, month, year). On update the existing
        id and created_at are kept and hours/labor-days are replaced.
        """


class RestrictedStore(ReadOnlyStore):
    """Read-only view over another store."""

    def __init__(self, store: ReadOnlyStore):
        self._store = store
        self.backend_name = f"{store.backend_name} (restricted)"

    def list_projects(self) -> List[Project]:
        return self._store.list_projects()

    def get_project(self, project_id: str) -> Project:
        return self._store.get_project(project_id)

    def list_ledger_entries(self, project_id: str) -> List[LedgerEntry]:
        return self._store.list_ledger_entries(project_id)

    def list_role_rates(self, project_id: Optional[str] = None) -> List[RoleRate]:
        return self._store.list_role_rates(project_id)

    def list_labor_days(
        self,
        project_id: Optional[str] = None,
        month: Optional[str] = None,
        year: Optional[str] = None,
    ) -> List[LaborDayRecord]:
        return self._store.list_labor_days(project_id, month, year)

    def read_spending_view(self) -> List[CostInputs]:
        return self._store.read_spending_view()

    def count_rows(self, table: str) -> int:
        return self._store.count_rows(table)


def restricted(store: ReadOnlyStore) -> ReadOnlyStore:
    """Narrow a store handle to read-only capability."""
    if isinstance(store, RestrictedStore):
        return store
    return RestrictedStore(store)


def revalidate(model_cls, current, fields: Dict[str, Any]):
    """Rebuild ``current`` with ``fields`` overwritten, re-running validation.

    Raises:
        ValidationError: If the merged record is invalid
    """
    data = current.model_dump()
    data.update(fields)
    try:
        return model_cls.model_validate(data)
    except PydanticValidationError as e:
        first = e.errors()[0]
        field = ".".join(str(part) for part in first.get("loc", ())) or None
        raise ValidationError(first.get("msg", str(e)), field=field) from e
