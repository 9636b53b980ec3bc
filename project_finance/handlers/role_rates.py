"""Role rate handlers: list, add, update and delete per-project role rates."""

import logging
from typing import Any, Dict, List, Mapping, Optional

from project_finance.errors import ValidationError
from project_finance.handlers.validation import build_model, pick_fields, require_fields
from project_finance.models.role_rate import RoleRate
from project_finance.stores.base import AdminStore, ReadOnlyStore
from project_finance.utils.logging_utils import project_context

logger = logging.getLogger(__name__)


def _rate_value(payload: Mapping[str, Any]) -> Optional[Any]:
    # Older payloads still send cost_per_manday
    if "cost_per_labor_day" in payload:
        return payload["cost_per_labor_day"]
    return payload.get("cost_per_manday")


def _owning_project(store: ReadOnlyStore, rate_id: str) -> Optional[str]:
    # Rates are addressed by id alone; None when the rate does not exist
    for rate in store.list_role_rates():
        if rate.id == rate_id:
            return rate.project_id
    return None


def list_rates(
    store: ReadOnlyStore, project_id: Optional[str] = None
) -> List[RoleRate]:
    """Role rates ordered by role; every project's rates when project_id is None."""
    return store.list_role_rates(project_id)


def add_rate(store: AdminStore, payload: Mapping[str, Any]) -> RoleRate:
    """Create a role rate for an existing project.

    Raises:
        ValidationError: If project_id, role or the rate is missing or invalid
        NotFoundError: If the project does not exist
    """
    data: Dict[str, Any] = pick_fields(payload, ("project_id", "role"))
    data["cost_per_labor_day"] = _rate_value(payload)
    require_fields(data, "project_id", "role", "cost_per_labor_day")

    rate = build_model(RoleRate, data)
    with project_context(rate.project_id, "add_role_rate"):
        store.get_project(rate.project_id)
        created = store.create_role_rate(rate)
        logger.info(
            f"Added rate {created.cost_per_labor_day} for role {created.role} "
            f"on project {created.project_id}"
        )
        return created


def update_rate(
    store: AdminStore, rate_id: str, payload: Mapping[str, Any]
) -> RoleRate:
    """Change the role and/or cost of a rate.

    Raises:
        ValidationError: If neither role nor rate is given, or a value is invalid
        NotFoundError: If the rate does not exist
    """
    require_fields({"rate_id": rate_id}, "rate_id")
    fields: Dict[str, Any] = pick_fields(payload, ("role",))
    value = _rate_value(payload)
    if value is not None:
        fields["cost_per_labor_day"] = value
    if not fields:
        raise ValidationError("Nothing to update: pass a role or a cost per labor-day")

    project_id = _owning_project(store, rate_id)
    with project_context(project_id, "update_role_rate", rate_id=rate_id):
        updated = store.update_role_rate(rate_id, fields)
        logger.info(f"Updated role rate {rate_id}: {', '.join(sorted(fields))}")
        return updated


def delete_rate(store: AdminStore, rate_id: str) -> None:
    """Delete a role rate.

    Raises:
        NotFoundError: If the rate does not exist
    """
    require_fields({"rate_id": rate_id}, "rate_id")
    project_id = _owning_project(store, rate_id)
    with project_context(project_id, "delete_role_rate", rate_id=rate_id):
        store.delete_role_rate(rate_id)
        logger.info(f"Deleted role rate {rate_id}")
