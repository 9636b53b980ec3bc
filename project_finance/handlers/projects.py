"""Project handlers: list, fetch, create, update and delete projects."""

import logging
from typing import Any, Dict, List, Mapping

from project_finance.errors import ValidationError
from project_finance.handlers.validation import build_model, pick_fields, require_fields
from project_finance.models.project import Project
from project_finance.stores.base import AdminStore, ReadOnlyStore
from project_finance.utils.logging_utils import project_context

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = (
    "name",
    "status",
    "budget",
    "labor_days_allocated",
    "department",
    "start_date",
    "end_date",
    "description",
)


def list_projects(store: ReadOnlyStore) -> List[Project]:
    return store.list_projects()


def get_project(store: ReadOnlyStore, project_id: str) -> Project:
    require_fields({"project_id": project_id}, "project_id")
    return store.get_project(project_id)


def create_project(store: AdminStore, payload: Mapping[str, Any]) -> Project:
    """Validate and persist a new project.

    Raises:
        ValidationError: If the name is missing or any field is invalid
    """
    require_fields(payload, "name")
    project = build_model(Project, pick_fields(payload, EDITABLE_FIELDS))

    with project_context(project.id, "create_project"):
        created = store.create_project(project)
        logger.info(f"Created project '{created.name}'")
        return created


def update_project(
    store: AdminStore, project_id: str, payload: Mapping[str, Any]
) -> Project:
    """Overwrite the editable fields present in the payload.

    Raises:
        ValidationError: If no editable field is given or a value is invalid
        NotFoundError: If the project does not exist
    """
    fields: Dict[str, Any] = pick_fields(payload, EDITABLE_FIELDS)
    if not fields:
        raise ValidationError(
            "Nothing to update",
            recovery_hint=f"Pass one of: {', '.join(EDITABLE_FIELDS)}",
        )

    with project_context(project_id, "update_project"):
        updated = store.update_project(project_id, fields)
        logger.info(f"Updated project fields: {', '.join(sorted(fields))}")
        return updated


def delete_project(store: AdminStore, project_id: str) -> None:
    """Delete a project together with its labor-day records.

    Raises:
        NotFoundError: If the project does not exist
    """
    require_fields({"project_id": project_id}, "project_id")
    with project_context(project_id, "delete_project"):
        store.delete_project(project_id)
        logger.info("Deleted project")
