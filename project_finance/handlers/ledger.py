"""Ledger handlers: list a project's entries and append new ones."""

import logging
from typing import Any, List, Mapping

from project_finance.handlers.validation import build_model, pick_fields, require_fields
from project_finance.models.ledger import LedgerEntry
from project_finance.stores.base import AdminStore, ReadOnlyStore
from project_finance.utils.logging_utils import project_context

logger = logging.getLogger(__name__)

ENTRY_FIELDS = ("project_id", "type", "category", "amount", "notes")


def list_entries(store: ReadOnlyStore, project_id: str) -> List[LedgerEntry]:
    """Ledger entries of a project, newest first.

    Raises:
        ValidationError: If project_id is missing
    """
    require_fields({"project_id": project_id}, "project_id")
    return store.list_ledger_entries(project_id)


def add_entry(store: AdminStore, payload: Mapping[str, Any]) -> LedgerEntry:
    """Append a ledger entry and flag the project's ledger totals as stale.

    Args:
        store: Admin store handle
        payload: project_id, type, category, amount and optional notes

    Returns:
        The stored entry

    Raises:
        ValidationError: If a required field is missing or invalid
        NotFoundError: If the project does not exist
    """
    require_fields(payload, "project_id", "type", "category", "amount")
    entry = build_model(LedgerEntry, pick_fields(payload, ENTRY_FIELDS))

    with project_context(entry.project_id, "add_ledger_entry"):
        project = store.get_project(entry.project_id)
        created = store.create_ledger_entry(entry)
        if not project.ledger_totals_stale:
            store.update_project(project.id, {"ledger_totals_stale": True})

        logger.info(
            f"Added {created.type.value} of {created.amount} "
            f"({created.category.value})"
        )
        return created
