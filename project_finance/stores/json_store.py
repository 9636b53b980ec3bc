"""JSON file store.

An InMemoryStore that loads its tables from a JSON file on start-up and
writes them back after every change, using an atomic temp-file-and-rename
so an interrupted write never leaves a truncated file behind.
"""

import json
import logging
import os
import tempfile
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Union

from pydantic import ValidationError as PydanticValidationError

from project_finance.errors import StoreError
from project_finance.models.labor_day import LaborDayRecord
from project_finance.models.ledger import LedgerEntry
from project_finance.models.project import Project
from project_finance.models.role_rate import RoleRate
from project_finance.stores.memory_store import InMemoryStore

logger = logging.getLogger(__name__)


class JsonFileStore(InMemoryStore):
    """In-memory store persisted to a JSON file.

    File layout::

        {
          "version": "1.0",
          "last_updated": "...",
          "tables": {"projects": [...], "ledger": [...],
                     "role_rates": [...], "labor_days": [...]}
        }

    Example:
        >>> store = JsonFileStore("/tmp/finance.json")
        >>> store.create_project(Project(name="ERP System Upgrade"))
        >>> JsonFileStore("/tmp/finance.json").list_projects()[0].name
        'ERP System Upgrade'
    """

    backend_name = "json"
    FILE_VERSION = "1.0"

    def __init__(self, file_path: Union[str, Path], view_enabled: bool = True):
        super().__init__(view_enabled=view_enabled)
        self.file_path = Path(file_path)
        self._load_from_disk()

    def _table_map(self) -> Dict[str, tuple]:
        return {
            "projects": (self._projects, Project),
            "ledger": (self._ledger, LedgerEntry),
            "role_rates": (self._role_rates, RoleRate),
            "labor_days": (self._labor_days, LaborDayRecord),
        }

    def _load_from_disk(self) -> None:
        """Load all tables from the JSON file, if it exists.

        Raises:
            StoreError: If the file is unreadable, corrupted or from another version
        """
        if not self.file_path.exists():
            logger.debug(f"Store file not found, starting empty: {self.file_path}")
            return

        try:
            with open(self.file_path, "r", encoding="utf-8") as f:
                payload = json.load(f)
        except json.JSONDecodeError as e:
            logger.error(f"Failed to parse store file (corrupted JSON): {e}")
            raise StoreError(
                f"Store file {self.file_path} is corrupted: {e}",
                recovery_hint="Restore the file from a backup or remove it",
            ) from e
        except OSError as e:
            logger.error(f"Failed to read store file {self.file_path}: {e}")
            raise StoreError(f"Cannot read store file {self.file_path}: {e}") from e

        version = payload.get("version", "unknown")
        if version != self.FILE_VERSION:
            raise StoreError(
                f"Store file version mismatch (expected {self.FILE_VERSION}, "
                f"got {version})"
            )

        tables = payload.get("tables", {})
        for table_name, (rows, model_cls) in self._table_map().items():
            for raw in tables.get(table_name, []):
                try:
                    model = model_cls.model_validate(raw)
                except PydanticValidationError as e:
                    raise StoreError(
                        f"Invalid {table_name} row in {self.file_path}: {e}"
                    ) from e
                rows[model.id] = model

        logger.info(
            f"Loaded store from {self.file_path}: "
            + ", ".join(
                f"{len(rows)} {name}" for name, (rows, _) in self._table_map().items()
            )
        )

    def _commit(self) -> None:
        self._save_to_disk()

    def _save_to_disk(self) -> None:
        """Write all tables to disk atomically (temp file + rename).

        Raises:
            StoreError: If the file cannot be written
        """
        payload: Dict[str, Any] = {
            "version": self.FILE_VERSION,
            "last_updated": datetime.now(timezone.utc).isoformat(),
            "tables": {
                name: [model.model_dump(mode="json") for model in rows.values()]
                for name, (rows, _) in self._table_map().items()
            },
        }

        try:
            self.file_path.parent.mkdir(parents=True, exist_ok=True)
            temp_fd, temp_path = tempfile.mkstemp(
                dir=self.file_path.parent, suffix=".tmp"
            )
        except OSError as e:
            logger.error(f"Failed to prepare store file {self.file_path}: {e}")
            raise StoreError(f"Cannot write store file {self.file_path}: {e}") from e

        try:
            with os.fdopen(temp_fd, "w", encoding="utf-8") as f:
                json.dump(payload, f, indent=2)
            os.replace(temp_path, self.file_path)
            logger.debug(f"Saved store to {self.file_path}")
        except OSError as e:
            try:
                os.unlink(temp_path)
            except OSError:
                pass
            logger.error(f"Failed to save store file {self.file_path}: {e}")
            raise StoreError(f"Cannot write store file {self.file_path}: {e}") from e
